"""Command line interface for ElastiCache endpoint resolution."""
