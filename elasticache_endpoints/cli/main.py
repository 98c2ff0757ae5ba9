"""Command line entry point: print the endpoints of an ElastiCache Redis cluster."""

import argparse
import sys
from typing import List, Optional

from ..core.config import AWSConfig
from ..core.error_handling import EndpointError, SessionError
from ..core.logging import setup_logging
from ..processors.endpoint_resolver import RedisEndpointResolver


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="elasticache-endpoints",
        description="Resolve ElastiCache Redis endpoints for a replication group or cache cluster",
    )
    parser.add_argument("cluster_id", help="Replication group id or cache cluster id")
    parser.add_argument("--region", type=str,
                        help="AWS region (default: AWS_DEFAULT_REGION, then us-east-1)")
    parser.add_argument("--endpoint-url", type=str,
                        help="Override the ElastiCache API endpoint")
    parser.add_argument("--profile", type=str,
                        help="Profile in the shared credentials file")
    parser.add_argument("--credentials-file", type=str,
                        help="Shared credentials file path")
    parser.add_argument("--cluster-config", action="store_true",
                        help="Print only the cluster configuration endpoint")
    parser.add_argument("--readers", action="store_true",
                        help="Print only the read endpoints, one per line")
    parser.add_argument("--exclude-primary-reader", action="store_true",
                        help="Leave the primary node out of the read endpoints")
    parser.add_argument("--panic", action="store_true",
                        help="Treat session construction errors as fatal")
    parser.add_argument("--log-level", type=str, default="WARNING",
                        help="Log level (default: WARNING)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function."""
    args = build_parser().parse_args(argv)
    logger = setup_logging(args.log_level)

    try:
        config = AWSConfig.from_args(args).with_default_providers()
        resolver = RedisEndpointResolver.from_config(config)

        if args.cluster_config:
            print(resolver.resolve_cluster_config_endpoint(args.cluster_id))
            return 0

        endpoints = resolver.resolve_all_endpoints(args.cluster_id)
        if args.readers:
            for reader in endpoints.readers():
                print(reader)
        else:
            print(endpoints.to_json(indent=2))
        return 0

    except SessionError as e:
        logger.error(f"Unable to connect to AWS: {e}")
        return 1
    except EndpointError as e:
        logger.error(f"Endpoint resolution failed: {e}", cluster_id=args.cluster_id)
        return 1


if __name__ == "__main__":
    sys.exit(main())
