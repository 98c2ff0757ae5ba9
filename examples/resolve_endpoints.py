#!/usr/bin/env python3
"""Example: build a session from the default credential chain and resolve a cluster."""

import sys

from elasticache_endpoints import AWSConfig, EndpointError, RedisEndpointResolver


def main(cluster_id: str) -> int:
    # 1. Configuration: environment first, then the default provider chain
    config = AWSConfig.from_env().with_default_providers().enable_panic()
    print(f"Region: {config.region}, providers: {len(config.providers)}")

    # 2. Resolver with a lazily built ElastiCache client
    resolver = RedisEndpointResolver.from_config(config)

    try:
        endpoints = resolver.resolve_all_endpoints(cluster_id)
    except EndpointError as e:
        print(f"Could not resolve {cluster_id}: {e}")
        return 1

    # 3. Connect-here address plus readers
    print(f"Connect to: {endpoints.connect_string()}")
    for reader in endpoints.readers():
        print(f"  reader: {reader}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1] if len(sys.argv) > 1 else "my-redis"))
