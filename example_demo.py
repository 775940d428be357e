#!/usr/bin/env python3
"""
Demo script for the Weighted Hash Ring

This script demonstrates how to:
1. Build a ring of weighted nodes
2. Look up owners and replica sets for keys
3. Compare the key dispersion with the node weights
4. Show that removing a node only moves the keys it owned
"""

import argparse
import logging
import sys
from typing import Dict, List

from weighted_ring import HashRing, HashRingError, InvalidConfigurationError, get_config, setup_logging
from weighted_ring.analysis import expected_shares, key_distribution, remapped_keys, snapshot


logger = logging.getLogger(__name__)


def weighted_nodes(node_count: int) -> Dict[str, int]:
    """Nodes 192.168.1.1 .. 192.168.1.<node_count> weighted 1 .. node_count"""
    return {f"192.168.1.{i + 1}": i + 1 for i in range(node_count)}


def demo_lookups(ring: HashRing, replicas: int):
    """Show which nodes handle a few keys"""
    print("\n=== Key Placement Demo ===")

    test_keys = ["user:1001", "user:1002", "product:2001", "order:3001", "cache:abc", "session:xyz"]
    for key in test_keys:
        owner = ring.get_node(key)
        replica_set = ring.get_nodes(key, replicas)
        print(f"  {key} -> {owner}  replicas: {', '.join(replica_set)}")


def demo_dispersion(ring: HashRing, node_weights: Dict[str, int], keys: List[str]):
    """Compare observed key shares with weight shares"""
    print("\n=== Dispersion Demo ===")

    result = key_distribution(ring, keys)
    shares = expected_shares(node_weights)
    counts = result["node_counts"]

    print(f"  {'node':<16} {'weight':>6} {'keys':>6} {'share':>7} {'expected':>9}")
    for node, weight in node_weights.items():
        count = counts.get(node, 0)
        print(f"  {node:<16} {weight:>6} {count:>6} {count / len(keys):>7.2%} {shares[node]:>9.2%}")

    stats = result["statistics"]
    print(f"\n  std deviation: {stats['std_deviation']:.1f}  "
          f"load balance ratio: {stats['load_balance_ratio']:.3f}")


def demo_node_removal(ring: HashRing, node: str, keys: List[str]):
    """Remove a node and show how many keys moved"""
    print("\n=== Node Removal Demo ===")

    before = snapshot(ring, keys)
    owned = sum(1 for owner in before.values() if owner == node)

    ring.remove_node(node)
    after = snapshot(ring, keys)
    moved = remapped_keys(before, after)

    print(f"  Removed {node}, which owned {owned} of {len(keys)} keys")
    print(f"  Keys remapped: {len(moved)}")
    print(f"  Keys on other nodes that moved: {sum(1 for key in moved if before[key] != node)}")


def main():
    """Main demo function"""
    try:
        config = get_config()
    except InvalidConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    parser = argparse.ArgumentParser(description="Weighted consistent hash ring demo")
    parser.add_argument("--nodes", type=int, default=10,
                        help="Number of nodes (weighted 1..N)")
    parser.add_argument("--cubes", type=int, default=config["cubes_per_weight"],
                        help="Virtual positions per unit of weight")
    parser.add_argument("--keys", type=int, default=10000,
                        help="Number of keys used for dispersion analysis")
    parser.add_argument("--replicas", type=int, default=3,
                        help="Replica count for multi-node lookups")
    parser.add_argument("--log-level", default=config["log_level"],
                        help="Logging level")

    args = parser.parse_args()
    if args.keys <= 0:
        parser.error("--keys must be positive")

    try:
        setup_logging(args.log_level)

        print("=== Weighted Hash Ring Demo ===")

        ring = HashRing(cubes_per_weight=args.cubes)
        node_weights = weighted_nodes(args.nodes)
        ring.add_nodes(node_weights)
        print(f"Ring has {len(ring.members())} nodes and {len(ring.sorted_keys)} virtual positions")

        keys = [f"key{i}" for i in range(args.keys)]

        demo_lookups(ring, args.replicas)
        demo_dispersion(ring, node_weights, keys)
        demo_node_removal(ring, max(node_weights, key=node_weights.get), keys)

        print("\n=== Demo completed ===")
    except HashRingError as e:
        logger.error(f"Demo error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
