"""
Dispersion and remapping analysis for a hash ring
"""

from collections import defaultdict
from typing import Any, Dict, Iterable, List

from .errors import EmptyRingError
from .hash_ring import HashRing


def key_distribution(ring: HashRing, keys: Iterable[str]) -> Dict[str, Any]:
    """
    Analyze how keys are distributed across nodes

    Args:
        ring: Ring to query
        keys: Keys to place

    Returns:
        Distribution analysis results
    """
    node_distribution = defaultdict(list)
    node_counts = defaultdict(int)

    for key in keys:
        try:
            node = ring.get_node(key)
        except EmptyRingError:
            break
        node_distribution[node].append(key)
        node_counts[node] += 1

    counts = list(node_counts.values())
    if not counts:
        return {
            "node_distribution": {},
            "node_counts": {},
            "statistics": {}
        }

    min_count = min(counts)
    max_count = max(counts)
    avg_count = sum(counts) / len(counts)
    std_dev = (sum((x - avg_count) ** 2 for x in counts) / len(counts)) ** 0.5

    return {
        "node_distribution": dict(node_distribution),
        "node_counts": dict(node_counts),
        "statistics": {
            "min_keys_per_node": min_count,
            "max_keys_per_node": max_count,
            "avg_keys_per_node": avg_count,
            "std_deviation": std_dev,
            "load_balance_ratio": min_count / max_count if max_count > 0 else 0
        }
    }


def expected_shares(node_weights: Dict[str, int]) -> Dict[str, float]:
    """Fraction of keys each node should receive given its weight"""
    normalized = {node: (weight if weight > 0 else 1) for node, weight in node_weights.items()}
    total = sum(normalized.values())
    if not total:
        return {}
    return {node: weight / total for node, weight in normalized.items()}


def snapshot(ring: HashRing, keys: Iterable[str]) -> Dict[str, str]:
    """
    Map each key to its current owner

    Unlike key_distribution, which reports an empty analysis for an empty
    ring, a snapshot needs an owner for every key.

    Raises:
        EmptyRingError: if the ring has no nodes
    """
    return {key: ring.get_node(key) for key in keys}


def remapped_keys(before: Dict[str, str], after: Dict[str, str]) -> List[str]:
    """Keys present in both snapshots whose owner changed"""
    return sorted(key for key, node in before.items() if key in after and after[key] != node)
