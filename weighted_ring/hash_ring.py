"""
Weighted Hash Ring Implementation for Consistent Hashing

Each node occupies cubes_per_weight * weight virtual positions ("cubes") on a
32-bit ring. A key belongs to the node owning the first position clockwise
from the key's hash.
"""

import bisect
import logging
import zlib
from typing import Any, Dict, List, Optional, Set

from .config import DEFAULT_CUBES_PER_WEIGHT, get_config, validate_cube_count
from .errors import EmptyRingError, RingNotEmptyError
from .rwlock import ReadWriteLock


logger = logging.getLogger(__name__)


def hash_key(key: str) -> int:
    """CRC-32 (IEEE) of the UTF-8 encoded key as an unsigned 32-bit int"""
    return zlib.crc32(key.encode("utf-8")) & 0xFFFFFFFF


def cube_key(node: str, index: int) -> str:
    """Key hashed to place virtual position `index` of `node`"""
    return f"{node}#{index}"


class HashRing:
    """
    Thread-safe weighted consistent hash ring

    ring, sorted_keys, nodes and weights are guarded together by one
    reader/writer lock. Mutations take it exclusively and rebuild the sorted
    index before releasing it; lookups share it.

    Re-adding a node that is already a member does not remove its existing
    positions. Call remove_node before re-adding a node with a different
    weight, otherwise stale positions stay on the ring.
    """

    def __init__(self, cubes_per_weight: int = DEFAULT_CUBES_PER_WEIGHT):
        self._cubes_per_weight = validate_cube_count(cubes_per_weight)
        self.ring: Dict[int, str] = {}  # hash -> node
        self.sorted_keys: List[int] = []
        self.nodes: Set[str] = set()
        self.weights: Dict[str, int] = {}
        self._lock = ReadWriteLock()

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> "HashRing":
        """Build an empty ring from a get_config() style dict (read from the environment if omitted)"""
        if config is None:
            config = get_config()
        return cls(cubes_per_weight=config.get("cubes_per_weight", DEFAULT_CUBES_PER_WEIGHT))

    @property
    def cubes_per_weight(self) -> int:
        return self._cubes_per_weight

    def set_cube_count(self, count: int):
        """
        Set the number of virtual positions per unit of weight

        Must be called before the first add_node/add_nodes.

        Raises:
            InvalidConfigurationError: if count is not a positive integer
            RingNotEmptyError: if the ring already has members
        """
        count = validate_cube_count(count)
        with self._lock.writer():
            if self.nodes:
                raise RingNotEmptyError(
                    f"cannot change cube count with {len(self.nodes)} nodes on the ring"
                )
            self._cubes_per_weight = count
        logger.info(f"Cube count set to {count} per weight")

    def members(self) -> Set[str]:
        """Return a copy of the registered node names"""
        with self._lock.reader():
            return set(self.nodes)

    def add_node(self, node: str, weight: int = 1):
        """Add a node to the ring; weight <= 0 is treated as 1"""
        with self._lock.writer():
            weight = self._place_node(node, weight)
            self._update_sorted_ring()
        logger.info(f"Added node {node} (weight {weight}) to hash ring")

    def add_nodes(self, node_weights: Dict[str, int]):
        """Add several nodes, rebuilding the sorted index once for the batch"""
        with self._lock.writer():
            for node, weight in node_weights.items():
                self._place_node(node, weight)
            self._update_sorted_ring()
        logger.info(f"Added {len(node_weights)} nodes to hash ring")

    def remove_node(self, node: str):
        """Remove a node and its virtual positions; unknown nodes are ignored"""
        with self._lock.writer():
            if node not in self.nodes:
                logger.debug(f"Node {node} is not on the ring, nothing to remove")
                return
            weight = self.weights.get(node, 0)
            for i in range(self._cubes_per_weight * weight):
                self.ring.pop(hash_key(cube_key(node, i)), None)
            self.nodes.discard(node)
            self.weights.pop(node, None)
            self._update_sorted_ring()
        logger.info(f"Removed node {node} from hash ring")

    def get_node(self, key: str) -> str:
        """
        Get the node responsible for a key

        Raises:
            EmptyRingError: if the ring has no virtual positions
        """
        with self._lock.reader():
            if not self.ring:
                raise EmptyRingError()
            index = self._search(hash_key(key))
            return self.ring[self.sorted_keys[index]]

    def get_nodes(self, key: str, count: int) -> List[str]:
        """
        Get up to `count` distinct nodes for a key, in clockwise order

        The first entry is the same node get_node(key) returns. An empty ring
        yields an empty list rather than an error.
        """
        with self._lock.reader():
            if not self.ring or count <= 0:
                return []

            count = min(count, len(self.nodes))
            start = self._search(hash_key(key))
            result: List[str] = []
            seen: Set[str] = set()

            total = len(self.sorted_keys)
            for offset in range(total):
                node = self.ring[self.sorted_keys[(start + offset) % total]]
                if node not in seen:
                    result.append(node)
                    seen.add(node)
                    if len(result) >= count:
                        break

            return result

    def _place_node(self, node: str, weight: int) -> int:
        # Caller holds the write lock.
        if weight <= 0:
            weight = 1
        previous = self.weights.get(node)
        if previous is not None and previous != weight:
            logger.warning(
                f"Node {node} re-added with weight {weight} (was {previous}) without removal; "
                f"positions from the old weight are kept"
            )
        for i in range(self._cubes_per_weight * weight):
            self.ring[hash_key(cube_key(node, i))] = node
        self.nodes.add(node)
        self.weights[node] = weight
        return weight

    def _search(self, hash_val: int) -> int:
        """Index of the first position strictly greater than hash_val, wrapping to 0"""
        index = bisect.bisect_right(self.sorted_keys, hash_val)
        if index >= len(self.sorted_keys):
            index = 0
        return index

    def _update_sorted_ring(self):
        # Caller holds the write lock.
        self.sorted_keys = sorted(self.ring.keys())
        logger.debug(f"Rebuilt sorted index with {len(self.sorted_keys)} positions")
