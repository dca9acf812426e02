import logging
import threading
from bisect import bisect_left, insort
from typing import Hashable, Iterable, Iterator

from .config import RingConfig
from .errors import EmptyRingError, InvalidInputError, ReplicaCollisionError
from .hashing import get_hash_function, replica_name, to_bytes
from .utils.event_logger import EventLogger

logger = logging.getLogger(__name__)

Node = str | bytes


class HashRing:
    """Consistent hashing ring with virtual nodes.

    Every node is placed on the ring ``replicas`` times. A key belongs to the
    node owning the first position at or after the key's hash, wrapping
    around to the lowest position.

    When a replica's position is already taken the next free position is
    used (linear probing), so a node never takes over another node's
    position. All public methods are serialized by an internal lock.
    """

    def __init__(
        self,
        replicas: int | None = None,
        nodes: Iterable[Node] | None = None,
        *,
        hash_name: str | None = None,
        max_probes: int | None = None,
        config: RingConfig | None = None,
        event_logger: EventLogger | None = None,
    ) -> None:
        config = config or RingConfig()
        overrides = {
            "replicas": replicas,
            "hash_name": hash_name,
            "max_probes": max_probes,
        }
        self.config = RingConfig(
            **{
                name: getattr(config, name) if value is None else value
                for name, value in overrides.items()
            }
        ).validate()
        self.event_logger = event_logger
        self._hash = get_hash_function(self.config.hash_name)
        self._lock = threading.RLock()
        self._positions: list[int] = []  # sorted
        self._owners: dict[int, Node] = {}
        self._nodes: dict[Node, list[int]] = {}
        if isinstance(nodes, (str, bytes)):
            raise InvalidInputError(
                "nodes must be a collection of identifiers, not a single one"
            )
        if nodes:
            for node in nodes:
                self.add(node)

    @property
    def replicas(self) -> int:
        return self.config.replicas

    @property
    def hash_name(self) -> str:
        return self.config.hash_name

    @property
    def members(self) -> list[Node]:
        """Registered nodes in the order they were added."""
        with self._lock:
            return list(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node: Hashable) -> bool:
        return node in self._nodes

    def __iter__(self) -> Iterator[Node]:
        return iter(self.members)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(replicas={self.replicas}, "
            f"hash_name={self.hash_name!r}, nodes={self.members!r})"
        )

    def add(self, node: Node) -> None:
        """Place ``node`` on the ring. Adding a present node does nothing."""
        _check_node(node)
        with self._lock:
            if node in self._nodes:
                logger.debug("Node %r already on the ring", node)
                return
            placed = self._place_replicas(node)
            for position in placed:
                self._owners[position] = node
                insort(self._positions, position)
            self._nodes[node] = placed
            logger.info("Added node %r with %d replicas", node, len(placed))
            if self.event_logger:
                self.event_logger.log(f"node added: {node!r}")

    def _place_replicas(self, node: Node) -> list[int]:
        """Return the positions for every replica of ``node``.

        Nothing is written to the ring, so a failure leaves it untouched.
        """
        space = self._hash.space
        taken: set[int] = set()
        placed = []
        for replica in range(self.replicas):
            position = self._hash(replica_name(node, replica))
            probes = 0
            while position in self._owners or position in taken:
                if probes == self.config.max_probes:
                    raise ReplicaCollisionError(node, replica, probes)
                probes += 1
                position = (position + 1) % space
            if probes:
                logger.debug(
                    "Replica %d of %r moved %d positions to %d",
                    replica, node, probes, position,
                )
            taken.add(position)
            placed.append(position)
        return placed

    def remove(self, node: Node) -> None:
        """Remove ``node`` and all of its replicas. Absent nodes are ignored."""
        _check_node(node)
        with self._lock:
            placed = self._nodes.pop(node, None)
            if placed is None:
                logger.debug("Node %r not on the ring", node)
                return
            dropped = set(placed)
            for position in placed:
                del self._owners[position]
            self._positions = [p for p in self._positions if p not in dropped]
            logger.info("Removed node %r", node)
            if self.event_logger:
                self.event_logger.log(f"node removed: {node!r}")

    def get(self, key: str | bytes) -> Node:
        """Return the node responsible for ``key``."""
        key_hash = self._hash(to_bytes(key))
        with self._lock:
            if not self._positions:
                raise EmptyRingError()
            return self._owners[self._positions[self._successor(key_hash)]]

    def _successor(self, key_hash: int) -> int:
        idx = bisect_left(self._positions, key_hash)
        if idx == len(self._positions):
            idx = 0
        return idx

    def get_preference_list(self, key: str | bytes, n: int) -> list[Node]:
        """Return the next ``n`` distinct nodes clockwise from ``key``."""
        key_hash = self._hash(to_bytes(key))
        with self._lock:
            if not self._positions:
                raise EmptyRingError()
            if n <= 0:
                return []
            wanted = min(n, len(self._nodes))
            result = []
            seen = set()
            i = self._successor(key_hash)
            while len(result) < wanted:
                node = self._owners[self._positions[i]]
                if node not in seen:
                    result.append(node)
                    seen.add(node)
                i = (i + 1) % len(self._positions)
            return result

    def positions(self, node: Node) -> list[int]:
        """Return the sorted ring positions owned by ``node``."""
        with self._lock:
            return sorted(self._nodes.get(node, ()))

    def ownership(self) -> dict[Node, float]:
        """Return the fraction of the hash space owned by each node.

        A position owns the arc from the previous position (exclusive) up to
        itself; the lowest position also owns the wrapped arc above the
        highest one.
        """
        space = self._hash.space
        with self._lock:
            shares = dict.fromkeys(self._nodes, 0)
            if not self._positions:
                return {}
            previous = self._positions[-1] - space
            for position in self._positions:
                shares[self._owners[position]] += position - previous
                previous = position
        return {node: share / space for node, share in shares.items()}


def _check_node(node) -> None:
    if not isinstance(node, (str, bytes)):
        raise InvalidInputError(
            f"node identifier must be str or bytes, got {type(node).__name__}"
        )
    if not node:
        raise InvalidInputError("node identifier must not be empty")
