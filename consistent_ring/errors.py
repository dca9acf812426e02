class RingError(Exception):
    """Base class for errors raised by the hash ring."""


class EmptyRingError(RingError, LookupError):
    """Raised when a lookup is made against a ring with no nodes."""

    def __init__(self, message: str = "hash ring has no nodes") -> None:
        super().__init__(message)


class InvalidInputError(RingError, ValueError):
    """Raised for malformed node identifiers, keys or settings."""


class ReplicaCollisionError(RingError):
    """Raised when a replica of ``node`` cannot be placed on the ring.

    The ring is left exactly as it was before the failed ``add``.
    """

    def __init__(self, node, replica: int, probes: int) -> None:
        super().__init__(
            f"could not place replica {replica} of {node!r} after {probes} probes"
        )
        self.node = node
        self.replica = replica
        self.probes = probes
