"""Consistent hashing ring with virtual nodes."""

# Re-export the public names lazily so importing a submodule does not pull
# in the whole package.
from importlib import import_module

_EXPORTS = {
    "HashRing": "hash_ring",
    "RingConfig": "config",
    "DEFAULT_REPLICAS": "config",
    "RingError": "errors",
    "EmptyRingError": "errors",
    "InvalidInputError": "errors",
    "ReplicaCollisionError": "errors",
    "HashFunction": "hashing",
    "get_hash_function": "hashing",
    "EventLogger": "utils.event_logger",
}

__all__ = sorted(_EXPORTS)


def __getattr__(name):
    if name in _EXPORTS:
        mod = import_module(f"{__name__}.{_EXPORTS[name]}")
        return getattr(mod, name)
    raise AttributeError(name)
