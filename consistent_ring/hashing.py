"""Stable hash functions mapping byte strings onto the ring."""
import hashlib
import zlib
from typing import Callable, NamedTuple

from .errors import InvalidInputError


class HashFunction(NamedTuple):
    name: str
    bits: int
    func: Callable[[bytes], int]

    @property
    def space(self) -> int:
        """Number of distinct positions on a ring using this hash."""
        return 1 << self.bits

    def __call__(self, data: bytes) -> int:
        return self.func(data)


def crc32(data: bytes) -> int:
    """CRC-32 (IEEE polynomial) as an unsigned 32-bit integer."""
    return zlib.crc32(data) & 0xFFFFFFFF


def md5_64(data: bytes) -> int:
    return int.from_bytes(hashlib.md5(data).digest()[:8], "big")


def sha1_64(data: bytes) -> int:
    return int.from_bytes(hashlib.sha1(data).digest()[:8], "big")


HASH_FUNCTIONS: dict[str, HashFunction] = {
    "crc32": HashFunction("crc32", 32, crc32),
    "md5": HashFunction("md5", 64, md5_64),
    "sha1": HashFunction("sha1", 64, sha1_64),
}

DEFAULT_HASH = "crc32"


def get_hash_function(name: str) -> HashFunction:
    """Return the registered hash function called ``name``."""
    try:
        return HASH_FUNCTIONS[name]
    except KeyError:
        raise InvalidInputError(
            f"unknown hash function {name!r}, expected one of {sorted(HASH_FUNCTIONS)}"
        ) from None


def to_bytes(value: str | bytes) -> bytes:
    """Encode ``value`` for hashing; ``str`` is encoded as UTF-8."""
    if isinstance(value, bytes):
        return value
    if isinstance(value, str):
        return value.encode("utf-8")
    raise InvalidInputError(f"expected str or bytes, got {type(value).__name__}")


def replica_name(node: str | bytes, replica: int) -> bytes:
    """Return the byte string hashed to place ``replica`` of ``node``."""
    return to_bytes(node) + b":" + str(replica).encode("ascii")
