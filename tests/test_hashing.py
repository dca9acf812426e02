import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from consistent_ring.hashing import (
    HASH_FUNCTIONS,
    crc32,
    get_hash_function,
    replica_name,
    to_bytes,
)
from consistent_ring.errors import InvalidInputError


def test_crc32_check_value():
    assert crc32(b"123456789") == 0xCBF43926


def test_crc32_is_unsigned_32_bit():
    fn = get_hash_function("crc32")
    assert fn.bits == 32
    assert fn.space == 2 ** 32
    for i in range(100):
        assert 0 <= fn(f"key-{i}".encode()) < fn.space


@pytest.mark.parametrize("name", ["md5", "sha1"])
def test_digest_hashes_fit_64_bits(name):
    fn = get_hash_function(name)
    assert fn.bits == 64
    values = {fn(f"k{i}".encode()) for i in range(100)}
    assert len(values) == 100
    assert all(0 <= v < 2 ** 64 for v in values)


def test_hashes_are_stable():
    for fn in HASH_FUNCTIONS.values():
        assert fn(b"david") == fn(b"david")


def test_unknown_hash_name():
    with pytest.raises(InvalidInputError):
        get_hash_function("murmur")


def test_to_bytes():
    assert to_bytes("abc") == b"abc"
    assert to_bytes(b"\x00\xff") == b"\x00\xff"
    assert to_bytes("é") == "é".encode("utf-8")
    with pytest.raises(InvalidInputError):
        to_bytes(1.5)


def test_replica_name():
    assert replica_name("cacheA", 0) == b"cacheA:0"
    assert replica_name(b"node", 19) == b"node:19"
    # separator keeps "a1" replica 0 apart from "a" replica 10
    assert replica_name("a1", 0) != replica_name("a", 10)
