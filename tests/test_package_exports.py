import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import consistent_ring
from consistent_ring.hash_ring import HashRing
from consistent_ring.utils import EventLogger


def test_lazy_exports():
    assert consistent_ring.HashRing is HashRing
    assert consistent_ring.EventLogger is EventLogger
    assert consistent_ring.DEFAULT_REPLICAS == 20
    assert issubclass(consistent_ring.EmptyRingError, consistent_ring.RingError)
    assert issubclass(consistent_ring.ReplicaCollisionError, consistent_ring.RingError)


def test_unknown_attribute():
    with pytest.raises(AttributeError):
        consistent_ring.Consistant


def test_repr():
    ring = consistent_ring.HashRing(replicas=2, nodes=["a"])
    assert repr(ring) == "HashRing(replicas=2, hash_name='crc32', nodes=['a'])"
