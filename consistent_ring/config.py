"""Ring settings.

Values default to the environment variables RING_REPLICAS, RING_HASH and
RING_MAX_PROBES when loaded with :meth:`RingConfig.from_env`.
"""
import os
from dataclasses import dataclass
from typing import Mapping

from .errors import InvalidInputError
from .hashing import DEFAULT_HASH, get_hash_function

DEFAULT_REPLICAS = 20
DEFAULT_MAX_PROBES = 64


@dataclass(frozen=True)
class RingConfig:
    replicas: int = DEFAULT_REPLICAS
    hash_name: str = DEFAULT_HASH
    max_probes: int = DEFAULT_MAX_PROBES

    def validate(self) -> "RingConfig":
        """Raise :class:`InvalidInputError` if any value is out of range."""
        if isinstance(self.replicas, bool) or not isinstance(self.replicas, int):
            raise InvalidInputError("replicas must be an integer")
        if self.replicas < 1:
            raise InvalidInputError("replicas must be >= 1")
        if isinstance(self.max_probes, bool) or not isinstance(self.max_probes, int):
            raise InvalidInputError("max_probes must be an integer")
        if self.max_probes < 0:
            raise InvalidInputError("max_probes must be >= 0")
        get_hash_function(self.hash_name)
        return self

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "RingConfig":
        env = os.environ if env is None else env
        return cls(
            replicas=_int_setting(env, "RING_REPLICAS", DEFAULT_REPLICAS),
            hash_name=env.get("RING_HASH", DEFAULT_HASH),
            max_probes=_int_setting(env, "RING_MAX_PROBES", DEFAULT_MAX_PROBES),
        ).validate()


def _int_setting(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise InvalidInputError(f"{name} must be an integer, got {raw!r}") from None
