from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

from ..config import Settings
from .tokens import MAX_HASH_COUNT as HASH_COUNT_CEILING

DEFAULT_HASH_COUNT = 25000
MIN_HASH_COUNT = 1000
MAX_HASH_COUNT = 10000000


@dataclass(frozen=True)
class HashCountBounds:
    default: int
    minimum: int
    maximum: int


class HashCountPolicy:
    """Mutable iteration-count bounds shared by one hasher.

    Setters do not check the bounds against each other, so a caller may
    move `minimum` above `maximum` for a moment. `resolve` and
    `needs_rehash` each work from a single locked snapshot.
    """

    def __init__(
        self,
        default: Optional[int] = DEFAULT_HASH_COUNT,
        minimum: int = MIN_HASH_COUNT,
        maximum: int = MAX_HASH_COUNT,
    ):
        self._lock = threading.Lock()
        self._initial_default = DEFAULT_HASH_COUNT if default is None else int(default)
        self._default = self._initial_default
        self._minimum = int(minimum)
        self._maximum = int(maximum)

    @classmethod
    def from_settings(cls, settings: Settings) -> "HashCountPolicy":
        return cls(
            default=settings.pbkdf2_hash_count,
            minimum=settings.pbkdf2_min_hash_count,
            maximum=settings.pbkdf2_max_hash_count,
        )

    @property
    def default(self) -> int:
        with self._lock:
            return self._default

    @default.setter
    def default(self, value: Optional[int]) -> None:
        # None puts back the default the policy was built with.
        with self._lock:
            self._default = self._initial_default if value is None else int(value)

    @property
    def minimum(self) -> int:
        with self._lock:
            return self._minimum

    @minimum.setter
    def minimum(self, value: int) -> None:
        with self._lock:
            self._minimum = int(value)

    @property
    def maximum(self) -> int:
        with self._lock:
            return self._maximum

    @maximum.setter
    def maximum(self, value: int) -> None:
        with self._lock:
            self._maximum = int(value)

    def snapshot(self) -> HashCountBounds:
        with self._lock:
            return HashCountBounds(default=self._default, minimum=self._minimum, maximum=self._maximum)

    def resolve(self, requested: Optional[int] = None) -> int:
        """Return the count to hash with: `requested` (or the default) clamped into the band.

        When the bounds are inverted the floor wins. The result is never below 1
        and never above HASH_COUNT_CEILING.
        """
        bounds = self.snapshot()
        value = bounds.default if requested is None else int(requested)
        value = max(bounds.minimum, min(value, bounds.maximum))
        return min(max(value, 1), HASH_COUNT_CEILING)

    def needs_rehash(self, hash_count: int) -> bool:
        bounds = self.snapshot()
        return hash_count < bounds.minimum or hash_count > bounds.maximum

    def __repr__(self) -> str:
        b = self.snapshot()
        return f"HashCountPolicy(default={b.default}, minimum={b.minimum}, maximum={b.maximum})"
