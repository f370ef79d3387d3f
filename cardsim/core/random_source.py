"""Uniform random sources used for dealing and tie-breaking."""
from abc import ABC, abstractmethod
from typing import Optional, Sequence, TypeVar, Union
import os
import threading

import numpy as np


T = TypeVar("T")

UINT32_RANGE = 1 << 32


class UniformRandomSource(ABC):
    """Uniform randomness over 32-bit unsigned integers.

    Implementations only supply raw 32-bit draws and bytes; bounded ranges
    and doubles are derived here so every source maps them the same way.
    """

    @abstractmethod
    def next_uint32(self) -> int:
        """Return an integer in [0, 2**32)."""
        pass

    @abstractmethod
    def fill_bytes(self, count: int) -> bytes:
        """Return `count` random bytes."""
        pass

    def next_in_range(self, lo: int, hi: int) -> int:
        """Return an integer in [lo, hi) without modulo bias.

        Returns `lo` when the range is empty (lo == hi).
        """
        if lo > hi:
            raise ValueError(f"Empty range: lo={lo} is greater than hi={hi}")
        if lo == hi:
            return lo

        span = hi - lo
        if span > UINT32_RANGE:
            raise ValueError(f"Range of {span} values exceeds 32 bits")

        # Draws at or above `limit` would favour the low residues
        limit = UINT32_RANGE - (UINT32_RANGE % span)
        while True:
            value = self.next_uint32()
            if value < limit:
                return lo + value % span

    def next_double(self) -> float:
        """Return a float in [0.0, 1.0)."""
        return self.next_uint32() / UINT32_RANGE

    def choice(self, items: Sequence[T]) -> T:
        """Pick one element uniformly."""
        if not items:
            raise ValueError("Cannot choose from an empty sequence")
        return items[self.next_in_range(0, len(items))]

    @abstractmethod
    def spawn(self, key: int) -> "UniformRandomSource":
        """Create an independent source for a worker identified by `key`."""
        pass


class CryptoRandomSource(UniformRandomSource):
    """Cryptographically strong source backed by the OS generator.

    Bytes are fetched in blocks of `pool_size` and handed out under a lock,
    so one instance can be shared between threads.
    """

    def __init__(self, pool_size: int = 512):
        if pool_size < 4:
            raise ValueError("Random pool must hold at least 4 bytes")
        self.pool_size = pool_size
        self._lock = threading.Lock()
        self._buffer = b""
        self._position = 0

    def _refill(self):
        self._buffer = os.urandom(self.pool_size)
        self._position = 0

    def _take(self, count: int) -> bytes:
        if len(self._buffer) - self._position < count:
            self._refill()
        chunk = self._buffer[self._position:self._position + count]
        self._position += count
        return chunk

    def next_uint32(self) -> int:
        with self._lock:
            return int.from_bytes(self._take(4), "little")

    def fill_bytes(self, count: int) -> bytes:
        if count < 0:
            raise ValueError("Byte count must be non-negative")
        if count > self.pool_size:
            return os.urandom(count)
        with self._lock:
            return self._take(count)

    def spawn(self, key: int) -> "CryptoRandomSource":
        return CryptoRandomSource(self.pool_size)

    def __getstate__(self):
        # Locks cannot cross process boundaries and buffered bytes must not be replayed
        return {"pool_size": self.pool_size}

    def __setstate__(self, state):
        self.__init__(state["pool_size"])


class SeededRandomSource(UniformRandomSource):
    """Deterministic source for reproducible runs and tests."""

    def __init__(self, seed: Optional[Union[int, Sequence[int]]] = None):
        self.seed = seed
        self._generator = np.random.default_rng(seed)
        self._lock = threading.Lock()

    def spawn(self, key: int) -> "SeededRandomSource":
        """Derive a child stream; the same (seed, key) pair always replays."""
        if self.seed is None:
            return SeededRandomSource()
        parent = list(self.seed) if isinstance(self.seed, (list, tuple)) else [self.seed]
        return SeededRandomSource(parent + [key])

    def next_uint32(self) -> int:
        with self._lock:
            return int(self._generator.integers(0, UINT32_RANGE, dtype=np.uint64))

    def fill_bytes(self, count: int) -> bytes:
        if count < 0:
            raise ValueError("Byte count must be non-negative")
        with self._lock:
            return self._generator.bytes(count)

    def __getstate__(self):
        return {"seed": self.seed, "state": self._generator.bit_generator.state}

    def __setstate__(self, state):
        self.__init__(state["seed"])
        self._generator.bit_generator.state = state["state"]
