"""Bloom filter using double hashing.

Two independent hash families (MurmurHash3 via mmh3 and xxHash64) are combined
with the Kirsch-Mitzenmacher optimization to derive the configured number of
bit positions per element::

    position_i = (h1 + i * h2) mod m        for i in 0..k

Elements are hashed over their byte representation, see :func:`to_bytes`.
"""
from __future__ import annotations

import logging
from numbers import Integral
from typing import Iterable, Iterator, Union

import mmh3
import xxhash

from .bit_array import BitArray
from .errors import InvalidParameters
from .sizing import expected_false_positive_rate, optimal_parameters

logger = logging.getLogger(__name__)

DEFAULT_SEED1 = 0
DEFAULT_SEED2 = 0

Element = Union[bytes, bytearray, memoryview, str, int]


def to_bytes(element: Element) -> bytes:
    """Serialize ``element`` to the bytes that get hashed.

    ``str`` is UTF-8 encoded and ``int`` becomes minimal two's-complement
    big-endian. Bytes-like values are used as they are.

    Raises:
        TypeError: If ``element`` has no stable byte serialization.
    """
    if isinstance(element, (bytes, bytearray, memoryview)):
        return bytes(element)
    if isinstance(element, str):
        return element.encode("utf-8")
    if isinstance(element, int) and not isinstance(element, bool):
        magnitude = ~element if element < 0 else element
        length = magnitude.bit_length() // 8 + 1
        return element.to_bytes(length, "big", signed=True)
    raise TypeError(f"cannot serialize {type(element).__name__!r} element to bytes")


def _check_positive(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidParameters(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidParameters(f"{name} must be positive, got {value}")


def _check_seed(name: str, value: int, bits: int) -> None:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidParameters(f"{name} must be an integer, got {value!r}")
    if not 0 <= value < 1 << bits:
        raise InvalidParameters(f"{name} must be in [0, 2**{bits}), got {value}")


class BloomFilter:
    """Bloom filter backed by a packed bitset.

    ``add`` never produces false negatives: a later ``contains`` for the same
    element probes exactly the bits ``add`` set. Not safe for concurrent
    writers without external locking.
    """

    def __init__(
        self,
        size: int,
        num_hashes: int,
        *,
        seed1: int = DEFAULT_SEED1,
        seed2: int = DEFAULT_SEED2,
    ) -> None:
        """Initialize an empty Bloom filter.

        Args:
            size: Number of bits in the filter (``m``).
            num_hashes: Number of bit positions probed per element (``k``).
            seed1: Seed for MurmurHash3.
            seed2: Seed for xxHash64.

        Raises:
            InvalidParameters: If size or num_hashes is not a positive integer,
                or a seed is outside the range its hash function accepts.
        """
        _check_positive("size", size)
        _check_positive("num_hashes", num_hashes)
        _check_seed("seed1", seed1, 32)
        _check_seed("seed2", seed2, 64)

        self._size = int(size)
        self._num_hashes = int(num_hashes)
        self._seed1 = int(seed1)
        self._seed2 = int(seed2)
        self._bits = BitArray(self._size)
        logger.debug(
            "created bloom filter size=%d num_hashes=%d seeds=(%d, %d)",
            self._size, self._num_hashes, seed1, seed2,
        )

    @classmethod
    def with_false_positive_rate(
        cls,
        n: int,
        p: float,
        *,
        seed1: int = DEFAULT_SEED1,
        seed2: int = DEFAULT_SEED2,
    ) -> "BloomFilter":
        """Build a filter sized for ``n`` elements at false-positive rate ``p``."""
        m, k = optimal_parameters(n, p)
        return cls(m, k, seed1=seed1, seed2=seed2)

    @property
    def size(self) -> int:
        return self._size

    @property
    def num_hashes(self) -> int:
        return self._num_hashes

    @property
    def seed1(self) -> int:
        return self._seed1

    @property
    def seed2(self) -> int:
        return self._seed2

    def add(self, item: Element) -> None:
        """Insert ``item`` into the filter."""
        for bit_index in self._hashes(item):
            self._bits.set(bit_index)

    def update(self, items: Iterable[Element]) -> None:
        """Insert all ``items`` into the filter."""
        for item in items:
            self.add(item)

    def contains(self, item: Element) -> bool:
        """Return True if ``item`` may be present, False if definitely absent."""
        return self._bits.all_set(self._hashes(item))

    def __contains__(self, item: Element) -> bool:
        return self.contains(item)

    def _hashes(self, item: Element) -> Iterator[int]:
        data = to_bytes(item)
        h1 = mmh3.hash(data, self._seed1, signed=False)
        h2 = xxhash.xxh64(data, seed=self._seed2).intdigest() % self._size
        if h2 == 0:
            h2 = 1  # Ensure progress for the arithmetic progression.

        for i in range(self._num_hashes):
            yield (h1 + i * h2) % self._size

    def bit_count(self) -> int:
        """Number of bits currently set."""
        return self._bits.count()

    def expected_false_positive_rate(self, n: int) -> float:
        """Approximate false-positive rate after ``n`` distinct insertions."""
        return expected_false_positive_rate(self._size, self._num_hashes, n)

    @property
    def bit_array(self) -> bytearray:
        """Expose the underlying bit array (primarily for inspection)."""
        return self._bits.raw

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BloomFilter):
            return NotImplemented
        return (
            self._num_hashes == other._num_hashes
            and self._seed1 == other._seed1
            and self._seed2 == other._seed2
            and self._bits == other._bits
        )

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(size={self._size}, num_hashes={self._num_hashes}, "
            f"seed1={self._seed1}, seed2={self._seed2})"
        )
