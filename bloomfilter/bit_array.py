"""Packed bit array backing the Bloom filter.

Cells are stored one bit each in a ``bytearray``. Bit ``i`` lives in byte
``i >> 3`` under mask ``1 << (i & 7)``.
"""
from __future__ import annotations

from typing import Iterable

from .errors import InvalidParameters


class BitArray:
    """Fixed-length bitset whose cells can only be switched on."""

    __slots__ = ("size", "_bytes")

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise InvalidParameters(f"size must be positive, got {size}")

        self.size = size
        # Round up so a trailing partial byte still gets allocated.
        self._bytes = bytearray((size + 7) // 8)

    def set(self, index: int) -> None:
        """Switch on the bit at ``index``. Setting a set bit is a no-op."""
        self._check(index)
        self._bytes[index >> 3] |= 1 << (index & 7)

    def get(self, index: int) -> bool:
        self._check(index)
        return bool(self._bytes[index >> 3] & (1 << (index & 7)))

    def all_set(self, indexes: Iterable[int]) -> bool:
        """Return True if every bit in ``indexes`` is on (short-circuits)."""
        for index in indexes:
            if not self.get(index):
                return False
        return True

    def count(self) -> int:
        """Number of bits currently on."""
        return sum(bin(byte).count("1") for byte in self._bytes)

    def _check(self, index: int) -> None:
        if not 0 <= index < self.size:
            raise IndexError(f"bit index {index} out of range for {self.size} bits")

    def __len__(self) -> int:
        return self.size

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitArray):
            return NotImplemented
        return self.size == other.size and self._bytes == other._bytes

    __hash__ = None  # mutable

    @property
    def raw(self) -> bytearray:
        """Expose the packed bytes (primarily for inspection)."""
        return self._bytes
