import pytest

from bloomfilter.bit_array import BitArray
from bloomfilter.errors import InvalidParameters


def test_allocates_partial_trailing_byte():
    assert len(BitArray(8 * 4).raw) == 4
    assert len(BitArray(8 * 4 + 3).raw) == 5
    assert len(BitArray(1).raw) == 1


def test_starts_empty():
    bits = BitArray(35)
    assert len(bits) == 35
    assert bits.count() == 0
    assert not any(bits.get(i) for i in range(35))


def test_set_packs_bits_into_bytes():
    bits = BitArray(8 * 4)

    bits.set(0)
    assert bits.raw[0] == 0b0000_0001
    bits.set(7)
    assert bits.raw[0] == 0b1000_0001
    bits.set(31)
    assert bits.raw[3] == 0b1000_0000
    bits.set(30)
    assert bits.raw[3] == 0b1100_0000

    assert bits.get(0) and bits.get(7) and bits.get(30) and bits.get(31)
    assert not bits.get(1)
    assert not bits.get(29)
    assert bits.count() == 4


def test_set_is_idempotent():
    bits = BitArray(16)
    bits.set(9)
    before = bytes(bits.raw)
    bits.set(9)
    assert bytes(bits.raw) == before
    assert bits.count() == 1


def test_last_bit_of_odd_size():
    size = 8 * 4 + 3
    bits = BitArray(size)
    bits.set(size - 1)
    assert bits.get(size - 1)
    assert not bits.get(size - 2)


def test_all_set():
    bits = BitArray(10)
    bits.set(2)
    bits.set(5)
    assert bits.all_set([2, 5])
    assert not bits.all_set([2, 5, 6])
    assert bits.all_set([])


@pytest.mark.parametrize("index", [-1, 10, 100])
def test_out_of_range(index):
    bits = BitArray(10)
    with pytest.raises(IndexError):
        bits.set(index)
    with pytest.raises(IndexError):
        bits.get(index)


@pytest.mark.parametrize("size", [0, -8])
def test_rejects_non_positive_size(size):
    with pytest.raises(InvalidParameters):
        BitArray(size)


def test_equality():
    a, b = BitArray(12), BitArray(12)
    assert a == b
    a.set(3)
    assert a != b
    b.set(3)
    assert a == b
    assert BitArray(12) != BitArray(13)
