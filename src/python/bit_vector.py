"""
Packed bit storage for Bloom filters.

Bit i lives in byte i // 8 at offset i % 8, least-significant bit first.
Positions are never range checked here; callers reduce them into
[0, bit_count) before calling in.
"""
from typing import Union

Buffer = Union[bytearray, memoryview]


def set_bit(buffer: Buffer, bit_location: int):
    """Set the bit at bit_location in buffer."""
    buffer[bit_location // 8] |= 1 << (bit_location % 8)


def is_bit_set(buffer: Buffer, bit_location: int) -> bool:
    """Return True if the bit at bit_location in buffer is set."""
    return bool(buffer[bit_location // 8] & (1 << (bit_location % 8)))


class BitVector:
    """Fixed-size packed array of bits backed by a bytearray."""

    def __init__(self, bit_count: int):
        self.bit_count = bit_count
        self.data = bytearray((bit_count + 7) // 8)

    @classmethod
    def from_bytes(cls, data) -> "BitVector":
        """Restore a vector from a previous buffer. The buffer is copied."""
        vector = cls(0)
        vector.data = bytearray(data)
        vector.bit_count = len(vector.data) * 8
        return vector

    def set_bit(self, bit_location: int):
        set_bit(self.data, bit_location)

    def is_bit_set(self, bit_location: int) -> bool:
        return is_bit_set(self.data, bit_location)

    def to_bytes(self) -> bytes:
        return bytes(self.data)

    @property
    def bits_set(self) -> int:
        """Count number of bits set in the vector."""
        return sum(bin(byte).count('1') for byte in self.data)

    @property
    def fill_rate(self) -> float:
        """Proportion of bits set."""
        return self.bits_set / self.bit_count if self.bit_count else 0.0

    def __len__(self) -> int:
        return self.bit_count
