"""Bloom filter implementation."""
from typing import Iterable, List, Optional, Sequence, Union

from bit_vector import BitVector
from bloom_config import (BloomConfig, DEFAULT_BITS_PER_ELEMENT,
                          DEFAULT_ESTIMATED_ELEMENT_COUNT)
from char_codes import to_char_code_array
from hash_functions import HashFunction, default_hash_functions

BYTES_TYPES = (bytes, bytearray, memoryview)

Data = Union[str, bytes, bytearray, memoryview, Sequence[int]]


class InvalidConstructorArguments(TypeError):
    """Raised when BloomFilter arguments match neither constructor form."""


def _is_integer(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class BloomFilter:
    """Bloom filter for efficient set membership testing.

    Two constructor forms are accepted:

        BloomFilter(bits_per_element=10, estimated_element_count=50000,
                    hash_functions=None)
        BloomFilter(buffer, hash_functions=None)

    The first sizes a new, empty filter. The second restores a filter from
    the bytes of a previous one; the hash functions must be the same ones,
    in the same order, that built the buffer.

    There is purposely no remove, since clearing bits would introduce
    false negatives.
    """

    def __init__(self, bits_per_element=DEFAULT_BITS_PER_ELEMENT,
                 estimated_element_count=None,
                 hash_functions: Optional[Sequence[HashFunction]] = None):
        if _is_integer(bits_per_element) and (
                estimated_element_count is None or _is_integer(estimated_element_count)):
            if estimated_element_count is None:
                estimated_element_count = DEFAULT_ESTIMATED_ELEMENT_COUNT
            if bits_per_element <= 0 or estimated_element_count <= 0:
                raise InvalidConstructorArguments(
                    f"bits_per_element ({bits_per_element}) and estimated_element_count "
                    f"({estimated_element_count}) must both be positive")
            sizing = (bits_per_element, estimated_element_count)
        elif isinstance(bits_per_element, BYTES_TYPES):
            if estimated_element_count is not None:
                if hash_functions is not None:
                    raise InvalidConstructorArguments(
                        "hash functions given both positionally and by keyword")
                if not isinstance(estimated_element_count, (list, tuple)):
                    raise InvalidConstructorArguments(
                        "second argument of the restore form must be a list of hash functions, "
                        f"got {type(estimated_element_count).__name__}")
                hash_functions = estimated_element_count
            if len(bits_per_element) == 0:
                raise InvalidConstructorArguments("cannot restore from an empty buffer")
            sizing = None
            self.bit_vector = BitVector.from_bytes(bits_per_element)
        else:
            raise InvalidConstructorArguments(
                f"expected (int, int) or (buffer, hash_functions), got "
                f"({type(bits_per_element).__name__}, "
                f"{type(estimated_element_count).__name__})")

        if hash_functions is None:
            hash_functions = default_hash_functions()
        elif not isinstance(hash_functions, (list, tuple)):
            raise InvalidConstructorArguments(
                f"hash_functions must be a list, got {type(hash_functions).__name__}")
        if not hash_functions:
            raise InvalidConstructorArguments("at least one hash function is required")
        if not all(callable(h) for h in hash_functions):
            raise InvalidConstructorArguments("every hash function must be callable")

        self.hash_functions: List[HashFunction] = list(hash_functions)
        self.config = None
        if sizing is not None:
            self.config = BloomConfig(*sizing, num_hash_functions=len(self.hash_functions))
            self.bit_vector = BitVector(self.config.size_bits)
        self.buffer_bit_size = self.bit_vector.bit_count
        # Counts add calls on this instance, duplicates included. Restored
        # filters start at 0 whatever their buffer holds.
        self.element_count = 0

    @classmethod
    def from_buffer(cls, buffer, hash_functions: Optional[Sequence[HashFunction]] = None
                    ) -> "BloomFilter":
        """Construct a Bloom filter from a previous filter's bytes.

        `buffer` may be the output of to_bytes() or to_json(). Note that the
        hash functions must be the same!
        """
        if isinstance(buffer, (list, tuple)):
            buffer = bytes(buffer)
        return cls(buffer, hash_functions=hash_functions)

    def to_bytes(self) -> bytes:
        """Return a copy of the filter's buffer."""
        return self.bit_vector.to_bytes()

    def to_json(self) -> List[int]:
        """Return the buffer's byte values in a JSON friendly format."""
        return list(self.bit_vector.data)

    def print_buffer(self):
        """Print the buffer, mostly used for debugging only."""
        print(self.bit_vector.data)

    @staticmethod
    def _to_char_codes(data: Data) -> bytes:
        if isinstance(data, str):
            return to_char_code_array(data)
        if isinstance(data, bytes):
            return data
        return bytes(data)

    def get_locations_for_char_codes(self, char_codes: bytes) -> List[int]:
        """Calculate bit positions for char_codes using all hash functions."""
        return [h(char_codes) % self.buffer_bit_size for h in self.hash_functions]

    def get_hashes_for_char_codes(self, char_codes: bytes,
                                  last_hashes: Optional[List[int]] = None,
                                  last_char_code: Optional[int] = None) -> List[int]:
        """Obtain the raw hashes for char_codes.

        When last_hashes (the previous window's hashes) and last_char_code
        (the byte that slid out of it) are both given, rolling hash
        functions update in constant time instead of rescanning the window.
        """
        if last_hashes is None:
            return [h(char_codes) for h in self.hash_functions]
        return [h(char_codes, last_hash, last_char_code)
                for h, last_hash in zip(self.hash_functions, last_hashes)]

    def add(self, data: Data):
        """Add data to the Bloom filter."""
        for bit_pos in self.get_locations_for_char_codes(self._to_char_codes(data)):
            self.bit_vector.set_bit(bit_pos)
        self.element_count += 1

    def add_all(self, items: Iterable[Data], progress_interval: int = 0):
        """Add every item, printing progress every progress_interval items."""
        if progress_interval:
            print(f"Building Bloom filter ({len(self.bit_vector.data):,} bytes, "
                  f"{len(self.hash_functions)} hash functions)...")

        for idx, item in enumerate(items):
            if progress_interval and idx % progress_interval == 0:
                print(f"  Processing item {idx}...")
            self.add(item)

        if progress_interval:
            print("Bloom filter built successfully")

    def exists(self, data: Data) -> bool:
        """Check whether data probably exists in the set, or definitely doesn't.

        Returns True if the element probably exists in the set, False if it
        definitely does not.
        """
        return all(self.bit_vector.is_bit_set(bit_pos)
                   for bit_pos in self.get_locations_for_char_codes(self._to_char_codes(data)))

    def __contains__(self, data: Data) -> bool:
        return self.exists(data)

    def substring_exists(self, data: Data, substring_length: int) -> bool:
        """Check if any substring of length substring_length probably exists.

        If False is returned then no substring of data of that length is in
        the filter. Windows are hashed with a rolling update from the
        previous window instead of rescanning it. Each window is passed to
        the hash functions as bytes, the same type add and exists pass.
        """
        if substring_length < 1:
            return False
        char_codes = self._to_char_codes(data)

        last_hashes = None
        last_char_code = None
        for i in range(len(char_codes) - substring_length + 1):
            last_hashes = self.get_hashes_for_char_codes(
                char_codes[i:i + substring_length], last_hashes, last_char_code)
            if all(self.bit_vector.is_bit_set(h % self.buffer_bit_size)
                   for h in last_hashes):
                return True
            last_char_code = char_codes[i]
        return False

    @property
    def bits_set(self) -> int:
        """Count number of bits set in the filter."""
        return self.bit_vector.bits_set

    @property
    def fill_rate(self) -> float:
        """Calculate actual fill rate (proportion of bits set)."""
        return self.bit_vector.fill_rate
