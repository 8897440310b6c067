"""
Bloom filter sizing configuration.

Ten bits per element with three hash functions gives roughly a 1% false
positive rate once the filter holds its estimated element count.
"""
import math
from dataclasses import dataclass

from hash_functions import DEFAULT_PRIMES

DEFAULT_BITS_PER_ELEMENT = 10
DEFAULT_ESTIMATED_ELEMENT_COUNT = 50000


@dataclass(frozen=True)
class BloomConfig:
    """Immutable sizing for a Bloom filter and the number of hashes it runs."""

    bits_per_element: int = DEFAULT_BITS_PER_ELEMENT
    estimated_element_count: int = DEFAULT_ESTIMATED_ELEMENT_COUNT
    num_hash_functions: int = len(DEFAULT_PRIMES)

    @property
    def size_bits(self) -> int:
        """Bloom filter size in bits."""
        return self.bits_per_element * self.estimated_element_count

    @property
    def size_bytes(self) -> int:
        """Bloom filter size in bytes, rounded up."""
        return (self.size_bits + 7) // 8

    def optimal_k(self) -> float:
        """Calculate optimal number of hash functions: (m/n) × ln(2)."""
        return self.bits_per_element * math.log(2)

    def expected_false_positive_rate(self) -> float:
        """False positive rate at capacity: (1 - e^(-k/bpe))^k."""
        k = self.num_hash_functions
        return (1 - math.exp(-k / self.bits_per_element)) ** k

    def print_summary(self):
        """Print configuration summary."""
        print("=" * 80)
        print("BLOOM FILTER SIZING")
        print("=" * 80)
        print(f"Bits per element: {self.bits_per_element}")
        print(f"Estimated elements: {self.estimated_element_count:,}")
        print(f"  Bits: {self.bits_per_element} × "
              f"{self.estimated_element_count:,} = {self.size_bits:,}")
        print(f"  Bytes: {self.size_bytes:,} ({self.size_bytes / 1024:.2f} KB)")
        print(f"Hash functions: {self.num_hash_functions}")
        print(f"Optimal k: (m/n) × ln(2) = {self.optimal_k():.2f}")
        print(f"Expected FP rate at capacity: "
              f"{self.expected_false_positive_rate() * 100:.2f}%")
        print("=" * 80)
        print()
