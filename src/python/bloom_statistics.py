"""Bloom filter statistics calculation and display."""
import math
from typing import Optional

from bloom_filter import BloomFilter


class BloomStatistics:
    """Calculate and display Bloom filter statistics.

    The element count defaults to the filter's own add counter. A restored
    filter has no counter, so for it the count is estimated from the bits
    that are set.
    """

    def __init__(self, bloom_filter: BloomFilter, element_count: Optional[int] = None):
        self.filter = bloom_filter
        self.element_count_estimated = False
        if element_count is None:
            element_count = bloom_filter.element_count
            if not element_count and bloom_filter.bits_set:
                element_count = self.estimated_element_count()
                self.element_count_estimated = True
        self.element_count = element_count

    @property
    def num_hash_functions(self) -> int:
        return len(self.filter.hash_functions)

    def estimated_element_count(self) -> int:
        """Estimate n from the bits set: -(m/k) × ln(1 - X/m).

        A fully saturated filter carries no usable estimate; its bit count
        is returned as an upper bound.
        """
        m = self.filter.buffer_bit_size
        x = self.filter.bits_set
        if x >= m:
            return m
        return round(-(m / self.num_hash_functions) * math.log(1 - x / m))

    def theoretical_fill_rate(self) -> float:
        """Calculate theoretical fill rate: 1 - e^(-kn/m)."""
        k = self.num_hash_functions
        n = self.element_count
        m = self.filter.buffer_bit_size
        return 1 - math.exp(-k * n / m)

    def false_positive_rate(self) -> float:
        """Calculate false positive rate: (1 - e^(-kn/m))^k."""
        return self.theoretical_fill_rate() ** self.num_hash_functions

    def observed_false_positive_rate(self) -> float:
        """FP rate implied by the bits actually set: fill^k."""
        return self.filter.fill_rate ** self.num_hash_functions

    def substring_false_positive_rate(self, window_count: int) -> float:
        """Chance that at least one of window_count non-member windows passes."""
        return 1 - (1 - self.observed_false_positive_rate()) ** window_count

    def optimal_k(self) -> float:
        """Calculate optimal k for minimum FP rate."""
        if not self.element_count:
            return 0.0
        return (self.filter.buffer_bit_size / self.element_count) * math.log(2)

    def print_statistics(self):
        """Print comprehensive statistics."""
        n = self.element_count
        k = self.num_hash_functions
        m = self.filter.buffer_bit_size

        actual_fill = self.filter.fill_rate
        theoretical_fill = self.theoretical_fill_rate()
        fp_rate = self.false_positive_rate()

        print("\n=== BLOOM FILTER STATISTICS ===")
        source = " (estimated from bits set)" if self.element_count_estimated else ""
        print(f"Elements inserted (n): {n:,}{source}")
        print(f"Bits in filter (m): {m:,}")
        print(f"Hash functions (k): {k}")
        if n:
            print(f"Bits per element (m/n): {m/n:.2f}")
        print(f"\nActual bits set: {self.filter.bits_set:,} / {m:,} "
              f"({actual_fill * 100:.2f}%)")
        print(f"Theoretical fill rate: {theoretical_fill * 100:.2f}%")
        print(f"Difference: {abs(actual_fill - theoretical_fill) * 100:.2f}%")

        if fp_rate:
            print(f"\nFalse positive rate: {fp_rate * 100:.4f}% "
                  f"(1 in {1/fp_rate:.0f})")
        else:
            print("\nFalse positive rate: 0% (empty filter)")
        print(f"Formula: (1 - e^(-{k}×{n}/{m}))^{k} = {fp_rate:.6f}")

        if n:
            print(f"\nOptimal k for minimum FP rate: {self.optimal_k():.2f}")
