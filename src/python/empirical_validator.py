"""Measured false positive rates for exists and substring_exists."""
import random
import string
from typing import Iterable, NamedTuple, Optional

from bloom_filter import BloomFilter
from bloom_statistics import BloomStatistics

ALPHABET = string.ascii_lowercase + string.digits


class Measurement(NamedTuple):
    """Outcome of one sampling run against a filter."""

    samples: int
    false_positives: int
    expected_rate: float

    @property
    def rate(self) -> float:
        return self.false_positives / self.samples if self.samples else 0.0


class EmpiricalValidator:
    """Sample random non-members and count how many the filter accepts.

    Two queries are measured: single-key exists, and substring_exists over
    random texts whose every window is a non-member. Expected rates come
    from the bits actually set in the filter.
    """

    def __init__(self, bloom_filter: BloomFilter, members: Iterable[str],
                 rng: Optional[random.Random] = None):
        self.filter = bloom_filter
        self.members = set(members)
        self.rng = rng or random.Random()
        self.statistics = BloomStatistics(bloom_filter)

    def _random_text(self, length: int) -> str:
        return ''.join(self.rng.choices(ALPHABET, k=length))

    def measure_exists(self, num_samples: int = 10000,
                       min_len: int = 3, max_len: int = 15) -> Measurement:
        """Test random keys of min_len..max_len characters with exists."""
        tested = 0
        accepted = 0
        for _ in range(num_samples):
            key = self._random_text(self.rng.randint(min_len, max_len))
            if key in self.members:
                continue
            tested += 1
            accepted += self.filter.exists(key)
        return Measurement(tested, accepted,
                           self.statistics.observed_false_positive_rate())

    def measure_substring_exists(self, num_samples: int = 1000,
                                 text_length: int = 64,
                                 substring_length: int = 8) -> Measurement:
        """Scan random texts of text_length for windows of substring_length.

        Texts with a member among their windows are skipped, so every
        accepted text is a false positive.
        """
        window_count = max(0, text_length - substring_length + 1)
        tested = 0
        accepted = 0
        for _ in range(num_samples):
            text = self._random_text(text_length)
            if any(text[i:i + substring_length] in self.members
                   for i in range(window_count)):
                continue
            tested += 1
            accepted += self.filter.substring_exists(text, substring_length)
        return Measurement(tested, accepted,
                           self.statistics.substring_false_positive_rate(window_count))

    def print_report(self, num_samples: int = 10000, text_length: int = 64,
                     substring_length: int = 8):
        """Measure both queries and print measured against expected rates."""
        by_key = self.measure_exists(num_samples)
        by_window = self.measure_substring_exists(
            max(1, num_samples // 10), text_length, substring_length)

        print(f"\n=== FALSE POSITIVES ({len(self.filter.hash_functions)} hashes, "
              f"{self.filter.fill_rate * 100:.2f}% full) ===")
        for label, result in (("exists", by_key),
                              (f"substring_exists({text_length}/{substring_length})",
                               by_window)):
            print(f"{label:<28} {result.false_positives:>7,} of {result.samples:<7,} "
                  f"measured {result.rate * 100:8.4f}%  "
                  f"expected {result.expected_rate * 100:8.4f}%")
        return by_key, by_window
