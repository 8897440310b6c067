import hashlib
import random

import pytest

from bloom_filter import BloomFilter
from empirical_validator import EmpiricalValidator, Measurement


def keyed_blake2b(key: bytes):
    """Well-mixed hash function; positions behave like independent draws."""
    def h(data, previous_hash=None, outgoing_byte=None):
        return int.from_bytes(hashlib.blake2b(data, digest_size=8, key=key).digest(), "big")
    return h


@pytest.fixture
def mixed_filter():
    """10,000 bits holding 1,000 members under three keyed blake2b hashes."""
    bf = BloomFilter(10, 1000, [keyed_blake2b(k) for k in (b"a", b"b", b"c")])
    members = [f"member{i}" for i in range(1000)]
    bf.add_all(members)
    return bf, members


class TestMeasurement:
    def test_rate(self) -> None:
        assert Measurement(200, 50, 0.2).rate == 0.25
        assert Measurement(0, 0, 0.0).rate == 0.0


class TestEmpiricalValidator:
    def test_empty_filter_has_no_false_positives(self) -> None:
        validator = EmpiricalValidator(BloomFilter(), [], rng=random.Random(0))
        by_key = validator.measure_exists(500)
        assert by_key.samples == 500
        assert by_key.false_positives == 0
        assert by_key.expected_rate == 0.0

        by_window = validator.measure_substring_exists(50, text_length=20, substring_length=5)
        assert by_window.false_positives == 0

    def test_saturated_filter_accepts_everything(self) -> None:
        bf = BloomFilter(2, 2)
        members = [f"test-{i}" for i in range(10)]
        bf.add_all(members)

        validator = EmpiricalValidator(bf, members, rng=random.Random(1))
        assert validator.measure_exists(200).rate == 1.0
        assert validator.measure_substring_exists(20, 16, 4).rate == 1.0

    def test_members_are_skipped(self, monkeypatch) -> None:
        """Samples that happen to be members are not counted."""
        validator = EmpiricalValidator(BloomFilter(), ["aba"], rng=random.Random(7))
        monkeypatch.setattr(validator, "_random_text", lambda length: "aba")
        assert validator.measure_exists(10).samples == 0
        assert validator.measure_substring_exists(10, 3, 3).samples == 0
        assert validator.measure_substring_exists(10, 3, 2).samples == 10

    def test_exists_rate_matches_fill(self, mixed_filter) -> None:
        bf, members = mixed_filter
        result = EmpiricalValidator(bf, members, rng=random.Random(3)).measure_exists(20000)
        assert 0.01 < result.expected_rate < 0.03
        assert result.rate == pytest.approx(result.expected_rate, abs=0.006)

    def test_substring_rate_matches_window_count(self, mixed_filter) -> None:
        """57 windows per 64-character text compound the single-key rate."""
        bf, members = mixed_filter
        validator = EmpiricalValidator(bf, members, rng=random.Random(4))
        result = validator.measure_substring_exists(2000, text_length=64, substring_length=8)
        single = validator.statistics.observed_false_positive_rate()
        assert result.expected_rate == pytest.approx(1 - (1 - single) ** 57)
        assert result.rate == pytest.approx(result.expected_rate, abs=0.06)

    def test_print_report(self, capsys) -> None:
        validator = EmpiricalValidator(BloomFilter(), [], rng=random.Random(0))
        by_key, by_window = validator.print_report(num_samples=100, text_length=16,
                                                   substring_length=4)
        out = capsys.readouterr().out
        assert "=== FALSE POSITIVES (3 hashes, 0.00% full) ===" in out
        assert "substring_exists(16/4)" in out
        assert by_key.samples == 100
        assert by_window.samples == 10
