import math

import pytest

from bloom_config import BloomConfig, DEFAULT_BITS_PER_ELEMENT, DEFAULT_ESTIMATED_ELEMENT_COUNT


class TestBloomConfig:
    def test_defaults(self) -> None:
        config = BloomConfig()
        assert config.bits_per_element == DEFAULT_BITS_PER_ELEMENT == 10
        assert config.estimated_element_count == DEFAULT_ESTIMATED_ELEMENT_COUNT == 50000
        assert config.size_bits == 500000
        assert config.size_bytes == 62500
        assert config.num_hash_functions == 3

    def test_size_bytes_rounds_up(self) -> None:
        assert BloomConfig(3, 3).size_bytes == 2

    def test_is_frozen(self) -> None:
        with pytest.raises(AttributeError):
            BloomConfig().bits_per_element = 5

    def test_optimal_k(self) -> None:
        assert BloomConfig().optimal_k() == pytest.approx(10 * math.log(2))

    def test_expected_false_positive_rate(self) -> None:
        """Roughly 1-2% at ten bits per element with three functions."""
        rate = BloomConfig().expected_false_positive_rate()
        assert 0.01 < rate < 0.02
        assert BloomConfig(20).expected_false_positive_rate() < rate

    def test_print_summary(self, capsys) -> None:
        BloomConfig().print_summary()
        out = capsys.readouterr().out
        assert "BLOOM FILTER SIZING" in out
        assert "500,000" in out
        assert "Hash functions: 3" in out

    def test_hash_count_is_configurable(self) -> None:
        """Fewer hash functions change the expected rate at capacity."""
        single = BloomConfig(num_hash_functions=1)
        assert single.num_hash_functions == 1
        assert single.expected_false_positive_rate() == pytest.approx(1 - math.exp(-0.1))
