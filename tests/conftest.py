import os
import sys

# Add src/python to path so tests can run without installing package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src/python')))

import pytest

from bloom_filter import BloomFilter


@pytest.fixture
def hello_world_filter():
    """Default-sized filter holding "hello" and "world"."""
    bf = BloomFilter()
    bf.add("hello")
    bf.add("world")
    return bf
