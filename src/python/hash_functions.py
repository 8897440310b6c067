"""Hash function implementations for Bloom filter.

Every hash function takes the bytes to hash plus two optional rolling
arguments: the hash of the previous window and the byte that slid out of
its front. Functions that cannot roll simply ignore them.
"""
from typing import Callable, List, Optional

HashFunction = Callable[[bytes, Optional[int], Optional[int]], int]

# Hash values wrap at 64 bits on both the rolling and the full path.
HASH_MASK = 0xFFFFFFFFFFFFFFFF

DEFAULT_PRIMES = (11, 17, 23)


def make_polynomial_hash_function(prime: int) -> HashFunction:
    """Return a Rabin fingerprint hash function with base `prime`.

    Without rolling arguments the hash of b[0..n) is
    sum(b[i] * prime ** (n - 1 - i)). Given the previous window's hash and
    the byte leaving its front, the new window's hash is
    (previous - outgoing * prime ** (n - 1)) * prime + b[n - 1],
    which equals the full computation over the same window.
    """
    def polynomial_hash(data: bytes, previous_hash: Optional[int] = None,
                        outgoing_byte: Optional[int] = None) -> int:
        if previous_hash is not None and outgoing_byte is not None:
            leading = outgoing_byte * pow(prime, len(data) - 1, HASH_MASK + 1)
            return ((previous_hash - leading) * prime + data[-1]) & HASH_MASK

        hash_val = 0
        for byte in data:
            hash_val = (hash_val * prime + byte) & HASH_MASK
        return hash_val

    polynomial_hash.prime = prime
    polynomial_hash.__name__ = f"polynomial_hash_{prime}"
    return polynomial_hash


def default_hash_functions() -> List[HashFunction]:
    """Return a fresh list of the default three-function family."""
    return [make_polynomial_hash_function(p) for p in DEFAULT_PRIMES]


def hash_fnv1a(data: bytes, previous_hash: Optional[int] = None,
               outgoing_byte: Optional[int] = None) -> int:
    """FNV-1a hash function. Does not roll."""
    hash_val = 2166136261
    for byte in data:
        hash_val ^= byte
        hash_val = (hash_val * 16777619) & 0xFFFFFFFF
    return hash_val


def hash_djb2(data: bytes, previous_hash: Optional[int] = None,
              outgoing_byte: Optional[int] = None) -> int:
    """DJB2 hash function. Does not roll."""
    hash_val = 5381
    for byte in data:
        hash_val = ((hash_val << 5) + hash_val + byte) & 0xFFFFFFFF
    return hash_val
