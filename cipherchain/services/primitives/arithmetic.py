"""Modular arithmetic helpers shared by the classical ciphers."""

import math

from cipherchain.core.exceptions import NonInvertibleKeyError

ALPHABET_SIZE = 26


def is_coprime(a: int, m: int = ALPHABET_SIZE) -> bool:
    """Return True if a and m share no factor other than 1."""
    return math.gcd(a, m) == 1


def mod_inverse(a: int, m: int = ALPHABET_SIZE) -> int:
    """
    Find the modular multiplicative inverse of a modulo m.

    Searches [1, m) for the value i with (a * i) mod m == 1.

    Args:
        a: Value to invert
        m: Modulus

    Returns:
        The inverse of a modulo m

    Raises:
        NonInvertibleKeyError: If a and m are not coprime
    """
    if not is_coprime(a, m):
        raise NonInvertibleKeyError(a, m)

    for i in range(1, m):
        if (a * i) % m == 1:
            return i

    # Only reachable for m == 1, where every value is congruent to 0
    raise NonInvertibleKeyError(a, m)
