import random
from typing import Any, ClassVar

from cipherchain.core.exceptions import NonInvertibleKeyError
from cipherchain.models.schemas import CipherFamily, CipherType, KeyShape
from cipherchain.services.engines.base import CipherEngine
from cipherchain.services.engines.classical.alphabet import map_letters
from cipherchain.services.engines.keys import AffineKey
from cipherchain.services.engines.registry import EngineRegistry
from cipherchain.services.primitives.arithmetic import is_coprime, mod_inverse


@EngineRegistry.register
class AffineEngine(CipherEngine):
    """
    Affine cipher engine.

    The Affine cipher encrypts using the formula: E(x) = (ax + b) mod 26
    where 'a' must be coprime with 26 (valid values: 1, 3, 5, 7, 9, 11, 15, 17, 19, 21, 23, 25).

    Decryption uses: D(y) = a^(-1) * (y - b) mod 26
    where a^(-1) is the modular multiplicative inverse of a mod 26.
    """

    name = "Affine Cipher"
    cipher_type = CipherType.AFFINE
    cipher_family = CipherFamily.CLASSICAL
    key_shape = KeyShape.AFFINE
    key_class = AffineKey
    description = (
        "A substitution cipher where each letter is transformed using the "
        "function (ax + b) mod 26."
    )
    weaknesses: ClassVar[tuple[str, ...]] = (
        "Only 312 possible keys (a must be coprime with 26)",
        "Still preserves letter frequency patterns",
        "Vulnerable to frequency analysis",
    )
    key_space = (
        "12 x 26 = 312 possible keys (a has 12 possible values coprime with 26, "
        "b has 26 possible values)"
    )
    historical_use = (
        "A historical cipher used primarily for educational purposes in "
        "understanding modular arithmetic."
    )

    # Valid 'a' values (coprime with 26)
    VALID_A: ClassVar[tuple[int, ...]] = (1, 3, 5, 7, 9, 11, 15, 17, 19, 21, 23, 25)

    def encrypt(self, plaintext: str, key: AffineKey | Any) -> str:
        """Encrypt using E(x) = (ax + b) mod 26."""
        affine = self.parse_key(key)

        if not is_coprime(affine.a):
            raise NonInvertibleKeyError(affine.a)

        return map_letters(plaintext, lambda x: affine.a * x + affine.b)

    def decrypt(self, ciphertext: str, key: AffineKey | Any) -> str:
        """Decrypt using D(y) = a^(-1) * (y - b) mod 26."""
        affine = self.parse_key(key)
        a_inv = mod_inverse(affine.a)

        return map_letters(ciphertext, lambda y: a_inv * (y - affine.b + 26))

    def default_key(self) -> AffineKey:
        return AffineKey(a=5, b=8)

    def generate_random_key(self) -> AffineKey:
        """Generate random valid (a, b) values."""
        return AffineKey(a=random.choice(self.VALID_A), b=random.randint(0, 25))

    def summarize_key(self, key: AffineKey | Any) -> str:
        affine = self.parse_key(key)
        return f"a: {affine.a}, b: {affine.b}"
