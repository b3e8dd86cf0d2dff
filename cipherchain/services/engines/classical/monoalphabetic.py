import random
from typing import Any, ClassVar

from cipherchain.core.exceptions import ValidationError
from cipherchain.models.schemas import CipherFamily, CipherType, KeyShape
from cipherchain.services.engines.base import CipherEngine
from cipherchain.services.engines.classical.alphabet import ALPHABET, map_letters
from cipherchain.services.engines.keys import PermutationKey
from cipherchain.services.engines.registry import EngineRegistry


@EngineRegistry.register
class MonoalphabeticEngine(CipherEngine):
    """
    Monoalphabetic substitution engine.

    Each letter is replaced with another letter according to a fixed
    permutation of the alphabet, giving 26! possible keys.
    """

    name = "Monoalphabetic Substitution"
    cipher_type = CipherType.MONOALPHABETIC
    cipher_family = CipherFamily.CLASSICAL
    key_shape = KeyShape.PERMUTATION
    key_class = PermutationKey
    description = (
        "A substitution cipher where each letter is replaced with another "
        "letter according to a fixed mapping."
    )
    weaknesses: ClassVar[tuple[str, ...]] = (
        "Vulnerable to frequency analysis",
        "Common letter patterns remain recognizable",
        "Digraphs and trigraphs (2-3 letter combinations) reveal patterns",
    )
    key_space = "26! possible keys (approximately 4 x 10^26)"
    historical_use = (
        "Used historically in various forms including newspapers (cryptograms) "
        "and during wartime communications."
    )

    def encrypt(self, plaintext: str, key: PermutationKey | Any) -> str:
        """Encrypt using the substitution key."""
        letters = self._checked_letters(key)
        forward = [ALPHABET.index(letter) for letter in letters]
        return map_letters(plaintext, lambda p: forward[p])

    def decrypt(self, ciphertext: str, key: PermutationKey | Any) -> str:
        """Decrypt by locating each letter within the key."""
        letters = self._checked_letters(key)
        inverse = [letters.index(letter) for letter in ALPHABET]
        return map_letters(ciphertext, lambda y: inverse[y])

    def default_key(self) -> PermutationKey:
        """A fresh random permutation; there is no fixed default."""
        return self.generate_random_key()

    def generate_random_key(self) -> PermutationKey:
        """Generate a random permutation of the alphabet (Fisher-Yates)."""
        letters = list(ALPHABET)
        random.shuffle(letters)
        return PermutationKey("".join(letters))

    def summarize_key(self, key: PermutationKey | Any) -> str:
        return f"Key: {self.parse_key(key).letters[:6]}..."

    def _checked_letters(self, key: PermutationKey | Any) -> str:
        permutation = self.parse_key(key)
        if not permutation.is_valid():
            raise ValidationError(
                "Invalid substitution key: must be a 26-letter permutation",
                {"algorithm": self.cipher_type.value},
            )
        return permutation.letters
