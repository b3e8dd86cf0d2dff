import random
from typing import Any, ClassVar

from cipherchain.models.schemas import CipherFamily, CipherType, KeyShape
from cipherchain.services.engines.base import CipherEngine
from cipherchain.services.engines.classical.alphabet import map_letters
from cipherchain.services.engines.keys import ShiftKey
from cipherchain.services.engines.registry import EngineRegistry


@EngineRegistry.register
class CaesarEngine(CipherEngine):
    """
    Caesar cipher engine.

    The Caesar cipher is a simple substitution cipher that shifts each letter
    by a fixed amount. Case is preserved and non-letters pass through.
    """

    name = "Caesar Cipher"
    cipher_type = CipherType.CAESAR
    cipher_family = CipherFamily.CLASSICAL
    key_shape = KeyShape.SHIFT
    key_class = ShiftKey
    description = (
        "A substitution cipher where each letter is shifted by a fixed number "
        "of positions."
    )
    weaknesses: ClassVar[tuple[str, ...]] = (
        "Only 25 possible keys (easy to brute force)",
        "Preserves letter frequency patterns",
        "Single letter analysis can reveal patterns",
    )
    key_space = "26 possible keys (shift values 0-25)"
    historical_use = (
        "Named after Julius Caesar, who used it for private correspondence "
        "with a shift of 3."
    )

    DEFAULT_SHIFT: ClassVar[int] = 3

    def encrypt(self, plaintext: str, key: ShiftKey | Any) -> str:
        """Encrypt plaintext with the given shift."""
        shift = self._normalize(self.parse_key(key).shift)
        return map_letters(plaintext, lambda x: x + shift)

    def decrypt(self, ciphertext: str, key: ShiftKey | Any) -> str:
        """Decrypt by encrypting with the complementary shift."""
        shift = self._normalize(self.parse_key(key).shift)
        return self.encrypt(ciphertext, ShiftKey(26 - shift))

    def default_key(self) -> ShiftKey:
        return ShiftKey(self.DEFAULT_SHIFT)

    def generate_random_key(self) -> ShiftKey:
        """Generate a random shift in 0-25."""
        return ShiftKey(random.randint(0, 25))

    def summarize_key(self, key: ShiftKey | Any) -> str:
        return f"Shift value: {self.parse_key(key).shift}"

    @staticmethod
    def _normalize(shift: int) -> int:
        """Bring any integer shift into 0-25."""
        return ((shift % 26) + 26) % 26
