import random
import string
from typing import Any, ClassVar

from cipherchain.core.exceptions import KeyLengthError
from cipherchain.models.schemas import CipherFamily, CipherType, KeyShape
from cipherchain.services.engines.base import CipherEngine
from cipherchain.services.engines.keys import ByteKey
from cipherchain.services.engines.registry import EngineRegistry
from cipherchain.services.primitives import rijndael
from cipherchain.services.primitives.codecs import (
    bytes_to_hex,
    bytes_to_text,
    hex_to_bytes,
    text_to_bytes,
)


@EngineRegistry.register
class AESEngine(CipherEngine):
    """
    AES engine over text.

    Encryption turns UTF-8 text into lowercase hex ciphertext; decryption
    takes hex back to text. Blocks are processed independently (no IV, no
    chaining), see the rijndael module.
    """

    name = "AES (Advanced Encryption Standard)"
    cipher_type = CipherType.AES
    cipher_family = CipherFamily.MODERN
    key_shape = KeyShape.BYTE_KEY
    key_class = ByteKey
    description = (
        "A symmetric block cipher adopted worldwide for secure communications. "
        "It processes data in 128-bit blocks with key sizes of 128, 192, or 256 bits."
    )
    weaknesses: ClassVar[tuple[str, ...]] = (
        "Implementation vulnerabilities such as side-channel attacks",
        "Key management complexity",
        "Independent block processing leaks repeated plaintext blocks",
    )
    key_space = "Up to 2^256 possible keys with a 256-bit key"
    historical_use = (
        "Established by NIST in 2001 as a replacement for DES. Now widely used "
        "in government and commercial applications worldwide."
    )

    DEFAULT_KEY: ClassVar[bytes] = b"AESSecureKey1234"
    RANDOM_KEY_CHARS: ClassVar[str] = string.ascii_letters + string.digits + "!@#$%^&*()"

    def encrypt(self, plaintext: str, key: ByteKey | Any) -> str:
        """Encrypt text and return hex ciphertext."""
        data = self._key_bytes(key)
        return bytes_to_hex(rijndael.encrypt_message(text_to_bytes(plaintext), data))

    def decrypt(self, ciphertext: str, key: ByteKey | Any) -> str:
        """Decrypt hex ciphertext back to text."""
        data = self._key_bytes(key)
        return bytes_to_text(rijndael.decrypt_message(hex_to_bytes(ciphertext), data))

    def default_key(self) -> ByteKey:
        return ByteKey(self.DEFAULT_KEY)

    def generate_random_key(self, length: int = 16) -> ByteKey:
        """
        Generate a random printable key.

        Args:
            length: Key length in bytes (16, 24 or 32)
        """
        if length not in rijndael.VALID_KEY_LENGTHS:
            raise KeyLengthError(length)
        chars = random.choices(self.RANDOM_KEY_CHARS, k=length)
        return ByteKey("".join(chars).encode("ascii"))

    def summarize_key(self, key: ByteKey | Any) -> str:
        length = len(self.parse_key(key).data)
        return f"Key length: {length} bytes ({length * 8}-bit)"

    def _key_bytes(self, key: ByteKey | Any) -> bytes:
        data = self.parse_key(key).data
        # Fail before touching the payload
        rijndael.key_params(len(data))
        return data
