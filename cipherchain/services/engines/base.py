from abc import ABC, abstractmethod
from typing import Any, ClassVar

from cipherchain.core.exceptions import ValidationError
from cipherchain.models.schemas import AlgorithmInfo, CipherFamily, CipherType, KeyShape
from cipherchain.services.engines.keys import KeyValue


class CipherEngine(ABC):
    """
    Abstract base class for all cipher engines.

    Each cipher implementation must provide:
    - encrypt(): Transform plaintext with a key
    - decrypt(): Exact inverse of encrypt() for the same key
    - default_key(): The key a fresh pipeline step starts with
    - generate_random_key(): A fresh random valid key
    - summarize_key(): A short key description safe to show to others

    Keys may be passed as typed KeyValue variants or as the raw
    JSON-friendly values accepted by the variant's parse().
    """

    # Cipher metadata
    name: str
    cipher_type: CipherType
    cipher_family: CipherFamily
    key_shape: KeyShape
    key_class: ClassVar[type]
    description: str
    weaknesses: ClassVar[tuple[str, ...]] = ()
    key_space: str
    historical_use: str

    @abstractmethod
    def encrypt(self, plaintext: str, key: KeyValue | Any) -> str:
        """
        Encrypt plaintext with the given key.

        Args:
            plaintext: The plaintext to encrypt
            key: The encryption key

        Returns:
            Ciphertext
        """
        pass

    @abstractmethod
    def decrypt(self, ciphertext: str, key: KeyValue | Any) -> str:
        """
        Decrypt ciphertext with the given key.

        Args:
            ciphertext: The ciphertext to decrypt
            key: The decryption key

        Returns:
            Plaintext
        """
        pass

    @abstractmethod
    def default_key(self) -> KeyValue:
        """
        Key used to seed a new pipeline step.

        Returns:
            A valid key for this cipher
        """
        pass

    @abstractmethod
    def generate_random_key(self) -> KeyValue:
        """
        Generate a random valid key for this cipher.

        Returns:
            A randomly generated key
        """
        pass

    @abstractmethod
    def summarize_key(self, key: KeyValue | Any) -> str:
        """
        Describe a key without disclosing all of it.

        Args:
            key: The key to describe

        Returns:
            Human-readable summary
        """
        pass

    def parse_key(self, key: KeyValue | Any) -> KeyValue:
        """
        Coerce a key into this engine's typed key variant.

        Raises:
            ValidationError: If the key cannot be interpreted at all
        """
        try:
            return self.key_class.parse(key)
        except (ValueError, TypeError) as e:
            raise ValidationError(
                f"Invalid key format for '{self.cipher_type.value}': {e}",
                {"algorithm": self.cipher_type.value},
            ) from e

    def validate_key(self, key: KeyValue | Any) -> bool:
        """Validate that a key is acceptable for this cipher."""
        try:
            parsed = self.key_class.parse(key)
        except (ValueError, TypeError):
            return False
        return parsed.is_valid()

    def describe(self) -> AlgorithmInfo:
        """Build the read-only descriptor for this engine."""
        return AlgorithmInfo(
            id=self.cipher_type,
            name=self.name,
            family=self.cipher_family,
            key_shape=self.key_shape,
            description=self.description,
            weaknesses=list(self.weaknesses),
            key_space=self.key_space,
            historical_use=self.historical_use,
        )
