import logging
from typing import Any, Type

from cipherchain.core.exceptions import EngineNotFoundError
from cipherchain.models.schemas import CipherFamily, CipherType
from cipherchain.services.engines.base import CipherEngine
from cipherchain.services.engines.keys import KeyValue

logger = logging.getLogger(__name__)


class EngineRegistry:
    """
    Registry for cipher engines.

    Engines register themselves at import time; afterwards the catalog is
    only read. Lookup is by type or family.
    """

    _engines: dict[CipherType, Type[CipherEngine]] = {}
    _instances: dict[CipherType, CipherEngine] = {}

    @classmethod
    def register(cls, engine_class: Type[CipherEngine]) -> Type[CipherEngine]:
        """
        Register a cipher engine class.

        Can be used as a decorator:
            @EngineRegistry.register
            class CaesarEngine(CipherEngine):
                ...

        Args:
            engine_class: The engine class to register

        Returns:
            The engine class (for decorator usage)
        """
        cls._engines[engine_class.cipher_type] = engine_class
        logger.debug("Registered cipher engine %s", engine_class.cipher_type.value)
        return engine_class

    def get_engine(self, cipher_type: CipherType | str) -> CipherEngine | None:
        """
        Get an engine instance for the specified cipher type.

        Args:
            cipher_type: The type of cipher or its identifier string

        Returns:
            Engine instance or None if not found
        """
        try:
            cipher_type = CipherType(cipher_type)
        except ValueError:
            return None

        if cipher_type not in self._engines:
            return None

        # Lazy instantiation with caching
        if cipher_type not in self._instances:
            self._instances[cipher_type] = self._engines[cipher_type]()

        return self._instances[cipher_type]

    def lookup(self, cipher_type: CipherType | str) -> CipherEngine:
        """
        Get an engine, failing loudly when it does not exist.

        Raises:
            EngineNotFoundError: If no engine is registered under the id
        """
        engine = self.get_engine(cipher_type)
        if engine is None:
            name = cipher_type.value if isinstance(cipher_type, CipherType) else str(cipher_type)
            raise EngineNotFoundError(name)
        return engine

    def get_engines_by_family(self, family: CipherFamily) -> list[CipherEngine]:
        """
        Get all engines belonging to a cipher family.

        Args:
            family: The cipher family

        Returns:
            List of engine instances
        """
        return [
            engine
            for engine in self.get_all_engines()
            if engine.cipher_family == family
        ]

    def get_all_engines(self) -> list[CipherEngine]:
        """
        Get all registered engines.

        Returns:
            List of all engine instances
        """
        return [self.lookup(cipher_type) for cipher_type in self._engines]

    @classmethod
    def list_registered(cls) -> list[CipherType]:
        """
        List all registered cipher types.

        Returns:
            List of registered cipher types
        """
        return list(cls._engines.keys())

    @classmethod
    def is_registered(cls, cipher_type: CipherType | str) -> bool:
        """
        Check if a cipher type is registered.

        Args:
            cipher_type: The cipher type to check

        Returns:
            True if registered
        """
        try:
            return CipherType(cipher_type) in cls._engines
        except ValueError:
            return False


def lookup_algorithm(algorithm_id: CipherType | str) -> CipherEngine:
    """Resolve an algorithm identifier to its engine."""
    return EngineRegistry().lookup(algorithm_id)


def validate_key(algorithm_id: CipherType | str, key: KeyValue | Any) -> bool:
    """Check a key against the validator of the named algorithm."""
    return lookup_algorithm(algorithm_id).validate_key(key)


def default_key(algorithm_id: CipherType | str) -> KeyValue:
    """Default key for a new step of the named algorithm."""
    return lookup_algorithm(algorithm_id).default_key()


def random_key(algorithm_id: CipherType | str) -> KeyValue:
    """Fresh random key for the named algorithm."""
    return lookup_algorithm(algorithm_id).generate_random_key()


# Import engines to trigger registration
def _load_engines() -> None:
    """Load all engine modules to trigger registration."""
    from cipherchain.services.engines.classical import affine, caesar, monoalphabetic  # noqa: F401
    from cipherchain.services.engines.modern import aes  # noqa: F401


# Load engines when module is imported
_load_engines()
