"""Tests for the cipher engine registry."""

import pytest

from cipherchain.core.exceptions import EngineNotFoundError
from cipherchain.models.schemas import CipherFamily, CipherType, KeyShape
from cipherchain.services.engines import registry as registry_module
from cipherchain.services.engines.keys import AffineKey, ShiftKey
from cipherchain.services.engines.registry import EngineRegistry


class TestCipherRegistry:
    """Test the cipher registry."""

    @pytest.fixture
    def registry(self):
        return EngineRegistry()

    def test_all_ciphers_registered(self):
        """Verify all expected ciphers are registered."""
        registered = EngineRegistry.list_registered()

        expected = [
            CipherType.CAESAR,
            CipherType.AFFINE,
            CipherType.MONOALPHABETIC,
            CipherType.AES,
        ]

        for cipher_type in expected:
            assert cipher_type in registered, f"{cipher_type} not registered"

    def test_get_engines_by_family(self, registry):
        classical = registry.get_engines_by_family(CipherFamily.CLASSICAL)
        modern = registry.get_engines_by_family(CipherFamily.MODERN)

        assert len(classical) == 3  # Caesar, Affine, Monoalphabetic
        assert [engine.cipher_type for engine in modern] == [CipherType.AES]

    def test_get_engine_by_string(self, registry):
        engine = registry.get_engine("caesar")
        assert engine is not None
        assert engine.cipher_type == CipherType.CAESAR

    def test_engine_instances_are_cached(self, registry):
        assert registry.get_engine(CipherType.AES) is EngineRegistry().get_engine("aes")

    def test_unknown_engine(self, registry):
        assert registry.get_engine("enigma") is None
        assert not EngineRegistry.is_registered("enigma")
        assert EngineRegistry.is_registered("affine")

    def test_lookup_unknown_raises(self, registry):
        with pytest.raises(EngineNotFoundError) as exc_info:
            registry.lookup("enigma")
        assert exc_info.value.details["engine_name"] == "enigma"
        assert exc_info.value.details["algorithm"] == "enigma"

    def test_lookup_error_is_lookup_error(self):
        with pytest.raises(LookupError):
            registry_module.lookup_algorithm("enigma")

    @pytest.mark.parametrize(
        "cipher_type,shape",
        [
            (CipherType.CAESAR, KeyShape.SHIFT),
            (CipherType.AFFINE, KeyShape.AFFINE),
            (CipherType.MONOALPHABETIC, KeyShape.PERMUTATION),
            (CipherType.AES, KeyShape.BYTE_KEY),
        ],
    )
    def test_describe(self, registry, cipher_type, shape):
        info = registry.lookup(cipher_type).describe()
        assert info.id == cipher_type
        assert info.key_shape == shape
        assert info.name
        assert info.description
        assert info.weaknesses
        assert info.key_space
        assert info.historical_use

    def test_default_and_random_keys_are_valid(self, registry):
        for engine in registry.get_all_engines():
            assert engine.validate_key(engine.default_key())
            assert engine.validate_key(engine.generate_random_key())


class TestRegistryFunctions:
    """Test the module-level convenience functions."""

    def test_default_key(self):
        assert registry_module.default_key("caesar") == ShiftKey(3)
        assert registry_module.default_key("affine") == AffineKey(5, 8)

    def test_validate_key(self):
        assert registry_module.validate_key("affine", {"a": 5, "b": 8})
        assert not registry_module.validate_key("affine", {"a": 4, "b": 1})

    def test_random_key(self):
        key = registry_module.random_key("aes")
        assert registry_module.validate_key("aes", key)
