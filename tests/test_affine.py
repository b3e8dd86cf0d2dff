"""Tests for Affine cipher engine."""

import pytest

from cipherchain.core.exceptions import NonInvertibleKeyError, ValidationError
from cipherchain.services.engines.classical.affine import AffineEngine
from cipherchain.services.engines.keys import AffineKey
from cipherchain.services.primitives.arithmetic import is_coprime, mod_inverse


class TestAffineEngine:
    """Test suite for Affine cipher engine."""

    @pytest.fixture
    def engine(self):
        return AffineEngine()

    def test_known_encryption(self, engine):
        # E(x) = 5x + 8: A(0) -> I(8), F(5) -> H(33 % 26 = 7)
        assert engine.encrypt("AF", AffineKey(5, 8)) == "IH"
        assert engine.encrypt("KHOOR", {"a": 5, "b": 8}) == "GRAAP"

    def test_known_decryption(self, engine):
        assert engine.decrypt("GRAAP", {"a": 5, "b": 8}) == "KHOOR"

    def test_roundtrip_every_valid_key(self, engine):
        """All 12 x 26 keys invert exactly."""
        text = "The Quick Brown Fox, 42!"
        for a in AffineEngine.VALID_A:
            for b in range(26):
                key = AffineKey(a, b)
                assert engine.decrypt(engine.encrypt(text, key), key) == text

    def test_identity_key(self, engine):
        assert engine.encrypt("Hello", AffineKey(1, 0)) == "Hello"

    def test_key_formats(self, engine):
        expected = engine.encrypt("HELLO", AffineKey(5, 8))
        assert engine.encrypt("HELLO", "5,8") == expected
        assert engine.encrypt("HELLO", "5, 8") == expected
        assert engine.encrypt("HELLO", [5, 8]) == expected

    def test_validate_key(self, engine):
        assert engine.validate_key({"a": 5, "b": 8})
        assert not engine.validate_key({"a": 4, "b": 1})
        assert not engine.validate_key({"a": 13, "b": 1})
        assert not engine.validate_key({"a": 5, "b": 26})
        assert not engine.validate_key({"a": 5})
        assert not engine.validate_key("5")

    def test_non_invertible_key_raises(self, engine):
        with pytest.raises(NonInvertibleKeyError):
            engine.encrypt("HELLO", {"a": 4, "b": 1})
        with pytest.raises(NonInvertibleKeyError):
            engine.decrypt("HELLO", {"a": 2, "b": 0})

    def test_non_invertible_is_validation_error(self, engine):
        with pytest.raises(ValidationError) as exc_info:
            engine.encrypt("HELLO", {"a": 13, "b": 0})
        assert exc_info.value.details["a"] == 13

    def test_default_key(self, engine):
        assert engine.default_key() == AffineKey(5, 8)

    def test_generate_random_key(self, engine):
        for _ in range(50):
            key = engine.generate_random_key()
            assert key.a in AffineEngine.VALID_A
            assert 0 <= key.b <= 25
            assert engine.validate_key(key)

    def test_summarize_key(self, engine):
        assert engine.summarize_key({"a": 5, "b": 8}) == "a: 5, b: 8"


class TestModularArithmetic:
    """Test the modular helpers behind the Affine cipher."""

    def test_valid_multipliers_are_coprime(self):
        coprime = [a for a in range(1, 26) if is_coprime(a)]
        assert tuple(coprime) == AffineEngine.VALID_A

    @pytest.mark.parametrize("a,expected", [(1, 1), (3, 9), (5, 21), (7, 15), (25, 25)])
    def test_mod_inverse(self, a, expected):
        assert mod_inverse(a) == expected
        assert (a * expected) % 26 == 1

    def test_mod_inverse_other_modulus(self):
        assert mod_inverse(3, 11) == 4

    def test_mod_inverse_non_coprime(self):
        with pytest.raises(NonInvertibleKeyError):
            mod_inverse(13)
