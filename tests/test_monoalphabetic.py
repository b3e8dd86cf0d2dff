"""Tests for monoalphabetic substitution engine."""

import string

import pytest

from cipherchain.core.exceptions import ValidationError
from cipherchain.services.engines.classical.monoalphabetic import MonoalphabeticEngine
from cipherchain.services.engines.keys import PermutationKey

QWERTY = "QWERTYUIOPASDFGHJKLZXCVBNM"


class TestMonoalphabeticEngine:
    """Test suite for monoalphabetic substitution engine."""

    @pytest.fixture
    def engine(self):
        return MonoalphabeticEngine()

    def test_encrypt_with_known_key(self, engine):
        assert engine.encrypt("ABC", QWERTY) == "QWE"
        assert engine.encrypt("Hello, World!", QWERTY) == "Itssg, Vgksr!"

    def test_decrypt_with_known_key(self, engine):
        assert engine.decrypt("Itssg, Vgksr!", QWERTY) == "Hello, World!"

    def test_identity_key(self, engine):
        assert engine.encrypt("Same text", string.ascii_uppercase) == "Same text"

    def test_lowercase_key_is_accepted(self, engine):
        assert engine.encrypt("ABC", QWERTY.lower()) == "QWE"

    def test_roundtrip_random_keys(self, engine):
        text = "Pack my box with five dozen liquor jugs."
        for _ in range(20):
            key = engine.generate_random_key()
            assert engine.decrypt(engine.encrypt(text, key), key) == text

    def test_generate_random_key_is_permutation(self, engine):
        for _ in range(20):
            key = engine.generate_random_key()
            assert isinstance(key, PermutationKey)
            assert sorted(key.letters) == list(string.ascii_uppercase)

    def test_default_key_is_valid(self, engine):
        assert engine.validate_key(engine.default_key())

    def test_validate_key(self, engine):
        assert engine.validate_key(QWERTY)
        assert not engine.validate_key(QWERTY[:25])
        assert not engine.validate_key("A" * 26)
        assert not engine.validate_key(QWERTY[:25] + "1")
        assert not engine.validate_key(26)

    def test_invalid_key_raises(self, engine):
        with pytest.raises(ValidationError):
            engine.encrypt("ABC", QWERTY[:25])
        with pytest.raises(ValidationError):
            engine.decrypt("ABC", "Q" + QWERTY[:25])

    def test_summarize_key(self, engine):
        assert engine.summarize_key(QWERTY) == "Key: QWERTY..."
