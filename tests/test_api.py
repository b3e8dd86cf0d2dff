"""Tests for the HTTP API."""

import httpx
import pytest
from fastapi.testclient import TestClient

from cipherchain.dependencies import get_gemini_client
from cipherchain.main import app
from cipherchain.services.ai.gemini_client import GeminiClient

PREFIX = "/api/v1"


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


class TestAlgorithmEndpoints:
    """Test the algorithm catalog endpoints."""

    def test_list_algorithms(self, client):
        response = client.get(f"{PREFIX}/algorithms")

        assert response.status_code == 200
        ids = {item["id"] for item in response.json()["algorithms"]}
        assert ids == {"caesar", "affine", "monoalphabetic", "aes"}

    def test_get_algorithm(self, client):
        response = client.get(f"{PREFIX}/algorithms/affine")

        assert response.status_code == 200
        data = response.json()
        assert data["family"] == "classical"
        assert data["key_shape"] == "affine"

    def test_unknown_algorithm_is_404(self, client):
        response = client.get(f"{PREFIX}/algorithms/enigma")

        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "EngineNotFoundError"

    def test_default_key(self, client):
        response = client.get(f"{PREFIX}/algorithms/affine/default-key")

        assert response.status_code == 200
        assert response.json() == {"algorithm": "affine", "key": {"a": 5, "b": 8}}

    def test_random_aes_key_length(self, client):
        response = client.get(f"{PREFIX}/algorithms/aes/random-key", params={"key_length": 32})

        assert response.status_code == 200
        assert len(response.json()["key"]) == 32

    def test_random_aes_key_bad_length(self, client):
        response = client.get(f"{PREFIX}/algorithms/aes/random-key", params={"key_length": 20})

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "KeyLengthError"

    def test_random_key_ignores_length_for_classical(self, client):
        response = client.get(f"{PREFIX}/algorithms/caesar/random-key", params={"key_length": 32})

        assert response.status_code == 200
        assert 0 <= response.json()["key"] <= 25

    @pytest.mark.parametrize(
        "algorithm,key,valid",
        [
            ("caesar", 3, True),
            ("caesar", 30, False),
            ("caesar", True, False),
            ("affine", {"a": 5, "b": 8}, True),
            ("affine", {"a": 4, "b": 1}, False),
            ("monoalphabetic", "QWERTYUIOPASDFGHJKLZXCVBNM", True),
            ("monoalphabetic", "QWERTY", False),
            ("aes", "AESSecureKey1234", True),
            ("aes", "short", False),
        ],
    )
    def test_validate_key(self, client, algorithm, key, valid):
        response = client.post(f"{PREFIX}/algorithms/{algorithm}/validate", json={"key": key})

        assert response.status_code == 200
        assert response.json()["valid"] is valid


class TestPipelineEndpoint:
    """Test the pipeline endpoint."""

    @pytest.fixture
    def steps(self):
        return [
            {"algorithm": "caesar", "key": 3},
            {"algorithm": "affine", "key": {"a": 5, "b": 8}},
        ]

    def test_encrypt(self, client, steps):
        response = client.post(f"{PREFIX}/pipeline", json={"text": "HELLO", "steps": steps})

        assert response.status_code == 200
        data = response.json()
        assert data["output"] == "GRAAP"
        assert data["mode"] == "encrypt"
        assert [stage["output"] for stage in data["stages"]] == ["KHOOR", "GRAAP"]

    def test_decrypt(self, client, steps):
        response = client.post(
            f"{PREFIX}/pipeline",
            json={"text": "GRAAP", "steps": steps, "mode": "decrypt"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["output"] == "HELLO"
        assert [stage["step_index"] for stage in data["stages"]] == [1, 0]

    def test_aes_roundtrip(self, client):
        steps = [{"algorithm": "aes", "key": {"key": "00" * 32, "is_hex": True}}]

        encrypted = client.post(f"{PREFIX}/pipeline", json={"text": "over the wire", "steps": steps})
        assert encrypted.status_code == 200

        decrypted = client.post(
            f"{PREFIX}/pipeline",
            json={"text": encrypted.json()["output"], "steps": steps, "mode": "decrypt"},
        )
        assert decrypted.json()["output"] == "over the wire"

    def test_unknown_algorithm_is_404(self, client):
        response = client.post(
            f"{PREFIX}/pipeline",
            json={"text": "HELLO", "steps": [{"algorithm": "enigma", "key": 1}]},
        )

        assert response.status_code == 404
        assert response.json()["detail"]["details"]["step_index"] == 0

    def test_invalid_key_is_400(self, client):
        response = client.post(
            f"{PREFIX}/pipeline",
            json={
                "text": "HELLO",
                "steps": [
                    {"algorithm": "caesar", "key": 3},
                    {"algorithm": "affine", "key": {"a": 4, "b": 1}},
                ],
            },
        )

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["error"] == "KeyValidationError"
        assert detail["details"] == {"algorithm": "affine", "step_index": 1}

    def test_transform_failure_is_400(self, client):
        response = client.post(
            f"{PREFIX}/pipeline",
            json={
                "text": "zz",
                "steps": [{"algorithm": "aes", "key": "AESSecureKey1234"}],
                "mode": "decrypt",
            },
        )

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "EncodingError"

    def test_large_aes_roundtrip(self, client):
        """Ciphertext longer than the plaintext limit still decrypts."""
        plaintext = "A" * 60_000
        steps = [{"algorithm": "aes", "key": "AESSecureKey1234"}]

        encrypted = client.post(f"{PREFIX}/pipeline", json={"text": plaintext, "steps": steps})
        assert encrypted.status_code == 200
        ciphertext = encrypted.json()["output"]
        assert len(ciphertext) > 100_000

        decrypted = client.post(
            f"{PREFIX}/pipeline",
            json={"text": ciphertext, "steps": steps, "mode": "decrypt"},
        )
        assert decrypted.status_code == 200
        assert decrypted.json()["output"] == plaintext

    def test_plaintext_over_limit_is_400(self, client, steps):
        response = client.post(
            f"{PREFIX}/pipeline",
            json={"text": "A" * 100_001, "steps": steps},
        )

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "InputTooLongError"

    def test_boolean_key_is_rejected(self, client):
        response = client.post(
            f"{PREFIX}/pipeline",
            json={"text": "ABC", "steps": [{"algorithm": "caesar", "key": True}]},
        )

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "KeyValidationError"

    def test_invalid_mode_is_422(self, client, steps):
        response = client.post(
            f"{PREFIX}/pipeline",
            json={"text": "HELLO", "steps": steps, "mode": "sideways"},
        )

        assert response.status_code == 422


class TestAESEndpoints:
    """Test the standalone AES endpoints."""

    def test_roundtrip(self, client):
        encrypted = client.post(
            f"{PREFIX}/aes/encrypt",
            json={"text": "Hello AES", "key": "AESSecureKey1234"},
        )
        assert encrypted.status_code == 200
        ciphertext = encrypted.json()["ciphertext"]
        assert len(ciphertext) == 32

        decrypted = client.post(
            f"{PREFIX}/aes/decrypt",
            json={"ciphertext": ciphertext, "key": "AESSecureKey1234"},
        )
        assert decrypted.status_code == 200
        assert decrypted.json()["text"] == "Hello AES"

    def test_hex_key_full_block(self, client):
        # One full block of plaintext gains a whole block of padding
        response = client.post(
            f"{PREFIX}/aes/encrypt",
            json={
                "text": "0123456789abcdef",
                "key": "000102030405060708090a0b0c0d0e0f",
                "key_is_hex": True,
            },
        )

        assert response.status_code == 200
        assert len(response.json()["ciphertext"]) == 64

    def test_large_multibyte_roundtrip(self, client):
        """Two-byte characters give hex more than four times the text length."""
        text = "é" * 60_000
        encrypted = client.post(
            f"{PREFIX}/aes/encrypt",
            json={"text": text, "key": "AESSecureKey1234"},
        )
        assert encrypted.status_code == 200
        ciphertext = encrypted.json()["ciphertext"]
        assert len(ciphertext) == 240_032

        decrypted = client.post(
            f"{PREFIX}/aes/decrypt",
            json={"ciphertext": ciphertext, "key": "AESSecureKey1234"},
        )
        assert decrypted.status_code == 200
        assert decrypted.json()["text"] == text

    def test_bad_key_length(self, client):
        response = client.post(f"{PREFIX}/aes/encrypt", json={"text": "x", "key": "short"})

        assert response.status_code == 400
        assert response.json()["detail"]["details"] == {"length": 5}

    def test_unaligned_ciphertext(self, client):
        response = client.post(
            f"{PREFIX}/aes/decrypt",
            json={"ciphertext": "abcd", "key": "AESSecureKey1234"},
        )

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "EncodingError"


class TestAnalysisEndpoint:
    """Test the AI analysis hand-off endpoint."""

    @pytest.fixture
    def gemini_reply(self):
        return {"candidates": [{"content": {"parts": [{"text": "Strength: Weak\n"}]}}]}

    @pytest.fixture
    def client_with_gemini(self, client, gemini_reply):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=gemini_reply)

        async def override():
            http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
            async with GeminiClient(api_key="test-api-key-123456", client=http) as gemini:
                yield gemini

        app.dependency_overrides[get_gemini_client] = override
        yield client
        app.dependency_overrides.clear()

    def test_analysis(self, client_with_gemini):
        response = client_with_gemini.post(
            f"{PREFIX}/analysis",
            json={
                "steps": [{"algorithm": "caesar", "key": 3}],
                "plaintext": "HELLO",
                "ciphertext": "KHOOR",
            },
        )

        assert response.status_code == 200
        assert response.json() == {"analysis": "Strength: Weak", "error": None}

    def test_unknown_algorithm(self, client_with_gemini):
        response = client_with_gemini.post(
            f"{PREFIX}/analysis",
            json={
                "steps": [{"algorithm": "enigma", "key": 3}],
                "plaintext": "HELLO",
                "ciphertext": "KHOOR",
            },
        )

        assert response.status_code == 404

    def test_requires_steps(self, client_with_gemini):
        response = client_with_gemini.post(
            f"{PREFIX}/analysis",
            json={"steps": [], "plaintext": "HELLO", "ciphertext": "KHOOR"},
        )

        assert response.status_code == 422
