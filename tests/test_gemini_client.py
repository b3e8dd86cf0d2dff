"""Tests for the Gemini pipeline analysis client."""

import asyncio

import httpx
import pytest

from cipherchain.models.schemas import OperationMode
from cipherchain.services.ai.gemini_client import GeminiClient
from cipherchain.services.pipeline.composer import PipelineStep

API_KEY = "test-api-key-123456"


def make_client(handler, api_key=API_KEY) -> GeminiClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GeminiClient(api_key=api_key, model="gemini-test", client=http)


def analyze(client: GeminiClient, steps, plaintext="HELLO", ciphertext="GRAAP"):
    async def run():
        async with client:
            return await client.analyze_pipeline(steps, plaintext, ciphertext)

    return asyncio.run(run())


class TestGeminiClient:
    """Test suite for the Gemini client."""

    @pytest.fixture
    def steps(self):
        return [
            PipelineStep("caesar", 3),
            PipelineStep("affine", {"a": 5, "b": 8}),
            PipelineStep("aes", "AESSecureKey1234"),
        ]

    @pytest.fixture
    def requests(self):
        return []

    @pytest.fixture
    def ok_handler(self, requests):
        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(
                200,
                json={"candidates": [{"content": {"parts": [{"text": "  Rated: Moderate  "}]}}]},
            )

        return handler

    def test_successful_analysis(self, steps, requests, ok_handler):
        result = analyze(make_client(ok_handler), steps)

        assert result.analysis == "Rated: Moderate"
        assert result.error is None

        request = requests[0]
        assert request.url.path.endswith("/gemini-test:generateContent")
        assert request.headers["x-goog-api-key"] == API_KEY

    def test_prompt_summarizes_keys(self, steps):
        client = make_client(lambda request: httpx.Response(200, json={}))
        prompt = client.build_analysis_prompt(steps, "HELLO", "GRAAP", OperationMode.ENCRYPT)
        asyncio.run(client.close())

        assert "1. Caesar Cipher (Shift value: 3)" in prompt
        assert "2. Affine Cipher (a: 5, b: 8)" in prompt
        assert "Key length: 16 bytes (128-bit)" in prompt
        assert "AESSecureKey1234" not in prompt

    def test_prompt_truncates_long_text(self, steps):
        client = make_client(lambda request: httpx.Response(200, json={}))
        prompt = client.build_analysis_prompt(steps, "A" * 150, "B" * 50, OperationMode.ENCRYPT)
        asyncio.run(client.close())

        assert "A" * 100 + "..." in prompt
        assert "A" * 101 not in prompt
        assert "B" * 50 + '"' in prompt

    def test_empty_candidates(self, steps):
        result = analyze(make_client(lambda request: httpx.Response(200, json={})), steps)

        assert result.analysis == ""
        assert result.error is None

    def test_missing_api_key(self, steps, requests, ok_handler):
        result = analyze(make_client(ok_handler, api_key="your_gemini_api_key_here"), steps)

        assert result.analysis == ""
        assert "API key" in result.error
        assert requests == []

    @pytest.mark.parametrize(
        "status_code,marker,hint",
        [
            (403, "PERMISSION_DENIED", "API key is invalid"),
            (404, "NOT_FOUND", "Model not found"),
            (400, "INVALID_ARGUMENT", "Invalid API request"),
            (500, "INTERNAL", "Failed to perform cryptanalysis."),
        ],
    )
    def test_http_errors(self, steps, status_code, marker, hint):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, json={"error": {"status": marker}})

        result = analyze(make_client(handler), steps)

        assert result.analysis == ""
        assert result.error.startswith(hint)

    def test_network_error(self, steps):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        result = analyze(make_client(handler), steps)

        assert result.error == "Failed to perform cryptanalysis. (connection refused)"

    def test_has_valid_api_key(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={})

        for api_key, expected in [
            (API_KEY, True),
            ("short", False),
            ("your_gemini_api_key_here", False),
        ]:
            client = make_client(handler, api_key=api_key)
            assert client.has_valid_api_key() is expected
            asyncio.run(client.close())
