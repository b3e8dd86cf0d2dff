"""
Gemini AI client for pipeline commentary.

Receives an already finished run (plaintext, ciphertext and the pipeline
description) and asks Gemini for an educational strength analysis. The
cipher engine never waits on this client and never reads anything back
from it.
"""
import logging
from dataclasses import dataclass
from typing import Sequence

import httpx

from cipherchain.core.config import get_settings
from cipherchain.models.schemas import OperationMode
from cipherchain.services.engines.registry import EngineRegistry
from cipherchain.services.pipeline.composer import PipelineStep

logger = logging.getLogger(__name__)


@dataclass
class PipelineAnalysis:
    """Commentary on a finished pipeline run."""

    analysis: str
    error: str | None = None


class GeminiClient:
    """
    Client for Google's Gemini API.

    Failures are reported through PipelineAnalysis.error instead of being
    raised, since the run being analysed has already completed.
    """

    BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"
    PLACEHOLDER_KEY = "your_gemini_api_key_here"

    # Substrings of Gemini error payloads mapped to friendlier messages
    ERROR_HINTS: dict[str, str] = {
        "NOT_FOUND": "Model not found. Please check if the model name is correct.",
        "INVALID_ARGUMENT": "Invalid API request. Please check your input parameters.",
        "PERMISSION_DENIED": "API key is invalid or lacks permission. Get a key from https://ai.google.dev/",
        "UNAUTHENTICATED": "Authentication failed. Verify your API key in the .env file.",
    }

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize Gemini client.

        Args:
            api_key: Gemini API key. Falls back to settings if not provided.
            model: Model to use. Falls back to settings if not provided.
            client: Preconfigured HTTP client, mainly for tests.
        """
        settings = get_settings()
        self.api_key = api_key or settings.gemini_api_key
        self.model = model or settings.gemini_model
        self.max_text_length = settings.analysis_max_text_length
        self._client = client or httpx.AsyncClient(timeout=settings.analysis_timeout_seconds)
        self.registry = EngineRegistry()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "GeminiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    def has_valid_api_key(self) -> bool:
        """Check that an API key is configured and is not the placeholder."""
        key = self.api_key
        return bool(key) and key != self.PLACEHOLDER_KEY and len(key) > 10

    async def generate_content(self, prompt: str) -> str:
        """
        Generate content using Gemini.

        Args:
            prompt: The prompt to send to Gemini

        Returns:
            Generated text response
        """
        url = f"{self.BASE_URL}/{self.model}:generateContent"

        payload = {
            "contents": [
                {
                    "parts": [
                        {"text": prompt}
                    ]
                }
            ]
        }

        headers = {
            "x-goog-api-key": self.api_key or "",
            "Content-Type": "application/json",
        }

        response = await self._client.post(url, json=payload, headers=headers)
        response.raise_for_status()

        data = response.json()

        # Extract text from response
        candidates = data.get("candidates", [])
        if candidates:
            parts = candidates[0].get("content", {}).get("parts", [])
            if parts:
                return parts[0].get("text", "")

        return ""

    def build_analysis_prompt(
        self,
        steps: Sequence[PipelineStep],
        plaintext: str,
        ciphertext: str,
        mode: OperationMode,
    ) -> str:
        """
        Build the educational analysis prompt.

        Keys are summarized per algorithm so the full key material never
        leaves the process.
        """
        pipeline_details = "\n".join(
            f"{index}. {engine.name} ({engine.summarize_key(step.key)})"
            for index, (step, engine) in enumerate(
                ((step, self.registry.lookup(step.algorithm)) for step in steps),
                start=1,
            )
        )
        direction = "encrypted" if mode == OperationMode.ENCRYPT else "decrypted"

        return f"""You are a cryptography expert providing an analysis of an encryption pipeline used for educational purposes.

Format your response to be visually appealing with clear sections and bullet points.
Make your analysis simple and understandable even for beginners.

ENCRYPTION PIPELINE (the text was {direction}):
{pipeline_details}

PLAINTEXT: "{self._truncate(plaintext)}"
CIPHERTEXT: "{self._truncate(ciphertext)}"

Provide a concise analysis covering:
1. STRENGTH OVERVIEW: A simple rating (Weak/Moderate/Strong) for the overall pipeline with brief explanation
2. ALGORITHM REVIEW: Brief assessment of each algorithm (1-2 bullet points only)
3. KEY QUALITY: Brief assessment of key quality/complexity
4. EDUCATIONAL INSIGHTS: 1-2 interesting facts about these algorithms

Keep your response clear, educational, and visually structured."""

    async def analyze_pipeline(
        self,
        steps: Sequence[PipelineStep],
        plaintext: str,
        ciphertext: str,
        mode: OperationMode = OperationMode.ENCRYPT,
    ) -> PipelineAnalysis:
        """
        Ask Gemini to comment on a finished pipeline run.

        Args:
            steps: The pipeline, in encryption order
            plaintext: Plaintext side of the run
            ciphertext: Ciphertext side of the run
            mode: Direction the pipeline was run in

        Returns:
            PipelineAnalysis with either the analysis text or an error
        """
        if not self.has_valid_api_key():
            return PipelineAnalysis(
                analysis="",
                error=(
                    "Missing or invalid API key. Get a key from "
                    "https://ai.google.dev/ and add it to your .env file."
                ),
            )

        prompt = self.build_analysis_prompt(steps, plaintext, ciphertext, mode)

        try:
            text = await self.generate_content(prompt)
        except httpx.HTTPStatusError as e:
            logger.warning("Gemini API returned %s", e.response.status_code)
            return PipelineAnalysis(analysis="", error=self._describe_error(e.response.text))
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Gemini API request failed: %s", e)
            return PipelineAnalysis(
                analysis="",
                error=f"Failed to perform cryptanalysis. ({e})",
            )

        return PipelineAnalysis(analysis=text.strip())

    def _describe_error(self, body: str) -> str:
        for marker, hint in self.ERROR_HINTS.items():
            if marker in body:
                return hint
        return "Failed to perform cryptanalysis."

    def _truncate(self, text: str) -> str:
        if len(text) > self.max_text_length:
            return text[:self.max_text_length] + "..."
        return text
