"""AI services for pipeline commentary."""

from cipherchain.services.ai.gemini_client import GeminiClient, PipelineAnalysis

__all__ = ["GeminiClient", "PipelineAnalysis"]
