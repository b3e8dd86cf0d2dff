from typing import Annotated, AsyncGenerator

from fastapi import Depends

from cipherchain.core.config import Settings, get_settings
from cipherchain.services.ai.gemini_client import GeminiClient
from cipherchain.services.engines.registry import EngineRegistry
from cipherchain.services.pipeline.composer import PipelineComposer


# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_registry() -> EngineRegistry:
    """Get the engine registry."""
    return EngineRegistry()

RegistryDep = Annotated[EngineRegistry, Depends(get_registry)]


def get_composer(registry: RegistryDep) -> PipelineComposer:
    """Get a pipeline composer bound to the registry."""
    return PipelineComposer(registry)

ComposerDep = Annotated[PipelineComposer, Depends(get_composer)]


# Gemini client dependency
async def get_gemini_client() -> AsyncGenerator[GeminiClient, None]:
    """Get a Gemini client, closed after the request."""
    async with GeminiClient() as client:
        yield client

GeminiDep = Annotated[GeminiClient, Depends(get_gemini_client)]
