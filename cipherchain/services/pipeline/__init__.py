"""
Pipeline services.

Chains registered cipher engines into an ordered pipeline:
1. Resolve every step's algorithm through the registry
2. Validate every step's key before anything runs
3. Encrypt forwards, or decrypt by walking the same steps backwards
"""

from cipherchain.services.pipeline.composer import (
    PipelineComposer,
    PipelineRun,
    PipelineStep,
    StageResult,
    run_pipeline,
)

__all__ = [
    "PipelineComposer",
    "PipelineRun",
    "PipelineStep",
    "StageResult",
    "run_pipeline",
]
