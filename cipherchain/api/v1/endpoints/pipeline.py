from fastapi import APIRouter, HTTPException, status

from cipherchain.api.errors import to_http_exception
from cipherchain.core.exceptions import CipherChainError, InputTooLongError
from cipherchain.dependencies import ComposerDep, SettingsDep
from cipherchain.models.schemas import (
    ErrorResponse,
    OperationMode,
    PipelineRequest,
    PipelineResponse,
    StageSchema,
)
from cipherchain.services.pipeline.composer import PipelineStep

router = APIRouter()


@router.post(
    "",
    response_model=PipelineResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid key or input"},
        404: {"model": ErrorResponse, "description": "Unknown algorithm in pipeline"},
        500: {"model": ErrorResponse, "description": "Pipeline failed"},
    },
    summary="Run a cipher pipeline",
    description=(
        "Run text through an ordered chain of ciphers. Encryption applies the "
        "steps in order; decryption applies the inverse of each step in reverse order."
    ),
)
async def run_pipeline(
    request: PipelineRequest,
    settings: SettingsDep,
    composer: ComposerDep,
) -> PipelineResponse:
    """
    Run a pipeline in the requested mode.

    Every key is validated before any step executes. On failure the error
    details name the failing step index and algorithm.
    """
    # Only plaintext is capped; ciphertext is always longer
    if request.mode == OperationMode.ENCRYPT and len(request.text) > settings.max_input_length:
        raise to_http_exception(InputTooLongError(len(request.text), settings.max_input_length))

    steps = [PipelineStep(algorithm=step.algorithm, key=step.key) for step in request.steps]

    try:
        run = composer.compose(request.text, steps, request.mode)
    except CipherChainError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Pipeline failed: {str(e)}",
        )

    return PipelineResponse(
        mode=run.mode,
        input=run.input,
        output=run.output,
        stages=[
            StageSchema(
                step_index=stage.step_index,
                algorithm=stage.algorithm,
                input=stage.input,
                output=stage.output,
            )
            for stage in run.stages
        ],
    )
