from fastapi import APIRouter

from cipherchain.api.errors import to_http_exception
from cipherchain.core.exceptions import CipherChainError
from cipherchain.dependencies import GeminiDep
from cipherchain.models.schemas import AnalysisRequest, AnalysisResponse, ErrorResponse
from cipherchain.services.pipeline.composer import PipelineStep

router = APIRouter()


@router.post(
    "",
    response_model=AnalysisResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid key in pipeline description"},
        404: {"model": ErrorResponse, "description": "Unknown algorithm in pipeline"},
    },
    summary="Analyze a finished pipeline run",
    description=(
        "Hand a completed (plaintext, ciphertext, pipeline) triple to the AI "
        "assistant for an educational strength analysis."
    ),
)
async def analyze_run(request: AnalysisRequest, gemini: GeminiDep) -> AnalysisResponse:
    """
    Request commentary on a completed run.

    Upstream AI failures are returned in the error field with status 200,
    because the run itself already succeeded.
    """
    steps = [PipelineStep(algorithm=step.algorithm, key=step.key) for step in request.steps]

    try:
        result = await gemini.analyze_pipeline(
            steps,
            plaintext=request.plaintext,
            ciphertext=request.ciphertext,
            mode=request.mode,
        )
    except CipherChainError as e:
        raise to_http_exception(e)

    return AnalysisResponse(analysis=result.analysis, error=result.error)
