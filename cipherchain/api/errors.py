from fastapi import HTTPException, status

from cipherchain.core.exceptions import CipherChainError, EngineNotFoundError
from cipherchain.models.schemas import ErrorResponse


def to_http_exception(error: CipherChainError) -> HTTPException:
    """Translate an engine error into an HTTP error carrying its details."""
    if isinstance(error, EngineNotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    else:
        status_code = status.HTTP_400_BAD_REQUEST

    body = ErrorResponse(
        error=type(error).__name__,
        message=error.message,
        details=error.details,
    )
    return HTTPException(status_code=status_code, detail=body.model_dump())
