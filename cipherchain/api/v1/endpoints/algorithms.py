from fastapi import APIRouter, Query

from cipherchain.api.errors import to_http_exception
from cipherchain.core.exceptions import CipherChainError
from cipherchain.dependencies import RegistryDep
from cipherchain.models.schemas import (
    AlgorithmInfo,
    AlgorithmListResponse,
    ErrorResponse,
    KeyResponse,
    ValidateKeyRequest,
    ValidateKeyResponse,
)
from cipherchain.services.engines.modern.aes import AESEngine

router = APIRouter()

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Algorithm not found"}}


@router.get(
    "",
    response_model=AlgorithmListResponse,
    summary="List algorithms",
    description="List every algorithm that can be used as a pipeline step.",
)
async def list_algorithms(registry: RegistryDep) -> AlgorithmListResponse:
    return AlgorithmListResponse(
        algorithms=[engine.describe() for engine in registry.get_all_engines()]
    )


@router.get(
    "/{algorithm}",
    response_model=AlgorithmInfo,
    responses=NOT_FOUND,
    summary="Describe an algorithm",
)
async def get_algorithm(algorithm: str, registry: RegistryDep) -> AlgorithmInfo:
    try:
        return registry.lookup(algorithm).describe()
    except CipherChainError as e:
        raise to_http_exception(e)


@router.get(
    "/{algorithm}/default-key",
    response_model=KeyResponse,
    responses=NOT_FOUND,
    summary="Get the default key",
    description="Key used to seed a new pipeline step of this algorithm.",
)
async def get_default_key(algorithm: str, registry: RegistryDep) -> KeyResponse:
    try:
        engine = registry.lookup(algorithm)
    except CipherChainError as e:
        raise to_http_exception(e)

    return KeyResponse(algorithm=engine.cipher_type, key=engine.default_key().to_raw())


@router.get(
    "/{algorithm}/random-key",
    response_model=KeyResponse,
    responses={
        **NOT_FOUND,
        400: {"model": ErrorResponse, "description": "Invalid key length"},
    },
    summary="Generate a random key",
)
async def get_random_key(
    algorithm: str,
    registry: RegistryDep,
    key_length: int | None = Query(
        None,
        description="AES key length in bytes (16, 24 or 32). Ignored by other algorithms.",
    ),
) -> KeyResponse:
    try:
        engine = registry.lookup(algorithm)
        if isinstance(engine, AESEngine) and key_length is not None:
            key = engine.generate_random_key(key_length)
        else:
            key = engine.generate_random_key()
    except CipherChainError as e:
        raise to_http_exception(e)

    return KeyResponse(algorithm=engine.cipher_type, key=key.to_raw())


@router.post(
    "/{algorithm}/validate",
    response_model=ValidateKeyResponse,
    responses=NOT_FOUND,
    summary="Validate a key",
)
async def validate_key(
    algorithm: str,
    request: ValidateKeyRequest,
    registry: RegistryDep,
) -> ValidateKeyResponse:
    try:
        engine = registry.lookup(algorithm)
    except CipherChainError as e:
        raise to_http_exception(e)

    return ValidateKeyResponse(
        algorithm=engine.cipher_type,
        valid=engine.validate_key(request.key),
    )
