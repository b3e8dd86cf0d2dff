from fastapi import APIRouter

from cipherchain.api.errors import to_http_exception
from cipherchain.core.exceptions import CipherChainError, InputTooLongError
from cipherchain.dependencies import SettingsDep
from cipherchain.models.schemas import (
    AESDecryptRequest,
    AESDecryptResponse,
    AESEncryptRequest,
    AESEncryptResponse,
    ErrorResponse,
)
from cipherchain.services.primitives import rijndael

router = APIRouter()

BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Invalid key, padding or encoding"}}


@router.post(
    "/encrypt",
    response_model=AESEncryptResponse,
    responses=BAD_REQUEST,
    summary="AES-encrypt text",
    description="Encrypt UTF-8 text with a text or hex key. Returns lowercase hex.",
)
async def encrypt_text(request: AESEncryptRequest, settings: SettingsDep) -> AESEncryptResponse:
    if len(request.text) > settings.max_input_length:
        raise to_http_exception(InputTooLongError(len(request.text), settings.max_input_length))

    try:
        ciphertext = rijndael.encrypt_text(request.text, request.key, request.key_is_hex)
    except CipherChainError as e:
        raise to_http_exception(e)

    return AESEncryptResponse(ciphertext=ciphertext)


@router.post(
    "/decrypt",
    response_model=AESDecryptResponse,
    responses=BAD_REQUEST,
    summary="AES-decrypt hex ciphertext",
)
async def decrypt_text(request: AESDecryptRequest) -> AESDecryptResponse:
    try:
        text = rijndael.decrypt_text(request.ciphertext, request.key, request.key_is_hex)
    except CipherChainError as e:
        raise to_http_exception(e)

    return AESDecryptResponse(text=text)
