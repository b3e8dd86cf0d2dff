from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, StrictBool, StrictInt


# ============================================================================
# Enums
# ============================================================================


class CipherFamily(str, Enum):
    """Supported cipher families."""

    CLASSICAL = "classical"
    MODERN = "modern"


class CipherType(str, Enum):
    """Specific cipher types available to a pipeline."""

    CAESAR = "caesar"
    AFFINE = "affine"
    MONOALPHABETIC = "monoalphabetic"
    AES = "aes"


class KeyShape(str, Enum):
    """Shape of the key an algorithm expects."""

    SHIFT = "shift"
    AFFINE = "affine"
    PERMUTATION = "permutation"
    BYTE_KEY = "byte_key"


class OperationMode(str, Enum):
    """Direction a pipeline is traversed in."""

    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"


# JSON-friendly key as accepted over the API, e.g. 3, {"a": 5, "b": 8},
# "QWERTYUIOPASDFGHJKLZXCVBNM" or {"key": "00ff...", "is_hex": true}
# Booleans are kept as booleans so key validators can reject them
RawKey = StrictBool | StrictInt | str | dict[str, Any] | list[StrictInt]


# ============================================================================
# Algorithm Schemas
# ============================================================================


class AlgorithmInfo(BaseModel):
    """Read-only descriptor of a registered algorithm."""

    id: CipherType
    name: str
    family: CipherFamily
    key_shape: KeyShape
    description: str
    weaknesses: list[str]
    key_space: str
    historical_use: str


class AlgorithmListResponse(BaseModel):
    """Response schema for /algorithms endpoint."""

    algorithms: list[AlgorithmInfo]


class KeyResponse(BaseModel):
    """A generated key for an algorithm."""

    algorithm: CipherType
    key: RawKey


class ValidateKeyRequest(BaseModel):
    """Request schema for key validation."""

    key: RawKey


class ValidateKeyResponse(BaseModel):
    """Response schema for key validation."""

    algorithm: CipherType
    valid: bool


# ============================================================================
# Pipeline Schemas
# ============================================================================


class PipelineStepSchema(BaseModel):
    """One (algorithm, key) step of a pipeline."""

    algorithm: str = Field(min_length=1)
    key: RawKey


class PipelineRequest(BaseModel):
    """Request schema for /pipeline endpoint."""

    text: str
    steps: list[PipelineStepSchema] = Field(default_factory=list)
    mode: OperationMode = OperationMode.ENCRYPT


class StageSchema(BaseModel):
    """Input and output of a single executed stage."""

    step_index: int
    algorithm: CipherType
    input: str
    output: str


class PipelineResponse(BaseModel):
    """Response schema for /pipeline endpoint."""

    mode: OperationMode
    input: str
    output: str
    stages: list[StageSchema]


# ============================================================================
# AES Schemas
# ============================================================================


class AESEncryptRequest(BaseModel):
    """Request schema for /aes/encrypt endpoint."""

    text: str
    key: str = Field(min_length=1)
    key_is_hex: bool = False


class AESEncryptResponse(BaseModel):
    """Response schema for /aes/encrypt endpoint."""

    ciphertext: str


class AESDecryptRequest(BaseModel):
    """Request schema for /aes/decrypt endpoint."""

    ciphertext: str
    key: str = Field(min_length=1)
    key_is_hex: bool = False


class AESDecryptResponse(BaseModel):
    """Response schema for /aes/decrypt endpoint."""

    text: str


# ============================================================================
# Analysis Schemas
# ============================================================================


class AnalysisRequest(BaseModel):
    """Finished pipeline run handed to the AI collaborator."""

    steps: list[PipelineStepSchema] = Field(min_length=1)
    plaintext: str
    ciphertext: str
    mode: OperationMode = OperationMode.ENCRYPT


class AnalysisResponse(BaseModel):
    """Commentary returned by the AI collaborator."""

    analysis: str
    error: str | None = None


# ============================================================================
# Error Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)
