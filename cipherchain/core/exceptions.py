from typing import Any


class CipherChainError(Exception):
    """Base exception for all cipher pipeline errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(CipherChainError):
    """Raised when an input or key fails validation."""

    pass


class KeyValidationError(ValidationError):
    """Raised when a key is rejected by its algorithm's validator."""

    def __init__(self, algorithm: str, step_index: int | None = None):
        details: dict[str, Any] = {"algorithm": algorithm}
        if step_index is not None:
            details["step_index"] = step_index
        location = f" at step {step_index}" if step_index is not None else ""
        super().__init__(f"Invalid key for '{algorithm}'{location}", details)


class NonInvertibleKeyError(ValidationError):
    """Raised when an Affine multiplier has no inverse modulo 26."""

    def __init__(self, a: int, modulus: int = 26):
        super().__init__(
            f"'a' value {a} is not coprime with {modulus} and has no inverse",
            {"a": a, "modulus": modulus},
        )


class KeyLengthError(ValidationError):
    """Raised when an AES key is not 16, 24 or 32 bytes long."""

    def __init__(self, length: int):
        super().__init__(
            f"Invalid key length {length}. Must be 16, 24, or 32 bytes (128, 192, or 256 bits)",
            {"length": length},
        )


class BlockSizeError(ValidationError):
    """Raised when an AES block is not exactly 16 bytes."""

    def __init__(self, length: int):
        super().__init__(
            f"Block must be 16 bytes (128 bits), got {length}",
            {"length": length},
        )


class InputTooLongError(ValidationError):
    """Raised when input text exceeds maximum length."""

    def __init__(self, length: int, max_length: int):
        super().__init__(
            f"Input length {length} exceeds maximum {max_length}",
            {"length": length, "max_length": max_length},
        )


class EngineError(CipherChainError):
    """Base exception for cipher engine errors."""

    pass


class EngineNotFoundError(EngineError, LookupError):
    """Raised when requested cipher engine is not found."""

    def __init__(self, engine_name: str, step_index: int | None = None):
        details: dict[str, Any] = {"engine_name": engine_name, "algorithm": engine_name}
        if step_index is not None:
            details["step_index"] = step_index
        super().__init__(f"Cipher engine '{engine_name}' not found", details)


class PaddingError(EngineError):
    """Raised when PKCS#7 padding is missing or inconsistent."""

    pass


class EncodingError(EngineError):
    """Raised when hex or UTF-8 data is malformed."""

    pass
