"""
Typed key values, one variant per key shape.

Each variant is a frozen dataclass that knows how to parse itself from the
JSON-friendly values accepted over the API (``parse``), how to render itself
back (``to_raw``) and whether it is acceptable to its algorithm
(``is_valid``). Parsing raises ValueError or TypeError on malformed input.
"""

import string
from dataclasses import dataclass
from typing import Any, ClassVar, TypeAlias

from cipherchain.core.exceptions import EncodingError
from cipherchain.models.schemas import KeyShape
from cipherchain.services.primitives.arithmetic import ALPHABET_SIZE, is_coprime
from cipherchain.services.primitives.codecs import hex_to_bytes, text_to_bytes
from cipherchain.services.primitives.rijndael import VALID_KEY_LENGTHS


def _as_int(value: Any, field: str) -> int:
    """Strict-ish integer coercion that refuses booleans and fractions."""
    if value is None or isinstance(value, bool):
        raise TypeError(f"'{field}' must be an integer")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"'{field}' must be a whole number, got {value}")
        return int(value)
    return int(value)


@dataclass(frozen=True)
class ShiftKey:
    """Caesar shift."""

    shift: int

    shape: ClassVar[KeyShape] = KeyShape.SHIFT

    @classmethod
    def parse(cls, raw: Any) -> "ShiftKey":
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, dict):
            raw = raw.get("shift", raw.get("key"))
        return cls(shift=_as_int(raw, "shift"))

    def is_valid(self) -> bool:
        return 0 <= self.shift < ALPHABET_SIZE

    def to_raw(self) -> int:
        return self.shift


@dataclass(frozen=True)
class AffineKey:
    """Affine coefficients for E(x) = (ax + b) mod 26."""

    a: int
    b: int

    shape: ClassVar[KeyShape] = KeyShape.AFFINE

    @classmethod
    def parse(cls, raw: Any) -> "AffineKey":
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, dict):
            if "a" not in raw or "b" not in raw:
                raise ValueError("Affine key needs both 'a' and 'b'")
            a, b = raw["a"], raw["b"]
        elif isinstance(raw, str):
            parts = raw.replace(" ", "").split(",")
            if len(parts) != 2:
                raise ValueError(f"Invalid key format: {raw}")
            a, b = parts
        elif isinstance(raw, (list, tuple)) and len(raw) == 2:
            a, b = raw
        else:
            raise TypeError(f"Invalid key type: {type(raw).__name__}")
        return cls(a=_as_int(a, "a"), b=_as_int(b, "b"))

    def is_valid(self) -> bool:
        return (
            1 <= self.a < ALPHABET_SIZE
            and is_coprime(self.a)
            and 0 <= self.b < ALPHABET_SIZE
        )

    def to_raw(self) -> dict[str, int]:
        return {"a": self.a, "b": self.b}


@dataclass(frozen=True)
class PermutationKey:
    """Substitution alphabet: letter p of the key replaces letter p of A-Z."""

    letters: str

    shape: ClassVar[KeyShape] = KeyShape.PERMUTATION

    @classmethod
    def parse(cls, raw: Any) -> "PermutationKey":
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, dict):
            raw = raw.get("key", raw.get("permutation"))
        if not isinstance(raw, str):
            raise TypeError("Substitution key must be a string")
        return cls(letters=raw.upper())

    def is_valid(self) -> bool:
        return (
            len(self.letters) == ALPHABET_SIZE
            and set(self.letters) == set(string.ascii_uppercase)
        )

    def to_raw(self) -> str:
        return self.letters


@dataclass(frozen=True)
class ByteKey:
    """Raw AES key material."""

    data: bytes

    shape: ClassVar[KeyShape] = KeyShape.BYTE_KEY

    def __repr__(self) -> str:
        return f"ByteKey(<{len(self.data)} bytes>)"

    @classmethod
    def parse(cls, raw: Any) -> "ByteKey":
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, (bytes, bytearray)):
            return cls(data=bytes(raw))

        is_hex = False
        if isinstance(raw, dict):
            is_hex = bool(raw.get("is_hex", False))
            raw = raw.get("key")

        if not isinstance(raw, str):
            raise TypeError("AES key must be text, hex text or bytes")

        if not is_hex:
            return cls(data=text_to_bytes(raw))
        try:
            return cls(data=hex_to_bytes(raw))
        except EncodingError as e:
            raise ValueError(e.message) from e

    def is_valid(self) -> bool:
        return len(self.data) in VALID_KEY_LENGTHS

    def to_raw(self) -> str | dict[str, Any]:
        try:
            return self.data.decode("utf-8")
        except UnicodeDecodeError:
            return {"key": self.data.hex(), "is_hex": True}


KeyValue: TypeAlias = ShiftKey | AffineKey | PermutationKey | ByteKey
