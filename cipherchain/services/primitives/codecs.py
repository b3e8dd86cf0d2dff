"""Conversions between text, bytes and hex strings."""

import re

from cipherchain.core.exceptions import EncodingError

_WHITESPACE = re.compile(r"\s+")


def text_to_bytes(text: str) -> bytes:
    """Encode text as UTF-8."""
    return text.encode("utf-8")


def bytes_to_text(data: bytes) -> str:
    """
    Decode UTF-8 bytes to text.

    Raises:
        EncodingError: If the bytes are not valid UTF-8
    """
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodingError(
            "Decrypted bytes are not valid UTF-8 text",
            {"position": e.start},
        ) from e


def bytes_to_hex(data: bytes, spaces: bool = False) -> str:
    """Render bytes as lowercase hex, two digits per byte."""
    return data.hex(" ") if spaces else data.hex()


def hex_to_bytes(hex_str: str) -> bytes:
    """
    Parse a hex string into bytes, ignoring any whitespace.

    Raises:
        EncodingError: On odd length or a non-hex character
    """
    cleaned = _WHITESPACE.sub("", hex_str)

    if len(cleaned) % 2 != 0:
        raise EncodingError(
            "Hex string must have an even number of characters",
            {"length": len(cleaned)},
        )

    try:
        return bytes.fromhex(cleaned)
    except ValueError as e:
        raise EncodingError(f"Invalid hex string: {e}") from e
