"""PKCS#7 padding for 16-byte blocks."""

from cipherchain.core.exceptions import PaddingError

BLOCK_SIZE = 16


def pad(data: bytes, block_size: int = BLOCK_SIZE) -> bytes:
    """
    Append N bytes of value N so the length is a multiple of block_size.

    Block-aligned input still receives a full block of padding, so N is
    always in [1, block_size].
    """
    pad_length = block_size - (len(data) % block_size)
    return data + bytes([pad_length]) * pad_length


def unpad(data: bytes, block_size: int = BLOCK_SIZE) -> bytes:
    """
    Strip and validate PKCS#7 padding.

    Raises:
        PaddingError: If the data length is not a positive multiple of
            block_size, the pad length is 0 or larger than block_size, or
            any pad byte disagrees with the declared length
    """
    if not data or len(data) % block_size != 0:
        raise PaddingError(
            "Invalid padded data length",
            {"length": len(data)},
        )

    pad_length = data[-1]

    if pad_length == 0 or pad_length > block_size:
        raise PaddingError(
            f"Invalid padding value {pad_length}",
            {"pad_length": pad_length},
        )

    if any(byte != pad_length for byte in data[-pad_length:]):
        raise PaddingError(
            "Invalid padding: pad bytes do not match the declared length",
            {"pad_length": pad_length},
        )

    return data[:-pad_length]
