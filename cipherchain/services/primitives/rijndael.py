"""
From-scratch AES (Rijndael, FIPS-197) block cipher.

Supports 128, 192 and 256-bit keys with 10, 12 and 14 rounds. The state is a
16-byte column-major buffer: byte index = row + 4 * column.

Messages are PKCS#7 padded and every 16-byte block is encrypted on its own
with the same key schedule. There is no IV and no chaining between blocks
(ECB-style), so identical plaintext blocks give identical ciphertext
blocks.
"""

from dataclasses import dataclass

from cipherchain.core.exceptions import BlockSizeError, EncodingError, KeyLengthError
from cipherchain.services.primitives.codecs import (
    bytes_to_hex,
    bytes_to_text,
    hex_to_bytes,
    text_to_bytes,
)
from cipherchain.services.primitives.galois import gmul
from cipherchain.services.primitives.padding import BLOCK_SIZE, pad, unpad

SBOX = bytes([
    0x63, 0x7c, 0x77, 0x7b, 0xf2, 0x6b, 0x6f, 0xc5, 0x30, 0x01, 0x67, 0x2b, 0xfe, 0xd7, 0xab, 0x76,
    0xca, 0x82, 0xc9, 0x7d, 0xfa, 0x59, 0x47, 0xf0, 0xad, 0xd4, 0xa2, 0xaf, 0x9c, 0xa4, 0x72, 0xc0,
    0xb7, 0xfd, 0x93, 0x26, 0x36, 0x3f, 0xf7, 0xcc, 0x34, 0xa5, 0xe5, 0xf1, 0x71, 0xd8, 0x31, 0x15,
    0x04, 0xc7, 0x23, 0xc3, 0x18, 0x96, 0x05, 0x9a, 0x07, 0x12, 0x80, 0xe2, 0xeb, 0x27, 0xb2, 0x75,
    0x09, 0x83, 0x2c, 0x1a, 0x1b, 0x6e, 0x5a, 0xa0, 0x52, 0x3b, 0xd6, 0xb3, 0x29, 0xe3, 0x2f, 0x84,
    0x53, 0xd1, 0x00, 0xed, 0x20, 0xfc, 0xb1, 0x5b, 0x6a, 0xcb, 0xbe, 0x39, 0x4a, 0x4c, 0x58, 0xcf,
    0xd0, 0xef, 0xaa, 0xfb, 0x43, 0x4d, 0x33, 0x85, 0x45, 0xf9, 0x02, 0x7f, 0x50, 0x3c, 0x9f, 0xa8,
    0x51, 0xa3, 0x40, 0x8f, 0x92, 0x9d, 0x38, 0xf5, 0xbc, 0xb6, 0xda, 0x21, 0x10, 0xff, 0xf3, 0xd2,
    0xcd, 0x0c, 0x13, 0xec, 0x5f, 0x97, 0x44, 0x17, 0xc4, 0xa7, 0x7e, 0x3d, 0x64, 0x5d, 0x19, 0x73,
    0x60, 0x81, 0x4f, 0xdc, 0x22, 0x2a, 0x90, 0x88, 0x46, 0xee, 0xb8, 0x14, 0xde, 0x5e, 0x0b, 0xdb,
    0xe0, 0x32, 0x3a, 0x0a, 0x49, 0x06, 0x24, 0x5c, 0xc2, 0xd3, 0xac, 0x62, 0x91, 0x95, 0xe4, 0x79,
    0xe7, 0xc8, 0x37, 0x6d, 0x8d, 0xd5, 0x4e, 0xa9, 0x6c, 0x56, 0xf4, 0xea, 0x65, 0x7a, 0xae, 0x08,
    0xba, 0x78, 0x25, 0x2e, 0x1c, 0xa6, 0xb4, 0xc6, 0xe8, 0xdd, 0x74, 0x1f, 0x4b, 0xbd, 0x8b, 0x8a,
    0x70, 0x3e, 0xb5, 0x66, 0x48, 0x03, 0xf6, 0x0e, 0x61, 0x35, 0x57, 0xb9, 0x86, 0xc1, 0x1d, 0x9e,
    0xe1, 0xf8, 0x98, 0x11, 0x69, 0xd9, 0x8e, 0x94, 0x9b, 0x1e, 0x87, 0xe9, 0xce, 0x55, 0x28, 0xdf,
    0x8c, 0xa1, 0x89, 0x0d, 0xbf, 0xe6, 0x42, 0x68, 0x41, 0x99, 0x2d, 0x0f, 0xb0, 0x54, 0xbb, 0x16
])

INV_SBOX = bytes([
    0x52, 0x09, 0x6a, 0xd5, 0x30, 0x36, 0xa5, 0x38, 0xbf, 0x40, 0xa3, 0x9e, 0x81, 0xf3, 0xd7, 0xfb,
    0x7c, 0xe3, 0x39, 0x82, 0x9b, 0x2f, 0xff, 0x87, 0x34, 0x8e, 0x43, 0x44, 0xc4, 0xde, 0xe9, 0xcb,
    0x54, 0x7b, 0x94, 0x32, 0xa6, 0xc2, 0x23, 0x3d, 0xee, 0x4c, 0x95, 0x0b, 0x42, 0xfa, 0xc3, 0x4e,
    0x08, 0x2e, 0xa1, 0x66, 0x28, 0xd9, 0x24, 0xb2, 0x76, 0x5b, 0xa2, 0x49, 0x6d, 0x8b, 0xd1, 0x25,
    0x72, 0xf8, 0xf6, 0x64, 0x86, 0x68, 0x98, 0x16, 0xd4, 0xa4, 0x5c, 0xcc, 0x5d, 0x65, 0xb6, 0x92,
    0x6c, 0x70, 0x48, 0x50, 0xfd, 0xed, 0xb9, 0xda, 0x5e, 0x15, 0x46, 0x57, 0xa7, 0x8d, 0x9d, 0x84,
    0x90, 0xd8, 0xab, 0x00, 0x8c, 0xbc, 0xd3, 0x0a, 0xf7, 0xe4, 0x58, 0x05, 0xb8, 0xb3, 0x45, 0x06,
    0xd0, 0x2c, 0x1e, 0x8f, 0xca, 0x3f, 0x0f, 0x02, 0xc1, 0xaf, 0xbd, 0x03, 0x01, 0x13, 0x8a, 0x6b,
    0x3a, 0x91, 0x11, 0x41, 0x4f, 0x67, 0xdc, 0xea, 0x97, 0xf2, 0xcf, 0xce, 0xf0, 0xb4, 0xe6, 0x73,
    0x96, 0xac, 0x74, 0x22, 0xe7, 0xad, 0x35, 0x85, 0xe2, 0xf9, 0x37, 0xe8, 0x1c, 0x75, 0xdf, 0x6e,
    0x47, 0xf1, 0x1a, 0x71, 0x1d, 0x29, 0xc5, 0x89, 0x6f, 0xb7, 0x62, 0x0e, 0xaa, 0x18, 0xbe, 0x1b,
    0xfc, 0x56, 0x3e, 0x4b, 0xc6, 0xd2, 0x79, 0x20, 0x9a, 0xdb, 0xc0, 0xfe, 0x78, 0xcd, 0x5a, 0xf4,
    0x1f, 0xdd, 0xa8, 0x33, 0x88, 0x07, 0xc7, 0x31, 0xb1, 0x12, 0x10, 0x59, 0x27, 0x80, 0xec, 0x5f,
    0x60, 0x51, 0x7f, 0xa9, 0x19, 0xb5, 0x4a, 0x0d, 0x2d, 0xe5, 0x7a, 0x9f, 0x93, 0xc9, 0x9c, 0xef,
    0xa0, 0xe0, 0x3b, 0x4d, 0xae, 0x2a, 0xf5, 0xb0, 0xc8, 0xeb, 0xbb, 0x3c, 0x83, 0x53, 0x99, 0x61,
    0x17, 0x2b, 0x04, 0x7e, 0xba, 0x77, 0xd6, 0x26, 0xe1, 0x69, 0x14, 0x63, 0x55, 0x21, 0x0c, 0x7d
])

RCON = bytes([0x01, 0x02, 0x04, 0x08, 0x10, 0x20, 0x40, 0x80, 0x1B, 0x36])


@dataclass(frozen=True)
class KeyParams:
    """AES parameters derived from the key length."""

    key_size: int  # bits
    nk: int  # 32-bit words in the key
    nr: int  # rounds


_KEY_PARAMS: dict[int, KeyParams] = {
    16: KeyParams(key_size=128, nk=4, nr=10),
    24: KeyParams(key_size=192, nk=6, nr=12),
    32: KeyParams(key_size=256, nk=8, nr=14),
}

VALID_KEY_LENGTHS: tuple[int, ...] = tuple(_KEY_PARAMS)


def key_params(key_length: int) -> KeyParams:
    """
    Select AES parameters for a key length in bytes.

    Raises:
        KeyLengthError: If the length is not 16, 24 or 32
    """
    try:
        return _KEY_PARAMS[key_length]
    except KeyError:
        raise KeyLengthError(key_length) from None


def expand_key(key: bytes) -> list[bytes]:
    """
    Expand a cipher key into (rounds + 1) 16-byte round keys.

    Args:
        key: Raw key of 16, 24 or 32 bytes

    Returns:
        Round keys, round 0 first
    """
    params = key_params(len(key))
    nk, nr = params.nk, params.nr

    words = [list(key[4 * i:4 * i + 4]) for i in range(nk)]

    for i in range(nk, 4 * (nr + 1)):
        temp = list(words[i - 1])

        if i % nk == 0:
            temp = temp[1:] + temp[:1]  # RotWord
            temp = [SBOX[b] for b in temp]  # SubWord
            temp[0] ^= RCON[i // nk - 1]
        elif nk > 6 and i % nk == 4:
            # 256-bit keys only
            temp = [SBOX[b] for b in temp]

        words.append([w ^ t for w, t in zip(words[i - nk], temp)])

    return [
        bytes(b for word in words[4 * r:4 * r + 4] for b in word)
        for r in range(nr + 1)
    ]


# ============================================================================
# Round transforms (mutate the state in place)
# ============================================================================


def sub_bytes(state: bytearray) -> None:
    for i in range(16):
        state[i] = SBOX[state[i]]


def inv_sub_bytes(state: bytearray) -> None:
    for i in range(16):
        state[i] = INV_SBOX[state[i]]


def shift_rows(state: bytearray) -> None:
    """Cyclically shift row r left by r positions."""
    original = bytes(state)
    for row in range(1, 4):
        for col in range(4):
            state[row + 4 * col] = original[row + 4 * ((col + row) % 4)]


def inv_shift_rows(state: bytearray) -> None:
    """Cyclically shift row r right by r positions."""
    original = bytes(state)
    for row in range(1, 4):
        for col in range(4):
            state[row + 4 * col] = original[row + 4 * ((col - row) % 4)]


def mix_columns(state: bytearray) -> None:
    """Multiply each column by the fixed {02, 03, 01, 01} circulant matrix."""
    for c in range(0, 16, 4):
        s0, s1, s2, s3 = state[c:c + 4]
        state[c] = gmul(s0, 2) ^ gmul(s1, 3) ^ s2 ^ s3
        state[c + 1] = s0 ^ gmul(s1, 2) ^ gmul(s2, 3) ^ s3
        state[c + 2] = s0 ^ s1 ^ gmul(s2, 2) ^ gmul(s3, 3)
        state[c + 3] = gmul(s0, 3) ^ s1 ^ s2 ^ gmul(s3, 2)


def inv_mix_columns(state: bytearray) -> None:
    """Multiply each column by the inverse {0e, 0b, 0d, 09} matrix."""
    for c in range(0, 16, 4):
        s0, s1, s2, s3 = state[c:c + 4]
        state[c] = gmul(s0, 14) ^ gmul(s1, 11) ^ gmul(s2, 13) ^ gmul(s3, 9)
        state[c + 1] = gmul(s0, 9) ^ gmul(s1, 14) ^ gmul(s2, 11) ^ gmul(s3, 13)
        state[c + 2] = gmul(s0, 13) ^ gmul(s1, 9) ^ gmul(s2, 14) ^ gmul(s3, 11)
        state[c + 3] = gmul(s0, 11) ^ gmul(s1, 13) ^ gmul(s2, 9) ^ gmul(s3, 14)


def add_round_key(state: bytearray, round_key: bytes) -> None:
    for i in range(16):
        state[i] ^= round_key[i]


# ============================================================================
# Block operations
# ============================================================================


def _cipher(block: bytes, round_keys: list[bytes]) -> bytes:
    nr = len(round_keys) - 1
    state = bytearray(block)

    add_round_key(state, round_keys[0])

    for round_num in range(1, nr):
        sub_bytes(state)
        shift_rows(state)
        mix_columns(state)
        add_round_key(state, round_keys[round_num])

    # Final round has no MixColumns
    sub_bytes(state)
    shift_rows(state)
    add_round_key(state, round_keys[nr])

    return bytes(state)


def _inv_cipher(block: bytes, round_keys: list[bytes]) -> bytes:
    nr = len(round_keys) - 1
    state = bytearray(block)

    add_round_key(state, round_keys[nr])

    for round_num in range(nr - 1, 0, -1):
        inv_shift_rows(state)
        inv_sub_bytes(state)
        add_round_key(state, round_keys[round_num])
        inv_mix_columns(state)

    inv_shift_rows(state)
    inv_sub_bytes(state)
    add_round_key(state, round_keys[0])

    return bytes(state)


def _check_block(block: bytes) -> None:
    if len(block) != BLOCK_SIZE:
        raise BlockSizeError(len(block))


def encrypt_block(block: bytes, key: bytes) -> bytes:
    """
    Encrypt a single 16-byte block.

    Args:
        block: 16-byte plaintext block
        key: Cipher key (16, 24, or 32 bytes)

    Returns:
        16-byte ciphertext block
    """
    _check_block(block)
    return _cipher(block, expand_key(key))


def decrypt_block(block: bytes, key: bytes) -> bytes:
    """
    Decrypt a single 16-byte block.

    Args:
        block: 16-byte ciphertext block
        key: Cipher key (16, 24, or 32 bytes)

    Returns:
        16-byte plaintext block
    """
    _check_block(block)
    return _inv_cipher(block, expand_key(key))


# ============================================================================
# Message operations
# ============================================================================


def encrypt_message(data: bytes, key: bytes) -> bytes:
    """Pad data with PKCS#7 and encrypt each block independently."""
    round_keys = expand_key(key)
    padded = pad(data)
    return b"".join(
        _cipher(padded[i:i + BLOCK_SIZE], round_keys)
        for i in range(0, len(padded), BLOCK_SIZE)
    )


def decrypt_message(data: bytes, key: bytes) -> bytes:
    """
    Decrypt each block independently and strip PKCS#7 padding.

    Raises:
        KeyLengthError: If the key is not 16, 24 or 32 bytes
        EncodingError: If the ciphertext is not a multiple of 16 bytes
        PaddingError: If the recovered padding is invalid
    """
    round_keys = expand_key(key)

    if len(data) % BLOCK_SIZE != 0:
        raise EncodingError(
            "Ciphertext length must be a multiple of 16 bytes",
            {"length": len(data)},
        )

    padded = b"".join(
        _inv_cipher(data[i:i + BLOCK_SIZE], round_keys)
        for i in range(0, len(data), BLOCK_SIZE)
    )
    return unpad(padded)


def key_from_text(key_text: str, key_is_hex: bool = False) -> bytes:
    """Interpret key text as hex digits or as UTF-8 characters."""
    return hex_to_bytes(key_text) if key_is_hex else text_to_bytes(key_text)


def encrypt_text(text: str, key_text: str, key_is_hex: bool = False) -> str:
    """Encrypt UTF-8 text and return lowercase hex ciphertext."""
    key = key_from_text(key_text, key_is_hex)
    return bytes_to_hex(encrypt_message(text_to_bytes(text), key))


def decrypt_text(hex_ciphertext: str, key_text: str, key_is_hex: bool = False) -> str:
    """Decrypt hex ciphertext back to UTF-8 text."""
    key = key_from_text(key_text, key_is_hex)
    return bytes_to_text(decrypt_message(hex_to_bytes(hex_ciphertext), key))
