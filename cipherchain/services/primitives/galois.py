"""Byte arithmetic in GF(2^8) as used by the AES MixColumns step."""

# x^8 + x^4 + x^3 + x + 1 with the x^8 term dropped after the shift
REDUCTION = 0x1B


def gmul(a: int, b: int) -> int:
    """
    Multiply two bytes in GF(2^8) modulo 0x11B.

    Carry-less shift-and-add: for every set bit of b the current a is
    XORed into the product, and a is doubled (xtime) between bits.

    Args:
        a: First byte
        b: Second byte

    Returns:
        The product as a byte
    """
    product = 0
    for _ in range(8):
        if b & 1:
            product ^= a
        high_bit = a & 0x80
        a = (a << 1) & 0xFF
        if high_bit:
            a ^= REDUCTION
        b >>= 1
    return product


def xtime(a: int) -> int:
    """Multiply a byte by x (that is, by 2) in GF(2^8)."""
    return gmul(a, 2)
