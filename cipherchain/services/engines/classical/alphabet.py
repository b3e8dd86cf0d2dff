import string
from typing import Callable

ALPHABET = string.ascii_uppercase


def map_letters(text: str, transform: Callable[[int], int]) -> str:
    """
    Apply a position transform to every ASCII letter of text.

    Letters are mapped to 0-25, passed through transform, and mapped back
    in their original case. Every other character is kept as is.
    """
    result = []

    for char in text:
        if "A" <= char <= "Z":
            result.append(chr(transform(ord(char) - 65) % 26 + 65))
        elif "a" <= char <= "z":
            result.append(chr(transform(ord(char) - 97) % 26 + 97))
        else:
            result.append(char)

    return "".join(result)
