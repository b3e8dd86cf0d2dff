"""Classical letter-substitution cipher engines."""

from cipherchain.services.engines.classical.affine import AffineEngine
from cipherchain.services.engines.classical.caesar import CaesarEngine
from cipherchain.services.engines.classical.monoalphabetic import MonoalphabeticEngine

__all__ = [
    "AffineEngine",
    "CaesarEngine",
    "MonoalphabeticEngine",
]
