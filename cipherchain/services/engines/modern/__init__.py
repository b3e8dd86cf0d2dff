"""Modern block cipher engines."""

from cipherchain.services.engines.modern.aes import AESEngine

__all__ = ["AESEngine"]
