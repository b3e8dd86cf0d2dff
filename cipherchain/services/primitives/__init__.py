"""Low-level building blocks: GF(2^8), modular arithmetic, AES, padding, codecs."""
