"""Payload framing, compression, keyed permutation and syndrome-trellis coding for JPEG steganography."""

__version__ = "0.1.0"