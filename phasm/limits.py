"""Image dimension limits for encoding."""

from __future__ import annotations

from phasm.errors import ImageTooLargeError, ImageTooSmallError

MAX_DIMENSION = 8192
"""Maximum width or height in pixels."""

MAX_PIXELS = 16_000_000
"""Maximum total pixel count (width times height)."""

MIN_ENCODE_DIMENSION = 200
"""Minimum width or height in pixels."""

ARMOR_TARGET_DIMENSION = 1600
"""Longest side that robust-mode covers are resized to before encoding."""


def validate_encode_dimensions(width: int, height: int) -> None:
    """Check that an image's dimensions are within the encodable bounds.

    Raises ImageTooSmallError if either side is under 200 px, and
    ImageTooLargeError if either side exceeds 8192 px or the image has more
    than 16 million pixels.
    """
    if width < MIN_ENCODE_DIMENSION or height < MIN_ENCODE_DIMENSION:
        raise ImageTooSmallError()
    if width > MAX_DIMENSION or height > MAX_DIMENSION or width * height > MAX_PIXELS:
        raise ImageTooLargeError()