"""Exception hierarchy for the steganography pipeline."""

from __future__ import annotations


class StegoError(Exception):
    """Base class for every failure in encoding or decoding."""

    message = "steganography error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message if message is not None else self.message)


class InvalidJpegError(StegoError):
    """The cover image could not be parsed as a valid JPEG."""

    def __init__(self, detail: object) -> None:
        self.detail = detail
        super().__init__(f"invalid JPEG: {detail}")
        if isinstance(detail, BaseException):
            self.__cause__ = detail


class ImageTooSmallError(StegoError):
    """The image is too small or has too few usable coefficients."""

    message = "image too small for embedding"


class ImageTooLargeError(StegoError):
    """The image dimensions exceed the maximum allowed."""

    message = "image too large (max 8192px / 16MP)"


class MessageTooLargeError(StegoError):
    """The message does not fit the cover image's capacity."""

    message = "message too large for this image"


class FrameCorruptedError(StegoError):
    """The extracted payload frame is truncated or fails its CRC check."""

    message = "payload frame CRC mismatch"


class DecryptionFailedError(StegoError):
    """Authenticated decryption failed (wrong passphrase or corrupted data)."""

    message = "decryption failed (wrong passphrase?)"


class InvalidUtf8Error(StegoError):
    """The extracted plaintext is not valid UTF-8."""

    message = "extracted text is not valid UTF-8"


class NoLuminanceChannelError(StegoError):
    """The cover image has no luminance component."""

    message = "image has no luminance channel"


class OperationCancelledError(StegoError):
    """The operation was cancelled by the user."""

    message = "operation cancelled by user"