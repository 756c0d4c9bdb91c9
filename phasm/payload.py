"""Payload serialisation, compression and file embedding.

A payload is ``[flags byte][inner]`` where the inner part is raw or
Brotli-compressed depending on the low two bits of the flags. After
decompression the inner part is::

    [text bytes]   UTF-8 message (may be empty)
    [0x00]         separator, present only if files follow
    [file entry]*  zero or more entries

Each file entry is ``[name_len u8][name][content_len u32 BE][content]``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

import brotli

from phasm.errors import (
    FrameCorruptedError,
    InvalidUtf8Error,
    MessageTooLargeError,
    StegoError,
)

COMPRESS_NONE = 0b00
COMPRESS_BROTLI = 0b01
COMPRESS_MASK = 0b11

BROTLI_QUALITY = 11
BROTLI_LG_WINDOW_SIZE = 22

MAX_RAW_FILE_SIZE = 2 * 1024 * 1024
MAX_FILENAME_BYTES = 255

# Upper bound on decompressed output, guarding against decompression bombs.
DECOMPRESS_LIMIT = 128 * 1024
_DECOMPRESS_CHUNK = 1024


@dataclass(frozen=True)
class FileEntry:
    """A file embedded in the payload."""

    filename: str
    content: bytes


@dataclass
class PayloadData:
    """Decoded payload: a text message and any attached files."""

    text: str
    files: list[FileEntry] = field(default_factory=list)


def encode_payload(text: str, files: Sequence[FileEntry] = ()) -> bytes:
    """Serialise text and files into ``[flags][inner]``, compressing if smaller.

    Raises MessageTooLargeError if a file exceeds MAX_RAW_FILE_SIZE or its
    name is longer than 255 bytes in UTF-8.
    """
    files = list(files)
    for entry in files:
        if len(entry.content) > MAX_RAW_FILE_SIZE:
            raise MessageTooLargeError()
        if len(entry.filename.encode("utf-8")) > MAX_FILENAME_BYTES:
            raise MessageTooLargeError()
    return _try_compress(_serialize_inner(text, files))


def compressed_payload_size(text: str, files: Sequence[FileEntry] = ()) -> int:
    """Size in bytes that encode_payload would produce.

    Falls back to the raw text length plus the flags byte if encoding fails.
    """
    try:
        return len(encode_payload(text, files))
    except StegoError:
        return len(text.encode("utf-8")) + 1


def decode_payload(data: bytes) -> PayloadData:
    """Decode ``[flags][inner]`` as produced by encode_payload."""
    data = bytes(data)
    if not data:
        raise FrameCorruptedError()
    method = data[0] & COMPRESS_MASK
    body = data[1:]
    if method == COMPRESS_NONE:
        inner = body
    elif method == COMPRESS_BROTLI:
        inner = _decompress_brotli(body)
    else:
        raise FrameCorruptedError()
    return _parse_inner(inner)


def _serialize_inner(text: str, files: Iterable[FileEntry]) -> bytes:
    buf = bytearray(text.encode("utf-8"))
    files = list(files)
    if files:
        buf.append(0x00)
        for entry in files:
            name = entry.filename.encode("utf-8")[:MAX_FILENAME_BYTES]
            buf.append(len(name))
            buf += name
            buf += len(entry.content).to_bytes(4, "big")
            buf += entry.content
    return bytes(buf)


def _decode_utf8(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidUtf8Error() from exc


def _parse_inner(data: bytes) -> PayloadData:
    separator = data.find(b"\x00")
    if separator < 0:
        return PayloadData(text=_decode_utf8(data), files=[])

    text = _decode_utf8(data[:separator])
    files: list[FileEntry] = []
    cursor = separator + 1
    end = len(data)
    while cursor < end:
        name_len = data[cursor]
        cursor += 1
        if name_len == 0 or cursor + name_len > end:
            raise FrameCorruptedError()
        filename = _decode_utf8(data[cursor : cursor + name_len])
        cursor += name_len

        if cursor + 4 > end:
            raise FrameCorruptedError()
        content_len = int.from_bytes(data[cursor : cursor + 4], "big")
        cursor += 4

        if cursor + content_len > end:
            raise FrameCorruptedError()
        files.append(FileEntry(filename=filename, content=data[cursor : cursor + content_len]))
        cursor += content_len
    return PayloadData(text=text, files=files)


def _try_compress(inner: bytes) -> bytes:
    compressed = brotli.compress(inner, quality=BROTLI_QUALITY, lgwin=BROTLI_LG_WINDOW_SIZE)
    if len(compressed) < len(inner):
        return bytes([COMPRESS_BROTLI]) + compressed
    return bytes([COMPRESS_NONE]) + inner


def _decompress_brotli(data: bytes) -> bytes:
    decompressor = brotli.Decompressor()
    out = bytearray()
    try:
        for start in range(0, len(data), _DECOMPRESS_CHUNK):
            out += decompressor.process(data[start : start + _DECOMPRESS_CHUNK])
            if len(out) >= DECOMPRESS_LIMIT:
                return bytes(out[:DECOMPRESS_LIMIT])
    except brotli.error as exc:
        raise FrameCorruptedError() from exc
    if not decompressor.is_finished():
        raise FrameCorruptedError()
    return bytes(out)