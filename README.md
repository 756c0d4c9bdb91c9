# phasm

Building blocks for hiding encrypted messages in the DCT coefficients of
JPEG photos: payload serialisation with Brotli compression, a CRC-protected
payload frame, a seedable ChaCha20 generator, keyed coefficient permutation,
and Syndrome-Trellis Coding (STC) for minimal-distortion embedding.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Payloads

`phasm.payload` serialises a UTF-8 message and any number of attached
files. The result is `[flags byte][inner]`; the inner part is
Brotli-compressed only when that makes it smaller.

```python
from phasm.payload import FileEntry, encode_payload, decode_payload, compressed_payload_size

files = [FileEntry(filename="notes.txt", content=b"meet at noon")]
data = encode_payload("hello", files)
payload = decode_payload(data)
assert payload.text == "hello"
assert payload.files[0].filename == "notes.txt"

print(compressed_payload_size("hello", files))
```

`encode_payload` raises `MessageTooLargeError` for a file larger than 2 MB or
with a name longer than 255 UTF-8 bytes; `compressed_payload_size` then falls
back to the text length plus one. `decode_payload` raises
`FrameCorruptedError` for empty, malformed or undecompressable input and
`InvalidUtf8Error` for text or file names that are not UTF-8. Decompressed
output is capped at 128 KB.

## Frames

`phasm.frame` wraps the encrypted payload:

```
[2 bytes ] plaintext length (big-endian)
[16 bytes] salt
[12 bytes] nonce
[N bytes ] ciphertext (plaintext length + 16-byte tag)
[4 bytes ] CRC-32 of everything above
```

```python
from phasm.frame import build_frame, parse_frame, bytes_to_bits, bits_to_bytes

frame = build_frame(2, bytes(16), bytes(12), bytes(18))
parsed = parse_frame(frame)
assert parsed.plaintext_len == 2
assert bits_to_bytes(bytes_to_bits(frame)) == frame
```

`parse_frame` ignores trailing padding after the frame. A bad CRC, a
truncated frame or a length beyond `MAX_FRAME_BYTES` raises
`FrameCorruptedError`. `build_frame` raises `ValueError` for wrongly sized
salt, nonce or ciphertext.

The compact variant carries no salt or nonce. It is built with
`build_fortress_compact_frame(plaintext_len, ciphertext)` and read with
`parse_fortress_compact_frame(data, salt, nonce)`, where the caller supplies
the fixed salt and nonce to put into the returned `ParsedFrame`.

## Syndrome-Trellis Coding

```python
from phasm.stc.hhat import generate_hhat
from phasm.stc.embed import stc_embed
from phasm.stc.extract import stc_extract

h, w = 3, 5
hhat = generate_hhat(h, w, bytes([42]) * 32)
cover = [i % 2 for i in range(20)]
costs = [1.0] * 20
message = [1, 0, 1, 1]

result = stc_embed(cover, costs, message, hhat, h, w)
assert stc_extract(result.stego_bits, hhat, w)[:4] == message
print(result.total_cost)
```

Positions whose cost is not finite are never changed. `stc_embed` returns
`None` when no stego sequence can carry the message.

## Random generator and permutation

`phasm.rng.ChaCha20Rng(seed)` turns a 32-byte seed into a stream of 32-bit
words (`next_u32`) and uniform integers (`gen_range_inclusive(low, high)`),
identical on every platform. `generate_hhat` and
`phasm.permute.select_and_permute` use it, so encoder and decoder agree.

`select_and_permute(cost_map, seed)` takes any object with `blocks_wide`,
`blocks_tall` and `get(br, bc, i, j)` returning a cost, and returns
`CoeffPos(flat_idx, cost)` entries for every AC position with finite cost,
shuffled by the seed. DC positions are excluded.

## Image limits

`phasm.limits.validate_encode_dimensions(width, height)` raises
`ImageTooSmallError` for covers under 200 px on a side and
`ImageTooLargeError` for covers over 8192 px on a side or over 16 million
pixels in total.

## Progress and cancellation

`phasm.progress.ProgressTracker` keeps a step counter, a total and a
cancellation flag, and may call a `callback(step, total)` on each change.
The module-level functions (`init`, `set_total`, `advance`, `get`, `finish`,
`cancel`, `is_cancelled`, `check_cancelled`) act on one shared tracker.
`check_cancelled()` raises `OperationCancelledError` after `cancel()`.

## Errors

Every error derives from `phasm.errors.StegoError`.

## What this package does not do

It does not read or write JPEG files, compute embedding costs from an image,
derive keys from a passphrase or encrypt payloads. It offers no command-line
tool and no complete encode or decode of a photo; those steps are left to
the caller, who supplies cover bits, costs, cost maps, seeds and ciphertext.