"""Payload and character-encoding decoding.

Two unrelated problems live here:

1. Some APIs ship article bodies as gzip streams serialized as JSON arrays of
   *signed* bytes (``[31, -117, 8, ...]``). ``inflate_payload`` turns such a
   payload back into text.
2. Some pages are served in national encodings (the GBK family). They are
   fetched as bytes and decoded with ``decode_bytes`` before parsing.

Example:
    >>> import gzip
    >>> signed = [b - 256 if b > 127 else b for b in gzip.compress("你好".encode())]
    >>> inflate_payload(signed)
    '你好'
"""

from __future__ import annotations

import codecs
import json
import zlib
from collections.abc import Iterable

from bs4.dammit import EncodingDetector

from feedroute.core.exceptions import ContentDecodeError

# Window bits: 32 + 15 auto-detects gzip or zlib headers, -15 is raw DEFLATE
_AUTO_HEADER_WBITS = 47
_RAW_DEFLATE_WBITS = -15

# GB2312 and GBK are subsets of GB18030; decoding with the superset keeps
# characters that sites emit outside the declared charset.
_ENCODING_ALIASES = {
    "gb2312": "gb18030",
    "gbk": "gb18030",
    "x-gbk": "gb18030",
    "cp936": "gb18030",
}


def to_unsigned_bytes(values: Iterable[int]) -> bytes:
    """Map signed byte values (-128..127) onto 0..255.

    Example:
        >>> to_unsigned_bytes([31, -117, -1, 0])
        b'\\x1f\\x8b\\xff\\x00'
    """
    try:
        return bytes(v + 256 if v < 0 else v for v in values)
    except (TypeError, ValueError) as e:
        raise ContentDecodeError(f"Not a byte array: {e}") from e


def decode_byte_payload(raw: str | bytes | bytearray | Iterable[int] | None) -> bytes:
    """Normalize a byte payload into ``bytes``.

    Args:
        raw: JSON text of an int array, an int sequence (signed or unsigned),
            or bytes already decoded by the transport.

    Raises:
        ContentDecodeError: If the JSON text is invalid or not an int array.
    """
    if raw is None:
        return b""
    if isinstance(raw, (bytes, bytearray)):
        return bytes(raw)
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ContentDecodeError(f"Payload is not a JSON array: {e}") from e
        if not isinstance(raw, list):
            raise ContentDecodeError(f"Payload is not a JSON array: {type(raw).__name__}")
    return to_unsigned_bytes(raw)


def inflate(data: bytes) -> bytes:
    """Decompress a gzip, zlib or raw DEFLATE stream.

    Raises:
        ContentDecodeError: If ``data`` is empty or not compressed.
    """
    if not data:
        raise ContentDecodeError("Payload is empty")

    try:
        return _decompress(data, _AUTO_HEADER_WBITS)
    except zlib.error:
        pass

    try:
        return _decompress(data, _RAW_DEFLATE_WBITS)
    except zlib.error as e:
        raise ContentDecodeError(f"Decompression failed: {e}") from e


def _decompress(data: bytes, wbits: int) -> bytes:
    decompressor = zlib.decompressobj(wbits)
    output = decompressor.decompress(data)
    if not decompressor.eof:
        raise zlib.error("truncated stream")
    return output


def inflate_payload(raw: str | bytes | bytearray | Iterable[int] | None) -> str:
    """Decode, decompress and UTF-8 decode a compressed payload.

    Raises:
        ContentDecodeError: On empty input, bad JSON, bad stream or bad UTF-8.
    """
    data = inflate(decode_byte_payload(raw))
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ContentDecodeError(f"Decompressed payload is not UTF-8: {e}") from e


def normalize_encoding(encoding: str) -> str:
    """Canonical codec name, with the GBK family widened to GB18030.

    Example:
        >>> normalize_encoding("GBK")
        'gb18030'
        >>> normalize_encoding("utf8")
        'utf-8'
    """
    name = encoding.strip().lower()
    name = _ENCODING_ALIASES.get(name, name)
    try:
        return codecs.lookup(name).name
    except LookupError as e:
        raise ContentDecodeError(f"Unknown encoding: {encoding}") from e


def sniff_encoding(data: bytes, default: str = "utf-8") -> str:
    """Encoding declared by a BOM or ``<meta charset>``, else ``default``."""
    bom_stripped, bom_encoding = EncodingDetector.strip_byte_order_mark(data)
    if bom_encoding:
        return bom_encoding
    declared = EncodingDetector.find_declared_encoding(bom_stripped, is_html=True)
    return declared or default


def decode_bytes(data: bytes, encoding: str | None = None) -> str:
    """Decode raw page bytes.

    Args:
        data: Response body.
        encoding: Declared encoding; sniffed from the markup when None.

    Example:
        >>> decode_bytes("萧内网".encode("gbk"), "gbk")
        '萧内网'
    """
    codec = normalize_encoding(encoding or sniff_encoding(data))
    return data.decode(codec, errors="replace")
