"""Normalizers: dates, payload/charset decoding, HTML sanitization."""

from feedroute.normalize.dates import CHINA_TZ, now_fallback, parse_date
from feedroute.normalize.encoding import (
    decode_byte_payload,
    decode_bytes,
    inflate,
    inflate_payload,
)
from feedroute.normalize.sanitize import (
    DEFAULT_IMAGE_ATTRS,
    Marker,
    fix_images,
    remove_marked,
    sanitize,
)

__all__ = [
    # Dates
    "CHINA_TZ",
    "parse_date",
    "now_fallback",
    # Encoding
    "decode_byte_payload",
    "decode_bytes",
    "inflate",
    "inflate_payload",
    # Sanitization
    "DEFAULT_IMAGE_ATTRS",
    "Marker",
    "fix_images",
    "remove_marked",
    "sanitize",
]
