"""Date normalization.

Sources publish dates in many shapes: ISO strings, vendor strings such as
``2023-10-20-09:00:00``, Chinese numeric text like ``2023年01月01日 10:00``
behind a label (``发布时间：``), epoch timestamps, or nothing at all.
``parse_date`` turns all of them into a ``datetime`` or ``None``.

A failed parse is ``None``, never the current time. Routes whose source has
no date concept call ``now_fallback()`` explicitly.

Example:
    >>> from feedroute.normalize.dates import parse_date
    >>> parse_date("2023-10-20-09:00:00")
    datetime.datetime(2023, 10, 20, 9, 0)
    >>> parse_date("发布时间：2023年01月01日 10:00")
    datetime.datetime(2023, 1, 1, 10, 0)
    >>> parse_date("not a date") is None
    True
"""

from __future__ import annotations

import logging
import re
from datetime import UTC, date, datetime, timedelta, timezone, tzinfo

from dateutil import parser as date_parser

logger = logging.getLogger(__name__)

CHINA_TZ = timezone(timedelta(hours=8), "Asia/Shanghai")

# Labels that precede the date itself, e.g. "发布时间：2023-01-01"
_LABEL_RE = re.compile(
    r"^\s*(?:发布时间|发布日期|更新时间|更新日期|时间|日期|Published|Posted|Updated|Date)\s*[：:]?\s*",
    re.IGNORECASE,
)
# "2023-10-20-09:00:00": a hyphen where the date/time space should be
_DASHED_TIME_RE = re.compile(r"^(\d{4}-\d{1,2}-\d{1,2})-(\d{1,2}:\d{2}(?::\d{2})?)$")
_CJK_DATE_RE = re.compile(r"(\d{4})\s*年\s*(\d{1,2})\s*月\s*(\d{1,2})\s*[日号]?")
_CJK_TIME_RE = re.compile(r"(\d{1,2})\s*[时點点]\s*(\d{1,2})\s*分(?:\s*(\d{1,2})\s*秒)?")
# 10 digits are seconds, 13 are milliseconds
_EPOCH_RE = re.compile(r"^-?(?:\d{10}|\d{13})(?:\.\d+)?$")
# "20231020", "202310200900", "20231020090000"
_COMPACT_RE = re.compile(r"^\d{8}(?:\d{4}(?:\d{2})?)?$")
_COMPACT_FORMATS = {8: "%Y%m%d", 12: "%Y%m%d%H%M", 14: "%Y%m%d%H%M%S"}
# Two defaults differing in every date field expose fields dateutil filled in
_FILL_DEFAULTS = (datetime(2000, 1, 1), datetime(2004, 2, 2))
_YEAR_RE = re.compile(r"\d{4}")

# dayjs-style format tokens, longest first
_FORMAT_TOKENS = (
    ("YYYY", "%Y"),
    ("MM", "%m"),
    ("DD", "%d"),
    ("HH", "%H"),
    ("mm", "%M"),
    ("ss", "%S"),
)

# Epoch values above this are milliseconds (year 5138 in seconds)
_MILLIS_THRESHOLD = 10**11


def to_strptime_format(fmt: str) -> str:
    """Translate a dayjs-style format hint into a ``strptime`` pattern.

    Example:
        >>> to_strptime_format("YYYY年MM月DD日 HH:mm")
        '%Y年%m月%d日 %H:%M'
    """
    pattern = fmt.replace("%", "%%")
    for token, directive in _FORMAT_TOKENS:
        pattern = pattern.replace(token, directive)
    return pattern


def strip_label(text: str) -> str:
    """Remove a leading label such as ``发布时间：``.

    Example:
        >>> strip_label("发布时间：2023年01月01日 10:00")
        '2023年01月01日 10:00'
    """
    return _LABEL_RE.sub("", text, count=1).strip()


def clean_date_text(text: str) -> str:
    """Rewrite vendor and CJK date text into something dateutil reads.

    Example:
        >>> clean_date_text("2023-10-20-09:00:00")
        '2023-10-20 09:00:00'
        >>> clean_date_text("2023年1月2日 9时30分")
        '2023-1-2 9:30'
    """
    text = strip_label(text.replace("　", " "))
    text = text.replace("：", ":")
    text = _DASHED_TIME_RE.sub(r"\1 \2", text)
    text = _CJK_DATE_RE.sub(r"\1-\2-\3 ", text)
    text = _CJK_TIME_RE.sub(
        lambda m: f"{m.group(1)}:{m.group(2)}" + (f":{m.group(3)}" if m.group(3) else ""),
        text,
    )
    return " ".join(text.split())


def from_timestamp(value: float) -> datetime:
    """Epoch seconds or milliseconds to an aware UTC datetime.

    Example:
        >>> from_timestamp(1700000000000)
        datetime.datetime(2023, 11, 14, 22, 13, 20, tzinfo=datetime.timezone.utc)
    """
    if abs(value) >= _MILLIS_THRESHOLD:
        value = value / 1000
    return datetime.fromtimestamp(value, tz=UTC)


def parse_date(
    value: object,
    fmt: str | None = None,
    tz: tzinfo | None = None,
) -> datetime | None:
    """Normalize a loosely formatted date.

    Args:
        value: String, epoch number, ``datetime``/``date`` or None.
        fmt: Optional dayjs-style format hint, tried before generic parsing.
        tz: Zone to attach to naive results (e.g. ``CHINA_TZ``).

    Returns:
        The parsed ``datetime``, or None when absent or unparseable.
    """
    result = _parse(value, fmt)
    if result is None:
        if value not in (None, ""):
            logger.debug(f"Unparsed date value: {value!r}")
        return None
    if tz is not None and result.tzinfo is None:
        result = result.replace(tzinfo=tz)
    return result


def _parse(value: object, fmt: str | None) -> datetime | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, (int, float)):
        try:
            return from_timestamp(value)
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(value, str):
        return None

    raw = value.strip()
    if not raw:
        return None

    if _COMPACT_RE.match(raw):
        try:
            return datetime.strptime(raw, _COMPACT_FORMATS[len(raw)])
        except ValueError:
            return None

    if _EPOCH_RE.match(raw):
        try:
            return from_timestamp(float(raw))
        except (OverflowError, OSError, ValueError):
            return None

    if fmt:
        try:
            return datetime.strptime(strip_label(raw), to_strptime_format(fmt))
        except ValueError:
            pass

    text = clean_date_text(raw)
    if not _YEAR_RE.search(text):
        # dateutil would fill a missing year from today
        return None

    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass

    try:
        first, second = (date_parser.parse(text, default=d) for d in _FILL_DEFAULTS)
    except (ValueError, OverflowError):
        return None
    if first.date() != second.date():
        # year, month or day missing from the text
        return None
    return first


def now_fallback() -> datetime:
    """Current UTC time, for sources that publish no date at all."""
    return datetime.now(UTC)
