"""
Point Decoder
Turn raw share records into (x, y) points.

Each record is keyed by its index (a base-10 integer, the x-coordinate) and
carries a radix and a digit string (the y-coordinate). Values are unbounded:
y is a Python int, so there is no overflow however long the digit string.

Points always come out sorted by x. Nothing downstream depends on the order
the records were supplied in.
"""

import logging
import re
import string
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from reveal.errors import (
    DuplicateIndex,
    InvalidBase,
    InvalidDigitString,
    MalformedIndex,
    MalformedRecord,
)

logger = logging.getLogger(__name__)

MIN_BASE = 2
MAX_BASE = 36

# Digit alphabet shared by the parser and the encoder
DIGITS = string.digits + string.ascii_lowercase

_DIGIT_VALUES = {ch: i for i, ch in enumerate(DIGITS)}

# Below this many digits the simple loop beats splitting
_SPLIT_THRESHOLD = 64

_DECIMAL = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_DECIMAL = re.compile(r"[0-9]+")


def _digits_to_int(body: str, base: int) -> int:
    """
    Convert validated lowercase ASCII digits to an int.

    int() refuses long non-power-of-two strings (the interpreter's
    str-digits limit), so the conversion is done here: split in half,
    combine as high * base**len(low) + low.
    """
    if len(body) <= _SPLIT_THRESHOLD:
        value = 0
        for ch in body:
            value = value * base + _DIGIT_VALUES[ch]
        return value
    mid = len(body) // 2
    low = body[mid:]
    return _digits_to_int(body[:mid], base) * base ** len(low) + _digits_to_int(low, base)


def _signed(text: str, base: int) -> int:
    sign = -1 if text[:1] == "-" else 1
    body = text[1:] if text[:1] in ("+", "-") else text
    return sign * _digits_to_int(body.lower(), base)


@dataclass(frozen=True)
class Point:
    """A single share decoded to integer coordinates."""
    x: int
    y: int


def parse_index(key: str) -> int:
    """Parse a share key as a signed base-10 integer."""
    if not isinstance(key, str) or not _DECIMAL.fullmatch(key):
        raise MalformedIndex(f"Invalid share index: {key!r}")
    return _signed(key, 10)


def parse_base(base: str, key: str = "?") -> int:
    """Parse a radix string and check it lies in [2, 36]."""
    if not isinstance(base, str) or not _UNSIGNED_DECIMAL.fullmatch(base):
        raise InvalidBase(f"Share {key}: invalid base {base!r}")
    radix = _digits_to_int(base.lstrip("0") or "0", 10)
    if not MIN_BASE <= radix <= MAX_BASE:
        raise InvalidBase(
            f"Share {key}: base {radix} outside [{MIN_BASE}, {MAX_BASE}]"
        )
    return radix


def parse_digits(digits: str, base: int, key: str = "?") -> int:
    """
    Parse a digit string in the given base.

    Letters stand for digits above 9 and are case-insensitive. An optional
    leading sign is accepted. Every remaining character must be a valid
    digit in ``base``; there is no whitespace or underscore tolerance.
    """
    if not isinstance(digits, str):
        raise InvalidDigitString(f"Share {key}: value must be a string")

    body = digits[1:] if digits[:1] in ("+", "-") else digits
    if not body:
        raise InvalidDigitString(f"Share {key}: empty value {digits!r}")

    allowed = DIGITS[:base]
    for ch in body:
        if not ch.isascii() or ch.lower() not in allowed:
            raise InvalidDigitString(
                f"Share {key}: {ch!r} is not a base-{base} digit in {digits!r}"
            )
    return _signed(digits, base)


def encode_digits(value: int, base: int) -> str:
    """Write an integer in the given base (inverse of parse_digits)."""
    if not MIN_BASE <= base <= MAX_BASE:
        raise InvalidBase(f"base {base} outside [{MIN_BASE}, {MAX_BASE}]")
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    value = abs(value)
    out = []
    while value:
        value, rem = divmod(value, base)
        out.append(DIGITS[rem])
    return sign + "".join(reversed(out))


def decode_record(key: str, record: Mapping) -> Point:
    """Decode one {base, value} record keyed by its index."""
    x = parse_index(key)
    if not isinstance(record, Mapping) or "base" not in record or "value" not in record:
        raise MalformedRecord(f"Share {key}: expected an object with 'base' and 'value'")
    base = parse_base(record["base"], key)
    y = parse_digits(record["value"], base, key)
    return Point(x=x, y=y)


def decode(records: Mapping | Iterable) -> list[Point]:
    """
    Decode share records into points sorted ascending by x.

    Args:
        records: A mapping of key -> {base, value}, or an iterable of
            (key, record) pairs. The pair form keeps repeated keys visible.

    Returns:
        Points ordered by x.

    Raises:
        MalformedIndex, InvalidBase, InvalidDigitString, MalformedRecord:
            If any record is invalid.
        DuplicateIndex: If two records decode to the same x.
    """
    pairs = records.items() if isinstance(records, Mapping) else records

    seen: dict[int, str] = {}
    points = []
    for key, record in pairs:
        # ShareRecord instances and plain dicts are both accepted
        if hasattr(record, "as_dict"):
            record = record.as_dict()
        point = decode_record(key, record)
        if point.x in seen:
            raise DuplicateIndex(
                f"Shares {seen[point.x]!r} and {key!r} both have index {point.x}"
            )
        seen[point.x] = key
        points.append(point)

    points.sort(key=lambda p: p.x)
    logger.debug("Decoded %d points", len(points))
    return points
