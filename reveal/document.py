"""
Share Documents
The input unit for one reconstruction: a threshold plus share records.

On the wire a document is a JSON object:

    {
        "keys": {"n": 4, "k": 3},
        "1": {"base": "10", "value": "4"},
        "2": {"base": "2", "value": "111"},
        ...
    }

"keys" is reserved; every other entry is a share keyed by its index.
"""

import json
import logging
from dataclasses import dataclass

from reveal.errors import (
    DuplicateIndex,
    InvalidThreshold,
    MalformedDocument,
    MalformedRecord,
)
from reveal.points import Point, decode

logger = logging.getLogger(__name__)

KEYS_ENTRY = "keys"


@dataclass(frozen=True)
class Threshold:
    """k-of-n parameters. n is informational and may be absent."""
    k: int
    n: int | None = None

    def __post_init__(self):
        if not isinstance(self.k, int) or isinstance(self.k, bool) or self.k < 1:
            raise InvalidThreshold(f"k must be an integer >= 1, got {self.k!r}")
        if self.n is not None:
            if not isinstance(self.n, int) or isinstance(self.n, bool):
                raise InvalidThreshold(f"n must be an integer, got {self.n!r}")
            if self.n < self.k:
                raise InvalidThreshold(f"k = {self.k} exceeds n = {self.n}")

    def to_dict(self) -> dict:
        if self.n is None:
            return {"k": self.k}
        return {"n": self.n, "k": self.k}


@dataclass(frozen=True)
class ShareRecord:
    """One share as stored: a radix and a digit string, both strings."""
    base: str
    value: str

    def as_dict(self) -> dict:
        return {"base": self.base, "value": self.value}


@dataclass(frozen=True)
class ShareDocument:
    """A threshold and its share records, in the order they were read."""
    threshold: Threshold
    records: tuple[tuple[str, ShareRecord], ...]

    @classmethod
    def from_mapping(cls, entries) -> "ShareDocument":
        """
        Build a document from a mapping or (key, value) pairs.

        Raises:
            InvalidThreshold: If "keys" is missing or invalid.
            MalformedRecord: If a share entry is not {base, value} strings.
        """
        pairs = entries.items() if isinstance(entries, dict) else entries

        threshold = None
        records = []
        for key, value in pairs:
            if key == KEYS_ENTRY:
                threshold = _parse_keys(value)
                continue
            if not isinstance(value, dict):
                raise MalformedRecord(f"Share {key}: expected an object, got {type(value).__name__}")
            base = value.get("base")
            digits = value.get("value")
            if not isinstance(base, str) or not isinstance(digits, str):
                raise MalformedRecord(f"Share {key}: 'base' and 'value' must be strings")
            records.append((key, ShareRecord(base=base, value=digits)))

        if threshold is None:
            raise InvalidThreshold(f"Document has no {KEYS_ENTRY!r} entry")
        return cls(threshold=threshold, records=tuple(records))

    @classmethod
    def from_json(cls, text: str | bytes) -> "ShareDocument":
        """Parse a JSON document, rejecting repeated top-level keys."""
        try:
            parsed = json.loads(text, object_pairs_hook=_ObjectPairs)
        except ValueError as e:
            # JSONDecodeError, bad bytes encoding, or an integer literal too long to parse
            raise MalformedDocument(f"Invalid JSON: {e}") from e
        if not isinstance(parsed, _ObjectPairs):
            raise MalformedDocument("Share document must be a JSON object")

        entries = {}
        for key, value in parsed:
            if key in entries:
                raise DuplicateIndex(f"Key {key!r} appears more than once")
            error = InvalidThreshold if key == KEYS_ENTRY else MalformedRecord
            entries[key] = _to_plain(value, error, key)
        return cls.from_mapping(entries)

    def to_json(self) -> str:
        data = {KEYS_ENTRY: self.threshold.to_dict()}
        for key, record in self.records:
            data[key] = record.as_dict()
        return json.dumps(data, indent=2)

    def points(self) -> list[Point]:
        """Decode the records into points sorted by x."""
        return decode(self.records)


def _parse_keys(value) -> Threshold:
    if not isinstance(value, dict) or "k" not in value:
        raise InvalidThreshold(f"{KEYS_ENTRY!r} must be an object with 'k'")
    return Threshold(k=value["k"], n=value.get("n"))


class _ObjectPairs(list):
    """A JSON object kept as its (key, value) pairs so repeated keys stay visible."""


def _to_plain(value, error: type, entry: str):
    """Turn nested _ObjectPairs into dicts; a repeated key raises ``error``."""
    if isinstance(value, _ObjectPairs):
        result = {}
        for key, item in value:
            if key in result:
                raise error(f"Entry {entry!r}: key {key!r} appears more than once")
            result[key] = _to_plain(item, error, entry)
        return result
    if isinstance(value, list):
        return [_to_plain(item, error, entry) for item in value]
    return value
