"""
Reveal: threshold secret reconstruction
Recover the secret behind k-of-n shares with exact integer Lagrange interpolation.

Shares are points (x, y) on a polynomial whose constant term is the secret.
Each y arrives as a digit string in its own radix (2 to 36) and may be
arbitrarily long. Reconstruction never leaves the integers: no floating
point, no prime field, no precision loss.

Usage:
    from reveal import ShareDocument, reconstruct
    document = ShareDocument.from_json(open("testcase1.json").read())
    print(reconstruct(document).secret)
"""

from reveal.config import RevealConfig
from reveal.document import ShareDocument, ShareRecord, Threshold
from reveal.errors import (
    RevealError,
    MalformedIndex,
    InvalidBase,
    InvalidDigitString,
    DuplicateIndex,
    MalformedRecord,
    MalformedDocument,
    InvalidThreshold,
    InsufficientPoints,
    DegenerateDenominator,
    InexactInterpolation,
    SourceError,
)
from reveal.lagrange import interpolate_at_zero, select_points, verify_points
from reveal.points import Point, decode, encode_digits
from reveal.reconstruct import Reconstruction, Outcome, reconstruct, solve, solve_many
from reveal.sources import ShareSource, JsonFileSource, EncryptedFileSource, open_source

__version__ = "0.1.0"
__all__ = [
    "Point",
    "decode",
    "encode_digits",
    "interpolate_at_zero",
    "select_points",
    "verify_points",
    "ShareDocument",
    "ShareRecord",
    "Threshold",
    "Reconstruction",
    "Outcome",
    "reconstruct",
    "solve",
    "solve_many",
    "RevealConfig",
    "ShareSource",
    "JsonFileSource",
    "EncryptedFileSource",
    "open_source",
    "RevealError",
    "MalformedIndex",
    "InvalidBase",
    "InvalidDigitString",
    "DuplicateIndex",
    "MalformedRecord",
    "MalformedDocument",
    "InvalidThreshold",
    "InsufficientPoints",
    "DegenerateDenominator",
    "InexactInterpolation",
    "SourceError",
]
