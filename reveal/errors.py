"""
Reconstruction errors.

Every failure is a ValueError: a reconstruction either gets valid shares
or it stops. Decoding errors name the offending record key, engine errors
name the offending parameter.
"""


class RevealError(ValueError):
    """Base class for every reconstruction failure."""


# --- Decoding ---

class MalformedIndex(RevealError):
    """A share key is not a base-10 integer."""


class InvalidBase(RevealError):
    """A share's base is unparsable or outside [2, 36]."""


class InvalidDigitString(RevealError):
    """A share value contains a character that is not a digit in its base."""


class DuplicateIndex(RevealError):
    """Two shares decode to the same x."""


class MalformedRecord(RevealError):
    """A share entry is not a {base, value} record."""


class MalformedDocument(RevealError):
    """A share document is not valid JSON or not a JSON object."""


# --- Engine ---

class InvalidThreshold(RevealError):
    """k is missing, below 1, or inconsistent with n."""


class InsufficientPoints(RevealError):
    """Fewer points than the threshold requires."""


class DegenerateDenominator(RevealError):
    """Two points in the active set share an x, so a basis denominator is zero."""


class InexactInterpolation(RevealError, UserWarning):
    """
    The points do not lie on a common integer polynomial of degree < k.

    Emitted as a warning by default (the truncated value is still returned),
    raised when the caller asks for strict reconstruction.
    """


# --- Storage ---

class SourceError(RevealError):
    """A share source could not be read or decrypted."""
