"""
Interpolation Engine
Recover f(0) from k points using Lagrange interpolation over the integers.

Evaluating the Lagrange basis at x = 0 collapses it to

    L_j(0) = prod_{m != j} (-x_m) / (x_j - x_m)

so the secret is sum_j y_j * L_j(0), with no polynomial ever built.

There is no prime field here: shares are plain integers, so every term is
a rational number. Terms are summed over a common denominator and divided
once at the end. For points on an integer polynomial of degree < k that
final division is exact, whatever the spacing of the x values.

Rounding rule: if the final division is not exact, the quotient is
truncated toward zero and InexactInterpolation is reported.
"""

import itertools
import logging
import warnings
from math import gcd

from reveal.errors import (
    DegenerateDenominator,
    InexactInterpolation,
    InsufficientPoints,
    InvalidThreshold,
)
from reveal.points import Point

logger = logging.getLogger(__name__)


def _div_trunc(a: int, b: int) -> tuple[int, int]:
    """Divide truncating toward zero; returns (quotient, remainder)."""
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        q = -q
    return q, a - q * b


def _check_threshold(points: list[Point], k: int) -> None:
    if not isinstance(k, int) or isinstance(k, bool) or k < 1:
        raise InvalidThreshold(f"Threshold must be at least 1, got {k!r}")
    if len(points) < k:
        raise InsufficientPoints(f"Need at least {k} points, got {len(points)}")


def select_points(points: list[Point], k: int) -> list[Point]:
    """Sort points by x and keep the first k (the active set)."""
    _check_threshold(points, k)
    return sorted(points, key=lambda p: p.x)[:k]


def interpolate_at_zero_detailed(points: list[Point], k: int) -> tuple[int, bool]:
    """
    Interpolate the first k points at x = 0.

    Returns:
        (secret, exact). exact is False when the sum of the basis terms is
        not an integer; secret is then truncated toward zero.

    Raises:
        InvalidThreshold: If k < 1.
        InsufficientPoints: If fewer than k points are given.
        DegenerateDenominator: If two active points share an x.
    """
    _check_threshold(points, k)
    active = points[:k]

    # Running sum as acc_num / acc_den, acc_den > 0 and reduced
    acc_num = 0
    acc_den = 1

    for j, pj in enumerate(active):
        numerator = 1
        denominator = 1
        for m, pm in enumerate(active):
            if m == j:
                continue
            if pj.x == pm.x:
                raise DegenerateDenominator(
                    f"Points {j} and {m} share x = {pj.x}"
                )
            numerator *= -pm.x
            denominator *= pj.x - pm.x

        term_num = pj.y * numerator
        if denominator < 0:
            term_num, denominator = -term_num, -denominator

        acc_num = acc_num * denominator + term_num * acc_den
        acc_den *= denominator
        g = gcd(acc_num, acc_den)
        if g > 1:
            acc_num //= g
            acc_den //= g

    secret, remainder = _div_trunc(acc_num, acc_den)
    return secret, remainder == 0


def interpolate_at_zero(points: list[Point], k: int, *, strict: bool = False) -> int:
    """
    Reconstruct the secret (the constant term) from the first k points.

    Args:
        points: Points sorted ascending by x, as produced by decode().
        k: Threshold, the number of points to use.
        strict: Raise InexactInterpolation instead of warning.

    Returns:
        The polynomial's value at x = 0.
    """
    secret, exact = interpolate_at_zero_detailed(points, k)
    if not exact:
        report_inexact(k, strict=strict, stacklevel=3)
    return secret


def report_inexact(k: int, strict: bool = False, label: str = "", stacklevel: int = 2) -> None:
    """
    Report an interpolation whose final division left a remainder.

    Raises InexactInterpolation when strict, otherwise logs and warns.
    """
    prefix = f"{label}: " if label else ""
    message = (
        f"{prefix}points do not lie on an integer polynomial of degree < {k}; "
        f"result truncated toward zero"
    )
    if strict:
        raise InexactInterpolation(message)
    logger.warning(message)
    warnings.warn(message, InexactInterpolation, stacklevel=stacklevel)


def verify_points(points: list[Point], k: int, secret: int, limit: int | None = None) -> bool:
    """
    Check that every k-subset of points reconstructs the same secret.

    A tampered or mistyped share makes the subsets disagree. With limit set,
    only the first ``limit`` subsets (in combination order) are checked.
    """
    _check_threshold(points, k)
    subsets = itertools.combinations(points, k)
    if limit is not None:
        subsets = itertools.islice(subsets, limit)

    checked = 0
    for subset in subsets:
        value, exact = interpolate_at_zero_detailed(list(subset), k)
        checked += 1
        if not exact or value != secret:
            logger.warning(
                "Share subset %s disagrees with the reconstructed secret",
                [p.x for p in subset],
            )
            return False

    logger.debug("Verified %d subsets of size %d", checked, k)
    return True
