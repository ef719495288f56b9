"""
Reconstruction Pipeline
One share document in, one secret out.

Per input:
  1. Decode the records into points (sorted by x)
  2. Check the declared share count
  3. Select the first k points
  4. Interpolate at x = 0
  5. Optionally verify that every k-subset agrees

A reconstruction is all-or-nothing: any failure raises and no partial
result is returned. solve_many() isolates failures so that one bad input
does not stop the others.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from reveal.config import RevealConfig
from reveal.document import ShareDocument
from reveal.errors import InvalidThreshold, RevealError
from reveal.lagrange import (
    interpolate_at_zero_detailed,
    report_inexact,
    select_points,
    verify_points,
)
from reveal.points import Point
from reveal.sources import ShareSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reconstruction:
    """The recovered secret and how it was obtained."""
    secret: int
    threshold: int
    points: tuple[Point, ...]  # The active set, sorted by x
    exact: bool
    verified: bool | None = None  # None when verification was not requested
    source: str = ""


@dataclass(frozen=True)
class Outcome:
    """Result of one input in a batch: either a reconstruction or an error."""
    source: str
    result: Reconstruction | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _check_count(document: ShareDocument, config: RevealConfig, label: str) -> None:
    declared = document.threshold.n
    supplied = len(document.records)
    if declared is None or declared == supplied:
        return
    message = f"{label}: declared n = {declared} but {supplied} shares supplied"
    if config.strict_count:
        raise InvalidThreshold(message)
    logger.warning(message)


def reconstruct(
    document: ShareDocument,
    config: RevealConfig = None,
    source: str = "",
) -> Reconstruction:
    """
    Reconstruct the secret held by a share document.

    Args:
        document: Threshold and share records.
        config: Run settings (defaults when omitted).
        source: Label for log and error messages.

    Returns:
        The Reconstruction.

    Raises:
        RevealError: On any decoding or engine failure.
    """
    config = config or RevealConfig()
    label = source or "<document>"
    k = document.threshold.k

    points = document.points()
    _check_count(document, config, label)
    active = select_points(points, k)

    secret, exact = interpolate_at_zero_detailed(active, k)
    if not exact:
        report_inexact(k, strict=config.strict, label=label, stacklevel=3)

    verified = None
    if config.verify:
        verified = verify_points(points, k, secret, limit=config.verify_limit)
        if not verified:
            logger.warning("%s: share subsets disagree; secret is untrusted", label)

    logger.info("%s: reconstructed secret from %d of %d shares", label, k, len(points))
    return Reconstruction(
        secret=secret,
        threshold=k,
        points=tuple(active),
        exact=exact,
        verified=verified,
        source=source,
    )


def solve(source: ShareSource, config: RevealConfig = None) -> Reconstruction:
    """Load a source and reconstruct its secret."""
    document = source.load()
    return reconstruct(document, config, source=str(source))


def _solve_isolated(source: ShareSource, config: RevealConfig) -> Outcome:
    try:
        return Outcome(source=str(source), result=solve(source, config))
    except RevealError as e:
        logger.error("%s: %s", source, e)
        return Outcome(source=str(source), error=e)


def solve_many(sources: list[ShareSource], config: RevealConfig = None) -> list[Outcome]:
    """
    Reconstruct every source independently.

    Inputs share no state, so with config.jobs > 1 they run on a thread
    pool. Outcomes are returned in input order.
    """
    config = config or RevealConfig()
    if config.jobs == 1 or len(sources) < 2:
        return [_solve_isolated(s, config) for s in sources]

    with ThreadPoolExecutor(max_workers=config.jobs) as pool:
        return list(pool.map(lambda s: _solve_isolated(s, config), sources))
