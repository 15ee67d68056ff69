"""Bounded test-and-retry loop for the randomized sampling steps."""

from __future__ import annotations

import logging
from typing import Callable, Type, TypeVar

from .errors import NoGoodEvaluationPoint

logger = logging.getLogger(__name__)

T = TypeVar("T")


def retry_until(
    draw: Callable[[], T],
    accept: Callable[[T], bool],
    max_attempts: int,
    description: str = "evaluation point",
    error: Type[NoGoodEvaluationPoint] = NoGoodEvaluationPoint,
) -> T:
    """Draw candidates until one is accepted.

    Args:
        draw:         Produces a fresh random candidate on every call.
        accept:       Predicate deciding whether a candidate is usable.
        max_attempts: Number of draws before giving up.
        description:  Human-readable name of the candidate, used in messages.
        error:        Exception type raised on exhaustion; constructed as
                      ``error(description, max_attempts)``.

    Returns:
        The first accepted candidate.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be positive, got {max_attempts}")
    for attempt in range(1, max_attempts + 1):
        candidate = draw()
        if accept(candidate):
            logger.debug("Accepted %s %s on attempt %d", description, candidate, attempt)
            return candidate
    raise error(description, max_attempts)
