"""Closed-form Bloom filter sizing.

Given the number of elements ``n`` a filter should hold and the target
false-positive probability ``p``, the optimal bit count and hash count are::

    m = ceil(-(n * ln p) / (ln 2) ** 2)
    k = max(1, round((m / n) * ln 2))

``k`` is rounded half away from zero, so ``6.5`` becomes ``7``. The builtin
``round`` rounds half to even and would give ``6``.
"""
from __future__ import annotations

import logging
import math
from numbers import Integral, Real
from typing import Tuple

from .errors import InvalidParameters

logger = logging.getLogger(__name__)

LN2 = math.log(2)


def round_half_away_from_zero(value: float) -> int:
    """Round ``value`` to the nearest integer, ties away from zero."""
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def optimal_parameters(n: int, p: float) -> Tuple[int, int]:
    """Return ``(m, k)`` for ``n`` expected elements at false-positive rate ``p``.

    Raises:
        InvalidParameters: If ``n`` is not a positive integer or ``p`` is not
            strictly between 0 and 1.
    """
    if isinstance(n, bool) or not isinstance(n, Integral) or n < 1:
        raise InvalidParameters(f"n must be a positive integer, got {n!r}")
    if isinstance(p, bool) or not isinstance(p, Real) or not 0 < p < 1:
        raise InvalidParameters(f"p must be in (0, 1), got {p!r}")

    m = math.ceil(-(n * math.log(p)) / (LN2 ** 2))
    k = max(1, round_half_away_from_zero((m / n) * LN2))
    logger.debug("sized filter for n=%d p=%g: m=%d k=%d", n, p, m, k)
    return m, k


def expected_false_positive_rate(m: int, k: int, n: int) -> float:
    """Approximate false-positive rate ``(1 - e^(-kn/m))^k``.

    Assumes hash outputs behave as independent uniform variables, so this is
    advisory rather than a guarantee.
    """
    if m < 1:
        raise InvalidParameters(f"m must be positive, got {m}")
    if k < 1:
        raise InvalidParameters(f"k must be positive, got {k}")
    if n < 0:
        raise InvalidParameters(f"n must not be negative, got {n}")
    return (1.0 - math.exp(-k * n / m)) ** k
