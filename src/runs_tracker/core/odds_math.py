"""
Odds conversion and vig removal mathematics.

All probability values are decimals in [0, 1].
American odds are numbers like -110 or +150.

Pure functions only: no I/O, no logging.
"""

from __future__ import annotations

import math

from runs_tracker.models.probability import FairProbabilityPair


def american_to_prob(odds: float) -> float:
    """
    Convert American odds to raw implied probability (vig included).

    Args:
        odds: American odds (-110, +150, etc.), must be finite

    Returns:
        Implied probability in (0, 1]

    Examples:
        >>> american_to_prob(-110)  # Favorite
        0.5238...
        >>> american_to_prob(+150)  # Underdog
        0.4
    """
    if odds < 0:
        # Favorite: prob = |odds| / (|odds| + 100)
        return -odds / (-odds + 100)
    else:
        # Underdog: prob = 100 / (odds + 100)
        return 100 / (odds + 100)


def no_vig_two_way(p_a: float, p_b: float) -> tuple[float, float]:
    """
    Remove vig from two-way market using proportional method.

    Args:
        p_a: Implied probability of outcome A
        p_b: Implied probability of outcome B

    Returns:
        (p_a_no_vig, p_b_no_vig) tuple, summing to exactly 1

    Raises:
        ValueError: if the overround is not positive (both sides zero)

    Examples:
        >>> no_vig_two_way(0.5238, 0.5238)  # Both -110
        (0.5, 0.5)
    """
    overround = p_a + p_b

    if not overround > 0:
        raise ValueError(f"Overround must be > 0, got {overround}")

    p_a_nv = p_a / overround

    return p_a_nv, 1.0 - p_a_nv


def devig_two_way(p_over_raw: float, p_under_raw: float) -> FairProbabilityPair:
    """
    De-vig an over/under pair into fair probabilities.

    The margin is assumed to be spread proportionally across both sides.
    """
    p_over, p_under = no_vig_two_way(p_over_raw, p_under_raw)
    return FairProbabilityPair(p_over=p_over, p_under=p_under)


def get_overround(probs: list[float]) -> float:
    """
    Calculate overround (vigorish) from implied probabilities.

    Args:
        probs: List of implied probabilities

    Returns:
        Overround value (1.0 = no vig, >1.0 = vig present)

    Examples:
        >>> get_overround([0.5, 0.5])  # Fair odds
        1.0
        >>> get_overround([0.5238, 0.5238])  # Both -110
        1.0476...
    """
    return sum(probs)


def get_vig_pct(overround: float) -> float:
    """
    Convert overround to vig percentage.

    Examples:
        >>> get_vig_pct(1.0476)  # -110 / -110 market
        4.76
    """
    return (overround - 1.0) * 100.0


def is_finite_number(value: object) -> bool:
    """True for real numbers that are neither NaN nor infinite."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)
