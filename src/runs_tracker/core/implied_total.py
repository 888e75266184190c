"""
Implied-total resolution from totals markets.

Rebuilds the fair P(under) curve across alternate lines and solves for the
line where it crosses 0.5, i.e. the market's implied median total. When no
alternates are usable the resolver falls back to main lines, live before
pregame.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from runs_tracker.core.odds_math import american_to_prob, devig_two_way, is_finite_number
from runs_tracker.models.odds import MarketBundle, TwoWayQuote
from runs_tracker.models.probability import CurvePoint, ImpliedTotal, TotalSource

EVEN_ODDS = 0.5


def fair_under_probability(quote: TwoWayQuote) -> float:
    """
    Fair P(under) for a usable quote.

    Args:
        quote: Quote with both sides priced (check ``quote.is_usable`` first)

    Returns:
        De-vigged probability of the under
    """
    assert quote.over is not None and quote.under is not None
    pair = devig_two_way(
        american_to_prob(quote.over.odds),
        american_to_prob(quote.under.odds),
    )
    return pair.p_under


def build_alt_line_curve(quotes: Optional[Iterable[TwoWayQuote]]) -> list[CurvePoint]:
    """
    Build the (line, P(under)) curve from alternate-total quotes.

    Unusable quotes are dropped. Points come back sorted by line with one
    point per line; when a line repeats, the last quote seen wins.
    """
    if not quotes:
        return []

    by_line: dict[float, float] = {}
    for quote in quotes:
        if not quote.is_usable:
            continue
        by_line[quote.line] = fair_under_probability(quote)  # type: ignore[index]

    return [CurvePoint(line=line, p_under=p) for line, p in sorted(by_line.items())]


def _interpolate(a: CurvePoint, b: CurvePoint, target: float = EVEN_ODDS) -> float:
    if a.p_under == b.p_under:
        return (a.line + b.line) / 2
    t = (target - a.p_under) / (b.p_under - a.p_under)
    return a.line + t * (b.line - a.line)


def _crosses(a: CurvePoint, b: CurvePoint, target: float = EVEN_ODDS) -> bool:
    return (a.p_under <= target <= b.p_under) or (b.p_under <= target <= a.p_under)


def median_from_curve(curve: Sequence[CurvePoint]) -> Optional[float]:
    """
    Solve a sorted curve for the line where P(under) = 0.5.

    Interpolates linearly inside the first segment that straddles 0.5.
    With no crossing (one-sided or sparse boards), returns the line of the
    point nearest 0.5; ties go to the lower line.

    Returns:
        Implied median total, or None for an empty curve
    """
    if not curve:
        return None

    for a, b in zip(curve, curve[1:]):
        if _crosses(a, b):
            return _interpolate(a, b)

    nearest = min(curve, key=lambda p: abs(p.p_under - EVEN_ODDS))
    return nearest.line


def implied_median_from_alternates(quotes: Optional[Iterable[TwoWayQuote]]) -> Optional[float]:
    """
    Market-implied median total from a game's alternate-total quotes.

    Args:
        quotes: Alternate-total quotes for one game (may be None or empty)

    Returns:
        Implied median total, or None when no quote is usable
    """
    return median_from_curve(build_alt_line_curve(quotes))


def _main_line(quote: Optional[TwoWayQuote]) -> Optional[float]:
    if quote is None or not quote.has_finite_line:
        return None
    return quote.line


def resolve_implied_total_detail(markets: Optional[MarketBundle]) -> Optional[ImpliedTotal]:
    """
    Resolve a game's implied total and report which market produced it.

    Precedence, first finite value wins:
        1. live alternates median
        2. live main line
        3. pregame alternates median
        4. pregame main line
    """
    if markets is None:
        return None

    candidates = (
        (TotalSource.LIVE_ALTERNATES, lambda: implied_median_from_alternates(markets.live_alts)),
        (TotalSource.LIVE_MAIN, lambda: _main_line(markets.live_main)),
        (TotalSource.PREGAME_ALTERNATES, lambda: implied_median_from_alternates(markets.pre_alts)),
        (TotalSource.PREGAME_MAIN, lambda: _main_line(markets.pre_main)),
    )
    for source, resolve in candidates:
        value = resolve()
        if is_finite_number(value):
            return ImpliedTotal(value=value, source=source)  # type: ignore[arg-type]

    return None


def resolve_implied_total(markets: Optional[MarketBundle]) -> Optional[float]:
    """Implied total runs for a game, or None when no market is available."""
    detail = resolve_implied_total_detail(markets)
    return detail.value if detail else None
