"""Tests for the alternate-line curve and implied-total precedence."""

import random

import pytest

from runs_tracker.core.implied_total import (
    build_alt_line_curve,
    median_from_curve,
    implied_median_from_alternates,
    resolve_implied_total,
    resolve_implied_total_detail,
)
from runs_tracker.models.odds import MarketBundle, PricedOutcome, TwoWayQuote
from runs_tracker.models.probability import CurvePoint, TotalSource

from conftest import fair_quote


def _curve(*points: tuple[float, float]) -> list[CurvePoint]:
    return [CurvePoint(line=line, p_under=p) for line, p in points]


class TestCurveConstruction:
    """Test building the (line, P(under)) curve."""

    def test_sorted_by_line(self, alt_board):
        curve = build_alt_line_curve(list(reversed(alt_board)))
        assert [p.line for p in curve] == [6.5, 7.5, 8.5, 9.5, 10.5]

    def test_fair_probabilities(self, alt_board):
        curve = build_alt_line_curve(alt_board)
        assert [p.p_under for p in curve] == pytest.approx([0.25, 0.40, 0.55, 0.70, 0.80])

    def test_unusable_quotes_dropped(self):
        quotes = [
            TwoWayQuote.from_american(float("nan"), -110, -110),
            TwoWayQuote.from_american(None, -110, -110),
            TwoWayQuote.from_american(8.5, None, -110),
            TwoWayQuote.from_american(9.5, -110, float("inf")),
            TwoWayQuote(line=7.5, over=PricedOutcome(odds=float("nan")), under=PricedOutcome(odds=-110)),
            TwoWayQuote.from_american(10.5, -110, -110),
        ]
        curve = build_alt_line_curve(quotes)
        assert [p.line for p in curve] == [10.5]

    def test_duplicate_line_last_seen_wins(self):
        curve = build_alt_line_curve([fair_quote(8.5, 0.40), fair_quote(8.5, 0.60)])
        assert len(curve) == 1
        assert curve[0].p_under == pytest.approx(0.60)

    def test_empty_inputs(self):
        assert build_alt_line_curve(None) == []
        assert build_alt_line_curve([]) == []


class TestMedianFromCurve:
    """Test solving the curve for P(under) = 0.5."""

    def test_exact_hit_needs_no_interpolation(self):
        curve = _curve((7.5, 0.6), (8.5, 0.5), (9.5, 0.3))
        assert median_from_curve(curve) == pytest.approx(8.5)

    def test_linear_interpolation(self):
        curve = _curve((7.5, 0.40), (8.5, 0.55), (9.5, 0.70))
        # 7.5 + (0.10 / 0.15) * 1.0
        assert median_from_curve(curve) == pytest.approx(8.1667, abs=1e-4)

    def test_flat_segment_returns_midpoint(self):
        curve = _curve((8.0, 0.5), (9.0, 0.5))
        assert median_from_curve(curve) == pytest.approx(8.5)

    def test_first_crossing_wins(self):
        # Non-monotone board crosses twice
        curve = _curve((7.0, 0.4), (8.0, 0.6), (9.0, 0.4), (10.0, 0.6))
        assert median_from_curve(curve) == pytest.approx(7.5)

    def test_no_crossing_returns_nearest_sample(self):
        curve = _curve((6.5, 0.8), (7.5, 0.7))
        assert median_from_curve(curve) == 7.5

    def test_no_crossing_below_half(self):
        curve = _curve((10.5, 0.2), (11.5, 0.35), (12.5, 0.45))
        assert median_from_curve(curve) == 12.5

    def test_no_crossing_tie_goes_to_first(self):
        curve = _curve((7.5, 0.7), (8.5, 0.7))
        assert median_from_curve(curve) == 7.5

    def test_single_point(self):
        assert median_from_curve(_curve((9.0, 0.62))) == 9.0

    def test_empty_curve(self):
        assert median_from_curve([]) is None


class TestImpliedMedian:
    """Test the end-to-end alternates solve from priced quotes."""

    def test_realistic_board(self, alt_board):
        assert implied_median_from_alternates(alt_board) == pytest.approx(8.1667, abs=1e-3)

    def test_even_money_line(self):
        quotes = [fair_quote(7.5, 0.6), TwoWayQuote.from_american(8.5, -110, -110)]
        assert implied_median_from_alternates(quotes) == pytest.approx(8.5)

    def test_order_invariant(self, alt_board):
        expected = implied_median_from_alternates(alt_board)
        rng = random.Random(7)
        for _ in range(10):
            shuffled = alt_board[:]
            rng.shuffle(shuffled)
            assert implied_median_from_alternates(shuffled) == expected

    def test_one_sided_board(self):
        quotes = [fair_quote(6.5, 0.8), fair_quote(7.5, 0.7)]
        assert implied_median_from_alternates(quotes) == 7.5

    def test_nothing_usable(self):
        assert implied_median_from_alternates(None) is None
        assert implied_median_from_alternates([]) is None
        assert implied_median_from_alternates([TwoWayQuote.from_american(8.5, None, None)]) is None


class TestResolveImpliedTotal:
    """Test the live/pregame, alternates/main precedence chain."""

    def test_pregame_main_only(self):
        bundle = MarketBundle(pre_main=TwoWayQuote(line=8.5))
        assert resolve_implied_total(bundle) == 8.5
        assert resolve_implied_total_detail(bundle).source == TotalSource.PREGAME_MAIN

    def test_live_alternates_win(self, alt_board):
        bundle = MarketBundle(
            live_alts=alt_board,
            live_main=TwoWayQuote.from_american(11.5, -110, -110),
            pre_alts=[fair_quote(7.0, 0.5)],
            pre_main=TwoWayQuote.from_american(7.5, -110, -110),
        )
        detail = resolve_implied_total_detail(bundle)
        assert detail.source == TotalSource.LIVE_ALTERNATES
        assert detail.value == pytest.approx(8.1667, abs=1e-3)
        assert detail.is_live

    def test_live_main_when_live_alts_unusable(self):
        bundle = MarketBundle(
            live_alts=[TwoWayQuote.from_american(9.5, None, -110)],
            live_main=TwoWayQuote.from_american(11.5, -110, -110),
            pre_main=TwoWayQuote.from_american(7.5, -110, -110),
        )
        assert resolve_implied_total(bundle) == 11.5
        assert resolve_implied_total_detail(bundle).source == TotalSource.LIVE_MAIN

    def test_pregame_alternates_before_pregame_main(self):
        bundle = MarketBundle(
            live_main=TwoWayQuote(line=float("nan")),
            pre_alts=[fair_quote(8.0, 0.45), fair_quote(9.0, 0.55)],
            pre_main=TwoWayQuote.from_american(7.5, -110, -110),
        )
        detail = resolve_implied_total_detail(bundle)
        assert detail.source == TotalSource.PREGAME_ALTERNATES
        assert detail.value == pytest.approx(8.5)
        assert not detail.is_live

    def test_main_line_needs_no_prices(self):
        bundle = MarketBundle(live_main=TwoWayQuote(line=9.5))
        assert resolve_implied_total(bundle) == 9.5

    def test_no_market(self):
        assert resolve_implied_total(MarketBundle()) is None
        assert resolve_implied_total(None) is None
        assert resolve_implied_total(MarketBundle(pre_main=TwoWayQuote(line=float("inf")))) is None
