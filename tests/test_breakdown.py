from __future__ import annotations

import math
from collections import Counter
from decimal import Decimal
from fractions import Fraction

import pytest

from rr_parlay.breakdown import build_breakdown, to_fraction
from rr_parlay.errors import InvalidOddsError, InvalidParameterError, LegParseError
from rr_parlay.evaluator import evaluate_parlay
from rr_parlay.models import SettlementStatus
from rr_parlay.odds_math import decimal_odds

BET_TYPE = "2/4 Round Robin (6 Bets)"


def test_four_leg_scenario(four_leg_notes):
	result = build_breakdown(BET_TYPE, 60, four_leg_notes, {0: "won", 1: "won", 2: "lost", 3: "lost"})
	assert result.available
	assert result.total_parlays == 6
	assert result.stake_per_parlay == Fraction(10)
	assert result.display_stake_per_parlay() == 10.0
	assert [p.legs for p in result.parlays][0] == (0, 1)

	winner = result.parlays[0]
	assert winner.status is SettlementStatus.WON
	assert winner.profit == pytest.approx(10 * (decimal_odds(-110) ** 2 - 1))
	assert winner.profit == pytest.approx(26.45, abs=0.01)
	for p in result.parlays[1:]:
		assert p.status is SettlementStatus.LOST
		assert p.profit == -10.0

	assert (result.settled_parlays, result.won_parlays, result.lost_parlays) == (6, 1, 5)
	assert result.total_profit == pytest.approx(-23.55, abs=0.01)
	assert result.total_profit == pytest.approx(sum(p.profit for p in result.parlays))
	assert result.all_legs_settled
	assert result.final_profit() == result.total_profit
	assert result.display_total_profit() == -23.55


def test_shape_invariants(four_leg_notes):
	result = build_breakdown("3/4 Round Robin", 100, four_leg_notes)
	assert result.total_parlays == math.comb(4, 3) == len(result.parlays)
	counts = Counter(i for p in result.parlays for i in p.legs)
	assert all(counts[i] == math.comb(3, 2) for i in range(4))
	assert sum(p.stake for p in result.parlays) == Fraction(100)
	assert result.stake_per_parlay == Fraction(25)


def test_stake_split_is_exact_when_not_divisible():
	notes = "\n".join(f"Team {i} (+{100 + i})" for i in range(7))
	result = build_breakdown("3/7 Round Robin (35 Bets)", 10.01, notes)
	assert result.stake_per_parlay == Fraction(1001, 3500)
	assert sum(p.stake for p in result.parlays) == Fraction(1001, 100)
	assert result.display_stake_per_parlay() == 0.29


def test_pending_parlays_excluded_from_profit(four_leg_notes):
	result = build_breakdown(BET_TYPE, 60, four_leg_notes, {0: "won", 1: "won", 2: "lost"})
	# (0,1) won, anything with 2 lost, (0,3) and (1,3) pending
	statuses = {p.legs: p.status for p in result.parlays}
	assert statuses[(0, 3)] is SettlementStatus.PENDING
	assert statuses[(2, 3)] is SettlementStatus.LOST
	assert result.settled_parlays == 4
	assert result.total_profit == pytest.approx(10 * (decimal_odds(-110) ** 2 - 1) - 30)
	assert not result.all_legs_settled
	assert result.final_profit() is None


def test_override_beats_status_in_notes():
	notes = "Chiefs (-110) [Won]\nBills (-110) [Lost]\nJets (+120)"
	from_notes = build_breakdown("2/3", 30, notes)
	assert [l.status for l in from_notes.legs] == [
		SettlementStatus.WON,
		SettlementStatus.LOST,
		SettlementStatus.PENDING,
	]
	corrected = build_breakdown("2/3", 30, notes, {1: SettlementStatus.WON, 2: "WON"})
	assert all(l.status is SettlementStatus.WON for l in corrected.legs)
	assert corrected.won_parlays == 3
	# Original parse untouched by the recompute
	assert from_notes.legs[1].status is SettlementStatus.LOST


def test_all_push_parlay_counts_as_settled():
	notes = "A (-110)\nB (-110)\nC (+150)"
	result = build_breakdown("2/3", 30, notes, {0: "push", 1: "push", 2: "won"})
	statuses = {p.legs: p.status for p in result.parlays}
	assert statuses[(0, 1)] is SettlementStatus.PUSH
	assert statuses[(0, 2)] is SettlementStatus.WON
	assert result.push_parlays == 1
	assert result.settled_parlays == 3
	assert result.total_profit == pytest.approx(2 * 10 * 1.5)


def test_potential_max_win(four_leg_notes):
	result = build_breakdown(BET_TYPE, 60, four_leg_notes)
	assert result.potential_max_win == pytest.approx(6 * 10 * (decimal_odds(-110) ** 2 - 1))
	assert result.settled_parlays == 0
	assert result.total_profit == 0.0


def test_recompute_is_pure(four_leg_notes):
	overrides = {0: "won", 3: "lost"}
	first = build_breakdown(BET_TYPE, 60, four_leg_notes, overrides)
	second = build_breakdown(BET_TYPE, 60, four_leg_notes, dict(overrides))
	assert first == second
	assert first is not second


def test_malformed_notes_are_unavailable():
	notes = "Chiefs (-110)\nBills no odds\nJets (+120)\nGiants (+130)"
	result = build_breakdown(BET_TYPE, 60, notes)
	assert not result.available
	assert result.kind == "LegParseError"
	assert result.line_numbers == (2,)
	assert result.kind == LegParseError.__name__


def test_unavailable_recompute_is_pure():
	notes = "A (-110)\nno odds"
	first = build_breakdown("2/4", 60, notes)
	second = build_breakdown("2/4", 60, notes)
	assert not first.available
	assert first == second
	assert first.line_numbers == (2,)
	assert build_breakdown("Parlay", 60, notes) == build_breakdown("Parlay", 60, notes)


@pytest.mark.parametrize(
	"bet_type,overrides,kind",
	[
		("Round Robin", None, "InvalidBetTypeError"),
		("2/5 Round Robin", None, "LegCountMismatchError"),
		(BET_TYPE, {7: "won"}, "InvalidOverrideError"),
		(BET_TYPE, {0: "maybe"}, "InvalidOverrideError"),
	],
)
def test_shape_errors_are_unavailable(four_leg_notes, bet_type, overrides, kind):
	result = build_breakdown(bet_type, 60, four_leg_notes, overrides)
	assert not result.available
	assert result.kind == kind
	assert result.reason


def test_math_errors_propagate():
	with pytest.raises(InvalidParameterError):
		build_breakdown(BET_TYPE, -5, "A (-110)")
	# odds of 0 cannot come from the parser, so reach the math through a leg copy
	legs = build_breakdown("1/2", 10, "A (-110)\nB (-110)").legs
	with pytest.raises(InvalidOddsError):
		evaluate_parlay((0,), [legs[0].model_copy(update={"odds": 0})], Fraction(5))


def test_to_fraction():
	assert to_fraction(60) == Fraction(60)
	assert to_fraction(60.1) == Fraction(601, 10)
	assert to_fraction("12.50") == Fraction(25, 2)
	assert to_fraction(Decimal("0.10")) == Fraction(1, 10)
	for bad in (-1, float("nan"), "abc", True):
		with pytest.raises(InvalidParameterError):
			to_fraction(bad)
