from __future__ import annotations

from numbers import Integral
from typing import Sequence

from .errors import EmptyLegSetError, InvalidOddsError


def _checked_odds(odds: int) -> int:
	if isinstance(odds, bool) or not isinstance(odds, Integral):
		raise InvalidOddsError(f"American odds must be an integer, got {odds!r}")
	if odds == 0:
		raise InvalidOddsError("American odds of 0 are undefined")
	return int(odds)


def implied_probability(odds: int) -> float:
	american = _checked_odds(odds)
	if american > 0:
		return 100.0 / (american + 100.0)
	a = abs(american)
	return a / (a + 100.0)


def decimal_odds(odds: int) -> float:
	american = _checked_odds(odds)
	if american > 0:
		return 1.0 + american / 100.0
	return 1.0 + 100.0 / abs(american)


def combined_decimal_odds(odds_list: Sequence[int]) -> float:
	if not odds_list:
		raise EmptyLegSetError("A parlay needs at least one priced leg")
	d = 1.0
	for o in odds_list:
		d *= decimal_odds(o)
	return d


def potential_win(stake: float, combined: float) -> float:
	return stake * (combined - 1.0)


def expected_value(stake: float, odds: int, true_probability: float) -> float:
	win = potential_win(stake, decimal_odds(odds))
	return true_probability * win - (1.0 - true_probability) * stake


def closing_line_value(placed_odds: int, closing_odds: int) -> float:
	# Positive when the market moved toward the bet after it was placed
	return implied_probability(closing_odds) - implied_probability(placed_odds)


def format_odds(odds: int) -> str:
	return f"+{odds}" if odds > 0 else f"{odds}"
