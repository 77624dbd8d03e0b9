from __future__ import annotations

from fractions import Fraction
from typing import Iterable, Optional, Sequence, Tuple

from .models import Leg, Parlay, SettlementStatus
from .odds_math import combined_decimal_odds, potential_win


def derive_status(statuses: Iterable[SettlementStatus]) -> SettlementStatus:
	"""Parlay status from member leg statuses: Lost, then Pending, then Won or Push."""
	statuses = list(statuses)
	if any(s is SettlementStatus.LOST for s in statuses):
		return SettlementStatus.LOST
	if any(s is SettlementStatus.PENDING for s in statuses):
		return SettlementStatus.PENDING
	if any(s is SettlementStatus.WON for s in statuses):
		return SettlementStatus.WON
	return SettlementStatus.PUSH


def evaluate_parlay(indices: Sequence[int], legs: Sequence[Leg], stake: Fraction) -> Parlay:
	members = [legs[i] for i in indices]
	status = derive_status(l.status for l in members)

	# Push legs drop out of the payout as if they were never in the parlay
	priced = [l.odds for l in members if l.status is not SettlementStatus.PUSH]
	combined = combined_decimal_odds(priced) if priced else 1.0
	stake_f = float(stake)

	profit: Optional[float] = None
	win: Optional[float] = None
	if status is SettlementStatus.WON:
		win = potential_win(stake_f, combined)
		profit = win
	elif status is SettlementStatus.PENDING:
		win = potential_win(stake_f, combined)
	elif status is SettlementStatus.LOST:
		profit = -stake_f
	else:
		profit = 0.0

	return Parlay(
		legs=tuple(indices),
		stake=stake,
		status=status,
		decimal_odds=combined,
		profit=profit,
		potential_win=win,
	)


def evaluate_parlays(
	subsets: Iterable[Sequence[int]], legs: Sequence[Leg], stake: Fraction
) -> Tuple[Parlay, ...]:
	return tuple(evaluate_parlay(s, legs, stake) for s in subsets)
