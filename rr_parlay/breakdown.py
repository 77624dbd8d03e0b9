from __future__ import annotations

from decimal import Decimal
from fractions import Fraction
from numbers import Rational
from typing import List, Mapping, Optional, Sequence, Union

from .combinations import combinations
from .errors import BreakdownError, InvalidOverrideError, InvalidParameterError, LegCountMismatchError, LegParseError
from .evaluator import evaluate_parlays
from .logging_utils import get_logger
from .models import BreakdownUnavailable, Leg, RoundRobinBreakdown, SettlementStatus
from .odds_math import potential_win
from .parser import METADATA_PREFIXES, parse_bet_type, parse_legs
from .settlement import ResultLike, normalize_overrides

logger = get_logger(__name__)

StakeLike = Union[int, float, str, Decimal, Fraction]
BreakdownResult = Union[RoundRobinBreakdown, BreakdownUnavailable]


def to_fraction(amount: StakeLike) -> Fraction:
	"""Exact rational for a currency amount. Floats go through their shortest repr."""
	if isinstance(amount, bool):
		raise InvalidParameterError(f"Invalid stake {amount!r}")
	try:
		if isinstance(amount, Rational):
			value = Fraction(amount)
		elif isinstance(amount, float):
			value = Fraction(repr(amount))
		else:
			value = Fraction(amount)
	except (TypeError, ValueError, ArithmeticError) as exc:
		raise InvalidParameterError(f"Invalid stake {amount!r}") from exc
	if value < 0:
		raise InvalidParameterError(f"Stake must be non-negative, got {amount!r}")
	return value


def apply_overrides(legs: Sequence[Leg], overrides: Mapping[int, SettlementStatus]) -> List[Leg]:
	"""Fresh legs with caller settlements applied; an override beats a status tag in the notes."""
	unknown = sorted(i for i in overrides if i < 0 or i >= len(legs))
	if unknown:
		raise InvalidOverrideError(f"Override for unknown leg index {unknown} ({len(legs)} legs)")
	out: List[Leg] = []
	for leg in legs:
		status = overrides.get(leg.index)
		if status is None or status is leg.status:
			out.append(leg)
		else:
			logger.debug("Leg %d (%s): %s -> %s", leg.index, leg.team, leg.status.value, status.value)
			out.append(leg.model_copy(update={"status": status}))
	return out


def unavailable(exc: BreakdownError) -> BreakdownUnavailable:
	line_numbers = tuple(exc.line_numbers) if isinstance(exc, LegParseError) else ()
	return BreakdownUnavailable(
		kind=type(exc).__name__,
		reason=str(exc),
		line_numbers=line_numbers,
	)


def build_breakdown(
	bet_type: str,
	total_stake: StakeLike,
	notes: str,
	leg_status_overrides: Optional[Mapping[int, ResultLike]] = None,
	metadata_prefixes: Sequence[str] = METADATA_PREFIXES,
) -> BreakdownResult:
	"""Settle every parlay of a round robin from its notes and per-leg results.

	Pure: identical inputs give equal outputs. Shape problems with the bet type,
	the notes or the overrides come back as a BreakdownUnavailable instead of
	raising; odds-math errors still propagate.
	"""
	stake = to_fraction(total_stake)
	try:
		parlay_size, total_legs = parse_bet_type(bet_type)
		legs = parse_legs(notes, metadata_prefixes)
		if len(legs) != total_legs:
			raise LegCountMismatchError(total_legs, len(legs))
		legs = apply_overrides(legs, normalize_overrides(leg_status_overrides))
	except BreakdownError as exc:
		logger.warning("Round robin breakdown unavailable for %r: %s", bet_type, exc)
		return unavailable(exc)

	subsets = combinations(total_legs, parlay_size)
	stake_per_parlay = stake / len(subsets)
	parlays = evaluate_parlays(subsets, legs, stake_per_parlay)

	settled = [p for p in parlays if p.is_settled]
	total_profit = sum((p.profit for p in settled), 0.0)
	max_win = sum((potential_win(float(p.stake), p.decimal_odds) for p in parlays), 0.0)

	return RoundRobinBreakdown(
		parlay_size=parlay_size,
		total_legs=total_legs,
		total_parlays=len(subsets),
		total_stake=stake,
		stake_per_parlay=stake_per_parlay,
		legs=tuple(legs),
		parlays=parlays,
		settled_parlays=len(settled),
		won_parlays=sum(1 for p in parlays if p.status is SettlementStatus.WON),
		lost_parlays=sum(1 for p in parlays if p.status is SettlementStatus.LOST),
		push_parlays=sum(1 for p in parlays if p.status is SettlementStatus.PUSH),
		total_profit=total_profit,
		potential_max_win=max_win,
	)
