from __future__ import annotations

from typing import Dict, Mapping, Optional

import numpy as np

from .models import RoundRobinBreakdown, SettlementStatus
from .odds_math import decimal_odds, implied_probability


def simulate_breakdown_samples(
	breakdown: RoundRobinBreakdown,
	probabilities: Optional[Mapping[int, float]] = None,
	trials: int = 50000,
	random_seed: int = 42,
) -> np.ndarray:
	"""Final-profit samples for the whole round robin.

	Settled legs keep their result; each pending leg wins with the given
	probability, or the implied probability of its odds when none is given.
	"""
	probabilities = probabilities or {}
	rng = np.random.default_rng(random_seed)
	n = breakdown.total_legs
	won = np.zeros((trials, n), dtype=bool)
	pushed = np.zeros((trials, n), dtype=bool)
	for leg in breakdown.legs:
		if leg.status is SettlementStatus.WON:
			won[:, leg.index] = True
		elif leg.status is SettlementStatus.PUSH:
			pushed[:, leg.index] = True
		elif leg.status is SettlementStatus.PENDING:
			p = probabilities.get(leg.index, implied_probability(leg.odds))
			if not 0.0 <= p <= 1.0:
				raise ValueError(f"Probability for leg {leg.index} must be in [0, 1], got {p}")
			won[:, leg.index] = rng.random(trials) < p

	dec = np.array([decimal_odds(l.odds) for l in breakdown.legs])
	# A pushed leg multiplies the payout by 1
	multipliers = np.where(won, dec, 1.0)
	alive = won | pushed

	profits = np.zeros(trials)
	for parlay in breakdown.parlays:
		idx = list(parlay.legs)
		stake = float(parlay.stake)
		hit = alive[:, idx].all(axis=1)
		mult = multipliers[:, idx].prod(axis=1)
		profits += np.where(hit, stake * (mult - 1.0), -stake)
	return profits


def simulate_breakdown(
	breakdown: RoundRobinBreakdown,
	probabilities: Optional[Mapping[int, float]] = None,
	trials: int = 50000,
	random_seed: int = 42,
) -> Dict[str, float]:
	profits = simulate_breakdown_samples(breakdown, probabilities, trials, random_seed)
	return {
		"mean": float(np.mean(profits)),
		"median": float(np.median(profits)),
		"p05": float(np.percentile(profits, 5)),
		"p95": float(np.percentile(profits, 95)),
		"p_profit": float(np.mean(profits > 0)),
	}
