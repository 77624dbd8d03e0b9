"""Override-map helpers for the layer that owns per-leg settlement results.

The breakdown engine keeps no state: each settlement action produces a new
override map which is then fed back into build_breakdown.
"""
from __future__ import annotations

from typing import Dict, Iterable, Mapping, Optional, Union

from .errors import InvalidOverrideError
from .models import SettleLegRequest, SettlementStatus

ResultLike = Union[SettlementStatus, str]
Overrides = Dict[int, SettlementStatus]


def normalize_result(value: ResultLike) -> SettlementStatus:
	if isinstance(value, SettlementStatus):
		return value
	if isinstance(value, str):
		try:
			return SettlementStatus(value.strip().lower())
		except ValueError:
			pass
	raise InvalidOverrideError(f"Unknown settlement result {value!r}")


def normalize_overrides(overrides: Optional[Mapping[int, ResultLike]]) -> Overrides:
	out: Overrides = {}
	for idx, result in (overrides or {}).items():
		if isinstance(idx, bool) or not isinstance(idx, int):
			raise InvalidOverrideError(f"Leg index must be an integer, got {idx!r}")
		out[idx] = normalize_result(result)
	return out


def settle_leg(overrides: Optional[Mapping[int, ResultLike]], leg_index: int, result: ResultLike) -> Overrides:
	"""Return a new map with one leg settled. Re-settling a leg replaces its result."""
	updated = normalize_overrides(overrides)
	updated.update(normalize_overrides({leg_index: result}))
	return updated


def merge_overrides(*maps: Optional[Mapping[int, ResultLike]]) -> Overrides:
	"""Union of override maps; for the same leg the later map wins."""
	merged: Overrides = {}
	for m in maps:
		merged.update(normalize_overrides(m))
	return merged


def apply_requests(
	overrides: Optional[Mapping[int, ResultLike]],
	requests: Iterable[SettleLegRequest],
	wager_id: Optional[str] = None,
) -> Overrides:
	updated = normalize_overrides(overrides)
	for req in requests:
		if wager_id is not None and req.wager_id != wager_id:
			raise InvalidOverrideError(f"Request for wager {req.wager_id} applied to wager {wager_id}")
		updated[req.leg_index] = normalize_result(req.result)
	return updated
