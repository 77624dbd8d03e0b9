from __future__ import annotations

from enum import Enum
from fractions import Fraction
from typing import Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class SettlementStatus(str, Enum):
	PENDING = "pending"
	WON = "won"
	LOST = "lost"
	PUSH = "push"

	@property
	def is_settled(self) -> bool:
		return self is not SettlementStatus.PENDING


class Leg(BaseModel):
	model_config = ConfigDict(frozen=True)

	index: int
	sport: str = ""
	team: str
	matchup: Optional[str] = None
	spread: Optional[float] = None
	odds: int
	status: SettlementStatus = SettlementStatus.PENDING
	description: str = ""


class Parlay(BaseModel):
	model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

	legs: Tuple[int, ...]
	stake: Fraction
	status: SettlementStatus
	decimal_odds: float
	profit: Optional[float] = None
	potential_win: Optional[float] = None

	@property
	def size(self) -> int:
		return len(self.legs)

	@property
	def is_settled(self) -> bool:
		return self.status.is_settled


class RoundRobinBreakdown(BaseModel):
	"""Settlement view of a round robin wager. Rebuilt from scratch on every call."""

	model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

	parlay_size: int
	total_legs: int
	total_parlays: int
	total_stake: Fraction
	stake_per_parlay: Fraction
	legs: Tuple[Leg, ...]
	parlays: Tuple[Parlay, ...]
	settled_parlays: int
	won_parlays: int
	lost_parlays: int
	push_parlays: int
	total_profit: float
	potential_max_win: float

	@property
	def available(self) -> bool:
		return True

	@property
	def all_legs_settled(self) -> bool:
		return all(l.status.is_settled for l in self.legs)

	def final_profit(self) -> Optional[float]:
		# Only meaningful once the whole wager can be finalized
		if not self.all_legs_settled:
			return None
		return self.total_profit

	def display_stake_per_parlay(self, precision: int = 2) -> float:
		return round(float(self.stake_per_parlay), precision)

	def display_total_profit(self, precision: int = 2) -> float:
		return round(self.total_profit, precision)


class BreakdownUnavailable(BaseModel):
	"""Why a breakdown could not be built. `kind` is the error class name, e.g. "LegParseError"."""

	model_config = ConfigDict(frozen=True)

	kind: str
	reason: str
	line_numbers: Tuple[int, ...] = ()

	@property
	def available(self) -> bool:
		return False


class SettleLegRequest(BaseModel):
	"""Payload of the per-leg settlement endpoint owned by the caller."""

	wager_id: str
	leg_index: int = Field(ge=0)
	result: Literal["won", "lost", "push"]
