from __future__ import annotations

from typing import List, Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
	from .models import Leg


class RoundRobinError(Exception):
	"""Base class for every error raised by rr_parlay."""


class OddsMathError(RoundRobinError, ValueError):
	"""Bad input to a pure math routine. These are data-integrity bugs and propagate."""


class InvalidOddsError(OddsMathError):
	pass


class EmptyLegSetError(OddsMathError):
	pass


class InvalidParameterError(OddsMathError):
	pass


class BreakdownError(RoundRobinError):
	"""Shape error recovered by build_breakdown into an unavailable result."""


class InvalidBetTypeError(BreakdownError):
	pass


class LegParseError(BreakdownError):
	def __init__(self, line_numbers: Sequence[int], legs: Optional[Sequence["Leg"]] = None):
		self.line_numbers: List[int] = list(line_numbers)
		self.legs = list(legs or [])
		joined = ", ".join(str(n) for n in self.line_numbers)
		super().__init__(f"Could not parse leg on line(s) {joined}")


class LegCountMismatchError(BreakdownError):
	def __init__(self, expected: int, actual: int):
		self.expected = expected
		self.actual = actual
		super().__init__(f"Bet type declares {expected} legs but notes contain {actual}")


class InvalidOverrideError(BreakdownError):
	pass
