from __future__ import annotations

import itertools
import math
from typing import List, Tuple

from .errors import InvalidParameterError


def _validate(n: int, k: int) -> None:
	if n < 0 or k < 0 or k > n:
		raise InvalidParameterError(f"Cannot choose {k} of {n} legs")


def count_combinations(n: int, k: int) -> int:
	_validate(n, k)
	return math.comb(n, k)


def combinations(n: int, k: int) -> List[Tuple[int, ...]]:
	"""All k-subsets of range(n) as ascending tuples, in lexicographic order.

	Parlay identity and display order depend on this ordering.
	"""
	_validate(n, k)
	subsets = list(itertools.combinations(range(n), k))
	expected = math.comb(n, k)
	if len(subsets) != expected:
		raise InvalidParameterError(f"Generated {len(subsets)} subsets, expected C({n},{k})={expected}")
	return subsets
