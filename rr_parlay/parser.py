from __future__ import annotations

import math
import re
from typing import List, Optional, Sequence, Tuple

from .errors import InvalidBetTypeError, LegParseError
from .models import Leg, SettlementStatus

METADATA_PREFIXES: Tuple[str, ...] = ("Category:", "League:", "Game ID:", "Auto-settled:")
MIN_ODDS_MAGNITUDE = 100

BET_TYPE_RE = re.compile(r"(?P<size>\d+)\s*/\s*(?P<legs>\d+)")
BET_COUNT_RE = re.compile(r"\(\s*(?P<count>\d+)\s*Bets?\s*\)", re.IGNORECASE)
ROUND_ROBIN_RE = re.compile(r"\d+\s*/\s*\d+\s*Round Robin", re.IGNORECASE)

SPORT_RE = re.compile(r"^\[(?P<sport>[^\]]+)\]\s*")
STATUS_RE = re.compile(r"\s*\[(?P<status>pending|won|lost|push)\]\s*$", re.IGNORECASE)
ODDS_PAREN_RE = re.compile(r"\(\s*(?P<odds>[+-]?\d+)\s*\)")
ODDS_AT_RE = re.compile(r"@\s*(?P<odds>[+-]?\d+)(?![\d.])")
ODDS_BARE_RE = re.compile(r"(?<![\d.])(?P<odds>[+-]\d{3,})\s*$")
SELECTION_RE = re.compile(r"^(?P<team>.+?)\s+(?P<spread>[+-]\d+(?:\.\d+)?)$")
MATCHUP_SEP_RE = re.compile(r"^[-–]\s*")


def is_round_robin(bet_type: str) -> bool:
	return bool(ROUND_ROBIN_RE.search(bet_type or ""))


def parse_bet_type(bet_type: str) -> Tuple[int, int]:
	"""Return (parlay_size, total_legs) from a label such as "2/4 Round Robin (6 Bets)"."""
	if not isinstance(bet_type, str):
		raise InvalidBetTypeError(f"Bet type must be text, got {bet_type!r}")
	m = BET_TYPE_RE.search(bet_type)
	if not m:
		raise InvalidBetTypeError(f"No <size>/<legs> pair in bet type {bet_type!r}")
	size = int(m.group("size"))
	legs = int(m.group("legs"))
	if size < 1 or size > legs:
		raise InvalidBetTypeError(f"Parlay size {size} is not valid for {legs} legs")
	count_match = BET_COUNT_RE.search(bet_type)
	if count_match and int(count_match.group("count")) != math.comb(legs, size):
		raise InvalidBetTypeError(
			f"Bet type {bet_type!r} declares {count_match.group('count')} bets, "
			f"but {size}/{legs} makes {math.comb(legs, size)}"
		)
	return size, legs


def _is_price(m: re.Match) -> bool:
	return abs(int(m.group("odds"))) >= MIN_ODDS_MAGNITUDE


def _find_odds(line: str) -> Optional[re.Match]:
	# "Team (2) (-110)": small integers are part of the selection, not a price
	found = [m for rx in (ODDS_PAREN_RE, ODDS_AT_RE) for m in rx.finditer(line) if _is_price(m)]
	if not found:
		# "Chiefs -3.5 -110": unparenthesized odds only at the end of the line
		return ODDS_BARE_RE.search(line)
	return min(found, key=lambda m: m.start())


def parse_leg_line(line: str, index: int) -> Optional[Leg]:
	"""Parse one leg line; None when no usable odds or selection is present.

	Accepts lines like:
	  "[NCAAB] Boise State -2.5 @ +285 - Boise State vs Butler [Pending]"
	  "Chiefs -3.5 (-110) [Won]"
	  "Over 220.5 (+105) - Lakers vs Celtics"
	"""
	text = line.strip()
	status = SettlementStatus.PENDING
	status_match = STATUS_RE.search(text)
	if status_match:
		status = SettlementStatus(status_match.group("status").lower())
		text = text[: status_match.start()].strip()

	sport = ""
	sport_match = SPORT_RE.match(text)
	if sport_match:
		sport = sport_match.group("sport").strip().upper()
		text = text[sport_match.end():]

	odds_match = _find_odds(text)
	if odds_match is None:
		return None
	odds = int(odds_match.group("odds"))

	selection = text[: odds_match.start()].strip().rstrip("@").strip()
	if not selection:
		return None
	spread: Optional[float] = None
	team = selection
	sel_match = SELECTION_RE.match(selection)
	if sel_match:
		team = sel_match.group("team").strip()
		spread = float(sel_match.group("spread"))

	matchup = MATCHUP_SEP_RE.sub("", text[odds_match.end():].strip()).strip() or None

	return Leg(
		index=index,
		sport=sport,
		team=team,
		matchup=matchup,
		spread=spread,
		odds=odds,
		status=status,
		description=line.strip(),
	)


def parse_legs(notes: str, metadata_prefixes: Sequence[str] = METADATA_PREFIXES) -> List[Leg]:
	"""Parse wager notes into legs, one candidate per non-metadata line.

	Raises LegParseError naming every 1-based line number that failed.
	"""
	legs: List[Leg] = []
	failed: List[int] = []
	prefixes = tuple(metadata_prefixes)
	for line_no, raw in enumerate((notes or "").splitlines(), start=1):
		line = raw.strip()
		if not line or line.startswith(prefixes):
			continue
		leg = parse_leg_line(line, index=len(legs) + len(failed))
		if leg is None:
			failed.append(line_no)
			continue
		legs.append(leg)
	if failed:
		raise LegParseError(failed, legs)
	return legs
