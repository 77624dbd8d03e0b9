from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import json
import pandas as pd

from .models import RoundRobinBreakdown
from .odds_math import format_odds


def _money(value: Optional[float], precision: int = 2) -> str:
	if value is None:
		return "-"
	return f"{value:,.{precision}f}"


def summary_dict(breakdown: RoundRobinBreakdown, precision: int = 2) -> Dict[str, object]:
	return {
		"parlay_size": breakdown.parlay_size,
		"total_legs": breakdown.total_legs,
		"total_parlays": breakdown.total_parlays,
		"total_stake": round(float(breakdown.total_stake), precision),
		"stake_per_parlay": breakdown.display_stake_per_parlay(precision),
		"settled_parlays": breakdown.settled_parlays,
		"won_parlays": breakdown.won_parlays,
		"lost_parlays": breakdown.lost_parlays,
		"push_parlays": breakdown.push_parlays,
		"total_profit": breakdown.display_total_profit(precision),
		"potential_max_win": round(breakdown.potential_max_win, precision),
		"all_legs_settled": breakdown.all_legs_settled,
	}


def print_breakdown_report(breakdown: RoundRobinBreakdown, precision: int = 2) -> None:
	from rich.console import Console  # type: ignore
	from rich.table import Table  # type: ignore

	console = Console()
	console.rule(
		f"{breakdown.parlay_size}/{breakdown.total_legs} Round Robin - "
		f"{breakdown.total_parlays} parlays x {_money(breakdown.display_stake_per_parlay(precision), precision)}"
	)
	t = Table("#", "Sport", "Selection", "Spread", "Odds", "Matchup", "Status")
	for l in breakdown.legs:
		spread = "" if l.spread is None else f"{l.spread:+g}"
		t.add_row(str(l.index), l.sport, l.team, spread, format_odds(l.odds), l.matchup or "", l.status.value)
	console.print(t)

	console.rule("Parlays")
	t2 = Table("Legs", "Dec", "Stake", "Status", "To Win", "Profit")
	for p in breakdown.parlays:
		t2.add_row(
			",".join(str(i) for i in p.legs),
			f"{p.decimal_odds:.2f}",
			_money(float(p.stake), precision),
			p.status.value,
			_money(p.potential_win, precision),
			_money(p.profit, precision),
		)
	console.print(t2)

	console.print(
		f"Settled {breakdown.settled_parlays}/{breakdown.total_parlays}  "
		f"Won {breakdown.won_parlays}  Lost {breakdown.lost_parlays}  Push {breakdown.push_parlays}"
	)
	final = breakdown.final_profit()
	if final is not None:
		console.print(f"Final profit: {'+' if final >= 0 else ''}{_money(final, precision)}")
	else:
		console.print(f"Profit so far: {_money(breakdown.total_profit, precision)}")


def write_artifacts(outdir: str | Path, breakdown: RoundRobinBreakdown, precision: int = 2) -> Dict[str, object]:
	Path(outdir).mkdir(parents=True, exist_ok=True)
	leg_rows = [
		{
			"index": l.index,
			"sport": l.sport,
			"team": l.team,
			"spread": l.spread,
			"odds": l.odds,
			"matchup": l.matchup or "",
			"status": l.status.value,
		}
		for l in breakdown.legs
	]
	pd.DataFrame(leg_rows).to_csv(Path(outdir) / "legs.csv", index=False)

	parlay_rows = [
		{
			"legs": ",".join(str(i) for i in p.legs),
			"decimal_odds": round(p.decimal_odds, 4),
			"stake": round(float(p.stake), precision),
			"status": p.status.value,
			"potential_win": None if p.potential_win is None else round(p.potential_win, precision),
			"profit": None if p.profit is None else round(p.profit, precision),
		}
		for p in breakdown.parlays
	]
	pd.DataFrame(parlay_rows).to_csv(Path(outdir) / "parlays.csv", index=False)

	summary = summary_dict(breakdown, precision)
	(Path(outdir) / "summary.json").write_text(json.dumps(summary, indent=2), encoding="utf-8")
	return summary
