from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import json
import typer

from .breakdown import build_breakdown
from .config import AppConfig
from .logging_utils import get_logger, set_level
from .models import RoundRobinBreakdown
from .odds_math import decimal_odds, expected_value, format_odds, implied_probability
from .reporting import print_breakdown_report, write_artifacts
from .settlement import settle_leg
from .simulate import simulate_breakdown

app = typer.Typer(help="Round Robin Settlement Calculator")
logger = get_logger(__name__)


def _split_pair(raw: str) -> tuple[int, str]:
	idx, sep, value = raw.partition("=")
	if not sep or not idx.strip().isdigit():
		raise typer.BadParameter(f"Expected INDEX=VALUE, got {raw!r}")
	return int(idx), value.strip()


def _load(
	config_path: Optional[str], bet_type: str, stake: float, notes: str, settle: Optional[List[str]]
) -> tuple[AppConfig, RoundRobinBreakdown]:
	config = AppConfig.load(config_path)
	set_level(config.log_level)
	overrides: Dict[int, object] = {}
	for raw in settle or []:
		idx, result = _split_pair(raw)
		overrides = settle_leg(overrides, idx, result)
	text = Path(notes).read_text(encoding="utf-8")
	result = build_breakdown(bet_type, stake, text, overrides, config.metadata_prefixes)
	if not result.available:
		msg = f"Breakdown unavailable ({result.kind}): {result.reason}"
		logger.error(msg)
		print(msg)
		raise typer.Exit(code=1)
	return config, result


@app.command()
def breakdown(
	bet_type: str = typer.Option(..., "--bet-type", help='Round robin label, e.g. "2/4 Round Robin (6 Bets)"'),
	stake: float = typer.Option(..., "--stake", help="Total stake across all parlays"),
	notes: str = typer.Option(..., "--notes", help="Path to the wager notes file"),
	settle: Optional[List[str]] = typer.Option(None, "--settle", help="Leg result as INDEX=won|lost|push"),
	config_path: Optional[str] = typer.Option(None, "--config", help="Path to config.yaml"),
	outdir: Optional[str] = typer.Option(None, "--outdir", help="Write legs.csv, parlays.csv and summary.json here (default: config outdir)"),
):
	config, result = _load(config_path, bet_type, stake, notes, settle)
	print_breakdown_report(result, config.currency_precision)
	outdir = outdir or config.outdir
	if outdir:
		write_artifacts(outdir, result, config.currency_precision)
		logger.info("Artifacts written to %s", outdir)


@app.command()
def odds(values: List[int] = typer.Argument(..., help="American odds, e.g. -110 150")):
	from rich.console import Console  # type: ignore
	from rich.table import Table  # type: ignore

	t = Table("Odds", "Implied %", "Decimal")
	for v in values:
		t.add_row(format_odds(v), f"{implied_probability(v) * 100:.2f}", f"{decimal_odds(v):.4f}")
	Console().print(t)


@app.command()
def ev(
	stake: float = typer.Option(..., "--stake", help="Stake"),
	odds_value: int = typer.Option(..., "--odds", help="American odds"),
	prob: float = typer.Option(..., "--prob", help="True win probability (0-1)"),
):
	value = expected_value(stake, odds_value, prob)
	print(f"EV: {value:.2f}")


@app.command()
def simulate(
	bet_type: str = typer.Option(..., "--bet-type", help="Round robin label"),
	stake: float = typer.Option(..., "--stake", help="Total stake across all parlays"),
	notes: str = typer.Option(..., "--notes", help="Path to the wager notes file"),
	settle: Optional[List[str]] = typer.Option(None, "--settle", help="Leg result as INDEX=won|lost|push"),
	prob: Optional[List[str]] = typer.Option(None, "--prob", help="Pending leg win probability as INDEX=P"),
	trials: Optional[int] = typer.Option(None, "--trials", help="Monte-Carlo trials"),
	config_path: Optional[str] = typer.Option(None, "--config", help="Path to config.yaml"),
):
	config, result = _load(config_path, bet_type, stake, notes, settle)
	probabilities: Dict[int, float] = {}
	for raw in prob or []:
		idx, value = _split_pair(raw)
		probabilities[idx] = float(value)
	stats = simulate_breakdown(
		result,
		probabilities,
		trials=trials or config.simulation_trials,
		random_seed=config.random_seed,
	)
	print(json.dumps(stats, indent=2))


def main():
	app()


if __name__ == "__main__":
	main()
