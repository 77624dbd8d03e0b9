from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import os
import yaml
from pydantic import BaseModel, Field

from .parser import METADATA_PREFIXES


class AppConfig(BaseModel):
	# Notes parsing
	metadata_prefixes: List[str] = Field(default_factory=lambda: list(METADATA_PREFIXES))
	# Display
	currency_precision: int = Field(default=2, ge=0, le=6)
	# Simulation
	simulation_trials: int = Field(default=50000, gt=0)
	random_seed: int = 42
	# Output
	# Artifacts are only written when this or --outdir is set
	outdir: Optional[str] = None
	log_level: str = Field(default_factory=lambda: os.getenv("RR_PARLAY_LOG_LEVEL", "INFO"))

	@staticmethod
	def load(config_path: Optional[str] = None) -> "AppConfig":
		data = {}
		if config_path and Path(config_path).exists():
			with open(config_path, "r", encoding="utf-8") as f:
				data = yaml.safe_load(f) or {}
		return AppConfig(**data)
