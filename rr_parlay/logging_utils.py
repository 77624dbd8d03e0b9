from __future__ import annotations

import logging
import os
from typing import Optional, Union

from rich.logging import RichHandler

ROOT_LOGGER = "rr_parlay"


def resolve_level(level: Union[int, str, None]) -> int:
	if isinstance(level, int):
		return level
	value = logging.getLevelName(str(level or os.getenv("RR_PARLAY_LOG_LEVEL", "INFO")).upper())
	return value if isinstance(value, int) else logging.INFO


def _configure_root(level: Optional[int] = None) -> logging.Logger:
	root = logging.getLogger(ROOT_LOGGER)
	if root.handlers:
		return root
	root.setLevel(resolve_level(level))
	handler: logging.Handler
	if os.getenv("NO_RICH") != "1":
		handler = RichHandler(rich_tracebacks=True)
	else:
		handler = logging.StreamHandler()
	formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
	handler.setFormatter(formatter)
	root.addHandler(handler)
	return root


def get_logger(name: str = ROOT_LOGGER, level: Optional[int] = None) -> logging.Logger:
	# Handler and level live on the package logger; module loggers inherit both
	_configure_root(level)
	return logging.getLogger(name)


def set_level(level: Union[int, str, None]) -> None:
	_configure_root().setLevel(resolve_level(level))
