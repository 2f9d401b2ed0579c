"""Runtime configuration loaded from environment variables.

All variables use the ``STUDYPLANNER_`` prefix. Nothing is required; every
value has a default suitable for a single-user desktop install.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from BackEnd.core.paths import resource_path, user_data_dir

ENV_PREFIX = "STUDYPLANNER"

DEFAULT_SOUNDS_DIR = resource_path("sounds")


def _k(suffix: str) -> str:
	"""Build env var name with the project prefix."""
	return f"{ENV_PREFIX}_{suffix}"


def _env_bool(name: str, default: bool) -> bool:
	raw = os.getenv(name)
	if raw is None:
		return default
	return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Optional[Path]) -> Optional[Path]:
	raw = os.getenv(name)
	if raw is None or raw.strip() == "":
		return default
	return Path(raw).expanduser()


def _env_level(name: str, default: int) -> int:
	raw = os.getenv(name)
	if raw is None or raw.strip() == "":
		return default
	level = logging.getLevelName(raw.strip().upper())
	return level if isinstance(level, int) else default


@dataclass(frozen=True, slots=True)
class AppConfig:
	# ---- Local data ----
	data_dir: Path
	sounds_dir: Path

	# ---- Logging ----
	log_level: int

	# ---- Behaviour ----
	seed_welcome: bool

	@classmethod
	def from_env(cls) -> AppConfig:
		data_dir = _env_path(_k("DATA_DIR"), None)
		if data_dir is None:
			data_dir = user_data_dir()
		return cls(
			data_dir=data_dir,
			sounds_dir=_env_path(_k("SOUNDS_DIR"), DEFAULT_SOUNDS_DIR),
			log_level=_env_level(_k("LOG_LEVEL"), logging.INFO),
			seed_welcome=_env_bool(_k("SEED_WELCOME"), True),
		)
