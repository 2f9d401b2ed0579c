from __future__ import annotations

import logging
import sys
from pathlib import Path


class _ConsoleNoiseFilter(logging.Filter):
	"""
	Keep the console readable:
	- all BackEnd.* and app logs
	- Python warnings (captured as 'py.warnings') only at ERROR+
	- any other third party (Qt bindings etc.) only at ERROR+
	"""

	def filter(self, record: logging.LogRecord) -> bool:
		name = record.name
		if name.startswith("BackEnd.") or name in ("app", "__main__", "reset_stats"):
			return True
		return record.levelno >= logging.ERROR


def setup_logging(
	*,
	log_dir: str | Path,
	console_level: int = logging.INFO,
	file_level: int = logging.DEBUG,
) -> Path:
	"""
	Configure root logging with a filtered console handler and a full
	file handler (planner.log). Call once at startup. Returns the log file path.
	"""
	log_dir = Path(log_dir)
	log_dir.mkdir(parents=True, exist_ok=True)
	log_file = log_dir / "planner.log"

	root = logging.getLogger()
	root.setLevel(logging.DEBUG)

	# Remove any pre-existing handlers to avoid duplicates.
	for h in list(root.handlers):
		root.removeHandler(h)

	fmt = logging.Formatter(
		fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
		datefmt="%Y-%m-%d %H:%M:%S",
	)

	ch = logging.StreamHandler(sys.stderr)
	ch.setLevel(console_level)
	ch.setFormatter(fmt)
	ch.addFilter(_ConsoleNoiseFilter())
	root.addHandler(ch)

	fh = logging.FileHandler(str(log_file), encoding="utf-8")
	fh.setLevel(file_level)
	fh.setFormatter(fmt)
	root.addHandler(fh)

	logging.captureWarnings(True)
	return log_file
