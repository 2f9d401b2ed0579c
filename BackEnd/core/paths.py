import os
import sys
from pathlib import Path

APP_NAME = "StudyPlanner"

def user_data_dir(app_name=APP_NAME):
	"""Return per-user data dir (Windows/macOS/Linux)."""
	if os.name == "nt":
		base = os.environ.get("LOCALAPPDATA", os.path.expanduser("~\\AppData\\Local"))
	elif os.name == "posix":
		base = os.environ.get("XDG_DATA_HOME", os.path.expanduser("~/.local/share"))
	else:
		base = os.path.expanduser("~")
	path = Path(base) / app_name
	path.mkdir(parents=True, exist_ok=True)
	return path

def store_dir(base=None):
	"""Return Path to the document store inside the data dir."""
	path = Path(base) if base is not None else user_data_dir()
	path = path / "store"
	path.mkdir(parents=True, exist_ok=True)
	return path

def log_dir(base=None):
	"""Return Path to the log directory inside the data dir."""
	path = Path(base) if base is not None else user_data_dir()
	path = path / "logs"
	path.mkdir(parents=True, exist_ok=True)
	return path

def resource_path(relative_path):
	# works in dev and in PyInstaller .exe
	if hasattr(sys, "_MEIPASS"):
		return Path(sys._MEIPASS) / relative_path
	return Path(__file__).resolve().parent.parent.parent / relative_path
