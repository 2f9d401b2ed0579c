import json
import logging
from pathlib import Path
from BackEnd.core.errors import StorageError

logger = logging.getLogger(__name__)

TASKS_KEY = "ssp_tasks_v1"
SETTINGS_KEY = "ssp_settings_v1"
NOTES_KEY = "ssp_session_notes"
MOODS_KEY = "ssp_moods_v1"
STATS_KEY = "ssp_stats_v1"
ACHIEVEMENTS_KEY = "ssp_achievements_v1"
FOCUS_HISTORY_KEY = "ssp_focus_history_v1"

def _encode(key, value):
	try:
		return json.dumps(value, ensure_ascii=False)
	except (TypeError, ValueError) as e:
		raise StorageError(key, f"not JSON-serializable: {e}") from e


class MemoryStore:
	"""In-process document store. Values are kept as JSON text, like a browser's localStorage."""

	def __init__(self):
		self._docs = {}

	def get(self, key, default=None):
		raw = self._docs.get(key)
		if raw is None:
			return default
		return json.loads(raw)

	def set(self, key, value):
		self._docs[key] = _encode(key, value)


class JsonFileStore:
	"""One <key>.json file per document inside ``directory``."""

	def __init__(self, directory):
		self.directory = Path(directory)

	def path(self, key):
		return self.directory / f"{key}.json"

	def get(self, key, default=None):
		"""Load a document; missing or unreadable files yield ``default``."""
		path = self.path(key)
		if not path.exists():
			return default
		try:
			with open(path, "r", encoding="utf-8") as f:
				return json.load(f)
		except (OSError, ValueError) as e:
			logger.warning("Ignoring unreadable document %s: %s", path, e)
			return default

	def set(self, key, value):
		"""Write a document. Raises StorageError on any failure."""
		text = _encode(key, value)
		try:
			self.directory.mkdir(parents=True, exist_ok=True)
			with open(self.path(key), "w", encoding="utf-8") as f:
				f.write(text)
		except OSError as e:
			raise StorageError(key, e) from e

	def keys(self):
		if not self.directory.exists():
			return []
		return sorted(p.stem for p in self.directory.glob("*.json"))


def save_document(store, key, value, on_warning=None):
	"""Best-effort write. Failures are logged and reported, never raised.

	Returns True when the document was written.
	"""
	try:
		store.set(key, value)
	except StorageError as e:
		logger.warning("Could not persist %s: %s", key, e.reason)
		if on_warning is not None:
			on_warning(f"Could not save data ({key}); changes are kept for this session only")
		return False
	return True
