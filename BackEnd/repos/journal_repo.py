from BackEnd.core.clock import Clock
from BackEnd.core.errors import ValidationError
from BackEnd.core.models import MoodEntry
from BackEnd.repos.store import MOODS_KEY, NOTES_KEY, save_document


class Journal:
	"""Free-text session notes plus the append-only mood log."""

	def __init__(self, store, clock=None, on_warning=None):
		self._store = store
		self._clock = clock or Clock()
		self._on_warning = on_warning
		self._notes = str(store.get(NOTES_KEY, "") or "")
		self._moods = [MoodEntry.from_dict(m) for m in store.get(MOODS_KEY, []) or [] if isinstance(m, dict)]

	@property
	def notes(self):
		return self._notes

	@property
	def moods(self):
		return list(self._moods)

	def save_notes(self, text):
		self._notes = text or ""
		save_document(self._store, NOTES_KEY, self._notes, self._on_warning)

	def log_mood(self, mood):
		mood = (mood or "").strip()
		if not mood:
			raise ValidationError("Pick a mood first")
		entry = MoodEntry(mood=mood, timestamp=self._clock.now_iso())
		self._moods.append(entry)
		save_document(self._store, MOODS_KEY, [m.to_dict() for m in self._moods], self._on_warning)
		return entry
