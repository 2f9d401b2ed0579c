from dataclasses import dataclass
from datetime import date, timedelta
from BackEnd.core.clock import Clock, day_of
from BackEnd.core.models import HISTORY_LIMIT, FocusHistoryEntry
from BackEnd.repos.store import FOCUS_HISTORY_KEY, save_document


@dataclass(frozen=True)
class DayBucket:
	day: date
	label: str  # short weekday, e.g. "Mon"
	minutes: int


class FocusHistory:
	"""Bounded log of completed focus sessions, oldest first."""

	def __init__(self, store, clock=None, on_warning=None, limit=HISTORY_LIMIT):
		self._store = store
		self._clock = clock or Clock()
		self._on_warning = on_warning
		self.limit = limit
		raw = store.get(FOCUS_HISTORY_KEY, []) or []
		self._entries = [FocusHistoryEntry.from_dict(e) for e in raw if isinstance(e, dict)][-limit:]

	def __len__(self):
		return len(self._entries)

	@property
	def entries(self):
		return list(self._entries)

	def append(self, minutes, timestamp=None):
		entry = FocusHistoryEntry(minutes=max(0, int(minutes)), timestamp=timestamp or self._clock.now_iso())
		self._entries.append(entry)
		if len(self._entries) > self.limit:
			del self._entries[: len(self._entries) - self.limit]
		save_document(self._store, FOCUS_HISTORY_KEY, [e.to_dict() for e in self._entries], self._on_warning)
		return entry

	def recent(self, n):
		"""Last ``n`` entries, chronological."""
		if n <= 0:
			return []
		return self._entries[-n:]

	def weekly_buckets(self, reference_date=None):
		"""Minutes per day for the 7 days ending on ``reference_date`` (inclusive)."""
		reference_date = reference_date or self._clock.today()
		days = [reference_date - timedelta(days=i) for i in range(6, -1, -1)]
		totals = {d.isoformat(): 0 for d in days}
		for e in self._entries:
			key = day_of(e.timestamp)
			if key in totals:
				totals[key] += e.minutes
		return [DayBucket(day=d, label=d.strftime("%a"), minutes=totals[d.isoformat()]) for d in days]

	def clear(self):
		self._entries = []
		save_document(self._store, FOCUS_HISTORY_KEY, [], self._on_warning)
