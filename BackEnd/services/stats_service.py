import logging
from datetime import timedelta
from BackEnd.core.clock import Clock
from BackEnd.core.models import Stats, round_minutes
from BackEnd.repos.store import STATS_KEY, save_document

logger = logging.getLogger(__name__)


class StatsTracker:
	"""Streak and focus-minute totals, updated only by completed sessions."""

	def __init__(self, store, clock=None, on_warning=None):
		self._store = store
		self._clock = clock or Clock()
		self._on_warning = on_warning
		self._stats = Stats.from_dict(store.get(STATS_KEY) or {})

	@property
	def stats(self):
		return self._stats

	@property
	def current_streak(self):
		return self._stats.currentStreak

	@property
	def total_focus_minutes(self):
		return self._stats.totalFocusMinutes

	def save(self):
		save_document(self._store, STATS_KEY, self._stats.to_dict(), self._on_warning)

	def record_session(self, seconds):
		"""
		Credit one completed session of ``seconds``. Returns the minutes added.

		The streak moves at most once per calendar day: same day keeps it,
		the day after the last study day extends it, any gap restarts at 1.
		"""
		today = self._clock.today()
		minutes = round_minutes(seconds)
		s = self._stats
		if s.lastStudyDate != today.isoformat():
			if s.lastStudyDate == (today - timedelta(days=1)).isoformat():
				s.currentStreak += 1
			else:
				s.currentStreak = 1
			s.lastStudyDate = today.isoformat()
		s.totalFocusMinutes += minutes
		self.save()
		logger.info("Session credited: %s min, streak %s", minutes, s.currentStreak)
		return minutes

	def reset(self):
		self._stats = Stats()
		self.save()
