import logging
from BackEnd.core.models import Achievements
from BackEnd.repos.store import ACHIEVEMENTS_KEY, save_document

logger = logging.getLogger(__name__)

# (flag, title, predicate(task_count, streak))
BADGES = (
	("firstTask", "First Task!", lambda tasks, streak: tasks >= 1),
	("fiveTasks", "5 Tasks Created!", lambda tasks, streak: tasks >= 5),
	("threeDayStreak", "3 Day Streak!", lambda tasks, streak: streak >= 3),
)

BADGE_TITLES = {flag: title for flag, title, _ in BADGES}


class AchievementEvaluator:
	"""One-way milestone flags. A flag is reported once, when it first turns on."""

	def __init__(self, store, on_warning=None):
		self._store = store
		self._on_warning = on_warning
		self._flags = Achievements.from_dict(store.get(ACHIEVEMENTS_KEY) or {})

	@property
	def flags(self):
		return self._flags

	def evaluate(self, task_count, current_streak):
		"""Return the flag names earned by this call (empty when nothing changed)."""
		earned = []
		for flag, title, reached in BADGES:
			if not getattr(self._flags, flag) and reached(task_count, current_streak):
				setattr(self._flags, flag, True)
				earned.append(flag)
				logger.info("Achievement unlocked: %s", title)
		if earned:
			save_document(self._store, ACHIEVEMENTS_KEY, self._flags.to_dict(), self._on_warning)
		return earned

	def reset(self):
		self._flags = Achievements()
		save_document(self._store, ACHIEVEMENTS_KEY, self._flags.to_dict(), self._on_warning)
