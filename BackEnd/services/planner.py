import logging
import random
from PySide6.QtCore import QObject, Signal
from BackEnd.core.clock import Clock
from BackEnd.core.errors import PlaybackError, ValidationError
from BackEnd.core.models import DEFAULT_CATEGORY
from BackEnd.repos.history_repo import FocusHistory
from BackEnd.repos.journal_repo import Journal
from BackEnd.repos.settings_repo import SettingsRepository
from BackEnd.repos.store import (
	ACHIEVEMENTS_KEY, FOCUS_HISTORY_KEY, MOODS_KEY, NOTES_KEY,
	SETTINGS_KEY, STATS_KEY, TASKS_KEY,
)
from BackEnd.repos.task_repo import TaskRepository
from BackEnd.services import chart_service
from BackEnd.services.achievement_service import BADGE_TITLES, AchievementEvaluator
from BackEnd.services.quote_service import pick_quote
from BackEnd.services.sound_service import BELL
from BackEnd.services.stats_service import StatsTracker
from BackEnd.services.timer_service import TimerService

logger = logging.getLogger(__name__)

PLAYBACK_WARNING = "Audio play blocked. Check your sound settings."

# Commands accepted by dispatch(); each is a method of StudyPlanner.
COMMANDS = frozenset({
	"add_task", "toggle_task", "delete_task", "edit_task", "reset_tasks",
	"start_timer", "pause_timer", "reset_timer", "set_timer_length",
	"change_font_size", "change_sort", "toggle_deadlines", "toggle_priorities", "toggle_compact",
	"reset_stats", "reset_all", "save_notes", "log_mood", "play_sound",
})

def _task_id(value):
	"""Task ids are opaque ints; anything else (including list positions passed as str) is rejected."""
	if isinstance(value, bool) or not isinstance(value, int):
		raise ValidationError(f"Invalid task id: {value!r}")
	return value


class StudyPlanner(QObject):
	"""Application state and command surface for one user.

	Presentation code calls the methods (or dispatch()) and re-reads the
	accessors when ``changed`` fires.
	"""

	notified = Signal(str)  # short user-facing messages ("Task added")
	achievement_earned = Signal(str)  # achievement flag name
	warning = Signal(str)  # non-fatal storage / playback problems
	rejected = Signal(str)  # dispatch() refused a command
	changed = Signal(str)  # store key of the document that changed

	def __init__(self, store, clock=None, sound_player=None, rng=None, seed_welcome=False):
		super().__init__()
		self.store = store
		self.clock = clock or Clock()
		self.sound_player = sound_player
		self._rng = rng or random.Random()
		self.settings_repo = SettingsRepository(store, self._warn)
		self.task_repo = TaskRepository(store, self.clock, self._warn)
		self.journal = Journal(store, self.clock, self._warn)
		self.history = FocusHistory(store, self.clock, self._warn)
		self.stats = StatsTracker(store, self.clock, self._warn)
		self.achievements = AchievementEvaluator(store, self._warn)
		if seed_welcome:
			self.task_repo.seed_welcome_tasks()
		self.quote = pick_quote(self._rng)
		self.timer = TimerService(self.settings.timerLength)
		self.timer.session_completed.connect(self._on_session_completed)
		if sound_player is not None:
			sound_player.failed.connect(self._on_playback_failed)

	def _warn(self, message):
		self.warning.emit(message)

	def _notify(self, message):
		logger.debug("notify: %s", message)
		self.notified.emit(message)

	def _check_achievements(self):
		earned = self.achievements.evaluate(self.task_repo.count, self.stats.current_streak)
		for flag in earned:
			self._notify(f"Achievement: {BADGE_TITLES[flag]}")
			self.achievement_earned.emit(flag)
		if earned:
			self.changed.emit(ACHIEVEMENTS_KEY)
		return earned

	# ---- command interface ----

	def dispatch(self, action, **payload):
		"""Run a named command. Rejections are reported via ``rejected`` and return None."""
		if action not in COMMANDS:
			logger.warning("Unknown command %r", action)
			self.rejected.emit(f"Unknown command: {action}")
			return None
		try:
			return getattr(self, action)(**payload)
		except ValidationError as e:
			logger.info("Command %s rejected: %s", action, e)
			self.rejected.emit(str(e))
			return None

	# ---- tasks ----

	def add_task(self, text, deadline=None, priority="medium", category=DEFAULT_CATEGORY):
		task = self.task_repo.add(text, deadline=deadline, priority=priority, category=category)
		self.changed.emit(TASKS_KEY)
		self._notify("Task added")
		self._check_achievements()
		return task

	def toggle_task(self, task_id):
		task = self.task_repo.toggle_completion(_task_id(task_id))
		if task is not None:
			self.changed.emit(TASKS_KEY)
		return task

	def delete_task(self, task_id):
		task = self.task_repo.delete(_task_id(task_id))
		if task is not None:
			self.changed.emit(TASKS_KEY)
			self._notify("Task deleted")
			self._check_achievements()
		return task

	def edit_task(self, task_id, **fields):
		task = self.task_repo.edit(_task_id(task_id), **fields)
		if task is not None:
			self.changed.emit(TASKS_KEY)
			self._notify("Task updated")
		return task

	def reset_tasks(self):
		self.task_repo.clear()
		self.changed.emit(TASKS_KEY)
		self._notify("All tasks removed")

	# ---- timer ----

	def start_timer(self):
		self.timer.start()

	def pause_timer(self):
		if self.timer.running:
			self.timer.pause()
			self._notify("Timer paused")

	def reset_timer(self):
		self.timer.reset()
		self._notify("Timer reset")

	def _on_session_completed(self, seconds):
		minutes = self.stats.record_session(seconds)
		self.history.append(minutes)
		self.changed.emit(STATS_KEY)
		self.changed.emit(FOCUS_HISTORY_KEY)
		if self.sound_player is not None:
			self.play_sound(BELL)
		self.quote = pick_quote(self._rng)
		self._notify("Focus session complete!")
		self._check_achievements()

	# ---- settings ----

	@property
	def settings(self):
		return self.settings_repo.current

	def _update_settings(self, message=None, **fields):
		self.settings_repo.update(**fields)
		self.changed.emit(SETTINGS_KEY)
		if message:
			self._notify(message)

	def set_timer_length(self, seconds):
		self._update_settings("Session length updated", timerLength=seconds)
		self.timer.set_length(self.settings.timerLength)

	def change_font_size(self, size):
		self._update_settings("Font size updated", fontSize=size)

	def change_sort(self, mode):
		self._update_settings(sortMode=mode)

	def toggle_deadlines(self, show):
		self._update_settings(showDeadlines=show)

	def toggle_priorities(self, show):
		self._update_settings(showPriorities=show)

	def toggle_compact(self, compact):
		self._update_settings(compact=compact)

	# ---- stats ----

	def reset_stats(self):
		self.stats.reset()
		self.changed.emit(STATS_KEY)
		self._notify("Stats reset")

	def reset_all(self):
		"""Wipe tasks, stats, focus history and achievements."""
		self.timer.reset()
		self.task_repo.clear()
		self.stats.reset()
		self.history.clear()
		self.achievements.reset()
		for key in (TASKS_KEY, STATS_KEY, FOCUS_HISTORY_KEY, ACHIEVEMENTS_KEY):
			self.changed.emit(key)
		self._notify("All data reset")

	# ---- journal / sound ----

	def save_notes(self, text):
		self.journal.save_notes(text)
		self.changed.emit(NOTES_KEY)
		self._notify("Notes saved")

	def log_mood(self, mood):
		entry = self.journal.log_mood(mood)
		self.changed.emit(MOODS_KEY)
		self._notify(f"Mood saved: {entry.mood}")
		return entry

	def _on_playback_failed(self, reason):
		logger.warning("Playback failed after loading: %s", reason)
		self._warn(PLAYBACK_WARNING)

	def play_sound(self, name):
		"""Play a sound; failures become a warning. Returns True when playback started."""
		if self.sound_player is None:
			return False
		try:
			self.sound_player.play(name)
		except PlaybackError as e:
			logger.warning("Playback failed: %s", e)
			self._warn(PLAYBACK_WARNING)
			return False
		return True

	# ---- read accessors ----

	def tasks(self, filter=None):
		"""Tasks ordered by the current sort mode, optionally filtered."""
		return self.task_repo.list(self.settings.sortMode, filter)

	@property
	def task_count(self):
		return self.task_repo.count

	@property
	def completed_count(self):
		return self.task_repo.completed_count

	@property
	def percent_complete(self):
		return self.task_repo.percent_complete

	@property
	def current_streak(self):
		return self.stats.current_streak

	@property
	def total_focus_minutes(self):
		return self.stats.total_focus_minutes

	@property
	def achievement_flags(self):
		return self.achievements.flags

	@property
	def notes(self):
		return self.journal.notes

	@property
	def moods(self):
		return self.journal.moods

	def upcoming_deadlines(self, limit=5):
		return self.task_repo.upcoming_deadlines(limit)

	def timer_display(self):
		return self.timer.display()

	def task_chart(self):
		return chart_service.task_chart(self.task_repo)

	def weekly_chart(self, reference_date=None):
		return chart_service.weekly_chart(self.history, reference_date)

	def history_chart(self):
		return chart_service.history_chart(self.history)
