import logging
from PySide6.QtCore import QObject, Signal, QTimer
from BackEnd.core.clock import fmt_ms
from BackEnd.core.models import TimerState

logger = logging.getLogger(__name__)

class TimerService(QObject):
	"""Focus countdown driven by a 1 s QTimer.

	tick() is public so hosts without an event loop (and tests) can drive
	the countdown by hand. A tick that arrives while not running is ignored,
	so nothing fires after pause() or reset().
	"""

	remaining_changed = Signal(int)  # emits remaining seconds
	state_changed = Signal(str)  # emits 'idle', 'running', 'paused'
	session_completed = Signal(int)  # emits session length in seconds

	def __init__(self, length_sec=1500):
		super().__init__()
		self.length_sec = int(length_sec)
		self.remaining_sec = self.length_sec
		self.state = TimerState.IDLE
		self._timer = QTimer(self)
		self._timer.setInterval(1000)
		self._timer.timeout.connect(self.tick)

	@property
	def running(self):
		return self.state == TimerState.RUNNING

	@property
	def paused(self):
		return self.state == TimerState.PAUSED

	@property
	def ticking(self):
		"""True while the underlying QTimer is armed."""
		return self._timer.isActive()

	def display(self):
		return fmt_ms(self.remaining_sec)

	def _set_state(self, state):
		if self.state != state:
			self.state = state
			self.state_changed.emit(state.value)

	def start(self):
		if self.running:
			return
		self._timer.start()
		self._set_state(TimerState.RUNNING)

	def pause(self):
		if not self.running:
			return
		self._timer.stop()
		self._set_state(TimerState.PAUSED)

	def reset(self):
		self._timer.stop()
		self.remaining_sec = self.length_sec
		self._set_state(TimerState.IDLE)
		self.remaining_changed.emit(self.remaining_sec)

	def set_length(self, seconds):
		"""New session length. An in-progress countdown keeps its remaining time."""
		self.length_sec = int(seconds)
		if self.state == TimerState.IDLE:
			self.remaining_sec = self.length_sec
			self.remaining_changed.emit(self.remaining_sec)

	def tick(self):
		if not self.running:
			return
		if self.remaining_sec > 0:
			self.remaining_sec -= 1
			self.remaining_changed.emit(self.remaining_sec)
		if self.remaining_sec > 0:
			return
		self._timer.stop()
		self._set_state(TimerState.IDLE)
		length = self.length_sec
		logger.info("Focus session complete (%s s)", length)
		self.session_completed.emit(length)
		self.remaining_sec = self.length_sec
		self.remaining_changed.emit(self.remaining_sec)
