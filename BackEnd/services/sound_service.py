import logging
from pathlib import Path
from PySide6.QtCore import QObject, QUrl, Signal
from BackEnd.core.errors import PlaybackError

logger = logging.getLogger(__name__)

BELL = "bell.wav"

def _qt_sound_effect():
	# QtMultimedia pulls in the platform audio stack; load it on first use only.
	from PySide6.QtMultimedia import QSoundEffect
	return QSoundEffect()

class SoundPlayer(QObject):
	"""Plays short sound files from ``sounds_dir`` through QSoundEffect.

	QSoundEffect loads asynchronously, so a file that turns out to be
	undecodable is only known once ``statusChanged`` reports Error. That
	late failure is emitted on ``failed``; failures known up front raise
	PlaybackError from play().
	"""

	failed = Signal(str)  # emits a description of the failed playback

	def __init__(self, sounds_dir, effect_factory=_qt_sound_effect):
		super().__init__()
		self.sounds_dir = Path(sounds_dir)
		self._effect_factory = effect_factory
		self._effect = None
		self._current = None

	def _ensure_effect(self):
		if self._effect is None:
			self._effect = self._effect_factory()
			self._effect.statusChanged.connect(self._on_status_changed)
		return self._effect

	def _on_status_changed(self):
		effect = self._effect
		if effect is None or effect.status() != effect.Status.Error:
			return
		message = f"cannot play {self._current}"
		logger.warning("Playback failed: %s", message)
		self.failed.emit(message)

	def resolve(self, name):
		path = (self.sounds_dir / name).resolve()
		if self.sounds_dir.resolve() not in path.parents:
			raise PlaybackError(f"sound outside sounds dir: {name}")
		if not path.is_file():
			raise PlaybackError(f"sound not found: {path}")
		return path

	def play(self, name):
		"""Start playback. Raises PlaybackError when the sound cannot play."""
		path = self.resolve(name)
		try:
			effect = self._ensure_effect()
		except ImportError as e:
			raise PlaybackError(f"audio backend unavailable: {e}") from e
		self._current = path.name
		effect.setSource(QUrl.fromLocalFile(str(path)))
		if effect.status() == effect.Status.Error:
			raise PlaybackError(f"cannot play {path.name}")
		effect.play()
		logger.debug("Playing %s", path.name)
