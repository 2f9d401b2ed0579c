import logging
from BackEnd.core.errors import ValidationError
from BackEnd.core.models import FontSize, Settings, SortMode, parse_flag
from BackEnd.repos.store import SETTINGS_KEY, save_document

logger = logging.getLogger(__name__)

def _enum_value(enum_cls, value, label):
	try:
		return enum_cls(str(value).strip().lower()).value
	except ValueError:
		raise ValidationError(f"Unknown {label}: {value!r}") from None

def _flag(value):
	flag = parse_flag(value)
	if flag is None:
		raise ValidationError(f"Expected on/off, got {value!r}")
	return flag

def _timer_length(value):
	try:
		seconds = int(value)
	except (TypeError, ValueError):
		raise ValidationError(f"Invalid session length: {value!r}") from None
	if isinstance(value, bool) or seconds <= 0:
		raise ValidationError(f"Session length must be a positive number of seconds, got {value!r}")
	return seconds

_VALIDATORS = {
	"fontSize": lambda v: _enum_value(FontSize, v, "font size"),
	"sortMode": lambda v: _enum_value(SortMode, v, "sort mode"),
	"showDeadlines": _flag,
	"showPriorities": _flag,
	"timerLength": _timer_length,
	"compact": _flag,
}


class SettingsRepository:
	"""Single process-wide Settings record, persisted on every change."""

	def __init__(self, store, on_warning=None):
		self._store = store
		self._on_warning = on_warning
		raw = store.get(SETTINGS_KEY)
		if not isinstance(raw, dict):
			if raw is not None:
				logger.warning("Stored settings unusable, using defaults")
			raw = {}
		self._settings = Settings.from_dict(self._validated(raw, strict=False))

	@staticmethod
	def _validated(fields, strict=True):
		out = {}
		for name, value in fields.items():
			validator = _VALIDATORS.get(name)
			if validator is None:
				if strict:
					raise ValidationError(f"Unknown setting: {name}")
				continue
			try:
				out[name] = validator(value)
			except ValidationError:
				if strict:
					raise
				logger.warning("Ignoring stored setting %s=%r", name, value)
		return out

	@property
	def current(self):
		return self._settings

	def save(self):
		save_document(self._store, SETTINGS_KEY, self._settings.to_dict(), self._on_warning)

	def update(self, **fields):
		"""Validate then apply. Raises ValidationError without touching state."""
		for name, value in self._validated(fields).items():
			setattr(self._settings, name, value)
		self.save()
		return self._settings
