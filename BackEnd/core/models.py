from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import StrEnum
from typing import Any, NewType, Optional

# Opaque task identifier (creation timestamp in ms). Never a list index.
TaskId = NewType("TaskId", int)

HISTORY_LIMIT = 50
DEFAULT_CATEGORY = "general"


class Priority(StrEnum):
	HIGH = "high"
	MEDIUM = "medium"
	LOW = "low"


class SortMode(StrEnum):
	ADDED = "added"
	DEADLINE = "deadline"
	PRIORITY = "priority"


class FontSize(StrEnum):
	SMALL = "small"
	MEDIUM = "medium"
	LARGE = "large"


class TimerState(StrEnum):
	IDLE = "idle"
	RUNNING = "running"
	PAUSED = "paused"


@dataclass(slots=True)
class Task:
	id: TaskId
	text: str
	completed: bool
	createdAt: str
	deadline: Optional[str] = None
	priority: str = Priority.MEDIUM.value
	category: str = DEFAULT_CATEGORY
	notes: str = ""
	tags: list[str] = field(default_factory=list)

	def to_dict(self) -> dict[str, Any]:
		d = asdict(self)
		d["tags"] = list(self.tags)
		return d

	@classmethod
	def from_dict(cls, d: dict[str, Any]) -> Task:
		return cls(
			id=TaskId(int(d["id"])),
			text=str(d.get("text", "")),
			completed=bool(d.get("completed", False)),
			createdAt=str(d.get("createdAt") or ""),
			deadline=d.get("deadline") or None,
			priority=str(d.get("priority") or Priority.MEDIUM.value),
			category=str(d.get("category") or DEFAULT_CATEGORY),
			notes=str(d.get("notes") or ""),
			tags=[str(t) for t in (d.get("tags") or [])],
		)


@dataclass(slots=True)
class Settings:
	fontSize: str = FontSize.MEDIUM.value
	sortMode: str = SortMode.ADDED.value
	showDeadlines: bool = True
	showPriorities: bool = True
	timerLength: int = 1500
	compact: bool = False

	def to_dict(self) -> dict[str, Any]:
		return asdict(self)

	@classmethod
	def from_dict(cls, d: dict[str, Any]) -> Settings:
		"""Build from a stored document; missing keys fall back to defaults."""
		known = {k: d[k] for k in cls.__dataclass_fields__ if k in d}
		return cls(**known)


@dataclass(slots=True)
class Stats:
	currentStreak: int = 0
	lastStudyDate: Optional[str] = None
	totalFocusMinutes: int = 0

	def to_dict(self) -> dict[str, Any]:
		return asdict(self)

	@classmethod
	def from_dict(cls, d: dict[str, Any]) -> Stats:
		return cls(
			currentStreak=int(d.get("currentStreak") or 0),
			lastStudyDate=d.get("lastStudyDate") or None,
			totalFocusMinutes=int(d.get("totalFocusMinutes") or 0),
		)


@dataclass(slots=True)
class Achievements:
	firstTask: bool = False
	fiveTasks: bool = False
	threeDayStreak: bool = False

	def to_dict(self) -> dict[str, Any]:
		return asdict(self)

	@classmethod
	def from_dict(cls, d: dict[str, Any]) -> Achievements:
		return cls(
			firstTask=bool(d.get("firstTask")),
			fiveTasks=bool(d.get("fiveTasks")),
			threeDayStreak=bool(d.get("threeDayStreak")),
		)


@dataclass(frozen=True, slots=True)
class FocusHistoryEntry:
	minutes: int
	timestamp: str

	def to_dict(self) -> dict[str, Any]:
		return {"minutes": self.minutes, "timestamp": self.timestamp}

	@classmethod
	def from_dict(cls, d: dict[str, Any]) -> FocusHistoryEntry:
		return cls(minutes=int(d.get("minutes") or 0), timestamp=str(d.get("timestamp") or ""))


@dataclass(frozen=True, slots=True)
class MoodEntry:
	mood: str
	timestamp: str

	def to_dict(self) -> dict[str, Any]:
		return {"mood": self.mood, "timestamp": self.timestamp}

	@classmethod
	def from_dict(cls, d: dict[str, Any]) -> MoodEntry:
		return cls(mood=str(d.get("mood") or ""), timestamp=str(d.get("timestamp") or ""))


def round_minutes(seconds: int) -> int:
	"""Seconds to whole minutes, halves rounded up."""
	return (int(seconds) + 30) // 60


_TRUE_WORDS = {"1", "true", "yes", "y", "on"}
_FALSE_WORDS = {"0", "false", "no", "n", "off", ""}

def parse_flag(value):
	"""Strict on/off parsing. Returns None for anything that is not a recognisable flag."""
	if isinstance(value, bool):
		return value
	if isinstance(value, int) and value in (0, 1):
		return bool(value)
	if isinstance(value, str):
		word = value.strip().lower()
		if word in _TRUE_WORDS:
			return True
		if word in _FALSE_WORDS:
			return False
	return None
