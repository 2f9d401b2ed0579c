from datetime import date, datetime

def fmt_ms(seconds: int) -> str:
	"""Format seconds as MM:SS (minutes are not wrapped at 60)."""
	return f"{seconds // 60:02}:{seconds % 60:02}"

def day_of(timestamp: str) -> str:
	"""Calendar day prefix (YYYY-MM-DD) of an ISO timestamp."""
	return (timestamp or "")[:10]


class Clock:
	"""Local wall clock. Services take one so tests can pin the date."""

	def now(self) -> datetime:
		return datetime.now()

	def today(self) -> date:
		return self.now().date()

	def now_iso(self) -> str:
		return self.now().isoformat(timespec="milliseconds")

	def now_ms(self) -> int:
		return int(self.now().timestamp() * 1000)
