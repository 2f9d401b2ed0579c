"""Read-only datasets for the dashboard charts.

Each function returns ``(labels, values)`` ready to hand to whatever draws
the chart.
"""

from datetime import date

from BackEnd.core.clock import day_of

HISTORY_POINTS = 8


def task_chart(tasks):
	"""Completed vs remaining task counts."""
	completed = tasks.completed_count
	remaining = max(0, tasks.count - completed)
	return ["Completed", "Remaining"], [completed, remaining]


def weekly_chart(history, reference_date=None):
	"""Minutes focused on each of the last 7 days, labelled by weekday."""
	buckets = history.weekly_buckets(reference_date)
	return [b.label for b in buckets], [b.minutes for b in buckets]


def history_chart(history, n=HISTORY_POINTS):
	"""The last ``n`` sessions, labelled by the day they finished."""
	entries = history.recent(n)
	labels = []
	for e in entries:
		try:
			labels.append(date.fromisoformat(day_of(e.timestamp)).strftime("%x"))
		except ValueError:
			labels.append(day_of(e.timestamp))
	return labels, [e.minutes for e in entries]
