"""Exceptions raised by the planner backend.

Only ``ValidationError`` ever reaches a caller of the public planner
methods. Storage and playback failures are caught at the repository and
controller seams and turned into warnings.
"""


class PlannerError(Exception):
	"""Base class for all planner errors."""


class ValidationError(PlannerError):
	"""User input was rejected; state is unchanged."""


class NotFoundError(PlannerError):
	"""No record with the given id."""

	def __init__(self, task_id):
		super().__init__(f"no task with id {task_id}")
		self.task_id = task_id


class StorageError(PlannerError):
	"""A document could not be written to (or read from) the store."""

	def __init__(self, key, reason):
		super().__init__(f"storage failure for {key!r}: {reason}")
		self.key = key
		self.reason = reason


class PlaybackError(PlannerError):
	"""Audio could not be played."""
