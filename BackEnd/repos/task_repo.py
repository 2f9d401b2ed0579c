import logging
from datetime import date
from BackEnd.core.clock import Clock
from BackEnd.core.errors import NotFoundError, ValidationError
from BackEnd.core.models import DEFAULT_CATEGORY, Priority, SortMode, Task, TaskId, parse_flag
from BackEnd.repos.store import TASKS_KEY, save_document

logger = logging.getLogger(__name__)

PRIORITY_ORDER = {Priority.HIGH: 1, Priority.MEDIUM: 2, Priority.LOW: 3}
UNKNOWN_PRIORITY_RANK = 4

FILTER_TODAY = "today"
FILTER_HIGH = "high priority"
FILTER_COMPLETED = "completed"
FILTER_ALL = "all"

EDITABLE_FIELDS = ("text", "deadline", "priority", "category", "notes", "tags", "completed")

WELCOME_TASKS = (
	("Welcome: Create your first task", Priority.MEDIUM, "welcome", "Use the Study Hub to add tasks"),
	("Try the Focus Timer", Priority.LOW, "focus", ""),
)

def _clean_text(text):
	text = (text or "").strip()
	if not text:
		raise ValidationError("Please enter a task")
	return text

def _clean_priority(priority):
	try:
		return Priority(str(priority).strip().lower()).value
	except ValueError:
		raise ValidationError(f"Unknown priority: {priority!r}") from None

def _clean_deadline(deadline):
	"""Accept None/'', a date, or an ISO YYYY-MM-DD string."""
	if deadline is None or deadline == "":
		return None
	if isinstance(deadline, date):
		return deadline.isoformat()
	try:
		return date.fromisoformat(str(deadline).strip()).isoformat()
	except ValueError:
		raise ValidationError(f"Invalid deadline: {deadline!r}") from None

def _clean_category(category):
	return (category or "").strip() or DEFAULT_CATEGORY

def _clean_tags(tags):
	"""Tags come either as a list or as a comma separated string."""
	if tags is None:
		return []
	if isinstance(tags, str):
		tags = tags.split(",")
	return [str(t).strip() for t in tags if str(t).strip()]

def deadline_key(task):
	"""Sort key: tasks without a (parseable) deadline go last."""
	if not task.deadline:
		return date.max
	try:
		return date.fromisoformat(task.deadline)
	except ValueError:
		return date.max

def priority_key(task):
	return PRIORITY_ORDER.get(task.priority, UNKNOWN_PRIORITY_RANK)


class TaskRepository:
	"""Owns the task list and mirrors it to the store after every change."""

	def __init__(self, store, clock=None, on_warning=None):
		self._store = store
		self._clock = clock or Clock()
		self._on_warning = on_warning
		self._tasks = self._load()

	def _load(self):
		tasks = []
		for raw in self._store.get(TASKS_KEY, []) or []:
			try:
				tasks.append(Task.from_dict(raw))
			except (KeyError, TypeError, ValueError) as e:
				logger.warning("Skipping malformed task record %r: %s", raw, e)
		return tasks

	def _save(self):
		save_document(self._store, TASKS_KEY, [t.to_dict() for t in self._tasks], self._on_warning)

	def _fresh_id(self):
		new_id = self._clock.now_ms()
		ids = {t.id for t in self._tasks}
		if new_id in ids:
			new_id = max(ids) + 1
		return TaskId(new_id)

	# ---- queries ----

	def all(self):
		"""Tasks in stored (insertion) order."""
		return list(self._tasks)

	def find(self, task_id):
		for t in self._tasks:
			if t.id == task_id:
				return t
		return None

	def require(self, task_id):
		task = self.find(task_id)
		if task is None:
			raise NotFoundError(task_id)
		return task

	@property
	def count(self):
		return len(self._tasks)

	@property
	def completed_count(self):
		return sum(1 for t in self._tasks if t.completed)

	@property
	def percent_complete(self):
		"""Completed share as a whole percent, halves rounded up."""
		total = len(self._tasks)
		if not total:
			return 0
		return (200 * self.completed_count + total) // (2 * total)

	def upcoming_deadlines(self, limit=5):
		pending = [t for t in self._tasks if t.deadline and not t.completed]
		return sorted(pending, key=deadline_key)[:limit]

	def list(self, sort_mode=SortMode.ADDED, filter=None):
		"""Sorted and filtered copy; stored order is never touched."""
		if sort_mode == SortMode.DEADLINE:
			items = sorted(self._tasks, key=deadline_key)
		elif sort_mode == SortMode.PRIORITY:
			items = sorted(self._tasks, key=priority_key)
		else:
			# same-millisecond ties fall back to the (monotonic) id
			items = sorted(self._tasks, key=lambda t: (t.createdAt, t.id), reverse=True)

		flt = (filter or "").strip().lower()
		if flt == FILTER_TODAY:
			today = self._clock.today().isoformat()
			items = [t for t in items if t.deadline == today]
		elif flt == FILTER_HIGH:
			items = [t for t in items if t.priority == Priority.HIGH]
		elif flt == FILTER_COMPLETED:
			items = [t for t in items if t.completed]
		return items

	# ---- mutations ----

	def add(self, text, deadline=None, priority=Priority.MEDIUM, category=DEFAULT_CATEGORY):
		"""Create a task. Raises ValidationError on blank text or bad fields."""
		task = Task(
			id=TaskId(0),
			text=_clean_text(text),
			completed=False,
			createdAt=self._clock.now_iso(),
			deadline=_clean_deadline(deadline),
			priority=_clean_priority(priority),
			category=_clean_category(category),
		)
		task.id = self._fresh_id()
		self._tasks.append(task)
		self._save()
		logger.debug("Added task %s", task.id)
		return task

	def toggle_completion(self, task_id):
		try:
			task = self.require(task_id)
		except NotFoundError:
			logger.debug("toggle: unknown task %s", task_id)
			return None
		task.completed = not task.completed
		self._save()
		return task

	def delete(self, task_id):
		try:
			task = self.require(task_id)
		except NotFoundError:
			logger.debug("delete: unknown task %s", task_id)
			return None
		self._tasks.remove(task)
		self._save()
		return task

	def edit(self, task_id, **fields):
		"""Merge ``fields`` into a task. All fields are validated before any is applied."""
		unknown = sorted(set(fields) - set(EDITABLE_FIELDS))
		if unknown:
			raise ValidationError(f"Cannot edit field(s): {', '.join(unknown)}")
		updates = {}
		for name, value in fields.items():
			if name == "text":
				value = _clean_text(value)
			elif name == "deadline":
				value = _clean_deadline(value)
			elif name == "priority":
				value = _clean_priority(value)
			elif name == "tags":
				value = _clean_tags(value)
			elif name == "category":
				value = _clean_category(value)
			elif name == "completed":
				flag = parse_flag(value)
				if flag is None:
					raise ValidationError(f"Expected true/false for completed, got {value!r}")
				value = flag
			else:
				value = "" if value is None else str(value)
			updates[name] = value
		try:
			task = self.require(task_id)
		except NotFoundError:
			logger.debug("edit: unknown task %s", task_id)
			return None
		for name, value in updates.items():
			setattr(task, name, value)
		self._save()
		return task

	def clear(self):
		self._tasks = []
		self._save()

	def seed_welcome_tasks(self):
		"""Add the starter tasks when the list is empty (first run)."""
		if self._tasks:
			return []
		created = []
		for text, priority, category, notes in WELCOME_TASKS:
			task = self.add(text, priority=priority, category=category)
			task.notes = notes
			created.append(task)
		self._save()
		return created
