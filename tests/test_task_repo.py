# tests/test_task_repo.py

from __future__ import annotations

from datetime import date

import pytest

from BackEnd.core.errors import NotFoundError, ValidationError
from BackEnd.core.models import SortMode
from BackEnd.repos.store import TASKS_KEY
from BackEnd.repos.task_repo import TaskRepository


@pytest.fixture()
def repo(store, clock) -> TaskRepository:
    return TaskRepository(store, clock)


def texts(tasks):
    return [t.text for t in tasks]


def test_add_creates_incomplete_task_and_persists(repo, store) -> None:
    task = repo.add("  Read ch.1  ", deadline="2026-03-12", priority="high", category="math")

    assert repo.count == 1
    assert task.text == "Read ch.1"
    assert task.completed is False
    assert task.notes == "" and task.tags == []
    assert task.createdAt == "2026-03-10T09:30:00.000"
    assert store.get(TASKS_KEY) == [task.to_dict()]


@pytest.mark.parametrize("text", ["", "   ", None])
def test_add_rejects_blank_text(repo, text) -> None:
    with pytest.raises(ValidationError):
        repo.add(text)
    assert repo.count == 0


def test_add_rejects_unknown_priority_and_bad_deadline(repo) -> None:
    with pytest.raises(ValidationError):
        repo.add("x", priority="urgent")
    with pytest.raises(ValidationError):
        repo.add("x", deadline="next friday")
    assert repo.count == 0


def test_ids_are_unique_even_within_one_millisecond(repo) -> None:
    ids = [repo.add(f"t{i}").id for i in range(5)]
    assert len(set(ids)) == 5


def test_toggle_twice_restores_state(repo) -> None:
    task = repo.add("Essay")
    repo.toggle_completion(task.id)
    assert repo.find(task.id).completed is True
    repo.toggle_completion(task.id)
    assert repo.find(task.id).completed is False


def test_unknown_ids_are_silent_noops(repo) -> None:
    repo.add("Keep me")
    assert repo.toggle_completion(123) is None
    assert repo.delete(123) is None
    assert repo.edit(123, notes="x") is None
    assert repo.count == 1
    with pytest.raises(NotFoundError):
        repo.require(123)


def test_delete_removes_task(repo, store) -> None:
    a = repo.add("a")
    b = repo.add("b")
    repo.delete(a.id)
    assert texts(repo.all()) == ["b"]
    assert [d["id"] for d in store.get(TASKS_KEY)] == [b.id]


def test_edit_merges_fields_and_splits_tags(repo) -> None:
    task = repo.add("Lab report")
    repo.edit(task.id, notes="cite sources", tags="exam, chapter1 , ,")
    edited = repo.find(task.id)
    assert edited.notes == "cite sources"
    assert edited.tags == ["exam", "chapter1"]
    assert edited.text == "Lab report"


def test_edit_validates_before_applying(repo) -> None:
    task = repo.add("Lab report")
    with pytest.raises(ValidationError):
        repo.edit(task.id, notes="changed", text="  ")
    assert repo.find(task.id).notes == ""
    with pytest.raises(ValidationError):
        repo.edit(task.id, id=1)


def test_sort_by_priority_ignores_input_order(repo) -> None:
    repo.add("low one", priority="low")
    repo.add("high one", priority="high")
    repo.add("medium one", priority="medium")
    repo.add("high two", priority="high")

    ordered = repo.list(SortMode.PRIORITY)
    assert [t.priority for t in ordered] == ["high", "high", "medium", "low"]
    assert texts(ordered)[:2] == ["high one", "high two"]


def test_unknown_stored_priority_sorts_last(store, clock) -> None:
    store.set(TASKS_KEY, [
        {"id": 1, "text": "odd", "completed": False, "createdAt": "2026-01-01T00:00:00", "priority": "someday"},
        {"id": 2, "text": "low", "completed": False, "createdAt": "2026-01-01T00:00:00", "priority": "low"},
    ])
    repo = TaskRepository(store, clock)
    assert texts(repo.list("priority")) == ["low", "odd"]


def test_sort_by_deadline_puts_missing_deadlines_last(repo) -> None:
    repo.add("none")
    repo.add("later", deadline="2026-04-01")
    repo.add("sooner", deadline=date(2026, 3, 11))
    assert texts(repo.list(SortMode.DEADLINE)) == ["sooner", "later", "none"]


def test_sort_by_added_is_newest_first_and_does_not_reorder_store(repo, clock) -> None:
    repo.add("first")
    clock.advance(minutes=1)
    repo.add("second")
    clock.advance(minutes=1)
    repo.add("third")

    assert texts(repo.list(SortMode.ADDED)) == ["third", "second", "first"]
    assert texts(repo.all()) == ["first", "second", "third"]


def test_filters(repo) -> None:
    due_today = repo.add("due today", deadline="2026-03-10")
    repo.add("urgent", priority="high", deadline="2026-03-11")
    done = repo.add("done")
    repo.toggle_completion(done.id)

    assert texts(repo.list("added", "today")) == [due_today.text]
    assert texts(repo.list("added", "High Priority")) == ["urgent"]
    assert texts(repo.list("added", "completed")) == ["done"]
    assert len(repo.list("added", "all")) == 3
    assert len(repo.list("added", "whatever")) == 3


def test_counts_and_upcoming_deadlines(repo) -> None:
    assert repo.percent_complete == 0
    tasks = [repo.add(f"t{i}", deadline=f"2026-03-{20 - i}") for i in range(7)]
    repo.add("no deadline")
    repo.toggle_completion(tasks[6].id)

    assert repo.completed_count == 1
    assert repo.percent_complete == 13  # 12.5 rounds up
    upcoming = repo.upcoming_deadlines()
    assert [t.deadline for t in upcoming] == [
        "2026-03-15", "2026-03-16", "2026-03-17", "2026-03-18", "2026-03-19",
    ]


def test_seed_welcome_tasks_only_when_empty(repo) -> None:
    created = repo.seed_welcome_tasks()
    assert texts(created) == ["Welcome: Create your first task", "Try the Focus Timer"]
    assert created[0].notes == "Use the Study Hub to add tasks"
    assert repo.seed_welcome_tasks() == []
    assert repo.count == 2


def test_malformed_stored_records_are_skipped(store, clock) -> None:
    store.set(TASKS_KEY, [{"text": "no id"}, {"id": 5, "text": "ok", "completed": True, "createdAt": "x"}])
    repo = TaskRepository(store, clock)
    assert texts(repo.all()) == ["ok"]


def test_clear_removes_everything(repo, store) -> None:
    repo.add("a")
    repo.clear()
    assert repo.count == 0
    assert store.get(TASKS_KEY) == []


def test_added_order_with_real_clock_is_newest_first(store) -> None:
    repo = TaskRepository(store)
    first = repo.add("first")
    second = repo.add("second")

    assert len(first.createdAt) == len("2026-03-10T09:30:00.000")
    assert texts(repo.list(SortMode.ADDED)) == ["second", "first"]
    assert second.id > first.id


def test_same_timestamp_ties_order_by_id(store) -> None:
    store.set(TASKS_KEY, [
        {"id": 10, "text": "older", "completed": False, "createdAt": "2026-03-10T09:30:00.000"},
        {"id": 11, "text": "newer", "completed": False, "createdAt": "2026-03-10T09:30:00.000"},
    ])
    assert texts(TaskRepository(store).list(SortMode.ADDED)) == ["newer", "older"]


def test_category_defaults_to_general_everywhere(repo, store) -> None:
    added = repo.add("no category", category="")
    store.set(TASKS_KEY, [{"id": 3, "text": "legacy", "completed": False, "createdAt": "x"}])
    loaded = TaskRepository(store).all()[0]
    assert added.category == loaded.category == "general"
    repo.edit(added.id, category="  ")
    assert repo.find(added.id).category == "general"


@pytest.mark.parametrize(("raw", "expected"), [("false", False), ("yes", True), (0, False)])
def test_edit_completed_parses_flags(repo, raw, expected) -> None:
    task = repo.add("flag")
    repo.toggle_completion(task.id)
    repo.edit(task.id, completed=raw)
    assert repo.find(task.id).completed is expected


def test_edit_completed_rejects_garbage(repo) -> None:
    task = repo.add("flag")
    with pytest.raises(ValidationError):
        repo.edit(task.id, completed="maybe")
