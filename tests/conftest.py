# tests/conftest.py

from __future__ import annotations

import random
from datetime import datetime

import pytest
from PySide6.QtCore import QCoreApplication

from BackEnd.repos.store import MemoryStore
from BackEnd.services.planner import StudyPlanner

from .fakes import FakeClock, FakeSoundPlayer

# Tuesday
NOW = datetime(2026, 3, 10, 9, 30, 0)


@pytest.fixture(scope="session", autouse=True)
def qapp():
    """QTimer needs a core application; ticks are still driven by hand."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(NOW)


@pytest.fixture()
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def sound() -> FakeSoundPlayer:
    return FakeSoundPlayer()


@pytest.fixture()
def planner(store: MemoryStore, clock: FakeClock, sound: FakeSoundPlayer) -> StudyPlanner:
    """Planner on an empty in-memory store, pinned clock and fake audio."""
    return StudyPlanner(store, clock=clock, sound_player=sound, rng=random.Random(7))
