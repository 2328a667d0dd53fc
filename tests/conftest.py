"""Shared fixtures for Jotter tests."""

from datetime import datetime, timedelta

import pytest

from jotter import models
from jotter.models import Category, Note
from jotter.store import NoteStore


class Clock:
    """Manually advanced replacement for models._now."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current += timedelta(**kwargs)
        return self.current


@pytest.fixture(autouse=True)
def jotter_env(tmp_path, monkeypatch):
    """Point every test at a private data home and config dir."""
    monkeypatch.setenv("JOTTER_HOME", str(tmp_path / "home"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.delenv("JOTTER_DATA_FILE", raising=False)
    monkeypatch.delenv("JOTTER_LOG_LEVEL", raising=False)
    monkeypatch.setenv("NO_COLOR", "1")
    return tmp_path


@pytest.fixture
def clock(monkeypatch):
    clock = Clock(datetime(2024, 3, 15, 9, 30, 12, 345678))
    monkeypatch.setattr(models, "_now", clock)
    return clock


@pytest.fixture
def data_file(jotter_env):
    return jotter_env / "home" / "notes_data.txt"


@pytest.fixture
def sample_store(clock):
    store = NoteStore()
    store.add(Note.create("Team Meeting", "Agenda:\nbudget review\n", Category.WORK))
    clock.advance(minutes=5)
    store.add(Note.create("Lunch", "Sandwich at noon\n", Category.PERSONAL))
    clock.advance(minutes=5)
    store.add(Note.create("Essay draft", "Intro paragraph\n", Category.SCHOOL))
    return store
