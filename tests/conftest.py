"""Shared fixtures for the taskrank test suite."""

from datetime import date, datetime, timedelta

import pytest

from taskrank.models.context import OptimizationContext, SchedulingContext
from taskrank.models.task import Task, UserPreferences

TARGET_DATE = date(2024, 3, 4)
NOW = datetime(2024, 3, 4)


@pytest.fixture
def now():
    """Midnight of the fixed target date."""
    return NOW


@pytest.fixture
def make_task():
    """Factory for tasks created at the fixed "now" unless told otherwise."""
    def _make(task_id, title=None, due_in_days=None, age_days=0, **kwargs):
        if due_in_days is not None:
            kwargs['due_date'] = NOW + timedelta(days=due_in_days)
        return Task(
            task_id=task_id,
            title=title or f"Task {task_id}",
            created_at=NOW - timedelta(days=age_days),
            **kwargs,
        )
    return _make


@pytest.fixture
def context():
    """Scheduling context at 09:00 on the target date with default preferences."""
    return SchedulingContext(target_date=TARGET_DATE, target_hour=9.0)


@pytest.fixture
def make_opt_context():
    """Factory for optimization contexts with neutral defaults."""
    def _make(**kwargs):
        kwargs.setdefault('preferences', UserPreferences())
        kwargs.setdefault('target_date', TARGET_DATE)
        kwargs.setdefault('target_hour', 9.0)
        return OptimizationContext(**kwargs)
    return _make
