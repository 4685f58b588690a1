"""Scheduling and optimization context models."""

from collections import deque
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, FrozenSet, Hashable, Iterable, Mapping, Optional, Tuple

from ..utils.datetime_utils import start_of_day
from .task import Stakeholder, Task, UserPreferences


class RecencyWindow:
    """Bounded most-recent-first list; pushing past capacity evicts the oldest."""

    def __init__(self, capacity: int, items: Iterable[Hashable] = ()):
        if capacity <= 0:
            raise ValueError(f"RecencyWindow capacity must be positive, got {capacity}")
        self.capacity = capacity
        # Seed items are already most-recent-first.
        self._items = deque(list(items)[:capacity], maxlen=capacity)

    def push(self, value: Hashable, unique: bool = False) -> bool:
        """Insert value at the front. With unique, skip values already present."""
        if unique and self._contains(value):
            return False
        self._items.appendleft(value)
        return True

    def _contains(self, value: Hashable) -> bool:
        if isinstance(value, str):
            folded = value.casefold()
            return any(isinstance(v, str) and v.casefold() == folded for v in self._items)
        return value in self._items

    def snapshot(self) -> Tuple:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self._items)


@dataclass(frozen=True)
class SchedulingContext:
    """Caller-supplied description of the moment being planned for."""

    target_date: date
    target_hour: float
    preferences: UserPreferences = field(default_factory=UserPreferences)
    current_energy_level: float = 3.0
    available_block_minutes: int = 60
    preferred_contexts: Tuple[str, ...] = ()
    recent_categories: Tuple[str, ...] = ()
    recent_project_ids: Tuple[str, ...] = ()
    recent_tags: Tuple[str, ...] = ()
    recent_contexts: Tuple[str, ...] = ()
    current_stakeholder: Optional[Stakeholder] = None
    recently_completed_task_ids: Tuple[str, ...] = ()
    high_time_pressure: Optional[bool] = None

    def __post_init__(self):
        for name in ('preferred_contexts', 'recent_categories', 'recent_project_ids',
                     'recent_tags', 'recent_contexts', 'recently_completed_task_ids'):
            object.__setattr__(self, name, tuple(getattr(self, name)))
        object.__setattr__(self, 'current_stakeholder', Stakeholder.parse(self.current_stakeholder))


@dataclass(frozen=True)
class OptimizationContext:
    """Immutable per-pass inputs to the dimension scorers."""

    preferences: UserPreferences
    target_date: date
    target_hour: float
    current_energy_level: float = 3.0
    available_block_minutes: int = 60
    high_time_pressure: bool = False
    total_backlog_size: int = 0
    available_contexts: FrozenSet[str] = frozenset()
    recent_categories: Tuple[str, ...] = ()
    recent_project_ids: Tuple[str, ...] = ()
    recent_tags: Tuple[str, ...] = ()
    recent_contexts: Tuple[str, ...] = ()
    current_stakeholder: Optional[Stakeholder] = None
    recently_completed_task_ids: Tuple[str, ...] = ()
    critical_path_task_ids: FrozenSet[str] = frozenset()
    tasks_blocked_by: Mapping[str, int] = field(default_factory=dict)
    known_tasks: Mapping[str, Task] = field(default_factory=dict)

    @property
    def target_datetime(self) -> datetime:
        """The reference "now" for ages and due distances."""
        return start_of_day(self.target_date)

    def blocking_count(self, task_id: str) -> int:
        return self.tasks_blocked_by.get(task_id, 0)

    def is_on_critical_path(self, task_id: str) -> bool:
        return task_id in self.critical_path_task_ids

    def recent_tasks(self, all_tasks: Iterable[Task]) -> Tuple[Task, ...]:
        """Resolve recently completed ids to tasks, most recent first."""
        lookup: Dict[str, Task] = dict(self.known_tasks)
        lookup.update((t.task_id, t) for t in all_tasks)
        return tuple(
            lookup[task_id]
            for task_id in self.recently_completed_task_ids
            if task_id in lookup
        )
