"""Dependency graph analysis: blocking counts and critical path."""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Sequence

from ..models.task import Task
from ..utils.config import resolve_config

logger = logging.getLogger(__name__)


def index_tasks(tasks: Sequence[Task]) -> Dict[str, Task]:
    """Map task ids to tasks, rejecting duplicate ids."""
    tasks_by_id: Dict[str, Task] = {}
    for task in tasks:
        if task.task_id in tasks_by_id:
            raise ValueError(f"Duplicate task id: {task.task_id}")
        tasks_by_id[task.task_id] = task
    return tasks_by_id


def compute_blocking_counts(tasks: Sequence[Task]) -> Dict[str, int]:
    """For each blocker id, how many tasks list it in blocked_by_task_ids."""
    counts: Dict[str, int] = {}
    for task in tasks:
        for blocker_id in task.blocked_by_task_ids:
            counts[blocker_id] = counts.get(blocker_id, 0) + 1
    return counts


@dataclass(frozen=True)
class DependencyAnalysis:
    """Result of analyzing a task set's blocking graph."""

    critical_path: FrozenSet[str] = frozenset()
    longest_path: Dict[str, int] = field(default_factory=dict)
    tasks_blocked_by: Dict[str, int] = field(default_factory=dict)
    unreached_task_ids: FrozenSet[str] = frozenset()

    @property
    def unreached_count(self) -> int:
        return len(self.unreached_task_ids)


class DependencyAnalyzer:
    """Topological longest-path analysis over blocked-by links."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.params = resolve_config(config)['critical_path']

    def task_weight(self, task: Task) -> int:
        """Estimated minutes (or the default) plus a priority bump."""
        minutes = task.estimated_minutes if task.estimated_minutes > 0 else self.params['default_minutes']
        return minutes + (self.params['priority_pivot'] - task.priority) * self.params['priority_step']

    def analyze(self, tasks: Sequence[Task]) -> DependencyAnalysis:
        tasks_by_id = index_tasks(tasks)
        blocking_counts = compute_blocking_counts(tasks)
        if not tasks:
            return DependencyAnalysis(tasks_blocked_by=blocking_counts)

        in_degree = {task_id: 0 for task_id in tasks_by_id}
        dependents: Dict[str, List[Task]] = {task_id: [] for task_id in tasks_by_id}
        for task in tasks:
            # Sorted for a deterministic relaxation order.
            for blocker_id in sorted(task.blocked_by_task_ids):
                if blocker_id in tasks_by_id:
                    in_degree[task.task_id] += 1
                    dependents[blocker_id].append(task)

        longest_path = {task_id: 0 for task_id in tasks_by_id}
        predecessor: Dict[str, Optional[str]] = {task_id: None for task_id in tasks_by_id}

        queue = deque()
        for task in tasks:
            if in_degree[task.task_id] == 0:
                queue.append(task.task_id)
                longest_path[task.task_id] = self.task_weight(task)

        processed: List[str] = []
        while queue:
            current_id = queue.popleft()
            processed.append(current_id)

            for dependent in dependents[current_id]:
                candidate = longest_path[current_id] + self.task_weight(dependent)
                if candidate > longest_path[dependent.task_id]:
                    longest_path[dependent.task_id] = candidate
                    predecessor[dependent.task_id] = current_id

                in_degree[dependent.task_id] -= 1
                if in_degree[dependent.task_id] == 0:
                    queue.append(dependent.task_id)

        reached = set(processed)
        unreached = frozenset(task_id for task_id in tasks_by_id if task_id not in reached)
        if unreached:
            logger.warning(
                "Dependency cycle detected; %d task(s) excluded from critical path: %s",
                len(unreached), sorted(unreached),
            )

        critical_path = set()
        if processed:
            # First task in input order wins ties.
            endpoint = max(
                (t.task_id for t in tasks if t.task_id in reached),
                key=lambda task_id: longest_path[task_id],
            )
            current: Optional[str] = endpoint
            while current is not None:
                critical_path.add(current)
                current = predecessor[current]

        return DependencyAnalysis(
            critical_path=frozenset(critical_path),
            longest_path=longest_path,
            tasks_blocked_by=blocking_counts,
            unreached_task_ids=unreached,
        )

    def compute_critical_path(self, tasks: Sequence[Task]) -> FrozenSet[str]:
        return self.analyze(tasks).critical_path
