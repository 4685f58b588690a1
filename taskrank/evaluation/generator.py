"""Synthetic backlog generator for demos and evaluation."""

import random
from datetime import datetime, timedelta
from typing import List

from ..models.task import Task
from ..utils.config import resolve_config


class BacklogGenerator:
    """Generates deterministic task backlogs."""

    PROJECTS = ['apollo', 'billing', 'onboarding', 'infra']
    CATEGORIES = ['development', 'meeting', 'review', 'planning', 'admin']
    CONTEXTS = ['@computer', '@office', '@home', '@phone', '@errands']
    TAGS = ['api', 'docs', 'bug', 'customer', 'finance', 'design', 'ops', 'hiring']
    STAKEHOLDERS = ['self', 'Dana Lee', 'Finance Team', 'ACME Corp']
    VERBS = ['Draft', 'Review', 'Fix', 'Plan', 'Prepare', 'Update']

    def __init__(self, seed: int = 42, config: dict = None):
        """Initialize generator with seed for reproducibility."""
        self.seed = seed
        self.random = random.Random(seed)
        self.config = resolve_config(config)
        self.eval_config = self.config['evaluation']

    def _maybe(self, probability: float) -> bool:
        return self.random.random() < probability

    def generate_tasks(
        self,
        count: int,
        now: datetime,
        due_date_range_days: int = 21,
        max_age_days: int = 60,
    ) -> List[Task]:
        """Generate a backlog with realistic field coverage."""
        tasks: List[Task] = []
        blocker_probability = self.eval_config['blocker_probability']

        for i in range(count):
            task_id = f"task_{i:03d}"
            project = self.random.choice(self.PROJECTS) if self._maybe(0.6) else None
            category = self.random.choice(self.CATEGORIES) if self._maybe(0.7) else None
            tags = self.random.sample(self.TAGS, self.random.randint(0, 3))
            title = f"{self.random.choice(self.VERBS)} {' '.join(tags) or 'item'} {i}"
            if project:
                title += f" for {project.upper()}"

            # Due dates range from a few days overdue to the end of the range.
            due_date = None
            if self._maybe(0.55):
                due_date = now + timedelta(days=self.random.randint(-5, due_date_range_days))

            depends_on = []
            if i > 0 and self._maybe(blocker_probability):
                depends_on = [f"task_{self.random.randint(0, i - 1):03d}"]

            tasks.append(Task(
                task_id=task_id,
                title=title,
                created_at=now - timedelta(days=self.random.randint(0, max_age_days)),
                due_date=due_date,
                priority=self.random.randint(1, 3),
                estimated_minutes=self.random.choice([0, 5, 15, 25, 30, 45, 60, 90, 120]),
                energy_level=self.random.randint(1, 5) if self._maybe(0.6) else None,
                contexts=self.random.sample(self.CONTEXTS, self.random.randint(0, 2)),
                tags=tags,
                category=category,
                project_id=project,
                who_for=self.random.choice(self.STAKEHOLDERS) if self._maybe(0.4) else None,
                requires_deep_work=self._maybe(0.2),
                blocked_by_task_ids=depends_on,
            ))

        return tasks

    def generate_backlog(self, now: datetime, task_count: int = None) -> List[Task]:
        """Generate a backlog sized from the evaluation config."""
        return self.generate_tasks(
            task_count or self.eval_config['task_count'],
            now,
            self.eval_config['due_date_range_days'],
            self.eval_config['max_age_days'],
        )
