"""Time-driven dimensions: urgency and staleness."""

from typing import Sequence

from ..models.context import OptimizationContext
from ..models.scores import Dimension
from ..models.task import Task
from ..utils.datetime_utils import days_between
from ..utils.math_utils import exponential_decay, hyperbolic_growth, sigmoid_decay
from .base import DimensionScorer


class UrgencyScorer(DimensionScorer):
    """Deadline pressure. Overdue tasks score above 1.0 on purpose."""

    dimension = Dimension.URGENCY
    config_section = 'urgency'

    def score(self, task: Task, context: OptimizationContext, all_tasks: Sequence[Task]) -> float:
        p = self.params
        now = context.target_datetime

        if task.due_date is None:
            # Undated tasks creep up with age but stay moderate.
            age_days = days_between(task.created_at, now)
            return sigmoid_decay(
                age_days, p['undated_midpoint_days'], p['undated_steepness'], inverted=True
            ) * p['undated_scale']

        days_until_due = days_between(now, task.due_date)

        if days_until_due < 0:
            return p['overdue_base'] + hyperbolic_growth(
                abs(days_until_due), p['overdue_scale'], p['overdue_max']
            )

        near_term = sigmoid_decay(days_until_due, p['near_midpoint_days'], p['near_steepness'])
        long_range = exponential_decay(days_until_due, p['half_life_days'])
        # Favors the near-term curve as the deadline approaches.
        blend = sigmoid_decay(days_until_due, p['blend_midpoint_days'], p['blend_steepness'])
        return near_term * blend + long_range * (1 - blend)


class StalenessScorer(DimensionScorer):
    """Freshness: 1.0 for new tasks, decaying with age, floored for very old ones."""

    dimension = Dimension.STALENESS
    config_section = 'staleness'

    def score(self, task: Task, context: OptimizationContext, all_tasks: Sequence[Task]) -> float:
        p = self.params
        age_days = days_between(task.created_at, context.target_datetime)

        if age_days < p['fresh_days']:
            return 1.0

        freshness = 1.0 / (1.0 + (age_days / p['half_life_days']) ** p['exponent'])

        if age_days > p['neglect_after_days']:
            neglect = sigmoid_decay(
                age_days - p['neglect_after_days'],
                p['neglect_midpoint_days'],
                p['neglect_steepness'],
                inverted=True,
            )
            freshness = max(freshness, neglect * p['neglect_floor_scale'])

        return freshness
