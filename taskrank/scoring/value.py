"""Value-driven dimensions: importance, dependency and opportunity cost."""

import math
from typing import Sequence

from ..models.context import OptimizationContext
from ..models.scores import Dimension
from ..models.task import Task
from ..utils.datetime_utils import days_between
from .base import DimensionScorer


class ImportanceScorer(DimensionScorer):
    """Continuous Eisenhower-style importance normalized by what applies."""

    dimension = Dimension.IMPORTANCE
    config_section = 'importance'

    def score(self, task: Task, context: OptimizationContext, all_tasks: Sequence[Task]) -> float:
        p = self.params
        score = 0.0
        max_score = 0.0

        # Priority 1 = 1.0, 2 = 0.5, 3 = 0.25
        score += math.pow(0.5, task.priority - 1) * p['priority_scale']
        max_score += p['priority_scale']

        if task.who_for is not None:
            factor = p['self_stakeholder_factor'] if task.who_for.is_self else 1.0
            score += p['stakeholder_weight'] * factor
            max_score += p['stakeholder_weight']

        if task.project_id:
            score += p['project_score']
            max_score += p['project_max']
            if context.is_on_critical_path(task.task_id):
                score += p['critical_path_bonus']
                max_score += p['critical_path_bonus']

        if task.requires_deep_work:
            score += p['deep_work_weight']
            max_score += p['deep_work_weight']

        blocking_count = context.blocking_count(task.task_id)
        if blocking_count > 0:
            score += min(1.0, blocking_count * p['blocking_step'])
            max_score += 1.0

        return score / max_score if max_score > 0 else p['neutral']


class DependencyScorer(DimensionScorer):
    """Structural position: blocked tasks sink, unblockers and critical tasks rise."""

    dimension = Dimension.DEPENDENCY
    config_section = 'dependency'

    def score(self, task: Task, context: OptimizationContext, all_tasks: Sequence[Task]) -> float:
        p = self.params
        tasks_by_id = {t.task_id: t for t in all_tasks}

        if task.is_blocked(tasks_by_id):
            penalty = context.preferences.blocked_task_penalty / 100.0
            return max(p['floor'], 1.0 - penalty)

        score = p['base']

        unblocks_count = context.blocking_count(task.task_id)
        if unblocks_count > 0:
            score += min(p['unblock_cap'], math.log(1 + unblocks_count) * p['unblock_factor'])

        if context.is_on_critical_path(task.task_id):
            score *= p['critical_path_boost']

        if task.parent_task_id:
            parent = tasks_by_id.get(task.parent_task_id) or context.known_tasks.get(task.parent_task_id)
            if parent is not None and parent.priority == 1:
                score *= p['parent_priority_boost']

        return min(1.0, score)


class OpportunityCostScorer(DimensionScorer):
    """How this task's rough value compares with the alternatives."""

    dimension = Dimension.OPPORTUNITY_COST
    config_section = 'opportunity_cost'

    def estimate_task_value(self, task: Task, context: OptimizationContext) -> float:
        """Cheap heuristic value of doing a task now."""
        p = self.params
        value = (p['priority_pivot'] - task.priority) * p['priority_step']

        if task.due_date is not None:
            days_until_due = days_between(context.target_datetime, task.due_date)
            if days_until_due <= 0:
                value += p['overdue_value']
            else:
                for limit_days, tier_value in p['due_tiers']:
                    if days_until_due <= limit_days:
                        value += tier_value
                        break

        value += context.blocking_count(task.task_id) * p['blocking_value']

        if task.project_id:
            value += p['project_value']
        if task.who_for is not None:
            value += p['stakeholder_value']

        return value

    def score(self, task: Task, context: OptimizationContext, all_tasks: Sequence[Task]) -> float:
        p = self.params
        others = [t for t in all_tasks if t.task_id != task.task_id]
        if not others:
            return 1.0

        this_value = self.estimate_task_value(task, context)
        other_values = [self.estimate_task_value(t, context) for t in others]
        max_other = max(other_values)
        avg_other = sum(other_values) / len(other_values)

        if max_other <= 0:
            return 1.0

        relative_to_max = this_value / max_other
        relative_to_avg = this_value / avg_other if avg_other > 0 else 1.0

        score = relative_to_max * p['max_weight'] + min(1.0, relative_to_avg) * p['average_weight']
        return max(0.0, min(1.0, score))
