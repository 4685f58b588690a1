"""Work-flow dimensions: momentum and batching affinity."""

import math
from typing import Any, Dict, Optional, Sequence

from ..engine.similarity import TaskSimilarity
from ..models.context import OptimizationContext
from ..models.scores import Dimension
from ..models.task import Task
from ..utils.math_utils import casefold_set, jaccard, overlaps
from .base import DimensionScorer


class MomentumScorer(DimensionScorer):
    """Similarity to recently completed work, weighted toward the latest."""

    dimension = Dimension.MOMENTUM
    config_section = 'momentum'

    def __init__(self, config: Optional[Dict[str, Any]] = None, similarity: Optional[TaskSimilarity] = None):
        super().__init__(config)
        self.similarity = similarity or TaskSimilarity(self.config)

    def score(self, task: Task, context: OptimizationContext, all_tasks: Sequence[Task]) -> float:
        p = self.params
        if not context.recently_completed_task_ids:
            return p['neutral']

        recent_tasks = context.recent_tasks(all_tasks)
        if not recent_tasks:
            return p['neutral']

        weighted_sum = 0.0
        weight_sum = 0.0
        for position, recent in enumerate(recent_tasks):
            weight = math.exp(-position * p['recency_decay'])
            weighted_sum += self.similarity.similarity(task, recent) * weight
            weight_sum += weight

        momentum = weighted_sum / weight_sum if weight_sum > 0 else p['neutral']

        if task.project_id and any(r.project_id == task.project_id for r in recent_tasks):
            momentum = min(1.0, momentum * p['same_project_boost'])

        return momentum


class BatchingAffinityScorer(DimensionScorer):
    """How well a task continues the categories, projects and people just worked on."""

    dimension = Dimension.BATCHING_AFFINITY
    config_section = 'batching'

    def score(self, task: Task, context: OptimizationContext, all_tasks: Sequence[Task]) -> float:
        p = self.params
        affinity = p['baseline']

        if task.category and task.category.casefold() in casefold_set(context.recent_categories):
            affinity += p['category_bonus']

        if task.project_id and task.project_id in context.recent_project_ids:
            affinity += p['project_bonus']

        if task.tags and context.recent_tags:
            affinity += p['tag_bonus'] * jaccard(task.tags, context.recent_tags)

        if task.who_for is not None and task.who_for.matches(context.current_stakeholder):
            affinity += p['stakeholder_bonus']

        if task.contexts and context.recent_contexts and overlaps(task.contexts, context.recent_contexts):
            affinity += p['context_bonus']

        return min(1.0, affinity)
