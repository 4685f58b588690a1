"""Adaptive weight synthesis and log-space score aggregation."""

import logging
import math
from typing import Any, Dict, List, Optional

from ..models.context import OptimizationContext
from ..models.scores import AdaptiveWeights, Dimension, TaskScoreVector
from ..utils.config import resolve_config

logger = logging.getLogger(__name__)


class AdaptiveWeightSynthesizer:
    """Derives dimension weights from user sliders plus situational modifiers."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = resolve_config(config)
        self.weight_config = self.config['weights']

    def base_weights(self, context: OptimizationContext) -> AdaptiveWeights:
        prefs = context.preferences
        base = self.weight_config['base']
        grouping = (
            prefs.similar_work_grouping_weight
            + prefs.stakeholder_grouping_weight
            + prefs.tag_similarity_weight
        ) / 300.0
        return AdaptiveWeights(
            urgency=prefs.due_date_urgency_weight / 100.0,
            context_fit=prefs.context_grouping_weight / 100.0,
            energy_alignment=prefs.energy_matching_weight / 100.0,
            batching_affinity=grouping,
            importance=base['importance'],
            effort=base['effort'],
            momentum=base['momentum'],
            dependency=base['dependency'],
            staleness=base['staleness'],
            opportunity_cost=base['opportunity_cost'],
        )

    def active_modifiers(self, context: OptimizationContext) -> List[str]:
        """Names of the situational modifiers that apply to this context."""
        w = self.weight_config
        active = []
        if context.high_time_pressure:
            active.append('time_pressure')
        if context.current_energy_level <= w['low_energy']['threshold']:
            active.append('low_energy')
        if context.total_backlog_size > w['large_backlog']['threshold']:
            active.append('large_backlog')
        if abs(context.target_hour - context.preferences.morning_energy_peak) <= w['deep_work']['window_hours']:
            active.append('deep_work')
        if context.target_hour >= w['end_of_day']['hour']:
            active.append('end_of_day')
        return active

    def compute(self, context: OptimizationContext) -> AdaptiveWeights:
        weights = self.base_weights(context)
        for name in self.active_modifiers(context):
            modifier = self.weight_config[name]
            weights.scale(modifier.get('multipliers', modifier))
        return weights


def aggregate_scores(
    vector: TaskScoreVector,
    weights: AdaptiveWeights,
    floor: float = 0.001,
    scale: float = 100.0,
) -> float:
    """Weighted geometric mean of the dimension scores, times scale.

    A near-zero score in any weighted dimension drags the whole result down
    multiplicatively instead of being averaged away.
    """
    total_weight = weights.total
    if total_weight <= 0:
        logger.debug("All weights are zero for task %s", vector.task_id)
        return 0.0

    log_score = sum(
        weights.get(d) * math.log(max(floor, vector.get(d)))
        for d in Dimension
    )
    return math.exp(log_score / total_weight) * scale
