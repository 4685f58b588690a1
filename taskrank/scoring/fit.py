"""Situational fit dimensions: effort, context fit and energy alignment."""

import math
from typing import Any, Dict, Optional, Sequence

from ..models.context import OptimizationContext
from ..models.scores import Dimension
from ..models.task import Task
from ..utils.config import resolve_config
from ..utils.math_utils import clamp, gaussian_score, jaccard, overlaps
from .base import DimensionScorer


class EffortScorer(DimensionScorer):
    """Inverted effort: quick tasks and tasks that fill the block score higher."""

    dimension = Dimension.EFFORT
    config_section = 'effort'

    def score(self, task: Task, context: OptimizationContext, all_tasks: Sequence[Task]) -> float:
        p = self.params
        estimated = task.effective_minutes(context.preferences.default_task_duration_minutes)
        available = context.available_block_minutes

        if estimated > available:
            return p['overflow_scale'] * (max(0, available) / estimated)

        # 5 min ~ 0.83, 30 min ~ 0.63, 60 min ~ 0.57
        score = 1.0 / (1.0 + math.log(1 + estimated / p['log_divisor_minutes']) * p['log_factor'])

        fit_ratio = estimated / available if available > 0 else 0.0
        if p['tight_fit_min'] <= fit_ratio <= p['tight_fit_max']:
            score *= p['tight_fit_bonus']

        return min(1.0, score)


class ContextFitScorer(DimensionScorer):
    """Overlap between the task's contexts and where the user is."""

    dimension = Dimension.CONTEXT_FIT
    config_section = 'context_fit'

    def score(self, task: Task, context: OptimizationContext, all_tasks: Sequence[Task]) -> float:
        p = self.params
        if not task.contexts:
            return p['universal']
        if not context.available_contexts:
            return p['unconstrained']

        similarity = jaccard(task.contexts, context.available_contexts)
        bonus = p['exact_match_bonus'] if overlaps(task.contexts, context.available_contexts) else 0.0
        return min(1.0, similarity + bonus)


class CircadianEnergyModel:
    """Models the user's energy (1-5) at a given hour of the day.

    Two Gaussian peaks at the preferred morning and afternoon hours, a
    post-lunch dip, and a small 90-minute ultradian oscillation on top of a
    baseline.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.params = resolve_config(config)['energy']

    def energy_at(self, hour: float, morning_peak: float, afternoon_peak: float) -> float:
        p = self.params
        morning = p['morning_amplitude'] * gaussian_score(hour - morning_peak, p['morning_sigma'])
        afternoon = p['afternoon_amplitude'] * gaussian_score(hour - afternoon_peak, p['afternoon_sigma'])

        lunch_dip = 0.0
        if p['lunch_start_hour'] <= hour <= p['lunch_end_hour']:
            lunch_dip = p['lunch_amplitude'] * gaussian_score(hour - p['lunch_center_hour'], p['lunch_sigma'])

        period = p['ultradian_period_minutes']
        phase_minutes = (hour * 60) % period
        ultradian = p['ultradian_amplitude'] * math.sin(2 * math.pi * phase_minutes / period)

        energy = p['baseline'] + max(morning, afternoon) - lunch_dip + ultradian
        return clamp(energy, p['min_level'], p['max_level'])

    def current_energy(self, context: OptimizationContext) -> float:
        prefs = context.preferences
        return self.energy_at(context.target_hour, prefs.morning_energy_peak, prefs.afternoon_energy_peak)


class EnergyAlignmentScorer(DimensionScorer):
    """Match between the energy a task needs and the modeled energy available."""

    dimension = Dimension.ENERGY_ALIGNMENT
    config_section = 'energy'

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self.energy_model = CircadianEnergyModel(self.config)

    def score(self, task: Task, context: OptimizationContext, all_tasks: Sequence[Task]) -> float:
        p = self.params
        if task.energy_level is None:
            return p['neutral']

        task_energy = task.energy_level
        current_energy = self.energy_model.current_energy(context)

        alignment = gaussian_score(abs(task_energy - current_energy), p['alignment_sigma'])

        if task_energy >= p['demanding_level'] and current_energy <= p['trough_level']:
            alignment *= p['demanding_penalty']

        # Low-energy work fits energy troughs.
        if task_energy <= p['trough_level'] and current_energy <= p['trough_level']:
            alignment *= p['trough_bonus']

        return min(1.0, alignment)
