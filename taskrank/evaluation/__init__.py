"""Evaluation and simulation modules."""

from .generator import BacklogGenerator
from .evaluator import PlanComparison, PlanEvaluator, PlanMetrics

__all__ = ['BacklogGenerator', 'PlanComparison', 'PlanEvaluator', 'PlanMetrics']
