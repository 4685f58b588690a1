"""Per-dimension scorer implementations."""

from .base import DimensionScorer
from .fit import CircadianEnergyModel, ContextFitScorer, EffortScorer, EnergyAlignmentScorer
from .flow import BatchingAffinityScorer, MomentumScorer
from .temporal import StalenessScorer, UrgencyScorer
from .value import DependencyScorer, ImportanceScorer, OpportunityCostScorer

__all__ = [
    'DimensionScorer',
    'UrgencyScorer',
    'ImportanceScorer',
    'EffortScorer',
    'ContextFitScorer',
    'EnergyAlignmentScorer',
    'CircadianEnergyModel',
    'MomentumScorer',
    'DependencyScorer',
    'StalenessScorer',
    'OpportunityCostScorer',
    'BatchingAffinityScorer',
]
