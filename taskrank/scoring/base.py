"""Base dimension scorer interface."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Sequence

from ..models.context import OptimizationContext
from ..models.scores import Dimension
from ..models.task import Task
from ..utils.config import resolve_config


class DimensionScorer(ABC):
    """Abstract base class for the per-dimension scorers."""

    dimension: Dimension
    config_section: str

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """Initialize scorer with its configuration section."""
        self.config = resolve_config(config)
        self.params = self.config[self.config_section]

    @abstractmethod
    def score(
        self,
        task: Task,
        context: OptimizationContext,
        all_tasks: Sequence[Task],
    ) -> float:
        """Score one task on this dimension."""
        pass

    def get_dimension_name(self) -> str:
        """Return the name of the scored dimension."""
        return self.dimension.value
