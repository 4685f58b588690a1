"""Score vector, weight and cluster models."""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Dict, List, Optional

from .task import Task


class Dimension(str, Enum):
    """The ten fitness dimensions scored per task."""

    URGENCY = 'urgency'
    IMPORTANCE = 'importance'
    EFFORT = 'effort'
    CONTEXT_FIT = 'context_fit'
    ENERGY_ALIGNMENT = 'energy_alignment'
    MOMENTUM = 'momentum'
    DEPENDENCY = 'dependency'
    STALENESS = 'staleness'
    OPPORTUNITY_COST = 'opportunity_cost'
    BATCHING_AFFINITY = 'batching_affinity'


@dataclass(frozen=True)
class TaskScoreVector:
    """Per-task dimension scores for one ranking pass."""

    task_id: str
    urgency: float
    importance: float
    effort: float
    context_fit: float
    energy_alignment: float
    momentum: float
    dependency: float
    staleness: float
    opportunity_cost: float
    batching_affinity: float

    def get(self, dimension: Dimension) -> float:
        return getattr(self, Dimension(dimension).value)

    def as_dict(self) -> Dict[str, float]:
        return {d.value: self.get(d) for d in Dimension}


@dataclass
class AdaptiveWeights:
    """Context-adjusted weight per dimension."""

    urgency: float = 0.0
    importance: float = 0.0
    effort: float = 0.0
    context_fit: float = 0.0
    energy_alignment: float = 0.0
    momentum: float = 0.0
    dependency: float = 0.0
    staleness: float = 0.0
    opportunity_cost: float = 0.0
    batching_affinity: float = 0.0

    def get(self, dimension: Dimension) -> float:
        return getattr(self, Dimension(dimension).value)

    def scale(self, multipliers: Dict[str, float]) -> None:
        """Multiply the named dimensions in place."""
        for name, factor in multipliers.items():
            dimension = Dimension(name)
            setattr(self, dimension.value, self.get(dimension) * factor)

    @property
    def total(self) -> float:
        return sum(self.get(d) for d in Dimension)

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass
class ScoredTask:
    """A task with its final score and the vector it came from."""

    task: Task
    score: float
    vector: Optional[TaskScoreVector] = None
    pareto_optimal: bool = False

    @property
    def task_id(self) -> str:
        return self.task.task_id


@dataclass
class TaskCluster:
    """Group of similar tasks around a medoid."""

    medoid: Task
    tasks: List[Task]
    cohesion: float

    @property
    def name(self) -> str:
        """Label from the medoid's most distinguishing populated field."""
        medoid = self.medoid
        if medoid.project_id:
            return f"Project: {medoid.project_id}"
        if medoid.category:
            return medoid.category
        if medoid.contexts:
            return f"@{sorted(medoid.contexts)[0].lstrip('@')}"
        if medoid.who_for:
            return f"For: {medoid.who_for}"
        return "General"

    @property
    def batch_type(self) -> str:
        medoid = self.medoid
        if medoid.project_id:
            return "Project"
        if medoid.category:
            return "Category"
        if medoid.contexts:
            return "Context"
        if medoid.who_for:
            return "Stakeholder"
        if medoid.tags:
            return "Tag"
        return "General"


@dataclass
class TaskBatch:
    """Display-ready batch produced from a cluster."""

    name: str
    batch_type: str
    tasks: List[Task] = field(default_factory=list)
    cohesion: float = 1.0

    @classmethod
    def from_cluster(cls, cluster: TaskCluster) -> 'TaskBatch':
        return cls(
            name=cluster.name,
            batch_type=cluster.batch_type,
            tasks=list(cluster.tasks),
            cohesion=cluster.cohesion,
        )

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'batch_type': self.batch_type,
            'task_ids': [t.task_id for t in self.tasks],
            'cohesion': self.cohesion,
        }
