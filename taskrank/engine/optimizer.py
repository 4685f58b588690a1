"""Multi-objective task optimization engine."""

from typing import Any, Dict, FrozenSet, List, Optional, Sequence

from ..models.context import OptimizationContext
from ..models.scores import AdaptiveWeights, TaskCluster, TaskScoreVector
from ..models.task import Task
from ..scoring import (
    BatchingAffinityScorer,
    ContextFitScorer,
    DependencyScorer,
    EffortScorer,
    EnergyAlignmentScorer,
    ImportanceScorer,
    MomentumScorer,
    OpportunityCostScorer,
    StalenessScorer,
    UrgencyScorer,
)
from ..utils.config import resolve_config
from .clustering import KMedoidsClusterer
from .dependencies import DependencyAnalysis, DependencyAnalyzer
from .pareto import find_pareto_frontier
from .similarity import TaskSimilarity
from .weights import AdaptiveWeightSynthesizer, aggregate_scores


class TaskOptimizer:
    """Scores tasks on ten dimensions and folds them into one rank.

    Stateless between calls: every result depends only on the arguments,
    including the "now" carried by the OptimizationContext.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = resolve_config(config)
        self.similarity = TaskSimilarity(self.config)
        self.scorers = [
            UrgencyScorer(self.config),
            ImportanceScorer(self.config),
            EffortScorer(self.config),
            ContextFitScorer(self.config),
            EnergyAlignmentScorer(self.config),
            MomentumScorer(self.config, similarity=self.similarity),
            DependencyScorer(self.config),
            StalenessScorer(self.config),
            OpportunityCostScorer(self.config),
            BatchingAffinityScorer(self.config),
        ]
        self.weight_synthesizer = AdaptiveWeightSynthesizer(self.config)
        self.dependency_analyzer = DependencyAnalyzer(self.config)
        self.clusterer = KMedoidsClusterer(self.config, similarity=self.similarity)

    def compute_score_vector(
        self,
        task: Task,
        context: OptimizationContext,
        all_tasks: Sequence[Task],
    ) -> TaskScoreVector:
        scores = {
            scorer.get_dimension_name(): scorer.score(task, context, all_tasks)
            for scorer in self.scorers
        }
        return TaskScoreVector(task_id=task.task_id, **scores)

    def compute_adaptive_weights(self, context: OptimizationContext) -> AdaptiveWeights:
        return self.weight_synthesizer.compute(context)

    def compute_final_score(
        self,
        vector: TaskScoreVector,
        context: OptimizationContext,
        weights: Optional[AdaptiveWeights] = None,
    ) -> float:
        if weights is None:
            weights = self.compute_adaptive_weights(context)
        aggregation = self.config['aggregation']
        return aggregate_scores(vector, weights, aggregation['score_floor'], aggregation['scale'])

    def analyze_dependencies(self, tasks: Sequence[Task]) -> DependencyAnalysis:
        return self.dependency_analyzer.analyze(tasks)

    def compute_critical_path(self, tasks: Sequence[Task]) -> FrozenSet[str]:
        return self.dependency_analyzer.compute_critical_path(tasks)

    def compute_task_similarity(self, task_a: Task, task_b: Task) -> float:
        return self.similarity.similarity(task_a, task_b)

    def find_pareto_frontier(self, vectors: Sequence[TaskScoreVector]) -> List[TaskScoreVector]:
        return find_pareto_frontier(vectors)

    def cluster_tasks(self, tasks: Sequence[Task], max_clusters: Optional[int] = None) -> List[TaskCluster]:
        if max_clusters is None:
            max_clusters = self.config['clustering']['max_clusters']
        return self.clusterer.cluster(tasks, max_clusters)
