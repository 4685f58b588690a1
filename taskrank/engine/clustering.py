"""K-medoids clustering of tasks for batched execution."""

import logging
from itertools import combinations
from typing import Any, Dict, List, Optional, Sequence

from ..models.scores import TaskCluster
from ..models.task import Task
from .dependencies import index_tasks
from .similarity import TaskSimilarity

logger = logging.getLogger(__name__)


class KMedoidsClusterer:
    """Greedy k-medoids: central first medoid, then farthest-point spread.

    There is no swap phase; every task joins its nearest medoid once.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, similarity: Optional[TaskSimilarity] = None):
        self.similarity = similarity or TaskSimilarity(config)

    def cluster(self, tasks: Sequence[Task], max_clusters: int) -> List[TaskCluster]:
        if max_clusters <= 0:
            raise ValueError(f"max_clusters must be positive, got {max_clusters}")
        index_tasks(tasks)
        tasks = list(tasks)

        if len(tasks) <= max_clusters:
            return [TaskCluster(medoid=t, tasks=[t], cohesion=1.0) for t in tasks]

        dissimilarity = self.dissimilarity_matrix(tasks)
        medoids = self.select_initial_medoids(dissimilarity, max_clusters)
        assignments = self.assign(dissimilarity, medoids)

        clusters = []
        for k, medoid_index in enumerate(medoids):
            members = [task for i, task in enumerate(tasks) if assignments[i] == k]
            if members:
                clusters.append(TaskCluster(
                    medoid=tasks[medoid_index],
                    tasks=members,
                    cohesion=self.cohesion(members),
                ))

        clusters.sort(key=lambda c: c.cohesion * len(c.tasks), reverse=True)
        logger.debug("Clustered %d tasks into %d clusters", len(tasks), len(clusters))
        return clusters

    def dissimilarity_matrix(self, tasks: Sequence[Task]) -> List[List[float]]:
        n = len(tasks)
        matrix = [[0.0] * n for _ in range(n)]
        for i, j in combinations(range(n), 2):
            distance = 1.0 - self.similarity.similarity(tasks[i], tasks[j])
            matrix[i][j] = distance
            matrix[j][i] = distance
        return matrix

    @staticmethod
    def select_initial_medoids(dissimilarity: List[List[float]], k: int) -> List[int]:
        n = len(dissimilarity)
        centrality = [sum(row) for row in dissimilarity]
        medoids = [centrality.index(min(centrality))]

        while len(medoids) < k:
            best_index = -1
            best_distance = -1.0
            for i in range(n):
                if i in medoids:
                    continue
                nearest = min(dissimilarity[i][m] for m in medoids)
                if nearest > best_distance:
                    best_distance = nearest
                    best_index = i
            if best_index < 0:
                break
            medoids.append(best_index)

        return medoids

    @staticmethod
    def assign(dissimilarity: List[List[float]], medoids: List[int]) -> List[int]:
        """Index into medoids of the nearest medoid for every point."""
        assignments = []
        for row in dissimilarity:
            distances = [row[m] for m in medoids]
            assignments.append(distances.index(min(distances)))
        return assignments

    def cohesion(self, members: Sequence[Task]) -> float:
        """Mean pairwise similarity; 1.0 for a singleton."""
        if len(members) <= 1:
            return 1.0
        pairs = list(combinations(members, 2))
        return sum(self.similarity.similarity(a, b) for a, b in pairs) / len(pairs)
