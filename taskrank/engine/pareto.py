"""Pareto-frontier selection over score vectors."""

from typing import List, Sequence

from ..models.scores import Dimension, TaskScoreVector

PARETO_DIMENSIONS = (
    Dimension.URGENCY,
    Dimension.IMPORTANCE,
    Dimension.EFFORT,
    Dimension.CONTEXT_FIT,
    Dimension.ENERGY_ALIGNMENT,
)


def dominates(
    a: TaskScoreVector,
    b: TaskScoreVector,
    dimensions: Sequence[Dimension] = PARETO_DIMENSIONS,
) -> bool:
    """True if a is >= b everywhere and strictly > in at least one dimension."""
    strictly_better = False
    for dimension in dimensions:
        left, right = a.get(dimension), b.get(dimension)
        if left < right:
            return False
        if left > right:
            strictly_better = True
    return strictly_better


def find_pareto_frontier(
    vectors: Sequence[TaskScoreVector],
    dimensions: Sequence[Dimension] = PARETO_DIMENSIONS,
) -> List[TaskScoreVector]:
    """Vectors not dominated by any other vector, in input order."""
    return [
        candidate
        for i, candidate in enumerate(vectors)
        if not any(
            dominates(other, candidate, dimensions)
            for j, other in enumerate(vectors)
            if i != j
        )
    ]
