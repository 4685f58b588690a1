"""Weighted multi-feature similarity between two tasks."""

from functools import lru_cache
from typing import Any, Dict, List, Optional, Tuple

from ..models.task import Task
from ..utils.config import resolve_config
from ..utils.math_utils import jaccard
from ..utils.text import extract_salient_tokens


@lru_cache(maxsize=4096)
def _salient_tokens(text: str) -> frozenset:
    return extract_salient_tokens(text)


def _same_label(a: str, b: str) -> float:
    return 1.0 if a.casefold() == b.casefold() else 0.0


class TaskSimilarity:
    """Scores how alike two tasks are on a 0-1 scale.

    Each feature only counts when both tasks populate it, so missing data
    neither helps nor hurts. Text-token overlap is always included.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.params = resolve_config(config)['similarity']

    def text_similarity(self, a: Task, b: Task) -> float:
        tokens_a = _salient_tokens(a.text)
        tokens_b = _salient_tokens(b.text)
        if not tokens_a or not tokens_b:
            return self.params['text_default']
        return jaccard(tokens_a, tokens_b)

    def components(self, a: Task, b: Task) -> List[Tuple[str, float, float]]:
        """(feature, score, weight) for every feature both tasks populate."""
        p = self.params
        parts = []

        if a.category and b.category:
            parts.append(('category', _same_label(a.category, b.category), p['category_weight']))

        if a.project_id and b.project_id:
            parts.append(('project', 1.0 if a.project_id == b.project_id else 0.0, p['project_weight']))

        if a.contexts and b.contexts:
            parts.append(('contexts', jaccard(a.contexts, b.contexts), p['context_weight']))

        if a.tags and b.tags:
            parts.append(('tags', jaccard(a.tags, b.tags), p['tag_weight']))

        if a.who_for is not None and b.who_for is not None:
            parts.append(('stakeholder', 1.0 if a.who_for.matches(b.who_for) else 0.0, p['stakeholder_weight']))

        if a.energy_level is not None and b.energy_level is not None:
            energy = 1.0 - abs(a.energy_level - b.energy_level) / p['energy_span']
            parts.append(('energy', energy, p['energy_weight']))

        parts.append(('text', self.text_similarity(a, b), p['text_weight']))
        return parts

    def similarity(self, a: Task, b: Task) -> float:
        parts = self.components(a, b)

        # Text alone is too weak a signal to be confident about.
        if len(parts) == 1:
            return self.params['default']

        total_weight = sum(weight for _, _, weight in parts)
        return sum(score * weight for _, score, weight in parts) / total_weight
