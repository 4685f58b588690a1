"""Tests for Pareto-frontier selection."""

from taskrank.engine.pareto import dominates, find_pareto_frontier
from taskrank.models.scores import Dimension, TaskScoreVector


def make_vector(task_id, **overrides):
    values = {d.value: 0.5 for d in Dimension}
    values.update(overrides)
    return TaskScoreVector(task_id=task_id, **values)


class TestDominance:
    """Test the dominance relation."""

    def test_better_everywhere(self):
        assert dominates(make_vector('a', urgency=0.9), make_vector('b'))

    def test_equal_does_not_dominate(self):
        assert not dominates(make_vector('a'), make_vector('b'))

    def test_trade_off(self):
        a = make_vector('a', urgency=0.9, effort=0.1)
        b = make_vector('b', urgency=0.1, effort=0.9)
        assert not dominates(a, b)
        assert not dominates(b, a)

    def test_only_frontier_dimensions_count(self):
        a = make_vector('a', momentum=1.0, staleness=1.0)
        assert not dominates(a, make_vector('b'))


class TestFrontier:
    """Test frontier selection."""

    def test_dominated_vectors_excluded(self):
        vectors = [
            make_vector('low'),
            make_vector('fast', effort=0.9),
            make_vector('urgent', urgency=1.3),
        ]
        frontier = find_pareto_frontier(vectors)
        assert [v.task_id for v in frontier] == ['fast', 'urgent']

    def test_ties_are_all_kept(self):
        vectors = [make_vector('a'), make_vector('b')]
        assert len(find_pareto_frontier(vectors)) == 2

    def test_empty(self):
        assert find_pareto_frontier([]) == []
