"""Tests for dependency analysis and the critical path."""

import logging

import pytest

from taskrank.engine.dependencies import DependencyAnalyzer, compute_blocking_counts, index_tasks


@pytest.fixture
def analyzer():
    return DependencyAnalyzer()


class TestDependencyAnalyzer:
    """Test longest-path analysis over blocked-by links."""

    def test_chain_is_critical(self, analyzer, make_task):
        tasks = [
            make_task('A'),
            make_task('B', blocked_by_task_ids=['A']),
            make_task('C', blocked_by_task_ids=['B']),
        ]
        analysis = analyzer.analyze(tasks)
        assert analysis.critical_path == frozenset({'A', 'B', 'C'})
        assert analysis.tasks_blocked_by == {'A': 1, 'B': 1}
        assert analysis.longest_path['C'] == 150

    def test_heavier_branch_wins(self, analyzer, make_task):
        tasks = [
            make_task('root'),
            make_task('light', estimated_minutes=5, priority=3, blocked_by_task_ids=['root']),
            make_task('heavy', estimated_minutes=100, blocked_by_task_ids=['root']),
        ]
        assert analyzer.compute_critical_path(tasks) == frozenset({'root', 'heavy'})

    def test_task_weight(self, analyzer, make_task):
        assert analyzer.task_weight(make_task('a')) == 50
        assert analyzer.task_weight(make_task('b', estimated_minutes=15, priority=1)) == 45

    def test_cycle_members_are_unreached(self, analyzer, make_task, caplog):
        tasks = [
            make_task('X', blocked_by_task_ids=['Y']),
            make_task('Y', blocked_by_task_ids=['X']),
            make_task('Z'),
        ]
        with caplog.at_level(logging.WARNING):
            analysis = analyzer.analyze(tasks)
        assert analysis.unreached_task_ids == frozenset({'X', 'Y'})
        assert analysis.unreached_count == 2
        assert analysis.critical_path == frozenset({'Z'})
        assert 'cycle' in caplog.text

    def test_pure_cycle_has_no_critical_path(self, analyzer, make_task):
        tasks = [
            make_task('X', blocked_by_task_ids=['Y']),
            make_task('Y', blocked_by_task_ids=['X']),
        ]
        assert analyzer.compute_critical_path(tasks) == frozenset()

    def test_blockers_outside_the_set_are_ignored(self, analyzer, make_task):
        tasks = [make_task('a', blocked_by_task_ids=['external'])]
        analysis = analyzer.analyze(tasks)
        assert analysis.critical_path == frozenset({'a'})
        assert analysis.tasks_blocked_by == {'external': 1}

    def test_empty(self, analyzer):
        analysis = analyzer.analyze([])
        assert analysis.critical_path == frozenset()
        assert analysis.unreached_count == 0

    def test_duplicate_ids_rejected(self, analyzer, make_task):
        with pytest.raises(ValueError):
            analyzer.analyze([make_task('a'), make_task('a')])


def test_blocking_counts(make_task):
    tasks = [
        make_task('a'),
        make_task('b', blocked_by_task_ids=['a']),
        make_task('c', blocked_by_task_ids=['a', 'b']),
    ]
    assert compute_blocking_counts(tasks) == {'a': 2, 'b': 1}


def test_index_tasks(make_task):
    tasks = [make_task('a'), make_task('b')]
    assert list(index_tasks(tasks)) == ['a', 'b']
