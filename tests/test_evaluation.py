"""Tests for the backlog generator and plan evaluator."""

import json

import pytest

from taskrank.evaluation import BacklogGenerator, PlanComparison, PlanEvaluator
from taskrank.models.scores import ScoredTask


class TestBacklogGenerator:
    """Test synthetic backlog generation."""

    def test_deterministic(self, now):
        first = [t.to_dict() for t in BacklogGenerator(seed=7).generate_backlog(now)]
        second = [t.to_dict() for t in BacklogGenerator(seed=7).generate_backlog(now)]
        assert first == second

    def test_seed_changes_backlog(self, now):
        first = [t.to_dict() for t in BacklogGenerator(seed=1).generate_tasks(20, now)]
        second = [t.to_dict() for t in BacklogGenerator(seed=2).generate_tasks(20, now)]
        assert first != second

    def test_size_and_shape(self, now):
        tasks = BacklogGenerator().generate_backlog(now, task_count=25)
        assert len(tasks) == 25
        assert len({t.task_id for t in tasks}) == 25
        for i, task in enumerate(tasks):
            assert task.created_at <= now
            for blocker_id in task.blocked_by_task_ids:
                assert int(blocker_id.split('_')[1]) < i

    def test_config_controls_default_size(self, now):
        generator = BacklogGenerator(config={'evaluation': {'task_count': 12}})
        assert len(generator.generate_backlog(now)) == 12


class TestPlanEvaluator:
    """Test plan metrics and the mode comparison."""

    @pytest.fixture
    def evaluator(self):
        return PlanEvaluator()

    def test_metrics_for_hand_built_plan(self, evaluator, context, make_task):
        plan = [
            make_task('a', project_id='p1', priority=1, blocked_by_task_ids=['c']),
            make_task('b', project_id='p1', due_in_days=-1),
            make_task('c', category='ops', priority=1),
        ]
        ranked = [ScoredTask(task=t, score=50.0) for t in plan]
        metrics = evaluator.evaluate_plan('manual', ranked, context, critical_path=frozenset({'a', 'c'}))

        assert metrics.tasks_ranked == 3
        assert metrics.context_switches == 1
        assert metrics.overdue_total == 1
        assert metrics.overdue_first_rate == 0.0
        assert metrics.dependency_violations == 1
        assert metrics.critical_path_order_ok is False
        assert metrics.mean_position_of_priority_one == 2.0
        assert metrics.average_score == 50.0

    def test_empty_plan(self, evaluator, context):
        metrics = evaluator.evaluate_plan('manual', [], context)
        assert metrics.tasks_ranked == 0
        assert metrics.overdue_first_rate == 1.0
        assert metrics.critical_path_order_ok

    def test_compare_modes(self, evaluator, context, now):
        tasks = BacklogGenerator(seed=3).generate_tasks(15, now)
        comparison = evaluator.compare(tasks, context)

        assert isinstance(comparison, PlanComparison)
        assert comparison.single_pass.mode == 'single-pass'
        assert comparison.sequential.mode == 'sequential'
        assert comparison.sequential.dependency_violations == 0
        assert comparison.sequential.critical_path_order_ok

        data = comparison.to_dict()
        assert set(data) == {'single_pass', 'sequential', 'improvement'}
        assert data['improvement']['context_switch_reduction'] == comparison.context_switch_reduction

    def test_run_evaluation_writes_results(self, evaluator, context, tmp_path, capsys):
        comparison = evaluator.run_evaluation(context, output_dir=str(tmp_path))

        results = json.loads((tmp_path / 'evaluation_results.json').read_text())
        assert results['single_pass']['tasks_ranked'] == comparison.single_pass.tasks_ranked
        assert len(list(tmp_path.glob('trace_*.json'))) == 2
        assert 'PLAN COMPARISON' in capsys.readouterr().out
