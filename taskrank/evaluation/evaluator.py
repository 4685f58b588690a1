"""Offline comparison of single-pass and sequential plans."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Sequence

from ..engine.ranking import SEQUENTIAL, SINGLE_PASS, TaskRanker
from ..models.context import SchedulingContext
from ..models.scores import ScoredTask
from ..models.task import Task
from ..models.trace import RankingTrace
from ..utils.config import resolve_config
from ..utils.datetime_utils import start_of_day
from .generator import BacklogGenerator

logger = logging.getLogger(__name__)


class PlanMetrics:
    """Quality metrics for one ordering of a backlog."""

    def __init__(self, mode: str):
        self.mode = mode
        self.tasks_ranked = 0
        self.context_switches = 0
        self.overdue_total = 0
        self.overdue_in_front = 0
        self.dependency_violations = 0
        self.critical_path_order_ok = True
        self.mean_position_of_priority_one = 0.0
        self.average_score = 0.0
        self.traces: List[RankingTrace] = []

    @property
    def overdue_first_rate(self) -> float:
        """Share of overdue tasks ranked ahead of all other tasks."""
        return self.overdue_in_front / self.overdue_total if self.overdue_total else 1.0

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON export."""
        return {
            'mode': self.mode,
            'tasks_ranked': self.tasks_ranked,
            'context_switches': self.context_switches,
            'overdue_total': self.overdue_total,
            'overdue_first_rate': self.overdue_first_rate,
            'dependency_violations': self.dependency_violations,
            'critical_path_order_ok': self.critical_path_order_ok,
            'mean_position_of_priority_one': self.mean_position_of_priority_one,
            'average_score': self.average_score,
        }


@dataclass
class PlanComparison:
    """Single-pass and sequential metrics for the same backlog."""
    single_pass: PlanMetrics
    sequential: PlanMetrics

    @property
    def context_switch_reduction(self) -> int:
        return self.single_pass.context_switches - self.sequential.context_switches

    def to_dict(self) -> Dict:
        return {
            'single_pass': self.single_pass.to_dict(),
            'sequential': self.sequential.to_dict(),
            'improvement': {
                'context_switch_reduction': self.context_switch_reduction,
                'dependency_violation_reduction': (
                    self.single_pass.dependency_violations - self.sequential.dependency_violations
                ),
            },
        }


def work_key(task: Task) -> Optional[str]:
    """What a switch is measured against: project, else category."""
    if task.project_id:
        return f"project:{task.project_id}"
    if task.category:
        return f"category:{task.category.casefold()}"
    return None


class PlanEvaluator:
    """Evaluates rankings produced by TaskRanker."""

    def __init__(self, config: dict = None, seed: int = 42):
        """Initialize evaluator with configuration."""
        self.config = resolve_config(config)
        self.ranker = TaskRanker(self.config)
        self.generator = BacklogGenerator(seed=seed, config=self.config)

    def evaluate_plan(
        self,
        mode: str,
        ranked: Sequence[ScoredTask],
        context: SchedulingContext,
        critical_path: FrozenSet[str] = frozenset(),
    ) -> PlanMetrics:
        metrics = PlanMetrics(mode)
        metrics.tasks_ranked = len(ranked)
        if not ranked:
            return metrics

        ordered = [item.task for item in ranked]
        now = start_of_day(context.target_date)

        metrics.context_switches = sum(
            1 for prev, nxt in zip(ordered, ordered[1:]) if work_key(prev) != work_key(nxt)
        )

        overdue_flags = [t.due_date is not None and t.due_date < now for t in ordered]
        metrics.overdue_total = sum(overdue_flags)
        metrics.overdue_in_front = sum(overdue_flags[:metrics.overdue_total])

        # Pairs where a task is ranked ahead of one of its own blockers.
        positions = {t.task_id: i for i, t in enumerate(ordered)}
        violations = [
            (task.task_id, blocker_id)
            for task in ordered
            for blocker_id in task.blocked_by_task_ids
            if blocker_id in positions and positions[blocker_id] > positions[task.task_id]
        ]
        metrics.dependency_violations = len(violations)
        metrics.critical_path_order_ok = not any(
            task_id in critical_path and blocker_id in critical_path
            for task_id, blocker_id in violations
        )

        priority_one = [i + 1 for i, t in enumerate(ordered) if t.priority == 1]
        if priority_one:
            metrics.mean_position_of_priority_one = sum(priority_one) / len(priority_one)

        metrics.average_score = sum(item.score for item in ranked) / len(ranked)
        return metrics

    def compare(self, tasks: Sequence[Task], context: SchedulingContext) -> PlanComparison:
        """Compare the static ranking with the sequential plan."""
        critical_path = self.ranker.get_critical_path_tasks([t for t in tasks if not t.completed])

        single, single_trace = self.ranker.rank(tasks, context)
        sequential, sequential_trace = self.ranker.rank_sequentially(tasks, context)

        single_metrics = self.evaluate_plan(SINGLE_PASS, single, context, critical_path)
        single_metrics.traces.append(single_trace)
        sequential_metrics = self.evaluate_plan(SEQUENTIAL, sequential, context, critical_path)
        sequential_metrics.traces.append(sequential_trace)

        return PlanComparison(single_pass=single_metrics, sequential=sequential_metrics)

    def run_evaluation(
        self,
        context: SchedulingContext,
        output_dir: str = "results",
        tasks: Optional[Sequence[Task]] = None,
    ) -> PlanComparison:
        """Run the comparison and export results."""
        if tasks is None:
            tasks = self.generator.generate_backlog(start_of_day(context.target_date))

        comparison = self.compare(tasks, context)

        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)

        with open(output_path / 'evaluation_results.json', 'w') as f:
            json.dump(comparison.to_dict(), f, indent=2, default=str)

        for metrics in (comparison.single_pass, comparison.sequential):
            for trace in metrics.traces:
                trace_path = output_path / f"trace_{trace.mode}_{trace.run_id}.json"
                with open(trace_path, 'w') as f:
                    json.dump(trace.to_dict(), f, indent=2, default=str)

        logger.info("Evaluation results written to %s", output_path)
        self._print_comparison(comparison)

        return comparison

    def _print_comparison(self, comparison: PlanComparison):
        """Print comparison report."""
        single, sequential = comparison.single_pass, comparison.sequential

        print("\n" + "=" * 70)
        print("PLAN COMPARISON")
        print("=" * 70)
        print(f"\n{'Metric':<40} {'Single-pass':<15} {'Sequential':<15}")
        print("-" * 70)

        print(f"{'Tasks ranked':<40} {single.tasks_ranked:<15} {sequential.tasks_ranked:<15}")
        print(f"{'Context switches':<40} {single.context_switches:<15} {sequential.context_switches:<15}")
        print(f"{'Overdue-first rate':<40} {single.overdue_first_rate:<15.2f} {sequential.overdue_first_rate:<15.2f}")
        print(f"{'Dependency violations':<40} {single.dependency_violations:<15} {sequential.dependency_violations:<15}")
        print(f"{'Critical path in order':<40} {str(single.critical_path_order_ok):<15} "
              f"{str(sequential.critical_path_order_ok):<15}")
        print(f"{'Mean position of priority 1':<40} {single.mean_position_of_priority_one:<15.2f} "
              f"{sequential.mean_position_of_priority_one:<15.2f}")

        print("\n" + "=" * 70)
