"""Ranking orchestrator: single-pass and sequential task ordering."""

import logging
import uuid
from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..models.context import OptimizationContext, RecencyWindow, SchedulingContext
from ..models.scores import AdaptiveWeights, Dimension, ScoredTask, TaskBatch
from ..models.task import Task
from ..models.trace import RankingDecision, RankingTrace
from ..utils.config import resolve_config
from ..utils.datetime_utils import days_between, start_of_day
from .dependencies import DependencyAnalysis, index_tasks
from .optimizer import TaskOptimizer

logger = logging.getLogger(__name__)

SINGLE_PASS = 'single-pass'
SEQUENTIAL = 'sequential'


class TaskRanker:
    """Orders a backlog by combining the optimizer's scores with ranking policy."""

    def __init__(self, config: Optional[Dict[str, Any]] = None, optimizer: Optional[TaskOptimizer] = None):
        """Initialize ranker with configuration."""
        self.config = resolve_config(config)
        self.optimizer = optimizer or TaskOptimizer(self.config)
        self.ranking_config = self.config['ranking']
        self.recency_config = self.config['recency']

    def is_high_time_pressure(self, tasks: Sequence[Task], context: SchedulingContext) -> bool:
        """Several tasks due (or overdue) within the pressure horizon."""
        if context.high_time_pressure is not None:
            return context.high_time_pressure
        now = start_of_day(context.target_date)
        horizon = self.ranking_config['time_pressure_due_days']
        urgent = sum(
            1 for t in tasks
            if t.due_date is not None and days_between(now, t.due_date) <= horizon
        )
        return urgent >= self.ranking_config['time_pressure_task_count']

    def build_optimization_context(
        self,
        context: SchedulingContext,
        tasks: Sequence[Task],
        analysis: Optional[DependencyAnalysis] = None,
        known_tasks: Optional[Dict[str, Task]] = None,
    ) -> OptimizationContext:
        if analysis is None:
            analysis = self.optimizer.analyze_dependencies(tasks)

        return OptimizationContext(
            preferences=context.preferences,
            target_date=context.target_date,
            target_hour=context.target_hour,
            current_energy_level=context.current_energy_level,
            available_block_minutes=context.available_block_minutes,
            high_time_pressure=self.is_high_time_pressure(tasks, context),
            total_backlog_size=len(tasks),
            available_contexts=frozenset(context.preferred_contexts),
            recent_categories=context.recent_categories,
            recent_project_ids=context.recent_project_ids,
            recent_tags=context.recent_tags,
            recent_contexts=context.recent_contexts,
            current_stakeholder=context.current_stakeholder,
            recently_completed_task_ids=context.recently_completed_task_ids,
            critical_path_task_ids=analysis.critical_path,
            tasks_blocked_by=analysis.tasks_blocked_by,
            known_tasks=known_tasks if known_tasks is not None else {t.task_id: t for t in tasks},
        )

    def _split_backlog(self, tasks: Sequence[Task]) -> Tuple[List[Task], Dict[str, Task]]:
        """Open tasks to rank plus an id lookup covering every input task."""
        known = index_tasks(tasks)
        active = [t for t in tasks if not t.completed]
        return active, known

    def _is_candidate(self, task: Task, open_by_id: Dict[str, Task], context: SchedulingContext) -> bool:
        """Blocked tasks are only shown when the blocked penalty is below 100."""
        if context.preferences.blocked_task_penalty < 100:
            return True
        return not task.is_blocked(open_by_id)

    def rank(self, tasks: Sequence[Task], context: SchedulingContext) -> Tuple[List[ScoredTask], RankingTrace]:
        """Rank tasks in one static pass and return the ordering with its trace."""
        run_id = str(uuid.uuid4())[:8]
        active, known = self._split_backlog(tasks)

        if not active:
            return [], self._create_empty_trace(run_id, context, SINGLE_PASS, len(tasks))

        analysis = self.optimizer.analyze_dependencies(active)
        opt_context = self.build_optimization_context(context, active, analysis, known)
        weights = self.optimizer.compute_adaptive_weights(opt_context)

        open_by_id = {t.task_id: t for t in active}
        candidates = [t for t in active if self._is_candidate(t, open_by_id, context)]

        scored = []
        for task in candidates:
            vector = self.optimizer.compute_score_vector(task, opt_context, active)
            score = self.optimizer.compute_final_score(vector, opt_context, weights)
            scored.append(ScoredTask(task=task, score=score, vector=vector))

        frontier = self.optimizer.find_pareto_frontier([s.vector for s in scored])
        frontier_ids = {v.task_id for v in frontier}
        for item in scored:
            if item.task_id in frontier_ids:
                item.pareto_optimal = True
                item.score *= self.ranking_config['pareto_boost']

        scored.sort(key=lambda s: s.score, reverse=True)

        logger.debug(
            "Ranked %d of %d open tasks (%d on Pareto frontier, critical path %s)",
            len(scored), len(active), len(frontier_ids), sorted(analysis.critical_path),
        )

        trace = self._create_trace(
            run_id, opt_context, SINGLE_PASS, weights, scored, analysis,
            extra={
                'tasks_total': len(tasks),
                'completed_skipped': len(tasks) - len(active),
                'blocked_filtered': len(active) - len(candidates),
                'pareto_frontier_size': len(frontier_ids),
            },
        )
        return scored, trace

    def optimize_tasks(self, tasks: Sequence[Task], context: SchedulingContext) -> List[ScoredTask]:
        ranked, _ = self.rank(tasks, context)
        return ranked

    def rank_sequentially(
        self,
        tasks: Sequence[Task],
        context: SchedulingContext,
    ) -> Tuple[List[ScoredTask], RankingTrace]:
        """Pick the best task, pretend it is done, re-score the rest, repeat."""
        run_id = str(uuid.uuid4())[:8]
        active, known = self._split_backlog(tasks)

        if not active:
            return [], self._create_empty_trace(run_id, context, SEQUENTIAL, len(tasks))

        analysis = self.optimizer.analyze_dependencies(active)
        base_context = self.build_optimization_context(context, active, analysis, known)
        weights = self.optimizer.compute_adaptive_weights(base_context)

        # Working copies; the caller's context is left untouched.
        caps = self.recency_config
        categories = RecencyWindow(caps['categories'], context.recent_categories)
        projects = RecencyWindow(caps['projects'], context.recent_project_ids)
        tags = RecencyWindow(caps['tags'], context.recent_tags)
        contexts = RecencyWindow(caps['contexts'], context.recent_contexts)
        completed = RecencyWindow(caps['completed'], context.recently_completed_task_ids)
        stakeholder = context.current_stakeholder

        remaining = list(active)
        result: List[ScoredTask] = []

        while remaining:
            opt_context = replace(
                base_context,
                recent_categories=categories.snapshot(),
                recent_project_ids=projects.snapshot(),
                recent_tags=tags.snapshot(),
                recent_contexts=contexts.snapshot(),
                current_stakeholder=stakeholder,
                recently_completed_task_ids=completed.snapshot(),
            )

            open_by_id = {t.task_id: t for t in remaining}
            best: Optional[ScoredTask] = None
            for task in remaining:
                if not self._is_candidate(task, open_by_id, context):
                    continue
                vector = self.optimizer.compute_score_vector(task, opt_context, remaining)
                score = self.optimizer.compute_final_score(vector, opt_context, weights)
                if best is None or score > best.score:
                    best = ScoredTask(task=task, score=score, vector=vector)

            if best is None:
                logger.debug("Sequential ranking stopped with %d blocked task(s) left", len(remaining))
                break

            result.append(best)
            remaining = [t for t in remaining if t.task_id != best.task_id]

            picked = best.task
            if picked.category:
                categories.push(picked.category)
            if picked.project_id:
                projects.push(picked.project_id)
            for tag in sorted(picked.tags)[:caps['tags_per_pick']]:
                tags.push(tag, unique=True)
            for label in sorted(picked.contexts)[:caps['contexts_per_pick']]:
                contexts.push(label, unique=True)
            if picked.who_for is not None:
                stakeholder = picked.who_for
            completed.push(picked.task_id)

        trace = self._create_trace(
            run_id, base_context, SEQUENTIAL, weights, result, analysis,
            extra={
                'tasks_total': len(tasks),
                'completed_skipped': len(tasks) - len(active),
                'left_blocked': len(remaining),
            },
        )
        return result, trace

    def optimize_tasks_sequentially(self, tasks: Sequence[Task], context: SchedulingContext) -> List[ScoredTask]:
        ranked, _ = self.rank_sequentially(tasks, context)
        return ranked

    def calculate_task_score(self, task: Task, context: SchedulingContext) -> float:
        """Score a single task as if it were the whole backlog."""
        opt_context = self.build_optimization_context(context, [task])
        vector = self.optimizer.compute_score_vector(task, opt_context, [task])
        return self.optimizer.compute_final_score(vector, opt_context)

    def batch_tasks(self, tasks: Sequence[Task], max_clusters: Optional[int] = None) -> List[TaskBatch]:
        """Group open tasks into named batches."""
        active = [t for t in tasks if not t.completed]
        if not active:
            return []
        clusters = self.optimizer.cluster_tasks(active, max_clusters)
        return [TaskBatch.from_cluster(c) for c in clusters]

    def get_critical_path_tasks(self, tasks: Sequence[Task]):
        return self.optimizer.compute_critical_path(tasks)

    def _explain(self, item: ScoredTask, context: OptimizationContext) -> str:
        values = item.vector.as_dict()
        strongest = max(values, key=values.get)
        weakest = min(values, key=values.get)
        reason = f"strongest {strongest} ({values[strongest]:.2f}), weakest {weakest} ({values[weakest]:.2f})"

        flags = []
        if item.vector.get(Dimension.URGENCY) > 1.0:
            flags.append("overdue")
        if context.is_on_critical_path(item.task_id):
            flags.append("critical path")
        if item.pareto_optimal:
            flags.append("pareto-optimal")
        if flags:
            reason += f"; {', '.join(flags)}"
        return reason

    def _create_trace(
        self,
        run_id: str,
        context: OptimizationContext,
        mode: str,
        weights: AdaptiveWeights,
        scored: List[ScoredTask],
        analysis: DependencyAnalysis,
        extra: Dict[str, Any],
    ) -> RankingTrace:
        decisions = [
            RankingDecision(
                position=position,
                task_id=item.task_id,
                title=item.task.title,
                score=item.score,
                pareto_optimal=item.pareto_optimal,
                reason=self._explain(item, context),
            )
            for position, item in enumerate(scored, start=1)
        ]
        summary = {
            'tasks_ranked': len(scored),
            **extra,
            'critical_path': sorted(analysis.critical_path),
            'unreached_tasks': analysis.unreached_count,
            'high_time_pressure': context.high_time_pressure,
            'active_modifiers': self.optimizer.weight_synthesizer.active_modifiers(context),
        }
        return RankingTrace(
            run_id=run_id,
            generated_at=context.target_datetime,
            mode=mode,
            weights=weights.as_dict(),
            vectors=[item.vector for item in scored],
            decisions=decisions,
            summary_stats=summary,
        )

    def _create_empty_trace(self, run_id: str, context: SchedulingContext, mode: str, total: int) -> RankingTrace:
        """Create an empty trace when there is nothing to rank."""
        return RankingTrace(
            run_id=run_id,
            generated_at=start_of_day(context.target_date),
            mode=mode,
            weights={},
            vectors=[],
            decisions=[],
            summary_stats={
                'tasks_ranked': 0,
                'tasks_total': total,
            },
        )
