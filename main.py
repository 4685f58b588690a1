"""Main entry point for the taskrank optimization engine."""

import argparse
import json
import logging
import yaml
from datetime import date
from pathlib import Path
from typing import List

from taskrank.engine.ranking import TaskRanker
from taskrank.evaluation.evaluator import PlanEvaluator
from taskrank.evaluation.generator import BacklogGenerator
from taskrank.models.context import SchedulingContext
from taskrank.models.task import Task, UserPreferences
from taskrank.utils.config import load_config, get_default_config
from taskrank.utils.datetime_utils import start_of_day

logger = logging.getLogger(__name__)

RESULTS_DIR = Path("results")


def load_tasks(tasks_path: str) -> List[Task]:
    """Load a task list from a JSON or YAML file."""
    path = Path(tasks_path)

    if not path.exists():
        raise FileNotFoundError(f"Task file not found: {tasks_path}")

    with open(path, 'r') as f:
        if path.suffix.lower() in ['.yaml', '.yml']:
            data = yaml.safe_load(f)
        elif path.suffix.lower() == '.json':
            data = json.load(f)
        else:
            raise ValueError(f"Unsupported task file format: {path.suffix}")

    if isinstance(data, dict):
        data = data.get('tasks')
    if not isinstance(data, list):
        raise ValueError(f"Task file must contain a list of tasks: {tasks_path}")

    return [Task.from_dict(item) for item in data]


def build_context(args, config) -> SchedulingContext:
    """Build the scheduling context from command-line arguments."""
    target_date = date.fromisoformat(args.date) if args.date else date.today()
    block_minutes = (
        args.block_minutes if args.block_minutes is not None
        else config['ranking']['default_block_minutes']
    )
    return SchedulingContext(
        target_date=target_date,
        target_hour=args.hour,
        preferences=UserPreferences.from_dict(config['preferences']),
        current_energy_level=args.energy,
        available_block_minutes=block_minutes,
    )


def get_tasks(args, config, context: SchedulingContext) -> List[Task]:
    """Tasks from --tasks, or a generated backlog."""
    if args.tasks:
        tasks = load_tasks(args.tasks)
        logger.info("Loaded %d tasks from %s", len(tasks), args.tasks)
        return tasks

    generator = BacklogGenerator(seed=args.seed, config=config)
    tasks = generator.generate_backlog(start_of_day(context.target_date))
    logger.info("Generated %d tasks (seed %d)", len(tasks), args.seed)
    return tasks


def save_trace(trace):
    """Write the JSON trace and its human-readable log."""
    RESULTS_DIR.mkdir(exist_ok=True)

    trace_path = RESULTS_DIR / f"trace_{trace.run_id}.json"
    with open(trace_path, 'w') as f:
        json.dump(trace.to_dict(), f, indent=2, default=str)

    log_path = RESULTS_DIR / f"trace_{trace.run_id}.log"
    with open(log_path, 'w') as f:
        f.write(trace.to_human_readable())

    print(f"\nTrace saved to: {trace_path}")
    print(f"Human-readable log saved to: {log_path}")


def run_ranking(args, config, sequential: bool = False):
    """Rank tasks in one pass or sequentially."""
    context = build_context(args, config)
    tasks = get_tasks(args, config, context)

    ranker = TaskRanker(config)
    if sequential:
        ranked, trace = ranker.rank_sequentially(tasks, context)
    else:
        ranked, trace = ranker.rank(tasks, context)

    print(f"\nRanked {len(ranked)} of {len(tasks)} tasks ({trace.mode})")
    print(f"\n{'#':>3}  {'Score':>7}  {'Task':<12} Title")
    print("-" * 70)
    for position, item in enumerate(ranked[:args.top], start=1):
        marker = " *" if item.pareto_optimal else ""
        print(f"{position:>3}  {item.score:>7.2f}  {item.task_id:<12} {item.task.title}{marker}")

    save_trace(trace)
    return ranked, trace


def run_batching(args, config):
    """Group tasks into batches of similar work."""
    context = build_context(args, config)
    tasks = get_tasks(args, config, context)

    ranker = TaskRanker(config)
    batches = ranker.batch_tasks(tasks, config['clustering']['max_clusters'])

    print(f"\nGrouped {len(tasks)} tasks into {len(batches)} batches")
    for batch in batches:
        print(f"\n[{batch.batch_type}] {batch.name} (cohesion {batch.cohesion:.2f})")
        for task in batch.tasks:
            print(f"  - {task.task_id}: {task.title}")

    RESULTS_DIR.mkdir(exist_ok=True)
    batches_path = RESULTS_DIR / "batches.json"
    with open(batches_path, 'w') as f:
        json.dump([b.to_dict() for b in batches], f, indent=2, default=str)

    print(f"\nBatches saved to: {batches_path}")
    return batches


def run_generate(args, config):
    """Generate a synthetic backlog and save it as a task file."""
    now = start_of_day(date.fromisoformat(args.date) if args.date else date.today())
    generator = BacklogGenerator(seed=args.seed, config=config)
    tasks = generator.generate_backlog(now)

    print(f"Generated {len(tasks)} tasks")

    RESULTS_DIR.mkdir(exist_ok=True)
    tasks_path = RESULTS_DIR / "generated_tasks.json"
    with open(tasks_path, 'w') as f:
        json.dump([t.to_dict() for t in tasks], f, indent=2)

    print(f"Tasks saved to: {tasks_path}")
    return tasks


def run_evaluation(args, config):
    """Compare single-pass and sequential plans."""
    context = build_context(args, config)
    tasks = load_tasks(args.tasks) if args.tasks else None

    evaluator = PlanEvaluator(config, seed=args.seed)
    comparison = evaluator.run_evaluation(context, output_dir=str(RESULTS_DIR), tasks=tasks)

    print(f"\nEvaluation results saved to: {RESULTS_DIR / 'evaluation_results.json'}")
    return comparison


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Multi-objective task ranking engine"
    )
    parser.add_argument(
        'command',
        choices=['rank', 'sequence', 'batch', 'generate-tasks', 'evaluate'],
        help='Command to run'
    )
    parser.add_argument(
        '--config',
        type=str,
        default='config.yaml',
        help='Path to configuration file (default: config.yaml)'
    )
    parser.add_argument(
        '--tasks',
        type=str,
        help='JSON or YAML task file (default: generated backlog)'
    )
    parser.add_argument(
        '--date',
        type=str,
        help='Target date as YYYY-MM-DD (default: today)'
    )
    parser.add_argument(
        '--hour',
        type=float,
        default=9.0,
        help='Target hour of day (default: 9)'
    )
    parser.add_argument(
        '--energy',
        type=float,
        default=3.0,
        help='Current energy level 1-5 (default: 3)'
    )
    parser.add_argument(
        '--block-minutes',
        type=int,
        help='Available time block in minutes'
    )
    parser.add_argument(
        '--top',
        type=int,
        default=10,
        help='Number of ranked tasks to print (default: 10)'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=42,
        help='Seed for generated backlogs (default: 42)'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    config = load_config(args.config) if Path(args.config).exists() else get_default_config()

    if args.command == 'rank':
        run_ranking(args, config)
    elif args.command == 'sequence':
        run_ranking(args, config, sequential=True)
    elif args.command == 'batch':
        run_batching(args, config)
    elif args.command == 'generate-tasks':
        run_generate(args, config)
    elif args.command == 'evaluate':
        run_evaluation(args, config)


if __name__ == "__main__":
    main()
