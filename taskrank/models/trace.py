"""Ranking trace models for observability."""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Dict, List, Any

from .scores import TaskScoreVector


@dataclass
class RankingDecision:
    """Records where one task landed and why."""

    position: int
    task_id: str
    title: str
    score: float
    pareto_optimal: bool
    reason: str


@dataclass
class RankingTrace:
    """Complete trace of a ranking run."""

    run_id: str
    generated_at: datetime
    mode: str
    weights: Dict[str, float]
    vectors: List[TaskScoreVector]
    decisions: List[RankingDecision]
    summary_stats: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert trace to dictionary for JSON export."""
        return asdict(self)

    def to_human_readable(self) -> str:
        """Generate human-readable log format."""
        lines = [
            f"=== Ranking Run: {self.run_id} ===",
            f"Mode: {self.mode}",
            f"Generated for: {self.generated_at}",
            "",
            "Weights:",
        ]

        for key, value in self.weights.items():
            lines.append(f"  {key}: {value:.3f}")

        lines.extend([
            "",
            "Score Vectors:",
        ])

        for vector in self.vectors:
            lines.append(f"  Task {vector.task_id}:")
            for key, value in vector.as_dict().items():
                lines.append(f"    {key}: {value:.3f}")

        lines.extend([
            "",
            "Ranking:",
        ])

        for decision in self.decisions:
            marker = " *" if decision.pareto_optimal else ""
            lines.append(f"  {decision.position:>3}. {decision.task_id} ({decision.title}): {decision.score:.2f}{marker}")
            lines.append(f"       Reason: {decision.reason}")

        lines.extend([
            "",
            "Summary Statistics:",
        ])

        for key, value in self.summary_stats.items():
            lines.append(f"  {key}: {value}")

        lines.append("=" * 50)

        return "\n".join(lines)
