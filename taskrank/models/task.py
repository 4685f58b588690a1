"""Task, stakeholder and preference data models."""

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, ClassVar, Dict, FrozenSet, Iterable, List, Optional

from ..utils.datetime_utils import parse_datetime, to_naive_utc

SELF_STAKEHOLDER = 'self'


@dataclass(frozen=True)
class Stakeholder:
    """Who a task is done for: the user themself or a named party."""

    name: str
    is_self: bool = False

    SELF: ClassVar['Stakeholder']

    @classmethod
    def named(cls, name: str) -> 'Stakeholder':
        return cls(name=name.strip())

    @classmethod
    def parse(cls, value: Any) -> Optional['Stakeholder']:
        """Map a raw label to a Stakeholder; blank labels mean no stakeholder."""
        if value is None or isinstance(value, Stakeholder):
            return value
        text = str(value).strip()
        if not text:
            return None
        if text.casefold() == SELF_STAKEHOLDER:
            return cls.SELF
        return cls.named(text)

    @property
    def key(self) -> str:
        """Case-insensitive identity used for matching."""
        return SELF_STAKEHOLDER if self.is_self else self.name.casefold()

    def matches(self, other: Optional['Stakeholder']) -> bool:
        return other is not None and self.key == other.key

    def __str__(self) -> str:
        return self.name


Stakeholder.SELF = Stakeholder(name=SELF_STAKEHOLDER, is_self=True)


def _label_set(values: Optional[Iterable[str]]) -> FrozenSet[str]:
    if values is None:
        return frozenset()
    if isinstance(values, str):
        values = [values]
    return frozenset(v.strip() for v in values if v and v.strip())


@dataclass(frozen=True)
class Task:
    """Read-only snapshot of a backlog task."""

    task_id: str
    title: str
    created_at: datetime
    description: str = ''
    due_date: Optional[datetime] = None
    priority: int = 2
    estimated_minutes: int = 0
    energy_level: Optional[int] = None
    contexts: FrozenSet[str] = frozenset()
    tags: FrozenSet[str] = frozenset()
    category: Optional[str] = None
    project_id: Optional[str] = None
    who_for: Optional[Stakeholder] = None
    requires_deep_work: bool = False
    blocked_by_task_ids: FrozenSet[str] = frozenset()
    parent_task_id: Optional[str] = None
    completed: bool = False

    def __post_init__(self):
        """Normalize collection fields and enforce task invariants."""
        object.__setattr__(self, 'contexts', _label_set(self.contexts))
        object.__setattr__(self, 'tags', _label_set(self.tags))
        object.__setattr__(self, 'blocked_by_task_ids', _label_set(self.blocked_by_task_ids))
        object.__setattr__(self, 'who_for', Stakeholder.parse(self.who_for))
        object.__setattr__(self, 'created_at', to_naive_utc(self.created_at))
        if self.due_date is not None:
            object.__setattr__(self, 'due_date', to_naive_utc(self.due_date))

        if self.task_id in self.blocked_by_task_ids:
            raise ValueError(f"Task {self.task_id} cannot be blocked by itself")
        if self.priority < 1:
            raise ValueError(f"Task {self.task_id} priority must be 1 or greater")
        if self.estimated_minutes < 0:
            raise ValueError(f"Task {self.task_id} has negative estimated_minutes")
        if self.energy_level is not None and not 1 <= self.energy_level <= 5:
            raise ValueError(f"Task {self.task_id} energy_level must be between 1 and 5")

    def is_blocked(self, tasks_by_id: Dict[str, 'Task']) -> bool:
        """True when any blocker refers to an incomplete task in tasks_by_id."""
        return bool(self.pending_blockers(tasks_by_id))

    def pending_blockers(self, tasks_by_id: Dict[str, 'Task']) -> List[str]:
        """Blocker ids that refer to an incomplete task in tasks_by_id."""
        return sorted(
            blocker_id
            for blocker_id in self.blocked_by_task_ids
            if blocker_id in tasks_by_id and not tasks_by_id[blocker_id].completed
        )

    def effective_minutes(self, default_minutes: int) -> int:
        return self.estimated_minutes if self.estimated_minutes > 0 else default_minutes

    @property
    def text(self) -> str:
        return f"{self.title} {self.description or ''}".strip()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Task':
        """Build a task from a JSON/YAML mapping."""
        try:
            task_id = str(data['task_id'])
            title = str(data.get('title', ''))
            created_at = parse_datetime(data['created_at'])
        except KeyError as e:
            raise ValueError(f"Task record missing required field {e.args[0]!r}: {data}")

        project_id = data.get('project_id')
        parent_task_id = data.get('parent_task_id')
        energy_level = data.get('energy_level')

        return cls(
            task_id=task_id,
            title=title,
            created_at=created_at,
            description=data.get('description') or '',
            due_date=parse_datetime(data.get('due_date')),
            priority=int(data.get('priority', 2)),
            estimated_minutes=int(data.get('estimated_minutes') or 0),
            energy_level=int(energy_level) if energy_level is not None else None,
            contexts=data.get('contexts') or (),
            tags=data.get('tags') or (),
            category=data.get('category') or None,
            project_id=str(project_id) if project_id is not None else None,
            who_for=data.get('who_for'),
            requires_deep_work=bool(data.get('requires_deep_work', False)),
            blocked_by_task_ids=[str(b) for b in data.get('blocked_by_task_ids') or ()],
            parent_task_id=str(parent_task_id) if parent_task_id is not None else None,
            completed=bool(data.get('completed', False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert task to a JSON-friendly dictionary."""
        return {
            'task_id': self.task_id,
            'title': self.title,
            'description': self.description,
            'created_at': self.created_at.isoformat(),
            'due_date': self.due_date.isoformat() if self.due_date else None,
            'priority': self.priority,
            'estimated_minutes': self.estimated_minutes,
            'energy_level': self.energy_level,
            'contexts': sorted(self.contexts),
            'tags': sorted(self.tags),
            'category': self.category,
            'project_id': self.project_id,
            'who_for': str(self.who_for) if self.who_for else None,
            'requires_deep_work': self.requires_deep_work,
            'blocked_by_task_ids': sorted(self.blocked_by_task_ids),
            'parent_task_id': self.parent_task_id,
            'completed': self.completed,
        }


@dataclass(frozen=True)
class UserPreferences:
    """Optimization sliders (0-100) and daily rhythm preferences."""

    due_date_urgency_weight: int = 70
    context_grouping_weight: int = 50
    energy_matching_weight: int = 50
    similar_work_grouping_weight: int = 50
    stakeholder_grouping_weight: int = 30
    tag_similarity_weight: int = 40
    blocked_task_penalty: int = 100
    default_task_duration_minutes: int = 30
    morning_energy_peak: int = 10
    afternoon_energy_peak: int = 15

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'UserPreferences':
        """Build preferences from a config section, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in (data or {}).items() if k in known})
