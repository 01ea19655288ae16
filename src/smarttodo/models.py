"""Summary: Domain model dataclasses for SmartTodo.

Importance: Defines the core entities shared across the engine, services, and storage.
Alternatives: Use Pydantic models or plain dicts throughout.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable


class Priority(str, Enum):
    """Summary: Discrete priority bucket derived from a priority score.

    Importance: Keeps priorities to a closed set of valid values.
    Alternatives: Store priorities as free-form strings.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class TaskStatus(str, Enum):
    """Summary: User-controlled progress state of a task.

    Importance: Drives status toggling and completion analytics.
    Alternatives: Track only a completed boolean.
    """

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class ContextSource(str, Enum):
    """Summary: Origin of a context entry."""

    WHATSAPP = "whatsapp"
    EMAIL = "email"
    NOTES = "notes"
    MANUAL = "manual"


class InsightType(str, Enum):
    """Summary: Kind of advice carried by an insight."""

    PRIORITY = "priority"
    DEADLINE = "deadline"
    CATEGORY = "category"
    ENHANCEMENT = "enhancement"


@dataclass(frozen=True)
class AiSuggestions:
    """Summary: The engine's most recent advisory suggestions for a task.

    Importance: Lets the UI offer suggestions without auto-applying them.
    Alternatives: Store suggestions as loose optional keys on the task.
    """

    enhanced_description: str | None = None
    suggested_category: str | None = None
    suggested_deadline: str | None = None
    contextual_notes: tuple[str, ...] = ()


@dataclass(frozen=True)
class TaskDraft:
    """Summary: Caller-supplied task fields before an id and timestamps exist.

    Importance: Serves as creation input and as the shape of generated suggestions.
    Alternatives: Accept partially filled Task objects.
    """

    title: str
    description: str = ""
    category: str = ""
    priority: Priority = Priority.MEDIUM
    status: TaskStatus = TaskStatus.PENDING
    deadline: str | None = None
    tags: tuple[str, ...] = ()
    ai_suggestions: AiSuggestions | None = None


@dataclass(frozen=True)
class Task:
    """Summary: Represents a unit of work owned by the task collection.

    Importance: Core record for prioritization, suggestions, and analytics.
    Alternatives: Keep tasks as untyped JSON records.
    """

    id: str
    title: str
    description: str
    category: str
    priority: Priority
    priority_score: int
    status: TaskStatus
    deadline: str | None
    created_at: datetime
    updated_at: datetime
    tags: tuple[str, ...] = ()
    ai_suggestions: AiSuggestions | None = None


@dataclass(frozen=True)
class ContextEntry:
    """Summary: A piece of free-text evidence such as an email or chat message.

    Importance: Provides the signal the insight engine reads to suggest work.
    Alternatives: Attach raw notes directly to tasks.
    """

    id: str
    content: str
    source: ContextSource
    timestamp: datetime
    processed: bool = False
    insights: tuple[str, ...] | None = None
    related_tasks: tuple[str, ...] | None = None


@dataclass(frozen=True)
class Category:
    """Summary: Named task grouping with display metadata.

    Importance: Feeds category suggestions and per-category analytics.
    Alternatives: Derive categories from task labels only.
    """

    id: str
    name: str
    color: str
    usage_count: int = 0
    description: str | None = None


@dataclass(frozen=True)
class AiInsight:
    """Summary: Transient advice produced by context analysis.

    Importance: Annotates context entries with what the engine noticed.
    Alternatives: Return bare strings without confidence or reasoning.
    """

    type: InsightType
    confidence: float
    suggestion: str
    reasoning: str


@dataclass(frozen=True)
class ContextAnalysis:
    """Summary: Result of a context analysis pass."""

    insights: list[AiInsight] = field(default_factory=list)
    suggestions: list[TaskDraft] = field(default_factory=list)


def unique_tags(tags: Iterable[str] | None) -> tuple[str, ...]:
    """Summary: Normalize tags into an ordered tuple without duplicates.

    Importance: Tags behave as an insertion-ordered set.
    Alternatives: Use a frozenset and lose ordering.
    """

    if not tags:
        return ()
    cleaned = (str(tag).strip() for tag in tags)
    return tuple(dict.fromkeys(tag for tag in cleaned if tag))
