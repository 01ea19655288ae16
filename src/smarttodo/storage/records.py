"""Summary: Conversion between domain dataclasses and stored JSON records.

Importance: Keeps the stored camelCase record shape out of the services.
Alternatives: Serialize dataclasses with asdict and accept snake_case keys.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, TypeVar

from smarttodo.models import (
    AiSuggestions,
    Category,
    ContextEntry,
    ContextSource,
    Priority,
    Task,
    TaskStatus,
    unique_tags,
)


logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

EnumT = TypeVar("EnumT", bound=Enum)


def format_timestamp(value: datetime) -> str:
    """Summary: Render a timestamp as UTC ISO-8601 with a trailing Z."""

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: Any) -> datetime | None:
    """Summary: Parse an ISO-8601 timestamp into an aware UTC datetime.

    Importance: Stored records come from older runs and may be malformed.
    Alternatives: Use dateutil for lenient parsing.
    """

    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _timestamp_or_epoch(value: Any, field_name: str, record_id: str) -> datetime:
    parsed = parse_timestamp(value)
    if parsed is None:
        logger.warning("Record %s has malformed %s %r.", record_id, field_name, value)
        return _EPOCH
    return parsed


def _enum_or_default(enum_type: type[EnumT], value: Any, default: EnumT) -> EnumT:
    try:
        return enum_type(value)
    except ValueError:
        logger.warning("Unknown %s value %r, using %s.", enum_type.__name__, value, default.value)
        return default


def _int_or_default(value: Any, field_name: str, record_id: str, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Record %s has malformed %s %r.", record_id, field_name, value)
        return default


def _optional_strings(value: Any) -> tuple[str, ...] | None:
    if value is None:
        return None
    return tuple(str(item) for item in value)


def suggestions_to_record(suggestions: AiSuggestions) -> dict[str, Any]:
    record: dict[str, Any] = {"contextualNotes": list(suggestions.contextual_notes)}
    if suggestions.enhanced_description is not None:
        record["enhancedDescription"] = suggestions.enhanced_description
    if suggestions.suggested_category is not None:
        record["suggestedCategory"] = suggestions.suggested_category
    if suggestions.suggested_deadline is not None:
        record["suggestedDeadline"] = suggestions.suggested_deadline
    return record


def suggestions_from_record(record: dict[str, Any] | None) -> AiSuggestions | None:
    if not record:
        return None
    return AiSuggestions(
        enhanced_description=record.get("enhancedDescription"),
        suggested_category=record.get("suggestedCategory"),
        suggested_deadline=record.get("suggestedDeadline"),
        contextual_notes=tuple(record.get("contextualNotes") or ()),
    )


def task_to_record(task: Task) -> dict[str, Any]:
    """Summary: Serialize a task into its stored record shape.

    Importance: Keeps stored data readable by earlier clients of the same keys.
    Alternatives: Store pickled dataclasses.
    """

    record: dict[str, Any] = {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "category": task.category,
        "priority": task.priority.value,
        "priorityScore": task.priority_score,
        "status": task.status.value,
        "deadline": task.deadline or "",
        "createdAt": format_timestamp(task.created_at),
        "updatedAt": format_timestamp(task.updated_at),
        "tags": list(task.tags),
    }
    if task.ai_suggestions is not None:
        record["aiSuggestions"] = suggestions_to_record(task.ai_suggestions)
    return record


def task_from_record(record: dict[str, Any]) -> Task:
    """Summary: Build a task from a stored record, tolerating missing fields.

    Importance: Older or hand-edited records should not break loading.
    Alternatives: Validate strictly and reject the whole collection.
    """

    task_id = str(record.get("id", ""))
    return Task(
        id=task_id,
        title=str(record.get("title", "")),
        description=str(record.get("description", "")),
        category=str(record.get("category", "")),
        priority=_enum_or_default(Priority, record.get("priority"), Priority.MEDIUM),
        priority_score=_int_or_default(record.get("priorityScore"), "priorityScore", task_id, 50),
        status=_enum_or_default(TaskStatus, record.get("status"), TaskStatus.PENDING),
        deadline=record.get("deadline") or None,
        created_at=_timestamp_or_epoch(record.get("createdAt"), "createdAt", task_id),
        updated_at=_timestamp_or_epoch(record.get("updatedAt"), "updatedAt", task_id),
        tags=unique_tags(record.get("tags")),
        ai_suggestions=suggestions_from_record(record.get("aiSuggestions")),
    )


def context_to_record(entry: ContextEntry) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": entry.id,
        "content": entry.content,
        "source": entry.source.value,
        "timestamp": format_timestamp(entry.timestamp),
        "processed": entry.processed,
    }
    if entry.insights is not None:
        record["insights"] = list(entry.insights)
    if entry.related_tasks is not None:
        record["relatedTasks"] = list(entry.related_tasks)
    return record


def context_from_record(record: dict[str, Any]) -> ContextEntry:
    entry_id = str(record.get("id", ""))
    return ContextEntry(
        id=entry_id,
        content=str(record.get("content", "")),
        source=_enum_or_default(ContextSource, record.get("source"), ContextSource.MANUAL),
        timestamp=_timestamp_or_epoch(record.get("timestamp"), "timestamp", entry_id),
        processed=bool(record.get("processed", False)),
        insights=_optional_strings(record.get("insights")),
        related_tasks=_optional_strings(record.get("relatedTasks")),
    )


def category_to_record(category: Category) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": category.id,
        "name": category.name,
        "color": category.color,
        "usageCount": category.usage_count,
    }
    if category.description is not None:
        record["description"] = category.description
    return record


def category_from_record(record: dict[str, Any]) -> Category:
    category_id = str(record.get("id", ""))
    return Category(
        id=category_id,
        name=str(record.get("name", "")),
        color=str(record.get("color", "")),
        usage_count=_int_or_default(record.get("usageCount"), "usageCount", category_id, 0),
        description=record.get("description"),
    )
