"""Summary: Core application services for SmartTodo.

Importance: Orchestrates task CRUD, reprioritization, context analysis, and analytics.
Alternatives: Build a full service layer with dependency injection framework.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field, fields, replace
from datetime import datetime, timedelta
from typing import Any, Callable, Iterator

from smarttodo.debounce import LatestRequestRunner
from smarttodo.errors import ServiceError, StorageError
from smarttodo.insights import HeuristicInsightEngine, parse_deadline, utc_now
from smarttodo.models import (
    AiSuggestions,
    Category,
    ContextAnalysis,
    ContextEntry,
    ContextSource,
    Priority,
    Task,
    TaskDraft,
    TaskStatus,
    unique_tags,
)
from smarttodo.storage.gateway import Collection, PersistenceGateway
from smarttodo.storage.records import (
    category_from_record,
    category_to_record,
    context_from_record,
    context_to_record,
    task_from_record,
    task_to_record,
)


logger = logging.getLogger(__name__)

NEW_TASK_SCORE = 50

_STATUS_CYCLE = {
    TaskStatus.PENDING: TaskStatus.IN_PROGRESS,
    TaskStatus.IN_PROGRESS: TaskStatus.COMPLETED,
    TaskStatus.COMPLETED: TaskStatus.PENDING,
}

_IMMUTABLE_TASK_FIELDS = {"id", "created_at", "updated_at"}
_UPDATABLE_TASK_FIELDS = {item.name for item in fields(Task)} - _IMMUTABLE_TASK_FIELDS
_NULLABLE_TASK_FIELDS = {"deadline", "ai_suggestions"}


class TimeBasedIds:
    """Summary: Issues millisecond-timestamp ids that never repeat within a process.

    Importance: Two records created in the same millisecond still get distinct ids.
    Alternatives: Use uuid4 and give up chronological ordering.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            candidate = int(self._clock().timestamp() * 1000)
            self._last = max(candidate, self._last + 1)
            return str(self._last)


@contextmanager
def _labeled_failure(label: str) -> Iterator[None]:
    """Summary: Re-raise storage failures as a ServiceError carrying a label.

    Importance: Callers can show "Failed to add task" without parsing storage errors.
    Alternatives: Let StorageError propagate unchanged.
    """

    try:
        yield
    except StorageError as exc:
        logger.error("%s: %s", label, exc)
        raise ServiceError(label) from exc


@dataclass(frozen=True)
class TaskService:
    """Summary: Repository over the task collection.

    Importance: Single owner of task reads, writes, and reprioritization.
    Alternatives: Let each caller read and write the collection directly.
    """

    gateway: PersistenceGateway
    engine: HeuristicInsightEngine
    clock: Callable[[], datetime] = utc_now
    ids: TimeBasedIds = field(default_factory=TimeBasedIds)

    def list_tasks(self) -> list[Task]:
        """Summary: Return all tasks in stored order.

        Importance: Order reflects insertion or the last reprioritization.
        Alternatives: Sort by creation time on every read.
        """

        with _labeled_failure("Failed to load tasks"):
            return self._load()

    def get_task(self, task_id: str) -> Task | None:
        for task in self.list_tasks():
            if task.id == task_id:
                return task
        return None

    def create_task(self, draft: TaskDraft) -> Task:
        """Summary: Create a task from a draft and append it to the collection.

        Importance: Assigns identity, neutral score, and timestamps in one place.
        Alternatives: Let callers build complete Task objects.
        """

        now = self.clock()
        task = Task(
            id=self.ids.next_id(),
            title=draft.title,
            description=draft.description,
            category=draft.category,
            priority=draft.priority,
            priority_score=NEW_TASK_SCORE,
            status=draft.status,
            deadline=draft.deadline,
            created_at=now,
            updated_at=now,
            tags=unique_tags(draft.tags),
            ai_suggestions=draft.ai_suggestions,
        )
        with _labeled_failure("Failed to add task"):
            tasks = self._load()
            tasks.append(task)
            self._save(tasks)
        logger.info("Added task %s.", task.id)
        return task

    def update_task(self, task_id: str, **changes: Any) -> Task | None:
        """Summary: Merge field changes into a task and refresh its update time.

        Importance: Every mutation bumps updated_at.
        Alternatives: Replace whole task records from the caller.

        Unknown ids are a silent no-op and return None. Invalid field names or
        values raise ValueError; only deadline and ai_suggestions may be None.
        """

        unknown = set(changes) - _UPDATABLE_TASK_FIELDS
        if unknown:
            raise ValueError(f"Cannot update task fields: {', '.join(sorted(unknown))}")
        nulls = sorted(
            name
            for name, value in changes.items()
            if value is None and name not in _NULLABLE_TASK_FIELDS
        )
        if nulls:
            raise ValueError(f"Task fields cannot be null: {', '.join(nulls)}")
        if "priority" in changes:
            changes["priority"] = Priority(changes["priority"])
        if "status" in changes:
            changes["status"] = TaskStatus(changes["status"])
        if "tags" in changes:
            changes["tags"] = unique_tags(changes["tags"])
        with _labeled_failure("Failed to update task"):
            tasks = self._load()
            for index, task in enumerate(tasks):
                if task.id == task_id:
                    updated = replace(task, **changes, updated_at=self.clock())
                    tasks[index] = updated
                    self._save(tasks)
                    logger.info("Updated task %s.", task_id)
                    return updated
        logger.info("Task %s not found; update skipped.", task_id)
        return None

    def delete_task(self, task_id: str) -> None:
        """Summary: Remove a task by id; absent ids are ignored."""

        with _labeled_failure("Failed to delete task"):
            tasks = self._load()
            remaining = [task for task in tasks if task.id != task_id]
            if len(remaining) == len(tasks):
                return
            self._save(remaining)
        logger.info("Deleted task %s.", task_id)

    def cycle_status(self, task_id: str) -> Task | None:
        """Summary: Advance a task through pending, in-progress, and completed.

        Importance: Backs the one-click status toggle.
        Alternatives: Require the caller to pick the next status.
        """

        task = self.get_task(task_id)
        if task is None:
            return None
        return self.update_task(task_id, status=_STATUS_CYCLE[task.status])

    def search_tasks(
        self,
        term: str = "",
        category: str | None = None,
        priority: Priority | None = None,
    ) -> list[Task]:
        """Summary: Filter tasks by text, category, and priority.

        Importance: Supports dashboard search without loading tasks in the client.
        Alternatives: Filter in the UI layer only.
        """

        needle = term.lower()
        return [
            task
            for task in self.list_tasks()
            if (needle in task.title.lower() or needle in task.description.lower())
            and (category is None or task.category == category)
            and (priority is None or task.priority == priority)
        ]

    def reprioritize(
        self,
        tasks: list[Task] | None = None,
        context_entries: list[ContextEntry] | None = None,
    ) -> list[Task]:
        """Summary: Rescore, resort, and persist the whole task set.

        Importance: Keeps every priority bucket consistent with its score.
        Alternatives: Rescore lazily when tasks are displayed.

        The stored order is replaced by the new score order.
        """

        with _labeled_failure("Failed to reprioritize tasks"):
            current = self._load() if tasks is None else tasks
            if context_entries is None:
                context_entries = [
                    context_from_record(record)
                    for record in self.gateway.read(Collection.CONTEXT)
                ]
            ranked = self.engine.prioritize_tasks(current, context_entries)
            self._save(ranked)
        logger.info("Reprioritized %s tasks.", len(ranked))
        return ranked

    def _load(self) -> list[Task]:
        return [task_from_record(record) for record in self.gateway.read(Collection.TASKS)]

    def _save(self, tasks: list[Task]) -> None:
        self.gateway.write(Collection.TASKS, [task_to_record(task) for task in tasks])


@dataclass(frozen=True)
class ContextService:
    """Summary: Manages context entries and runs context analysis.

    Importance: Turns pasted emails, chats, and notes into insights and task ideas.
    Alternatives: Analyze context on the fly without storing it.
    """

    gateway: PersistenceGateway
    engine: HeuristicInsightEngine
    clock: Callable[[], datetime] = utc_now
    ids: TimeBasedIds = field(default_factory=TimeBasedIds)

    def list_entries(self) -> list[ContextEntry]:
        with _labeled_failure("Failed to load context"):
            return self._load()

    def add_entry(self, content: str, source: ContextSource = ContextSource.MANUAL) -> ContextEntry:
        """Summary: Store a new unprocessed context entry ahead of older ones.

        Importance: Newest context shows first.
        Alternatives: Append entries in arrival order.
        """

        if not content.strip():
            raise ValueError("Context content must not be empty")
        entry = ContextEntry(
            id=self.ids.next_id(),
            content=content,
            source=source,
            timestamp=self.clock(),
            processed=False,
        )
        with _labeled_failure("Failed to add context"):
            entries = self._load()
            self._save([entry, *entries])
        logger.info("Added %s context entry %s.", source.value, entry.id)
        return entry

    def delete_entry(self, entry_id: str) -> None:
        with _labeled_failure("Failed to delete context"):
            entries = self._load()
            remaining = [entry for entry in entries if entry.id != entry_id]
            if len(remaining) == len(entries):
                return
            self._save(remaining)
        logger.info("Deleted context entry %s.", entry_id)

    def analyze(self) -> ContextAnalysis:
        """Summary: Analyze all entries, annotate them, and propose tasks.

        Importance: Marks every entry processed and records what was found in it.
        Alternatives: Return insights without persisting them.
        """

        with _labeled_failure("Failed to analyze context"):
            entries = self._load()
            all_insights = []
            annotated = []
            for entry in entries:
                found = self.engine.analyze_context([entry])
                all_insights.extend(found)
                existing = list(entry.insights or ())
                annotated.append(
                    replace(
                        entry,
                        processed=True,
                        insights=tuple(existing + [insight.suggestion for insight in found]),
                    )
                )
            suggestions = self.engine.generate_task_suggestions(entries)
            self._save(annotated)
        logger.info(
            "Analyzed %s context entries: %s insights, %s suggestions.",
            len(entries),
            len(all_insights),
            len(suggestions),
        )
        return ContextAnalysis(insights=all_insights, suggestions=suggestions)

    def _load(self) -> list[ContextEntry]:
        return [context_from_record(record) for record in self.gateway.read(Collection.CONTEXT)]

    def _save(self, entries: list[ContextEntry]) -> None:
        self.gateway.write(Collection.CONTEXT, [context_to_record(entry) for entry in entries])


@dataclass(frozen=True)
class CategoryService:
    """Summary: Provides access to task categories.

    Importance: Feeds category suggestions and analytics.
    Alternatives: Derive categories from task labels only.
    """

    gateway: PersistenceGateway

    def list_categories(self) -> list[Category]:
        with _labeled_failure("Failed to load categories"):
            return [
                category_from_record(record)
                for record in self.gateway.read(Collection.CATEGORIES)
            ]

    def category_names(self) -> list[str]:
        return [category.name for category in self.list_categories()]

    def save_categories(self, categories: list[Category]) -> None:
        with _labeled_failure("Failed to save categories"):
            self.gateway.write(
                Collection.CATEGORIES, [category_to_record(category) for category in categories]
            )
        logger.info("Saved %s categories.", len(categories))


@dataclass(frozen=True)
class SuggestionService:
    """Summary: Produces live suggestions for a task being edited.

    Importance: Combines stored context and categories with the engine in one call.
    Alternatives: Have the UI gather inputs and call the engine itself.
    """

    engine: HeuristicInsightEngine
    contexts: ContextService
    categories: CategoryService

    def suggest(self, draft: TaskDraft) -> AiSuggestions:
        return self.engine.suggest_for_draft(
            draft, self.contexts.list_entries(), self.categories.category_names()
        )

    async def suggest_latest(self, runner: LatestRequestRunner, draft: TaskDraft) -> AiSuggestions:
        """Summary: Debounced suggestions for a draft that is still being edited.

        Importance: Only the last edit after a pause is computed.
        Alternatives: Recompute on every keystroke.

        Raises Superseded if a newer draft arrives first.
        """

        return await runner.submit(lambda: asyncio.to_thread(self.suggest, draft))


@dataclass(frozen=True)
class StatsService:
    """Summary: Provides task and context analytics.

    Importance: Enables dashboards and completion tracking.
    Alternatives: Calculate counts directly in the API or UI.
    """

    tasks: TaskService
    contexts: ContextService
    categories: CategoryService
    clock: Callable[[], datetime] = utc_now

    def snapshot(self) -> dict[str, Any]:
        """Summary: Return counts, rates, and distributions for the current data.

        Importance: One call backs the analytics view.
        Alternatives: Build a full analytics pipeline.
        """

        now = self.clock()
        last_week = now - timedelta(days=7)
        tasks = self.tasks.list_tasks()
        entries = self.contexts.list_entries()
        completed = [task for task in tasks if task.status == TaskStatus.COMPLETED]
        processed = [entry for entry in entries if entry.processed]

        by_category = []
        for category in self.categories.list_categories():
            members = [task for task in tasks if task.category == category.name]
            done = sum(1 for task in members if task.status == TaskStatus.COMPLETED)
            by_category.append(
                {
                    "name": category.name,
                    "color": category.color,
                    "total_tasks": len(members),
                    "completed_tasks": done,
                    "completion_rate": _percent(done, len(members)),
                }
            )
        by_category.sort(key=lambda item: item["total_tasks"], reverse=True)

        return {
            "total_tasks": len(tasks),
            "completed_tasks": len(completed),
            "pending_tasks": sum(1 for task in tasks if task.status == TaskStatus.PENDING),
            "in_progress_tasks": sum(1 for task in tasks if task.status == TaskStatus.IN_PROGRESS),
            "overdue_tasks": sum(1 for task in tasks if self._is_overdue(task, now)),
            "high_priority_tasks": sum(
                1 for task in tasks if task.priority in (Priority.HIGH, Priority.CRITICAL)
            ),
            "completion_rate": _percent(len(completed), len(tasks)),
            "priority_distribution": {
                priority.value: sum(1 for task in tasks if task.priority == priority)
                for priority in (Priority.CRITICAL, Priority.HIGH, Priority.MEDIUM, Priority.LOW)
            },
            "categories": by_category,
            "context_entries": len(entries),
            "context_processing_rate": _percent(len(processed), len(entries)),
            "recent_tasks": sum(1 for task in tasks if task.created_at > last_week),
            "recent_completed_tasks": sum(1 for task in completed if task.created_at > last_week),
            "recent_context_entries": sum(1 for entry in entries if entry.timestamp > last_week),
        }

    @staticmethod
    def _is_overdue(task: Task, now: datetime) -> bool:
        deadline = parse_deadline(task.deadline)
        return deadline is not None and deadline < now and task.status != TaskStatus.COMPLETED


def _percent(part: int, whole: int) -> int:
    if whole == 0:
        return 0
    return int(part * 100 / whole + 0.5)
