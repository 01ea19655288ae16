"""Summary: FastAPI application for SmartTodo.

Importance: Exposes task, context, and suggestion operations to UI clients over HTTP.
Alternatives: Call the services in-process from a desktop or terminal UI.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from fastapi import Depends, FastAPI, Header, HTTPException
from pydantic import BaseModel, Field

from smarttodo.app import build_services
from smarttodo.config import AppConfig
from smarttodo.errors import ServiceError
from smarttodo.models import (
    AiInsight,
    ContextSource,
    Priority,
    TaskDraft,
    TaskStatus,
)
from smarttodo.storage.records import (
    category_to_record,
    context_to_record,
    suggestions_to_record,
    task_to_record,
)


class TaskCreateRequest(BaseModel):
    """Summary: Request payload for task creation.

    Importance: Keeps creation inputs explicit for API clients.
    Alternatives: Accept full task records including ids.
    """

    title: str = Field(min_length=1)
    description: str = ""
    category: str = ""
    priority: Priority = Priority.MEDIUM
    status: TaskStatus = TaskStatus.PENDING
    deadline: str | None = None
    tags: list[str] = Field(default_factory=list)


class TaskUpdateRequest(BaseModel):
    """Summary: Request payload for partial task updates.

    Importance: Only fields the client sends are changed.
    Alternatives: Require the full task on every update.
    """

    title: str | None = None
    description: str | None = None
    category: str | None = None
    priority: Priority | None = None
    status: TaskStatus | None = None
    deadline: str | None = None
    tags: list[str] | None = None


class SuggestionRequest(BaseModel):
    """Summary: Request payload for live task suggestions."""

    title: str = ""
    description: str = ""


class ContextCreateRequest(BaseModel):
    """Summary: Request payload for adding a context entry."""

    content: str = Field(min_length=1)
    source: ContextSource = ContextSource.MANUAL


def _insight_payload(insight: AiInsight) -> dict[str, Any]:
    return {
        "type": insight.type.value,
        "confidence": insight.confidence,
        "suggestion": insight.suggestion,
        "reasoning": insight.reasoning,
    }


def _draft_payload(draft: TaskDraft) -> dict[str, Any]:
    return {
        "title": draft.title,
        "description": draft.description,
        "category": draft.category,
        "priority": draft.priority.value,
    }


def create_app(config: AppConfig) -> FastAPI:
    """Summary: Create a FastAPI app wired to SmartTodo services.

    Importance: Ensures the API layer shares the same configuration and storage.
    Alternatives: Instantiate services globally outside the factory.
    """

    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=config.log_level.upper(), format="%(levelname)s %(name)s: %(message)s"
        )
    app = FastAPI(title="SmartTodo API", version="0.1.0")
    services = build_services(config)

    def require_api_key(x_api_key: str | None = Header(default=None)) -> None:
        """Summary: Enforce API key authentication when configured.

        Importance: Adds a minimal security layer for local and private deployments.
        Alternatives: Use OAuth or session-based authentication.
        """

        if not config.api_key:
            return
        if x_api_key != config.api_key:
            raise HTTPException(status_code=401, detail="Invalid API key")

    def _service_call(operation: Any, *args: Any, **kwargs: Any) -> Any:
        try:
            return operation(*args, **kwargs)
        except ServiceError as exc:
            raise HTTPException(status_code=503, detail=str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    @app.get("/health")
    def health() -> dict[str, str]:
        """Summary: Health check endpoint.

        Importance: Supports uptime checks in local deployments.
        Alternatives: Use a metrics endpoint only.
        """

        return {"status": "ok"}

    @app.get("/tasks", dependencies=[Depends(require_api_key)])
    def list_tasks(
        search: str = "", category: str | None = None, priority: Priority | None = None
    ) -> list[dict[str, Any]]:
        """Summary: List tasks, optionally filtered.

        Importance: Backs the dashboard list and its search box.
        Alternatives: Return all tasks and filter in the client.
        """

        tasks = _service_call(services.tasks.search_tasks, search, category, priority)
        return [task_to_record(task) for task in tasks]

    @app.post("/tasks", dependencies=[Depends(require_api_key)])
    def create_task(payload: TaskCreateRequest) -> dict[str, Any]:
        """Summary: Create a task with live suggestions attached.

        Importance: New tasks carry the advisory suggestions shown while editing.
        Alternatives: Create tasks without suggestions.
        """

        draft = TaskDraft(
            title=payload.title,
            description=payload.description,
            category=payload.category,
            priority=payload.priority,
            status=payload.status,
            deadline=payload.deadline,
            tags=tuple(payload.tags),
        )
        suggestions = _service_call(services.suggestions.suggest, draft)
        task = _service_call(
            services.tasks.create_task,
            replace(draft, ai_suggestions=suggestions),
        )
        return task_to_record(task)

    @app.post("/tasks/reprioritize", dependencies=[Depends(require_api_key)])
    def reprioritize_tasks() -> list[dict[str, Any]]:
        """Summary: Rescore and resort every stored task."""

        return [task_to_record(task) for task in _service_call(services.tasks.reprioritize)]

    @app.get("/tasks/{task_id}", dependencies=[Depends(require_api_key)])
    def get_task(task_id: str) -> dict[str, Any]:
        task = _service_call(services.tasks.get_task, task_id)
        if task is None:
            raise HTTPException(status_code=404, detail="Task not found")
        return task_to_record(task)

    @app.patch("/tasks/{task_id}", dependencies=[Depends(require_api_key)])
    def update_task(task_id: str, payload: TaskUpdateRequest) -> dict[str, Any]:
        """Summary: Apply a partial update to a task.

        Importance: Keeps updated_at current on every edit.
        Alternatives: Use PUT with a full task body.
        """

        changes = payload.model_dump(exclude_unset=True)
        task = _service_call(services.tasks.update_task, task_id, **changes)
        if task is None:
            raise HTTPException(status_code=404, detail="Task not found")
        return task_to_record(task)

    @app.post("/tasks/{task_id}/cycle-status", dependencies=[Depends(require_api_key)])
    def cycle_task_status(task_id: str) -> dict[str, Any]:
        task = _service_call(services.tasks.cycle_status, task_id)
        if task is None:
            raise HTTPException(status_code=404, detail="Task not found")
        return task_to_record(task)

    @app.delete("/tasks/{task_id}", dependencies=[Depends(require_api_key)])
    def delete_task(task_id: str) -> dict[str, str]:
        _service_call(services.tasks.delete_task, task_id)
        return {"status": "ok"}

    @app.post("/suggestions", dependencies=[Depends(require_api_key)])
    def suggest(payload: SuggestionRequest) -> dict[str, Any]:
        """Summary: Suggest category, deadline, and description for a draft.

        Importance: Feeds the editor's suggestion panel without saving anything.
        Alternatives: Compute suggestions only on task creation.
        """

        draft = TaskDraft(title=payload.title, description=payload.description)
        return suggestions_to_record(_service_call(services.suggestions.suggest, draft))

    @app.get("/context", dependencies=[Depends(require_api_key)])
    def list_context() -> list[dict[str, Any]]:
        return [context_to_record(entry) for entry in _service_call(services.contexts.list_entries)]

    @app.post("/context", dependencies=[Depends(require_api_key)])
    def add_context(payload: ContextCreateRequest) -> dict[str, Any]:
        entry = _service_call(services.contexts.add_entry, payload.content, payload.source)
        return context_to_record(entry)

    @app.delete("/context/{entry_id}", dependencies=[Depends(require_api_key)])
    def delete_context(entry_id: str) -> dict[str, str]:
        _service_call(services.contexts.delete_entry, entry_id)
        return {"status": "ok"}

    @app.post("/context/analyze", dependencies=[Depends(require_api_key)])
    def analyze_context() -> dict[str, Any]:
        """Summary: Analyze stored context and propose tasks.

        Importance: Marks entries processed and returns insights and task ideas.
        Alternatives: Analyze each entry as it is added.
        """

        analysis = _service_call(services.contexts.analyze)
        return {
            "insights": [_insight_payload(insight) for insight in analysis.insights],
            "suggestions": [_draft_payload(draft) for draft in analysis.suggestions],
        }

    @app.get("/categories", dependencies=[Depends(require_api_key)])
    def list_categories() -> list[dict[str, Any]]:
        return [
            category_to_record(category)
            for category in _service_call(services.categories.list_categories)
        ]

    @app.get("/stats", dependencies=[Depends(require_api_key)])
    def stats() -> dict[str, Any]:
        return _service_call(services.stats.snapshot)

    return app
