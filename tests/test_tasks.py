"""Summary: Tests for the task repository.

Importance: Ensures task CRUD, status cycling, and reprioritization persist correctly.
Alternatives: Validate tasks manually through the API.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from smarttodo.baseline import SeededBaseline
from smarttodo.errors import ServiceError
from smarttodo.insights import priority_for_score
from smarttodo.models import AiSuggestions, Priority, TaskDraft, TaskStatus
from smarttodo.storage.gateway import Collection
from tests.helpers import NOW, FakeClock, build_gateway, build_task_service


def test_create_task_assigns_identity_and_neutral_score(tmp_path: Path) -> None:
    """Summary: Verify creation stamps ids, timestamps, and a score of 50.

    Importance: Confirms the creation defaults.
    Alternatives: Score new tasks immediately.
    """

    gateway = build_gateway(tmp_path)
    service = build_task_service(gateway, FakeClock())
    draft = TaskDraft(
        title="Write summary",
        priority=Priority.CRITICAL,
        tags=("work", "work", "q1"),
        ai_suggestions=AiSuggestions(suggested_category="Documentation"),
    )
    first = service.create_task(draft)
    second = service.create_task(TaskDraft(title="Another"))
    assert first.priority_score == 50
    assert first.priority == Priority.CRITICAL
    assert first.created_at == first.updated_at == NOW
    assert first.tags == ("work", "q1")
    assert first.id != second.id
    assert [task.id for task in service.list_tasks()] == [first.id, second.id]
    assert service.get_task(first.id).ai_suggestions == draft.ai_suggestions


def test_first_listing_returns_seed_tasks(tmp_path: Path) -> None:
    service = build_task_service(build_gateway(tmp_path, empty=False), FakeClock())
    tasks = service.list_tasks()
    assert [task.id for task in tasks] == ["1", "2", "3"]
    assert tasks[0].status == TaskStatus.IN_PROGRESS


def test_update_task_merges_and_bumps_updated_at(tmp_path: Path) -> None:
    """Summary: Verify updates merge fields and refresh updated_at.

    Importance: Every mutation must be visible in the update timestamp.
    Alternatives: Track changes in a separate audit log.
    """

    clock = FakeClock()
    service = build_task_service(build_gateway(tmp_path), clock)
    task = service.create_task(TaskDraft(title="Draft", description="old"))
    clock.advance(minutes=5)
    updated = service.update_task(task.id, description="new", tags=["a", "a"])
    assert updated is not None
    assert updated.description == "new"
    assert updated.title == "Draft"
    assert updated.tags == ("a",)
    assert updated.created_at == NOW
    assert updated.updated_at > updated.created_at
    assert service.get_task(task.id) == updated


def test_update_missing_task_is_a_silent_no_op(tmp_path: Path) -> None:
    """Summary: Verify updating an unknown id changes nothing and does not raise."""

    gateway = build_gateway(tmp_path)
    service = build_task_service(gateway, FakeClock())
    service.create_task(TaskDraft(title="Keep"))
    before = gateway.read(Collection.TASKS)
    assert service.update_task("missing", title="Nope") is None
    assert gateway.read(Collection.TASKS) == before


def test_update_rejects_identity_fields(tmp_path: Path) -> None:
    service = build_task_service(build_gateway(tmp_path), FakeClock())
    task = service.create_task(TaskDraft(title="Fixed"))
    with pytest.raises(ValueError):
        service.update_task(task.id, id="other")


def test_update_rejects_nulls_and_coerces_enums(tmp_path: Path) -> None:
    """Summary: Verify updates cannot store null titles or invalid enum values.

    Importance: A bad update must not corrupt the stored record.
    Alternatives: Validate only at the HTTP layer.
    """

    service = build_task_service(build_gateway(tmp_path), FakeClock())
    task = service.create_task(TaskDraft(title="Keep title", deadline="2026-02-01"))
    with pytest.raises(ValueError, match="title"):
        service.update_task(task.id, title=None)
    with pytest.raises(ValueError, match="priority"):
        service.update_task(task.id, priority=None)
    with pytest.raises(ValueError):
        service.update_task(task.id, status="done")
    assert service.get_task(task.id) == task

    updated = service.update_task(task.id, priority="high", status="in-progress", deadline=None)
    assert updated.priority == Priority.HIGH
    assert updated.status == TaskStatus.IN_PROGRESS
    assert updated.deadline is None
    assert service.get_task(task.id) == updated


def test_delete_task_removes_and_ignores_missing(tmp_path: Path) -> None:
    service = build_task_service(build_gateway(tmp_path), FakeClock())
    keep = service.create_task(TaskDraft(title="Keep"))
    drop = service.create_task(TaskDraft(title="Drop"))
    service.delete_task(drop.id)
    service.delete_task("missing")
    assert [task.id for task in service.list_tasks()] == [keep.id]


def test_cycle_status_rotates(tmp_path: Path) -> None:
    """Summary: Verify pending, in-progress, completed, then pending again."""

    service = build_task_service(build_gateway(tmp_path), FakeClock())
    task = service.create_task(TaskDraft(title="Toggle"))
    seen = [service.cycle_status(task.id).status for _ in range(3)]
    assert seen == [TaskStatus.IN_PROGRESS, TaskStatus.COMPLETED, TaskStatus.PENDING]
    assert service.cycle_status("missing") is None


def test_search_tasks_filters(tmp_path: Path) -> None:
    service = build_task_service(build_gateway(tmp_path), FakeClock())
    service.create_task(TaskDraft(title="Budget review", category="Work", priority=Priority.HIGH))
    service.create_task(TaskDraft(title="Gym", description="leg day BUDGET", category="Health"))
    service.create_task(TaskDraft(title="Taxes", category="Work"))
    assert [task.title for task in service.search_tasks("budget")] == ["Budget review", "Gym"]
    assert [task.title for task in service.search_tasks(category="Work")] == ["Budget review", "Taxes"]
    assert [task.title for task in service.search_tasks(priority=Priority.HIGH)] == ["Budget review"]


def test_reprioritize_persists_sorted_consistent_tasks(tmp_path: Path) -> None:
    """Summary: Verify reprioritization rescores, sorts, and stores the new order.

    Importance: Confirms bucket consistency and stored order after a pass.
    Alternatives: Return the ranking without saving it.
    """

    clock = FakeClock()
    gateway = build_gateway(tmp_path)
    service = build_task_service(gateway, clock, baseline=SeededBaseline(3))
    service.create_task(TaskDraft(title="Plain", deadline="2026-04-01"))
    service.create_task(TaskDraft(title="Urgent meeting", deadline="2026-01-16"))
    service.create_task(TaskDraft(title="Respond to email", deadline="2026-01-19"))
    ranked = service.reprioritize()
    scores = [task.priority_score for task in ranked]
    assert scores == sorted(scores, reverse=True)
    assert all(task.priority == priority_for_score(task.priority_score) for task in ranked)
    assert service.list_tasks() == ranked


def test_reprioritize_accepts_explicit_task_set(tmp_path: Path) -> None:
    service = build_task_service(build_gateway(tmp_path), FakeClock())
    task = service.create_task(TaskDraft(title="Only urgent", deadline="2026-06-01"))
    ranked = service.reprioritize([task], [])
    assert ranked[0].priority_score == 20
    assert ranked[0].priority == Priority.LOW
    assert service.list_tasks()[0].priority_score == 20


def test_storage_failure_is_labeled(tmp_path: Path) -> None:
    """Summary: Verify persistence failures surface as labeled ServiceErrors.

    Importance: Callers show a readable message instead of crashing.
    Alternatives: Let raw storage exceptions reach the UI.
    """

    gateway = build_gateway(tmp_path)
    service = build_task_service(gateway, FakeClock())
    gateway._store.set(Collection.TASKS.value, "{broken")
    with pytest.raises(ServiceError, match="Failed to load tasks"):
        service.list_tasks()
    with pytest.raises(ServiceError, match="Failed to add task"):
        service.create_task(TaskDraft(title="Nope"))
    with pytest.raises(ServiceError, match="Failed to update task"):
        service.update_task("1", title="Nope")
    with pytest.raises(ServiceError, match="Failed to delete task"):
        service.delete_task("1")
