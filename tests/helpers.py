"""Summary: Shared builders for SmartTodo tests.

Importance: Keeps clocks, stores, and services consistent across test modules.
Alternatives: Use pytest fixtures in a conftest module.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

from smarttodo.baseline import BaselinePolicy, FixedBaseline
from smarttodo.config import AppConfig
from smarttodo.insights import HeuristicInsightEngine
from smarttodo.services import CategoryService, ContextService, StatsService, TaskService, TimeBasedIds
from smarttodo.storage.gateway import Collection, PersistenceGateway
from smarttodo.storage.sqlite_store import SqliteStore


NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Summary: Controllable clock for deterministic timestamps."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


def build_gateway(tmp_path: Path, empty: bool = True) -> PersistenceGateway:
    """Summary: Build a gateway over a fresh SQLite file.

    Importance: Tests start from empty collections unless they ask for seeds.
    Alternatives: Share one database across tests.
    """

    store = SqliteStore(str(tmp_path / "test.db"))
    store.initialize()
    gateway = PersistenceGateway(store)
    if empty:
        for collection in Collection:
            gateway.write(collection, [])
    return gateway


def build_engine(
    clock: FakeClock | None = None, baseline: BaselinePolicy | None = None
) -> HeuristicInsightEngine:
    return HeuristicInsightEngine(
        baseline=baseline or FixedBaseline(0.0),
        clock=clock or FakeClock(),
    )


def build_task_service(
    gateway: PersistenceGateway, clock: FakeClock, baseline: BaselinePolicy | None = None
) -> TaskService:
    return TaskService(
        gateway=gateway,
        engine=build_engine(clock, baseline),
        clock=clock,
        ids=TimeBasedIds(clock),
    )


def build_context_service(gateway: PersistenceGateway, clock: FakeClock) -> ContextService:
    return ContextService(
        gateway=gateway, engine=build_engine(clock), clock=clock, ids=TimeBasedIds(clock)
    )


def build_stats_service(gateway: PersistenceGateway, clock: FakeClock) -> StatsService:
    return StatsService(
        tasks=build_task_service(gateway, clock),
        contexts=build_context_service(gateway, clock),
        categories=CategoryService(gateway=gateway),
        clock=clock,
    )


def build_config(db_path: str, api_key: str = "") -> AppConfig:
    """Summary: Build an AppConfig for isolated tests."""

    return AppConfig(
        db_path=db_path,
        baseline_policy="fixed",
        baseline_value=50.0,
        baseline_seed=None,
        debounce_seconds=0.0,
        api_host="127.0.0.1",
        api_port=8000,
        api_key=api_key,
        log_level="INFO",
    )
