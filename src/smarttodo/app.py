"""Summary: Application factory wiring core services.

Importance: Constructs each service once per process and passes dependencies explicitly.
Alternatives: Use module-level singleton services.
"""

from __future__ import annotations

from dataclasses import dataclass

from smarttodo.baseline import BaselinePolicyFactory
from smarttodo.config import AppConfig
from smarttodo.debounce import LatestRequestRunner
from smarttodo.insights import HeuristicInsightEngine
from smarttodo.services import (
    CategoryService,
    ContextService,
    StatsService,
    SuggestionService,
    TaskService,
)
from smarttodo.storage.gateway import PersistenceGateway
from smarttodo.storage.sqlite_store import SqliteStore


@dataclass(frozen=True)
class AppServices:
    """Summary: Bundle of core services for SmartTodo.

    Importance: Simplifies passing dependencies to UI or API layers.
    Alternatives: Use a dependency injection container.
    """

    tasks: TaskService
    contexts: ContextService
    categories: CategoryService
    suggestions: SuggestionService
    stats: StatsService
    engine: HeuristicInsightEngine
    gateway: PersistenceGateway
    config: AppConfig

    def suggestion_runner(self) -> LatestRequestRunner:
        """Summary: Build a debounced runner for one editing session.

        Importance: Each editor gets its own latest-request-wins slot.
        Alternatives: Share one runner across all editors.
        """

        return LatestRequestRunner(self.config.debounce_seconds)


def build_services(config: AppConfig) -> AppServices:
    """Summary: Build core services from configuration.

    Importance: Provides a single construction path for the application.
    Alternatives: Instantiate services directly within each entrypoint.
    """

    store = SqliteStore(config.db_path)
    store.initialize()
    gateway = PersistenceGateway(store)
    engine = HeuristicInsightEngine(baseline=BaselinePolicyFactory(config).build())
    tasks = TaskService(gateway=gateway, engine=engine)
    contexts = ContextService(gateway=gateway, engine=engine)
    categories = CategoryService(gateway=gateway)
    return AppServices(
        tasks=tasks,
        contexts=contexts,
        categories=categories,
        suggestions=SuggestionService(engine=engine, contexts=contexts, categories=categories),
        stats=StatsService(tasks=tasks, contexts=contexts, categories=categories),
        engine=engine,
        gateway=gateway,
        config=config,
    )
