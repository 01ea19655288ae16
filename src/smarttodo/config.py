"""Summary: Application configuration for SmartTodo.

Importance: Centralizes environment, .env, and config defaults for consistent behavior.
Alternatives: Use a dedicated settings library like Pydantic Settings.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from dataclasses import dataclass


@dataclass(frozen=True)
class AppConfig:
    """Summary: Holds configuration values for storage, scoring, and the API.

    Importance: Ensures all services derive settings from a single source of truth.
    Alternatives: Store settings in a shared config file and parse at startup.
    """

    db_path: str
    baseline_policy: str
    baseline_value: float
    baseline_seed: int | None
    debounce_seconds: float
    api_host: str
    api_port: int
    api_key: str
    log_level: str

    @staticmethod
    def from_env() -> "AppConfig":
        """Summary: Build configuration from defaults, .env, and environment.

        Importance: Keeps all variables defined in config defaults while allowing overrides.
        Alternatives: Parse only environment variables without a defaults file.
        """

        defaults = load_defaults(Path("config") / "defaults.json")
        load_dotenv(Path(".env"))
        seed = os.getenv("SMARTTODO_BASELINE_SEED") or defaults["baseline_seed"]
        return AppConfig(
            db_path=os.getenv("SMARTTODO_DB_PATH", defaults["db_path"]),
            baseline_policy=os.getenv("SMARTTODO_BASELINE_POLICY", defaults["baseline_policy"]),
            baseline_value=float(os.getenv("SMARTTODO_BASELINE_VALUE", defaults["baseline_value"])),
            baseline_seed=int(seed) if seed else None,
            debounce_seconds=float(
                os.getenv("SMARTTODO_DEBOUNCE_SECONDS", defaults["debounce_seconds"])
            ),
            api_host=os.getenv("SMARTTODO_API_HOST", defaults["api_host"]),
            api_port=int(os.getenv("SMARTTODO_API_PORT", defaults["api_port"])),
            api_key=os.getenv("SMARTTODO_API_KEY", defaults["api_key"]),
            log_level=os.getenv("SMARTTODO_LOG_LEVEL", defaults["log_level"]),
        )


def load_defaults(path: Path) -> dict[str, str]:
    """Summary: Load configuration defaults from JSON.

    Importance: Ensures all variables exist in a single config file.
    Alternatives: Inline defaults in the AppConfig initializer.
    """

    if not path.exists():
        raise FileNotFoundError(f"Defaults file not found: {path}")
    return json.loads(path.read_text(encoding="utf-8"))


def load_dotenv(path: Path) -> None:
    """Summary: Load key-value pairs from a .env file into the environment.

    Importance: Lets local overrides live outside the code.
    Alternatives: Use python-dotenv or OS-specific secret stores.
    """

    if not path.exists():
        return
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())
