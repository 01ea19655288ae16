"""Summary: Baseline policies for priority scoring.

Importance: Makes the starting point of every priority score a pluggable choice.
Alternatives: Hardcode an unseeded random baseline inside the scorer.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass

from smarttodo.config import AppConfig


class BaselinePolicy(ABC):
    """Summary: Abstract source of baseline values in [0, 100).

    Importance: Lets callers pick between fresh jitter and reproducible scoring.
    Alternatives: Pass a bare callable around.
    """

    name: str = "abstract"

    @abstractmethod
    def draw(self) -> float:
        """Summary: Return the baseline for one scoring call."""


class RandomBaseline(BaselinePolicy):
    """Summary: Uniform random baseline drawn fresh on every call.

    Importance: Reprioritizing an unchanged task set shuffles near-equal tasks.
    Alternatives: Use a seeded generator for repeatable results.
    """

    name = "random"

    def __init__(self) -> None:
        self._random = random.Random()

    def draw(self) -> float:
        return self._random.random() * 100


class SeededBaseline(BaselinePolicy):
    """Summary: Uniform random baseline from a seeded generator.

    Importance: Produces the same score sequence for the same seed, which tests rely on.
    Alternatives: Record and replay baselines from storage.
    """

    name = "seeded"

    def __init__(self, seed: int) -> None:
        self._random = random.Random(seed)

    def draw(self) -> float:
        return self._random.random() * 100


class FixedBaseline(BaselinePolicy):
    """Summary: Constant baseline, so scores depend only on keywords and deadlines.

    Importance: Makes reprioritization idempotent.
    Alternatives: Use a seeded generator reset before each pass.
    """

    name = "fixed"

    def __init__(self, value: float = 50.0) -> None:
        if not 0 <= value < 100:
            raise ValueError(f"Baseline must be in [0, 100), got {value}")
        self._value = value

    def draw(self) -> float:
        return self._value


@dataclass(frozen=True)
class BaselinePolicyFactory:
    """Summary: Factory for selecting the baseline policy from configuration.

    Importance: Keeps policy selection logic centralized.
    Alternatives: Wire policies manually at the application entrypoint.
    """

    config: AppConfig

    def build(self) -> BaselinePolicy:
        """Summary: Construct the configured baseline policy.

        Importance: Ensures consistent scoring behavior across services.
        Alternatives: Use dependency injection frameworks.
        """

        if self.config.baseline_policy == "fixed":
            return FixedBaseline(self.config.baseline_value)
        if self.config.baseline_policy == "seeded":
            if self.config.baseline_seed is None:
                raise ValueError("SMARTTODO_BASELINE_SEED is required for seeded baseline")
            return SeededBaseline(self.config.baseline_seed)
        if self.config.baseline_policy != "random":
            raise ValueError(f"Unknown baseline policy: {self.config.baseline_policy}")
        return RandomBaseline()
