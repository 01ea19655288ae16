"""Summary: Tests for baseline policies.

Importance: Ensures each policy draws in range and the factory honors configuration.
Alternatives: Test scoring only with the default random policy.
"""

from __future__ import annotations

from dataclasses import replace

import pytest

from smarttodo.baseline import (
    BaselinePolicyFactory,
    FixedBaseline,
    RandomBaseline,
    SeededBaseline,
)
from tests.helpers import build_config


def test_random_baseline_stays_in_range() -> None:
    policy = RandomBaseline()
    draws = [policy.draw() for _ in range(200)]
    assert all(0 <= value < 100 for value in draws)


def test_seeded_baseline_repeats_sequence() -> None:
    """Summary: Verify two policies with the same seed agree.

    Importance: Reproducible scoring depends on a repeatable sequence.
    Alternatives: Snapshot scores to disk.
    """

    first = SeededBaseline(42)
    second = SeededBaseline(42)
    assert [first.draw() for _ in range(5)] == [second.draw() for _ in range(5)]


def test_fixed_baseline_validates_range() -> None:
    assert FixedBaseline(12.5).draw() == 12.5
    with pytest.raises(ValueError):
        FixedBaseline(100.0)
    with pytest.raises(ValueError):
        FixedBaseline(-1.0)


def test_factory_builds_configured_policy(tmp_path) -> None:
    """Summary: Verify the factory maps policy names to implementations.

    Importance: Confirms configuration switches scoring behavior.
    Alternatives: Wire the policy manually in every entrypoint.
    """

    config = build_config(str(tmp_path / "test.db"))
    fixed = BaselinePolicyFactory(config).build()
    assert isinstance(fixed, FixedBaseline)
    assert fixed.draw() == 50.0

    seeded = BaselinePolicyFactory(replace(config, baseline_policy="seeded", baseline_seed=3)).build()
    assert isinstance(seeded, SeededBaseline)
    assert isinstance(
        BaselinePolicyFactory(replace(config, baseline_policy="random")).build(), RandomBaseline
    )


def test_factory_rejects_bad_configuration(tmp_path) -> None:
    config = build_config(str(tmp_path / "test.db"))
    with pytest.raises(ValueError, match="SMARTTODO_BASELINE_SEED"):
        BaselinePolicyFactory(replace(config, baseline_policy="seeded")).build()
    with pytest.raises(ValueError, match="Unknown baseline policy"):
        BaselinePolicyFactory(replace(config, baseline_policy="gpt")).build()
