"""Summary: Heuristic insight engine for task scoring and suggestions.

Importance: Provides the inspectable, keyword-driven "AI" behind prioritization and suggestions.
Alternatives: Call an LLM or train a classifier on task history.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Iterable, Union

from smarttodo.baseline import BaselinePolicy, RandomBaseline
from smarttodo.models import (
    AiInsight,
    AiSuggestions,
    ContextEntry,
    InsightType,
    Priority,
    Task,
    TaskDraft,
)


TaskLike = Union[Task, TaskDraft]

MAX_TASK_SUGGESTIONS = 3
DEFAULT_DEADLINE_DAYS = 7
FALLBACK_CATEGORY = "General"

# Order matters: the first matching rule wins.
DEADLINE_RULES: tuple[tuple[tuple[str, ...], int], ...] = (
    (("research", "analysis"), 14),
    (("email", "call"), 2),
    (("meeting", "presentation"), 5),
    (("report", "document"), 10),
)

CATEGORY_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("meeting", "call", "discussion"), "Meetings"),
    (("email", "message", "respond"), "Communication"),
    (("code", "develop", "bug"), "Development"),
    (("research", "study", "learn"), "Research"),
    (("report", "document", "write"), "Documentation"),
    (("review", "test", "check"), "Review"),
)

KEYWORD_BONUSES: tuple[tuple[tuple[str, ...], int], ...] = (
    (("urgent", "critical"), 20),
    (("meeting", "presentation"), 15),
    (("email", "respond"), 10),
)

MEETING_NOTE = "Related to upcoming meeting - ensure preparation is complete."
CLIENT_NOTE = "Client-facing task - maintain professional standards."
DEADLINE_NOTE = "Time-sensitive - monitor deadline closely."
ENHANCED_NOTE = "AI-enhanced description available"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def priority_for_score(score: int) -> Priority:
    """Summary: Map a 0-100 score onto its priority bucket.

    Importance: The bucket is always derived from the score, never set independently.
    Alternatives: Store priority and score separately and reconcile later.
    """

    if score > 80:
        return Priority.CRITICAL
    if score > 60:
        return Priority.HIGH
    if score > 40:
        return Priority.MEDIUM
    return Priority.LOW


def parse_deadline(value: str | None) -> datetime | None:
    """Summary: Parse a calendar date or ISO timestamp into an aware UTC datetime.

    Importance: Bare dates count from UTC midnight, matching how they are stored.
    Alternatives: Reject anything that is not a bare date.
    """

    if not value or not value.strip():
        return None
    text = value.strip()
    try:
        if len(text) == 10:
            parsed_date = date.fromisoformat(text)
            return datetime(parsed_date.year, parsed_date.month, parsed_date.day, tzinfo=timezone.utc)
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _combined_text(task: TaskLike) -> str:
    return f"{task.title or ''} {task.description or ''}".lower()


def _contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class HeuristicInsightEngine:
    """Summary: Deterministic keyword and date rules over tasks and context entries.

    Importance: Every suggestion can be traced back to a visible rule.
    Alternatives: Use an LLM-based assistant for suggestions.

    The engine keeps no state between calls. Randomness, if any, comes only
    from the injected baseline policy; time comes only from the clock.
    """

    baseline: BaselinePolicy = field(default_factory=RandomBaseline)
    clock: Callable[[], datetime] = utc_now

    def days_until(self, deadline: str | None) -> float:
        """Summary: Fractional days from now until a deadline.

        Importance: Malformed or missing deadlines count as due now instead of raising.
        Alternatives: Skip the deadline bonus for unparseable dates.
        """

        parsed = parse_deadline(deadline)
        if parsed is None:
            return 0.0
        return (parsed - self.clock()).total_seconds() / 86400

    def score_priority(self, task: TaskLike) -> int:
        """Summary: Compute a 0-100 priority score for one task.

        Importance: Combines baseline, keyword bonuses, and deadline proximity.
        Alternatives: Rank tasks by deadline alone.
        """

        score = self.baseline.draw()
        text = _combined_text(task)
        for keywords, bonus in KEYWORD_BONUSES:
            if _contains_any(text, keywords):
                score += bonus
        days = self.days_until(task.deadline)
        if days < 1:
            score += 30
        elif days < 3:
            score += 20
        elif days < 7:
            score += 10
        return _round_half_up(min(100.0, max(0.0, score)))

    def prioritize_tasks(
        self, tasks: list[Task], context_entries: list[ContextEntry] | None = None
    ) -> list[Task]:
        """Summary: Rescore every task and sort by score, highest first.

        Importance: Drives bulk reprioritization of the whole task list.
        Alternatives: Rescore only tasks edited since the last pass.

        Context entries are accepted for interface stability but do not
        influence the score. Ties keep their original relative order.
        """

        scored = []
        for task in tasks:
            score = self.score_priority(task)
            scored.append(replace(task, priority_score=score, priority=priority_for_score(score)))
        return sorted(scored, key=lambda item: item.priority_score, reverse=True)

    def suggest_deadline(self, task: TaskLike, context_entries: list[ContextEntry]) -> date:
        """Summary: Suggest a due date from task wording and context urgency.

        Importance: Gives new tasks a sensible default deadline.
        Alternatives: Always default to one week out.
        """

        text = _combined_text(task)
        days = DEFAULT_DEADLINE_DAYS
        for keywords, rule_days in DEADLINE_RULES:
            if _contains_any(text, keywords):
                days = rule_days
                break
        urgent = any(
            _contains_any(entry.content.lower(), ("urgent", "asap")) for entry in context_entries
        )
        if urgent:
            days = math.ceil(days * 0.5)
        return self.clock().date() + timedelta(days=days)

    def suggest_category(self, task: TaskLike, existing_categories: list[str]) -> str:
        """Summary: Suggest a category name from task wording.

        Importance: Speeds up task entry with a reasonable default grouping.
        Alternatives: Require manual category selection.
        """

        text = _combined_text(task)
        for keywords, category in CATEGORY_RULES:
            if _contains_any(text, keywords):
                return category
        if existing_categories:
            return existing_categories[0]
        return FALLBACK_CATEGORY

    def enhance_description(self, task: TaskLike, context_entries: list[ContextEntry]) -> str:
        """Summary: Append context-derived notes to a task description.

        Importance: Surfaces meeting, client, and deadline signals found in related context.
        Alternatives: Show related context entries verbatim.

        An entry is related when its content contains the task title,
        case-insensitively. The notes are checked against the joined
        content of all related entries, as written.
        """

        description = task.description or ""
        title = (task.title or "").lower()
        related = [entry for entry in context_entries if title in entry.content.lower()]
        if not related:
            return description
        contextual_info = " ".join(entry.content for entry in related)
        enhanced = description
        if "meeting" in contextual_info:
            enhanced += f"\n\n{MEETING_NOTE}"
        if _contains_any(contextual_info, ("client", "customer")):
            enhanced += f"\n\n{CLIENT_NOTE}"
        if _contains_any(contextual_info, ("deadline", "due")):
            enhanced += f"\n\n{DEADLINE_NOTE}"
        return enhanced

    def analyze_context(self, entries: list[ContextEntry]) -> list[AiInsight]:
        """Summary: Extract priority and deadline insights from context entries.

        Importance: Annotates ambient notes with what deserves attention.
        Alternatives: Leave context unprocessed until tasks are created.
        """

        insights: list[AiInsight] = []
        for entry in entries:
            content = entry.content.lower()
            if _contains_any(content, ("meeting", "appointment")):
                insights.append(
                    AiInsight(
                        type=InsightType.PRIORITY,
                        confidence=0.85,
                        suggestion="High priority due to meeting context",
                        reasoning="Meeting-related tasks typically require immediate attention",
                    )
                )
            if _contains_any(content, ("urgent", "asap", "immediately")):
                insights.append(
                    AiInsight(
                        type=InsightType.PRIORITY,
                        confidence=0.92,
                        suggestion="Critical priority detected",
                        reasoning="Urgent language indicates immediate action required",
                    )
                )
            if _contains_any(content, ("deadline", "due")):
                insights.append(
                    AiInsight(
                        type=InsightType.DEADLINE,
                        confidence=0.78,
                        suggestion="Consider shorter deadline",
                        reasoning="Explicit deadline mentioned in context",
                    )
                )
        return insights

    def generate_task_suggestions(self, entries: list[ContextEntry]) -> list[TaskDraft]:
        """Summary: Propose up to three draft tasks from context entries.

        Importance: Turns ambient notes into actionable work.
        Alternatives: Ask the user to create every task manually.
        """

        suggestions: list[TaskDraft] = []
        for entry in entries:
            content = entry.content.lower()
            source = entry.source.value
            if "meeting" in content and "scheduled" not in content:
                suggestions.append(
                    TaskDraft(
                        title="Schedule meeting mentioned in context",
                        description=f"Follow up on meeting discussion from {source}",
                        category="Meetings",
                        priority=Priority.MEDIUM,
                    )
                )
            if "email" in content and "respond" in content:
                suggestions.append(
                    TaskDraft(
                        title="Respond to important email",
                        description=f"Reply to email mentioned in {source} context",
                        category="Communication",
                        priority=Priority.HIGH,
                    )
                )
            if _contains_any(content, ("deadline", "due")):
                suggestions.append(
                    TaskDraft(
                        title="Review upcoming deadline",
                        description="Check and prepare for deadline mentioned in context",
                        category="Review",
                        priority=Priority.HIGH,
                    )
                )
        return suggestions[:MAX_TASK_SUGGESTIONS]

    def suggest_for_draft(
        self,
        task: TaskLike,
        context_entries: list[ContextEntry],
        existing_categories: list[str],
    ) -> AiSuggestions:
        """Summary: Bundle category, deadline, and description suggestions for a draft.

        Importance: One call backs the live suggestion panel of the task editor.
        Alternatives: Let the caller invoke each suggestion separately.
        """

        enhanced = self.enhance_description(task, context_entries)
        changed = enhanced != (task.description or "")
        return AiSuggestions(
            enhanced_description=enhanced if changed else None,
            suggested_category=self.suggest_category(task, existing_categories),
            suggested_deadline=self.suggest_deadline(task, context_entries).isoformat(),
            contextual_notes=(ENHANCED_NOTE,) if changed else (),
        )
