"""Summary: Default seed records for never-written collections.

Importance: Gives a first run a populated dashboard instead of empty lists.
Alternatives: Store seed data in JSON fixtures outside the codebase.
"""

from __future__ import annotations

import copy
from typing import Any


DEFAULT_TASKS: list[dict[str, Any]] = [
    {
        "id": "1",
        "title": "Complete project proposal",
        "description": "Draft and finalize the Q4 project proposal for the new mobile app initiative",
        "category": "Work",
        "priority": "high",
        "priorityScore": 85,
        "status": "in-progress",
        "deadline": "2025-01-20",
        "createdAt": "2025-01-15T10:00:00Z",
        "updatedAt": "2025-01-15T10:00:00Z",
        "tags": ["proposal", "mobile", "Q4"],
    },
    {
        "id": "2",
        "title": "Review team performance metrics",
        "description": "Analyze the monthly performance data and prepare feedback for team members",
        "category": "Management",
        "priority": "medium",
        "priorityScore": 65,
        "status": "pending",
        "deadline": "2025-01-18",
        "createdAt": "2025-01-14T09:00:00Z",
        "updatedAt": "2025-01-14T09:00:00Z",
        "tags": ["review", "team", "metrics"],
    },
    {
        "id": "3",
        "title": "Update documentation",
        "description": "Update the API documentation to reflect recent changes in the authentication system",
        "category": "Development",
        "priority": "low",
        "priorityScore": 35,
        "status": "pending",
        "deadline": "2025-01-25",
        "createdAt": "2025-01-13T14:00:00Z",
        "updatedAt": "2025-01-13T14:00:00Z",
        "tags": ["documentation", "API", "auth"],
    },
]

DEFAULT_CONTEXT: list[dict[str, Any]] = [
    {
        "id": "1",
        "content": (
            "Meeting with client tomorrow at 2 PM to discuss project requirements. "
            "Need to prepare presentation slides."
        ),
        "source": "email",
        "timestamp": "2025-01-15T08:30:00Z",
        "processed": True,
        "insights": ["High priority meeting requiring preparation", "Presentation task identified"],
        "relatedTasks": ["1"],
    },
    {
        "id": "2",
        "content": (
            "Urgent: The API documentation needs to be updated before the next release. "
            "Sarah mentioned this in the standup."
        ),
        "source": "notes",
        "timestamp": "2025-01-15T09:15:00Z",
        "processed": True,
        "insights": ["Urgent documentation task", "Team dependency identified"],
        "relatedTasks": ["3"],
    },
    {
        "id": "3",
        "content": (
            "John says the performance review deadline is this Friday. "
            "Make sure to complete the analysis by Thursday."
        ),
        "source": "whatsapp",
        "timestamp": "2025-01-15T11:20:00Z",
        "processed": False,
        "relatedTasks": ["2"],
    },
]

DEFAULT_CATEGORIES: list[dict[str, Any]] = [
    {"id": "1", "name": "Work", "color": "#3B82F6", "usageCount": 5, "description": "Professional tasks and projects"},
    {"id": "2", "name": "Personal", "color": "#10B981", "usageCount": 3, "description": "Personal activities and goals"},
    {"id": "3", "name": "Development", "color": "#8B5CF6", "usageCount": 4, "description": "Coding and technical tasks"},
    {"id": "4", "name": "Management", "color": "#F59E0B", "usageCount": 2, "description": "Leadership and team management"},
    {"id": "5", "name": "Learning", "color": "#EF4444", "usageCount": 1, "description": "Education and skill development"},
    {"id": "6", "name": "Health", "color": "#06B6D4", "usageCount": 2, "description": "Health and wellness activities"},
]


def seed_records(records: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Summary: Return a private copy of a seed set.

    Importance: Callers may mutate what they read without corrupting the seeds.
    Alternatives: Freeze seeds with immutable mappings.
    """

    return copy.deepcopy(records)
