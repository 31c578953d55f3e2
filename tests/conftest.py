"""
Pytest configuration and shared fixtures.
"""

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

from models.profile import UserProfile
from models.skills import OfferedSkill, WantedSkill


NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    """Fixed evaluation time."""
    return NOW


@pytest.fixture
def make_profile() -> Callable[..., UserProfile]:
    """Build a UserProfile from short skill tuples.

    offered: [(name, level)], wanted: [(name, priority)]
    """
    def _make(
        user_id: str = "u",
        offered=(),
        wanted=(),
        rating: float = 0.0,
        days_inactive: int | None = 0,
        location: str | None = None,
        **extra: Any,
    ) -> UserProfile:
        return UserProfile(
            id=user_id,
            skills_offered=tuple(OfferedSkill(n, lvl) for n, lvl in offered),
            skills_wanted=tuple(WantedSkill(n, pri) for n, pri in wanted),
            average_rating=rating,
            last_active_at=None if days_inactive is None else NOW - timedelta(days=days_inactive),
            location=location,
            **extra,
        )

    return _make


@pytest.fixture
def scenario_users(make_profile):
    """Current user and candidate from the documented scoring walkthrough."""
    current = make_profile(
        "me",
        offered=[("JavaScript", "advanced")],
        wanted=[("Python", "high")],
        location="New York, NY",
    )
    candidate = make_profile(
        "them",
        offered=[("Python", "expert")],
        wanted=[("JavaScript", "medium")],
        rating=5,
        days_inactive=15,
        location="New York, NY",
    )
    return current, candidate


@pytest.fixture
def raw_profiles() -> list:
    """User documents as exported by the platform (camelCase keys)."""
    def _iso(days_ago: int) -> str:
        return (NOW - timedelta(days=days_ago)).isoformat()

    return [
        {
            "_id": "u1",
            "name": "Priya",
            "location": "New York, NY",
            "skillsOffered": [{"name": "JavaScript", "level": "advanced"}],
            "skillsWanted": [{"name": "Python", "priority": "high"}],
            "averageRating": 4.5,
            "joinedAt": _iso(300),
            "lastActive": _iso(1),
        },
        {
            "_id": "u2",
            "name": "Marco",
            "location": "Brooklyn, NY",
            "skillsOffered": [{"name": "Python", "level": "expert"}],
            "skillsWanted": [{"name": "JavaScript", "priority": "medium"}],
            "availability": {"weekdays": True, "weekends": False, "evenings": False, "mornings": True},
            "averageRating": 5,
            "joinedAt": _iso(100),
            "lastActive": _iso(0),
        },
        {
            "_id": "u3",
            "name": "Aiko",
            "location": "Austin, TX",
            "skillsOffered": [{"name": "python", "level": "beginner"}],
            "skillsWanted": [],
            "averageRating": 3,
            "joinedAt": _iso(10),
            "lastActive": _iso(20),
        },
        {
            "_id": "u4",
            "name": "Lena",
            "profileType": "private",
            "skillsOffered": [{"name": "Python", "level": "expert"}],
            "skillsWanted": [],
            "averageRating": 4,
        },
        {
            "_id": "u5",
            "name": "Sam",
            "isBanned": True,
            "skillsOffered": [{"name": "Python", "level": "expert"}],
            "skillsWanted": [],
        },
        {
            "_id": "u6",
            "name": "Noor",
            "isActive": False,
            "skillsOffered": [{"name": "Python", "level": "expert"}],
            "skillsWanted": [],
        },
    ]


@pytest.fixture
def profiles_file(tmp_path, raw_profiles) -> Path:
    """Write the sample user documents to a temporary JSON file."""
    path = tmp_path / "profiles.json"
    path.write_text(json.dumps(raw_profiles, indent=2))
    return path
