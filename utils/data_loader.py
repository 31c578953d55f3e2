"""
utils/data_loader.py
────────────────────
Loads and caches user profiles from the JSON export of the platform's
user collection (a list of user documents).

The store is read once per process and never mutated afterwards.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable

import pandas as pd

from config.settings import get_settings
from models.filters import CandidateFilter, SortKey, is_visible, sort_profiles
from models.profile import UserProfile
from utils.logger import get_logger

logger = get_logger("store")


def _none_if_missing(value: Any) -> Any:
    if isinstance(value, (list, dict)):
        return value
    return None if pd.isna(value) else value


def read_profile_records(path: str | Path) -> list[dict[str, Any]]:
    """Read the raw user documents, one dict per user."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(
            f"Profile data not found at {path}. "
            "Place profiles.json inside the ./data/ folder or set PROFILES_FILE."
        )

    logger.info(f"Loading profiles from {path}")
    df = pd.read_json(path, orient="records", dtype=False, convert_dates=False)
    if df.empty:
        return []
    records = [
        {key: _none_if_missing(value) for key, value in row.items()}
        for row in df.to_dict(orient="records")
    ]
    logger.info(f"Profiles file: {len(records)} rows × {len(df.columns)} columns")
    return records


class ProfileStore:
    """In-memory, read-only profile collection with the platform's visibility rules."""

    def __init__(self, profiles: Iterable[UserProfile]) -> None:
        self._profiles: list[UserProfile] = []
        self._by_id: dict[str, UserProfile] = {}
        for profile in profiles:
            if not profile.id:
                logger.warning("Skipping profile without an id")
                continue
            if profile.id in self._by_id:
                logger.warning(f"Duplicate profile id '{profile.id}' — keeping the first")
                continue
            self._profiles.append(profile)
            self._by_id[profile.id] = profile

    @classmethod
    def from_file(cls, path: str | Path) -> "ProfileStore":
        return cls(UserProfile.from_dict(record) for record in read_profile_records(path))

    def __len__(self) -> int:
        return len(self._profiles)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._by_id

    def get(self, user_id: str) -> UserProfile:
        try:
            return self._by_id[str(user_id)]
        except KeyError:
            raise KeyError(f"User '{user_id}' not found") from None

    def visible_candidates(
        self, exclude_id: str, filters: CandidateFilter | None = None
    ) -> list[UserProfile]:
        """Everyone but ``exclude_id`` who is public, active and not banned, in file order."""
        candidates = [p for p in self._profiles if p.id != exclude_id and is_visible(p)]
        if filters is not None:
            candidates = filters.apply(candidates)
        return candidates

    def browse(
        self,
        exclude_id: str,
        filters: CandidateFilter | None = None,
        sort_by: SortKey = SortKey.AVERAGE_RATING,
    ) -> list[UserProfile]:
        return sort_profiles(self.visible_candidates(exclude_id, filters), sort_by)

    def offered_skill_names(self) -> list[str]:
        """Distinct offered skill names across visible users, sorted."""
        names = {
            skill.name
            for profile in self._profiles
            if is_visible(profile)
            for skill in profile.skills_offered
            if skill.name
        }
        return sorted(names)


@lru_cache(maxsize=1)
def get_profile_store() -> ProfileStore:
    settings = get_settings()
    store = ProfileStore.from_file(settings.profiles_path)
    logger.info(f"Profile store ready — {len(store):,} users")
    return store
