"""
Tests for profile parsing and availability resolution.
"""

from datetime import datetime, timezone

import pytest

from models.profile import Availability, AvailabilitySlot, UserProfile, parse_timestamp


class TestAvailability:
    """Availability slots resolve through a fixed mapping."""

    def test_defaults(self):
        a = Availability()
        assert a.allows(AvailabilitySlot.WEEKENDS)
        assert a.allows(AvailabilitySlot.EVENINGS)
        assert not a.allows(AvailabilitySlot.WEEKDAYS)
        assert not a.allows(AvailabilitySlot.MORNINGS)

    def test_string_slot(self):
        assert Availability(mornings=True).allows("mornings")

    def test_unknown_slot_rejected(self):
        with pytest.raises(ValueError):
            Availability().allows("notes")

    def test_from_partial_dict(self):
        a = Availability.from_dict({"weekdays": True})
        assert a.weekdays and a.weekends and a.evenings and not a.mornings


class TestParseTimestamp:
    """Timestamps from strings, datetimes and epoch milliseconds."""

    def test_iso_with_zulu(self):
        ts = parse_timestamp("2026-10-01T12:00:00Z")
        assert ts == datetime(2026, 10, 1, 12, tzinfo=timezone.utc)

    def test_naive_datetime_is_utc(self):
        ts = parse_timestamp(datetime(2026, 1, 1))
        assert ts.tzinfo is not None
        assert ts == datetime(2026, 1, 1, tzinfo=timezone.utc)

    def test_epoch_millis(self):
        assert parse_timestamp(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", [None, "", "yesterday", float("nan")])
    def test_unparseable(self, value):
        assert parse_timestamp(value) is None


class TestUserProfileFromDict:
    """Document-store keys and snake_case keys both parse."""

    def test_camel_case_document(self):
        profile = UserProfile.from_dict({
            "_id": "abc",
            "name": "Marco",
            "location": " New York, NY ",
            "skillsOffered": [{"name": "Python", "level": "expert"}],
            "skillsWanted": [{"name": "JavaScript", "priority": "medium"}],
            "averageRating": 4.5,
            "totalRatings": 10,
            "lastActive": "2026-10-17T00:00:00Z",
            "profileType": "Private",
            "isBanned": True,
        })
        assert profile.id == "abc"
        assert profile.location == "New York, NY"
        assert profile.skills_offered[0].level == "expert"
        assert profile.skills_wanted[0].priority == "medium"
        assert profile.average_rating == 4.5
        assert profile.total_ratings == 10
        assert profile.last_active_at.day == 17
        assert not profile.is_public
        assert profile.is_banned

    def test_snake_case_document(self):
        profile = UserProfile.from_dict({
            "id": "x",
            "skills_offered": [{"name": "Go"}],
            "average_rating": 3,
        })
        assert profile.skills_offered[0].name == "Go"
        assert profile.skills_wanted == ()
        assert profile.average_rating == 3.0
        assert profile.is_public and profile.is_active and not profile.is_banned

    def test_rating_clamped_to_range(self):
        assert UserProfile.from_dict({"id": "a", "averageRating": 9}).average_rating == 5.0
        assert UserProfile.from_dict({"id": "a", "averageRating": -2}).average_rating == 0.0
        assert UserProfile.from_dict({"id": "a", "averageRating": "n/a"}).average_rating == 0.0

    def test_blank_location_is_none(self):
        assert UserProfile.from_dict({"id": "a", "location": "   "}).location is None

    def test_non_dict_skill_entries_skipped(self):
        profile = UserProfile.from_dict({"id": "a", "skillsOffered": ["Python", {"name": "Go"}]})
        assert [s.name for s in profile.skills_offered] == ["Go"]
