"""
Tests for the five sub-scorers.
"""

from datetime import timedelta

import pytest

from models.scorers import (
    ActivityScorer,
    LocationScorer,
    LocationStrategy,
    MutualBenefitScorer,
    ReputationScorer,
    SkillMatchScorer,
    TextLocationStrategy,
    days_between,
)


class TestSkillMatchScorer:
    """Current user's wanted skills against the candidate's offered skills."""

    def test_single_high_priority_expert(self, make_profile):
        current = make_profile(wanted=[("Python", "high")])
        candidate = make_profile(offered=[("Python", "expert")])
        result = SkillMatchScorer().score(current, candidate)
        # 5 base + 3 priority + 4 * 1.5 level compatibility
        assert result.value == 14
        assert len(result.matches) == 1
        assert result.matches[0].points == 14

    def test_case_insensitive(self, make_profile):
        current = make_profile(wanted=[("PYTHON", "low")])
        candidate = make_profile(offered=[("python", "beginner")])
        # 5 + 1 + 1 * 0.5
        assert SkillMatchScorer().score(current, candidate).value == 6.5

    def test_mixed_case_priority_and_level(self, make_profile):
        current = make_profile(wanted=[("Python", "HIGH")])
        candidate = make_profile(offered=[("python", "Expert")])
        # same as lower-case: 5 + 3 + 4 * 1.5
        assert SkillMatchScorer().score(current, candidate).value == 14

    def test_capped_at_twenty(self, make_profile):
        current = make_profile(wanted=[("Python", "high"), ("Go", "high")])
        candidate = make_profile(offered=[("Python", "expert"), ("Go", "expert")])
        result = SkillMatchScorer().score(current, candidate)
        assert result.value == 20
        assert any("Capped" in r for r in result.reasons)

    def test_no_match_is_zero(self, make_profile):
        current = make_profile(wanted=[("Rust", "high")])
        candidate = make_profile(offered=[("Python", "expert")])
        result = SkillMatchScorer().score(current, candidate)
        assert result.value == 0
        assert result.matches == ()

    def test_unknown_priority_and_level_use_defaults(self, make_profile):
        current = make_profile(wanted=[("Python", "urgent")])
        candidate = make_profile(offered=[("Python", "guru")])
        # 5 + 1 (fallback bonus) + 1 * 1
        assert SkillMatchScorer().score(current, candidate).value == 7

    def test_direction_matters(self, make_profile):
        current = make_profile(offered=[("Python", "expert")])
        candidate = make_profile(wanted=[("Python", "high")])
        assert SkillMatchScorer().score(current, candidate).value == 0

    def test_empty_names_never_match(self, make_profile):
        current = make_profile(wanted=[("", "high")])
        candidate = make_profile(offered=[("", "expert")])
        assert SkillMatchScorer().score(current, candidate).value == 0


class TestMutualBenefitScorer:
    """Current user's offered skills against the candidate's wanted skills."""

    def test_single_match(self, make_profile):
        current = make_profile(offered=[("JavaScript", "advanced")])
        candidate = make_profile(wanted=[("JavaScript", "medium")])
        # 8 base + 2 priority + 3 * 1
        assert MutualBenefitScorer().score(current, candidate).value == 13

    def test_mixed_case_priority_and_level(self, make_profile):
        current = make_profile(offered=[("JavaScript", "Advanced")])
        candidate = make_profile(wanted=[("javascript", "Medium")])
        assert MutualBenefitScorer().score(current, candidate).value == 13

    def test_multi_match_bonus(self, make_profile):
        current = make_profile(offered=[("A", "beginner"), ("B", "beginner")])
        candidate = make_profile(wanted=[("a", "low"), ("b", "low")])
        # 2 * (8 + 1 + 0.5) + 5 for the second match
        assert MutualBenefitScorer().score(current, candidate).value == 24

    def test_capped_at_twenty_five(self, make_profile):
        current = make_profile(offered=[("A", "expert"), ("B", "expert"), ("C", "expert")])
        candidate = make_profile(wanted=[("A", "high"), ("B", "high"), ("C", "high")])
        result = MutualBenefitScorer().score(current, candidate)
        assert result.value == 25
        assert len(result.matches) == 3

    def test_high_priority_bonus(self, make_profile):
        current = make_profile(offered=[("Go", "intermediate")])
        candidate = make_profile(wanted=[("Go", "high")])
        # 8 + 4 + 2 * 1.5
        assert MutualBenefitScorer().score(current, candidate).value == 15

    def test_empty_lists(self, make_profile):
        assert MutualBenefitScorer().score(make_profile(), make_profile()).value == 0


class TestReputationScorer:
    """Twice the average rating, capped at 10."""

    @pytest.mark.parametrize("rating,expected", [(5, 10), (4.5, 9), (0, 0), (2.25, 4.5)])
    def test_rating(self, make_profile, rating, expected):
        assert ReputationScorer().score(make_profile(), make_profile(rating=rating)).value == expected

    def test_no_ratings_reason(self, make_profile):
        result = ReputationScorer().score(make_profile(), make_profile(rating=0))
        assert result.reasons == ("No ratings yet",)


class TestActivityScorer:
    """Ten minus whole days since last activity."""

    @pytest.mark.parametrize("days,expected", [(0, 10), (3, 7), (9, 1), (10, 0), (15, 0)])
    def test_days_inactive(self, make_profile, now, days, expected):
        candidate = make_profile(days_inactive=days)
        assert ActivityScorer().score(make_profile(), candidate, now).value == expected

    def test_partial_day_is_floored(self, make_profile, now):
        candidate = make_profile(days_inactive=0)
        later = now + timedelta(days=2, hours=23)
        assert ActivityScorer().score(make_profile(), candidate, later).value == 8

    def test_future_activity_capped(self, make_profile, now):
        candidate = make_profile(days_inactive=-3)
        assert ActivityScorer().score(make_profile(), candidate, now).value == 10

    def test_unknown_last_active(self, make_profile, now):
        candidate = make_profile(days_inactive=None)
        assert ActivityScorer().score(make_profile(), candidate, now).value == 0

    def test_days_between_naive_and_aware(self, now):
        naive = now.replace(tzinfo=None) - timedelta(days=4)
        assert days_between(naive, now) == 4


class TestTextLocationStrategy:
    """Coarse string comparison of City, Region locations."""

    @pytest.mark.parametrize("a,b,expected", [
        ("New York, NY", "New York, NY", 10),
        ("new york, ny", "New York, NY", 10),
        ("New York, NY", "New York", 8),
        ("New York", "New York City, NY", 8),
        ("Brooklyn, NY", "Albany, NY", 5),
        ("Brooklyn, NY", "Austin, TX", 0),
        ("Paris", "Lyon", 0),
        (None, "Paris", 0),
        ("Paris", "", 0),
        (", NY", "Austin, TX", 0),
        ("Austin,", "Dallas,", 0),
    ])
    def test_scores(self, a, b, expected):
        assert TextLocationStrategy().score(a, b) == expected

    def test_region_needs_two_segments(self):
        assert TextLocationStrategy().score("Texas", "Austin, Texas") == 0


class TestLocationScorer:
    """The location factor delegates to a pluggable strategy."""

    def test_default_strategy(self, make_profile):
        a = make_profile(location="New York, NY")
        b = make_profile(location="New York, NY")
        assert LocationScorer().score(a, b).value == 10

    def test_missing_side(self, make_profile):
        a = make_profile(location=None)
        b = make_profile(location="New York, NY")
        assert LocationScorer().score(a, b).value == 0

    def test_custom_strategy(self, make_profile):
        class Always:
            def score(self, a, b):
                return 7.0

        assert isinstance(Always(), LocationStrategy)
        scorer = LocationScorer(Always())
        a = make_profile(location="x")
        b = make_profile(location="y")
        assert scorer.score(a, b).value == 7

    def test_custom_strategy_clamped(self, make_profile):
        class TooGenerous:
            def score(self, a, b):
                return 50

        a = make_profile(location="x")
        b = make_profile(location="y")
        assert LocationScorer(TooGenerous()).score(a, b).value == 10
