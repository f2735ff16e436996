"""Unit tests for the match aggregator - tallies, realm scores and penalties."""
from unittest.mock import MagicMock, patch

import pytest

from sympatico.config import MIN_DANGER_PENALTY, Settings
from sympatico.schemas.virtue import CompatibilityVerdict, UserVirtueProfile, VirtueScore
from sympatico.services.compatibility_service import calculate_match_compatibility
from sympatico.services.virtue_registry import VIRTUES


def _with(values, **overrides):
    merged = dict(values)
    merged.update(overrides)
    return merged


class TestCompleteness:
    """The result always covers all 11 virtues."""

    def test_empty_inputs(self):
        """Empty inputs still yield one comparison per virtue."""
        result = calculate_match_compatibility(UserVirtueProfile(), [])
        assert len(result.compatibility) == 11
        assert result.danger_count + result.friction_count + result.sympatico_count == 11
        assert result.critical_issues == []

    def test_empty_inputs_default_to_neutral(self):
        """Missing scores on both sides default to 50."""
        result = calculate_match_compatibility(UserVirtueProfile(), [])
        assert all(c.user_score == 50 and c.match_score == 50 for c in result.compatibility)
        assert all(c.delta == 0 for c in result.compatibility)

    def test_registry_order(self, sample_user_profile, make_scores):
        """Comparisons follow registry order, not input order."""
        match = make_scores({"soul": 20, "vitality": 60, "space": 35})
        result = calculate_match_compatibility(sample_user_profile, match)
        assert [c.virtue_id for c in result.compatibility] == [v.id for v in VIRTUES]

    def test_partial_match_scores(self, sample_user_profile, make_scores):
        """Virtues absent from the match list default to neutral."""
        result = calculate_match_compatibility(
            sample_user_profile, make_scores({"warmth": 85})
        )
        by_id = {c.virtue_id: c for c in result.compatibility}
        assert by_id["warmth"].match_score == 85
        assert by_id["drive"].match_score == 50
        assert by_id["drive"].user_score == 60
        assert result.danger_count + result.friction_count + result.sympatico_count == 11

    def test_unknown_ids_ignored(self, neutral_profile, make_scores):
        """Ids outside the registry do not affect the result."""
        baseline = calculate_match_compatibility(neutral_profile, [])
        noisy = calculate_match_compatibility(
            neutral_profile, make_scores({"charisma": 0, "Space": 100})
        )
        assert noisy.compatibility == baseline.compatibility
        assert noisy.overall_score == baseline.overall_score

    def test_scores_echoed_back(self, neutral_profile, make_scores):
        """The match's input scores are echoed unchanged."""
        match = make_scores({"charisma": 10, "wit": 70})
        result = calculate_match_compatibility(neutral_profile, match)
        assert [s.virtue_id for s in result.scores] == ["charisma", "wit"]
        assert result.scores == match

    def test_first_duplicate_wins(self, neutral_profile):
        """The first score for a duplicated id is used."""
        match = [
            VirtueScore(virtue_id="wit", score=60),
            VirtueScore(virtue_id="wit", score=0),
        ]
        result = calculate_match_compatibility(neutral_profile, match)
        wit = next(c for c in result.compatibility if c.virtue_id == "wit")
        assert wit.match_score == 60

    def test_match_evidence_becomes_note(self, neutral_profile):
        """Match evidence becomes the comparison note."""
        match = [VirtueScore(virtue_id="lust", score=55, evidence="Bio says 'slow burn'")]
        result = calculate_match_compatibility(neutral_profile, match)
        lust = next(c for c in result.compatibility if c.virtue_id == "lust")
        assert lust.note == "Bio says 'slow burn'"


class TestTallies:
    """Verdict counts."""

    def test_identical_profiles(self, neutral_profile, neutral_values, make_scores):
        """Identical scores are sympatico except the medium-magic virtues."""
        result = calculate_match_compatibility(neutral_profile, make_scores(neutral_values))
        # play and anchor are medium_magic: identical scores are "too similar"
        assert result.friction_count == 2
        assert result.sympatico_count == 9
        assert result.danger_count == 0

    def test_three_dangers(self, neutral_profile, neutral_values, make_scores):
        """Tallies add up to 11."""
        match = make_scores(_with(neutral_values, vitality=90, lust=90, wit=90))
        result = calculate_match_compatibility(neutral_profile, match)
        assert result.danger_count == 3
        assert result.friction_count == 2
        assert result.sympatico_count == 6


class TestCriticalIssues:
    """Only the critical virtue populates critical_issues."""

    def test_space_danger_flagged(self, make_profile, neutral_values, make_scores):
        """A Space danger produces one critical issue naming both poles."""
        user = make_profile(_with(neutral_values, space=10))
        match = make_scores(_with(neutral_values, space=80))
        result = calculate_match_compatibility(user, match)

        space = next(c for c in result.compatibility if c.virtue_id == "space")
        assert space.delta == 70
        assert space.verdict is CompatibilityVerdict.DANGER
        assert "CRITICAL" in space.note
        assert result.critical_issues == [
            "Space mismatch: You lean Merged (10), they lean Autonomous (80)."
        ]

    def test_non_critical_danger_not_listed(self, neutral_profile, neutral_values, make_scores):
        """Non-critical dangers never reach critical_issues."""
        match = make_scores(_with(neutral_values, vitality=95, voice=0))
        result = calculate_match_compatibility(neutral_profile, match)
        assert result.danger_count == 2
        assert result.critical_issues == []

    def test_space_friction_not_listed(self, make_profile, neutral_values, make_scores):
        """Space friction is not a critical issue."""
        user = make_profile(_with(neutral_values, space=50))
        match = make_scores(_with(neutral_values, space=70))
        result = calculate_match_compatibility(user, match)
        assert result.critical_issues == []


class TestRealmScores:
    """Per-realm rollups."""

    def test_identical_profiles_near_max(self, neutral_profile, neutral_values, make_scores):
        """Identical profiles score close to 100 in every realm."""
        result = calculate_match_compatibility(neutral_profile, make_scores(neutral_values))
        assert result.realm_scores.cerebral == 100
        assert result.realm_scores.biological >= 90
        assert result.realm_scores.emotional >= 90

    def test_danger_depresses_its_realm(self, neutral_profile, neutral_values, make_scores):
        """A danger lowers only its own realm."""
        baseline = calculate_match_compatibility(neutral_profile, make_scores(neutral_values))
        danger = calculate_match_compatibility(
            neutral_profile, make_scores(_with(neutral_values, wit=95))
        )
        assert danger.realm_scores.cerebral < baseline.realm_scores.cerebral
        assert danger.realm_scores.biological == baseline.realm_scores.biological
        assert danger.realm_scores.emotional == baseline.realm_scores.emotional

    def test_complementary_gap_scores_best(self, neutral_profile, neutral_values, make_scores):
        """A complementary medium-magic gap beats identical scores."""
        similar = calculate_match_compatibility(neutral_profile, make_scores(neutral_values))
        complementary = calculate_match_compatibility(
            neutral_profile, make_scores(_with(neutral_values, play=75))
        )
        assert complementary.realm_scores.biological > similar.realm_scores.biological

    def test_bounded(self, make_profile, make_scores):
        """Realm scores stay within 0-100."""
        user = make_profile({v.id: 0 for v in VIRTUES})
        match = make_scores({v.id: 100 for v in VIRTUES})
        result = calculate_match_compatibility(user, match)
        for score in result.realm_scores.model_dump().values():
            assert 0 <= score <= 100


class TestOverallScore:
    """Penalty ordering for the overall score."""

    def test_identical_profiles_score_high(self, neutral_profile, neutral_values, make_scores):
        """Identical profiles score 86."""
        result = calculate_match_compatibility(neutral_profile, make_scores(neutral_values))
        assert result.overall_score == 86

    def test_three_dangers_below_50(self, neutral_profile, neutral_values, make_scores):
        """Three dangers pull the overall score below 50."""
        identical = calculate_match_compatibility(neutral_profile, make_scores(neutral_values))
        dangerous = calculate_match_compatibility(
            neutral_profile, make_scores(_with(neutral_values, vitality=90, lust=90, wit=90))
        )
        assert dangerous.overall_score < 50
        assert dangerous.overall_score < identical.overall_score

    def test_more_dangers_score_lower(self, neutral_profile, neutral_values, make_scores):
        """Each extra danger lowers the overall score."""
        one = calculate_match_compatibility(
            neutral_profile, make_scores(_with(neutral_values, vitality=90))
        )
        two = calculate_match_compatibility(
            neutral_profile, make_scores(_with(neutral_values, vitality=90, lust=90))
        )
        assert two.overall_score < one.overall_score

    def test_danger_costs_more_than_friction(self, neutral_profile, neutral_values, make_scores):
        """A danger costs more than a friction on the same virtue."""
        friction = calculate_match_compatibility(
            neutral_profile, make_scores(_with(neutral_values, voice=75))
        )
        danger = calculate_match_compatibility(
            neutral_profile, make_scores(_with(neutral_values, voice=85))
        )
        assert friction.friction_count == 3
        assert danger.danger_count == 1
        assert danger.overall_score < friction.overall_score

    def test_critical_danger_costs_more(self, make_profile, neutral_values, make_scores):
        """Space and Voice share a realm; the same 70-point gap hurts more on Space."""
        critical = calculate_match_compatibility(
            make_profile(_with(neutral_values, space=10)),
            make_scores(_with(neutral_values, space=80)),
        )
        plain = calculate_match_compatibility(
            make_profile(_with(neutral_values, voice=10)),
            make_scores(_with(neutral_values, voice=80)),
        )
        assert critical.danger_count == plain.danger_count == 1
        assert critical.overall_score < plain.overall_score

    def test_never_negative(self, make_profile, make_scores):
        """The overall score is clamped at 0."""
        user = make_profile({v.id: 0 for v in VIRTUES})
        match = make_scores({v.id: 100 for v in VIRTUES})
        result = calculate_match_compatibility(user, match)
        assert result.overall_score == 0

    def test_penalties_come_from_settings(self, neutral_profile, neutral_values, make_scores):
        """Penalties are read from settings."""
        match = make_scores(_with(neutral_values, vitality=90))
        default = calculate_match_compatibility(neutral_profile, match)

        with patch("sympatico.services.compatibility_service.get_settings") as mock:
            settings = MagicMock()
            settings.NEUTRAL_SCORE = 50.0
            settings.DANGER_PENALTY = 30.0
            settings.FRICTION_PENALTY = 5.0
            settings.CRITICAL_DANGER_PENALTY = 10.0
            mock.return_value = settings
            harsher = calculate_match_compatibility(neutral_profile, match)

        assert harsher.overall_score == default.overall_score - 15

    def test_three_minimum_gap_dangers_below_50(self, neutral_profile, neutral_values, make_scores):
        """One smallest-gap danger per realm, everything else sympatico."""
        match = make_scores(
            _with(neutral_values, vitality=85, voice=85, wit=85, play=70, anchor=70)
        )
        result = calculate_match_compatibility(neutral_profile, match)
        assert result.danger_count == 3
        assert result.sympatico_count == 8
        assert result.realm_scores.model_dump() == {
            "biological": 77,
            "emotional": 82,
            "cerebral": 82,
        }
        assert result.overall_score == 35

    def test_worst_case_three_dangers_at_penalty_floor(
        self, neutral_profile, neutral_values, make_scores
    ):
        """The highest realm mean three dangers allow still lands below 50."""
        match = make_scores(
            _with(neutral_values, warmth=80, anchor=90, wit=85, play=70)
        )
        default = calculate_match_compatibility(neutral_profile, match)
        assert default.danger_count == 3
        assert default.realm_scores.model_dump() == {
            "biological": 100,
            "emotional": 70,
            "cerebral": 82,
        }
        assert default.overall_score == 39

        with patch("sympatico.services.compatibility_service.get_settings") as mock:
            mock.return_value = Settings(DANGER_PENALTY=MIN_DANGER_PENALTY)
            lenient = calculate_match_compatibility(neutral_profile, match)

        assert lenient.overall_score == 48


class TestPurity:
    """Repeated calls give equal, independent results."""

    def test_idempotent(self, sample_user_profile, make_scores):
        """Repeated calls return equal but distinct results."""
        match = make_scores({"space": 90, "play": 70, "drive": 5})
        first = calculate_match_compatibility(sample_user_profile, match)
        second = calculate_match_compatibility(sample_user_profile, match)
        assert first == second
        assert first is not second
        assert first.model_dump() == second.model_dump()

    def test_does_not_mutate_inputs(self, sample_user_profile, make_scores):
        """Inputs are left untouched."""
        match = make_scores({"space": 90})
        before_user = sample_user_profile.model_dump()
        before_match = [s.model_dump() for s in match]
        calculate_match_compatibility(sample_user_profile, match)
        assert sample_user_profile.model_dump() == before_user
        assert [s.model_dump() for s in match] == before_match
