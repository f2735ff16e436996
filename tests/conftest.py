"""Shared pytest fixtures for Sympatico tests."""
import pytest

from sympatico.schemas import (
    MatchVirtueCompatibility,
    RealmScores,
    UserVirtueProfile,
    VirtueScore,
)
from sympatico.services.virtue_registry import VIRTUES


def _scores_from_dict(values):
    """Convert a {virtue_id: score} dict to a list of VirtueScore."""
    return [VirtueScore(virtue_id=vid, score=score) for vid, score in values.items()]


@pytest.fixture
def make_scores():
    return _scores_from_dict


@pytest.fixture
def make_profile():
    def _make(values):
        return UserVirtueProfile(scores=_scores_from_dict(values))
    return _make


@pytest.fixture
def neutral_values():
    """Every virtue at the neutral midpoint."""
    return {v.id: 50 for v in VIRTUES}


@pytest.fixture
def neutral_profile(neutral_values):
    return UserVirtueProfile(scores=_scores_from_dict(neutral_values))


@pytest.fixture
def sample_user_values():
    """A realistic self-reported profile."""
    return {
        "vitality": 72,
        "lust": 65,
        "play": 40,
        "warmth": 80,
        "voice": 35,
        "space": 30,
        "anchor": 55,
        "wit": 70,
        "drive": 60,
        "curiosity": 75,
        "soul": 45,
    }


@pytest.fixture
def sample_user_profile(sample_user_values):
    return UserVirtueProfile(scores=_scores_from_dict(sample_user_values))


@pytest.fixture
def make_result():
    """Build a MatchVirtueCompatibility with chosen tallies and score."""
    def _make(danger=0, friction=0, sympatico=11, overall=80):
        return MatchVirtueCompatibility(
            scores=[],
            compatibility=[],
            realm_scores=RealmScores(biological=overall, emotional=overall, cerebral=overall),
            overall_score=overall,
            danger_count=danger,
            friction_count=friction,
            sympatico_count=sympatico,
            critical_issues=[],
        )
    return _make
