"""
Sympatico - Legacy aspect migration

Profiles scored under the retired 23 Aspects taxonomy (realms vitality,
connection, structure) are folded onto the 11 virtues with a weighted
mapping.  A negative weight is an inverse mapping: the aspect score is
flipped (``100 - score``) and the absolute weight is used, e.g. high
spontaneity means a low anchor.

Each virtue score is the weighted mean of its contributing aspects, rounded
half up; a virtue with no contributing aspect falls back to the neutral score.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import structlog

from sympatico.config import get_settings
from sympatico.schemas.migration import (
    AspectScore,
    MatchAspectScores,
    MigrationStatus,
    UserAspectProfile,
)
from sympatico.schemas.virtue import (
    MatchVirtueCompatibility,
    RealmSummary,
    UserVirtueProfile,
    VirtueScore,
)
from sympatico.services.compatibility_service import calculate_match_compatibility
from sympatico.services.virtue_registry import VIRTUES

logger = structlog.get_logger("sympatico.migration_service")

# ──────────────────────────────────────────────────────────────────────────────
# Aspect -> virtue mapping: aspect_id -> [(virtue_id, weight), ...]
# ──────────────────────────────────────────────────────────────────────────────

ASPECT_TO_VIRTUE_MAP: dict[str, list[tuple[str, float]]] = {
    # Vitality realm
    "vigor": [("vitality", 1.0)],
    "adventure": [("vitality", 0.5), ("curiosity", 0.5)],
    "play": [("play", 1.0)],
    "sensuality": [("lust", 1.0)],
    "presence": [("warmth", 0.5), ("anchor", 0.5)],
    "spontaneity": [("anchor", -1.0)],
    "grit": [("drive", 0.7), ("vitality", 0.3)],
    # Connection realm
    "devotion": [("warmth", 0.5), ("space", -0.5)],
    "autonomy": [("space", 1.0)],
    "empathy": [("warmth", 0.7), ("soul", 0.3)],
    "directness": [("voice", 1.0)],
    "wit": [("wit", 1.0)],
    "vulnerability": [("warmth", 0.8), ("voice", 0.2)],
    "grace": [("voice", -0.3), ("warmth", 0.3)],
    "tribe": [("space", -0.5)],
    # Structure realm
    "sanctuary": [("anchor", 0.5)],
    "curiosity": [("curiosity", 1.0)],
    "aesthetic": [("curiosity", 0.3), ("soul", 0.3)],
    "ambition": [("drive", 1.0)],
    "order": [("anchor", 1.0)],
    "protection": [("anchor", 0.3)],
    "tradition": [("curiosity", -0.5), ("soul", 0.3)],
    "purpose": [("soul", 1.0), ("drive", 0.3)],
}

# Aspects that only partially survive the mapping
UNMAPPED_ASPECTS: tuple[str, ...] = (
    "presence",
    "grace",
    "tribe",
    "sanctuary",
    "aesthetic",
    "protection",
    "tradition",
)

MIN_ASPECTS_FOR_MIGRATION = 10


@dataclass
class _Accumulator:
    total: float = 0.0
    weight: float = 0.0
    evidence: list[str] = field(default_factory=list)


# ── Public API ───────────────────────────────────────────────────────────────

def migrate_aspect_profile_to_virtues(
    aspect_profile: UserAspectProfile,
) -> UserVirtueProfile:
    """Convert a user's 23 Aspects profile into an 11 Virtues profile."""
    accumulators = _accumulate(aspect_profile.scores)
    neutral = get_settings().NEUTRAL_SCORE

    scores: list[VirtueScore] = []
    for virtue in VIRTUES:
        acc = accumulators[virtue.id]
        if acc.weight > 0:
            related = [
                aspect_id
                for aspect_id, mappings in ASPECT_TO_VIRTUE_MAP.items()
                if any(virtue_id == virtue.id for virtue_id, _ in mappings)
            ]
            scores.append(
                VirtueScore(
                    virtue_id=virtue.id,
                    score=_round_half_up(acc.total / acc.weight),
                    evidence=f"Migrated from: {', '.join(related)}",
                )
            )
        else:
            scores.append(
                VirtueScore(
                    virtue_id=virtue.id,
                    score=neutral,
                    evidence="Insufficient data - defaulted to neutral",
                )
            )

    legacy = aspect_profile.realm_summary
    realm_summary = RealmSummary(
        biological=(legacy.vitality if legacy else "") or "Migrated from Vitality realm",
        emotional=(legacy.connection if legacy else "") or "Migrated from Connection realm",
        cerebral=(legacy.structure if legacy else "") or "Migrated from Structure realm",
    )

    logger.info(
        "migration.profile_migrated",
        aspect_count=len(aspect_profile.scores),
        neutral_virtues=[v.id for v in VIRTUES if accumulators[v.id].weight == 0],
    )
    return UserVirtueProfile(scores=scores, realm_summary=realm_summary)


def migrate_aspect_scores_to_virtues(
    aspect_scores: MatchAspectScores,
    user_profile: UserVirtueProfile,
) -> MatchVirtueCompatibility:
    """Convert a match's aspect scores and compare them with *user_profile*.

    The first piece of aspect evidence that contributed to a virtue is
    carried over as that virtue's evidence.
    """
    accumulators = _accumulate(aspect_scores.scores)
    neutral = get_settings().NEUTRAL_SCORE

    match_scores = [
        VirtueScore(
            virtue_id=virtue.id,
            score=(
                _round_half_up(
                    accumulators[virtue.id].total / accumulators[virtue.id].weight
                )
                if accumulators[virtue.id].weight > 0
                else neutral
            ),
            evidence=(
                accumulators[virtue.id].evidence[0]
                if accumulators[virtue.id].evidence
                else None
            ),
        )
        for virtue in VIRTUES
    ]

    logger.info("migration.match_scores_migrated", aspect_count=len(aspect_scores.scores))
    return calculate_match_compatibility(user_profile, match_scores)


def can_migrate_aspect_profile(aspect_profile: UserAspectProfile | None) -> bool:
    if aspect_profile is None:
        return False
    return len(aspect_profile.scores) >= MIN_ASPECTS_FOR_MIGRATION


def can_migrate_aspect_scores(aspect_scores: MatchAspectScores | None) -> bool:
    if aspect_scores is None:
        return False
    return len(aspect_scores.scores) >= MIN_ASPECTS_FOR_MIGRATION


def get_migration_status(
    has_virtue_profile: bool, has_aspect_profile: bool
) -> MigrationStatus:
    if has_virtue_profile:
        return MigrationStatus(status="current", message="Using 11 Virtues system")
    if has_aspect_profile:
        return MigrationStatus(
            status="migrateable",
            message="Can migrate from 23 Aspects to 11 Virtues",
        )
    return MigrationStatus(status="none", message="No virtue profile available")


# ── Internal helpers ─────────────────────────────────────────────────────────

def _round_half_up(value: float) -> int:
    # Halves round up: 54.5 -> 55, not the even 54.
    return int(math.floor(value + 0.5))


def _accumulate(aspect_scores: list[AspectScore]) -> dict[str, _Accumulator]:
    accumulators = {virtue.id: _Accumulator() for virtue in VIRTUES}

    for aspect in aspect_scores:
        mappings = ASPECT_TO_VIRTUE_MAP.get(aspect.aspect_id)
        if not mappings:
            continue
        for virtue_id, weight in mappings:
            acc = accumulators.get(virtue_id)
            if acc is None:
                continue
            effective_score = 100 - aspect.score if weight < 0 else aspect.score
            acc.total += effective_score * abs(weight)
            acc.weight += abs(weight)
            if aspect.evidence:
                acc.evidence.append(aspect.evidence)

    return accumulators
