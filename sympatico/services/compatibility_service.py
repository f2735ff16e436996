"""
Sympatico - Match Aggregator

Reduces the eleven per-virtue verdicts for a user/match pair into one
``MatchVirtueCompatibility``:

  1. For every registry virtue (registry order), pick the user's and the
     match's score, defaulting to the neutral score (50) when absent.
  2. Run the verdict engine once per virtue and tally the verdicts.
  3. Realm score = mean per-virtue alignment within the realm, where
        alignment = max(0, 100 - 2 x effective_gap)
     and effective_gap is the raw delta, except for ``medium_magic`` where it
     is the distance from the complementary band [10, 40).
  4. Overall score = mean of realm scores
        - DANGER_PENALTY   x dangers
        - FRICTION_PENALTY x frictions
        - CRITICAL_DANGER_PENALTY x critical virtues in danger
     clamped to [0, 100].

The aggregator is total: unknown virtue ids are ignored, missing ones are
neutral, and an empty score list still yields 11 comparisons.
"""

from __future__ import annotations

import structlog

from sympatico.config import get_settings
from sympatico.schemas.virtue import (
    CompatibilityVerdict,
    DeltaCategory,
    MatchVirtueCompatibility,
    RealmScores,
    RealmType,
    UserVirtueProfile,
    VirtueCompatibility,
    VirtueDefinition,
    VirtueScore,
)
from sympatico.services.verdict_service import calculate_virtue_compatibility
from sympatico.services.virtue_registry import VIRTUES

logger = structlog.get_logger("sympatico.compatibility_service")

# ──────────────────────────────────────────────────────────────────────────────
# Constants
# ──────────────────────────────────────────────────────────────────────────────

_ALIGNMENT_SLOPE = 2.0          # alignment points lost per point of gap
_EMPTY_REALM_SCORE = 50

_MAGIC_BAND = (10.0, 40.0)      # complementary band for medium_magic


def calculate_match_compatibility(
    user_profile: UserVirtueProfile,
    match_scores: list[VirtueScore],
) -> MatchVirtueCompatibility:
    """Compare a user's virtue profile with a match's scores.

    Parameters
    ----------
    user_profile : UserVirtueProfile
        The self-reported side; authoritative baseline for every comparison.
    match_scores : list[VirtueScore]
        The match's inferred scores.  May be partial, empty, or contain ids
        that are not in the registry.

    Returns
    -------
    MatchVirtueCompatibility
        Freshly built result; ``scores`` echoes *match_scores*.
    """
    settings = get_settings()
    neutral = settings.NEUTRAL_SCORE

    user_index = _index_scores(user_profile.scores)
    match_index = _index_scores(match_scores)

    compatibility: list[VirtueCompatibility] = []
    realm_alignments: dict[RealmType, list[float]] = {realm: [] for realm in RealmType}
    tallies: dict[CompatibilityVerdict, int] = {v: 0 for v in CompatibilityVerdict}
    critical_dangers: list[VirtueCompatibility] = []
    critical_issues: list[str] = []

    for virtue in VIRTUES:
        user_entry = user_index.get(virtue.id)
        match_entry = match_index.get(virtue.id)
        user_score = user_entry.score if user_entry is not None else neutral
        match_score = match_entry.score if match_entry is not None else neutral

        compat = calculate_virtue_compatibility(
            virtue,
            user_score,
            match_score,
            match_entry.evidence if match_entry is not None else None,
        )
        compatibility.append(compat)

        realm_alignments[virtue.realm].append(_alignment(virtue, compat.delta))
        tallies[compat.verdict] += 1

        if virtue.critical and compat.verdict is CompatibilityVerdict.DANGER:
            critical_dangers.append(compat)
            critical_issues.append(_critical_issue(virtue, user_score, match_score))

    realm_scores = RealmScores(
        biological=_realm_score(realm_alignments[RealmType.BIOLOGICAL]),
        emotional=_realm_score(realm_alignments[RealmType.EMOTIONAL]),
        cerebral=_realm_score(realm_alignments[RealmType.CEREBRAL]),
    )

    danger_count = tallies[CompatibilityVerdict.DANGER]
    friction_count = tallies[CompatibilityVerdict.FRICTION]
    sympatico_count = tallies[CompatibilityVerdict.SYMPATICO]

    base_score = (
        realm_scores.biological + realm_scores.emotional + realm_scores.cerebral
    ) / 3.0
    penalty = (
        settings.DANGER_PENALTY * danger_count
        + settings.FRICTION_PENALTY * friction_count
        + settings.CRITICAL_DANGER_PENALTY * len(critical_dangers)
    )
    overall_score = int(round(min(100.0, max(0.0, base_score - penalty))))

    logger.info(
        "compatibility.match_calculated",
        overall_score=overall_score,
        realm_scores=realm_scores.model_dump(),
        danger_count=danger_count,
        friction_count=friction_count,
        sympatico_count=sympatico_count,
        critical_issue_count=len(critical_issues),
        ignored_match_ids=sorted(set(match_index) - {v.id for v in VIRTUES}),
    )

    return MatchVirtueCompatibility(
        scores=[s.model_copy() for s in match_scores],
        compatibility=compatibility,
        realm_scores=realm_scores,
        overall_score=overall_score,
        danger_count=danger_count,
        friction_count=friction_count,
        sympatico_count=sympatico_count,
        critical_issues=critical_issues,
    )


# ── Internal helpers ─────────────────────────────────────────────────────────

def _index_scores(scores: list[VirtueScore]) -> dict[str, VirtueScore]:
    """Map virtue id to its first score entry; later duplicates are ignored."""
    index: dict[str, VirtueScore] = {}
    for entry in scores:
        index.setdefault(entry.virtue_id, entry)
    return index


def _effective_gap(virtue: VirtueDefinition, delta: float) -> float:
    if virtue.delta_category is DeltaCategory.MEDIUM_MAGIC:
        band_start, band_end = _MAGIC_BAND
        if delta < band_start:
            return band_start - delta
        if delta < band_end:
            return 0.0
        return delta - band_start
    return delta


def _alignment(virtue: VirtueDefinition, delta: float) -> float:
    return max(0.0, 100.0 - _ALIGNMENT_SLOPE * _effective_gap(virtue, delta))


def _realm_score(alignments: list[float]) -> int:
    if not alignments:
        return _EMPTY_REALM_SCORE
    return int(round(sum(alignments) / len(alignments)))


def _pole(virtue: VirtueDefinition, score: float) -> str:
    return virtue.high_label if score > 50 else virtue.low_label


def _critical_issue(
    virtue: VirtueDefinition, user_score: float, match_score: float
) -> str:
    return (
        f"{virtue.name} mismatch: You lean {_pole(virtue, user_score)} "
        f"({user_score:g}), they lean {_pole(virtue, match_score)} ({match_score:g})."
    )
