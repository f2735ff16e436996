"""
Sympatico - Verdict Engine

Maps the gap between two 0-100 virtue scores onto one of three verdicts
according to the virtue's delta category:

  category          sympatico      friction              danger
  ----------------  -------------  --------------------  --------
  low               delta < 20     20 <= delta < 35      >= 35
  medium_dangerous  delta < 15     15 <= delta < 30      >= 30
  medium_magic      10 <= d < 40   delta < 10            >= 40
  flexible          delta < 40     delta >= 40           never

``medium_magic`` is the one non-monotonic policy: a pair that is too similar
lacks the complementary spark, a moderate gap is the sweet spot and only a
large gap escalates to danger.
"""

from __future__ import annotations

import structlog

from sympatico.schemas.virtue import (
    CompatibilityVerdict,
    DeltaCategory,
    VirtueCompatibility,
    VirtueDefinition,
)

logger = structlog.get_logger("sympatico.verdict_service")

# ──────────────────────────────────────────────────────────────────────────────
# Thresholds (lower bound of friction, lower bound of danger)
# ──────────────────────────────────────────────────────────────────────────────

_LOW_FRICTION_AT = 20
_LOW_DANGER_AT = 35

_MEDIUM_DANGEROUS_FRICTION_AT = 15
_MEDIUM_DANGEROUS_DANGER_AT = 30

_MAGIC_BAND_START = 10  # below this the pair is "too similar"
_MAGIC_DANGER_AT = 40

_FLEXIBLE_FRICTION_AT = 40


def calculate_verdict(
    delta: float, category: DeltaCategory | str
) -> CompatibilityVerdict:
    """Classify an absolute score gap under a tolerance policy.

    Parameters
    ----------
    delta : float
        Non-negative absolute difference between two 0-100 scores.  Taking
        the absolute value is the caller's job.
    category : DeltaCategory or str
        Tolerance policy of the virtue being compared.

    Returns
    -------
    CompatibilityVerdict
    """
    category = DeltaCategory(category)

    if category is DeltaCategory.LOW:
        if delta < _LOW_FRICTION_AT:
            return CompatibilityVerdict.SYMPATICO
        if delta < _LOW_DANGER_AT:
            return CompatibilityVerdict.FRICTION
        return CompatibilityVerdict.DANGER

    if category is DeltaCategory.MEDIUM_DANGEROUS:
        if delta < _MEDIUM_DANGEROUS_FRICTION_AT:
            return CompatibilityVerdict.SYMPATICO
        if delta < _MEDIUM_DANGEROUS_DANGER_AT:
            return CompatibilityVerdict.FRICTION
        return CompatibilityVerdict.DANGER

    if category is DeltaCategory.MEDIUM_MAGIC:
        if delta < _MAGIC_BAND_START:
            return CompatibilityVerdict.FRICTION
        if delta < _MAGIC_DANGER_AT:
            return CompatibilityVerdict.SYMPATICO
        return CompatibilityVerdict.DANGER

    if category is DeltaCategory.FLEXIBLE:
        if delta < _FLEXIBLE_FRICTION_AT:
            return CompatibilityVerdict.SYMPATICO
        return CompatibilityVerdict.FRICTION

    raise ValueError(f"Unhandled delta category: {category!r}")


def calculate_virtue_compatibility(
    virtue: VirtueDefinition,
    user_score: float,
    match_score: float,
    evidence: str | None = None,
) -> VirtueCompatibility:
    """Compare one virtue for a user/match pair.

    Caller-supplied *evidence* is used verbatim as the note; otherwise a
    note is synthesised from the verdict and the virtue's labels.
    """
    delta = abs(user_score - match_score)
    verdict = calculate_verdict(delta, virtue.delta_category)
    note = evidence if evidence else _build_note(virtue, delta, verdict)

    logger.debug(
        "verdict.virtue_compared",
        virtue_id=virtue.id,
        delta=delta,
        verdict=verdict.value,
        evidence_supplied=bool(evidence),
    )

    return VirtueCompatibility(
        virtue_id=virtue.id,
        virtue_name=virtue.name,
        user_score=user_score,
        match_score=match_score,
        delta=delta,
        verdict=verdict,
        note=note,
    )


# ── Internal helpers ─────────────────────────────────────────────────────────

def _build_note(
    virtue: VirtueDefinition, delta: float, verdict: CompatibilityVerdict
) -> str:
    name = virtue.name.lower()
    magic = virtue.delta_category is DeltaCategory.MEDIUM_MAGIC

    if verdict is CompatibilityVerdict.SYMPATICO:
        if magic and delta >= _MAGIC_BAND_START:
            return "Complementary balance - differences here can be healthy."
        return f"Well aligned on {name}."

    if verdict is CompatibilityVerdict.FRICTION:
        if magic and delta < _MAGIC_BAND_START:
            return f"Too similar on {name} - some complementary difference can help."
        return f"Some tension on {name} - discuss expectations."

    if virtue.critical:
        risk = virtue.risk_pattern or "serious relationship strain"
        return f"CRITICAL: High {virtue.name} mismatch often predicts {risk}."
    return (
        f"Significant gap on {name} between {virtue.low_label} and "
        f"{virtue.high_label} - this needs attention."
    )
