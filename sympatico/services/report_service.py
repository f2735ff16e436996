"""
Sympatico - Match report helpers

Presentation-side lookups layered on top of the aggregator output:

  - Verdict labels and Tailwind colour triples
  - The one-paragraph overall verdict summary
  - A display-ready report combining both for a match card

None of these feed back into scoring; they only read a finished
``MatchVirtueCompatibility``.
"""

from __future__ import annotations

from typing import Any

import structlog

from sympatico.schemas.virtue import CompatibilityVerdict, MatchVirtueCompatibility

logger = structlog.get_logger("sympatico.report_service")

# ──────────────────────────────────────────────────────────────────────────────
# Lookup tables
# ──────────────────────────────────────────────────────────────────────────────

VERDICT_LABELS: dict[CompatibilityVerdict, str] = {
    CompatibilityVerdict.SYMPATICO: "Sympatico",
    CompatibilityVerdict.FRICTION: "Friction",
    CompatibilityVerdict.DANGER: "Danger Zone",
}

VERDICT_COLORS: dict[CompatibilityVerdict, dict[str, str]] = {
    CompatibilityVerdict.SYMPATICO: {
        "text": "text-emerald-600",
        "bg": "bg-emerald-50",
        "border": "border-emerald-200",
    },
    CompatibilityVerdict.FRICTION: {
        "text": "text-amber-600",
        "bg": "bg-amber-50",
        "border": "border-amber-200",
    },
    CompatibilityVerdict.DANGER: {
        "text": "text-red-600",
        "bg": "bg-red-50",
        "border": "border-red-200",
    },
}

# Summary thresholds
_MANY_DANGERS = 3
_MANY_FRICTIONS = 4
_MANY_SYMPATICOS = 8
_GOOD_SCORE = 75
_MIXED_SCORE = 50


def get_verdict_label(verdict: CompatibilityVerdict | str) -> str:
    return VERDICT_LABELS[CompatibilityVerdict(verdict)]


def get_verdict_colors(verdict: CompatibilityVerdict | str) -> dict[str, str]:
    """Return a copy of the ``{text, bg, border}`` classes for *verdict*."""
    return dict(VERDICT_COLORS[CompatibilityVerdict(verdict)])


def get_overall_verdict_summary(result: MatchVirtueCompatibility) -> str:
    """Summarise a match result in one sentence.

    Rules are checked in order; the first that applies wins:

    - 3+ dangers            -> significant challenges
    - 1-2 dangers           -> critical area(s) need discussion
    - 4+ frictions          -> communication will be key
    - 8+ sympaticos         -> strong alignment
    - overall_score >= 75   -> good compatibility
    - overall_score >= 50   -> mixed signals
    - otherwise             -> challenging profile
    """
    dangers = result.danger_count

    if dangers >= _MANY_DANGERS:
        return "Significant compatibility challenges detected. Proceed with awareness."
    if dangers >= 1:
        if dangers == 1:
            return "1 critical area needs discussion before proceeding."
        return f"{dangers} critical areas need discussion before proceeding."
    if result.friction_count >= _MANY_FRICTIONS:
        return "Several areas of friction - communication will be key."
    if result.sympatico_count >= _MANY_SYMPATICOS:
        return "Strong alignment across most virtues. High compatibility potential."
    if result.overall_score >= _GOOD_SCORE:
        return "Good compatibility with manageable differences."
    if result.overall_score >= _MIXED_SCORE:
        return "Mixed signals - some alignment, some friction."
    return "Challenging compatibility profile. Consider if core values align."


def build_match_report(result: MatchVirtueCompatibility) -> dict[str, Any]:
    """Assemble a display-ready payload for a match card.

    Parameters
    ----------
    result : MatchVirtueCompatibility
        Output of ``calculate_match_compatibility``.

    Returns
    -------
    dict
        ``summary``, ``overall_score``, ``realm_scores``, ``critical_issues``
        and one ``virtues`` entry per comparison carrying its label and
        colours.
    """
    virtues = [
        {
            "virtue_id": compat.virtue_id,
            "virtue_name": compat.virtue_name,
            "verdict": compat.verdict.value,
            "label": get_verdict_label(compat.verdict),
            "colors": get_verdict_colors(compat.verdict),
            "note": compat.note,
        }
        for compat in result.compatibility
    ]

    report = {
        "summary": get_overall_verdict_summary(result),
        "overall_score": result.overall_score,
        "realm_scores": result.realm_scores.model_dump(),
        "critical_issues": list(result.critical_issues),
        "virtues": virtues,
    }

    logger.info(
        "report.match_report_built",
        overall_score=result.overall_score,
        danger_count=result.danger_count,
        has_critical=bool(result.critical_issues),
    )
    return report
