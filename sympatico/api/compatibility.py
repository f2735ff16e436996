"""
Sympatico - Compatibility API

Endpoints exposing the verdict engine and the match aggregator.  Every
endpoint is a pure computation over the request body; nothing is stored.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, HTTPException, status

from sympatico.schemas.compatibility import (
    MatchCompatibilityRequest,
    MatchCompatibilityResponse,
    VerdictRequest,
    VerdictResponse,
    VirtueCompatibilityRequest,
)
from sympatico.schemas.virtue import VirtueCompatibility
from sympatico.services.compatibility_service import calculate_match_compatibility
from sympatico.services.report_service import (
    get_overall_verdict_summary,
    get_verdict_label,
)
from sympatico.services.verdict_service import (
    calculate_verdict,
    calculate_virtue_compatibility,
)
from sympatico.services.virtue_registry import get_virtue_by_id

logger = structlog.get_logger("sympatico.api.compatibility")

router = APIRouter()


@router.post(
    "/verdict",
    response_model=VerdictResponse,
    summary="Classify a score gap under a delta category",
)
async def verdict(body: VerdictRequest) -> VerdictResponse:
    result = calculate_verdict(body.delta, body.category)
    return VerdictResponse(
        delta=body.delta,
        category=body.category,
        verdict=result,
        label=get_verdict_label(result),
    )


@router.post(
    "/virtue",
    response_model=VirtueCompatibility,
    summary="Compare a single virtue",
)
async def virtue_compatibility(body: VirtueCompatibilityRequest) -> VirtueCompatibility:
    virtue = get_virtue_by_id(body.virtue_id)
    if virtue is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Virtue '{body.virtue_id}' not found.",
        )
    return calculate_virtue_compatibility(
        virtue, body.user_score, body.match_score, body.evidence
    )


@router.post(
    "/match",
    response_model=MatchCompatibilityResponse,
    summary="Compare a user's profile with a match's virtue scores",
)
async def match_compatibility(body: MatchCompatibilityRequest) -> MatchCompatibilityResponse:
    """Run the full 11-virtue comparison and attach the summary sentence."""
    log = logger.bind(
        user_score_count=len(body.user_profile.scores),
        match_score_count=len(body.match_scores),
    )
    log.info("match_compatibility_start")

    result = calculate_match_compatibility(body.user_profile, body.match_scores)
    summary = get_overall_verdict_summary(result)

    log.info(
        "match_compatibility_done",
        overall_score=result.overall_score,
        danger_count=result.danger_count,
    )
    return MatchCompatibilityResponse(result=result, summary=summary)
