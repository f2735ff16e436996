"""
Sympatico - Legacy Migration API

Converts 23 Aspects data onto the 11 Virtues.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, HTTPException, status

from sympatico.schemas.migration import MatchMigrationRequest, UserAspectProfile
from sympatico.schemas.virtue import MatchVirtueCompatibility, UserVirtueProfile
from sympatico.services.migration_service import (
    MIN_ASPECTS_FOR_MIGRATION,
    can_migrate_aspect_profile,
    can_migrate_aspect_scores,
    migrate_aspect_profile_to_virtues,
    migrate_aspect_scores_to_virtues,
)

logger = structlog.get_logger("sympatico.api.migration")

router = APIRouter()


@router.post(
    "/profile",
    response_model=UserVirtueProfile,
    summary="Migrate a user's aspect profile to virtues",
)
async def migrate_profile(body: UserAspectProfile) -> UserVirtueProfile:
    if not can_migrate_aspect_profile(body):
        logger.info("migration_rejected", kind="profile", aspect_count=len(body.scores))
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=(
                f"At least {MIN_ASPECTS_FOR_MIGRATION} scored aspects are required "
                f"for migration, got {len(body.scores)}."
            ),
        )
    return migrate_aspect_profile_to_virtues(body)


@router.post(
    "/match",
    response_model=MatchVirtueCompatibility,
    summary="Migrate a match's aspect scores and compare with the user",
)
async def migrate_match(body: MatchMigrationRequest) -> MatchVirtueCompatibility:
    if not can_migrate_aspect_scores(body.aspect_scores):
        logger.info(
            "migration_rejected",
            kind="match",
            aspect_count=len(body.aspect_scores.scores),
        )
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=(
                f"At least {MIN_ASPECTS_FOR_MIGRATION} scored aspects are required "
                f"for migration, got {len(body.aspect_scores.scores)}."
            ),
        )
    return migrate_aspect_scores_to_virtues(body.aspect_scores, body.user_profile)
