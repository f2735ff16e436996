"""
Sympatico - Virtue Registry API

Read-only endpoints over the static virtue and realm catalog.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, HTTPException, status
from fastapi.responses import PlainTextResponse

from sympatico.schemas.compatibility import RealmDetailResponse
from sympatico.schemas.virtue import RealmConfig, VirtueDefinition
from sympatico.services.virtue_registry import (
    REALMS,
    VIRTUES,
    build_virtues_prompt_text,
    get_realm_config,
    get_virtue_by_id,
    get_virtues_by_realm,
)

logger = structlog.get_logger("sympatico.api.virtues")

router = APIRouter()


@router.get(
    "/virtues",
    response_model=list[VirtueDefinition],
    summary="List all 11 virtues",
)
async def list_virtues() -> list[VirtueDefinition]:
    return list(VIRTUES)


@router.get(
    "/virtues/prompt",
    response_class=PlainTextResponse,
    summary="Virtue briefing text for the AI scorer",
)
async def virtues_prompt() -> str:
    return build_virtues_prompt_text()


@router.get(
    "/virtues/{virtue_id}",
    response_model=VirtueDefinition,
    summary="Get one virtue definition",
)
async def get_virtue(virtue_id: str) -> VirtueDefinition:
    virtue = get_virtue_by_id(virtue_id)
    if virtue is None:
        logger.info("virtue_not_found", virtue_id=virtue_id)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Virtue '{virtue_id}' not found.",
        )
    return virtue


@router.get(
    "/realms",
    response_model=list[RealmConfig],
    summary="List the three realms",
)
async def list_realms() -> list[RealmConfig]:
    return list(REALMS)


@router.get(
    "/realms/{realm}",
    response_model=RealmDetailResponse,
    summary="Get a realm and its virtues",
)
async def get_realm(realm: str) -> RealmDetailResponse:
    config = get_realm_config(realm)
    if config is None:
        logger.info("realm_not_found", realm=realm)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Realm '{realm}' not found.",
        )
    return RealmDetailResponse(realm=config, virtues=get_virtues_by_realm(config.id))
