from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from sympatico.schemas.virtue import (
    CompatibilityVerdict,
    DeltaCategory,
    MatchVirtueCompatibility,
    RealmConfig,
    UserVirtueProfile,
    VirtueDefinition,
    VirtueScore,
)


class VerdictRequest(BaseModel):
    delta: float = Field(ge=0, le=100)
    category: DeltaCategory


class VerdictResponse(BaseModel):
    delta: float
    category: DeltaCategory
    verdict: CompatibilityVerdict
    label: str


class VirtueCompatibilityRequest(BaseModel):
    virtue_id: str
    user_score: float = Field(ge=0, le=100)
    match_score: float = Field(ge=0, le=100)
    evidence: Optional[str] = None


class MatchCompatibilityRequest(BaseModel):
    user_profile: UserVirtueProfile
    match_scores: list[VirtueScore] = []


class MatchCompatibilityResponse(BaseModel):
    result: MatchVirtueCompatibility
    summary: str


class RealmDetailResponse(BaseModel):
    realm: RealmConfig
    virtues: list[VirtueDefinition]
