from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

from sympatico.schemas.virtue import UserVirtueProfile


class AspectScore(BaseModel):
    aspect_id: str
    score: float = Field(ge=0, le=100)
    evidence: Optional[str] = None


class LegacyRealmSummary(BaseModel):
    vitality: str = ""
    connection: str = ""
    structure: str = ""


class UserAspectProfile(BaseModel):
    scores: list[AspectScore] = []
    dominant_aspects: list[str] = []
    shadow_aspects: list[str] = []
    realm_summary: Optional[LegacyRealmSummary] = None


class MatchAspectScores(BaseModel):
    scores: list[AspectScore] = []


class MatchMigrationRequest(BaseModel):
    aspect_scores: MatchAspectScores
    user_profile: UserVirtueProfile


class MigrationStatus(BaseModel):
    status: Literal["current", "migrateable", "none"]
    message: str
