from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class RealmType(str, Enum):
    """The three realms that organise the 11 virtues."""
    BIOLOGICAL = "biological"
    EMOTIONAL = "emotional"
    CEREBRAL = "cerebral"


class DeltaCategory(str, Enum):
    """Tolerance policy deciding which gaps map to which verdict."""
    LOW = "low"                            # must be close
    MEDIUM_DANGEROUS = "medium_dangerous"  # moderate gaps already hurt
    MEDIUM_MAGIC = "medium_magic"          # some difference is the sweet spot
    FLEXIBLE = "flexible"                  # wide tolerance, never danger


class CompatibilityVerdict(str, Enum):
    SYMPATICO = "sympatico"
    FRICTION = "friction"
    DANGER = "danger"


class VirtueDefinition(BaseModel):
    id: str
    name: str
    realm: RealmType
    low_label: str
    high_label: str
    description: str
    delta_category: DeltaCategory
    critical: bool = False
    risk_pattern: Optional[str] = None  # named in CRITICAL notes

    model_config = {"frozen": True}


class RealmConfig(BaseModel):
    id: RealmType
    name: str
    subtitle: str
    color_class: str
    bg_class: str
    border_class: str
    icon: str

    model_config = {"frozen": True}


class VirtueScore(BaseModel):
    virtue_id: str  # unknown ids are tolerated and ignored by the engine
    score: float = Field(ge=0, le=100)
    confidence: Optional[float] = Field(None, ge=0, le=1)
    evidence: Optional[str] = None


class RealmSummary(BaseModel):
    biological: str = ""
    emotional: str = ""
    cerebral: str = ""


class UserVirtueProfile(BaseModel):
    scores: list[VirtueScore] = []
    realm_summary: RealmSummary = Field(default_factory=RealmSummary)
    last_updated: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class VirtueCompatibility(BaseModel):
    virtue_id: str
    virtue_name: str
    user_score: float
    match_score: float
    delta: float
    verdict: CompatibilityVerdict
    note: str


class RealmScores(BaseModel):
    biological: int
    emotional: int
    cerebral: int


class MatchVirtueCompatibility(BaseModel):
    scores: list[VirtueScore]
    compatibility: list[VirtueCompatibility]
    realm_scores: RealmScores
    overall_score: int
    danger_count: int
    friction_count: int
    sympatico_count: int
    critical_issues: list[str] = []
