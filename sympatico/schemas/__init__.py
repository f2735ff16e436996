"""
Sympatico - schema registry.

Re-exports the virtue data model so callers can import every type from
``sympatico.schemas`` directly.
"""

from sympatico.schemas.virtue import (
    CompatibilityVerdict,
    DeltaCategory,
    MatchVirtueCompatibility,
    RealmConfig,
    RealmScores,
    RealmSummary,
    RealmType,
    UserVirtueProfile,
    VirtueCompatibility,
    VirtueDefinition,
    VirtueScore,
)

__all__ = [
    "CompatibilityVerdict",
    "DeltaCategory",
    "MatchVirtueCompatibility",
    "RealmConfig",
    "RealmScores",
    "RealmSummary",
    "RealmType",
    "UserVirtueProfile",
    "VirtueCompatibility",
    "VirtueDefinition",
    "VirtueScore",
]
