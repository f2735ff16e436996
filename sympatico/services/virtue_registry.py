"""
Sympatico - Virtue Registry

Static catalog of the 11 Virtues of Love and the three realms that group
them.  The catalog is built once at import time and never mutated:

  - Biological realm (chemistry):  vitality, lust, play
  - Emotional realm  (connection): warmth, voice, space, anchor
  - Cerebral realm   (mind):       wit, drive, curiosity, soul

Each virtue carries a delta category (its tolerance policy for score gaps).
Exactly one virtue, Space, is flagged critical: a large Space gap is the
classic anxious/avoidant predictor and is reported separately.

Lookups never raise; unknown ids and realms return ``None``.
"""

from __future__ import annotations

import structlog

from sympatico.schemas.virtue import (
    DeltaCategory,
    RealmConfig,
    RealmType,
    VirtueDefinition,
)

logger = structlog.get_logger("sympatico.virtue_registry")

# ──────────────────────────────────────────────────────────────────────────────
# Realm configurations
# ──────────────────────────────────────────────────────────────────────────────

REALMS: tuple[RealmConfig, ...] = (
    RealmConfig(
        id=RealmType.BIOLOGICAL,
        name="Biological Realm",
        subtitle="Chemistry - Binary needs, low tolerance for mismatch",
        color_class="text-rose-600",
        bg_class="bg-rose-50",
        border_class="border-rose-200",
        icon="Heart",
    ),
    RealmConfig(
        id=RealmType.EMOTIONAL,
        name="Emotional Realm",
        subtitle="Connection - How you fight and bond",
        color_class="text-amber-600",
        bg_class="bg-amber-50",
        border_class="border-amber-200",
        icon="Users",
    ),
    RealmConfig(
        id=RealmType.CEREBRAL,
        name="Cerebral Realm",
        subtitle="Mind - Long-term conversation potential",
        color_class="text-indigo-600",
        bg_class="bg-indigo-50",
        border_class="border-indigo-200",
        icon="Brain",
    ),
)

# ──────────────────────────────────────────────────────────────────────────────
# The 11 virtues, in declaration order
# ──────────────────────────────────────────────────────────────────────────────

VIRTUES: tuple[VirtueDefinition, ...] = (
    # === Biological realm ===
    VirtueDefinition(
        id="vitality",
        name="Vitality",
        realm=RealmType.BIOLOGICAL,
        low_label="Restorative",
        high_label="High Voltage",
        description="Energy levels and lifestyle pace",
        delta_category=DeltaCategory.LOW,
    ),
    VirtueDefinition(
        id="lust",
        name="Lust",
        realm=RealmType.BIOLOGICAL,
        low_label="Reserved",
        high_label="Voracious",
        description="Physical intimacy needs and expression",
        delta_category=DeltaCategory.LOW,
    ),
    VirtueDefinition(
        id="play",
        name="Play",
        realm=RealmType.BIOLOGICAL,
        low_label="Serious",
        high_label="Absurd",
        description="Silliness tolerance and playfulness",
        delta_category=DeltaCategory.MEDIUM_MAGIC,
    ),
    # === Emotional realm ===
    VirtueDefinition(
        id="warmth",
        name="Warmth",
        realm=RealmType.EMOTIONAL,
        low_label="Cool",
        high_label="Radiant",
        description="Emotional expression and affection style",
        delta_category=DeltaCategory.MEDIUM_DANGEROUS,
    ),
    VirtueDefinition(
        id="voice",
        name="Voice",
        realm=RealmType.EMOTIONAL,
        low_label="Diplomatic",
        high_label="Blunt",
        description="Communication directness",
        delta_category=DeltaCategory.LOW,
    ),
    VirtueDefinition(
        id="space",
        name="Space",
        realm=RealmType.EMOTIONAL,
        low_label="Merged",
        high_label="Autonomous",
        description="Independence vs togetherness needs",
        delta_category=DeltaCategory.MEDIUM_DANGEROUS,
        critical=True,
        risk_pattern="anxious/avoidant dynamics",
    ),
    VirtueDefinition(
        id="anchor",
        name="Anchor",
        realm=RealmType.EMOTIONAL,
        low_label="Fluid",
        high_label="Structured",
        description="Need for order vs spontaneity",
        delta_category=DeltaCategory.MEDIUM_MAGIC,
    ),
    # === Cerebral realm ===
    VirtueDefinition(
        id="wit",
        name="Wit",
        realm=RealmType.CEREBRAL,
        low_label="Earnest",
        high_label="Intellectual",
        description="Banter and debate style",
        delta_category=DeltaCategory.LOW,
    ),
    VirtueDefinition(
        id="drive",
        name="Drive",
        realm=RealmType.CEREBRAL,
        low_label="Content",
        high_label="Relentless",
        description="Ambition and achievement orientation",
        delta_category=DeltaCategory.FLEXIBLE,
    ),
    VirtueDefinition(
        id="curiosity",
        name="Curiosity",
        realm=RealmType.CEREBRAL,
        low_label="Traditional",
        high_label="Explorer",
        description="Novelty seeking and openness",
        delta_category=DeltaCategory.LOW,
    ),
    VirtueDefinition(
        id="soul",
        name="Soul",
        realm=RealmType.CEREBRAL,
        low_label="Pragmatic",
        high_label="Idealist",
        description="Meaning, spirituality, and values depth",
        delta_category=DeltaCategory.FLEXIBLE,
    ),
)

_VIRTUES_BY_ID: dict[str, VirtueDefinition] = {v.id: v for v in VIRTUES}
_REALMS_BY_ID: dict[str, RealmConfig] = {r.id.value: r for r in REALMS}


# ── Lookups ──────────────────────────────────────────────────────────────────

def get_virtue_by_id(virtue_id: str) -> VirtueDefinition | None:
    """Exact, case-sensitive lookup.  Unknown ids return ``None``."""
    return _VIRTUES_BY_ID.get(virtue_id)


def get_virtues_by_realm(realm: RealmType | str) -> list[VirtueDefinition]:
    """Return every virtue in *realm*, in registry declaration order.

    An unrecognised realm simply matches nothing.
    """
    realm_id = realm.value if isinstance(realm, RealmType) else realm
    return [v for v in VIRTUES if v.realm.value == realm_id]


def get_realm_config(realm: RealmType | str) -> RealmConfig | None:
    realm_id = realm.value if isinstance(realm, RealmType) else realm
    return _REALMS_BY_ID.get(realm_id)


def get_critical_virtues() -> list[VirtueDefinition]:
    return [v for v in VIRTUES if v.critical]


# ── Scorer briefing ──────────────────────────────────────────────────────────

def build_virtues_prompt_text() -> str:
    """List every realm and its virtues for the upstream AI scoring prompt.

    Returns
    -------
    str
        One ``##`` section per realm with a ``###`` block per virtue giving
        the 0-100 spectrum poles, the description and the delta tolerance.
        Critical virtues are tagged ``[CRITICAL]``.
    """
    lines: list[str] = []
    for realm in REALMS:
        lines.append(f"\n## {realm.name} ({realm.subtitle})\n")
        for virtue in get_virtues_by_realm(realm.id):
            tag = " [CRITICAL]" if virtue.critical else ""
            lines.append(f"### {virtue.name}{tag}")
            lines.append(
                f"- Spectrum: {virtue.low_label} (0) <-> {virtue.high_label} (100)"
            )
            lines.append(f"- Description: {virtue.description}")
            lines.append(f"- Delta Tolerance: {virtue.delta_category.value}")
            lines.append("")

    logger.debug("virtue_registry.prompt_built", virtue_count=len(VIRTUES))
    return "\n".join(lines)
