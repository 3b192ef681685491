"""
Music Industry Simulator: Progression Catalog
Static definitions for tech upgrades, platforms, tour tiers, exploitation
abilities and milestone unlocks. Read-only; nothing here mutates state.

Upgrade effects are a list of tagged Effect entries. Purchase iterates the
list uniformly instead of probing optional fields.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


# ─────────────────────────────────────────────────────
# TECH UPGRADES
# ─────────────────────────────────────────────────────

class EffectKind(str, Enum):
    GENERATION_SPEED = "generation_speed"
    INCOME = "income"
    FANS = "fans"
    UNLOCK_PRESTIGE = "unlock_prestige"
    UNLOCK_GPU = "unlock_gpu"


MULTIPLIER_EFFECTS = (EffectKind.GENERATION_SPEED, EffectKind.INCOME, EffectKind.FANS)
UNLOCK_EFFECTS = {
    EffectKind.UNLOCK_PRESTIGE: "prestige",
    EffectKind.UNLOCK_GPU: "gpu",
}


@dataclass(frozen=True)
class Effect:
    kind: EffectKind
    value: float = 1.0


@dataclass(frozen=True)
class TechUpgrade:
    id: str
    name: str
    description: str
    cost: float
    tier: int
    sub_tier: int
    effects: tuple = field(default_factory=tuple)

    def previous_id(self) -> Optional[str]:
        """Id of the sub-tier that gates this one, None for sub-tier 1."""
        if self.sub_tier <= 1:
            return None
        return f"tech_{self.tier}_{self.sub_tier - 1}"


def _upgrade(tier, sub_tier, name, description, cost, speed, income, fans,
             unlock_prestige=False, unlock_gpu=False) -> TechUpgrade:
    effects = [
        Effect(EffectKind.GENERATION_SPEED, speed),
        Effect(EffectKind.INCOME, income),
        Effect(EffectKind.FANS, fans),
    ]
    if unlock_prestige:
        effects.append(Effect(EffectKind.UNLOCK_PRESTIGE))
    if unlock_gpu:
        effects.append(Effect(EffectKind.UNLOCK_GPU))
    return TechUpgrade(
        id=f"tech_{tier}_{sub_tier}", name=name, description=description,
        cost=cost, tier=tier, sub_tier=sub_tier, effects=tuple(effects),
    )


ALL_TECH_UPGRADES = [
    # Tier 1: Third-party Web Services
    _upgrade(1, 1, "Basic Web Services",
             "Third-party AI APIs. Pay per song, manual and slow.",
             0, 1.0, 1.0, 1.0),
    _upgrade(1, 2, "API Caching",
             "Cache common responses to speed up generation.",
             50, 1.2, 1.1, 1.0),
    _upgrade(1, 3, "Batch Processing",
             "Queue multiple API calls at once.",
             150, 1.5, 1.3, 1.1),
    # Tier 2: Lifetime Licenses
    _upgrade(2, 1, "Lifetime License",
             "Pay once, generate forever. Songs are now free.",
             500, 2.0, 1.5, 1.2),
    _upgrade(2, 2, "Premium Features",
             "Better song quality attracts more fans.",
             1000, 2.3, 1.8, 1.4),
    _upgrade(2, 3, "Priority Queue",
             "Jump to the front of the queue.",
             2500, 3.0, 2.0, 1.5),
    # Tier 3: Local AI Models
    _upgrade(3, 1, "Run Models Locally",
             "Run models on your own hardware. Unlocks prestige and GPU.",
             5000, 6.0, 2.5, 1.5, unlock_prestige=True, unlock_gpu=True),
    _upgrade(3, 2, "GPU Acceleration",
             "Parallel processing on the GPU.",
             10000, 10.0, 3.0, 1.8),
    _upgrade(3, 3, "Model Optimization",
             "Models tuned for your hardware.",
             25000, 15.0, 3.5, 2.0),
    # Tier 4: Fine-tuned Models
    _upgrade(4, 1, "Custom Fine-tuning",
             "Fine-tune models on your own catalog.",
             50000, 15.0, 4.0, 2.0),
    _upgrade(4, 2, "LoRA Adapters",
             "Multiple styles at once.",
             100000, 20.0, 5.0, 2.5),
    _upgrade(4, 3, "Multi-GPU Setup",
             "Scale across multiple GPUs.",
             250000, 30.0, 6.0, 3.0),
    # Tier 5: Train Your Own Models
    _upgrade(5, 1, "Train from Scratch",
             "Completely custom models. Unlocks prestige.",
             500000, 30.0, 7.0, 3.0, unlock_prestige=True),
    _upgrade(5, 2, "Distributed Training",
             "Training across multiple machines.",
             1000000, 37.5, 8.5, 3.5),
    _upgrade(5, 3, "Neural Architecture Search",
             "AI designing better AI architectures.",
             2500000, 60.0, 10.0, 4.0),
    # Tier 6: Build Your Own Software
    _upgrade(6, 1, "Custom Software Stack",
             "Your own stack from scratch. Unlocks prestige.",
             5000000, 60.0, 12.0, 4.0, unlock_prestige=True),
    _upgrade(6, 2, "Hardware Optimization",
             "Custom hardware for your workload.",
             10000000, 100.0, 15.0, 5.0),
    _upgrade(6, 3, "ASIC Design",
             "Custom ASICs for generation.",
             25000000, 150.0, 18.0, 6.0),
    # Tier 7: AI Agent Automation
    _upgrade(7, 1, "Deploy AI Agents",
             "Agents run production, marketing and releases. Unlocks prestige.",
             50000000, 300.0, 20.0, 6.0, unlock_prestige=True),
    _upgrade(7, 2, "Autonomous Optimization",
             "Agents optimize their own processes.",
             100000000, 500.0, 25.0, 7.0),
    _upgrade(7, 3, "Full Industry Control",
             "Agents control every aspect of the industry.",
             250000000, 1000.0, 30.0, 10.0),
]

_UPGRADES_BY_ID = {u.id: u for u in ALL_TECH_UPGRADES}

STARTING_UPGRADE_ID = "tech_1_1"


def get_upgrade_by_id(upgrade_id: str) -> Optional[TechUpgrade]:
    return _UPGRADES_BY_ID.get(upgrade_id)


def get_upgrades_by_tier(tier: int) -> list:
    return [u for u in ALL_TECH_UPGRADES if u.tier == tier]


# ─────────────────────────────────────────────────────
# PLATFORMS
# ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class Platform:
    id: str
    name: str
    description: str
    cost: float
    income_multiplier: float
    control_contribution: float


ALL_PLATFORMS = [
    Platform("platform_spotify", "Spotify Clone",
             "Launch your own streaming service.", 100000, 1.2, 10),
    Platform("platform_label", "Record Label",
             "Start your own record label.", 500000, 1.3, 15),
    Platform("platform_distributor", "Distribution Network",
             "Control music distribution.", 2000000, 1.4, 15),
    Platform("platform_radio", "Radio Conglomerate",
             "Buy all the radio stations.", 10000000, 1.5, 20),
    Platform("platform_venues", "Venue Chain",
             "Own all major concert venues.", 50000000, 1.6, 20),
    Platform("platform_media", "Media Empire",
             "Control music media and press.", 250000000, 2.0, 20),
]

_PLATFORMS_BY_ID = {p.id: p for p in ALL_PLATFORMS}


def get_platform_by_id(platform_id: str) -> Optional[Platform]:
    return _PLATFORMS_BY_ID.get(platform_id)


# ─────────────────────────────────────────────────────
# TOUR TIERS
# ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class TourTier:
    tier: int
    name: str
    cost: float
    duration_seconds: float
    revenue_multiplier: float
    cooldown_seconds: float


TOUR_TIERS = [
    TourTier(1, "Local Club Tour", 500, 30, 1.5, 60),
    TourTier(2, "Regional Tour", 2500, 60, 2.0, 90),
    TourTier(3, "National Tour", 10000, 120, 3.0, 120),
    TourTier(4, "International Tour", 50000, 180, 5.0, 180),
    TourTier(5, "World Tour", 250000, 300, 10.0, 300),
]

# Cooldown applied before any tour has ever finished.
INITIAL_TOUR_COOLDOWN_SECONDS = TOUR_TIERS[0].cooldown_seconds


def get_tour_tier(tier: int) -> Optional[TourTier]:
    for t in TOUR_TIERS:
        if t.tier == tier:
            return t
    return None


# ─────────────────────────────────────────────────────
# EXPLOITATION ABILITIES
# ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class ExploitationAbility:
    id: str
    name: str
    description: str
    base_cost: float
    cost_scaling: float     # each use multiplies the next cost
    duration: float         # seconds
    multiplier: float
    type: str               # BoostType value: income, fans, speed


ALL_ABILITIES = [
    ExploitationAbility(
        "bot_streams", "Buy Bot Streams",
        "Fake streams from bot farms. +50% income for a minute.",
        100, 1.3, 60, 1.5, "income"),
    ExploitationAbility(
        "playlist_placement", "Pay for Playlist Placement",
        "Bribe playlist curators. 2x fan growth for two minutes.",
        500, 1.3, 120, 2.0, "fans"),
    ExploitationAbility(
        "social_media", "Social Media Campaign",
        "Hire influencers to fake the hype. +80% fan growth for three minutes.",
        1000, 1.4, 180, 1.8, "fans"),
    ExploitationAbility(
        "algorithm_manipulation", "Manipulate Algorithm",
        "Game the recommendation engine. 2x generation speed for 90 seconds.",
        2500, 1.5, 90, 2.0, "speed"),
]

_ABILITIES_BY_ID = {a.id: a for a in ALL_ABILITIES}


def get_ability_by_id(ability_id: str) -> Optional[ExploitationAbility]:
    return _ABILITIES_BY_ID.get(ability_id)


# ─────────────────────────────────────────────────────
# MILESTONE UNLOCKS
# ─────────────────────────────────────────────────────
# Systems not unlocked by tech effects open when all requirements hold.

UNLOCK_REQUIREMENTS = {
    "physical_albums": {"songs": 10, "fans": 100},
    "tours": {"albums": 1, "fans": 1000, "tech_tier": 3},
    "platform_ownership": {"tours": 1, "fans": 10000, "tech_tier": 4},
}
