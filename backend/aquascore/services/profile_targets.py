from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


ProfileId = Literal["standard", "baby", "sport", "blood_pressure", "coffee", "kidney"]

PROFILE_IDS: tuple[ProfileId, ...] = ("standard", "baby", "sport", "blood_pressure", "coffee", "kidney")
DEFAULT_PROFILE: ProfileId = "standard"


@dataclass(frozen=True)
class TargetRange:
    min: float
    max: float
    optimal_min: float
    optimal_max: float

    def __post_init__(self) -> None:
        if not self.min <= self.optimal_min <= self.optimal_max <= self.max:
            raise ValueError(
                f"Invalid target range {self.min}/{self.optimal_min}/{self.optimal_max}/{self.max}"
            )

    def is_optimal(self, value: float) -> bool:
        return self.optimal_min <= value <= self.optimal_max


@dataclass(frozen=True)
class ProfileDefinition:
    id: ProfileId
    label: str
    description: str
    targets: dict[str, TargetRange]
    weights: dict[str, float]


# pH and mineralisation are judged the same way for every profile.
_SHARED_TARGETS: dict[str, TargetRange] = {
    "ph": TargetRange(5.5, 9.5, 6.5, 8.5),
    "total_dissolved_solids": TargetRange(50, 1500, 150, 600),
}

_SHARED_WEIGHTS: dict[str, float] = {
    "total_dissolved_solids": 0.8,
}

_PROFILES: tuple[ProfileDefinition, ...] = (
    ProfileDefinition(
        id="standard",
        label="Standard",
        description="Ausgewogene Bewertung für den Alltag.",
        targets={
            "calcium": TargetRange(40, 200, 60, 160),
            "magnesium": TargetRange(10, 100, 20, 60),
            "sodium": TargetRange(0, 100, 0, 50),
            "potassium": TargetRange(0, 20, 1, 10),
            "bicarbonate": TargetRange(80, 600, 120, 350),
            "sulfate": TargetRange(0, 400, 0, 150),
            "chloride": TargetRange(0, 150, 0, 80),
            "nitrate": TargetRange(0, 25, 0, 10),
        },
        weights={},
    ),
    ProfileDefinition(
        id="baby",
        label="Baby",
        description="Für die Zubereitung von Säuglingsnahrung: wenig Natrium, Nitrat und Sulfat.",
        targets={
            "calcium": TargetRange(20, 100, 30, 80),
            "magnesium": TargetRange(5, 50, 10, 30),
            "sodium": TargetRange(0, 20, 0, 10),
            "potassium": TargetRange(0, 10, 1, 5),
            "bicarbonate": TargetRange(100, 400, 150, 300),
            "sulfate": TargetRange(0, 200, 0, 50),
            "chloride": TargetRange(0, 50, 0, 20),
            "nitrate": TargetRange(0, 10, 0, 5),
        },
        weights={"sodium": 2, "nitrate": 2},
    ),
    ProfileDefinition(
        id="sport",
        label="Sport",
        description="Optimiert für Elektrolyte und Regeneration bei sportlicher Aktivität.",
        targets={
            "calcium": TargetRange(50, 400, 150, 300),
            "magnesium": TargetRange(20, 200, 80, 150),
            "sodium": TargetRange(20, 200, 50, 150),
            "potassium": TargetRange(5, 50, 10, 30),
            "bicarbonate": TargetRange(200, 2000, 600, 1500),
            "sulfate": TargetRange(0, 500, 0, 200),
            "chloride": TargetRange(0, 200, 20, 100),
            "nitrate": TargetRange(0, 50, 0, 10),
        },
        weights={"calcium": 1.5, "magnesium": 1.5},
    ),
    ProfileDefinition(
        id="blood_pressure",
        label="Blutdruck",
        description="Natriumarm für Menschen mit Bluthochdruck.",
        targets={
            "calcium": TargetRange(20, 200, 40, 120),
            "magnesium": TargetRange(5, 80, 10, 40),
            "sodium": TargetRange(0, 50, 0, 20),
            "potassium": TargetRange(0, 20, 1, 8),
            "bicarbonate": TargetRange(120, 500, 150, 350),
            "sulfate": TargetRange(0, 250, 0, 120),
            "chloride": TargetRange(0, 80, 0, 40),
            "nitrate": TargetRange(0, 25, 0, 10),
        },
        weights={"sodium": 2},
    ),
    ProfileDefinition(
        id="coffee",
        label="Kaffee",
        description="Moderate Härte und Pufferung für die Extraktion von Kaffee und Tee.",
        targets={
            "calcium": TargetRange(40, 120, 50, 90),
            "magnesium": TargetRange(10, 60, 15, 40),
            "sodium": TargetRange(0, 50, 0, 20),
            "potassium": TargetRange(0, 20, 1, 10),
            "bicarbonate": TargetRange(40, 200, 60, 120),
            "sulfate": TargetRange(0, 80, 0, 30),
            "chloride": TargetRange(0, 80, 0, 30),
            "nitrate": TargetRange(0, 25, 0, 10),
        },
        weights={"calcium": 1.5},
    ),
    ProfileDefinition(
        id="kidney",
        label="Niere",
        description="Mineralarm mit wenig Natrium und Kalium für eine entlastete Niere.",
        targets={
            "calcium": TargetRange(0, 80, 0, 50),
            "magnesium": TargetRange(0, 40, 0, 25),
            "sodium": TargetRange(0, 20, 0, 10),
            "potassium": TargetRange(0, 10, 0, 5),
            "bicarbonate": TargetRange(50, 400, 80, 200),
            "sulfate": TargetRange(0, 150, 0, 50),
            "chloride": TargetRange(0, 50, 0, 20),
            "nitrate": TargetRange(0, 10, 0, 5),
        },
        weights={"sodium": 2, "potassium": 2},
    ),
)

_PROFILES_BY_ID: dict[str, ProfileDefinition] = {profile.id: profile for profile in _PROFILES}


def is_known_profile(profile_id: str) -> bool:
    return profile_id in _PROFILES_BY_ID


def resolve_profile(profile_id: str | None) -> ProfileDefinition:
    """Unknown or missing ids fall back to the standard profile."""
    if profile_id and profile_id in _PROFILES_BY_ID:
        return _PROFILES_BY_ID[profile_id]
    return _PROFILES_BY_ID[DEFAULT_PROFILE]


def list_profiles() -> list[ProfileDefinition]:
    return list(_PROFILES)


def get_target_range(profile_id: str, metric: str) -> TargetRange | None:
    profile = resolve_profile(profile_id)
    return profile.targets.get(metric) or _SHARED_TARGETS.get(metric)


def get_metric_weight(profile_id: str, metric: str) -> float:
    profile = resolve_profile(profile_id)
    if metric in profile.weights:
        return float(profile.weights[metric])
    return float(_SHARED_WEIGHTS.get(metric, 1.0))


def targets_for(profile_id: str) -> dict[str, TargetRange]:
    profile = resolve_profile(profile_id)
    return {**_SHARED_TARGETS, **profile.targets}
