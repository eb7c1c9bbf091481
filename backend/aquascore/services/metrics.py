from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Literal

ChemicalMetric = Literal[
    "ph",
    "calcium",
    "magnesium",
    "sodium",
    "potassium",
    "chloride",
    "sulfate",
    "nitrate",
    "bicarbonate",
    "total_dissolved_solids",
]

DerivedMetric = Literal[
    "hardness",
    "calcium_magnesium_ratio",
    "sodium_potassium_ratio",
    "taste_palatability",
    "buffer_capacity",
    "data_quality_score",
]

BASE_METRICS: tuple[ChemicalMetric, ...] = (
    "ph",
    "calcium",
    "magnesium",
    "sodium",
    "potassium",
    "chloride",
    "sulfate",
    "nitrate",
    "bicarbonate",
    "total_dissolved_solids",
)

DERIVED_METRICS: tuple[DerivedMetric, ...] = (
    "hardness",
    "calcium_magnesium_ratio",
    "sodium_potassium_ratio",
    "taste_palatability",
    "buffer_capacity",
    "data_quality_score",
)

METRIC_LABELS: dict[str, str] = {
    "ph": "pH-Wert",
    "calcium": "Calcium",
    "magnesium": "Magnesium",
    "sodium": "Natrium",
    "potassium": "Kalium",
    "chloride": "Chlorid",
    "sulfate": "Sulfat",
    "nitrate": "Nitrat",
    "bicarbonate": "Hydrogencarbonat",
    "total_dissolved_solids": "Gesamtmineralisation",
    "hardness": "Wasserhärte",
    "calcium_magnesium_ratio": "Ca:Mg Verhältnis",
    "sodium_potassium_ratio": "Na:K Verhältnis",
    "taste_palatability": "Geschmacksprofil",
    "buffer_capacity": "Pufferkapazität",
    "data_quality_score": "Daten-Transparenz",
}

METRIC_UNITS: dict[str, str] = {
    "ph": "",
    "calcium": "mg/L",
    "magnesium": "mg/L",
    "sodium": "mg/L",
    "potassium": "mg/L",
    "chloride": "mg/L",
    "sulfate": "mg/L",
    "nitrate": "mg/L",
    "bicarbonate": "mg/L",
    "total_dissolved_solids": "mg/L",
    "hardness": "°dH",
    "calcium_magnesium_ratio": "",
    "sodium_potassium_ratio": "",
    "taste_palatability": "",
    "buffer_capacity": "mVal/L",
    "data_quality_score": "%",
}


def is_base_metric(key: str) -> bool:
    return key in BASE_METRICS


@dataclass(frozen=True)
class WaterAnalysisValues:
    """Sparse label analysis. ``None`` means unknown, never zero. mg/L except pH."""

    ph: float | None = None
    calcium: float | None = None
    magnesium: float | None = None
    sodium: float | None = None
    potassium: float | None = None
    chloride: float | None = None
    sulfate: float | None = None
    nitrate: float | None = None
    bicarbonate: float | None = None
    total_dissolved_solids: float | None = None

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, object] | None) -> WaterAnalysisValues:
        if not mapping:
            return cls()

        accepted: dict[str, float] = {}
        for key, raw in mapping.items():
            if not is_base_metric(key) or raw is None or isinstance(raw, bool):
                continue
            if not isinstance(raw, (int, float)):
                continue
            value = float(raw)
            if math.isfinite(value):
                accepted[key] = value
        return cls(**accepted)

    def get(self, metric: str) -> float | None:
        if not is_base_metric(metric):
            return None
        return getattr(self, metric)

    def present(self) -> dict[ChemicalMetric, float]:
        return {metric: getattr(self, metric) for metric in BASE_METRICS if getattr(self, metric) is not None}

    def count_present(self) -> int:
        return len(self.present())

    def is_empty(self) -> bool:
        return self.count_present() == 0

    def merged_with(self, overrides: WaterAnalysisValues | None) -> WaterAnalysisValues:
        """Key-by-key merge where every known override value wins."""
        if overrides is None:
            return self

        merged = {item.name: getattr(self, item.name) for item in fields(self)}
        merged.update(overrides.present())
        return WaterAnalysisValues(**merged)
