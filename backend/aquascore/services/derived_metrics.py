from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal

from aquascore.services.metrics import BASE_METRICS, WaterAnalysisValues

HardnessClass = Literal["weich", "mittel", "hart"]

# mg/L per °dH
_CALCIUM_PER_DH = 7.14
_MAGNESIUM_PER_DH = 4.32
# mg/L HCO3- per mVal
_BICARBONATE_PER_MVAL = 61.0


@dataclass(frozen=True)
class DerivedMetrics:
    hardness: float | None
    hardness_class: HardnessClass | None
    calcium_magnesium_ratio: float | None
    sodium_potassium_ratio: float | None
    taste_palatability: float | None
    buffer_capacity: float | None
    data_quality_score: float | None


def _finite_or_none(value: float) -> float | None:
    return value if math.isfinite(value) else None


def compute_water_hardness(values: WaterAnalysisValues) -> float | None:
    if values.calcium is None or values.magnesium is None:
        return None
    return _finite_or_none(values.calcium / _CALCIUM_PER_DH + values.magnesium / _MAGNESIUM_PER_DH)


def classify_hardness(hardness: float | None) -> HardnessClass | None:
    if hardness is None:
        return None
    if hardness < 8.4:
        return "weich"
    if hardness <= 14:
        return "mittel"
    return "hart"


def compute_calcium_magnesium_ratio(calcium: float | None, magnesium: float | None) -> float | None:
    if calcium is None or magnesium is None or magnesium == 0:
        return None
    return _finite_or_none(calcium / magnesium)


def compute_sodium_potassium_ratio(sodium: float | None, potassium: float | None) -> float | None:
    if sodium is None or potassium is None or potassium == 0:
        return None
    return _finite_or_none(sodium / potassium)


def compute_taste_palatability(values: WaterAnalysisValues) -> float | None:
    """Buffer against bitter load: HCO3 / (SO4 + Cl + 1). Higher tastes softer."""
    if values.sulfate is None and values.chloride is None and values.bicarbonate is None:
        return None
    bitter_load = (values.sulfate or 0.0) + (values.chloride or 0.0)
    return _finite_or_none((values.bicarbonate or 0.0) / (bitter_load + 1))


def compute_buffer_capacity(values: WaterAnalysisValues) -> float | None:
    if values.bicarbonate is None:
        return None
    return _finite_or_none(values.bicarbonate / _BICARBONATE_PER_MVAL)


def compute_data_quality_score(values: WaterAnalysisValues) -> float | None:
    return _finite_or_none(values.count_present() / len(BASE_METRICS) * 100)


def derive_metrics(values: WaterAnalysisValues) -> DerivedMetrics:
    hardness = compute_water_hardness(values)
    return DerivedMetrics(
        hardness=hardness,
        hardness_class=classify_hardness(hardness),
        calcium_magnesium_ratio=compute_calcium_magnesium_ratio(values.calcium, values.magnesium),
        sodium_potassium_ratio=compute_sodium_potassium_ratio(values.sodium, values.potassium),
        taste_palatability=compute_taste_palatability(values),
        buffer_capacity=compute_buffer_capacity(values),
        data_quality_score=compute_data_quality_score(values),
    )
