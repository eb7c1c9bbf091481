from __future__ import annotations

from dataclasses import dataclass

from aquascore.services.metrics import BASE_METRICS, WaterAnalysisValues


@dataclass(frozen=True)
class PlausibleRange:
    min: float
    max: float
    typical: str

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    warning: str | None = None


PLAUSIBLE_RANGES: dict[str, PlausibleRange] = {
    "ph": PlausibleRange(4, 10, "6.5-8.5"),
    "calcium": PlausibleRange(0, 1500, "5-600 mg/L"),
    "magnesium": PlausibleRange(0, 200, "1-100 mg/L"),
    "sodium": PlausibleRange(0, 500, "1-200 mg/L"),
    "potassium": PlausibleRange(0, 100, "1-20 mg/L"),
    "chloride": PlausibleRange(0, 500, "1-250 mg/L"),
    "sulfate": PlausibleRange(0, 3000, "1-1500 mg/L"),
    "nitrate": PlausibleRange(0, 100, "0-50 mg/L"),
    "bicarbonate": PlausibleRange(0, 2000, "50-600 mg/L"),
    "total_dissolved_solids": PlausibleRange(0, 3000, "50-1500 mg/L"),
}


def _format_value(value: float) -> str:
    return f"{value:g}"


def validate_value(metric: str, value: float) -> ValidationResult:
    """Soft plausibility check. The value itself is never dropped or clamped."""
    plausible = PLAUSIBLE_RANGES.get(metric)
    if plausible is None:
        return ValidationResult(valid=True)

    if not plausible.contains(value):
        return ValidationResult(
            valid=False,
            warning=(
                f"{metric}: {_format_value(value)} liegt außerhalb des plausiblen Bereichs "
                f"(typisch: {plausible.typical}). Bitte prüfen."
            ),
        )
    return ValidationResult(valid=True)


def validate_values(values: WaterAnalysisValues) -> list[str]:
    warnings: list[str] = []
    for metric in BASE_METRICS:
        value = values.get(metric)
        if value is None:
            continue
        result = validate_value(metric, value)
        if not result.valid and result.warning:
            warnings.append(result.warning)
    return warnings
