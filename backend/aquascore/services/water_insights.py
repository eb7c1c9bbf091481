from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from aquascore.services.derived_metrics import compute_calcium_magnesium_ratio
from aquascore.services.metrics import METRIC_LABELS, WaterAnalysisValues
from aquascore.services.profile_targets import PROFILE_IDS, targets_for

Tone = Literal["positive", "info", "warning"]
FitStatus = Literal["ideal", "ok", "avoid"]


@dataclass(frozen=True)
class InsightBadge:
    id: str
    label: str
    description: str
    tone: Tone


@dataclass(frozen=True)
class SynergyInsight:
    id: str
    title: str
    description: str
    tone: Tone


@dataclass(frozen=True)
class ProfileFit:
    status: FitStatus
    reasons: tuple[str, ...] = ()


@dataclass(frozen=True)
class WaterInsights:
    badges: tuple[InsightBadge, ...]
    synergies: tuple[SynergyInsight, ...]
    profile_fit: dict[str, ProfileFit] = field(default_factory=dict)
    calcium_magnesium_ratio: float | None = None


@dataclass(frozen=True)
class _ThresholdRule:
    id: str
    metric: str
    label: str
    description: str
    tone: Tone
    min: float | None = None
    max: float | None = None

    def matches(self, value: float | None) -> bool:
        if value is None:
            return False
        if self.min is not None and value < self.min:
            return False
        if self.max is not None and value > self.max:
            return False
        return True


_REGULATORY_RULES: tuple[_ThresholdRule, ...] = (
    _ThresholdRule(
        id="calcium_high",
        metric="calcium",
        label="Calciumhaltig",
        description="Mehr als 150 mg/L Calcium, entspricht der Min/TafelWV.",
        tone="positive",
        min=150,
    ),
    _ThresholdRule(
        id="magnesium_high",
        metric="magnesium",
        label="Magnesiumhaltig",
        description="Mehr als 50 mg/L Magnesium deckt ein gutes Stück des Tagesbedarfs.",
        tone="positive",
        min=50,
    ),
    _ThresholdRule(
        id="bicarbonate_high",
        metric="bicarbonate",
        label="Hydrogencarbonatreich",
        description="Über 600 mg/L Hydrogencarbonat, starker Säurepuffer.",
        tone="positive",
        min=600,
    ),
    _ThresholdRule(
        id="bicarbonate_heal",
        metric="bicarbonate",
        label="Heilwasser-Puffer",
        description="Über 1300 mg/L Hydrogencarbonat mit klinischer Evidenz bei Sodbrennen.",
        tone="positive",
        min=1300,
    ),
    _ThresholdRule(
        id="sulfate_high",
        metric="sulfate",
        label="Sulfathaltig",
        description="Mehr als 200 mg/L Sulfat, traditionell verdauungsfördernd.",
        tone="info",
        min=200,
    ),
    _ThresholdRule(
        id="sodium_low",
        metric="sodium",
        label="Natriumarm",
        description="Weniger als 20 mg/L Natrium, geeignet für Babynahrung und bei Bluthochdruck.",
        tone="positive",
        max=20,
    ),
    _ThresholdRule(
        id="sodium_high",
        metric="sodium",
        label="Natriumhaltig",
        description="Mehr als 200 mg/L Natrium als Elektrolytquelle nach dem Sport.",
        tone="info",
        min=200,
    ),
)


def evaluate_badges(values: WaterAnalysisValues) -> list[InsightBadge]:
    return [
        InsightBadge(id=rule.id, label=rule.label, description=rule.description, tone=rule.tone)
        for rule in _REGULATORY_RULES
        if rule.matches(values.get(rule.metric))
    ]


def _calcium_magnesium_synergy(ratio: float | None) -> SynergyInsight | None:
    if ratio is None:
        return None
    if 1.6 <= ratio <= 2.4:
        return SynergyInsight(
            id="ca-mg-balanced",
            title="Ausgewogenes Ca/Mg-Verhältnis",
            description="Calcium zu Magnesium liegt nahe 2:1 und gilt als günstig für Herz, Kreislauf und Muskeln.",
            tone="positive",
        )
    if ratio < 1.3:
        return SynergyInsight(
            id="ca-mg-mag-high",
            title="Magnesium dominiert",
            description="Deutlich mehr Magnesium als Calcium; sehr mineralreich und geschmacklich intensiver.",
            tone="info",
        )
    if ratio > 3:
        return SynergyInsight(
            id="ca-mg-calcium-heavy",
            title="Calciumbetont",
            description="Calcium überwiegt stark. Mit magnesiumreichen Quellen kombinieren.",
            tone="warning",
        )
    return None


def _kidney_synergy(values: WaterAnalysisValues) -> SynergyInsight | None:
    calcium = values.calcium or 0.0
    magnesium = values.magnesium or 0.0
    bicarbonate = values.bicarbonate or 0.0

    if calcium >= 150 and magnesium >= 70 and bicarbonate >= 1300:
        return SynergyInsight(
            id="kidney-balance",
            title="Nierenstein-Schutzprofil",
            description="Magnesium und Hydrogencarbonat wirken dem hohen Calcium als natürliche Inhibitoren entgegen.",
            tone="positive",
        )
    if calcium >= 150 and magnesium < 30:
        return SynergyInsight(
            id="kidney-risk",
            title="Calciumreich ohne Gegenspieler",
            description="Hoher Calciumwert bei wenig Magnesium. Bei Nierensteinrisiko ein Wasser mit mehr Mg/HCO3 wählen.",
            tone="warning",
        )
    return None


def _reflux_synergy(values: WaterAnalysisValues) -> SynergyInsight | None:
    bicarbonate = values.bicarbonate or 0.0
    if bicarbonate >= 1300:
        return SynergyInsight(
            id="sodbrennen",
            title="Säurepuffer (klinisch belegt)",
            description="Über 1300 mg/L Hydrogencarbonat zeigen in Studien klare Vorteile bei Sodbrennen.",
            tone="positive",
        )
    if bicarbonate >= 600:
        return SynergyInsight(
            id="magenfreundlich",
            title="Magenfreundliches Wasser",
            description="Viel Hydrogencarbonat unterstützt die Neutralisation von Säuren.",
            tone="info",
        )
    return None


def _electrolyte_synergy(values: WaterAnalysisValues) -> SynergyInsight | None:
    magnesium = values.magnesium or 0.0
    sodium = values.sodium or 0.0
    if magnesium >= 50 and sodium >= 50:
        return SynergyInsight(
            id="electrolyte-boost",
            title="Elektrolyt-Boost",
            description="Magnesiumreich mit messbarem Natrium, gut um Mineralverluste nach dem Training auszugleichen.",
            tone="positive",
        )
    if magnesium >= 50:
        return SynergyInsight(
            id="magnesium-power",
            title="Magnesiumfokus",
            description="Mehr als 50 mg/L Magnesium decken schnell den Muskelbedarf.",
            tone="info",
        )
    return None


def _baby_fit(values: WaterAnalysisValues) -> ProfileFit:
    sodium = values.sodium
    nitrate = values.nitrate
    if sodium is not None and sodium < 20 and nitrate is not None and nitrate < 10:
        return ProfileFit("ideal", ("Sehr natriumarm (<20 mg/L)", "Sehr niedriger Nitratwert (<10 mg/L)"))
    if sodium is not None and sodium < 50 and nitrate is not None and nitrate < 25:
        return ProfileFit("ok", ("Akzeptabel für Babynahrung (unter 50 mg/L Na, unter 25 mg/L Nitrat)",))

    reasons: list[str] = []
    if sodium is not None and sodium >= 50:
        reasons.append("Natrium zu hoch für Babynutzung (>50 mg/L).")
    if nitrate is not None and nitrate >= 25:
        reasons.append("Nitrat oberhalb der Baby-Empfehlung (>25 mg/L).")
    return ProfileFit("avoid", tuple(reasons) or ("Keine verlässlichen Werte für Babys.",))


def _sport_fit(values: WaterAnalysisValues) -> ProfileFit:
    magnesium = values.magnesium
    bicarbonate = values.bicarbonate
    rich_magnesium = magnesium is not None and magnesium >= 50
    rich_bicarbonate = bicarbonate is not None and bicarbonate >= 600
    if rich_magnesium or rich_bicarbonate:
        reasons: list[str] = []
        if rich_magnesium:
            reasons.append("Magnesiumhaltig (>50 mg/L).")
        if rich_bicarbonate:
            reasons.append("Hydrogencarbonatreich (>600 mg/L) als Säurepuffer.")
        return ProfileFit("ideal", tuple(reasons))
    if (magnesium is not None and magnesium >= 20) or (bicarbonate is not None and bicarbonate >= 300):
        return ProfileFit("ok", ("Moderate Mineralisierung, kombinierbar mit anderen Quellen.",))
    return ProfileFit("avoid", ("Sehr niedrige Mineralisierung, kaum Mehrwert nach dem Training.",))


def _blood_pressure_fit(values: WaterAnalysisValues) -> ProfileFit:
    sodium = values.sodium
    if sodium is not None and sodium < 20:
        return ProfileFit("ideal", ("Natriumarm (<20 mg/L).",))
    if sodium is not None and sodium < 50:
        return ProfileFit("ok", ("Moderater Natriumwert (<50 mg/L).",))
    return ProfileFit("avoid", ("Natriumreich (>50 mg/L) oder unbekannt, nicht optimal bei Hypertonie.",))


def _target_window_fit(values: WaterAnalysisValues, profile_id: str) -> ProfileFit:
    outside: list[str] = []
    off_optimal: list[str] = []
    checked = 0
    for metric, target in targets_for(profile_id).items():
        value = values.get(metric)
        if value is None:
            continue
        checked += 1
        label = METRIC_LABELS[metric]
        if value < target.min or value > target.max:
            outside.append(f"{label} außerhalb des Zielbereichs.")
        elif not target.is_optimal(value):
            off_optimal.append(f"{label} nicht im idealen Fenster.")

    if checked == 0:
        return ProfileFit("ok", ("Keine verlässlichen Werte für dieses Profil.",))
    if outside:
        return ProfileFit("avoid", tuple(outside))
    if off_optimal:
        return ProfileFit("ok", tuple(off_optimal))
    return ProfileFit("ideal", ("Alle bekannten Werte im idealen Fenster.",))


def evaluate_profile_fit(values: WaterAnalysisValues) -> dict[str, ProfileFit]:
    fit: dict[str, ProfileFit] = {}
    for profile_id in PROFILE_IDS:
        if profile_id == "baby":
            fit[profile_id] = _baby_fit(values)
        elif profile_id == "sport":
            fit[profile_id] = _sport_fit(values)
        elif profile_id == "blood_pressure":
            fit[profile_id] = _blood_pressure_fit(values)
        else:
            fit[profile_id] = _target_window_fit(values, profile_id)
    return fit


def derive_water_insights(values: WaterAnalysisValues) -> WaterInsights:
    ratio = compute_calcium_magnesium_ratio(values.calcium, values.magnesium)
    candidates = (
        _calcium_magnesium_synergy(ratio),
        _kidney_synergy(values),
        _reflux_synergy(values),
        _electrolyte_synergy(values),
    )
    return WaterInsights(
        badges=tuple(evaluate_badges(values)),
        synergies=tuple(item for item in candidates if item is not None),
        profile_fit=evaluate_profile_fit(values),
        calcium_magnesium_ratio=ratio,
    )
