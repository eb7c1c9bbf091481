from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from aquascore.services.metrics import BASE_METRICS, ChemicalMetric


@dataclass(frozen=True)
class MetricLabels:
    metric: ChemicalMetric
    synonyms: tuple[str, ...]
    legacy_pattern: re.Pattern[str]


@dataclass(frozen=True)
class MineralLabelDictionary:
    entries: Mapping[ChemicalMetric, MetricLabels]

    def synonyms_for(self, metric: ChemicalMetric) -> tuple[str, ...]:
        entry = self.entries.get(metric)
        return entry.synonyms if entry else ()

    def legacy_pattern_for(self, metric: ChemicalMetric) -> re.Pattern[str] | None:
        entry = self.entries.get(metric)
        return entry.legacy_pattern if entry else None

    def foreign_synonyms(self, metric: ChemicalMetric) -> frozenset[str]:
        """Synonyms that belong to every metric except ``metric``."""
        return frozenset(
            synonym
            for other, entry in self.entries.items()
            if other != metric
            for synonym in entry.synonyms
        )


_NUMBER = r"([0-9]+[.,]?[0-9]*)"

# Synonyms are stored normalised: lowercase, no diacritics.
_LABELS: tuple[MetricLabels, ...] = (
    MetricLabels(
        metric="ph",
        synonyms=("ph", "ph-wert", "ph wert", "ph-value", "ph value"),
        legacy_pattern=re.compile(rf"pH[\-Wert]*[:\s]*{_NUMBER}", re.IGNORECASE),
    ),
    MetricLabels(
        metric="calcium",
        synonyms=("calcium", "kalzium", "calzium", "ca", "ca2+", "ca2", "ca++"),
        legacy_pattern=re.compile(rf"(?:Kalzium|Calcium|Ca2?\+?)[:\s]*{_NUMBER}", re.IGNORECASE),
    ),
    MetricLabels(
        metric="magnesium",
        synonyms=("magnesium", "mg", "mg2+", "mg2", "mg++"),
        legacy_pattern=re.compile(rf"(?:Magnesium|Mg2?\+?)[:\s]*{_NUMBER}", re.IGNORECASE),
    ),
    MetricLabels(
        metric="sodium",
        synonyms=("natrium", "sodium", "na", "na+"),
        legacy_pattern=re.compile(rf"(?:Natrium|Sodium|Na\+?)[:\s]*{_NUMBER}", re.IGNORECASE),
    ),
    MetricLabels(
        metric="potassium",
        synonyms=("kalium", "potassium", "k", "k+"),
        legacy_pattern=re.compile(
            rf"(?:Kalium|Potassium|Kaliumhydrogencarbonat|K\+?)[:\s]*{_NUMBER}",
            re.IGNORECASE,
        ),
    ),
    MetricLabels(
        metric="chloride",
        synonyms=("chlorid", "chloride", "cl", "cl-"),
        legacy_pattern=re.compile(rf"(?:Chlorid|Chloride|Cl-?)[:\s]*{_NUMBER}", re.IGNORECASE),
    ),
    MetricLabels(
        metric="sulfate",
        synonyms=("sulfat", "sulfate", "sulphate", "sulphat", "so4", "so4--", "so42-"),
        legacy_pattern=re.compile(rf"(?:Sulfat|Sulphate|Sulfate|SO4)[:\s-]*{_NUMBER}", re.IGNORECASE),
    ),
    MetricLabels(
        metric="nitrate",
        synonyms=("nitrat", "nitrate", "no3", "no3-"),
        legacy_pattern=re.compile(rf"(?:Nitrat|Nitrate|NO3)[:\s-]*{_NUMBER}", re.IGNORECASE),
    ),
    MetricLabels(
        metric="bicarbonate",
        synonyms=(
            "hydrogencarbonat",
            "hydrogencarbonate",
            "hydrogen carbonate",
            "bicarbonat",
            "bicarbonate",
            "bikarbonat",
            "hco3",
            "hco3-",
        ),
        legacy_pattern=re.compile(
            rf"(?:Hydrogencarbonat|Bicarbonat|Bikarbonat|HCO3)[:\s-]*{_NUMBER}",
            re.IGNORECASE,
        ),
    ),
    MetricLabels(
        metric="total_dissolved_solids",
        synonyms=(
            "gesamtmineralisation",
            "mineralstoffgehalt",
            "total dissolved solids",
            "tds",
            "abdampfruckstand",
            "trockenruckstand",
        ),
        legacy_pattern=re.compile(
            rf"(?:Gesamtmineralisation|TDS|Mineralstoffgehalt)[:\s]*{_NUMBER}",
            re.IGNORECASE,
        ),
    ),
)


def build_label_dictionary(labels: tuple[MetricLabels, ...] = _LABELS) -> MineralLabelDictionary:
    by_metric = {entry.metric: entry for entry in labels}
    missing = [metric for metric in BASE_METRICS if metric not in by_metric]
    if missing:
        raise ValueError(f"Label dictionary lacks entries for: {', '.join(missing)}")
    return MineralLabelDictionary(entries=MappingProxyType(by_metric))


DEFAULT_LABEL_DICTIONARY = build_label_dictionary()
