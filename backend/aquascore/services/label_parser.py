from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from aquascore.services.fuzzy_matcher import find_exact, find_fuzzy, normalize_line
from aquascore.services.label_dictionary import DEFAULT_LABEL_DICTIONARY, MineralLabelDictionary
from aquascore.services.metrics import BASE_METRICS, ChemicalMetric, WaterAnalysisValues
from aquascore.services.number_extractor import extract_number, parse_decimal

logger = logging.getLogger("aquascore.parser")


@dataclass(frozen=True)
class LabelDocument:
    text: str
    lines: tuple[str, ...]
    normalized_lines: tuple[str, ...]

    @classmethod
    def from_text(cls, text: str) -> LabelDocument:
        lines = split_lines(text)
        return cls(text=text, lines=lines, normalized_lines=tuple(normalize_line(line) for line in lines))


def split_lines(text: str) -> tuple[str, ...]:
    unified = text.replace("\r\n", "\n").replace("\r", "\n")
    return tuple(line.strip() for line in unified.split("\n") if line.strip())


class ResolutionStrategy(ABC):
    name = "base"

    @abstractmethod
    def resolve(self, metric: ChemicalMetric, document: LabelDocument) -> float | None:
        """Value for ``metric`` found in ``document``, or None."""


class LineScanStrategy(ResolutionStrategy):
    """Per-line label matching: verbatim synonyms first, then OCR-tolerant matching, line by line.

    The value is read after the label on the same line, or from the start of the
    following line when OCR split the pair. The first line that yields a number wins.
    """

    name = "line_scan"

    def __init__(self, dictionary: MineralLabelDictionary = DEFAULT_LABEL_DICTIONARY) -> None:
        self.dictionary = dictionary
        self._foreign = {metric: dictionary.foreign_synonyms(metric) for metric in dictionary.entries}

    def resolve(self, metric: ChemicalMetric, document: LabelDocument) -> float | None:
        synonyms = self.dictionary.synonyms_for(metric)
        if not synonyms:
            return None

        foreign = self._foreign.get(metric, frozenset())
        lines = document.normalized_lines
        for index, normalized in enumerate(lines):
            match = find_exact(normalized, synonyms)
            if match is None:
                match = find_fuzzy(normalized, synonyms, foreign_synonyms=foreign)
            if match is None:
                continue

            value = extract_number(normalized, match.end)
            if value is None and index + 1 < len(lines):
                value = extract_number(lines[index + 1])
            if value is not None:
                return value
        return None


class LegacyRegexStrategy(ResolutionStrategy):
    """Whole-text regex per metric for layouts the line scan cannot split sensibly."""

    name = "legacy_regex"

    def __init__(self, dictionary: MineralLabelDictionary = DEFAULT_LABEL_DICTIONARY) -> None:
        self.dictionary = dictionary

    def resolve(self, metric: ChemicalMetric, document: LabelDocument) -> float | None:
        pattern = self.dictionary.legacy_pattern_for(metric)
        if pattern is None:
            return None

        match = pattern.search(document.text)
        if not match or not match.group(1):
            return None
        return parse_decimal(match.group(1))


class LabelParser:
    def __init__(self, strategies: Sequence[ResolutionStrategy] | None = None) -> None:
        self.strategies: tuple[ResolutionStrategy, ...] = tuple(
            strategies if strategies is not None else (LineScanStrategy(), LegacyRegexStrategy())
        )

    def parse(self, text: str | None) -> WaterAnalysisValues:
        if not text or not text.strip():
            return WaterAnalysisValues()

        document = LabelDocument.from_text(text)
        resolved: dict[str, float] = {}
        for metric in BASE_METRICS:
            for strategy in self.strategies:
                value = strategy.resolve(metric, document)
                if value is not None:
                    resolved[metric] = value
                    logger.debug("resolved %s=%s via %s", metric, value, strategy.name)
                    break

        return WaterAnalysisValues(**resolved)


default_parser = LabelParser()


def parse_text_to_analysis(text: str | None) -> WaterAnalysisValues:
    return default_parser.parse(text)
