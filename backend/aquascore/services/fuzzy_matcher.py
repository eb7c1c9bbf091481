from __future__ import annotations

import re
import unicodedata
from collections.abc import Collection, Iterable
from dataclasses import dataclass

from rapidfuzz.distance import Levenshtein

from aquascore.core.config import settings

_TOKEN_RE = re.compile(r"[a-z0-9+]+")
_LETTER_RE = re.compile(r"[a-z]")
# Digits OCR commonly reads in place of letters: "S04", "N03", "C1".
_OCR_DIGIT_FOLD = str.maketrans("01", "ol")

# Units directly after a value ("80 mg", "80mg/l") and free-standing "mg/l" headers.
_VALUE_UNIT_RE = re.compile(r"(?<=[0-9])\s*(?:mg|mval|mmol|ug|µg)(?:\s*/\s*(?:l|liter|litre))?(?![a-z])")
_UNIT_RE = re.compile(r"(?<![a-z])(?:mg|mval|mmol|ug|µg)\s*(?:/\s*|\s+pro\s+)(?:l|liter|litre)(?![a-z])")
# "ca." as circa inside a line, e.g. "Gesamtmineralisation ca. 500".
_CIRCA_RE = re.compile(r"(?<=\S)\s+ca\.(?=\s)")

SHORT_SYNONYM_LENGTH = 3


@dataclass(frozen=True)
class LineMatch:
    normalized: str
    synonym: str
    start: int
    end: int
    distance: int = 0

    @property
    def fuzzy(self) -> bool:
        return self.distance > 0


@dataclass(frozen=True)
class Token:
    text: str
    start: int
    end: int


def _blank(match: re.Match[str]) -> str:
    return " " * len(match.group(0))


def strip_diacritics(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def normalize_line(line: str) -> str:
    """Lowercase, drop diacritics and blank out unit noise. Offsets of the rest stay stable."""
    normalized = strip_diacritics(line.lower())
    normalized = _VALUE_UNIT_RE.sub(_blank, normalized)
    normalized = _UNIT_RE.sub(_blank, normalized)
    normalized = _CIRCA_RE.sub(_blank, normalized)
    return normalized


def tokenize(normalized: str) -> list[Token]:
    return [Token(text=item.group(0), start=item.start(), end=item.end()) for item in _TOKEN_RE.finditer(normalized)]


def fuzzy_tolerance(synonym: str, max_distance: int | None = None) -> int:
    cap = settings.fuzzy_max_distance if max_distance is None else max_distance
    return min(cap, len(synonym) // 2)


def _is_delimited(normalized: str, start: int, end: int) -> bool:
    before = normalized[start - 1] if start > 0 else " "
    after = normalized[end] if end < len(normalized) else " "
    return not before.isalpha() and not after.isalpha()


def find_exact(normalized: str, synonyms: Iterable[str]) -> LineMatch | None:
    """Earliest verbatim synonym occurrence; the longest synonym wins on a tie.

    Synonyms of up to three characters ("ca", "k+", "no3") only count when they are
    not glued to other letters, otherwise "ca" would hit every "hydrogencarbonat".
    """
    best: LineMatch | None = None
    for synonym in synonyms:
        position = normalized.find(synonym)
        while position != -1:
            end = position + len(synonym)
            if len(synonym.strip("+-")) > SHORT_SYNONYM_LENGTH or _is_delimited(normalized, position, end):
                if best is None or position < best.start or (position == best.start and end > best.end):
                    best = LineMatch(normalized=normalized, synonym=synonym, start=position, end=end)
                break
            position = normalized.find(synonym, position + 1)
    return best


def _token_variants(token: str) -> tuple[str, ...]:
    folded = token.translate(_OCR_DIGIT_FOLD)
    return (token,) if folded == token else (token, folded)


def _distance(variants: tuple[str, ...], synonym: str, cutoff: int) -> int:
    return min(Levenshtein.distance(variant, synonym, score_cutoff=cutoff) for variant in variants)


def _claimed_elsewhere(variants: tuple[str, ...], foreign_synonyms: Iterable[str], distance: int) -> bool:
    return any(_distance(variants, synonym, distance) <= distance for synonym in foreign_synonyms)


def find_fuzzy(
    normalized: str,
    synonyms: Iterable[str],
    *,
    foreign_synonyms: Collection[str] = (),
    max_distance: int | None = None,
    min_synonym_length: int | None = None,
) -> LineMatch | None:
    """Bounded edit-distance match of a single token against the metric's synonyms.

    A token is only claimed when no synonym of another metric is at least as close,
    so "kalium" never becomes calcium via "kalzium". Tokens are also compared with
    0 and 1 read as o and l, the usual OCR slips in ion notation.
    """
    min_length = settings.fuzzy_min_synonym_length if min_synonym_length is None else min_synonym_length
    candidates = [
        synonym
        for synonym in synonyms
        if len(synonym) >= min_length and " " not in synonym and fuzzy_tolerance(synonym, max_distance) > 0
    ]
    if not candidates:
        return None

    best: LineMatch | None = None
    for token in tokenize(normalized):
        if not _LETTER_RE.search(token.text):
            continue

        variants = _token_variants(token.text)
        for synonym in candidates:
            tolerance = fuzzy_tolerance(synonym, max_distance)
            distance = _distance(variants, synonym, tolerance)
            if distance > tolerance:
                continue
            if best is not None and distance >= best.distance:
                continue
            if foreign_synonyms and _claimed_elsewhere(variants, foreign_synonyms, distance):
                continue
            best = LineMatch(
                normalized=normalized,
                synonym=synonym,
                start=token.start,
                end=token.end,
                distance=distance,
            )
    return best


def match_line(
    line: str,
    synonyms: Iterable[str],
    *,
    foreign_synonyms: Collection[str] = (),
    max_distance: int | None = None,
    min_synonym_length: int | None = None,
) -> LineMatch | None:
    normalized = normalize_line(line)
    synonyms = tuple(synonyms)
    exact = find_exact(normalized, synonyms)
    if exact is not None:
        return exact
    return find_fuzzy(
        normalized,
        synonyms,
        foreign_synonyms=foreign_synonyms,
        max_distance=max_distance,
        min_synonym_length=min_synonym_length,
    )
