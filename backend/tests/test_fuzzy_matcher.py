import pytest

from aquascore.services.fuzzy_matcher import (
    find_exact,
    fuzzy_tolerance,
    match_line,
    normalize_line,
    strip_diacritics,
    tokenize,
)
from aquascore.services.label_dictionary import DEFAULT_LABEL_DICTIONARY
from aquascore.services.number_extractor import extract_number, parse_decimal

CALCIUM = DEFAULT_LABEL_DICTIONARY.synonyms_for("calcium")


def test_normalize_line_blanks_units_and_keeps_offsets() -> None:
    line = "Natrium: 15 mg/L"

    normalized = normalize_line(line)

    assert len(normalized) == len(line)
    assert normalized.strip() == "natrium: 15"


def test_strip_diacritics() -> None:
    assert strip_diacritics("Abdampfrückstand") == "Abdampfruckstand"


def test_tokenize_keeps_ion_charges() -> None:
    assert [token.text for token in tokenize("ca2+: 80")] == ["ca2+", "80"]


@pytest.mark.parametrize(
    ("synonym", "expected"),
    [("k", 0), ("ca", 1), ("ca2+", 2), ("calcium", 2)],
)
def test_fuzzy_tolerance_grows_with_synonym_length(synonym: str, expected: int) -> None:
    assert fuzzy_tolerance(synonym, max_distance=2) == expected


def test_short_synonym_must_not_be_glued_to_letters() -> None:
    assert find_exact("hydrogencarbonat: 250", CALCIUM) is None


def test_longest_synonym_wins_at_same_position() -> None:
    match = find_exact("ca2+: 80", CALCIUM)

    assert match is not None
    assert match.synonym == "ca2+"
    assert match.end == 4


def test_match_line_falls_back_to_edit_distance() -> None:
    match = match_line("Calclum 80", CALCIUM)

    assert match is not None
    assert match.fuzzy
    assert match.synonym == "calcium"
    assert match.distance == 1


def test_match_line_yields_to_closer_foreign_synonym() -> None:
    foreign = DEFAULT_LABEL_DICTIONARY.foreign_synonyms("calcium")

    assert match_line("Kalium 3", CALCIUM) is not None
    assert match_line("Kalium 3", CALCIUM, foreign_synonyms=foreign) is None


def test_match_line_without_label() -> None:
    assert match_line("random text", CALCIUM) is None


def test_match_line_reads_digits_as_letters_in_ion_notation() -> None:
    chloride = DEFAULT_LABEL_DICTIONARY.synonyms_for("chloride")

    match = match_line("C1: 12", chloride, foreign_synonyms=DEFAULT_LABEL_DICTIONARY.foreign_synonyms("chloride"))

    assert match is not None
    assert match.synonym == "cl"
    assert match.distance == 0


def test_misread_chloride_is_not_claimed_by_calcium() -> None:
    foreign = DEFAULT_LABEL_DICTIONARY.foreign_synonyms("calcium")

    assert match_line("C1: 12", CALCIUM, foreign_synonyms=foreign) is None


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("ph: 7,5", 7.5),
        ("ph: 7.5", 7.5),
        ("nitrat: 0,05", 0.05),
        ("ca2+: 80", 80),
        ("(ca 2+) 80", 80),
        ("(so4 2-) 30", 30),
        ("80-100", 80),
        ("abc", None),
        ("12345", None),
    ],
)
def test_extract_number(line: str, expected: float | None) -> None:
    assert extract_number(line) == expected


def test_extract_number_from_offset() -> None:
    assert extract_number("calcium: 80 magnesium: 25", 12) == 25


def test_parse_decimal_rejects_garbage() -> None:
    assert parse_decimal("7,5") == 7.5
    assert parse_decimal("abc") is None
