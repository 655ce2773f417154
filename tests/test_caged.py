"""Unit tests for CAGED shape tagging."""

import pytest

from fretshapes.caged import (
    CAGED_REFERENCE_PATTERNS,
    MAX_SHAPES_PER_NOTE,
    caged_lookup,
    caged_scale_notes,
    relative_major,
)
from fretshapes.fretboard_map import scale_notes
from fretshapes.qualities import UnknownQualityError
from fretshapes.tuning import STANDARD_TUNING


def _tags(notes, string_index: int) -> list[tuple[int, str, tuple[str, ...]]]:
    return [
        (n.note.fret, n.note.interval_label, n.shapes)
        for n in notes
        if n.note.string_index == string_index
    ]


def test_reference_patterns_cover_the_five_shapes() -> None:
    assert [p.shape for p in CAGED_REFERENCE_PATTERNS] == ["A", "G", "E", "D", "C"]
    assert sorted(p.position for p in CAGED_REFERENCE_PATTERNS) == [1, 2, 3, 4, 5]
    assert all(0 <= s <= 5 for p in CAGED_REFERENCE_PATTERNS for s, _ in p.notes)


def test_a_major_low_e_string() -> None:
    notes = caged_scale_notes("A", "Major", STANDARD_TUNING, 5)
    assert _tags(notes, 0) == [
        (0, "5", ("C", "A")),
        (2, "6", ("G", "A")),
        (4, "7", ("G", "E")),
        (5, "R", ("G", "E")),
    ]


def test_minor_scales_use_the_relative_major_boxes() -> None:
    notes = caged_scale_notes("A", "Minor", STANDARD_TUNING)
    c_on_low_e = next(n for n in notes if n.note.position == (0, 8))
    assert c_on_low_e.note.interval_label == "b3"
    assert c_on_low_e.shapes == ("G", "E")


@pytest.mark.parametrize(
    "scale_name, expected",
    [("Major", 0), ("Minor", 3), ("Aeolian", 3), ("Minor Pentatonic", 3), ("Dorian", 0)],
)
def test_relative_major(scale_name: str, expected: int) -> None:
    assert relative_major(0, scale_name) == expected


def test_lookup_keeps_at_most_two_shapes_in_neck_order() -> None:
    lookup = caged_lookup(0, 18)
    assert all(len(patterns) <= MAX_SHAPES_PER_NOTE for patterns in lookup.values())
    assert all(0 <= fret <= 18 for _, fret in lookup)
    # box 5 (G) sits below box 4 (A) on the neck
    assert [p.shape for p in lookup[(0, 2)]] == ["G", "A"]


def test_notes_match_the_plain_scale_map() -> None:
    tagged = caged_scale_notes("E", "Major Pentatonic", STANDARD_TUNING, 15)
    plain = scale_notes("E", "Major Pentatonic", STANDARD_TUNING, 15)
    assert [n.note for n in tagged] == plain
    assert any(n.in_shape for n in tagged)


def test_unknown_scale() -> None:
    with pytest.raises(UnknownQualityError):
        caged_scale_notes("A", "Enigmatic", STANDARD_TUNING)


def test_negative_fret_count() -> None:
    with pytest.raises(ValueError):
        caged_scale_notes("A", "Major", STANDARD_TUNING, -1)
