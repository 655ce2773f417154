"""Unit tests for ShapeResolver (anchor search, validation, dedup, ordering)."""

import logging

import pytest

from fretshapes.pitch import UnknownPitchError, semitones_above
from fretshapes.qualities import TRIAD_INTERVALS, UnknownQualityError, intervals_for
from fretshapes.shape_catalog import (
    ADG,
    DGB,
    EAD,
    GBE,
    ShapeCatalog,
    UnknownVariantError,
    default_catalog,
)
from fretshapes.shape_models import RelativeShape
from fretshapes.shape_resolver import ShapeResolver, resolve_shapes
from fretshapes.tuning import (
    DROP_D_TUNING,
    LEFT_HANDED,
    STANDARD_TUNING,
    FretboardLayout,
    InvalidTuningError,
    coordinate_of,
)

ALL_GROUPS = (EAD, ADG, DGB, GBE)


def _positions(instance) -> list[tuple[int, int]]:
    return [note.position for note in instance.notes]


# ── Concrete scenarios ────────────────────────────────────────────────────────

def test_c_major_on_low_strings() -> None:
    instances = resolve_shapes("C", "Major", "all", STANDARD_TUNING, EAD, 12)

    assert [(i.variant, i.anchor_fret) for i in instances] == [("Root", 8), ("2nd", 3), ("1st", 10)]
    assert _positions(instances[0]) == [(0, 8), (1, 7), (2, 5)]
    assert _positions(instances[1]) == [(0, 3), (1, 3), (2, 2)]
    assert _positions(instances[2]) == [(0, 12), (1, 10), (2, 10)]
    assert [n.interval_label for n in instances[0].notes] == ["R", "3", "5"]
    assert [n.interval_label for n in instances[1].notes] == ["5", "R", "3"]


def test_c_major_anchor_note_is_c() -> None:
    for instance in resolve_shapes("C", "Major", "all", STANDARD_TUNING, EAD, 12):
        anchor = next(n for n in instance.notes if n.string_index == instance.anchor_string)
        assert anchor.pitch_class == 3
        assert anchor.is_root


def test_zero_fret_limit_leaves_c_major_empty() -> None:
    assert resolve_shapes("C", "Major", "all", STANDARD_TUNING, EAD, 0) == []


def test_zero_fret_limit_finds_open_shapes() -> None:
    instances = resolve_shapes("E", "Minor", "all", STANDARD_TUNING, GBE, 0)
    assert len(instances) == 1
    assert _positions(instances[0]) == [(3, 0), (4, 0), (5, 0)]
    assert all(note.fret == 0 for note in instances[0].notes)


def test_unreachable_root_is_empty_not_an_error() -> None:
    resolution = ShapeResolver().resolve("C#", "Major", "all", STANDARD_TUNING, EAD, 2)
    assert resolution.instances == []
    assert resolution.diagnostics == []


def test_unknown_quality_fails_before_any_search() -> None:
    with pytest.raises(UnknownQualityError):
        resolve_shapes("C", "Sus9", "all", STANDARD_TUNING, EAD, 12)


def test_identical_placements_are_merged() -> None:
    catalog = ShapeCatalog(
        [
            RelativeShape("Major", "Root", EAD, (3, 2, 0), 0),
            RelativeShape("Major", "Shifted", EAD, (5, 4, 2), 0),
        ]
    )
    instances = resolve_shapes("C", "Major", "all", STANDARD_TUNING, EAD, 12, catalog=catalog)

    assert len(instances) == 1
    assert instances[0].variant == "Root"
    assert instances[0].display_group_id == 0


# ── Invariants over the whole catalog ─────────────────────────────────────────

@pytest.mark.parametrize("quality", list(TRIAD_INTERVALS))
@pytest.mark.parametrize("group", ALL_GROUPS)
def test_every_instance_is_valid(quality: str, group: tuple[int, ...]) -> None:
    intervals = intervals_for(quality)
    fret_limit = 15
    for root in range(12):
        instances = resolve_shapes(root, quality, "all", STANDARD_TUNING, group, fret_limit)
        keys = [instance.key for instance in instances]
        assert len(keys) == len(set(keys))

        for instance in instances:
            assert len(instance.notes) == len(intervals)
            assert sorted(n.string_index for n in instance.notes) == list(group)
            for note in instance.notes:
                assert 0 <= note.fret <= fret_limit
                assert semitones_above(note.pitch_class, root) in intervals
            anchor = next(n for n in instance.notes if n.string_index == instance.anchor_string)
            assert anchor.pitch_class == root


def test_standard_tuning_catalog_has_no_diagnostics() -> None:
    resolver = ShapeResolver()
    for quality in TRIAD_INTERVALS:
        for group in ALL_GROUPS:
            resolution = resolver.resolve("A", quality, "all", STANDARD_TUNING, group, 24)
            assert resolution.diagnostics == []
            assert len(resolution.instances) >= 3


# ── Ordering and display groups ───────────────────────────────────────────────

def test_discovery_order_is_catalog_then_anchor_fret() -> None:
    instances = resolve_shapes("C", "Major", "all", STANDARD_TUNING, EAD, 24)
    assert [i.anchor_fret for i in instances] == [8, 20, 3, 15, 10, 22]
    assert [i.display_group_id for i in instances] == [0, 1, 2, 3, 4, 5]


def test_first_group_id_offsets_display_groups() -> None:
    instances = resolve_shapes("C", "Major", "all", STANDARD_TUNING, EAD, 12, first_group_id=10)
    assert [i.display_group_id for i in instances] == [10, 11, 12]
    for instance in instances:
        assert {c.display_group_id for c in instance.connectors} == {instance.display_group_id}


def test_variant_filter() -> None:
    instances = resolve_shapes("C", "Major", "2nd", STANDARD_TUNING, EAD, 12)
    assert [i.variant for i in instances] == ["2nd"]


def test_repeated_calls_are_independent() -> None:
    first = resolve_shapes("G", "Minor", "all", STANDARD_TUNING, DGB, 14)
    second = resolve_shapes("G", "Minor", "all", STANDARD_TUNING, DGB, 14)
    assert first == second


# ── Connectors and coordinates ────────────────────────────────────────────────

def test_contiguous_triads_get_two_adjacent_connectors() -> None:
    for instance in resolve_shapes("D", "Major", "all", STANDARD_TUNING, ADG, 14):
        assert len(instance.connectors) == 2
        for connector in instance.connectors:
            assert connector.to_note.string_index - connector.from_note.string_index == 1


def test_notes_carry_layout_coordinates() -> None:
    layout = FretboardLayout.scaled(0.8)
    instances = resolve_shapes("C", "Major", "Root", STANDARD_TUNING, EAD, 12, layout=layout)
    for note in instances[0].notes:
        assert (note.x, note.y) == coordinate_of(note.string_index, note.fret, layout)


def test_left_handed_changes_geometry_only() -> None:
    right = resolve_shapes("F", "Minor", "all", STANDARD_TUNING, GBE, 12)
    left = resolve_shapes(
        "F", "Minor", "all", STANDARD_TUNING, GBE, 12, layout=FretboardLayout(handedness=LEFT_HANDED)
    )

    assert [i.key for i in left] == [i.key for i in right]
    for left_instance, right_instance in zip(left, right):
        left_x = [n.x for n in left_instance.notes]
        right_x = [n.x for n in right_instance.notes]
        assert left_x == sorted(left_x, reverse=True)
        assert right_x == sorted(right_x)
        for left_note, right_note in zip(left_instance.notes, right_instance.notes):
            assert left_note.y == right_note.y


# ── Catalog data errors ───────────────────────────────────────────────────────

def test_wrong_note_count_is_diagnosed_and_skipped() -> None:
    catalog = ShapeCatalog([RelativeShape("Major", "Root", (0, 1), (3, 2), 0)])
    resolution = ShapeResolver(catalog=catalog).resolve("C", "Major", "all", STANDARD_TUNING, (0, 1), 12)

    assert resolution.instances == []
    assert [d.kind for d in resolution.diagnostics] == ["note-count"]
    assert resolution.diagnostics[0].shape is catalog.select("Major", (0, 1))[0]


def test_invalid_entry_does_not_stop_other_entries(caplog: pytest.LogCaptureFixture) -> None:
    catalog = ShapeCatalog(
        [
            RelativeShape("Major", "Root", EAD, (0, 0, 0), 0),
            RelativeShape("Major", "Root", EAD, (3, 2, 0), 0),
        ]
    )
    with caplog.at_level(logging.WARNING, logger="fretshapes.shape_resolver"):
        resolution = ShapeResolver(catalog=catalog).resolve("C", "Major", "all", STANDARD_TUNING, EAD, 12)

    assert [_positions(i) for i in resolution.instances] == [[(0, 8), (1, 7), (2, 5)]]
    assert [d.kind for d in resolution.diagnostics] == ["membership"]
    assert "outside Major" in caplog.text


def test_drop_d_breaks_low_string_shapes() -> None:
    resolution = ShapeResolver().resolve("C", "Major", "Root", DROP_D_TUNING, EAD, 12)
    assert resolution.instances == []
    assert [d.kind for d in resolution.diagnostics] == ["membership"]


def test_out_of_range_anchor_is_diagnosed() -> None:
    resolution = ShapeResolver().resolve("C", "Major", "1st", STANDARD_TUNING, EAD, 11)
    assert resolution.instances == []
    assert [d.kind for d in resolution.diagnostics] == ["out-of-range"]


# ── Input errors ──────────────────────────────────────────────────────────────

def test_unknown_root() -> None:
    with pytest.raises(UnknownPitchError):
        resolve_shapes("H", "Major", "all", STANDARD_TUNING, EAD, 12)


def test_unknown_variant() -> None:
    with pytest.raises(UnknownVariantError):
        resolve_shapes("C", "Major", "3rd", STANDARD_TUNING, EAD, 12)


def test_raw_offsets_are_validated_as_a_tuning() -> None:
    assert resolve_shapes("C", "Major", "all", [7, 0, 5, 10, 2, 7], EAD, 12) == resolve_shapes(
        "C", "Major", "all", STANDARD_TUNING, EAD, 12
    )
    with pytest.raises(InvalidTuningError):
        resolve_shapes("C", "Major", "all", [7, 0, 5], EAD, 12)


@pytest.mark.parametrize("group", [(), (0, 1, 7), (0, 0, 1)])
def test_bad_string_group(group: tuple[int, ...]) -> None:
    with pytest.raises(ValueError):
        resolve_shapes("C", "Major", "all", STANDARD_TUNING, group, 12)


def test_negative_fret_limit() -> None:
    with pytest.raises(ValueError, match="Fret limit"):
        resolve_shapes("C", "Major", "all", STANDARD_TUNING, EAD, -1)


def test_default_catalog_is_used_when_none_given() -> None:
    assert ShapeResolver().catalog is default_catalog()
