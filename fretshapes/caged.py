"""CAGED map: scale notes tagged with the movable CAGED shapes they fall in."""

from dataclasses import dataclass
from typing import Final

from fretshapes.fretboard_map import scale_notes
from fretshapes.pitch import SEMITONES_PER_OCTAVE, parse_pitch
from fretshapes.qualities import scale_for
from fretshapes.shape_models import FretNote
from fretshapes.tuning import FretboardLayout, Tuning

CAGED_REFERENCE_KEY: Final[int] = 0  # patterns below are written for A major
MAX_SHAPES_PER_NOTE: Final[int] = 2
DEFAULT_CAGED_FRETS: Final[int] = 18

# Octave shifts tried for every reference note; enough to cover a 24-fret neck.
_OCTAVE_SHIFTS: Final = range(-2, 3)


@dataclass(frozen=True)
class CagedPattern:
    """
    One CAGED box of the A major scale.

    Attributes:
        shape:    Open-chord shape the box is built around ("C", "A", ...).
        position: Box number up the neck, 1-5; 5 sits below 1.
        notes:    (string, fret) pairs of the box in the reference key.
    """

    shape: str
    position: int
    notes: tuple[tuple[int, int], ...]

    @property
    def sort_key(self) -> int:
        """Neck order of the box: 5, 1, 2, 3, 4."""
        return 0 if self.position == 5 else self.position


def _box(shape: str, position: int, *frets_per_string: tuple[int, ...]) -> CagedPattern:
    notes = tuple(
        (string_index, fret)
        for string_index, frets in enumerate(frets_per_string)
        for fret in frets
    )
    return CagedPattern(shape, position, notes)


# Frets listed low E to high e.
CAGED_REFERENCE_PATTERNS: Final[tuple[CagedPattern, ...]] = (
    _box("A", 4, (10, 12, 14), (11, 12, 14), (11, 12, 14), (11, 13, 14), (12, 14, 15), (12, 14)),
    _box("G", 5, (2, 4, 5), (2, 4, 5), (2, 4), (1, 2, 4), (2, 3, 5), (2, 4, 5)),
    _box("E", 1, (4, 5, 7), (4, 5, 7), (4, 6, 7), (4, 6, 7), (5, 7), (4, 5, 7)),
    _box("D", 2, (7, 9, 10), (7, 9), (6, 7, 9), (6, 7, 9), (7, 9, 10), (7, 9, 10)),
    _box("C", 3, (9, 10, 12), (9, 11, 12), (9, 11, 12), (9, 11), (9, 10, 12), (9, 10, 12)),
)


@dataclass(frozen=True)
class CagedNote:
    """A scale note and the CAGED shapes (at most two, in neck order) containing it."""

    note: FretNote
    shapes: tuple[str, ...] = ()

    @property
    def in_shape(self) -> bool:
        return bool(self.shapes)


def relative_major(root_class: int, scale_name: str) -> int:
    """Root of the major key whose CAGED boxes cover *scale_name*; minor scales shift up a minor third."""
    if "minor" in scale_for(scale_name).name.lower():
        return (root_class + 3) % SEMITONES_PER_OCTAVE
    return root_class


def caged_lookup(major_root: int, fret_count: int) -> dict[tuple[int, int], tuple[CagedPattern, ...]]:
    """
    Slide every reference box to *major_root* and index it by position.

    Each (string, fret) keeps the first MAX_SHAPES_PER_NOTE distinct shapes
    that reach it, sorted into neck order.
    """
    slide = (major_root - CAGED_REFERENCE_KEY) % SEMITONES_PER_OCTAVE
    members: dict[tuple[int, int], list[CagedPattern]] = {}
    for pattern in CAGED_REFERENCE_PATTERNS:
        for string_index, reference_fret in pattern.notes:
            for octave in _OCTAVE_SHIFTS:
                fret = reference_fret + slide + octave * SEMITONES_PER_OCTAVE
                if not 0 <= fret <= fret_count:
                    continue
                found = members.setdefault((string_index, fret), [])
                if pattern in found or len(found) >= MAX_SHAPES_PER_NOTE:
                    continue
                found.append(pattern)
    return {
        position: tuple(sorted(patterns, key=lambda p: p.sort_key))
        for position, patterns in members.items()
    }


def caged_scale_notes(
    root: str | int,
    scale_name: str,
    tuning: Tuning,
    fret_count: int = DEFAULT_CAGED_FRETS,
    layout: FretboardLayout | None = None,
) -> list[CagedNote]:
    """
    Every scale note on the neck, tagged with its CAGED shapes.

    Minor scales use the boxes of their relative major. Notes no box reaches
    come back with an empty *shapes* tuple.

    Raises:
        UnknownPitchError:   Unknown root.
        UnknownQualityError: Unknown scale name.
        ValueError:          Negative fret count.
    """
    notes = scale_notes(root, scale_name, tuning, fret_count, layout)
    lookup = caged_lookup(relative_major(parse_pitch(root), scale_name), fret_count)
    return [
        CagedNote(note=note, shapes=tuple(p.shape for p in lookup.get(note.position, ())))
        for note in notes
    ]
