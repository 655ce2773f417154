"""Tuning model and the (string, fret) -> pitch / canvas coordinate mapper."""

import numbers
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from fretshapes.pitch import SEMITONES_PER_OCTAVE

# ── Instrument constants ────────────────────────────────────────────────────
STRING_COUNT = 6  # string 0 = low E ... string 5 = high e

RIGHT_HANDED = "right"
LEFT_HANDED = "left"
HANDEDNESS_CHOICES: tuple[str, ...] = (RIGHT_HANDED, LEFT_HANDED)


class InvalidTuningError(ValueError):
    """Raised for a tuning that is not six semitone offsets in 0-11."""


@dataclass(frozen=True)
class Tuning:
    """
    Open-string pitch classes, low string first.

    Attributes:
        name:    Display name, e.g. "Standard".
        offsets: Six semitone offsets (0-11) relative to A.
    """

    name: str
    offsets: tuple[int, ...]

    def __post_init__(self) -> None:
        if len(self.offsets) != STRING_COUNT:
            raise InvalidTuningError(
                f"Tuning '{self.name}' needs {STRING_COUNT} strings, got {len(self.offsets)}."
            )
        for offset in self.offsets:
            if isinstance(offset, bool) or not isinstance(offset, numbers.Integral):
                raise InvalidTuningError(
                    f"Tuning '{self.name}' has a non-integer offset: {offset!r}."
                )
            if not 0 <= offset < SEMITONES_PER_OCTAVE:
                raise InvalidTuningError(
                    f"Tuning '{self.name}' offset {offset} is outside 0-11."
                )
        object.__setattr__(self, "offsets", tuple(int(offset) for offset in self.offsets))

    @classmethod
    def from_offsets(cls, offsets: Iterable[int], name: str = "Custom") -> "Tuning":
        return cls(name=name, offsets=tuple(offsets))

    def __getitem__(self, string_index: int) -> int:
        return self.offsets[string_index]

    def __len__(self) -> int:
        return len(self.offsets)


STANDARD_TUNING = Tuning("Standard", (7, 0, 5, 10, 2, 7))
DROP_D_TUNING = Tuning("Drop D", (5, 0, 5, 10, 2, 7))

AVAILABLE_TUNINGS: dict[str, Tuning] = {
    STANDARD_TUNING.name: STANDARD_TUNING,
    DROP_D_TUNING.name: DROP_D_TUNING,
}


def get_tuning(name: str) -> Tuning:
    """Look up a named tuning preset."""
    try:
        return AVAILABLE_TUNINGS[name]
    except KeyError:
        known = ", ".join(AVAILABLE_TUNINGS)
        raise InvalidTuningError(f"Unknown tuning '{name}'. Use one of: {known}.") from None


def pitch_at(tuning: Tuning, string_index: int, fret: int) -> int:
    """Pitch class sounding at *fret* on *string_index*."""
    return (tuning[string_index] + fret) % SEMITONES_PER_OCTAVE


def pitch_grid(tuning: Tuning, fret_count: int) -> np.ndarray:
    """
    Pitch class of every position on the board.

    Returns:
        Integer array of shape (6, fret_count + 1); ``grid[s, f]`` equals
        ``pitch_at(tuning, s, f)``.
    """
    open_strings = np.asarray(tuning.offsets, dtype=int)[:, np.newaxis]
    frets = np.arange(fret_count + 1, dtype=int)[np.newaxis, :]
    return (open_strings + frets) % SEMITONES_PER_OCTAVE


# ── Coordinate mapping ──────────────────────────────────────────────────────

def validate_handedness(handedness: str) -> str:
    if handedness not in HANDEDNESS_CHOICES:
        raise ValueError(
            f"Handedness must be one of {', '.join(HANDEDNESS_CHOICES)}, got '{handedness}'."
        )
    return handedness


def visual_index(string_index: int, handedness: str = RIGHT_HANDED) -> int:
    """Left-to-right drawing column of a string; mirrored for left-handed players."""
    if handedness == LEFT_HANDED:
        return STRING_COUNT - 1 - string_index
    return string_index


@dataclass(frozen=True)
class FretboardLayout:
    """
    Pixel geometry of a vertical fretboard diagram.

    Attributes:
        left:           X of the leftmost drawn string.
        top:            Y of the nut line.
        string_spacing: Horizontal distance between strings.
        fret_spacing:   Vertical distance between frets.
        note_radius:    Radius of a note circle.
        handedness:     "right" or "left".
    """

    BASE_START_PX = 35.0
    BASE_STRING_SPACING_PX = 32.0
    BASE_FRET_LENGTH_PX = 39.0
    BASE_NOTE_RADIUS_PX = 14.0
    OPEN_NOTE_CLEARANCE_PX = 5.0  # text buffer between open notes and the nut

    left: float = BASE_START_PX
    top: float = BASE_START_PX + BASE_NOTE_RADIUS_PX * 1.5 + OPEN_NOTE_CLEARANCE_PX
    string_spacing: float = BASE_STRING_SPACING_PX
    fret_spacing: float = BASE_FRET_LENGTH_PX
    note_radius: float = BASE_NOTE_RADIUS_PX
    handedness: str = RIGHT_HANDED

    def __post_init__(self) -> None:
        validate_handedness(self.handedness)

    @classmethod
    def scaled(cls, scale_factor: float = 1.0, handedness: str = RIGHT_HANDED) -> "FretboardLayout":
        """Layout with every base metric multiplied by *scale_factor*."""
        start = cls.BASE_START_PX * scale_factor
        note_radius = cls.BASE_NOTE_RADIUS_PX * scale_factor
        return cls(
            left=start,
            top=start + note_radius * 1.5 + cls.OPEN_NOTE_CLEARANCE_PX * scale_factor,
            string_spacing=cls.BASE_STRING_SPACING_PX * scale_factor,
            fret_spacing=cls.BASE_FRET_LENGTH_PX * scale_factor,
            note_radius=note_radius,
            handedness=handedness,
        )

    @property
    def open_row_y(self) -> float:
        """Y used for open strings and muted markers, drawn above the nut."""
        return self.top - self.note_radius * 1.5


def coordinate_of(string_index: int, fret: int, layout: FretboardLayout) -> tuple[float, float]:
    """
    Centre of the note circle for (string, fret).

    Fretted notes sit halfway between fret lines; open (0) and muted (< 0)
    positions share the row above the nut.
    """
    x = layout.left + visual_index(string_index, layout.handedness) * layout.string_spacing
    if fret > 0:
        y = layout.top + (fret - 0.5) * layout.fret_spacing
    else:
        y = layout.open_row_y
    return x, y
