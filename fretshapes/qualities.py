"""Quality tables: semitone offsets of triad and scale qualities above a root."""

from dataclasses import dataclass
from typing import Final

# ── Triads ──────────────────────────────────────────────────────────────────

TRIAD_INTERVALS: Final[dict[str, tuple[int, ...]]] = {
    "Major": (0, 4, 7),       # R, M3, P5
    "Minor": (0, 3, 7),       # R, m3, P5
    "Diminished": (0, 3, 6),  # R, m3, d5
    "Augmented": (0, 4, 8),   # R, M3, #5
}


class UnknownQualityError(ValueError):
    """Raised when a chord or scale quality label is not registered."""

    def __init__(self, quality: str, known: list[str]) -> None:
        self.quality = quality
        super().__init__(f"Unknown quality '{quality}'. Use one of: {', '.join(known)}.")


def intervals_for(quality: str) -> tuple[int, ...]:
    """
    Semitone offsets that make up a triad quality.

    The length of the result is the exact number of notes a resolved shape of
    this quality must contain.

    Raises:
        UnknownQualityError: If *quality* is not registered.
    """
    try:
        return TRIAD_INTERVALS[quality]
    except KeyError:
        raise UnknownQualityError(quality, list(TRIAD_INTERVALS)) from None


# ── Scales ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Scale:
    """A named scale; degrees are semitones above the root."""

    name: str
    degrees: tuple[int, ...]


SCALES: Final[dict[str, Scale]] = {
    "MAJOR": Scale("Major", (0, 2, 4, 5, 7, 9, 11)),
    "NATURAL_MINOR": Scale("Minor", (0, 2, 3, 5, 7, 8, 10)),
    "DORIAN": Scale("Dorian", (0, 2, 3, 5, 7, 9, 10)),
    "PHRYGIAN": Scale("Phrygian", (0, 1, 3, 5, 7, 8, 10)),
    "LYDIAN": Scale("Lydian", (0, 2, 4, 6, 7, 9, 11)),
    "MIXOLYDIAN": Scale("Mixolydian", (0, 2, 4, 5, 7, 9, 10)),
    "LOCRIAN": Scale("Locrian", (0, 1, 3, 5, 6, 8, 10)),
    "MAJOR_PENTATONIC": Scale("Major Pentatonic", (0, 2, 4, 7, 9)),
    "MINOR_PENTATONIC": Scale("Minor Pentatonic", (0, 3, 5, 7, 10)),
    "MINOR_BLUES": Scale("Minor Blues", (0, 3, 5, 6, 7, 10)),
    "MAJOR_BLUES": Scale("Major Blues", (0, 2, 3, 4, 7, 9)),
    "HARMONIC_MINOR": Scale("Harmonic Minor", (0, 2, 3, 5, 7, 8, 11)),
    "MELODIC_MINOR": Scale("Melodic Minor", (0, 2, 3, 5, 7, 9, 11)),
    "PHRYGIAN_DOMINANT": Scale("Phrygian Dominant", (0, 1, 4, 5, 7, 8, 10)),
    "WHOLE_TONE": Scale("Whole Tone", (0, 2, 4, 6, 8, 10)),
    "DIMINISHED_WH": Scale("Diminished (W-H)", (0, 2, 3, 5, 6, 8, 9, 11)),
    "DIMINISHED_HW": Scale("Diminished (H-W)", (0, 1, 3, 4, 6, 7, 9, 10)),
    "LYDIAN_DOMINANT": Scale("Lydian Dominant", (0, 2, 4, 6, 7, 9, 10)),
    "ALTERED": Scale("Altered", (0, 1, 3, 4, 6, 8, 10)),
    "BEBOP_DOMINANT": Scale("Bebop Dominant", (0, 2, 4, 5, 7, 9, 10, 11)),
    "HUNGARIAN_MINOR": Scale("Hungarian Minor", (0, 2, 3, 6, 7, 8, 11)),
}

#: Display names and common aliases -> SCALES key.
SCALE_ALIASES: Final[dict[str, str]] = {
    "Major": "MAJOR",
    "Ionian": "MAJOR",
    "Minor": "NATURAL_MINOR",
    "Natural Minor": "NATURAL_MINOR",
    "Pure Minor": "NATURAL_MINOR",
    "Aeolian": "NATURAL_MINOR",
    "Dorian": "DORIAN",
    "Dorian Minor": "DORIAN",
    "Phrygian": "PHRYGIAN",
    "Spanish Minor": "PHRYGIAN",
    "Lydian": "LYDIAN",
    "Lydian Major": "LYDIAN",
    "Mixolydian": "MIXOLYDIAN",
    "Dominant 7th": "MIXOLYDIAN",
    "Locrian": "LOCRIAN",
    "Half-Diminished": "LOCRIAN",
    "Pentatonic Major": "MAJOR_PENTATONIC",
    "Major Pentatonic": "MAJOR_PENTATONIC",
    "Country & Western": "MAJOR_PENTATONIC",
    "Pentatonic Minor": "MINOR_PENTATONIC",
    "Minor Pentatonic": "MINOR_PENTATONIC",
    "Blues": "MINOR_BLUES",
    "Minor Blues": "MINOR_BLUES",
    "Major Blues": "MAJOR_BLUES",
    "Harmonic Minor": "HARMONIC_MINOR",
    "Melodic Minor": "MELODIC_MINOR",
    "Jazz Minor": "MELODIC_MINOR",
    "Phrygian Dominant": "PHRYGIAN_DOMINANT",
    "Spanish Gypsy": "PHRYGIAN_DOMINANT",
    "Whole Tone": "WHOLE_TONE",
    "Diminished WH": "DIMINISHED_WH",
    "Diminished HW": "DIMINISHED_HW",
    "Lydian Dominant": "LYDIAN_DOMINANT",
    "Lydian b7": "LYDIAN_DOMINANT",
    "Altered Scale": "ALTERED",
    "Super Locrian": "ALTERED",
    "Bebop Dominant": "BEBOP_DOMINANT",
    "Hungarian Minor": "HUNGARIAN_MINOR",
    "Gypsy Minor": "HUNGARIAN_MINOR",
}


def scale_for(name: str) -> Scale:
    """
    Resolve a scale by display name, alias, or internal key.

    Unlisted names fall back to the upper-cased, underscore-joined form, so
    "whole tone" finds WHOLE_TONE.

    Raises:
        UnknownQualityError: If nothing matches.
    """
    key = SCALE_ALIASES.get(name) or name.strip().upper().replace(" ", "_")
    try:
        return SCALES[key]
    except KeyError:
        raise UnknownQualityError(name, sorted(SCALE_ALIASES)) from None
