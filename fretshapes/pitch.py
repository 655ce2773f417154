"""Pitch model: 12-class pitch arithmetic, note spellings and interval labels."""

SEMITONES_PER_OCTAVE = 12

# Chromatic spellings referenced to A (index 0 = A). The first spelling of
# each group is the one used for display.
MUSIC_NOTES: tuple[tuple[str, ...], ...] = (
    ("A",),
    ("A#", "Bb"),
    ("B",),
    ("C",),
    ("C#", "Db"),
    ("D",),
    ("D#", "Eb"),
    ("E",),
    ("F",),
    ("F#", "Gb"),
    ("G",),
    ("G#", "Ab"),
)

#: Interval label per semitone offset above the root (0-11).
INTERVAL_LABELS: tuple[str, ...] = (
    "R", "b2", "2", "b3", "3", "4", "d5", "5", "b6", "6", "b7", "7",
)

_NAME_TO_PITCH_CLASS: dict[str, int] = {
    spelling: pitch_class
    for pitch_class, spellings in enumerate(MUSIC_NOTES)
    for spelling in spellings
}


class UnknownPitchError(ValueError):
    """Raised when a root pitch is neither a known spelling nor a class 0-11."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Unknown pitch name: {value!r}")


def pitch_class_of(name: str) -> int | None:
    """
    Look up the pitch class for a note spelling.

    Matching is case-sensitive and accepts every enharmonic spelling, so both
    "A#" and "Bb" return 1.

    Returns:
        The pitch class (0-11), or None if the name is not a known spelling.
    """
    return _NAME_TO_PITCH_CLASS.get(name)


def parse_pitch(value: str | int) -> int:
    """Resolve a caller-supplied root (spelling or pitch class) to a pitch class."""
    if isinstance(value, bool):
        raise UnknownPitchError(value)
    if isinstance(value, int):
        if 0 <= value < SEMITONES_PER_OCTAVE:
            return value
        raise UnknownPitchError(value)
    pitch_class = pitch_class_of(value)
    if pitch_class is None:
        raise UnknownPitchError(value)
    return pitch_class


def primary_name(pitch_class: int) -> str:
    """Display spelling for a pitch class, e.g. 1 -> 'A#'."""
    return MUSIC_NOTES[pitch_class % SEMITONES_PER_OCTAVE][0]


def all_spellings() -> list[str]:
    """Every accepted spelling, in chromatic order."""
    return [spelling for spellings in MUSIC_NOTES for spelling in spellings]


def semitones_above(pitch_class: int, root: int) -> int:
    """Interval in semitones from *root* up to *pitch_class*, reduced to 0-11."""
    return (pitch_class - root) % SEMITONES_PER_OCTAVE


def interval_label(offset: int) -> str:
    """
    Label for a semitone offset above the root.

    Callers reduce the offset modulo 12 first; anything outside 0-11 is a
    programming error.

    Raises:
        ValueError: If *offset* is not in 0-11.
    """
    if not 0 <= offset < SEMITONES_PER_OCTAVE:
        raise ValueError(f"Interval offset must be in 0-11, got {offset}.")
    return INTERVAL_LABELS[offset]
