"""Data models for shape catalog entries and resolution outputs."""

import numbers
from dataclasses import dataclass, field
from typing import Final

from fretshapes.tuning import STRING_COUNT

# ── Diagnostic kinds ────────────────────────────────────────────────────────
MALFORMED: Final[str] = "malformed"
NOTE_COUNT: Final[str] = "note-count"
MEMBERSHIP: Final[str] = "membership"
OUT_OF_RANGE: Final[str] = "out-of-range"

DIAGNOSTIC_KINDS: Final[frozenset[str]] = frozenset({MALFORMED, NOTE_COUNT, MEMBERSHIP, OUT_OF_RANGE})


def _is_integer(value: object) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


@dataclass(frozen=True)
class RelativeShape:
    """
    A movable fingering pattern on a group of strings.

    Attributes:
        quality:         Triad quality the pattern voices, e.g. "Major".
        variant:         Voicing label, e.g. "Root", "1st", "2nd".
        strings:         Spanned string indices, low to high.
        relative_frets:  Fret offset per spanned string; only differences
                         from the anchor's offset matter.
        anchor_index:    Position within *strings* of the string that
                         carries the root.
    """

    quality: str
    variant: str
    strings: tuple[int, ...]
    relative_frets: tuple[int, ...]
    anchor_index: int

    def __post_init__(self) -> None:
        for string_index in self.strings:
            if not _is_integer(string_index) or not 0 <= string_index < STRING_COUNT:
                raise ValueError(
                    f"{self.quality}/{self.variant}: string {string_index!r} is not "
                    f"an index in 0-{STRING_COUNT - 1}."
                )
        if len(set(self.strings)) != len(self.strings):
            raise ValueError(f"{self.label}: repeats a string.")
        for offset in self.relative_frets:
            if not _is_integer(offset):
                raise ValueError(f"{self.label}: fret offset {offset!r} is not an integer.")
        if len(self.strings) != len(self.relative_frets):
            raise ValueError(
                f"{self.label}: {len(self.strings)} strings but "
                f"{len(self.relative_frets)} fret offsets."
            )
        if not _is_integer(self.anchor_index) or not 0 <= self.anchor_index < len(self.strings):
            raise ValueError(
                f"{self.label}: anchor index {self.anchor_index!r} is outside its "
                f"{len(self.strings)}-string span."
            )

    @property
    def label(self) -> str:
        strings = ",".join(str(s) for s in self.strings)
        return f"{self.quality}/{self.variant} on [{strings}]"

    @property
    def string_group(self) -> tuple[int, ...]:
        return tuple(sorted(self.strings))

    @property
    def anchor_string(self) -> int:
        return self.strings[self.anchor_index]

    def fret_deltas(self) -> tuple[int, ...]:
        """Offsets normalised so the anchor string is 0."""
        anchor_offset = self.relative_frets[self.anchor_index]
        return tuple(offset - anchor_offset for offset in self.relative_frets)


@dataclass(frozen=True)
class FretNote:
    """A sounding note at a concrete fretboard position."""

    string_index: int
    fret: int
    pitch_class: int
    interval_label: str
    is_root: bool
    x: float = 0.0
    y: float = 0.0

    @property
    def position(self) -> tuple[int, int]:
        return self.string_index, self.fret


@dataclass(frozen=True)
class Connector:
    """A line joining two notes of one shape instance."""

    from_note: FretNote
    to_note: FretNote
    display_group_id: int


@dataclass(frozen=True)
class ShapeInstance:
    """
    One validated placement of a catalog pattern on the fretboard.

    Attributes:
        quality:          Triad quality.
        variant:          Variant label of the catalog entry that produced it.
        root:             Requested root pitch class.
        anchor_string:    String carrying the root in the pattern.
        anchor_fret:      Fret of the root on *anchor_string*.
        notes:            Resolved notes, in the catalog entry's string order.
        display_group_id: Distinguishes instances for colouring; assigned in
                          discovery order.
        connectors:       Outline segments derived from *notes*.
    """

    quality: str
    variant: str
    root: int
    anchor_string: int
    anchor_fret: int
    notes: tuple[FretNote, ...]
    display_group_id: int
    connectors: tuple[Connector, ...] = ()

    @property
    def key(self) -> tuple[tuple[int, int], ...]:
        """Sorted (string, fret) pairs; equal keys mean identical placements."""
        return tuple(sorted(note.position for note in self.notes))


@dataclass(frozen=True)
class Diagnostic:
    """
    A per-entry catalog data problem.

    *shape* is None when the record could not be built into a RelativeShape.
    """

    shape: RelativeShape | None
    kind: str
    message: str

    def __post_init__(self) -> None:
        if self.kind not in DIAGNOSTIC_KINDS:
            raise ValueError(
                f"Unknown diagnostic kind '{self.kind}'. Use one of: {', '.join(sorted(DIAGNOSTIC_KINDS))}."
            )


@dataclass
class ShapeResolution:
    """Everything produced by one resolution call."""

    instances: list[ShapeInstance] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def connectors(self) -> list[Connector]:
        return [connector for instance in self.instances for connector in instance.connectors]

    @property
    def notes(self) -> list[FretNote]:
        return [note for instance in self.instances for note in instance.notes]
