"""Fretboard map: every position of a scale across the neck."""

import numpy as np

from fretshapes.pitch import SEMITONES_PER_OCTAVE, interval_label, parse_pitch
from fretshapes.qualities import scale_for
from fretshapes.shape_models import FretNote
from fretshapes.tuning import FretboardLayout, Tuning, coordinate_of, pitch_grid


def scale_notes(
    root: str | int,
    scale_name: str,
    tuning: Tuning,
    fret_count: int,
    layout: FretboardLayout | None = None,
) -> list[FretNote]:
    """
    Collect every fretboard position whose pitch belongs to a scale.

    Args:
        root:       Scale root (spelling or pitch class).
        scale_name: Scale name or alias, e.g. "Minor Pentatonic", "Aeolian".
        tuning:     Open-string tuning.
        fret_count: Highest fret included.
        layout:     Diagram geometry for the x/y of each note.

    Returns:
        FretNotes ordered by string, then fret.

    Raises:
        UnknownPitchError:   Unknown root.
        UnknownQualityError: Unknown scale name.
        ValueError:          Negative fret count.
    """
    if fret_count < 0:
        raise ValueError(f"Fret count must be non-negative, got {fret_count}.")
    root_class = parse_pitch(root)
    scale = scale_for(scale_name)
    layout = layout if layout is not None else FretboardLayout()

    offsets = (pitch_grid(tuning, fret_count) - root_class) % SEMITONES_PER_OCTAVE
    in_scale = np.isin(offsets, scale.degrees)

    notes: list[FretNote] = []
    for string_index, fret in np.argwhere(in_scale):
        string_index, fret = int(string_index), int(fret)
        offset = int(offsets[string_index, fret])
        x, y = coordinate_of(string_index, fret, layout)
        notes.append(
            FretNote(
                string_index=string_index,
                fret=fret,
                pitch_class=(root_class + offset) % SEMITONES_PER_OCTAVE,
                interval_label=interval_label(offset),
                is_root=offset == 0,
                x=x,
                y=y,
            )
        )
    return notes
