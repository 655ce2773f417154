"""Connector derivation: which notes of a shape get joined by outline lines."""

from typing import Iterable

from fretshapes.shape_models import Connector, FretNote


def derive_connectors(notes: Iterable[FretNote], display_group_id: int) -> list[Connector]:
    """
    Join consecutive notes of one shape instance.

    Notes are ordered by string, then fret. Each note is joined to the next
    one when they lie on adjacent strings; the very first pair is always
    joined so a shape with a single skipped string still shows an outline.
    A pair that is not joined still becomes the reference for the next
    comparison, so no long diagonal is drawn across a gap.

    Args:
        notes:            Notes of a single instance (coordinates attached).
        display_group_id: Group id copied onto every connector.

    Returns:
        Connectors in drawing order. Three notes on three adjacent strings
        always give exactly two.
    """
    ordered = sorted(notes, key=lambda note: (note.string_index, note.fret))
    connectors: list[Connector] = []
    if len(ordered) < 2:
        return connectors

    last_note = ordered[0]
    for i, current in enumerate(ordered[1:], start=1):
        if i == 1 or current.string_index - last_note.string_index == 1:
            connectors.append(Connector(last_note, current, display_group_id))
        last_note = current

    return connectors
