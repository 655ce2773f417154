"""ShapeResolver: places movable catalog patterns on a tuned fretboard."""

import logging
from typing import Iterable, Sequence

from fretshapes.connectors import derive_connectors
from fretshapes.pitch import interval_label, parse_pitch, primary_name, semitones_above
from fretshapes.qualities import intervals_for
from fretshapes.shape_catalog import ShapeCatalog, default_catalog
from fretshapes.shape_models import (
    MEMBERSHIP,
    NOTE_COUNT,
    OUT_OF_RANGE,
    Diagnostic,
    FretNote,
    RelativeShape,
    ShapeInstance,
    ShapeResolution,
)
from fretshapes.tuning import STRING_COUNT, FretboardLayout, Tuning, coordinate_of, pitch_at

logger = logging.getLogger(__name__)


class ShapeResolver:
    """
    Enumerates every valid placement of catalog patterns for a root and quality.

    Algorithm overview
    ------------------
    For each catalog entry matching the quality, string group and variant:

    1. **Anchor search** – every fret 0..fret_limit on the entry's anchor
       string whose pitch class equals the root is a candidate anchor.

    2. **Transposition** – each spanned string lands on
       ``anchor_fret + (offset - anchor_offset)``.

    3. **Validation** – the placement is dropped if any fret leaves
       0..fret_limit (bounds) or any pitch falls outside the quality's
       intervals (membership). An entry whose string count differs from the
       quality's note count is never placed (count).

    4. **Deduplication** – placements with the same sorted (string, fret)
       set are emitted once, keeping the first found.

    Catalog entries that never produce a placement are reported as
    Diagnostics; they never abort resolution of the other entries. Instances
    come out in catalog order, then ascending anchor fret, and receive
    consecutive display group ids starting at *first_group_id*.
    """

    def __init__(
        self,
        catalog: ShapeCatalog | None = None,
        layout: FretboardLayout | None = None,
    ) -> None:
        """
        Args:
            catalog: Pattern table to search. Defaults to the built-in triads.
            layout:  Diagram geometry used to attach x/y to every note.
        """
        self.catalog = catalog if catalog is not None else default_catalog()
        self.layout = layout if layout is not None else FretboardLayout()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _validate_string_group(self, string_group: Iterable[int]) -> tuple[int, ...]:
        group = tuple(sorted(string_group))
        if not group:
            raise ValueError("String group must name at least one string.")
        for string_index in group:
            if not 0 <= string_index < STRING_COUNT:
                raise ValueError(
                    f"String index {string_index} is outside 0-{STRING_COUNT - 1}."
                )
        if len(set(group)) != len(group):
            raise ValueError(f"String group {list(group)} repeats a string.")
        return group

    def _place(
        self,
        shape: RelativeShape,
        anchor_fret: int,
        root: int,
        intervals: tuple[int, ...],
        tuning: Tuning,
        fret_limit: int,
    ) -> tuple[FretNote, ...] | str:
        """
        Transpose *shape* to *anchor_fret* and validate the result.

        Returns:
            The resolved notes, or the kind of the failed check
            (OUT_OF_RANGE or MEMBERSHIP).
        """
        notes: list[FretNote] = []
        for string_index, delta in zip(shape.strings, shape.fret_deltas()):
            fret = anchor_fret + delta
            if fret < 0 or fret > fret_limit:
                return OUT_OF_RANGE

            pitch_class = pitch_at(tuning, string_index, fret)
            offset = semitones_above(pitch_class, root)
            if offset not in intervals:
                return MEMBERSHIP

            x, y = coordinate_of(string_index, fret, self.layout)
            notes.append(
                FretNote(
                    string_index=string_index,
                    fret=fret,
                    pitch_class=pitch_class,
                    interval_label=interval_label(offset),
                    is_root=offset == 0,
                    x=x,
                    y=y,
                )
            )
        return tuple(notes)

    def _diagnose(self, shape: RelativeShape, kind: str, message: str, level: int = logging.WARNING) -> Diagnostic:
        logger.log(level, "%s: %s", shape.label, message)
        return Diagnostic(shape=shape, kind=kind, message=message)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(
        self,
        root: str | int,
        quality: str,
        variant: str | None,
        tuning: Tuning | Sequence[int],
        string_group: Iterable[int],
        fret_limit: int,
        first_group_id: int = 0,
    ) -> ShapeResolution:
        """
        Resolve every placement of *quality* rooted on *root*.

        Args:
            root:           Note spelling ("C", "Db") or pitch class (0-11).
            quality:        Triad quality label, e.g. "Major".
            variant:        Variant label ("Root", "1st", ...) or "all".
            tuning:         Open-string tuning, or six raw offsets.
            string_group:   String indices the shape must span.
            fret_limit:     Highest usable fret (inclusive).
            first_group_id: Display group id given to the first instance.

        Returns:
            ShapeResolution holding the instances (with connectors) and any
            catalog diagnostics.

        Raises:
            UnknownQualityError: Unregistered quality.
            UnknownPitchError:   Root is not a known spelling or class.
            UnknownVariantError: Variant is not a variant of the quality.
            InvalidTuningError:  Tuning is not six offsets in 0-11.
            ValueError:          Bad string group or negative fret limit.
        """
        intervals = intervals_for(quality)
        root_class = parse_pitch(root)
        if not isinstance(tuning, Tuning):
            tuning = Tuning.from_offsets(tuning)
        group = self._validate_string_group(string_group)
        if isinstance(fret_limit, bool) or not isinstance(fret_limit, int) or fret_limit < 0:
            raise ValueError(f"Fret limit must be a non-negative integer, got {fret_limit!r}.")

        candidates = self.catalog.select(quality, group, variant)
        logger.debug(
            "Resolving %s %s (%s) on strings %s up to fret %d: %d catalog entries",
            primary_name(root_class), quality, variant, list(group), fret_limit, len(candidates),
        )

        resolution = ShapeResolution()
        seen: set[tuple[tuple[int, int], ...]] = set()
        next_group_id = first_group_id

        for shape in candidates:
            if len(shape.strings) != len(intervals):
                resolution.diagnostics.append(
                    self._diagnose(
                        shape,
                        NOTE_COUNT,
                        f"spans {len(shape.strings)} strings but {quality} needs "
                        f"exactly {len(intervals)} notes",
                    )
                )
                continue

            anchor_hits = 0
            failures: set[str] = set()
            placed = 0
            for anchor_fret in range(fret_limit + 1):
                if pitch_at(tuning, shape.anchor_string, anchor_fret) != root_class:
                    continue
                anchor_hits += 1

                outcome = self._place(shape, anchor_fret, root_class, intervals, tuning, fret_limit)
                if isinstance(outcome, str):
                    logger.debug("%s at fret %d rejected: %s", shape.label, anchor_fret, outcome)
                    failures.add(outcome)
                    continue
                placed += 1

                key = tuple(sorted(note.position for note in outcome))
                if key in seen:
                    logger.debug("%s at fret %d duplicates an earlier placement", shape.label, anchor_fret)
                    continue
                seen.add(key)

                resolution.instances.append(
                    ShapeInstance(
                        quality=quality,
                        variant=shape.variant,
                        root=root_class,
                        anchor_string=shape.anchor_string,
                        anchor_fret=anchor_fret,
                        notes=outcome,
                        display_group_id=next_group_id,
                        connectors=tuple(derive_connectors(outcome, next_group_id)),
                    )
                )
                next_group_id += 1

            if placed == 0 and MEMBERSHIP in failures:
                resolution.diagnostics.append(
                    self._diagnose(
                        shape,
                        MEMBERSHIP,
                        f"produces notes outside {quality} {list(intervals)}",
                    )
                )
            elif anchor_hits > 0 and placed == 0:
                resolution.diagnostics.append(
                    self._diagnose(
                        shape,
                        OUT_OF_RANGE,
                        f"every anchor for {primary_name(root_class)} falls outside frets 0-{fret_limit}",
                        level=logging.INFO,
                    )
                )

        return resolution


def resolve_shapes(
    root: str | int,
    quality: str,
    variant: str | None,
    tuning: Tuning | Sequence[int],
    string_group: Iterable[int],
    fret_limit: int,
    catalog: ShapeCatalog | None = None,
    layout: FretboardLayout | None = None,
    first_group_id: int = 0,
) -> list[ShapeInstance]:
    """Resolve placements and return only the instances (see ShapeResolver.resolve)."""
    resolver = ShapeResolver(catalog=catalog, layout=layout)
    resolution = resolver.resolve(root, quality, variant, tuning, string_group, fret_limit, first_group_id)
    return resolution.instances
