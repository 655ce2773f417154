"""ShapeCatalog: the static table of movable triad patterns and its lookup index."""

import logging
from functools import lru_cache
from typing import Any, Final, Iterable, Iterator, Mapping

from fretshapes.shape_models import MALFORMED, Diagnostic, RelativeShape

logger = logging.getLogger(__name__)

ALL_VARIANTS: Final[str] = "all"

TRIAD_VARIANTS: Final[tuple[str, ...]] = ("Root", "1st", "2nd")

# String groups by name, low string first.
EAD: Final = (0, 1, 2)
ADG: Final = (1, 2, 3)
DGB: Final = (2, 3, 4)
GBE: Final = (3, 4, 5)

STRING_GROUPS: Final[dict[str, tuple[int, ...]]] = {"EAD": EAD, "ADG": ADG, "DGB": DGB, "GBE": GBE}


def _rec(
    quality: str,
    variant: str,
    strings: tuple[int, ...],
    frets: tuple[int, ...],
    anchor: int,
) -> dict[str, Any]:
    return {
        "quality": quality,
        "variant": variant,
        "strings": strings,
        "relative_frets": frets,
        "anchor_index": anchor,
    }


# ── Triad shape table ────────────────────────────────────────────────────────
# Fret offsets are listed low string to high string; only their differences
# from the anchor string matter. Groups touching the B string carry the major
# third between G and B.
#
# The Diminished and Augmented rows (DGB/GBE 2nd inversions in particular)
# have not been checked against a reference. The resolver rejects any that
# produce notes outside the quality.
TRIAD_SHAPE_RECORDS: Final[tuple[dict[str, Any], ...]] = (
    # === Major (R, 3, 5) ===
    _rec("Major", "Root", EAD, (3, 2, 0), 0),
    _rec("Major", "2nd", EAD, (0, 0, -1), 1),
    _rec("Major", "1st", EAD, (2, 0, 0), 2),
    _rec("Major", "Root", ADG, (3, 2, 0), 0),
    _rec("Major", "2nd", ADG, (0, 0, -1), 1),
    _rec("Major", "1st", ADG, (2, 0, 0), 2),
    _rec("Major", "Root", DGB, (2, 1, 0), 0),
    _rec("Major", "2nd", DGB, (0, 0, 0), 1),
    _rec("Major", "1st", DGB, (1, -1, 0), 2),
    _rec("Major", "Root", GBE, (2, 2, 0), 0),
    _rec("Major", "2nd", GBE, (-1, 0, -1), 1),
    _rec("Major", "1st", GBE, (1, 0, 0), 2),
    # === Minor (R, b3, 5) ===
    _rec("Minor", "Root", EAD, (3, 1, 0), 0),
    _rec("Minor", "2nd", EAD, (0, 0, -2), 1),
    _rec("Minor", "1st", EAD, (1, 0, 0), 2),
    _rec("Minor", "Root", ADG, (3, 1, 0), 0),
    _rec("Minor", "2nd", ADG, (0, 0, -2), 1),
    _rec("Minor", "1st", ADG, (1, 0, 0), 2),
    _rec("Minor", "Root", DGB, (2, 0, 0), 0),
    _rec("Minor", "2nd", DGB, (0, 0, -1), 1),
    _rec("Minor", "1st", DGB, (0, -1, 0), 2),
    _rec("Minor", "Root", GBE, (2, 1, 0), 0),
    _rec("Minor", "2nd", GBE, (-1, 0, -2), 1),
    _rec("Minor", "1st", GBE, (0, 0, 0), 2),
    # === Diminished (R, b3, d5) ===
    _rec("Diminished", "Root", EAD, (4, 2, 0), 0),
    _rec("Diminished", "2nd", EAD, (-1, 0, -2), 1),
    _rec("Diminished", "1st", EAD, (1, -1, 0), 2),
    _rec("Diminished", "Root", ADG, (4, 2, 0), 0),
    _rec("Diminished", "2nd", ADG, (-1, 0, -2), 1),
    _rec("Diminished", "1st", ADG, (1, -1, 0), 2),
    _rec("Diminished", "Root", DGB, (2, 0, -1), 0),
    _rec("Diminished", "2nd", DGB, (-1, 0, -1), 1),
    _rec("Diminished", "1st", DGB, (0, -2, 0), 2),
    _rec("Diminished", "Root", GBE, (2, 1, -1), 0),
    _rec("Diminished", "2nd", GBE, (-2, 0, -2), 1),
    _rec("Diminished", "1st", GBE, (0, -1, 0), 2),
    # === Augmented (R, 3, #5) ===
    _rec("Augmented", "Root", EAD, (2, 1, 0), 0),
    _rec("Augmented", "2nd", EAD, (2, 1, 0), 1),
    _rec("Augmented", "1st", EAD, (2, 1, 0), 2),
    _rec("Augmented", "Root", ADG, (2, 1, 0), 0),
    _rec("Augmented", "2nd", ADG, (2, 1, 0), 1),
    _rec("Augmented", "1st", ADG, (2, 1, 0), 2),
    _rec("Augmented", "Root", DGB, (1, 0, 0), 0),
    _rec("Augmented", "2nd", DGB, (1, 0, 0), 1),
    _rec("Augmented", "1st", DGB, (1, 0, 0), 2),
    _rec("Augmented", "Root", GBE, (2, 2, 1), 0),
    _rec("Augmented", "2nd", GBE, (2, 2, 1), 1),
    _rec("Augmented", "1st", GBE, (2, 2, 1), 2),
)


class UnknownVariantError(ValueError):
    """Raised when a variant filter names no variant of the requested quality."""

    def __init__(self, variant: str, known: Iterable[str]) -> None:
        self.variant = variant
        options = ", ".join([*known, "All"])
        super().__init__(f"Unknown variant '{variant}'. Use one of: {options}.")


def is_all_variants(variant: str | None) -> bool:
    return variant is None or variant.strip().lower() == ALL_VARIANTS


class ShapeCatalog:
    """
    Read-only collection of RelativeShape entries.

    Entries keep their authored order, which fixes the discovery order of
    resolved instances. Two indexes make filtering a dictionary lookup:

      - (quality, string_group)           -> entries of every variant
      - (quality, string_group, variant)  -> entries of one variant
    """

    def __init__(self, shapes: Iterable[RelativeShape], diagnostics: Iterable[Diagnostic] = ()) -> None:
        self._shapes: tuple[RelativeShape, ...] = tuple(shapes)
        self.diagnostics: tuple[Diagnostic, ...] = tuple(diagnostics)

        by_group: dict[tuple[str, tuple[int, ...]], list[RelativeShape]] = {}
        by_variant: dict[tuple[str, tuple[int, ...], str], list[RelativeShape]] = {}
        variants: dict[str, list[str]] = {}
        for shape in self._shapes:
            by_group.setdefault((shape.quality, shape.string_group), []).append(shape)
            by_variant.setdefault((shape.quality, shape.string_group, shape.variant), []).append(shape)
            known = variants.setdefault(shape.quality, [])
            if shape.variant not in known:
                known.append(shape.variant)

        self._by_group = {key: tuple(value) for key, value in by_group.items()}
        self._by_variant = {key: tuple(value) for key, value in by_variant.items()}
        self._variants = {key: tuple(value) for key, value in variants.items()}

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "ShapeCatalog":
        """
        Build a catalog from declarative records.

        A record that cannot become a RelativeShape (missing key, non-integer
        strings or offsets, offsets that do not match the strings, anchor
        outside the span) is skipped and kept as a Diagnostic; the remaining
        records still load.
        """
        shapes: list[RelativeShape] = []
        diagnostics: list[Diagnostic] = []
        for position, record in enumerate(records):
            try:
                shape = RelativeShape(
                    quality=str(record["quality"]),
                    variant=str(record["variant"]),
                    strings=tuple(record["strings"]),
                    relative_frets=tuple(record["relative_frets"]),
                    anchor_index=int(record["anchor_index"]),
                )
            except (KeyError, TypeError, ValueError) as exc:
                message = f"Catalog record #{position} skipped: {exc}"
                logger.warning(message)
                diagnostics.append(Diagnostic(shape=None, kind=MALFORMED, message=message))
                continue
            shapes.append(shape)
        return cls(shapes, diagnostics)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def __iter__(self) -> Iterator[RelativeShape]:
        return iter(self._shapes)

    def __len__(self) -> int:
        return len(self._shapes)

    def qualities(self) -> list[str]:
        return list(self._variants)

    def variants(self, quality: str) -> tuple[str, ...]:
        return self._variants.get(quality, ())

    def string_groups(self, quality: str) -> list[tuple[int, ...]]:
        return [group for (q, group) in self._by_group if q == quality]

    def select(
        self,
        quality: str,
        string_group: Iterable[int],
        variant: str | None = ALL_VARIANTS,
    ) -> tuple[RelativeShape, ...]:
        """
        Entries for a quality on a string group, in catalog order.

        Args:
            quality:      Triad quality label.
            string_group: String indices the shape must span (any order).
            variant:      Variant label, or "all"/None for every variant.

        Raises:
            UnknownVariantError: If *variant* is not a variant of *quality*.
        """
        group = tuple(sorted(string_group))
        if is_all_variants(variant):
            return self._by_group.get((quality, group), ())
        if variant not in self.variants(quality):
            raise UnknownVariantError(variant, self.variants(quality))
        return self._by_variant.get((quality, group, variant), ())


@lru_cache(maxsize=1)
def default_catalog() -> ShapeCatalog:
    """The built-in triad catalog, loaded once."""
    return ShapeCatalog.from_records(TRIAD_SHAPE_RECORDS)
