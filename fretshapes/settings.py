"""GuitarSettings: diagram defaults shared by every shape request."""

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from fretshapes.tuning import (
    AVAILABLE_TUNINGS,
    HANDEDNESS_CHOICES,
    RIGHT_HANDED,
    STANDARD_TUNING,
    FretboardLayout,
    Tuning,
    get_tuning,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GuitarSettings:
    """
    Instrument and diagram defaults.

    Attributes:
        handedness:  "right" or "left"; mirrors diagrams only.
        tuning_name: Key into AVAILABLE_TUNINGS.
        fret_limit:  Highest fret searched for shapes.
        scale:       Diagram scale factor.
    """

    DEFAULT_FRET_LIMIT = 14

    handedness: str = RIGHT_HANDED
    tuning_name: str = STANDARD_TUNING.name
    fret_limit: int = DEFAULT_FRET_LIMIT
    scale: float = 1.0

    @property
    def tuning(self) -> Tuning:
        return get_tuning(self.tuning_name)

    @property
    def layout(self) -> FretboardLayout:
        return FretboardLayout.scaled(self.scale, self.handedness)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "GuitarSettings":
        """
        Build settings from a plain mapping, e.g. parsed user preferences.

        Missing keys keep their defaults. Invalid values are logged and
        replaced by the default rather than rejected, so one bad preference
        never blocks the diagram.
        """
        defaults = cls()
        if not data:
            return defaults

        handedness = data.get("handedness", defaults.handedness)
        if handedness not in HANDEDNESS_CHOICES:
            logger.warning("Invalid handedness %r in settings, using %r.", handedness, defaults.handedness)
            handedness = defaults.handedness

        tuning_name = data.get("tuning", defaults.tuning_name)
        if tuning_name not in AVAILABLE_TUNINGS:
            logger.warning("Unknown tuning %r in settings, using %r.", tuning_name, defaults.tuning_name)
            tuning_name = defaults.tuning_name

        fret_limit = data.get("fret_limit", defaults.fret_limit)
        if isinstance(fret_limit, bool) or not isinstance(fret_limit, int) or fret_limit < 0:
            logger.warning("Invalid fret_limit %r in settings, using %d.", fret_limit, defaults.fret_limit)
            fret_limit = defaults.fret_limit

        scale = data.get("scale", defaults.scale)
        if isinstance(scale, bool) or not isinstance(scale, (int, float)) or scale <= 0:
            logger.warning("Invalid scale %r in settings, using %s.", scale, defaults.scale)
            scale = defaults.scale

        return cls(
            handedness=handedness,
            tuning_name=tuning_name,
            fret_limit=fret_limit,
            scale=float(scale),
        )
