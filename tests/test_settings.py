"""Unit tests for GuitarSettings."""

import pytest

from fretshapes.settings import GuitarSettings
from fretshapes.tuning import DROP_D_TUNING, LEFT_HANDED, STANDARD_TUNING


def test_defaults() -> None:
    settings = GuitarSettings()
    assert settings.handedness == "right"
    assert settings.tuning is STANDARD_TUNING
    assert settings.fret_limit == 14


def test_from_mapping_applies_valid_values() -> None:
    settings = GuitarSettings.from_mapping(
        {"handedness": "left", "tuning": "Drop D", "fret_limit": 12, "scale": 0.5}
    )
    assert settings.tuning is DROP_D_TUNING
    assert settings.fret_limit == 12
    assert settings.layout.handedness == LEFT_HANDED
    assert settings.layout.string_spacing == 16.0


def test_from_mapping_empty_is_default() -> None:
    assert GuitarSettings.from_mapping(None) == GuitarSettings()
    assert GuitarSettings.from_mapping({}) == GuitarSettings()


def test_from_mapping_replaces_invalid_values(caplog: pytest.LogCaptureFixture) -> None:
    settings = GuitarSettings.from_mapping(
        {"handedness": "sideways", "tuning": "Open G", "fret_limit": -2, "scale": 0}
    )

    assert settings == GuitarSettings()
    assert "Invalid handedness 'sideways'" in caplog.text
    assert "Unknown tuning 'Open G'" in caplog.text
    assert "Invalid fret_limit -2" in caplog.text
    assert "Invalid scale 0" in caplog.text
