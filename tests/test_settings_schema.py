"""Tests for the crop settings schema."""

import pytest

from iCrop.errors import SettingsValidationError
from iCrop.settings import DEFAULT_SETTINGS, CropSettings, merge_with_defaults, validate_settings


def test_defaults_validate():
    validate_settings(DEFAULT_SETTINGS)


def test_default_mapping_matches_dataclass_defaults():
    assert CropSettings.from_mapping() == CropSettings()
    assert CropSettings.from_mapping({}) == CropSettings()


def test_partial_override_keeps_other_defaults():
    settings = CropSettings.from_mapping({"view": {"max_zoom": 8.0}, "region": {"min_size": 32}})
    assert settings.max_zoom == 8.0
    assert settings.min_size == 32
    assert settings.min_zoom == CropSettings().min_zoom
    assert settings.preview_max_dimension == 300


def test_merge_does_not_mutate_defaults():
    merge_with_defaults({"export": {"preview_max_dimension": 640}})
    assert DEFAULT_SETTINGS["export"]["preview_max_dimension"] == 300


@pytest.mark.parametrize(
    "override",
    [
        {"region": {"min_size": 0}},
        {"region": {"min_size": "large"}},
        {"interaction": {"pan_damping": 1.5}},
        {"view": {"zoom_in_factor": 0.5}},
        {"view": {"unknown_option": True}},
        {"export": {"preview_max_dimension": 12.5}},
        {"schema": "iCrop/settings@2"},
        {"extra_section": {}},
    ],
)
def test_invalid_settings_are_rejected(override):
    with pytest.raises(SettingsValidationError):
        CropSettings.from_mapping(override)


def test_zoom_limits_must_be_ordered():
    with pytest.raises(SettingsValidationError, match="min_zoom"):
        merge_with_defaults({"view": {"min_zoom": 6.0, "max_zoom": 2.0}})


def test_preview_limits_must_be_ordered():
    with pytest.raises(SettingsValidationError):
        merge_with_defaults({"export": {"preview_min_dimension": 400}})


def test_error_message_names_the_field():
    with pytest.raises(SettingsValidationError) as excinfo:
        validate_settings({**DEFAULT_SETTINGS, "region": {"min_size": -1}})
    assert str(excinfo.value).startswith("region.min_size")
