import pytest

from digital_menu.services.branding import DEFAULT_BRAND_COLORS, merge_brand_colors, validate_brand_colors
from digital_menu.services.ui_settings import (
    DEFAULT_UI_SETTINGS,
    UiSettingsValidationError,
    default_ui_settings,
    validate_ui_settings,
)


def test_header_logo_size_boundaries():
    with pytest.raises(UiSettingsValidationError) as exc:
        validate_ui_settings({"headerLogoSize": 15})
    assert exc.value.errors == ["headerLogoSize deve estar entre 16 e 80"]

    assert validate_ui_settings({"headerLogoSize": 16}) == {"headerLogoSize": 16}
    assert validate_ui_settings({"headerLogoSize": 80}) == {"headerLogoSize": 80}


def test_text_size_boundaries():
    assert validate_ui_settings({"sectionTitleSize": 10, "itemPriceSize": 40}) == {
        "sectionTitleSize": 10,
        "itemPriceSize": 40,
    }
    with pytest.raises(UiSettingsValidationError):
        validate_ui_settings({"sectionTitleSize": 41})
    with pytest.raises(UiSettingsValidationError):
        validate_ui_settings({"itemNameSize": 9})


def test_validation_collects_every_error():
    with pytest.raises(UiSettingsValidationError) as exc:
        validate_ui_settings(
            {
                "sectionTitleSize": 41,
                "categoryTitleSize": 20,
                "headerLogoSize": 100,
                "itemNameSize": "abc",
            }
        )

    assert exc.value.errors == [
        "sectionTitleSize deve estar entre 10 e 40",
        "itemNameSize deve ser um número inteiro",
        "headerLogoSize deve estar entre 16 e 80",
    ]


def test_validation_ignores_absent_and_unknown_fields():
    assert validate_ui_settings({}) == {}
    assert validate_ui_settings({"unknownField": 999, "itemNameSize": None}) == {}


def test_integral_strings_and_floats_are_accepted_but_not_bools():
    assert validate_ui_settings({"itemNameSize": "18", "itemPriceSize": 17.0}) == {
        "itemNameSize": 18,
        "itemPriceSize": 17,
    }
    with pytest.raises(UiSettingsValidationError):
        validate_ui_settings({"itemNameSize": True})
    with pytest.raises(UiSettingsValidationError):
        validate_ui_settings({"itemNameSize": 17.5})


def test_default_ui_settings_is_a_copy():
    settings = default_ui_settings()
    settings["headerLogoSize"] = 1
    assert DEFAULT_UI_SETTINGS["headerLogoSize"] == 32


def test_merge_brand_colors_layers_stored_over_defaults():
    merged = merge_brand_colors({"buttonBg": "#123456", "customRole": "#ABCDEF", "bad": {"x": 1}})

    assert len(DEFAULT_BRAND_COLORS) == 20
    assert merged["buttonBg"] == "#123456"
    assert merged["customRole"] == "#ABCDEF"
    assert merged["headerText"] == "#FFFFFF"
    assert "bad" not in merged
    assert merge_brand_colors(None) == DEFAULT_BRAND_COLORS


def test_validate_brand_colors():
    assert validate_brand_colors({"buttonBg": " #800020 ", "welcomeOverlayOpacity": "0.25"}) == {
        "buttonBg": "#800020",
        "welcomeOverlayOpacity": 0.25,
    }
    with pytest.raises(ValueError):
        validate_brand_colors({"welcomeOverlayOpacity": 1.5})
    with pytest.raises(ValueError):
        validate_brand_colors({"buttonBg": ["#800020"]})
