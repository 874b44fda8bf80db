import pytest

from planet_manager.models import Planet
from planet_manager.validation import (
    ValidationError,
    parse_float,
    parse_optional_text,
    parse_required_text,
    planet_from_form,
)


def test_planet_from_form_builds_unsaved_planet():
    p = planet_from_form("  Mars ", "1,52", "6779", "")
    assert p == Planet(name="Mars", distance_from_sun=1.52, size=6779.0, nickname=None)
    assert p.id is None


def test_planet_from_form_keeps_nickname():
    assert planet_from_form("Mars", "1.52", "6779", " Roter Planet ").nickname == "Roter Planet"


@pytest.mark.parametrize(
    "name, distance, size",
    [
        ("", "1.52", "6779"),
        ("Mars", "", "6779"),
        ("Mars", "1.52", ""),
        ("Mars", "weit", "6779"),
        ("Mars", "1.52", "-1"),
        ("Mars", "nan", "6779"),
    ],
)
def test_planet_from_form_rejects_invalid_input(name, distance, size):
    with pytest.raises(ValidationError):
        planet_from_form(name, distance, size)


def test_parse_optional_text_normalizes_blank_to_none():
    assert parse_optional_text("") is None
    assert parse_optional_text("   ") is None
    assert parse_optional_text(None) is None


def test_parse_required_text_message_names_field():
    with pytest.raises(ValidationError, match="Name"):
        parse_required_text(" ", field="Name")


def test_parse_float_min_value():
    assert parse_float("0", field="x", min_value=0.0) == 0.0
    with pytest.raises(ValidationError, match=">= 0.0"):
        parse_float("-0.5", field="x", min_value=0.0)


def test_validation_error_is_value_error():
    assert issubclass(ValidationError, ValueError)
