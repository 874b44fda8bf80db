from __future__ import annotations

import math
import sqlite3

import pytest

from planet_manager.models import KM_PER_AU, ROW_KEYS, MalformedRowError, Planet, from_row, to_row


def _row(**overrides):
    row = {"id": 1, "name": "Mars", "distanceFromSun": 1.52, "size": 6779.0, "nickname": None}
    row.update(overrides)
    return row


def test_to_row_copies_values_verbatim():
    p = Planet(name="Mars", distance_from_sun=1.52, size=6779.0)
    row = to_row(p)
    assert tuple(row) == ROW_KEYS
    assert row == {"id": None, "name": "Mars", "distanceFromSun": 1.52, "size": 6779.0, "nickname": None}


@pytest.mark.parametrize(
    "planet",
    [
        Planet(name="Mars", distance_from_sun=1.52, size=6779.0),
        Planet(name="Jupiter", distance_from_sun=5.2, size=139820.0, nickname="Gas Giant", id=7),
    ],
)
def test_round_trip_reproduces_every_field(planet):
    assert from_row(to_row(planet)) == planet


def test_from_row_accepts_sqlite_row():
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    try:
        row = conn.execute(
            "SELECT 3 AS id, 'Venus' AS name, 0.72 AS distanceFromSun, 12104.0 AS size, 'Morning Star' AS nickname"
        ).fetchone()
        p = from_row(row)
    finally:
        conn.close()
    assert p == Planet(id=3, name="Venus", distance_from_sun=0.72, size=12104.0, nickname="Morning Star")


def test_from_row_converts_integer_measurements_to_float():
    p = from_row(_row(size=6779, distanceFromSun=2))
    assert isinstance(p.size, float) and p.size == 6779.0
    assert isinstance(p.distance_from_sun, float)


@pytest.mark.parametrize("missing", ["id", "name", "distanceFromSun", "size", "nickname"])
def test_from_row_missing_field_is_malformed(missing):
    row = _row()
    del row[missing]
    with pytest.raises(MalformedRowError, match=missing):
        from_row(row)


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": 5},
        {"name": ""},
        {"size": "big"},
        {"distanceFromSun": None},
        {"distanceFromSun": True},
        {"id": "1"},
        {"nickname": 42},
    ],
)
def test_from_row_mistyped_field_is_malformed(overrides):
    with pytest.raises(MalformedRowError):
        from_row(_row(**overrides))


def test_malformed_row_is_a_type_error():
    assert issubclass(MalformedRowError, TypeError)


def test_planet_requires_name():
    with pytest.raises(ValueError):
        Planet(name="  ", distance_from_sun=1.0, size=1.0)


def test_derived_values():
    p = Planet(name="Erde", distance_from_sun=1.0, size=2.0)
    assert p.distance_km == KM_PER_AU
    assert p.surface_area_km2 == pytest.approx(4 * math.pi)


def test_title_uses_nickname_when_present():
    assert Planet(name="Mars", distance_from_sun=1.52, size=6779.0).title == "Mars"
    assert Planet(name="Mars", distance_from_sun=1.52, size=6779.0, nickname="Roter Planet").title == "Mars - Roter Planet"
