from __future__ import annotations

import sqlite3

import pytest

from planet_manager.db import StorageError
from planet_manager.models import MalformedRowError, Planet
from planet_manager.repositories import PlanetRepository


@pytest.fixture()
def repo(db):
    return PlanetRepository(db)


def test_insert_assigns_id_and_list_all_returns_it(repo):
    new_id = repo.insert(Planet(name="Mars", distance_from_sun=1.52, size=6779.0))
    assert new_id == 1
    assert repo.list_all() == [Planet(id=1, name="Mars", distance_from_sun=1.52, size=6779.0)]


def test_list_all_on_empty_table(repo):
    assert repo.list_all() == []


def test_insert_with_existing_id_replaces_row(repo):
    repo.insert(Planet(name="Mars", distance_from_sun=1.52, size=6779.0))
    returned = repo.insert(Planet(id=1, name="Ares", distance_from_sun=1.6, size=6800.0, nickname="Rot"))
    assert returned == 1
    assert repo.list_all() == [Planet(id=1, name="Ares", distance_from_sun=1.6, size=6800.0, nickname="Rot")]


def test_delete_reports_whether_a_row_was_removed(repo):
    repo.insert(Planet(name="Mars", distance_from_sun=1.52, size=6779.0))
    assert repo.delete(1) is True
    assert repo.delete(1) is False
    assert repo.list_all() == []


def test_storage_errors_are_wrapped(db, repo):
    db.close()
    with pytest.raises(StorageError):
        repo.list_all()
    with pytest.raises(StorageError):
        repo.insert(Planet(name="Mars", distance_from_sun=1.52, size=6779.0))
    with pytest.raises(StorageError):
        repo.delete(1)


def test_not_null_violation_is_a_storage_error(repo):
    planet = Planet(name="Mars", distance_from_sun=1.52, size=6779.0)
    planet.size = None
    with pytest.raises(StorageError):
        repo.insert(planet)


def test_malformed_stored_row_is_reported(db, repo):
    # REAL-Spalte speichert nicht-numerischen Text unverändert als TEXT
    db.execute("INSERT INTO planets(name, distanceFromSun, size) VALUES ('Mars', 1.52, 'gross')")
    db.commit()
    with pytest.raises(MalformedRowError):
        repo.list_all()


def _hold_read_lock(db_path):
    # Leser mit offener Lesetransaktion blockiert den COMMIT des Schreibers
    reader = sqlite3.connect(db_path, isolation_level=None)
    reader.execute("BEGIN")
    reader.execute("SELECT * FROM planets").fetchall()
    return reader


def test_failed_insert_leaves_no_row_and_connection_stays_usable(db, db_path, repo):
    db.execute("PRAGMA busy_timeout = 100")
    reader = _hold_read_lock(db_path)
    try:
        with pytest.raises(StorageError):
            repo.insert(Planet(name="Ghost", distance_from_sun=9.9, size=1.0))
    finally:
        reader.close()

    # Ein späterer, unabhängiger commit darf die fehlgeschlagene Zeile nicht mitschreiben
    repo.delete(999)
    assert repo.list_all() == []

    new_id = repo.insert(Planet(name="Mars", distance_from_sun=1.52, size=6779.0))
    assert [p.name for p in repo.list_all()] == ["Mars"]

    other = sqlite3.connect(db_path)
    try:
        assert other.execute("SELECT id, name FROM planets").fetchall() == [(new_id, "Mars")]
    finally:
        other.close()


def test_failed_delete_keeps_row(db, db_path, repo):
    repo.insert(Planet(name="Mars", distance_from_sun=1.52, size=6779.0))
    db.execute("PRAGMA busy_timeout = 100")
    reader = _hold_read_lock(db_path)
    try:
        with pytest.raises(StorageError):
            repo.delete(1)
    finally:
        reader.close()

    repo.insert(Planet(name="Venus", distance_from_sun=0.72, size=12104.0))
    assert sorted(p.name for p in repo.list_all()) == ["Mars", "Venus"]
