import pytest

from planet_manager.db import DB_DIR_ENV, DB_FILENAME, connect, create_schema
from planet_manager.services import PlanetService


@pytest.fixture(autouse=True)
def _no_db_dir_env(monkeypatch):
    # Tests must never touch a real database location
    monkeypatch.delenv(DB_DIR_ENV, raising=False)


@pytest.fixture()
def db_path(tmp_path):
    return tmp_path / "db" / DB_FILENAME


@pytest.fixture()
def db(db_path):
    database = connect(db_path)
    create_schema(database)
    try:
        yield database
    finally:
        database.close()


@pytest.fixture()
def service(db_path):
    svc = PlanetService(db_path)
    try:
        yield svc
    finally:
        svc.close()
