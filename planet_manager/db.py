from __future__ import annotations

# -----------------------------------------------------------------------------
# Infrastructure: SQLite DB
# -----------------------------------------------------------------------------
# Enthält:
# - SQLiteDatabase: dünner Adapter um sqlite3.Connection (für DatabaseProtocol)
# - resolve_db_path(): ermittelt den Ort von `planets.db`
# - connect(): öffnet die DB-Datei (legt sie bei Bedarf an)
# - create_schema(): legt die Tabelle `planets` an, falls die Datei neu ist
#
# Das Repository typisiert gegen `DatabaseProtocol`, nicht gegen sqlite3.
# -----------------------------------------------------------------------------


"""SQLite-Infrastruktur.

Zweck:
    Stellt die konkrete SQLite-Implementierung bereit. Repository und Service typisieren
    dabei gegen `DatabaseProtocol` (siehe `db_protocol.py`).

Hinweise:
    Die Schema-Version wird wie bei mobilen SQLite-Helfern über `PRAGMA user_version`
    geführt. Es existiert ausschließlich Version 1.
"""

import logging
import os
import sqlite3
from pathlib import Path
from typing import Any, Optional, Sequence

from planet_manager.db_protocol import DatabaseProtocol

__all__ = [
    "DB_FILENAME",
    "DB_DIR_ENV",
    "DEFAULT_DIR_NAME",
    "SCHEMA_VERSION",
    "DatabaseProtocol",
    "SQLiteDatabase",
    "StorageError",
    "StorageUnavailableError",
    "connect",
    "create_schema",
    "resolve_db_path",
    "schema_version",
]

log = logging.getLogger(__name__)

DB_FILENAME = "planets.db"
DB_DIR_ENV = "PLANET_MANAGER_DB_DIR"
SCHEMA_VERSION = 1
DEFAULT_DIR_NAME = ".planet_manager"

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS planets(
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    distanceFromSun REAL NOT NULL,
    size REAL NOT NULL,
    nickname TEXT
);
"""


class StorageError(RuntimeError):
    """
    Fehler der Speicherschicht (Lesen/Schreiben wurde von SQLite abgelehnt).

    Hinweise:
        Die ursprüngliche `sqlite3`-Ausnahme hängt als `__cause__` an.
    """


class StorageUnavailableError(StorageError):
    """
    Die Datenbank kann nicht geöffnet oder angelegt werden.

    Hinweise:
        Für jede Operation fatal. Darf nie als „leere Liste“ maskiert werden.
    """


class SQLiteDatabase:
    """
    SQLite-Adapter passend zu `DatabaseProtocol`.

    Zweck:
        Kapselt eine `sqlite3.Connection` und bietet nur die Methoden an, die in
        Repository-/Service-Schicht benötigt werden.
    """

    def __init__(self, conn: sqlite3.Connection, path: Optional[Path] = None) -> None:
        self._conn = conn
        self.path = path

    # --- DatabaseProtocol ---
    def execute(self, sql: str, params: Sequence[Any] | dict[str, Any] = ()) -> Any:
        """
        Führt ein einzelnes SQL-Statement aus.

        Parameter:
            sql (str): SQL-Statement (Platzhalter `?` oder `:name`).
            params: Parameterwerte für die Platzhalter.

        Rückgabe:
            Any: Cursor-ähnliches Objekt (bei sqlite3: `sqlite3.Cursor`).
        """

        return self._conn.execute(sql, params)

    def executescript(self, sql_script: str) -> None:
        self._conn.executescript(sql_script)

    def commit(self) -> None:
        self._conn.commit()

    def rollback(self) -> None:
        """
        Setzt die aktuelle Transaktion zurück (ROLLBACK).
        """

        self._conn.rollback()

    def close(self) -> None:
        self._conn.close()

    @property
    def conn(self) -> sqlite3.Connection:
        """Rohe `sqlite3.Connection` (nur für Debugging/Tests)."""

        return self._conn


def _default_db_dir() -> Path:
    """
    Standardverzeichnis der Datenbank: benutzerbezogen unter `~/.planet_manager`.
    """

    return Path.home() / DEFAULT_DIR_NAME


def resolve_db_path(db_path: Optional[str | os.PathLike[str]] = None) -> Path:
    """
    Ermittelt den Pfad der Datenbankdatei.

    Zweck:
        Reihenfolge:
        1) explizit übergebener `db_path`
        2) Verzeichnis aus der Umgebungsvariable `PLANET_MANAGER_DB_DIR` (+ `planets.db`)
        3) Benutzerverzeichnis `~/.planet_manager` (+ `planets.db`)

    Parameter:
        db_path (str | PathLike | None): Optionaler vollständiger Pfad zur Datei.

    Rückgabe:
        Path: Pfad zur Datenbankdatei.

    Hinweise:
        Das Zielverzeichnis wird hier nicht angelegt; das übernimmt `connect()`.
    """

    if db_path is not None:
        return Path(db_path)
    env_dir = os.environ.get(DB_DIR_ENV, "").strip()
    if env_dir:
        return Path(env_dir) / DB_FILENAME
    return _default_db_dir() / DB_FILENAME


def connect(db_path: Optional[str | os.PathLike[str]] = None) -> SQLiteDatabase:
    """
    Öffnet eine SQLite-Verbindung und gibt einen `SQLiteDatabase`-Adapter zurück.

    Zweck:
        Legt das Verzeichnis bei Bedarf an, öffnet (oder erzeugt) die Datei und setzt
        `row_factory` auf `sqlite3.Row`, damit das Repository spaltenbasiert lesen kann.

    Parameter:
        db_path (str | PathLike | None): Optionaler Pfad zur Datenbankdatei.

    Rückgabe:
        SQLiteDatabase: Adapter-Objekt, das `DatabaseProtocol` erfüllt.

    Ausnahmen:
        StorageUnavailableError: Wenn Verzeichnis oder Datei nicht geöffnet/angelegt werden können.
    """

    path = resolve_db_path(db_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        # Aufrufe kommen aus Worker-Threads (asyncio.to_thread)
        conn = sqlite3.connect(path, check_same_thread=False)
    except (OSError, sqlite3.Error) as exc:
        log.error("Datenbank %s kann nicht geöffnet werden: %s", path, exc)
        raise StorageUnavailableError(f"Datenbank {path} kann nicht geöffnet werden: {exc}") from exc
    conn.row_factory = sqlite3.Row
    log.debug("Datenbank geöffnet: %s", path)
    return SQLiteDatabase(conn, path)


def schema_version(db: DatabaseProtocol) -> int:
    """Liest `PRAGMA user_version` (0 = neue, leere Datei)."""

    rows = db.execute("PRAGMA user_version").fetchall()
    return int(rows[0][0]) if rows else 0


def create_schema(db: DatabaseProtocol) -> bool:
    """
    Legt das Datenbankschema an, falls die Datei neu ist.

    Zweck:
        Erstellt die Tabelle `planets` und setzt die Schema-Version auf 1. Eine bereits
        initialisierte Datei bleibt unverändert.

    Parameter:
        db (DatabaseProtocol): Datenbank-Adapter.

    Rückgabe:
        bool: True, wenn das Schema in diesem Aufruf angelegt wurde.

    Ausnahmen:
        StorageUnavailableError: Wenn SQLite das Schema nicht anlegen kann
            (z. B. schreibgeschützte oder beschädigte Datei).
    """

    try:
        if schema_version(db) >= SCHEMA_VERSION:
            return False
        db.executescript(SCHEMA_SQL)
        db.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")
        db.commit()
    except sqlite3.Error as exc:
        log.error("Schema konnte nicht angelegt werden: %s", exc)
        raise StorageUnavailableError(f"Schema konnte nicht angelegt werden: {exc}") from exc
    log.info("Tabelle 'planets' angelegt (Schema-Version %d)", SCHEMA_VERSION)
    return True
