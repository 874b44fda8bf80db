from __future__ import annotations

# -----------------------------------------------------------------------------
# Repository layer (Persistence)
# -----------------------------------------------------------------------------
# Das Repository kapselt *sämtliche* SQL-Zugriffe auf die Tabelle `planets`.
# Es enthält keine GUI-Logik und keine Threading-/async-Details; diese liegen
# im Service (`PlanetService`).
# -----------------------------------------------------------------------------


import logging
import sqlite3

from planet_manager.db import StorageError
from planet_manager.db_protocol import DatabaseProtocol
from planet_manager.models import Planet, from_row, to_row

log = logging.getLogger(__name__)


class PlanetRepository:
    """
    Repository für `Planet` (Persistenzzugriff).

    Zweck:
        Kapselt SQL-Zugriffe auf die Tabelle `planets`: Einfügen (Insert-or-Replace),
        alle Zeilen lesen und Löschen per Primärschlüssel.

    Hinweise:
        Fehler von SQLite werden als `StorageError` weitergereicht, nie verschluckt.
        Ein fehlgeschlagener Schreibvorgang wird zurückgerollt und hinterlässt keine Zeile.
    """

    def __init__(self, db: DatabaseProtocol) -> None:
        self.db = db

    def _rollback(self) -> None:
        # Offene Transaktion verwerfen, sonst schreibt der nächste commit() sie mit
        try:
            self.db.rollback()
        except sqlite3.Error as exc:
            log.warning("Rollback fehlgeschlagen: %s", exc)

    def insert(self, planet: Planet) -> int:
        """
        Schreibt einen Planeten (Insert-or-Replace).

        Zweck:
            Ist `planet.id` gesetzt und existiert bereits, wird die Zeile vollständig ersetzt.
            Ist `planet.id` `None`, vergibt SQLite einen neuen Primärschlüssel.

        Parameter:
            planet (Planet): Zu speichernder Planet.

        Rückgabe:
            int: Primärschlüssel der geschriebenen Zeile.

        Ausnahmen:
            StorageError: Wenn SQLite den Schreibvorgang ablehnt.
        """

        try:
            cursor = self.db.execute(
                """
                INSERT OR REPLACE INTO planets(id, name, distanceFromSun, size, nickname)
                VALUES (:id, :name, :distanceFromSun, :size, :nickname)
                """,
                to_row(planet),
            )
            self.db.commit()
        except sqlite3.Error as exc:
            self._rollback()
            raise StorageError(f"Planet '{planet.name}' konnte nicht gespeichert werden: {exc}") from exc

        # Bei REPLACE mit vorhandener id entspricht lastrowid genau dieser id
        return int(cursor.lastrowid) if planet.id is None else int(planet.id)

    def list_all(self) -> list[Planet]:
        """
        Liefert alle gespeicherten Planeten.

        Rückgabe:
            list[Planet]: Alle Zeilen in der Reihenfolge, die SQLite liefert; `[]` bei leerer Tabelle.

        Ausnahmen:
            StorageError: Wenn das Lesen fehlschlägt.
            MalformedRowError: Wenn eine Zeile nicht dem erwarteten Aufbau entspricht.
        """

        try:
            rows = self.db.execute(
                "SELECT id, name, distanceFromSun, size, nickname FROM planets"
            ).fetchall()
        except sqlite3.Error as exc:
            raise StorageError(f"Planeten konnten nicht gelesen werden: {exc}") from exc
        return [from_row(r) for r in rows]

    def delete(self, planet_id: int) -> bool:
        """
        Löscht den Planeten mit dem Primärschlüssel `planet_id`.

        Rückgabe:
            bool: True, wenn eine Zeile entfernt wurde. Eine unbekannte id ist kein Fehler.

        Ausnahmen:
            StorageError: Wenn SQLite das Löschen ablehnt.
        """

        try:
            cursor = self.db.execute("DELETE FROM planets WHERE id = ?", (planet_id,))
            self.db.commit()
        except sqlite3.Error as exc:
            self._rollback()
            raise StorageError(f"Planet #{planet_id} konnte nicht gelöscht werden: {exc}") from exc

        removed = cursor.rowcount > 0
        if not removed:
            log.debug("delete: Planet #%s existiert nicht (no-op)", planet_id)
        return removed
