from __future__ import annotations

# -----------------------------------------------------------------------------
# Service-Schicht (Persistenz-Gateway)
# -----------------------------------------------------------------------------
# Architektur-Regel:
# - UI spricht nur mit `PlanetService`.
# - Der Service besitzt die einzige DB-Verbindung und öffnet sie lazy beim ersten Aufruf.
# - Das Repository kapselt SQL und nutzt `DatabaseProtocol` für den DB-Zugriff.
#
# `PlanetService.bootstrap()` fungiert als „Composition Root“ für die Anwendung.
# -----------------------------------------------------------------------------


"""Service-Schicht der Planeten-Verwaltung.

Zweck:
    Stellt der UI genau drei Anwendungsfälle bereit: alle Planeten laden, einen Planeten
    anlegen, einen Planeten per id löschen. Alle Operationen sind `async`; die blockierenden
    SQLite-Aufrufe laufen über `asyncio.to_thread` außerhalb der Event-Loop.

Lebenszyklus:
    UNINITIALIZED → OPENING → READY. Der erste Aufruf einer Operation öffnet die Datenbank
    (Pfad ermitteln, Datei öffnen/anlegen, Schema anlegen falls neu). Danach wird das Handle
    für die Lebensdauer des Service zwischengespeichert. Gleichzeitige Aufrufe während OPENING
    warten auf dieselbe Initialisierung, statt eigene Verbindungen zu öffnen.
"""

import asyncio
import logging
import os
import threading
from enum import Enum
from typing import Callable, Optional

from planet_manager.db import connect, create_schema
from planet_manager.db_protocol import DatabaseProtocol
from planet_manager.models import Planet
from planet_manager.repositories import PlanetRepository

log = logging.getLogger(__name__)

ConnectFn = Callable[..., DatabaseProtocol]


class GatewayState(Enum):
    """Zustand der DB-Verbindung im `PlanetService`."""

    UNINITIALIZED = "uninitialized"
    OPENING = "opening"
    READY = "ready"


class PlanetService:
    """
    Fassade und Persistenz-Gateway für die UI.

    Zweck:
        Einziger Besitzer der lokalen Datenbankverbindung und des Schemas. Die GUI kennt nur
        diese Klasse und greift weder direkt auf das Repository noch auf SQL zu.

    Hinweise:
        - `bootstrap()` erzeugt den Service (Composition Root).
        - Die Verbindung wird erst beim ersten Aufruf einer Operation geöffnet.
        - Fehler werden nie maskiert und nicht automatisch wiederholt.
    """

    def __init__(
        self,
        db_path: Optional[str | os.PathLike[str]] = None,
        *,
        connect_fn: ConnectFn = connect,
    ) -> None:
        """
        Initialisiert den Service im Zustand UNINITIALIZED.

        Parameter:
            db_path (str | PathLike | None): Optionaler Pfad zur Datenbankdatei
                (sonst Umgebungsvariable bzw. Standardpfad, siehe `db.resolve_db_path`).
            connect_fn: Funktion, die die Verbindung öffnet (für Tests austauschbar).
        """

        self._db_path = db_path
        self._connect = connect_fn
        self._db: Optional[DatabaseProtocol] = None
        self._repo: Optional[PlanetRepository] = None
        self._state = GatewayState.UNINITIALIZED
        self._lock = threading.Lock()

    @classmethod
    def bootstrap(cls, *, db_path: Optional[str | os.PathLike[str]] = None) -> "PlanetService":
        """
        Erzeugt einen einsatzbereiten Service für die Anwendung.

        Hinweise:
            Die Datenbank wird hier noch nicht geöffnet, sondern erst beim ersten
            Aufruf von `fetch_all()`, `insert()` oder `delete_by_id()`.
        """

        return cls(db_path)

    @property
    def state(self) -> GatewayState:
        return self._state

    # -----------------------------
    # Lazy DB handle
    # -----------------------------
    def _open_once(self) -> PlanetRepository:
        """
        Öffnet die Datenbank genau einmal (threadsicher).

        Ausnahmen:
            StorageUnavailableError: Wenn Datei oder Schema nicht angelegt werden können.
                Der Zustand fällt dann auf UNINITIALIZED zurück.
        """

        with self._lock:
            if self._repo is not None:
                return self._repo

            self._state = GatewayState.OPENING
            log.debug("Öffne Datenbank …")
            try:
                db = self._connect(self._db_path)
                try:
                    create_schema(db)
                except Exception:
                    db.close()
                    raise
            except Exception:
                self._state = GatewayState.UNINITIALIZED
                log.error("Datenbank nicht verfügbar", exc_info=True)
                raise

            self._db = db
            self._repo = PlanetRepository(db)
            self._state = GatewayState.READY
            log.info("Datenbank bereit")
            return self._repo

    async def _repository(self) -> PlanetRepository:
        repo = self._repo
        if repo is not None:
            return repo
        return await asyncio.to_thread(self._open_once)

    async def database(self) -> DatabaseProtocol:
        """
        Liefert das gemeinsam genutzte DB-Handle und öffnet es bei Bedarf.

        Rückgabe:
            DatabaseProtocol: Für die Lebensdauer des Service stabiles Handle.
        """

        repo = await self._repository()
        return repo.db

    def close(self) -> None:
        """
        Schließt die DB-Verbindung (falls geöffnet) und setzt den Zustand zurück.
        """

        with self._lock:
            if self._db is not None:
                self._db.close()
                log.debug("Datenbank geschlossen")
            self._db = None
            self._repo = None
            self._state = GatewayState.UNINITIALIZED

    # -----------------------------
    # Planet CRUD
    # -----------------------------
    async def insert(self, planet: Planet) -> int:
        """
        Speichert einen Planeten (Insert-or-Replace).

        Zweck:
            Ohne `id` wird eine neue Zeile angelegt und eine id vergeben. Mit vorhandener
            `id` wird die bestehende Zeile vollständig ersetzt.

        Parameter:
            planet (Planet): Zu speichernder Planet; wird nicht verändert.

        Rückgabe:
            int: Primärschlüssel der geschriebenen Zeile.

        Ausnahmen:
            StorageUnavailableError: Wenn die Datenbank nicht geöffnet werden kann.
            StorageError: Wenn SQLite den Schreibvorgang ablehnt.
        """

        repo = await self._repository()
        planet_id = await asyncio.to_thread(repo.insert, planet)
        log.info("Planet gespeichert: #%d %s", planet_id, planet.name)
        return planet_id

    async def fetch_all(self) -> list[Planet]:
        """
        Lädt alle Planeten.

        Rückgabe:
            list[Planet]: Alle gespeicherten Planeten (Reihenfolge wie von SQLite geliefert);
            `[]` bei leerer Tabelle.
        """

        repo = await self._repository()
        return await asyncio.to_thread(repo.list_all)

    async def delete_by_id(self, planet_id: int) -> None:
        """
        Löscht einen Planeten per Primärschlüssel.

        Hinweise:
            Eine unbekannte id ist kein Fehler (no-op).
        """

        repo = await self._repository()
        removed = await asyncio.to_thread(repo.delete, planet_id)
        if removed:
            log.info("Planet gelöscht: #%d", planet_id)
