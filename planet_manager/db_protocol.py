"""
Datenbank-Interfaces (Protocols) für Repository- und Service-Schicht.

Zweck:
    Entkoppelt die Anwendung von der konkreten Datenbank-Implementierung (hier: SQLite),
    indem Repositories/Services nur gegen kleine, stabile Interfaces typisieren.

Inhalt:
    - CursorProtocol: minimales Cursor-Verhalten (fetchall/lastrowid/rowcount)
    - DatabaseProtocol: minimale DB-API (execute/executescript + commit/rollback/close)

Hinweise:
    Die konkrete Implementierung des Interfaces erfolgt in `db.py` (SQLiteDatabase).
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence


class CursorProtocol(Protocol):
    """
    Cursor-Interface, das vom Repository benötigt wird.

    Hinweise:
        Ein echtes `sqlite3.Cursor` bietet deutlich mehr; hier steht nur der Minimalvertrag.
    """

    lastrowid: Any
    rowcount: int

    def fetchall(self) -> list[Any]: ...


class DatabaseProtocol(Protocol):
    """
    Minimales Datenbank-Interface für Repository und Service.

    Hinweise:
        `PlanetRepository` erhält ein Objekt dieses Typs (z. B. `SQLiteDatabase`) und führt
        ausschließlich darüber SQL-Befehle aus.
    """

    def execute(self, sql: str, params: Sequence[Any] | dict[str, Any] = ()) -> CursorProtocol: ...
    def executescript(self, sql_script: str) -> None: ...
    def commit(self) -> None: ...
    def rollback(self) -> None: ...
    def close(self) -> None: ...
