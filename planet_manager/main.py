"""
Startpunkt der Anwendung (Planeten-Verwaltung).

Zweck:
    Richtet das Logging ein und startet die Tkinter-GUI. Die Oberfläche ruft für alle
    Interaktionen (Liste, Anlegen, Löschen) ausschließlich die Service-Schicht auf.

Ausführung:
    python -m planet_manager.main
    planet-manager            (Console-Script aus pyproject.toml)

Umgebungsvariablen:
    PLANET_MANAGER_DB_DIR     Verzeichnis für `planets.db` (optional)
    PLANET_MANAGER_LOG_LEVEL  Log-Level, z. B. DEBUG (Standard: INFO)
"""

from __future__ import annotations

import logging
import os

log = logging.getLogger(__name__)

LOG_LEVEL_ENV = "PLANET_MANAGER_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(level: str | None = None) -> int:
    """
    Konfiguriert das Root-Logging.

    Parameter:
        level (str | None): Log-Level-Name; sonst aus `PLANET_MANAGER_LOG_LEVEL`, Standard INFO.

    Rückgabe:
        int: Tatsächlich gesetztes numerisches Level (unbekannte Namen → INFO).
    """

    name = (level or os.environ.get(LOG_LEVEL_ENV) or "INFO").strip().upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        numeric = logging.INFO
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
    return numeric


def main() -> None:
    setup_logging()

    try:
        import tkinter  # noqa: F401
    except ModuleNotFoundError as exc:
        raise SystemExit(
            "Tkinter fehlt.\n"
            "- Linux (Debian/Ubuntu): sudo apt install python3-tk\n"
            "- Fedora: sudo dnf install python3-tkinter\n"
            "- Arch: sudo pacman -S tk\n"
            "Unter Windows/macOS bitte Python neu installieren und Tcl/Tk mit installieren."
        ) from exc

    from planet_manager.ui_tk import run

    log.info("Starte Planeten-Verwaltung")
    run()


if __name__ == "__main__":
    main()
