"""
Planeten-Verwaltung (Prototyp).

Zweck:
    Dieses Paket bündelt eine kleine Desktop-Anwendung, mit der eine persönliche
    Liste von Planeten (Name, Entfernung zur Sonne, Durchmesser, optionaler Spitzname)
    lokal in SQLite gepflegt wird.

Inhalt:
    - UI-Schicht: Liste, Detailansicht und Anlegen-Dialog (Tkinter + Matplotlib)
    - Service-Schicht: `PlanetService` als Persistenz-Gateway (lazy geöffnete DB, async API)
    - Repository-Schicht: SQL/CRUD auf der Tabelle `planets`
    - Model-Schicht: Datenklasse `Planet` inkl. Row-Konvertierung

Hinweise:
    Diese Datei enthält keine Laufzeitlogik.
"""

__all__ = []
