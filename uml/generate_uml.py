from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

# Gesamtarchitektur-UML (PlantUML)
# - Ziel: 1:1-Abbild der realen Klassen/Signaturen aus dem Code (UI/Service/Repo/Model/DB-Protocol)
# - Dieses Skript schreibt `uml_class_diagram_architecture.puml` neben dieses Skript
#   (oder in das als erstes Argument übergebene Verzeichnis).

PUML_FILENAME = "uml_class_diagram_architecture.puml"

PUML = r'''@startuml
skinparam classAttributeIconSize 0
hide circle

' -------------------------
' UI
' -------------------------
package "UI" {
  class PlanetApp {
    +Liste: Treeview (ID/Name/Durchmesser)
    +Diagramm: Entfernung zur Sonne
    +on_add() / on_details() / on_delete()
    +refresh(): void
  }

  class PlanetFormDialog {
    +show(): Planet [0..1]
  }

  class PlanetDetailDialog {
    +show(): DetailAction
  }

  enum DetailAction {
    CLOSE
    DELETE
  }
}

' -------------------------
' Service
' -------------------------
package "Service" {
  class PlanetService {
    <u>+bootstrap(db_path: str [0..1] = None): PlanetService</u>
    +state: GatewayState
    +database(): DatabaseProtocol «async»
    +insert(planet: Planet): int «async»
    +fetch_all(): List[Planet] «async»
    +delete_by_id(planet_id: int): void «async»
    +close(): void
  }

  enum GatewayState {
    UNINITIALIZED
    OPENING
    READY
  }
}

' -------------------------
' Repository / DB
' -------------------------
package "Repository" {
  interface CursorProtocol {
    +lastrowid: Any
    +rowcount: int
    +fetchall(): List[Any]
  }

  interface DatabaseProtocol {
    +execute(sql: str, params: Sequence[Any] = ()): CursorProtocol
    +executescript(sql_script: str): void
    +commit(): void
    +close(): void
  }

  class SQLiteDatabase

  class PlanetRepository {
    +insert(planet: Planet): int
    +list_all(): List[Planet]
    +delete(planet_id: int): bool
  }
}

' -------------------------
' Model
' -------------------------
package "Model" {
  class Planet {
    id: int [0..1] «PK, AUTOINCREMENT»
    name: str
    distance_from_sun: float
    size: float
    nickname: str [0..1]
    +distance_km: float
    +surface_area_km2: float
    +title: str
  }
}

' -------------------------
' Dependencies (downwards)
' -------------------------
PlanetApp --> PlanetService
PlanetApp ..> PlanetFormDialog
PlanetApp ..> PlanetDetailDialog
PlanetDetailDialog ..> DetailAction

PlanetService --> PlanetRepository
PlanetService --> GatewayState
PlanetRepository --> DatabaseProtocol
PlanetRepository ..> Planet

SQLiteDatabase ..|> DatabaseProtocol

@enduml
'''


def main(out_dir: Optional[Path] = None) -> Path:
    target_dir = Path(out_dir) if out_dir is not None else Path(__file__).parent
    out_path = target_dir / PUML_FILENAME
    out_path.write_text(PUML, encoding="utf-8")
    print(f"Wrote: {out_path}")
    return out_path


if __name__ == "__main__":
    main(Path(sys.argv[1]) if len(sys.argv) > 1 else None)
