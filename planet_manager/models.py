from __future__ import annotations

# -----------------------------------------------------------------------------
# Domain model (Entities)
# -----------------------------------------------------------------------------
# Diese Datei enthält das einzige fachliche Kernobjekt der Anwendung: `Planet`.
#
# - Basisschutz für Pflichtfelder über __post_init__.
# - UI-spezifisches Parsing (String → float) passiert in `validation.py`.
# - `to_row()` / `from_row()` bilden die Grenze zur Persistenz (flache Rows).
# -----------------------------------------------------------------------------


import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional

# Kilometer pro Astronomischer Einheit (IAU 2012)
KM_PER_AU = 149_597_870.7

ROW_KEYS = ("id", "name", "distanceFromSun", "size", "nickname")


class MalformedRowError(TypeError):
    """
    Eine gelesene Row passt nicht zum erwarteten Aufbau.

    Zweck:
        Signalisiert eine Vertragsverletzung zwischen Speicher und Model (Bug),
        keinen Fehler, den Nutzer:innen beheben können.
    """


def _require_non_empty(val: str, field: str) -> None:
    """
    Prüft, ob ein Pflicht-String nicht leer ist.

    Ausnahmen:
        ValueError: Wenn `val` kein String oder leer/whitespace ist.
    """

    if not isinstance(val, str) or not val.strip():
        raise ValueError(f"{field} darf nicht leer sein")


@dataclass(slots=True)
class Planet:
    """
    Ein Planet der persönlichen Liste.

    Attribute:
        name (str): Name des Planeten (Pflicht, nicht leer).
        distance_from_sun (float): Entfernung zur Sonne in Astronomischen Einheiten (AE).
        size (float): Durchmesser in Kilometern.
        nickname (str | None): Optionaler Spitzname; „nicht gesetzt“ ist `None`, nie "".
        id (int | None): Primärschlüssel; `None` vor dem INSERT, danach stabil.

    Hinweise:
        `id` wird ausschließlich von der Speicherschicht vergeben.
    """

    name: str
    distance_from_sun: float
    size: float
    nickname: Optional[str] = None
    id: Optional[int] = None

    def __post_init__(self) -> None:
        _require_non_empty(self.name, "name")

    @property
    def distance_km(self) -> float:
        """Entfernung zur Sonne in Kilometern."""

        return self.distance_from_sun * KM_PER_AU

    @property
    def surface_area_km2(self) -> float:
        """
        Oberfläche in km², angenähert als Kugel mit Durchmesser `size`.
        """

        radius = self.size / 2.0
        return 4.0 * math.pi * radius * radius

    @property
    def title(self) -> str:
        """Anzeigetitel für die Detailansicht („Name - Spitzname“)."""

        if self.nickname:
            return f"{self.name} - {self.nickname}"
        return self.name


def to_row(planet: Planet) -> dict[str, Any]:
    """
    Wandelt einen Planeten in eine flache Row um.

    Zweck:
        Serialisierungsgrenze zum Repository. Die Werte werden unverändert übernommen
        (auch `None` für `id`/`nickname`), es findet keine Validierung statt.

    Parameter:
        planet (Planet): Zu serialisierender Planet.

    Rückgabe:
        dict[str, Any]: Mapping mit den Schlüsseln `id, name, distanceFromSun, size, nickname`.
    """

    return {
        "id": planet.id,
        "name": planet.name,
        "distanceFromSun": planet.distance_from_sun,
        "size": planet.size,
        "nickname": planet.nickname,
    }


def _get(row: Mapping[str, Any], key: str) -> Any:
    try:
        return row[key]
    except (KeyError, IndexError) as exc:
        raise MalformedRowError(f"Row ohne Feld '{key}'") from exc


def _as_float(value: Any, key: str) -> float:
    # bool ist eine Unterklasse von int, aber kein gültiger Messwert
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedRowError(f"Feld '{key}' muss eine Zahl sein, nicht {type(value).__name__}")
    return float(value)


def _as_optional_str(value: Any, key: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise MalformedRowError(f"Feld '{key}' muss Text oder NULL sein, nicht {type(value).__name__}")
    return value


def from_row(row: Mapping[str, Any]) -> Planet:
    """
    Erzeugt einen Planeten aus einer Row der Speicherschicht.

    Zweck:
        Umkehrung von `to_row()`. Akzeptiert beliebige Mappings, insbesondere `sqlite3.Row`.

    Parameter:
        row (Mapping[str, Any]): Row mit den Schlüsseln aus `ROW_KEYS`.

    Rückgabe:
        Planet: Deserialisierter Planet.

    Ausnahmen:
        MalformedRowError: Wenn ein Pflichtfeld fehlt oder einen falschen Typ hat.
    """

    raw_id = _get(row, "id")
    if raw_id is not None and (isinstance(raw_id, bool) or not isinstance(raw_id, int)):
        raise MalformedRowError(f"Feld 'id' muss eine Ganzzahl sein, nicht {type(raw_id).__name__}")

    name = _get(row, "name")
    if not isinstance(name, str) or not name.strip():
        raise MalformedRowError("Feld 'name' muss nicht-leerer Text sein")

    return Planet(
        id=raw_id,
        name=name,
        distance_from_sun=_as_float(_get(row, "distanceFromSun"), "distanceFromSun"),
        size=_as_float(_get(row, "size"), "size"),
        nickname=_as_optional_str(_get(row, "nickname"), "nickname"),
    )
