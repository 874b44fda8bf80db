"""
Validierung und Parsing von Benutzereingaben.

Zweck:
    Die GUI nimmt Eingaben als Strings entgegen. Dieses Modul wandelt diese Strings in
    passende Python-Typen um und prüft einfache Wertebereiche, damit keine ungültigen
    Planeten in Service/Repository-Schicht gelangen.

Hinweise:
    Ein leerer Spitzname wird zu `None` normalisiert (nie ""), damit „nicht gesetzt“
    eindeutig bleibt.
"""

from __future__ import annotations

from typing import Optional

from planet_manager.models import Planet


class ValidationError(ValueError):
    """
    Fehlerklasse für ungültige Benutzereingaben.

    Zweck:
        Wird in der UI abgefangen, um eine verständliche Fehlermeldung anzuzeigen,
        ohne einen technischen Traceback zu präsentieren.
    """


def parse_required_text(text: str, *, field: str) -> str:
    """
    Liest ein Pflicht-Textfeld (Whitespace am Rand wird entfernt).

    Ausnahmen:
        ValidationError: Bei leerer Eingabe.
    """

    t = (text or "").strip()
    if not t:
        raise ValidationError(f"{field} ist ein Pflichtfeld")
    return t


def parse_optional_text(text: str) -> Optional[str]:
    """Leere/whitespace Eingabe → `None`, sonst der getrimmte Text."""

    t = (text or "").strip()
    return t or None


def parse_float(text: str, *, field: str, min_value: Optional[float] = None) -> float:
    """
    Parst eine Fließkommazahl (Komma oder Punkt).

    Parameter:
        text (str): Eingabetext.
        field (str): Feldname für Fehlermeldungen.
        min_value (float | None): Untere Schranke (optional, inklusiv).

    Rückgabe:
        float: Geparste Zahl.

    Ausnahmen:
        ValidationError: Bei leerer/ungültiger Eingabe oder Unterschreitung von `min_value`.
    """

    t = (text or "").strip()
    if not t:
        raise ValidationError(f"{field} ist ein Pflichtfeld")
    try:
        v = float(t.replace(",", "."))
    except ValueError as exc:
        raise ValidationError(f"{field} muss eine Zahl sein") from exc
    if v != v or v in (float("inf"), float("-inf")):
        raise ValidationError(f"{field} muss eine endliche Zahl sein")
    if min_value is not None and v < min_value:
        raise ValidationError(f"{field} muss >= {min_value} sein")
    return v


def planet_from_form(name: str, distance: str, size: str, nickname: str = "") -> Planet:
    """
    Erzeugt einen neuen (noch nicht gespeicherten) Planeten aus Formularwerten.

    Parameter:
        name (str): Name (Pflicht).
        distance (str): Entfernung zur Sonne in AE (Pflicht, >= 0).
        size (str): Durchmesser in km (Pflicht, >= 0).
        nickname (str): Spitzname (optional).

    Rückgabe:
        Planet: Planet ohne `id`.

    Ausnahmen:
        ValidationError: Bei ungültigen Eingaben.
    """

    return Planet(
        name=parse_required_text(name, field="Name"),
        distance_from_sun=parse_float(distance, field="Entfernung (AE)", min_value=0.0),
        size=parse_float(size, field="Durchmesser (km)", min_value=0.0),
        nickname=parse_optional_text(nickname),
    )
