from __future__ import annotations

# -----------------------------------------------------------------------------
# UI layer (Tkinter + Matplotlib)
# -----------------------------------------------------------------------------
# Verantwortlich für:
# - Liste aller Planeten (Tabelle) + Diagramm „Entfernung zur Sonne“
# - Dialog „Neuer Planet“ (Create)
# - Detailansicht mit Umrechnungen und Löschen (Delete)
#
# Architekturregel:
# Die UI greift nicht direkt auf SQL/DB zu, sondern verwendet ausschließlich `PlanetService`.
# Nach jeder Änderung wird die komplette Liste neu geladen.
# -----------------------------------------------------------------------------


import asyncio
import logging
from enum import Enum
from tkinter import Tk, ttk, StringVar, messagebox, Toplevel
from typing import Awaitable, Optional, TypeVar

import matplotlib
matplotlib.use("TkAgg")
from matplotlib.figure import Figure
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg

from planet_manager.models import Planet
from planet_manager.services import PlanetService
from planet_manager.validation import planet_from_form

log = logging.getLogger(__name__)

T = TypeVar("T")


class DetailAction(Enum):
    """Ergebnis der Detailansicht an den Aufrufer."""

    CLOSE = "close"
    DELETE = "delete"


def format_details(planet: Planet) -> list[str]:
    """
    Baut die Textzeilen der Detailansicht.

    Zweck:
        Zeigt Entfernung (AE und km) sowie Durchmesser und Oberfläche an.
    """

    return [
        "Entfernung zur Sonne:",
        f"Astronomische Einheiten: {planet.distance_from_sun} AE",
        f"Kilometer: {planet.distance_km:,.2f} km",
        "",
        "Größe des Planeten:",
        f"Durchmesser: {planet.size} km",
        f"Oberfläche: {planet.surface_area_km2:,.2f} km²",
    ]


class PlanetFormDialog:
    """
    Modaler Dialog „Neuer Planet“.

    Zweck:
        Erfasst Name, Entfernung, Durchmesser und optionalen Spitznamen. `show()` liefert
        den neuen Planeten (ohne id) oder `None` bei Abbruch.
    """

    def __init__(self, master: Tk) -> None:
        self.result: Optional[Planet] = None

        self.win = Toplevel(master)
        self.win.title("Neuer Planet")
        self.win.transient(master)

        self.v_name = StringVar(value="")
        self.v_distance = StringVar(value="")
        self.v_size = StringVar(value="")
        self.v_nickname = StringVar(value="")

        frm = ttk.Frame(self.win, padding=12)
        frm.pack(fill="both", expand=True)
        frm.columnconfigure(1, weight=1)

        for row, (label, var) in enumerate(
            [
                ("Name", self.v_name),
                ("Entfernung (AE)", self.v_distance),
                ("Durchmesser (km)", self.v_size),
                ("Spitzname (optional)", self.v_nickname),
            ]
        ):
            ttk.Label(frm, text=label).grid(row=row, column=0, sticky="w", pady=2)
            ttk.Entry(frm, textvariable=var).grid(row=row, column=1, sticky="ew", pady=2)

        btns = ttk.Frame(frm)
        btns.grid(row=4, column=0, columnspan=2, sticky="e", pady=(10, 0))
        ttk.Button(btns, text="Speichern", command=self._save).grid(row=0, column=0, padx=(0, 6))
        ttk.Button(btns, text="Abbrechen", command=self.win.destroy).grid(row=0, column=1)

    def _save(self) -> None:
        try:
            self.result = planet_from_form(
                self.v_name.get(),
                self.v_distance.get(),
                self.v_size.get(),
                self.v_nickname.get(),
            )
        except Exception as exc:
            messagebox.showerror("Fehler", str(exc), parent=self.win)
            return
        self.win.destroy()

    def show(self) -> Optional[Planet]:
        self.win.grab_set()
        self.win.wait_window()
        return self.result


class PlanetDetailDialog:
    """
    Modale Detailansicht eines Planeten.

    Zweck:
        Zeigt die Umrechnungen an. Der Button „Planet löschen“ schließt den Dialog und
        meldet `DetailAction.DELETE` an den Aufrufer; das Löschen selbst übernimmt die Liste.
    """

    def __init__(self, master: Tk, planet: Planet) -> None:
        self.action = DetailAction.CLOSE

        self.win = Toplevel(master)
        self.win.title(planet.title)
        self.win.transient(master)

        frm = ttk.Frame(self.win, padding=16)
        frm.pack(fill="both", expand=True)

        ttk.Label(frm, text=planet.title, font=("TkDefaultFont", 12, "bold")).pack(anchor="w", pady=(0, 8))
        for line in format_details(planet):
            ttk.Label(frm, text=line).pack(anchor="w")

        btns = ttk.Frame(frm)
        btns.pack(anchor="e", pady=(16, 0))
        ttk.Button(btns, text="Planet löschen", command=self._delete).grid(row=0, column=0, padx=(0, 6))
        ttk.Button(btns, text="Schließen", command=self.win.destroy).grid(row=0, column=1)

    def _delete(self) -> None:
        self.action = DetailAction.DELETE
        self.win.destroy()

    def show(self) -> DetailAction:
        self.win.grab_set()
        self.win.wait_window()
        return self.action


class PlanetApp:
    """
    Tkinter-Hauptfenster (Planetenliste).

    Ablauf:
        1) Service bootstrappen (DB wird beim ersten Laden lazy geöffnet)
        2) Widgets aufbauen
        3) Liste laden und Diagramm zeichnen

    Hinweise:
        Alle Service-Aufrufe sind Koroutinen. Die App besitzt eine eigene Event-Loop und
        führt jeden Aufruf vollständig aus, bevor der nächste startet.
    """

    def __init__(self, root: Tk, svc: Optional[PlanetService] = None) -> None:
        self.root = root
        root.title("Planeten")

        self.svc = svc or PlanetService.bootstrap()
        self._loop = asyncio.new_event_loop()

        # Stand der letzten Abfrage; Quelle bleibt immer die DB
        self.planets: list[Planet] = []

        self._build_ui()
        self.refresh()

    # -----------------------------
    # UI build
    # -----------------------------
    def _build_ui(self) -> None:
        self.root.geometry("900x560")
        self.root.minsize(700, 420)

        paned = ttk.Panedwindow(self.root, orient="horizontal")
        paned.pack(fill="both", expand=True)

        left = ttk.Frame(paned, padding=12)
        right = ttk.Frame(paned, padding=8)
        paned.add(left, weight=3)
        paned.add(right, weight=2)

        left.columnconfigure(0, weight=1)
        left.rowconfigure(1, weight=1)

        btns = ttk.Frame(left)
        btns.grid(row=0, column=0, sticky="e", pady=(0, 8))
        ttk.Button(btns, text="Neuer Planet…", command=self.on_add).grid(row=0, column=0, padx=(0, 6))
        ttk.Button(btns, text="Details", command=self.on_details).grid(row=0, column=1, padx=(0, 6))
        ttk.Button(btns, text="Löschen", command=self.on_delete).grid(row=0, column=2, padx=(0, 6))
        ttk.Button(btns, text="Refresh", command=self.refresh).grid(row=0, column=3, padx=(0, 6))
        ttk.Button(btns, text="Close", command=self.on_close).grid(row=0, column=4)

        self.table = ttk.Treeview(left, columns=("id", "name", "size"), show="headings", height=14)
        for col, title, width, anchor in [
            ("id", "ID", 55, "w"),
            ("name", "Name", 260, "w"),
            ("size", "Durchmesser", 140, "e"),
        ]:
            self.table.heading(col, text=title)
            self.table.column(col, width=width, anchor=anchor)
        self.table.grid(row=1, column=0, sticky="nsew")
        self.table.bind("<Double-1>", lambda _e: self.on_details())

        right.rowconfigure(0, weight=1)
        right.columnconfigure(0, weight=1)
        self._fig = Figure(figsize=(4, 3), dpi=100)
        self._ax = self._fig.add_subplot(111)
        self._canvas = FigureCanvasTkAgg(self._fig, master=right)
        self._canvas.get_tk_widget().grid(row=0, column=0, sticky="nsew")

    # -----------------------------
    # Async bridge
    # -----------------------------
    def _await(self, coro: Awaitable[T]) -> T:
        return self._loop.run_until_complete(coro)

    # -----------------------------
    # List / plot
    # -----------------------------
    def refresh(self) -> None:
        """
        Lädt die Liste aus der DB und aktualisiert Tabelle und Diagramm.
        """

        try:
            self.planets = self._await(self.svc.fetch_all())
        except Exception as exc:
            log.exception("Laden der Planeten fehlgeschlagen")
            messagebox.showerror("Fehler", f"Planeten konnten nicht geladen werden:\n{exc}")
            return

        for item in self.table.get_children():
            self.table.delete(item)
        for p in self.planets:
            self.table.insert("", "end", iid=str(p.id), values=(p.id, p.name, f"{p.size:,.0f} km"))

        self._safe_update_plot()

    def _safe_update_plot(self) -> None:
        try:
            self._update_plot()
        except Exception as exc:
            messagebox.showerror("Plot-Fehler", str(exc))

    def _update_plot(self) -> None:
        ax = self._ax
        ax.clear()
        if not self.planets:
            ax.text(0.5, 0.5, "Keine Planeten vorhanden", ha="center", va="center", transform=ax.transAxes)
            ax.set_xticks([])
            ax.set_yticks([])
        else:
            labels = [p.name[:14] + "…" if len(p.name) > 15 else p.name for p in self.planets]
            xs = list(range(len(self.planets)))
            ax.bar(xs, [p.distance_from_sun for p in self.planets])
            ax.set_title("Entfernung zur Sonne")
            ax.set_ylabel("AE")
            ax.set_xticks(xs)
            ax.set_xticklabels(labels, rotation=45, ha="right")
        self._fig.tight_layout()
        self._canvas.draw()

    # -----------------------------
    # CRUD
    # -----------------------------
    def _selected_planet(self) -> Optional[Planet]:
        sel = self.table.selection()
        if not sel:
            messagebox.showinfo("Hinweis", "Bitte zuerst einen Planeten auswählen.")
            return None
        by_id = {str(p.id): p for p in self.planets}
        return by_id.get(sel[0])

    def on_add(self) -> None:
        """Event-Handler: Planet anlegen (CRUD: Create)."""

        planet = PlanetFormDialog(self.root).show()
        if planet is None:
            return
        try:
            self._await(self.svc.insert(planet))
        except Exception as exc:
            messagebox.showerror("Fehler", str(exc))
        self.refresh()

    def on_details(self) -> None:
        """Event-Handler: Detailansicht; löscht bei `DetailAction.DELETE`."""

        planet = self._selected_planet()
        if planet is None:
            return
        if PlanetDetailDialog(self.root, planet).show() is DetailAction.DELETE:
            self._delete(planet)

    def on_delete(self) -> None:
        """Event-Handler: Planet löschen (CRUD: Delete)."""

        planet = self._selected_planet()
        if planet is None:
            return
        if not messagebox.askyesno("Bestätigung", f"Planet '{planet.name}' wirklich löschen?"):
            return
        self._delete(planet)

    def _delete(self, planet: Planet) -> None:
        if planet.id is None:
            return
        try:
            self._await(self.svc.delete_by_id(planet.id))
        except Exception as exc:
            messagebox.showerror("Fehler", str(exc))
        self.refresh()

    def on_close(self) -> None:
        """
        Schließt Service/DB und Event-Loop und beendet das Fenster.
        """

        try:
            self.svc.close()
            # Worker-Threads aus asyncio.to_thread sauber beenden
            self._loop.run_until_complete(self._loop.shutdown_default_executor())
            self._loop.close()
        finally:
            self.root.destroy()


def run(svc: Optional[PlanetService] = None) -> None:
    """
    Startet die Tkinter-GUI (Hilfsfunktion für main.py).
    """

    root = Tk()
    try:
        ttk.Style().theme_use("clam")
    except Exception:
        pass
    app = PlanetApp(root, svc)
    root.protocol("WM_DELETE_WINDOW", app.on_close)
    root.mainloop()
