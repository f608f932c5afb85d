"""Tkinter GUI application for the fee drag estimator."""
from __future__ import annotations

import logging
import tkinter as tk
from tkinter import messagebox, ttk
from typing import Callable, Optional

from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from matplotlib.figure import Figure

from ..chart import ChartSession
from ..computation import ProjectionResult, break_even_or_none, calculate_fees_on_capital
from ..config import DEFAULT_INPUTS, DEFAULT_LOCALE
from ..errors import FeeDragError, RenderTargetMissing
from ..i18n import MessageCatalog, format_decimal, format_rate
from ..logging_config import setup_logging
from ..parsing import parse_config, parse_number

logger = logging.getLogger(__name__)


class TkAfterScheduler:
    """Cancellable delayed callbacks on the Tk event loop."""

    def __init__(self, widget: tk.Misc) -> None:
        self.widget = widget

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> str:
        return self.widget.after(delay_ms, callback)

    def cancel(self, handle: str) -> None:
        self.widget.after_cancel(handle)


class App(tk.Tk):
    def __init__(self, locale: str = DEFAULT_LOCALE) -> None:
        super().__init__()
        self.catalog = MessageCatalog(locale)
        self.title(self.catalog.instant("TITLE"))
        self.geometry("1100x780")
        self.result: Optional[ProjectionResult] = None

        self._capital_var = tk.StringVar(value=f"{DEFAULT_INPUTS['capital']:.0f}")
        self._return_var = tk.StringVar(
            value=format_rate(DEFAULT_INPUTS["return_pct"], self.catalog.locale)
        )
        self._years_var = tk.StringVar(value=str(DEFAULT_INPUTS["years"]))
        self._fee_var = tk.StringVar(
            value=format_rate(DEFAULT_INPUTS["fee_pct"], self.catalog.locale)
        )
        self._lower_var = tk.StringVar(value="")
        self._higher_var = tk.StringVar(value="")
        self._break_even_var = tk.StringVar(value="")
        self._labels = {}

        self._build_inputs()
        self._build_summary()
        self._build_chart()
        self.bind("<Configure>", self._on_configure)
        self.calculate_fees_on_capital()

    # ---------- layout ----------
    def _build_inputs(self) -> None:
        frm = ttk.Frame(self)
        frm.pack(side=tk.TOP, fill=tk.X, padx=8, pady=6)
        fields = [
            ("CAPITAL", self._capital_var, True),
            ("ANNUAL_RETURN", self._return_var, True),
            ("YEARS", self._years_var, True),
            ("ANNUAL_FEES", self._fee_var, True),
            ("LOWER_FEES", self._lower_var, False),
            ("HIGHER_FEES", self._higher_var, False),
        ]
        for col, (key, var, editable) in enumerate(fields):
            label = ttk.Label(frm, text=self.catalog.instant(key))
            label.grid(row=0, column=col, padx=6, sticky="w")
            self._labels[key] = label
            entry = ttk.Entry(frm, width=12, textvariable=var)
            if editable:
                entry.bind("<Return>", lambda _e: self.calculate_fees_on_capital())
            else:
                entry.configure(state="readonly")
            entry.grid(row=1, column=col, padx=6, pady=(2, 4), sticky="w")

        self._calc_btn = ttk.Button(
            frm, text=self.catalog.instant("CALCULATE"), command=self.calculate_fees_on_capital
        )
        self._calc_btn.grid(row=1, column=len(fields), padx=8)
        self._lang_btn = ttk.Button(
            frm, text=self.catalog.instant("LANGUAGE"), command=self._toggle_language
        )
        self._lang_btn.grid(row=1, column=len(fields) + 1, padx=8)

    def _build_summary(self) -> None:
        ttk.Label(self, textvariable=self._break_even_var, wraplength=900).pack(
            side=tk.TOP, fill=tk.X, padx=14, pady=(0, 6)
        )

    def _build_chart(self) -> None:
        frm = ttk.Frame(self)
        frm.pack(side=tk.TOP, fill=tk.BOTH, expand=True, padx=8, pady=6)
        fig = Figure(figsize=(9.8, 5.6), dpi=100)
        self.canvas = FigureCanvasTkAgg(fig, master=frm)
        self.canvas.get_tk_widget().pack(fill=tk.BOTH, expand=True)
        self.session = ChartSession(
            self.canvas,
            self.catalog,
            scheduler=TkAfterScheduler(self),
            viewport_width=self.winfo_width(),
        )

    # ---------- handlers ----------
    def calculate_fees_on_capital(self) -> None:
        try:
            config = parse_config(
                self._capital_var.get(),
                self._return_var.get(),
                self._years_var.get(),
                self._fee_var.get(),
                locale=self.catalog.locale,
            )
            result = calculate_fees_on_capital(config)
        except FeeDragError as exc:
            messagebox.showerror("Error", str(exc))
            return

        self.result = result
        _base, lower, higher = result.scenarios.rounded()
        self._lower_var.set(str(lower))
        self._higher_var.set(str(higher))
        self._refresh_break_even()
        try:
            self.session.render(result)
        except RenderTargetMissing as exc:
            logger.exception("Chart could not be drawn")
            messagebox.showerror("Error", str(exc))

    def _refresh_break_even(self) -> None:
        if self.result is None:
            return
        years = break_even_or_none(self.result.config)
        if years is None:
            self._break_even_var.set(self.catalog.instant("YEARS_TO_DOUBLE_UNDEFINED"))
        else:
            self._break_even_var.set(
                self.catalog.instant(
                    "YEARS_TO_DOUBLE", years=format_decimal(years, self.catalog.locale, 1)
                )
            )

    def _toggle_language(self) -> None:
        previous = self.catalog.locale
        self.catalog.use("it-IT" if previous == "en-US" else "en-US")
        self._relocalize_inputs(previous)
        self.title(self.catalog.instant("TITLE"))
        for key, label in self._labels.items():
            label.configure(text=self.catalog.instant(key))
        self._calc_btn.configure(text=self.catalog.instant("CALCULATE"))
        self._lang_btn.configure(text=self.catalog.instant("LANGUAGE"))
        self.calculate_fees_on_capital()

    def _relocalize_inputs(self, previous: str) -> None:
        """Rewrite the typed numbers with the new locale's separators."""

        locale = self.catalog.locale

        def capital(v: float) -> str:
            return format_decimal(v, locale, 0 if v.is_integer() else 2)

        fields = (
            (self._capital_var, "Starting capital", capital),
            (self._return_var, "Annual return", lambda v: format_rate(v, locale)),
            (self._fee_var, "Annual fees", lambda v: format_rate(v, locale)),
        )
        for var, field, fmt in fields:
            try:
                value = parse_number(var.get(), field, previous)
            except FeeDragError:
                # Left as typed; the recalculation reports it.
                continue
            var.set(fmt(value))

    def _on_configure(self, event: tk.Event) -> None:
        if event.widget is self:
            self.session.resize(event.width)


def run(locale: Optional[str] = None) -> None:
    setup_logging(default_level=logging.INFO)
    App(locale or DEFAULT_LOCALE).mainloop()


__all__ = ["run", "App", "TkAfterScheduler"]
