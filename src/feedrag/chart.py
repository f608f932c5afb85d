"""Matplotlib rendering of the three fee scenarios plus the hover overlay."""
from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from matplotlib.transforms import IdentityTransform

from .computation import ProjectionResult
from .config import SERIES_ORDER, SERIES_STYLES
from .errors import RenderTargetMissing
from .i18n import MessageCatalog, format_rate
from .tooltip import (
    CanvasRect,
    HoverEvent,
    Scheduler,
    TooltipEngine,
    TooltipPlacement,
    ViewportGeometry,
)

logger = logging.getLogger(__name__)


class CanvasTimerScheduler:
    """One-shot delayed callbacks on a matplotlib canvas timer."""

    def __init__(self, canvas) -> None:
        self.canvas = canvas

    def schedule(self, delay_ms: int, callback: Callable[[], None]):
        timer = self.canvas.new_timer(interval=delay_ms)
        timer.single_shot = True
        timer.add_callback(callback)
        timer.start()
        return timer

    def cancel(self, handle) -> None:
        handle.stop()


def nearest_index(xdata: Optional[float], labels: Sequence[str]) -> Optional[int]:
    """Index of the year closest to ``xdata`` along the x axis."""

    if xdata is None or not labels:
        return None
    idx = int(round(xdata - int(labels[0])))
    return max(0, min(len(labels) - 1, idx))


def series_label(name: str, result: ProjectionResult, catalog: MessageCatalog) -> str:
    key = SERIES_STYLES[name]["message"]
    if name == "baseFee":
        rate = format_rate(result.scenarios.base_pct, catalog.locale)
        return catalog.instant(key, base_fee_rate=rate)
    return catalog.instant(key)


def draw_projection(ax, result: ProjectionResult, catalog: MessageCatalog) -> List:
    """Plot the filled scenario lines on ``ax`` and return the line artists."""

    years = [int(label) for label in result.labels]
    values = {
        name: [v for _, v in result.series[name]] for name in SERIES_ORDER
    }
    lines = []
    for name in SERIES_ORDER:
        style = SERIES_STYLES[name]
        line, = ax.plot(
            years,
            values[name],
            label=series_label(name, result, catalog),
            color=style["color"],
            linewidth=style["linewidth"],
        )
        fill_to = style["fill_to"]
        baseline = values[fill_to] if fill_to else 0
        ax.fill_between(
            years, baseline, values[name], color=style["color"], alpha=style["fill_alpha"]
        )
        lines.append(line)
    ax.set_title(catalog.instant("TITLE"))
    ax.set_xlabel(catalog.instant("YEAR_AXIS"))
    ax.set_ylabel(catalog.instant("CAPITAL_AXIS", currency=catalog.currency))
    ax.grid(True)
    ax.legend(loc="upper left")
    return lines


class ChartSession:
    """Owns the drawing on one injected canvas and its hover overlay.

    Every ``render`` clears the figure and reconnects the event handlers, so
    artists and listeners from a previous projection never survive it.
    """

    def __init__(
        self,
        canvas,
        catalog: MessageCatalog,
        scheduler: Optional[Scheduler] = None,
        viewport_width: Optional[float] = None,
    ) -> None:
        self.canvas = canvas
        self.catalog = catalog
        if scheduler is None and canvas is not None:
            scheduler = CanvasTimerScheduler(canvas)
        self.engine = TooltipEngine(catalog, scheduler, sink=self._apply_placement)
        self.viewport_width = viewport_width
        # An injected width is owned by the host window; otherwise follow the canvas.
        self._follow_canvas = viewport_width is None
        self.result: Optional[ProjectionResult] = None
        self.ax = None
        self._overlay = None
        self._tip_size = (0.0, 0.0)
        self._cids: List[int] = []

    @property
    def figure(self):
        return self.canvas.figure

    def render(self, result: ProjectionResult) -> None:
        if self.canvas is None:
            logger.error("No drawing surface injected; chart not rendered")
            raise RenderTargetMissing("Chart canvas is missing")

        for cid in self._cids:
            self.canvas.mpl_disconnect(cid)
        self._cids = []
        fig = self.figure
        fig.clear()
        self.ax = fig.add_subplot(111)
        draw_projection(self.ax, result, self.catalog)

        self._overlay = fig.text(
            0,
            0,
            "",
            transform=IdentityTransform(),
            ha="left",
            va="top",
            fontsize=9,
            bbox={"boxstyle": "round", "facecolor": "white", "alpha": 0.9},
            visible=False,
            zorder=10,
        )
        self._tip_size = (0.0, 0.0)
        self.result = result
        self.engine.bind(result)

        self._cids = [
            self.canvas.mpl_connect("motion_notify_event", self._on_motion),
            self.canvas.mpl_connect("axes_leave_event", self._on_leave),
            self.canvas.mpl_connect("figure_leave_event", self._on_leave),
        ]
        if self._follow_canvas:
            self._cids.append(self.canvas.mpl_connect("resize_event", self._on_resize))
        self.canvas.draw_idle()

    def resize(self, viewport_width: float) -> None:
        """Track the viewport width; the series are left untouched."""
        self.viewport_width = viewport_width
        if self.canvas is not None:
            self.canvas.draw_idle()

    def canvas_rect(self) -> CanvasRect:
        """Axes rectangle in screen-style pixels (origin top-left)."""

        bbox = self.ax.get_window_extent()
        fig_height = self.figure.bbox.height
        return CanvasRect(
            left=bbox.x0,
            top=fig_height - bbox.y1,
            width=bbox.width,
            height=bbox.height,
        )

    def geometry(self) -> ViewportGeometry:
        width = self.viewport_width
        if width is None:
            width = self.figure.bbox.width
        return ViewportGeometry(canvas_rect=self.canvas_rect(), viewport_width=width)

    def hover(self, index: Optional[int]) -> TooltipPlacement:
        event = HoverEvent(index=index, geometry=self.geometry(), tooltip_size=self._tip_size)
        placement = self.engine.on_hover(event)
        measured = self._measure_overlay()
        if placement.opacity and measured != self._tip_size:
            # First frame with new text: place again using its real size.
            self._tip_size = measured
            placement = self.engine.on_hover(
                HoverEvent(index=index, geometry=event.geometry, tooltip_size=measured)
            )
        return placement

    def _on_motion(self, event) -> None:
        if self.result is None or event.inaxes is not self.ax:
            return
        self.hover(nearest_index(event.xdata, self.result.labels))

    def _on_leave(self, _event) -> None:
        self.engine.on_leave()

    def _on_resize(self, event) -> None:
        self.resize(event.width)

    def _measure_overlay(self):
        if self._overlay is None or not self._overlay.get_text():
            return (0.0, 0.0)
        renderer = self.canvas.get_renderer()
        extent = self._overlay.get_window_extent(renderer=renderer)
        return (extent.width, extent.height)

    def _apply_placement(self, placement: TooltipPlacement) -> None:
        if self._overlay is None:
            return
        if placement.opacity:
            fig_height = self.figure.bbox.height
            self._overlay.set_text(placement.content)
            self._overlay.set_position((placement.left_px, fig_height - placement.top_px))
            self._overlay.set_visible(True)
        else:
            self._overlay.set_visible(False)
        self.canvas.draw_idle()


__all__ = [
    "CanvasTimerScheduler",
    "ChartSession",
    "draw_projection",
    "nearest_index",
    "series_label",
]
