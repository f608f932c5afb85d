"""Hover overlay content and placement for the fee chart.

The chart renderer reports which data index the pointer is over along with
the current canvas rectangle; this module turns that into the overlay's text
and a top-left pixel position. Coordinates follow screen conventions: the
origin is the top-left corner and ``top`` grows downwards.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol, Tuple

from .computation import ProjectionResult
from .config import COMPACT_BREAKPOINT_PX, HIDE_DELAY_MS
from .errors import StaleHoverIndex
from .i18n import MessageCatalog, format_decimal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CanvasRect:
    left: float
    top: float
    width: float
    height: float

    @property
    def bottom(self) -> float:
        return self.top + self.height


@dataclass(frozen=True)
class ViewportGeometry:
    canvas_rect: CanvasRect
    viewport_width: float
    scroll_left: float = 0.0
    scroll_top: float = 0.0

    @property
    def compact(self) -> bool:
        return is_compact_layout(self.viewport_width)


@dataclass(frozen=True)
class HoverEvent:
    index: Optional[int]
    geometry: ViewportGeometry
    tooltip_size: Tuple[float, float]


@dataclass(frozen=True)
class TooltipPlacement:
    content: str
    left_px: float
    top_px: float
    opacity: int


HIDDEN = TooltipPlacement(content="", left_px=0.0, top_px=0.0, opacity=0)


def is_compact_layout(viewport_width: float, breakpoint: int = COMPACT_BREAKPOINT_PX) -> bool:
    return viewport_width <= breakpoint


def compute_placement(
    canvas_rect: CanvasRect,
    tooltip_width: float,
    tooltip_height: float,
    scroll_left: float = 0.0,
    scroll_top: float = 0.0,
    compact: bool = False,
) -> Tuple[float, float]:
    """Return ``(left, top)`` for the overlay.

    The overlay is always centred horizontally on the canvas, whichever point
    is hovered. Wide layouts put it over the top fifth of the chart; compact
    layouts push it just below the canvas top edge instead. Nothing is clamped
    against the window edges.
    """

    left = canvas_rect.left + canvas_rect.width / 2 - tooltip_width / 2 + scroll_left
    if compact:
        top = canvas_rect.top + scroll_top + tooltip_height / 2 + tooltip_height / 7
    else:
        top = canvas_rect.top + scroll_top - tooltip_height + canvas_rect.height / 5
    return left, top


def format_tooltip_content(
    result: ProjectionResult, index: int, catalog: MessageCatalog
) -> str:
    labels = result.labels
    if not 0 <= index < len(labels):
        raise StaleHoverIndex(index, len(labels))
    years = int(labels[index]) - int(labels[0])
    costs = result.fee_costs(index)
    scenarios = result.scenarios
    loc = catalog.locale
    return catalog.instant(
        "CAPITAL_FEES_TOOLTIP",
        years=years,
        lower_fee_rate=format_decimal(scenarios.lower_pct, loc),
        base_fee_rate=format_decimal(scenarios.base_pct, loc),
        higher_fee_rate=format_decimal(scenarios.higher_pct, loc),
        lower_principal=format_decimal(costs["lowerFee"], loc),
        base_principal=format_decimal(costs["baseFee"], loc),
        higher_principal=format_decimal(costs["higherFee"], loc),
        currency=catalog.currency,
    )


class Scheduler(Protocol):
    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> Any:
        ...

    def cancel(self, handle: Any) -> None:
        ...


class TooltipEngine:
    """Hidden/Visible overlay state driven by hover and leave events.

    ``sink`` receives every placement the overlay should show, including the
    hidden placement once the debounced hide fires.
    """

    def __init__(
        self,
        catalog: MessageCatalog,
        scheduler: Scheduler,
        sink: Optional[Callable[[TooltipPlacement], None]] = None,
        hide_delay_ms: int = HIDE_DELAY_MS,
    ) -> None:
        self.catalog = catalog
        self.scheduler = scheduler
        self.sink = sink
        self.hide_delay_ms = hide_delay_ms
        self._result: Optional[ProjectionResult] = None
        self._pending_hide = None
        self.visible = False

    def bind(self, result: Optional[ProjectionResult]) -> None:
        """Swap in the series of a new recalculation."""
        self._result = result

    def on_hover(self, event: HoverEvent) -> TooltipPlacement:
        self._cancel_pending_hide()
        try:
            placement = self._placement_for(event)
        except StaleHoverIndex as exc:
            logger.debug("Ignoring hover: %s", exc)
            placement = HIDDEN
        self.visible = placement.opacity == 1
        self._emit(placement)
        return placement

    def on_leave(self) -> None:
        self._cancel_pending_hide()
        self._pending_hide = self.scheduler.schedule(self.hide_delay_ms, self._hide)

    def _placement_for(self, event: HoverEvent) -> TooltipPlacement:
        if self._result is None or event.index is None:
            raise StaleHoverIndex(event.index, 0 if self._result is None else len(self._result))
        content = format_tooltip_content(self._result, event.index, self.catalog)
        width, height = event.tooltip_size
        geometry = event.geometry
        left, top = compute_placement(
            geometry.canvas_rect,
            width,
            height,
            geometry.scroll_left,
            geometry.scroll_top,
            geometry.compact,
        )
        return TooltipPlacement(content=content, left_px=left, top_px=top, opacity=1)

    def _hide(self) -> None:
        self._pending_hide = None
        self.visible = False
        self._emit(HIDDEN)

    def _cancel_pending_hide(self) -> None:
        if self._pending_hide is not None:
            self.scheduler.cancel(self._pending_hide)
            self._pending_hide = None

    def _emit(self, placement: TooltipPlacement) -> None:
        if self.sink is not None:
            self.sink(placement)


__all__ = [
    "CanvasRect",
    "HIDDEN",
    "HoverEvent",
    "Scheduler",
    "TooltipEngine",
    "TooltipPlacement",
    "ViewportGeometry",
    "compute_placement",
    "format_tooltip_content",
    "is_compact_layout",
]
