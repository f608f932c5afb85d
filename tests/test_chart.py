import pytest
from matplotlib.backend_bases import ResizeEvent
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from feedrag.chart import ChartSession, nearest_index, series_label
from feedrag.computation import calculate_fees_on_capital
from feedrag.errors import RenderTargetMissing
from feedrag.finance import InvestmentConfig
from feedrag.i18n import MessageCatalog


@pytest.fixture
def result(default_config):
    return calculate_fees_on_capital(default_config, current_year=2024)


@pytest.fixture
def session(scheduler):
    canvas = FigureCanvasAgg(Figure(figsize=(10, 6), dpi=100))
    return ChartSession(canvas, MessageCatalog(), scheduler=scheduler)


def test_nearest_index_snaps_and_clamps():
    labels = ["2024", "2025", "2026"]
    assert nearest_index(2024.4, labels) == 0
    assert nearest_index(2025.6, labels) == 2
    assert nearest_index(1990, labels) == 0
    assert nearest_index(2100, labels) == 2
    assert nearest_index(None, labels) is None


def test_render_draws_three_labelled_series(session, result):
    session.render(result)
    labels = [line.get_label() for line in session.ax.get_lines()]
    assert labels == [
        "Capital with higher fees",
        "Capital with 3% fees",
        "Capital with lower fees",
    ]
    assert list(session.ax.get_lines()[1].get_ydata()) == [v for _, v in result.series["baseFee"]]


def test_rerender_replaces_previous_drawing(session, result):
    session.render(result)
    first_ax = session.ax
    smaller = calculate_fees_on_capital(InvestmentConfig(5000, 5, 10, 1), current_year=2024)
    session.render(smaller)
    assert session.figure.axes == [session.ax]
    assert session.ax is not first_ax
    assert len(session.ax.get_lines()[0].get_xdata()) == 10
    assert len(session._cids) == 4


def test_missing_canvas_raises():
    session = ChartSession(None, MessageCatalog())
    with pytest.raises(RenderTargetMissing):
        session.render(None)


def test_hover_shows_overlay_centred_on_axes(session, result):
    session.render(result)
    placement = session.hover(0)
    assert placement.opacity == 1
    assert placement.content.startswith("After 0 years")
    rect = session.canvas_rect()
    width, _height = session._tip_size
    assert width > 0
    assert placement.left_px == pytest.approx(rect.left + rect.width / 2 - width / 2)
    assert session._overlay.get_visible()


def test_leave_hides_overlay_after_timer(session, result, scheduler):
    session.render(result)
    session.hover(4)
    session._on_leave(None)
    assert session._overlay.get_visible()
    scheduler.fire_all()
    assert not session._overlay.get_visible()


def test_stale_hover_after_rerender_hides(session, result):
    session.render(result)
    session.hover(20)
    session.render(calculate_fees_on_capital(InvestmentConfig(5000, 5, 10, 1), current_year=2024))
    assert session.hover(20).opacity == 0


def test_resize_switches_to_compact(session, result):
    session.render(result)
    session.resize(1280)
    wide = session.hover(3)
    session.resize(600)
    compact = session.hover(3)
    rect = session.canvas_rect()
    _width, height = session._tip_size
    expected = (height / 2 + height / 7) - (rect.height / 5 - height)
    assert compact.top_px - wide.top_px == pytest.approx(expected)
    assert session.result is result


def test_series_label_in_italian(result):
    assert series_label("baseFee", result, MessageCatalog("it-IT")) == "Capitale con spese al 3%"


def test_series_label_uses_italian_decimal_comma():
    config = InvestmentConfig(100000, 7, 10, 2.5)
    result = calculate_fees_on_capital(config, current_year=2024)
    assert series_label("baseFee", result, MessageCatalog("it-IT")) == "Capitale con spese al 2,5%"
    assert series_label("baseFee", result, MessageCatalog()) == "Capital with 2.5% fees"


def test_canvas_resize_events_drive_width_when_none_injected(session, result):
    session.render(result)
    session.canvas.callbacks.process("resize_event", ResizeEvent("resize_event", session.canvas))
    assert session.viewport_width == 1000


def test_injected_width_ignores_canvas_resize_events(scheduler, result):
    canvas = FigureCanvasAgg(Figure(figsize=(10, 6), dpi=100))
    session = ChartSession(canvas, MessageCatalog(), scheduler=scheduler, viewport_width=700)
    session.render(result)
    assert len(session._cids) == 3
    canvas.callbacks.process("resize_event", ResizeEvent("resize_event", canvas))
    assert session.viewport_width == 700
    session.resize(500)
    assert session.viewport_width == 500
