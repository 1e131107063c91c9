import math

import pytest

from mscdoc.elements import Bounds, Colour, Point
from mscdoc.paintable import AffineMatrix
from mscdoc.tooltype import ToolType
from mscdoc.widgets import (
    BLACK,
    ICON_COLOUR,
    WHITE,
    Canvas,
    GraphicsContext,
    SelectableWindow,
    ToolWindow,
    draw_tool_icon,
    sine_wave_points,
    transform_arrow_points,
)


def test_pop_without_push_raises():
    gc = GraphicsContext()
    with pytest.raises(RuntimeError):
        gc.pop_state()


def test_push_pop_restores_state():
    gc = GraphicsContext()
    gc.set_pen(WHITE, 2)
    gc.push_state()
    gc.set_pen(BLACK, 7)
    gc.set_brush(WHITE)
    gc.rotate(1.0)
    gc.pop_state()
    assert gc.pen.colour == WHITE
    assert gc.pen.width == 2
    assert gc.brush is None
    assert gc.matrix == AffineMatrix()


def test_operations_record_state():
    gc = GraphicsContext()
    gc.set_pen(BLACK, 4)
    gc.set_brush(WHITE)
    gc.draw_ellipse(1, 2, 3, 4)
    op = gc.operations[-1]
    assert op.kind == "ellipse"
    assert op.args == (1, 2, 3, 4)
    assert op.pen.width == 4
    assert op.brush == WHITE


def test_set_transform_copies_matrix():
    gc = GraphicsContext()
    m = AffineMatrix()
    m.translate(5, 6)
    gc.set_transform(m)
    m.translate(100, 100)
    assert gc.matrix.transform_point(0, 0) == Point(5, 6)


def test_sine_wave_shape():
    w = 20.0
    points = sine_wave_points(w)
    assert len(points) == 50
    assert points[0].x == pytest.approx(-w / 2)
    assert points[0].y == pytest.approx(0.0, abs=1e-9)
    assert all(abs(p.y) <= w / 2 + 1e-9 for p in points)
    xs = [p.x for p in points]
    assert xs == sorted(xs)


def test_transform_arrow_is_closed():
    points = transform_arrow_points(12.0)
    assert len(points) == 8
    assert points[0] == points[-1]
    assert points[0] == Point(0, -8.0)


@pytest.mark.parametrize("tool", list(ToolType))
def test_icon_leaves_state_balanced(tool):
    gc = GraphicsContext()
    draw_tool_icon(gc, tool, 3, 3, 39, 39, 4)
    assert gc.depth == 0
    first = gc.operations[0]
    assert first.kind == "rounded_rectangle"
    assert first.args == (3, 3, 39, 39, 4)
    assert first.brush == WHITE


def test_rect_icon_is_centred():
    gc = GraphicsContext()
    draw_tool_icon(gc, ToolType.RECT, 10, 20, 40, 30, 4)
    op = gc.operations[-1]
    assert op.kind == "rectangle"
    assert op.args == (-10.0, -10.0, 20.0, 20.0)
    assert op.matrix.transform_point(0, 0) == Point(30, 35)
    assert op.pen.colour == ICON_COLOUR
    assert op.pen.width == 3


def test_circle_icon_uses_ellipse():
    gc = GraphicsContext()
    draw_tool_icon(gc, ToolType.CIRCLE, 0, 0, 40, 40, 4)
    assert [op.kind for op in gc.operations] == ["rounded_rectangle", "ellipse"]


def test_text_icon_draws_only_background():
    gc = GraphicsContext()
    draw_tool_icon(gc, ToolType.TEXT, 0, 0, 40, 40, 4)
    assert [op.kind for op in gc.operations] == ["rounded_rectangle"]


def test_pen_icon_is_rotated():
    gc = GraphicsContext()
    draw_tool_icon(gc, ToolType.PEN, 0, 0, 40, 40, 4)
    op = gc.operations[-1]
    assert op.kind == "lines"
    assert op.args[0] == tuple(sine_wave_points(20.0))
    moved = op.matrix.transform_point(1, 0)
    centre = op.matrix.transform_point(0, 0)
    assert math.hypot(moved.x - centre.x, moved.y - centre.y) == pytest.approx(1.0)
    assert moved.y - centre.y != pytest.approx(0.0)


def test_unselected_window_has_no_frame():
    window = ToolWindow(ToolType.RECT)
    gc = window.redraw()
    assert gc.operations[0].kind == "clear"
    assert gc.background == WHITE
    assert gc.operations[1].args == (3, 3, 39, 39, 4)
    assert all(op.brush is not None for op in gc.operations[1:])


@pytest.mark.parametrize("dark, colour", [(False, BLACK), (True, WHITE)])
def test_selected_window_draws_frame(dark, colour):
    background = Colour.from_string("#2c2828")
    window = ToolWindow(ToolType.CIRCLE, background=background, dark_appearance=dark)
    window.selected = True
    gc = window.redraw()
    frame = gc.operations[-1]
    assert frame.kind == "rounded_rectangle"
    assert frame.args == (1, 1, 43, 43, 4)
    assert frame.pen.colour == colour
    assert frame.brush is None
    assert gc.background == background


def test_tiny_window_deflates_to_zero():
    window = ToolWindow(ToolType.TEXT, size=(4, 4))
    gc = window.redraw()
    assert gc.operations[1].args[2:4] == (0, 0)


def test_selectable_window_is_abstract():
    with pytest.raises(TypeError):
        SelectableWindow()


def test_default_tool_is_pen():
    assert ToolWindow().tool_type is ToolType.PEN


def test_canvas_bounds():
    assert Canvas().canvas_bounds() == Bounds(50, 50, 500, 300)


def test_canvas_scale_grows_by_zoom_factor():
    canvas = Canvas()
    assert canvas.canvas_scale() == 1.0
    canvas.zoom_level = 3
    larger = canvas.canvas_scale()
    canvas.zoom_level = 4
    assert canvas.canvas_scale() / larger == pytest.approx(Canvas.ZOOM_FACTOR)


class _RecordingView:
    def __init__(self):
        self.contexts = []

    def on_draw(self, gc):
        self.contexts.append(gc)
        gc.clear(WHITE)


def test_canvas_repaint_calls_view():
    view = _RecordingView()
    canvas = Canvas(view)
    gc = canvas.repaint()
    assert view.contexts == [gc]
    assert gc.background == WHITE


def test_canvas_without_view_draws_nothing():
    canvas = Canvas()
    view = _RecordingView()
    canvas.set_view(view)
    canvas.set_view(None)
    gc = canvas.repaint()
    assert gc.operations == []
    assert view.contexts == []