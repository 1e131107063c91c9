"""Tool selection windows, the drawing canvas and a recording graphics context."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any, Iterable

from mscdoc.elements import Bounds, Colour, Point
from mscdoc.paintable import AffineMatrix
from mscdoc.tooltype import ToolType

WHITE = Colour(255, 255, 255)
BLACK = Colour(0, 0, 0)
ICON_COLOUR = Colour(80, 80, 80)

BEST_SIZE = (45, 45)
SINE_RESOLUTION = 50
ICON_PEN_WIDTH = 3
SELECTION_MARGIN = 1
CONTENT_MARGIN = 2
ROUNDNESS = 4


@dataclass(frozen=True)
class Pen:
    colour: Colour = BLACK
    width: float = 1


@dataclass(frozen=True)
class Operation:
    """One drawing call together with the state it was made in.

    ``brush`` is None when shapes are not filled.
    """

    kind: str
    args: tuple[Any, ...]
    matrix: AffineMatrix
    pen: Pen
    brush: Colour | None


@dataclass
class _State:
    matrix: AffineMatrix = field(default_factory=AffineMatrix)
    pen: Pen = field(default_factory=Pen)
    brush: Colour | None = None

    def copy(self) -> _State:
        return _State(replace(self.matrix), self.pen, self.brush)


class GraphicsContext:
    """A graphics context that records every drawing call it receives."""

    def __init__(self) -> None:
        self.operations: list[Operation] = []
        self.background: Colour | None = None
        self._state = _State()
        self._saved: list[_State] = []

    @property
    def matrix(self) -> AffineMatrix:
        return replace(self._state.matrix)

    @property
    def pen(self) -> Pen:
        return self._state.pen

    @property
    def brush(self) -> Colour | None:
        return self._state.brush

    @property
    def depth(self) -> int:
        """Number of states saved by push_state and not yet popped."""
        return len(self._saved)

    def push_state(self) -> None:
        self._saved.append(self._state.copy())

    def pop_state(self) -> None:
        if not self._saved:
            raise RuntimeError("pop_state called without a matching push_state")
        self._state = self._saved.pop()

    def set_transform(self, matrix: AffineMatrix) -> None:
        self._state.matrix = replace(matrix)

    def rotate(self, angle: float) -> None:
        self._state.matrix.rotate(angle)

    def set_pen(self, colour: Colour, width: float = 1) -> None:
        self._state.pen = Pen(colour, width)

    def set_brush(self, colour: Colour | None) -> None:
        self._state.brush = colour

    def _record(self, kind: str, *args: Any) -> None:
        self.operations.append(
            Operation(kind, args, replace(self._state.matrix), self._state.pen, self._state.brush)
        )

    def draw_rectangle(self, x: float, y: float, width: float, height: float) -> None:
        self._record("rectangle", x, y, width, height)

    def draw_rounded_rectangle(
        self, x: float, y: float, width: float, height: float, radius: float
    ) -> None:
        self._record("rounded_rectangle", x, y, width, height, radius)

    def draw_ellipse(self, x: float, y: float, width: float, height: float) -> None:
        self._record("ellipse", x, y, width, height)

    def stroke_lines(self, points: Iterable[Point]) -> None:
        self._record("lines", tuple(points))

    def clear(self, colour: Colour) -> None:
        self.background = colour
        self.operations.clear()
        self._record("clear", colour)


def _deflate(x: int, y: int, width: int, height: int, d: int) -> tuple[int, int, int, int]:
    if 2 * d > width:
        x += width // 2
        width = 0
    else:
        x += d
        width -= 2 * d
    if 2 * d > height:
        y += height // 2
        height = 0
    else:
        y += d
        height -= 2 * d
    return x, y, width, height


def sine_wave_points(item_width: float) -> list[Point]:
    """One period of a sine wave centred on the origin, used for the pen icon."""
    points = []
    for i in range(SINE_RESOLUTION):
        x = (i / SINE_RESOLUTION - 0.5) * item_width
        y = math.sin(x / item_width * math.pi * 2.0) * item_width / 2.0
        points.append(Point(x, y))
    return points


def transform_arrow_points(item_width: float) -> list[Point]:
    """The closed outline of an arrow, used for the transform icon."""
    w = item_width
    return [
        Point(0, -w * 2 / 3),
        Point(-w * 5 / 12, 0),
        Point(-w / 8, -w / 12),
        Point(-w / 8, w * 2 / 3),
        Point(w / 8, w * 2 / 3),
        Point(w / 8, -w / 12),
        Point(w * 5 / 12, 0),
        Point(0, -w * 2 / 3),
    ]


def draw_tool_icon(
    gc: GraphicsContext,
    tool_type: ToolType,
    x: int,
    y: int,
    width: int,
    height: int,
    roundness: float,
) -> None:
    """Draw the icon of *tool_type* inside the given rectangle."""
    gc.set_pen(WHITE, 1)
    gc.set_brush(WHITE)
    gc.draw_rounded_rectangle(x, y, width, height, roundness)

    item_width = width / 2.0
    matrix = AffineMatrix()
    matrix.translate(x, y)
    matrix.translate(width // 2, height // 2)

    gc.push_state()
    try:
        gc.set_transform(matrix)
        gc.set_pen(ICON_COLOUR, ICON_PEN_WIDTH)
        gc.set_brush(ICON_COLOUR)

        if tool_type is ToolType.PEN:
            gc.rotate(math.pi / 4.0)
            gc.stroke_lines(sine_wave_points(item_width))
        elif tool_type is ToolType.RECT:
            gc.draw_rectangle(-item_width / 2, -item_width / 2, item_width, item_width)
        elif tool_type is ToolType.CIRCLE:
            gc.draw_ellipse(-item_width / 2, -item_width / 2, item_width, item_width)
        elif tool_type is ToolType.TRANSFORM:
            gc.rotate(-math.pi / 4.0)
            gc.stroke_lines(transform_arrow_points(item_width))
    finally:
        gc.pop_state()


class SelectableWindow(ABC):
    """A small square window that draws its content and a frame when selected."""

    def __init__(
        self,
        background: Colour = WHITE,
        size: tuple[int, int] = BEST_SIZE,
        dark_appearance: bool = False,
    ) -> None:
        self.background = background
        self.size = size
        self.dark_appearance = dark_appearance
        self.selected = False

    def redraw(self) -> GraphicsContext:
        """Paint the window and return the context holding what was drawn."""
        gc = GraphicsContext()
        gc.clear(self.background)

        width, height = self.size
        selection = _deflate(0, 0, width, height, SELECTION_MARGIN)
        content = _deflate(*selection, CONTENT_MARGIN)

        self.draw_content(gc, *content, ROUNDNESS)

        if self.selected:
            gc.set_pen(WHITE if self.dark_appearance else BLACK, 1)
            gc.set_brush(None)
            gc.draw_rounded_rectangle(*selection, ROUNDNESS)
        return gc

    @abstractmethod
    def draw_content(
        self, gc: GraphicsContext, x: int, y: int, width: int, height: int, roundness: float
    ) -> None:
        """Draw what the window shows inside the given rectangle."""


class ToolWindow(SelectableWindow):
    """A selectable window showing the icon of one drawing tool."""

    def __init__(
        self,
        tool_type: ToolType = ToolType.PEN,
        background: Colour = WHITE,
        size: tuple[int, int] = BEST_SIZE,
        dark_appearance: bool = False,
    ) -> None:
        super().__init__(background, size, dark_appearance)
        self.tool_type = tool_type

    def draw_content(
        self, gc: GraphicsContext, x: int, y: int, width: int, height: int, roundness: float
    ) -> None:
        draw_tool_icon(gc, self.tool_type, x, y, width, height, roundness)


class Canvas:
    """The surface a view draws its document on."""

    ZOOM_FACTOR = 1.1

    def __init__(self, view: Any = None) -> None:
        self.view = view
        self.zoom_level = 0
        self.is_dragging = False

    def canvas_bounds(self) -> Bounds:
        return Bounds(50, 50, 500, 300)

    def canvas_scale(self) -> float:
        return self.ZOOM_FACTOR**self.zoom_level

    def set_view(self, view: Any) -> None:
        self.view = view

    def repaint(self) -> GraphicsContext:
        """Let the view draw itself and return the context it drew on."""
        gc = GraphicsContext()
        if self.view is not None:
            self.view.on_draw(gc)
        return gc