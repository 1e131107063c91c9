"""The main window, the document view and the command that starts them."""

from __future__ import annotations

import argparse
import os
import sys
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Sequence

from mscdoc.document import Document
from mscdoc.elements import Colour, ElementTypeError
from mscdoc.tooltype import ToolType
from mscdoc.widgets import WHITE, Canvas, GraphicsContext, ToolWindow

APP_NAME = "Machine stability control documentor"
DOCUMENT_DESCRIPTION = "MSCDocument"
FILE_FILTER = "*.pxz"
DEFAULT_EXTENSION = "pxz"

DARK_BACKGROUND = Colour.from_string("#2c2828")
DEFAULT_COLOUR = Colour.from_string("#000000")

TOOL_ORDER = (
    ToolType.PEN,
    ToolType.RECT,
    ToolType.CIRCLE,
    ToolType.TEXT,
    ToolType.TRANSFORM,
)

MIN_PEN_WIDTH = 1
MAX_PEN_WIDTH = 20


class NoDocumentError(RuntimeError):
    """Raised when an action needs an open document and there is none."""


@dataclass
class View:
    """Draws the elements of one document."""

    document: Document

    def on_draw(self, gc: GraphicsContext) -> None:
        gc.clear(WHITE)
        for paintable in self.document.paintable_elements:
            paintable.draw(gc)


class Frame:
    """The main window: tool panel, colour and pen settings, and one open document."""

    def __init__(self, title: str = APP_NAME) -> None:
        self.title = title
        self.tool_windows = [ToolWindow(tool, background=DARK_BACKGROUND) for tool in TOOL_ORDER]
        self.selected_colour = DEFAULT_COLOUR
        self.pen_width = MIN_PEN_WIDTH
        self.document: Document | None = None
        self.view: View | None = None
        self.canvas: Canvas | None = None
        self.path: str | None = None

    @property
    def selected_tool(self) -> ToolType | None:
        return next((w.tool_type for w in self.tool_windows if w.selected), None)

    def set_up_canvas_for_view(self, view: View | None) -> Canvas | None:
        """Replace the canvas with one for *view*, or remove it when *view* is None."""
        self.canvas = Canvas(view) if view is not None else None
        return self.canvas

    def _show(self, document: Document, path: str | None) -> View:
        # Only one document may be open at a time.
        self.close_document()
        self.document = document
        self.path = path
        self.view = View(document)
        self.set_up_canvas_for_view(self.view)
        return self.view

    def new_document(self) -> Document:
        document = Document()
        self._show(document, None)
        return document

    def open_document(self, path: str | os.PathLike[str]) -> Document:
        document = Document()
        document.load_file(path)
        self._show(document, os.fspath(path))
        return document

    def _require_document(self) -> Document:
        if self.document is None:
            raise NoDocumentError("no document is open")
        return self.document

    def save_document(self) -> str:
        document = self._require_document()
        if self.path is None:
            raise NoDocumentError("the document has no file name; save it under a path first")
        document.save_file(self.path)
        return self.path

    def save_document_as(self, path: str | os.PathLike[str]) -> str:
        document = self._require_document()
        document.save_file(path)
        self.path = os.fspath(path)
        return self.path

    def close_document(self) -> bool:
        """Close the open document; return whether there was one."""
        if self.document is None:
            return False
        self.set_up_canvas_for_view(None)
        self.document = None
        self.view = None
        self.path = None
        return True

    def select_tool(self, tool_type: ToolType) -> ToolWindow:
        chosen = None
        for window in self.tool_windows:
            window.selected = window.tool_type is tool_type
            if window.selected:
                chosen = window
        if chosen is None:
            raise ValueError(f"no tool window for {tool_type!r}")
        return chosen

    def set_colour(self, colour: Colour | str) -> Colour:
        if isinstance(colour, str):
            colour = Colour.from_string(colour)
        self.selected_colour = colour
        return colour

    def set_pen_width(self, width: int) -> int:
        if not MIN_PEN_WIDTH <= width <= MAX_PEN_WIDTH:
            raise ValueError(
                f"pen width must be between {MIN_PEN_WIDTH} and {MAX_PEN_WIDTH}, got {width}"
            )
        self.pen_width = int(width)
        return self.pen_width


def _describe(document: Document) -> list[str]:
    lines = []
    for paintable in document.paintable_elements:
        b = paintable.bounds
        lines.append(
            f"{paintable.element.node_type} x={b.x:g} y={b.y:g} "
            f"width={b.width:g} height={b.height:g}"
        )
    return lines


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="mscdoc", description=APP_NAME)
    parser.add_argument("file", nargs="?", help=f"document to open ({FILE_FILTER})")
    parser.add_argument("-o", "--save-as", metavar="PATH", help="save the document to PATH")
    args = parser.parse_args(argv)

    frame = Frame()
    try:
        if args.file:
            document = frame.open_document(args.file)
        else:
            document = frame.new_document()
        if args.save_as:
            frame.save_document_as(args.save_as)
    except (OSError, ET.ParseError, ElementTypeError, ValueError) as error:
        print(f"mscdoc: {error}", file=sys.stderr)
        return 1

    print(frame.title)
    for line in _describe(document):
        print(line)
    return 0