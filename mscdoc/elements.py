"""Drawable document elements and their XML representation."""

from __future__ import annotations

import math
import re
import sys
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar

OBJECT_NODE_NAME = "Object"
PATH_NODE_TYPE = "Path"
RECT_NODE_TYPE = "Rect"
CIRCLE_NODE_TYPE = "Circle"
TEXT_NODE_TYPE = "Text"

CENTER_ELEMENT_NODE_NAME = "Center"
RECT_ELEMENT_NODE_NAME = "Rect"
POINT_ELEMENT_NODE_NAME = "Point"

COLOUR_ATTRIBUTE = "colour"
RADIUS_ATTRIBUTE = "radius"
X_ATTRIBUTE = "x"
Y_ATTRIBUTE = "y"
WIDTH_ATTRIBUTE = "width"
HEIGHT_ATTRIBUTE = "height"
TYPE_ATTRIBUTE = "type"

TRANSFORM_NODE_NAME = "Transform"
ROT_ATTRIBUTE = "rot"
SCALE_X_ATTRIBUTE = "scaleX"
SCALE_Y_ATTRIBUTE = "scaleY"
TRANS_X_ATTRIBUTE = "transformX"
TRANS_Y_ATTRIBUTE = "transformY"

DOCUMENT_NODE_NAME = "MSCDocument"
VERSION_ATTRIBUTE = "version"
VERSION_VALUE = "1.0"


class ElementTypeError(ValueError):
    """Raised when an XML node describes an element of unknown type."""


_FLOAT_PREFIX = re.compile(
    r"\s*[+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


def _atof(text: str | None) -> float:
    """Parse the leading number of *text*, giving 0.0 when there is none."""
    if not text:
        return 0.0
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        return 0.0
    return float(match.group(0))


def _format_number(value: float) -> str:
    return f"{value:g}"


def _first_child(node: ET.Element, what: str) -> ET.Element:
    for child in node:
        return child
    raise ValueError(f"{what} node has no child node")


@dataclass
class Transform:
    """Translation, rotation and scale applied to an element on the canvas."""

    trans_x: float = 0.0
    trans_y: float = 0.0
    rot_angle: float = 0.0
    scale_x: float = 0.0
    scale_y: float = 0.0


@dataclass(frozen=True)
class Point:
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class Bounds:
    """An axis-aligned rectangle given by its corner and size."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    def centre(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)


_NAMED_COLOURS = {
    "black": (0, 0, 0),
    "white": (255, 255, 255),
    "red": (255, 0, 0),
    "green": (0, 255, 0),
    "blue": (0, 0, 255),
    "yellow": (255, 255, 0),
    "cyan": (0, 255, 255),
    "magenta": (255, 0, 255),
    "grey": (128, 128, 128),
    "gray": (128, 128, 128),
    "light grey": (192, 192, 192),
    "orange": (255, 165, 0),
}

_HEX_COLOUR = re.compile(r"#([0-9a-fA-F]{6})")
_RGB_COLOUR = re.compile(
    r"rgb(a?)\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*([0-9.]+)\s*)?\)",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class Colour:
    """An RGBA colour with 8-bit channels."""

    red: int = 0
    green: int = 0
    blue: int = 0
    alpha: int = 255

    def __post_init__(self) -> None:
        for channel in (self.red, self.green, self.blue, self.alpha):
            if not 0 <= channel <= 255:
                raise ValueError(f"colour channel out of range: {channel}")

    @classmethod
    def from_string(cls, text: str) -> Colour:
        """Parse "#RRGGBB", "rgb(r, g, b)", "rgba(r, g, b, a)" or a colour name."""
        stripped = text.strip()
        hex_match = _HEX_COLOUR.fullmatch(stripped)
        if hex_match:
            digits = hex_match.group(1)
            return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
        rgb_match = _RGB_COLOUR.fullmatch(stripped)
        if rgb_match:
            has_alpha, r, g, b, a = rgb_match.groups()
            if bool(has_alpha) != (a is not None):
                raise ValueError(f"malformed colour: {text!r}")
            alpha = 255 if a is None else round(float(a) * 255)
            return cls(int(r), int(g), int(b), alpha)
        named = _NAMED_COLOURS.get(stripped.lower())
        if named is not None:
            return cls(*named)
        raise ValueError(f"unrecognised colour: {text!r}")

    def to_html(self) -> str:
        return f"#{self.red:02X}{self.green:02X}{self.blue:02X}"


class Element(ABC):
    """A shape that can be drawn and stored as an XML node."""

    node_type: ClassVar[str]

    @abstractmethod
    def to_xml(self) -> ET.Element:
        """Return the element as an Object node."""

    @abstractmethod
    def draw(self, gc: Any) -> None:
        """Draw the element on a graphics context."""

    @abstractmethod
    def bounds(self) -> Bounds:
        """Return the rectangle the element occupies."""

    def _object_node(self, colour: Colour) -> ET.Element:
        node = ET.Element(OBJECT_NODE_NAME)
        node.set(TYPE_ATTRIBUTE, self.node_type)
        node.set(COLOUR_ATTRIBUTE, colour.to_html())
        return node


def _read_colour(node: ET.Element) -> Colour:
    return Colour.from_string(node.get(COLOUR_ATTRIBUTE, ""))


@dataclass
class Circle(Element):
    node_type: ClassVar[str] = CIRCLE_NODE_TYPE

    center: Point = field(default_factory=Point)
    radius: float = 0.0
    colour: Colour = field(default_factory=Colour)

    def to_xml(self) -> ET.Element:
        node = self._object_node(self.colour)
        node.set(RADIUS_ATTRIBUTE, _format_number(self.radius))
        centre = ET.SubElement(node, CENTER_ELEMENT_NODE_NAME)
        centre.set(X_ATTRIBUTE, _format_number(self.center.x))
        centre.set(Y_ATTRIBUTE, _format_number(self.center.y))
        return node

    @classmethod
    def from_xml(cls, node: ET.Element) -> Circle:
        centre = _first_child(node, CIRCLE_NODE_TYPE)
        return cls(
            center=Point(_atof(centre.get(X_ATTRIBUTE)), _atof(centre.get(Y_ATTRIBUTE))),
            radius=_atof(node.get(RADIUS_ATTRIBUTE)),
            colour=_read_colour(node),
        )

    def draw(self, gc: Any) -> None:
        gc.set_pen(self.colour, 1)
        gc.set_brush(self.colour)
        box = self.bounds()
        gc.draw_ellipse(box.x, box.y, box.width, box.height)

    def bounds(self) -> Bounds:
        return Bounds(
            self.center.x - self.radius,
            self.center.y - self.radius,
            2 * self.radius,
            2 * self.radius,
        )


@dataclass
class Rect(Element):
    node_type: ClassVar[str] = RECT_NODE_TYPE

    rect: Bounds = field(default_factory=Bounds)
    colour: Colour = field(default_factory=Colour)

    def to_xml(self) -> ET.Element:
        node = self._object_node(self.colour)
        child = ET.SubElement(node, RECT_ELEMENT_NODE_NAME)
        child.set(X_ATTRIBUTE, _format_number(self.rect.x))
        child.set(Y_ATTRIBUTE, _format_number(self.rect.y))
        child.set(WIDTH_ATTRIBUTE, _format_number(self.rect.width))
        child.set(HEIGHT_ATTRIBUTE, _format_number(self.rect.height))
        return node

    @classmethod
    def from_xml(cls, node: ET.Element) -> Rect:
        child = _first_child(node, RECT_NODE_TYPE)
        return cls(
            rect=Bounds(
                _atof(child.get(X_ATTRIBUTE)),
                _atof(child.get(Y_ATTRIBUTE)),
                _atof(child.get(WIDTH_ATTRIBUTE)),
                _atof(child.get(HEIGHT_ATTRIBUTE)),
            ),
            colour=_read_colour(node),
        )

    def draw(self, gc: Any) -> None:
        gc.set_pen(self.colour, 1)
        gc.set_brush(self.colour)
        gc.draw_rectangle(self.rect.x, self.rect.y, self.rect.width, self.rect.height)

    def bounds(self) -> Bounds:
        return self.rect


@dataclass
class Path(Element):
    """A freehand stroke through a list of points, with an integer pen width."""

    node_type: ClassVar[str] = PATH_NODE_TYPE

    points: list[Point] = field(default_factory=list)
    width: int = 0
    colour: Colour = field(default_factory=Colour)

    def to_xml(self) -> ET.Element:
        node = self._object_node(self.colour)
        node.set(WIDTH_ATTRIBUTE, _format_number(self.width))
        for point in self.points:
            child = ET.SubElement(node, POINT_ELEMENT_NODE_NAME)
            child.set(X_ATTRIBUTE, _format_number(point.x))
            child.set(Y_ATTRIBUTE, _format_number(point.y))
        return node

    @classmethod
    def from_xml(cls, node: ET.Element) -> Path:
        width = _atof(node.get(WIDTH_ATTRIBUTE))
        points = [
            Point(_atof(child.get(X_ATTRIBUTE)), _atof(child.get(Y_ATTRIBUTE)))
            for child in node
            if child.tag == POINT_ELEMENT_NODE_NAME
        ]
        return cls(
            points=points,
            width=int(width) if math.isfinite(width) else 0,
            colour=_read_colour(node),
        )

    def draw(self, gc: Any) -> None:
        if self.points:
            gc.set_pen(self.colour, self.width)
            gc.stroke_lines(list(self.points))

    def bounds(self) -> Bounds:
        min_x = min_y = sys.float_info.max
        # Mirrors the smallest positive double used as the starting maximum.
        max_x = max_y = sys.float_info.min
        for point in self.points:
            min_x = min(min_x, point.x)
            min_y = min(min_y, point.y)
            max_x = max(max_x, point.x)
            max_y = max(max_y, point.y)
        half = int(self.width / 2)
        return Bounds(
            min_x - half,
            min_y - half,
            max_x - min_x + self.width,
            max_y - min_y + self.width,
        )


_ELEMENT_TYPES: dict[str, type[Circle] | type[Rect] | type[Path]] = {
    PATH_NODE_TYPE: Path,
    RECT_NODE_TYPE: Rect,
    CIRCLE_NODE_TYPE: Circle,
}


def deserialize_element(node: ET.Element) -> Element:
    """Build the element an Object node describes."""
    node_type = node.get(TYPE_ATTRIBUTE, "")
    element_class = _ELEMENT_TYPES.get(node_type)
    if element_class is None:
        raise ElementTypeError("Unfamiliar element type" + node_type)
    return element_class.from_xml(node)


def serialize_transform(transform: Transform) -> ET.Element:
    node = ET.Element(TRANSFORM_NODE_NAME)
    node.set(TRANS_X_ATTRIBUTE, _format_number(transform.trans_x))
    node.set(TRANS_Y_ATTRIBUTE, _format_number(transform.trans_y))
    node.set(ROT_ATTRIBUTE, _format_number(transform.rot_angle))
    node.set(SCALE_X_ATTRIBUTE, _format_number(transform.scale_x))
    node.set(SCALE_Y_ATTRIBUTE, _format_number(transform.scale_y))
    return node


def deserialize_transform(node: ET.Element) -> Transform:
    return Transform(
        trans_x=_atof(node.get(TRANS_X_ATTRIBUTE)),
        trans_y=_atof(node.get(TRANS_Y_ATTRIBUTE)),
        rot_angle=_atof(node.get(ROT_ATTRIBUTE)),
        scale_x=_atof(node.get(SCALE_X_ATTRIBUTE)),
        scale_y=_atof(node.get(SCALE_Y_ATTRIBUTE)),
    )