"""Elements placed on the canvas together with their transform."""

from __future__ import annotations

import math
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field, replace
from typing import Any

from mscdoc.elements import Bounds, Element, Point, Transform, serialize_transform


@dataclass
class AffineMatrix:
    """A 2D affine matrix; each operation is applied before the existing ones."""

    m11: float = 1.0
    m12: float = 0.0
    m21: float = 0.0
    m22: float = 1.0
    tx: float = 0.0
    ty: float = 0.0

    def translate(self, dx: float, dy: float) -> None:
        self.tx += self.m11 * dx + self.m21 * dy
        self.ty += self.m12 * dx + self.m22 * dy

    def rotate(self, angle: float) -> None:
        c = math.cos(angle)
        s = math.sin(angle)
        m11 = c * self.m11 + s * self.m21
        m21 = -s * self.m11 + c * self.m21
        m12 = c * self.m12 + s * self.m22
        m22 = -s * self.m12 + c * self.m22
        self.m11, self.m12, self.m21, self.m22 = m11, m12, m21, m22

    def scale(self, sx: float, sy: float) -> None:
        self.m11 *= sx
        self.m12 *= sx
        self.m21 *= sy
        self.m22 *= sy

    def transform_point(self, x: float, y: float) -> Point:
        return Point(
            self.m11 * x + self.m21 * y + self.tx,
            self.m12 * x + self.m22 * y + self.ty,
        )


@dataclass
class PaintableElement:
    """An element with the transform that places it on the canvas."""

    element: Element
    transform: Transform = field(default_factory=Transform)
    bounds: Bounds = field(init=False)

    def __post_init__(self) -> None:
        self.transform = replace(self.transform)
        self.bounds = self.element.bounds()

    def matrix(self) -> AffineMatrix:
        """Return the matrix the element is drawn with."""
        t = self.transform
        centre = self.bounds.centre()
        matrix = AffineMatrix()
        matrix.translate(t.trans_x, t.trans_y)

        matrix.translate(centre.x, centre.y)
        matrix.rotate(t.rot_angle)
        matrix.translate(-centre.x, -centre.y)

        matrix.translate(centre.x, centre.y)
        matrix.scale(t.scale_x, t.scale_y)
        matrix.translate(centre.x, centre.y)
        return matrix

    def draw(self, gc: Any) -> None:
        gc.push_state()
        try:
            gc.set_transform(self.matrix())
            self.element.draw(gc)
        finally:
            gc.pop_state()

    def serialize_transform(self) -> ET.Element:
        return serialize_transform(self.transform)