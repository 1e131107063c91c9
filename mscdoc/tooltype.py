"""The drawing tools offered in the tool panel."""

from enum import Enum


class ToolType(Enum):
    PEN = 0
    RECT = 1
    CIRCLE = 2
    TEXT = 3
    TRANSFORM = 4