# drawing.py
"""
Draw commands produced by one simulation step.

A frame is a list of commands: a ClearCommand first, then filled circles
and stroked lines in painting order. Coordinates are logical (CSS) pixels;
the renderer applies the device pixel ratio. Colors are rgb()/rgba()
strings as produced by colors.with_alpha.
"""
from typing import NamedTuple, Union


class ClearCommand(NamedTuple):
    width: float
    height: float


class CircleCommand(NamedTuple):
    x: float
    y: float
    radius: float
    color: str


class LineCommand(NamedTuple):
    x1: float
    y1: float
    x2: float
    y2: float
    color: str
    width: float = 1.0


DrawCommand = Union[ClearCommand, CircleCommand, LineCommand]
