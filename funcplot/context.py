from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, replace
import math
from typing import TYPE_CHECKING, Iterator, Protocol

from funcplot.raster.canvas import parse_color
from funcplot.raster.draw_lines import draw_polyline
from funcplot.raster.draw_polygon import fill_polygon
from funcplot.raster.draw_text import TEXT_ALIGNS, TEXT_BASELINES, draw_text, parse_font

if TYPE_CHECKING:
    from funcplot.surface import Surface


Matrix = tuple[float, float, float, float, float, float]
IDENTITY: Matrix = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)


class DrawingContext(Protocol):
    """Immediate-mode 2D drawing capability consumed by the renderers."""

    stroke_style: str
    fill_style: str
    line_width: int
    font: str
    text_align: str
    text_baseline: str

    def save(self) -> None: ...

    def restore(self) -> None: ...

    def scale(self, sx: float, sy: float) -> None: ...

    def translate(self, tx: float, ty: float) -> None: ...

    def begin_path(self) -> None: ...

    def move_to(self, x: float, y: float) -> None: ...

    def line_to(self, x: float, y: float) -> None: ...

    def close_path(self) -> None: ...

    def stroke(self) -> None: ...

    def fill(self) -> None: ...

    def fill_text(self, text: str, x: float, y: float) -> None: ...


@contextmanager
def saved_state(ctx: DrawingContext) -> Iterator[DrawingContext]:
    """Save the context state for the duration of the block and restore it on any exit."""
    ctx.save()
    try:
        yield ctx
    finally:
        ctx.restore()


def multiply(m: Matrix, n: Matrix) -> Matrix:
    """Compose ``m`` with ``n`` so that ``n`` is applied to points first."""
    a, b, c, d, e, f = m
    na, nb, nc, nd, ne, nf = n
    return (
        a * na + c * nb,
        b * na + d * nb,
        a * nc + c * nd,
        b * nc + d * nd,
        a * ne + c * nf + e,
        b * ne + d * nf + f,
    )


def apply(m: Matrix, x: float, y: float) -> tuple[float, float]:
    a, b, c, d, e, f = m
    return (a * x + c * y + e, b * x + d * y + f)


@dataclass(frozen=True)
class _State:
    matrix: Matrix = IDENTITY
    stroke_style: str = "#000"
    fill_style: str = "#000"
    line_width: int = 1
    font: str = "10px sans-serif"
    text_align: str = "start"
    text_baseline: str = "alphabetic"


class _SubPath:
    __slots__ = ("points", "closed")

    def __init__(self, start: tuple[float, float]) -> None:
        self.points: list[tuple[float, float]] = [start]
        self.closed = False


class RasterContext:
    """Canvas-style 2D context drawing into a :class:`~funcplot.surface.Surface`.

    Path points are mapped through the current transform when they are added, so
    later transform changes do not move an already built path. Line widths and
    font sizes are always in device pixels.
    """

    def __init__(self, surface: "Surface") -> None:
        self._surface = surface
        self._state = _State()
        self._stack: list[_State] = []
        self._subpaths: list[_SubPath] = []

    @property
    def surface(self) -> "Surface":
        return self._surface

    @property
    def width(self) -> int:
        return self._surface.width

    @property
    def height(self) -> int:
        return self._surface.height

    # -- state -----------------------------------------------------------------

    def save(self) -> None:
        self._stack.append(self._state)

    def restore(self) -> None:
        if self._stack:
            self._state = self._stack.pop()

    @property
    def save_depth(self) -> int:
        return len(self._stack)

    @property
    def stroke_style(self) -> str:
        return self._state.stroke_style

    @stroke_style.setter
    def stroke_style(self, value: str) -> None:
        parse_color(value)
        self._state = replace(self._state, stroke_style=value)

    @property
    def fill_style(self) -> str:
        return self._state.fill_style

    @fill_style.setter
    def fill_style(self, value: str) -> None:
        parse_color(value)
        self._state = replace(self._state, fill_style=value)

    @property
    def line_width(self) -> int:
        return self._state.line_width

    @line_width.setter
    def line_width(self, value: int) -> None:
        if value <= 0:
            raise ValueError("line_width must be > 0")
        self._state = replace(self._state, line_width=int(value))

    @property
    def font(self) -> str:
        return self._state.font

    @font.setter
    def font(self, value: str) -> None:
        parse_font(value)
        self._state = replace(self._state, font=value)

    @property
    def text_align(self) -> str:
        return self._state.text_align

    @text_align.setter
    def text_align(self, value: str) -> None:
        if value not in TEXT_ALIGNS:
            raise ValueError(f"unsupported text align: {value}")
        self._state = replace(self._state, text_align=value)

    @property
    def text_baseline(self) -> str:
        return self._state.text_baseline

    @text_baseline.setter
    def text_baseline(self, value: str) -> None:
        if value not in TEXT_BASELINES:
            raise ValueError(f"unsupported text baseline: {value}")
        self._state = replace(self._state, text_baseline=value)

    # -- transform -------------------------------------------------------------

    def get_transform(self) -> Matrix:
        return self._state.matrix

    def set_transform(self, a: float, b: float, c: float, d: float, e: float, f: float) -> None:
        self._state = replace(self._state, matrix=(a, b, c, d, e, f))

    def reset_transform(self) -> None:
        self._state = replace(self._state, matrix=IDENTITY)

    def transform(self, a: float, b: float, c: float, d: float, e: float, f: float) -> None:
        self._state = replace(self._state, matrix=multiply(self._state.matrix, (a, b, c, d, e, f)))

    def scale(self, sx: float, sy: float) -> None:
        self.transform(sx, 0.0, 0.0, sy, 0.0, 0.0)

    def translate(self, tx: float, ty: float) -> None:
        self.transform(1.0, 0.0, 0.0, 1.0, tx, ty)

    def rotate(self, angle: float) -> None:
        cos = math.cos(angle)
        sin = math.sin(angle)
        self.transform(cos, sin, -sin, cos, 0.0, 0.0)

    def to_device(self, x: float, y: float) -> tuple[float, float]:
        return apply(self._state.matrix, x, y)

    # -- paths -----------------------------------------------------------------

    def begin_path(self) -> None:
        self._subpaths = []

    def move_to(self, x: float, y: float) -> None:
        self._subpaths.append(_SubPath(self.to_device(x, y)))

    def line_to(self, x: float, y: float) -> None:
        if not self._subpaths or self._subpaths[-1].closed:
            self.move_to(x, y)
            return
        self._subpaths[-1].points.append(self.to_device(x, y))

    def close_path(self) -> None:
        if not self._subpaths:
            return
        current = self._subpaths[-1]
        current.closed = True
        self._subpaths.append(_SubPath(current.points[0]))

    def stroke(self) -> None:
        color = parse_color(self._state.stroke_style)
        for sub in self._subpaths:
            points = sub.points + [sub.points[0]] if sub.closed else sub.points
            draw_polyline(self._surface.pixels, points, color, width=self._state.line_width)

    def fill(self) -> None:
        color = parse_color(self._state.fill_style)
        for sub in self._subpaths:
            fill_polygon(self._surface.pixels, sub.points, color)

    # -- text ------------------------------------------------------------------

    def fill_text(self, text: str, x: float, y: float) -> None:
        size_px, family = parse_font(self._state.font)
        a, _, _, d, _, _ = self._state.matrix
        px, py = self.to_device(x, y)
        draw_text(
            self._surface.pixels,
            int(round(px)),
            int(round(py)),
            text,
            parse_color(self._state.fill_style),
            font_family=family,
            font_size_px=size_px,
            align=self._state.text_align,
            baseline=self._state.text_baseline,
            mirror_x=a < 0,
            mirror_y=d < 0,
        )
