"""Text layout for the dot-matrix logo.

Each character occupies a 6x6 slot: the 5x5 glyph plus a one pixel gap on the
right and bottom. The whole logo has a one pixel margin on the top and left,
so a text of ``width`` columns and ``height`` lines measures
``6 * width + 1`` by ``6 * height + 1`` logical pixels before zoom.

:func:`build_registry` turns a :class:`LogoLayout` into a populated
:class:`~event_registration.points.PointRegistry`; renderers convert the
logical pixel coordinates to output space with :meth:`LogoLayout.to_canvas`.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from event_registration.glyphs import glyph_points, split_lines, supports
from event_registration.points import PointRegistry
from event_registration.types import ColorSpec, Point

SLOT_SIZE = 6
FALLBACK_COLOR = "white"


@dataclass(frozen=True)
class PixelInfo:
    """Payload stored with every logo pixel.

    Attributes:
        line: Text line of the character.
        column: Character position within the line.
        index: Position of the pixel in the glyph's drawing order.
        color: Fill colour of the pixel.
    """

    line: int
    column: int
    index: int
    color: str


@dataclass(frozen=True)
class LogoLayout:
    """Sizing of a logo in output pixels.

    Attributes:
        lines: Text split into lines.
        zoom: Output pixels per logical pixel.
        width: Length of the longest line.
        height: Number of lines.
        extend_x: Canvas width.
        extend_y: Canvas height.
        left_border: Horizontal offset added when padding to a ratio.
        top_border: Vertical offset added when padding to a ratio.
    """

    lines: Tuple[str, ...]
    zoom: int
    width: int
    height: int
    extend_x: int
    extend_y: int
    left_border: int = 0
    top_border: int = 0

    @classmethod
    def from_text(
        cls, text: str, zoom: int = 1, ratio: Optional[float] = None
    ) -> "LogoLayout":
        """Measure ``text``.

        Args:
            text: Logo text; lines are separated by ``\\n`` or ``\\r\\n``.
            zoom: Output pixels per logical pixel, at least 1.
            ratio: Optional width/height ratio. The shorter axis is padded
                and the text centred on it.

        Raises:
            TypeError: If ``text`` is not a string.
            ValueError: If ``zoom`` is smaller than 1.
        """
        if not isinstance(text, str):
            raise TypeError(f"Logo text must be a string, got {type(text).__name__}")
        if zoom < 1:
            raise ValueError(f"Zoom must be at least 1, got {zoom}")

        lines = tuple(split_lines(text)) if text else ()
        height = len(lines)
        width = max((len(line) for line in lines), default=0)
        extend_x = zoom * (SLOT_SIZE * width + 1)
        extend_y = zoom * (SLOT_SIZE * height + 1)
        left_border = 0
        top_border = 0

        if height > 0 and width > 0 and ratio is not None and ratio > 0:
            if extend_x > extend_y * ratio:
                target = math.floor(extend_x / ratio)
                top_border = abs(extend_y - target) // 2
                extend_y = target
            elif extend_x < extend_y * ratio:
                target = math.floor(extend_y * ratio)
                left_border = abs(extend_x - target) // 2
                extend_x = target

        return cls(
            lines=lines,
            zoom=zoom,
            width=width,
            height=height,
            extend_x=extend_x,
            extend_y=extend_y,
            left_border=left_border,
            top_border=top_border,
        )

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def to_canvas(self, x: int, y: int) -> Point:
        """Convert a logical pixel to the top-left corner on the canvas."""
        return (self.left_border + x * self.zoom, self.top_border + y * self.zoom)


def resolve_color(color: ColorSpec, line: int, column: int) -> str:
    """Pick the colour of one character from a colour spec.

    ``color`` is either one colour for the whole logo, a list with one colour
    per line, or a list of per-line lists with one colour per character.
    Anything missing falls back to white.
    """
    if isinstance(color, str):
        return color
    if isinstance(color, list) and line < len(color):
        line_color = color[line]
        if isinstance(line_color, str):
            return line_color
        if (
            isinstance(line_color, list)
            and column < len(line_color)
            and isinstance(line_color[column], str)
        ):
            return line_color[column]
    return FALLBACK_COLOR


def pixel_position(line: int, column: int, offset: Point) -> Point:
    px, py = offset
    return (SLOT_SIZE * column + px + 1, SLOT_SIZE * line + py + 1)


def build_registry(
    layout: LogoLayout, color: ColorSpec = "black", registry: Optional[PointRegistry] = None
) -> PointRegistry:
    """Append every lit pixel of the layout's text, line by line.

    Args:
        layout: Measured logo text.
        color: Colour spec, see :func:`resolve_color`.
        registry: Registry to fill; a new one is created when omitted.

    Returns:
        PointRegistry: Registry holding one entry per drawn pixel with a
        :class:`PixelInfo` payload.

    Raises:
        ValueError: If the text contains characters without a glyph.
    """
    text = "\n".join(layout.lines)
    if not supports(text):
        raise ValueError(f"Unsupported characters in logo text: {text!r}")

    registry = registry if registry is not None else PointRegistry()
    for line_no, line in enumerate(layout.lines):
        for column, char in enumerate(line):
            offsets: List[Point] = list(glyph_points(char) or ())
            char_color = resolve_color(color, line_no, column)
            for index, offset in enumerate(offsets):
                x, y = pixel_position(line_no, column, offset)
                registry.append(x, y, PixelInfo(line_no, column, index, char_color))
    return registry
