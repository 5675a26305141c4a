"""Raster output for dot-matrix logos (Pillow + NumPy)."""

from functools import lru_cache
from typing import Optional, Tuple

import numpy as np
import numpy.typing as npt
from PIL import Image, ImageColor

from event_registration.layout import LogoLayout
from event_registration.points import PointRegistry
from event_registration.renderer import DEFAULT_BACKGROUND, fill_for

UInt8Array = npt.NDArray[np.uint8]
RGBA = Tuple[int, int, int, int]


@lru_cache(maxsize=256)
def parse_color(color: str) -> RGBA:
    """Parse any colour Pillow understands into an RGBA tuple."""
    rgb = ImageColor.getcolor(color, "RGBA")
    assert isinstance(rgb, tuple)
    return (rgb[0], rgb[1], rgb[2], rgb[3])


def to_hex(color: str) -> str:
    """Convert any Pillow colour to ``#rrggbb``, dropping alpha."""
    return "#%02x%02x%02x" % ImageColor.getrgb(color)[:3]


def render_array(
    registry: PointRegistry,
    layout: LogoLayout,
    background: str = DEFAULT_BACKGROUND,
    highlight: Optional[str] = None,
) -> UInt8Array:
    """Paint the logo into an ``(extend_y, extend_x, 4)`` uint8 array."""
    height = max(layout.extend_y, 1)
    width = max(layout.extend_x, 1)
    canvas: UInt8Array = np.empty((height, width, 4), dtype=np.uint8)
    canvas[...] = parse_color(background)

    size = layout.zoom
    for entry in registry.first_generation():
        x0, y0 = layout.to_canvas(entry.x, entry.y)
        canvas[y0 : y0 + size, x0 : x0 + size] = parse_color(
            fill_for(registry, entry, highlight)
        )
    return canvas


def render_image(
    registry: PointRegistry,
    layout: LogoLayout,
    background: str = DEFAULT_BACKGROUND,
    highlight: Optional[str] = None,
) -> Image.Image:
    """Render the logo as an RGBA Pillow image."""
    return Image.fromarray(render_array(registry, layout, background, highlight))


class RasterRenderer:
    layout: LogoLayout
    background: str
    highlight: Optional[str]

    def __init__(
        self,
        layout: LogoLayout,
        background: str = DEFAULT_BACKGROUND,
        highlight: Optional[str] = None,
    ):
        self.layout = layout
        self.background = background
        self.highlight = highlight

    def render(self, registry: PointRegistry) -> Image.Image:
        return render_image(
            registry,
            self.layout,
            background=self.background,
            highlight=self.highlight,
        )
