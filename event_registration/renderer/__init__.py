"""Rendering subpackage.

Turns a populated :class:`~event_registration.points.PointRegistry` plus its
:class:`~event_registration.layout.LogoLayout` into output:

* :mod:`event_registration.renderer.svg` builds an SVG document of one
  ``<rect>`` per lit pixel.
* :mod:`event_registration.renderer.raster` paints the same pixels into a
  Pillow image through a NumPy RGBA buffer.

Both honour registry marks: a marked point is filled with its mark colour
instead of its payload colour, which is how the running-point animation
becomes visible.
"""

from typing import Any, Optional

from event_registration.points import Entry, PointRegistry

DEFAULT_BACKGROUND = "white"
DEFAULT_HIGHLIGHT = "white"
DEFAULT_FILL = "white"


def fill_for(
    registry: PointRegistry, entry: Entry, highlight: Optional[str] = None
) -> str:
    """Colour of one pixel: its mark colour when marked, else its payload colour."""
    mark: Any = registry.get_mark(entry.x, entry.y)
    if isinstance(mark, str):
        return mark
    if mark is not None:
        return highlight or DEFAULT_HIGHLIGHT
    color = getattr(entry.payload, "color", None)
    return color if isinstance(color, str) else DEFAULT_FILL
