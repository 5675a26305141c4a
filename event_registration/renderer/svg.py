"""SVG output for dot-matrix logos."""

from html import escape
from typing import List, Optional

from event_registration.layout import LogoLayout
from event_registration.points import PointRegistry
from event_registration.renderer import DEFAULT_BACKGROUND, fill_for

EMPTY_SVG = '<div class="emptySVG"></div>'


def render_svg(
    registry: PointRegistry,
    layout: LogoLayout,
    background: str = DEFAULT_BACKGROUND,
    highlight: Optional[str] = None,
) -> str:
    """Render first-generation points as ``zoom``-sized squares.

    Args:
        registry: Populated point registry.
        layout: Layout the registry was built from.
        background: CSS background colour of the SVG element.
        highlight: Fill for points marked without a colour.

    Returns:
        str: SVG markup, or an empty placeholder ``<div>`` for an empty layout.
    """
    if layout.is_empty:
        return EMPTY_SVG

    size = layout.zoom
    rects: List[str] = []
    for entry in registry.first_generation():
        x, y = layout.to_canvas(entry.x, entry.y)
        fill = escape(fill_for(registry, entry, highlight), quote=True)
        rects.append(
            f'<rect x="{x}" y="{y}" width="{size}" height="{size}" '
            f'style="fill:{fill}"></rect>'
        )

    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{layout.extend_x}" '
        f'height="{layout.extend_y}" '
        f'style="background-color:{escape(background, quote=True)}">'
        + "".join(rects)
        + "</svg>"
    )
