import numpy as np
import pytest

from event_registration.layout import LogoLayout, build_registry
from event_registration.renderer.raster import (
    RasterRenderer,
    parse_color,
    render_array,
    render_image,
    to_hex,
)

WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)
RED = (255, 0, 0, 255)


@pytest.mark.parametrize(
    "color, rgba",
    [
        ("white", WHITE),
        ("red", RED),
        ("#000000", BLACK),
        ("#00ff0080", (0, 255, 0, 128)),
    ],
)
def test_parse_color(color: str, rgba) -> None:
    assert parse_color(color) == rgba


def test_parse_color_rejects_unknown_names() -> None:
    with pytest.raises(ValueError):
        parse_color("not-a-colour")


def test_render_array_paints_pixels() -> None:
    layout = LogoLayout.from_text("L")
    registry = build_registry(layout, "black")
    canvas = render_array(registry, layout, background="white")

    assert canvas.shape == (7, 7, 4)
    assert canvas.dtype == np.uint8
    assert tuple(canvas[0, 0]) == WHITE
    assert tuple(canvas[1, 1]) == BLACK
    assert tuple(canvas[5, 5]) == BLACK
    assert tuple(canvas[1, 2]) == WHITE


def test_render_array_scales_with_zoom() -> None:
    layout = LogoLayout.from_text("L", zoom=3)
    canvas = render_array(build_registry(layout, "black"), layout)
    assert canvas.shape == (21, 21, 4)
    assert (canvas[3:6, 3:6] == np.array(BLACK, dtype=np.uint8)).all()
    assert tuple(canvas[2, 3]) == WHITE


def test_render_array_shows_marks() -> None:
    layout = LogoLayout.from_text("L")
    registry = build_registry(layout, "black")
    registry.set_mark(1, 1, "red")
    canvas = render_array(registry, layout)
    assert tuple(canvas[1, 1]) == RED
    assert tuple(canvas[2, 1]) == BLACK


def test_render_image_matches_layout() -> None:
    layout = LogoLayout.from_text("CTS\n2020", zoom=2, ratio=3)
    registry = build_registry(layout, "white")
    image = render_image(registry, layout, background="black")
    assert image.size == (layout.extend_x, layout.extend_y)
    assert image.mode == "RGBA"


def test_raster_renderer_object() -> None:
    layout = LogoLayout.from_text("T")
    registry = build_registry(layout, "black")
    registry.set_mark(1, 1)
    image = RasterRenderer(layout, background="white", highlight="red").render(registry)
    assert image.getpixel((1, 1)) == RED
    assert image.getpixel((0, 0)) == WHITE


@pytest.mark.parametrize(
    "color, expected",
    [
        ("white", "#ffffff"),
        ("orange", "#ffa500"),
        ("#ABC", "#aabbcc"),
        ("#00ff0080", "#00ff00"),
        ("rgb(1, 2, 3)", "#010203"),
    ],
)
def test_to_hex(color: str, expected: str) -> None:
    assert to_hex(color) == expected
