"""Dot-matrix logo facade.

Bundles layout, point registry, optional animation and renderers behind one
object, the way the front end uses them::

    logo = Logo("CTS\\n2020", color="white", background="black", zoom=5,
                animation="running-point:red")
    logo.start(schedule=scheduler, on_render=redraw)
    svg = logo.svg()

Check :meth:`Logo.supports` before building a logo from user input.
"""

from typing import Optional

from PIL import Image

from event_registration import glyphs
from event_registration.animation import AnimationSetup, AnimationStepper
from event_registration.layout import LogoLayout, build_registry
from event_registration.points import PointRegistry
from event_registration.renderer import DEFAULT_BACKGROUND
from event_registration.renderer.raster import render_image
from event_registration.renderer.svg import render_svg
from event_registration.types import ColorSpec, RenderFn, ScheduleFn


class Logo:
    text: str
    color: ColorSpec
    background: str
    layout: LogoLayout
    registry: PointRegistry
    animation: Optional[AnimationSetup]
    stepper: Optional[AnimationStepper]

    def __init__(
        self,
        text: str,
        color: ColorSpec = "black",
        background: str = DEFAULT_BACKGROUND,
        zoom: int = 1,
        ratio: Optional[float] = None,
        animation: Optional[str] = None,
    ):
        self.text = text
        self.color = color
        self.background = background or DEFAULT_BACKGROUND
        self.layout = LogoLayout.from_text(text, zoom=zoom, ratio=ratio)
        self.registry = build_registry(self.layout, color)
        self.animation = AnimationSetup.parse(animation) if animation else None
        self.stepper = None

    @staticmethod
    def supports(text: object) -> bool:
        return glyphs.supports(text)

    def start(
        self, schedule: ScheduleFn, on_render: Optional[RenderFn] = None, delay: Optional[float] = None
    ) -> bool:
        """Start the configured animation.

        Returns:
            bool: ``False`` if the logo has no animation or nothing to light.
        """
        if self.animation is None:
            return False
        stepper = AnimationStepper(
            self.animation,
            self.registry,
            on_render=on_render or (lambda: None),
            schedule=schedule,
        )
        if delay is not None:
            stepper.delay = delay
        self.stepper = stepper
        return stepper.start()

    def svg(self) -> str:
        return render_svg(
            self.registry,
            self.layout,
            background=self.background,
            highlight=self.animation.color if self.animation else None,
        )

    def image(self) -> Image.Image:
        return render_image(
            self.registry,
            self.layout,
            background=self.background,
            highlight=self.animation.color if self.animation else None,
        )
