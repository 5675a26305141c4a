import streamlit as st
from dataclasses import replace

from event_registration.animation import DeferredScheduler, highlight_of
from event_registration.client import AttendeeClient
from event_registration.config import Settings, configure_logging
from event_registration.logo import Logo
from event_registration.renderer.raster import to_hex

from .types import LogoConfig

__all__ = [
    "LogoConfig",
    "set_default_config",
    "get_logo_config_from_widgets",
    "make_logo",
]


def _initial_logo_config(settings: Settings) -> LogoConfig:
    return LogoConfig(
        text=settings.logo_text,
        color="white",
        background="black",
        zoom=8,
        ratio=None,
        animation=settings.animation or None,
    )


def set_default_config() -> None:
    if "settings" not in st.session_state:
        settings = Settings.from_env()
        configure_logging(settings.log_level)
        st.session_state["settings"] = settings
        st.session_state["client"] = AttendeeClient.connect(settings.api_url)
        st.session_state["logo_config"] = _initial_logo_config(settings)
        make_logo(st.session_state["logo_config"])


def make_logo(config: LogoConfig) -> None:
    """Build the logo for ``config`` and start its animation."""
    settings: Settings = st.session_state["settings"]
    scheduler = DeferredScheduler()
    logo = Logo(
        config.text,
        color=config.color,
        background=config.background,
        zoom=config.zoom,
        ratio=config.ratio,
        animation=config.animation,
    )
    logo.start(schedule=scheduler, delay=settings.animation_delay)
    st.session_state["logo"] = logo
    st.session_state["logo_scheduler"] = scheduler


def get_logo_config_from_widgets() -> LogoConfig:
    current: LogoConfig = st.session_state["logo_config"]

    st.subheader("Logo")
    text: str = st.text_area("Text", current.text, key="logo_text")
    if not Logo.supports(text):
        st.error("The text contains characters without a glyph.")
        text = current.text
    color: str = st.color_picker("Color", to_hex(current.color), key="logo_color")
    background: str = st.color_picker(
        "Background", to_hex(current.background), key="logo_background"
    )
    zoom: int = st.slider("Zoom", 1, 20, current.zoom, key="logo_zoom")
    ratio: float = st.number_input(
        "Width/height ratio (0 = natural)",
        min_value=0.0,
        value=current.ratio or 0.0,
        step=0.1,
        key="logo_ratio",
    )

    st.subheader("Animation")
    animate: bool = st.checkbox(
        "Running point", value=current.animation is not None, key="logo_animate"
    )
    highlight: str = st.color_picker(
        "Highlight", to_hex(highlight_of(current.animation)), key="logo_highlight"
    )

    return replace(
        current,
        text=text,
        color=color,
        background=background,
        zoom=zoom,
        ratio=ratio or None,
        animation=f"running-point:{highlight}" if animate else None,
    )

