import pytest

from event_registration.animation import DeferredScheduler
from event_registration.logo import Logo
from tests.test_utils import RenderCounter


def test_logo_without_animation() -> None:
    logo = Logo("CTS\n2020", color="white", background="black", zoom=2)
    assert logo.animation is None
    assert logo.start(DeferredScheduler()) is False
    assert logo.stepper is None
    assert logo.svg().count("<rect") == logo.registry.get_stats().count
    assert logo.image().size == (50, 26)


def test_animated_logo_runs_point() -> None:
    scheduler = DeferredScheduler()
    counter = RenderCounter()
    logo = Logo("T", animation="running-point:red")

    assert logo.start(scheduler, on_render=counter, delay=0.05) is True
    assert scheduler.delay == 0.05
    assert logo.registry.marked() == {(1, 1): "red"}
    assert logo.svg().count("fill:red") == 1
    assert logo.image().getpixel((1, 1)) == (255, 0, 0, 255)

    scheduler.run_pending()
    assert logo.registry.marked() == {(2, 1): "red"}
    assert counter.calls == 2


def test_empty_logo() -> None:
    logo = Logo("", animation="running-point")
    assert logo.start(DeferredScheduler()) is False
    assert logo.svg() == '<div class="emptySVG"></div>'


def test_supports() -> None:
    assert Logo.supports("TEXAS 2020")
    assert not Logo.supports("Texas")


def test_unsupported_text() -> None:
    with pytest.raises(ValueError):
        Logo("HELLO")


def test_invalid_animation() -> None:
    with pytest.raises(ValueError):
        Logo("CTS", animation="blink")
