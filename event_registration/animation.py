"""Running-point animation over a :class:`PointRegistry`.

The stepper lights one point at a time: it marks the entry under the
``"animation"`` cursor with the highlight colour, asks the host to redraw,
and schedules its next step. Each step unmarks the lit point, advances the
cursor, and wraps to the first entry once the sequence is exhausted.

Timing is delegated to an injected :data:`ScheduleFn` so the same stepper
runs under a Streamlit fragment, a background timer, or a test. Two hosts
are provided:

* :class:`DeferredScheduler` keeps the single pending step until the host
  calls :meth:`DeferredScheduler.run_pending`.
* :class:`ThreadingScheduler` fires the pending step from a
  ``threading.Timer``.

At most one step is ever pending. There is no stop primitive on the stepper:
a host stops the animation by not running the pending step.
"""

import logging
import threading
from dataclasses import dataclass
from enum import StrEnum
from typing import Callable, Optional, Tuple

from event_registration.points import Entry, PointRegistry
from event_registration.types import RenderFn, ScheduleFn

logger = logging.getLogger(__name__)

ANIMATION_CURSOR = "animation"
DEFAULT_STEP_DELAY = 0.15
DEFAULT_HIGHLIGHT = "red"


class AnimationMode(StrEnum):
    RUNNING_POINT = "running-point"


class AnimationPhase(StrEnum):
    """Where the stepper is in its cycle.

    ``SEEKING`` and ``LOOPING`` only exist while a step is running.
    """

    IDLE = "idle"
    SEEKING = "seeking"
    LIT = "lit"
    LOOPING = "looping"


@dataclass(frozen=True)
class AnimationSetup:
    """Parsed ``"<mode>[:<option>]"`` setup string.

    Attributes:
        mode: Animation mode.
        color: Highlight colour used to mark the lit point.
    """

    mode: AnimationMode
    color: str = DEFAULT_HIGHLIGHT

    @classmethod
    def parse(cls, setup: str) -> "AnimationSetup":
        """Parse a setup string such as ``"running-point:green"``.

        Raises:
            ValueError: If the string is empty or names an unknown mode.
        """
        if not isinstance(setup, str) or setup == "":
            raise ValueError(f"Invalid animation setup: {setup!r}")
        mode_name, _, option = setup.partition(":")
        if mode_name == "":
            raise ValueError(f"Missing animation mode in {setup!r}")
        try:
            mode = AnimationMode(mode_name)
        except ValueError:
            raise ValueError(f"Unknown animation mode: {mode_name!r}") from None
        return cls(mode=mode, color=option or DEFAULT_HIGHLIGHT)


def highlight_of(setup: Optional[str]) -> str:
    """Highlight colour of a setup string, or the default when there is none."""
    return AnimationSetup.parse(setup).color if setup else DEFAULT_HIGHLIGHT


class AnimationStepper:
    """Walks a single lit point across a registry, forever."""

    def __init__(
        self,
        setup: str | AnimationSetup,
        registry: PointRegistry,
        on_render: RenderFn,
        schedule: ScheduleFn,
        delay: float = DEFAULT_STEP_DELAY,
    ) -> None:
        if not isinstance(registry, PointRegistry):
            raise TypeError(f"Expected a PointRegistry, got {type(registry).__name__}")
        if not callable(on_render) or not callable(schedule):
            raise TypeError("on_render and schedule must be callable")
        self.setup = setup if isinstance(setup, AnimationSetup) else AnimationSetup.parse(setup)
        self.registry = registry
        self.on_render = on_render
        self.schedule = schedule
        self.delay = delay
        self.phase = AnimationPhase.IDLE
        self.registry.unmark_all()

    @property
    def lit(self) -> Optional[Entry]:
        """Entry currently highlighted, if any."""
        if self.phase != AnimationPhase.LIT:
            return None
        return self.registry.current(ANIMATION_CURSOR)

    def start(self) -> bool:
        """Light the first point and schedule the next step.

        Returns:
            bool: ``False`` if the registry is empty and nothing was lit.
        """
        entry = self.registry.first(ANIMATION_CURSOR)
        if entry is None:
            self.phase = AnimationPhase.IDLE
            return False
        self._light(entry)
        logger.debug("Animation started at %s", entry.point)
        return True

    def step(self) -> bool:
        """Move the lit point one entry forward, wrapping at the end.

        Returns:
            bool: ``True`` while the animation keeps running.
        """
        if self.phase != AnimationPhase.LIT:
            return False

        self.phase = AnimationPhase.SEEKING
        entry = self.registry.current(ANIMATION_CURSOR)
        if entry is None:
            self.phase = AnimationPhase.IDLE
            return False
        self.registry.unmark(entry.x, entry.y)

        entry = self.registry.next(ANIMATION_CURSOR)
        if entry is None:
            self.phase = AnimationPhase.LOOPING
            entry = self.registry.first(ANIMATION_CURSOR)
        if entry is None:
            self.phase = AnimationPhase.IDLE
            logger.debug("Animation stopped: registry is empty")
            return False

        self._light(entry)
        return True

    def _light(self, entry: Entry) -> None:
        self.registry.set_mark(entry.x, entry.y, self.setup.color)
        self.phase = AnimationPhase.LIT
        self.on_render()
        self.schedule(self.delay, self.step)


class DeferredScheduler:
    """Holds at most one pending callback until the host runs it."""

    def __init__(self) -> None:
        self._pending: Optional[Tuple[float, Callable[[], None]]] = None

    def __call__(self, delay: float, callback: Callable[[], None]) -> None:
        self._pending = (delay, callback)

    @property
    def pending(self) -> bool:
        return self._pending is not None

    @property
    def delay(self) -> Optional[float]:
        return None if self._pending is None else self._pending[0]

    def run_pending(self) -> bool:
        """Run the pending callback, if any.

        Returns:
            bool: ``True`` if a callback was run.
        """
        if self._pending is None:
            return False
        _, callback = self._pending
        self._pending = None
        callback()
        return True

    def clear(self) -> None:
        self._pending = None


class ThreadingScheduler:
    """Runs the pending callback from a daemon ``threading.Timer``.

    Once :meth:`cancel` was called the scheduler refuses new callbacks, so a
    step that is already running cannot re-arm the animation.
    """

    def __init__(self) -> None:
        self._timer: Optional[threading.Timer] = None
        self._stopped = False
        self._lock = threading.Lock()

    def __call__(self, delay: float, callback: Callable[[], None]) -> None:
        with self._lock:
            if self._stopped:
                logger.debug("Scheduler stopped, dropping callback")
                return
            if self._timer is not None:
                self._timer.cancel()
            timer = threading.Timer(delay, callback)
            timer.daemon = True
            self._timer = timer
            timer.start()

    @property
    def stopped(self) -> bool:
        return self._stopped

    def cancel(self) -> None:
        """Drop the pending callback and stop accepting new ones."""
        with self._lock:
            self._stopped = True
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
