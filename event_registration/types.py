"""Common type aliases shared across the package.

``ScheduleFn`` and ``RenderFn`` are the two extension points used by the
animation stepper to stay independent of any timer or UI framework.
"""

from typing import Any, Callable, Optional, Tuple

# Grid coordinate (x, y)
Point = Tuple[int, int]

# Arbitrary value attached to a marked point (``True`` when untagged)
Tag = Any

# (delay in seconds, callback) -> None
ScheduleFn = Callable[[float, Callable[[], None]], None]

# Called after every mutation of the marks during an animation
RenderFn = Callable[[], None]

# Colour spec for a logo: one colour, one per line, or one per character
ColorSpec = Optional[str | list[str | list[str]]]
