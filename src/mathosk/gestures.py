"""Tap-vs-scroll disambiguation.

On touch input, a drag that scrolls the tab bar or a key panel ends with a
tap-like event on whatever element sits under the finger. That tap must not
fire the element's action. Any motion arms a single flag; the next guarded
tap consumes it instead of acting.

The flag errs toward suppression: a drag that ends over a different key
than it started on still suppresses that key.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from mathosk.surface import CLICK, TOUCHEND, TOUCHMOVE, SurfaceEvent, SurfaceHandler, VisualSurface

logger = logging.getLogger(__name__)

TAP_EVENTS = (CLICK, TOUCHEND)


class GestureDisambiguator:
    """Owns the is_scrolling flag shared by every bound tap handler."""

    def __init__(self) -> None:
        self.is_scrolling = False

    def note_motion(self, event: SurfaceEvent | None = None) -> None:
        self.is_scrolling = True

    def clear(self) -> None:
        self.is_scrolling = False

    def consume(self) -> bool:
        """Return True (and reset the flag) if the pending tap must be dropped."""
        if not self.is_scrolling:
            return False
        self.is_scrolling = False
        logger.debug("tap suppressed after scroll motion")
        return True

    def guard(self, action: Callable[[SurfaceEvent], None]) -> SurfaceHandler:
        """Wrap action so it is skipped once after any motion."""

        def _handler(event: SurfaceEvent) -> None:
            event.prevent_default()
            if self.consume():
                return
            action(event)

        return _handler

    def track_motion(self, surface: VisualSurface) -> None:
        """Arm the flag on any drag over surface."""
        surface.on(TOUCHMOVE, self.note_motion)

    def bind_tap(self, surface: VisualSurface, handler: SurfaceHandler) -> None:
        """Bind handler to every tap event and arm on motion over surface.

        handler is bound as given; wrap it with guard() first when the tap
        must respect the flag.
        """
        for event_type in TAP_EVENTS:
            surface.on(event_type, handler)
        self.track_motion(surface)


def bind_plain_tap(surface: VisualSurface, handler: SurfaceHandler) -> None:
    """Bind handler to tap events with no motion tracking at all."""
    for event_type in TAP_EVENTS:
        surface.on(event_type, handler)
