"""Tab bar and group visibility model.

One header per group, one key collection per group, exactly one of each
active at a time. Header taps are user gestures and clear the scroll
flag; programmatic selection (goto-tab) only changes visibility.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from mathosk.catalog import Group
from mathosk.gestures import GestureDisambiguator, bind_plain_tap
from mathosk.markup import MarkupRenderer
from mathosk.surface import SCROLL, SurfaceEvent, VisualSurface

logger = logging.getLogger(__name__)

ACTIVE_CLASS = "active_tab"
DISABLED_CLASS = "disabled"
SCROLL_STEP = 100


def tab_anchor_id(group_id: str) -> str:
    return f"mathosk_{group_id}_tab"


@dataclass
class _Tab:
    group_id: str
    header: VisualSurface
    panel: VisualSurface | None = None


class TabBar:
    """Header strip with scroll affordances plus the group switcher."""

    def __init__(
        self,
        container: VisualSurface,
        gestures: GestureDisambiguator,
        renderer: MarkupRenderer,
        *,
        scroll_step: int = SCROLL_STEP,
    ) -> None:
        self._gestures = gestures
        self._renderer = renderer
        self._scroll_step = scroll_step
        self._tabs: dict[str, _Tab] = {}
        self._active: str | None = None
        self._scroll_offset = 0
        self._viewport_width = 0
        self._content_width = 0

        self.element = container.create_child("div", classes=("tabbar",))
        self.scroll_left = self.element.create_child(
            "div", classes=("scroller-left", DISABLED_CLASS), content="‹"
        )
        self.strip = self.element.create_child("ul", classes=("tabs",))
        self.scroll_right = self.element.create_child(
            "div", classes=("scroller-right",), content="›"
        )

        # Scroll affordances are plain commands, never taps on a key.
        bind_plain_tap(self.scroll_left, lambda e: self.scroll_by(-self._scroll_step))
        bind_plain_tap(self.scroll_right, lambda e: self.scroll_by(self._scroll_step))
        self.strip.on(SCROLL, self._on_scroll)
        gestures.track_motion(self.strip)

    # -- Building ------------------------------------------------------------

    def add_tab(self, group: Group) -> VisualSurface:
        """Append a header for group. Returns the header anchor."""
        if group.id in self._tabs:
            raise ValueError(f"duplicate group id: {group.id!r}")
        item = self.strip.create_child("li")
        anchor = item.create_child("a", id=tab_anchor_id(group.id))
        anchor.set_attribute("href", f"#{group.id}")
        icon = anchor.create_child("span", classes=("tab-icon",))
        if group.header is not None:
            self._renderer.render(group.header, icon)
        anchor.create_child("span", classes=("tab-label",), content=group.label)

        self._gestures.bind_tap(anchor, self._header_handler(group.id))
        self._tabs[group.id] = _Tab(group.id, anchor)
        return anchor

    def set_panel(self, group_id: str, panel: VisualSurface) -> None:
        self._tabs[group_id].panel = panel

    def _header_handler(self, group_id: str):
        def _on_tap(event: SurfaceEvent) -> None:
            # A completed switch means the preceding gesture was a tap.
            self._gestures.clear()
            self.select(group_id)
            event.prevent_default()

        return _on_tap

    def reset(self) -> None:
        """Activate the first group, hiding all others."""
        if self._tabs:
            self.select(next(iter(self._tabs)))

    # -- Switching -----------------------------------------------------------

    @property
    def active_group_id(self) -> str | None:
        return self._active

    @property
    def group_ids(self) -> list[str]:
        return list(self._tabs)

    def header(self, group_id: str) -> VisualSurface | None:
        tab = self._tabs.get(group_id)
        return tab.header if tab else None

    def select(self, group_id: str) -> bool:
        """Make group_id the only visible group. False if unknown."""
        target = self._tabs.get(group_id)
        if target is None:
            logger.debug("ignoring switch to unknown group %r", group_id)
            return False
        for tab in self._tabs.values():
            if tab is target:
                continue
            if tab.panel is not None:
                tab.panel.set_visible(False)
            tab.header.remove_class(ACTIVE_CLASS)
        target.header.add_class(ACTIVE_CLASS)
        if target.panel is not None:
            target.panel.set_visible(True)
        self._active = group_id
        return True

    # -- Horizontal scrolling ------------------------------------------------

    @property
    def scroll_offset(self) -> int:
        return self._scroll_offset

    def set_extent(self, viewport_width: int, content_width: int) -> None:
        """Record the visible and total widths of the header strip."""
        self._viewport_width = max(0, int(viewport_width))
        self._content_width = max(0, int(content_width))
        self._apply_offset(self._scroll_offset)

    def scroll_by(self, delta: int) -> None:
        self._apply_offset(self._scroll_offset + delta)

    def _apply_offset(self, offset: int) -> None:
        max_offset = max(0, self._content_width - self._viewport_width)
        self._scroll_offset = max(0, min(max_offset, offset))
        self.strip.set_attribute("scroll_offset", self._scroll_offset)
        self.strip.dispatch(SurfaceEvent(SCROLL, target=self.strip, cancelable=False))

    def _on_scroll(self, event: SurfaceEvent) -> None:
        at_start = self._scroll_offset <= 0
        at_end = self._scroll_offset + self._viewport_width >= self._content_width
        _set_class(self.scroll_left, at_start, DISABLED_CLASS)
        _set_class(self.scroll_right, at_end, DISABLED_CLASS)


def _set_class(surface: VisualSurface, add: bool, name: str) -> None:
    if add:
        surface.add_class(name)
    else:
        surface.remove_class(name)
