"""Textual rendition of a keyboard panel.

KeyboardView mirrors the MemorySurface tree the OSK builds: containers map
to Horizontal/Vertical, rows are split on ``br`` nodes, leaves become
KeyChips. Mouse input is forwarded back to the surface nodes as pointer
events (click -> "click", drag -> "touchmove"), so every bit of keyboard
behavior stays in the surface handlers.

The view recomposes whenever the surface tree reports a change.
"""

from __future__ import annotations

import re

from rich.text import Text
from textual.containers import Horizontal, HorizontalScroll, Vertical
from textual.widget import Widget
from textual.widgets import Static

from mathosk.catalog import TEXT_BLANK
from mathosk.osk import OSK
from mathosk.surface import CLICK, TOUCHMOVE, MemorySurface

_VALID_ID = re.compile(r"[A-Za-z_][A-Za-z0-9_-]*")

# Surface class -> widget modifier class.
_STATE_CLASSES = {
    "active_tab": "-active",
    "disabled": "-disabled",
    "spacer": "-spacer",
    "null": "-spacer",
    "osk_list_control": "-list",
}

_LEAF_TAGS = frozenset({"span", "a"})


def _widget_id(node: MemorySurface) -> str | None:
    if node.id and _VALID_ID.fullmatch(node.id):
        return node.id
    return None


def _chip_label(node: MemorySurface) -> Text:
    parts = [child.content for child in node.walk() if child.content]
    label = " ".join(p for p in parts if p.strip())
    text = Text(f" {label} " if label else "   ")
    text.highlight_words([TEXT_BLANK], style="bold blue")
    return text


def _is_leaf(node: MemorySurface) -> bool:
    return node.tag in _LEAF_TAGS or not node.children


class KeyChip(Static):
    """One tappable key, tab header or control.

    Plain text, no button chrome, hover feedback.
    """

    ALLOW_SELECT = False
    DEFAULT_CSS = """
    KeyChip {
        width: auto;
        height: 1;
        margin: 0 1 0 0;
        text-style: bold;
        background: $panel-lighten-2;
        color: $text;
    }

    KeyChip:hover {
        background: $panel-lighten-1;
    }

    KeyChip.-active {
        background: $primary-lighten-3;
        text-style: bold underline;
    }

    KeyChip.-disabled {
        background: $surface;
        color: $text-muted;
    }

    KeyChip.-spacer {
        background: $surface;
    }

    KeyChip.-list {
        background: $accent;
    }
    """

    def __init__(self, node: MemorySurface, **kwargs):
        classes = " ".join(
            _STATE_CLASSES[name] for name in node.classes if name in _STATE_CLASSES
        )
        super().__init__(_chip_label(node), id=_widget_id(node), classes=classes, **kwargs)
        self.node = node

    def on_click(self, event) -> None:
        event.stop()
        self.node.emit(CLICK)

    def on_mouse_move(self, event) -> None:
        # A held button while moving is a drag, the terminal's touchmove.
        if event.button:
            self.node.emit(TOUCHMOVE)


def _rows(node: MemorySurface) -> list[list[MemorySurface]]:
    rows: list[list[MemorySurface]] = [[]]
    for child in node.children:
        if child.tag == "br":
            rows.append([])
        elif child.visible:
            rows[-1].append(child)
    return [row for row in rows if row]


def build_widget(node: MemorySurface) -> Widget | None:
    """Map one visible surface node (and its subtree) to a widget."""
    if not node.visible or node.tag == "br":
        return None
    if _is_leaf(node):
        return KeyChip(node)
    if node.tag == "li":
        # List items only wrap a single header anchor.
        children = [w for w in (build_widget(c) for c in node.children) if w is not None]
        return children[0] if len(children) == 1 else Horizontal(*children, classes="osk-row")
    if node.has_class("tabs"):
        chips = [w for w in (build_widget(c) for c in node.children) if w is not None]
        return HorizontalScroll(*chips, id=_widget_id(node), classes="osk-tabs")
    has_breaks = any(child.tag == "br" for child in node.children)
    inline = all(_is_leaf(c) or c.tag in ("li", "br") for c in node.children)
    if has_breaks or inline or node.has_class("tabbar"):
        row_widgets = [
            [w for w in (build_widget(c) for c in row) if w is not None]
            for row in _rows(node)
        ]
        if len(row_widgets) == 1 and not has_breaks:
            return Horizontal(*row_widgets[0], id=_widget_id(node), classes="osk-row")
        rows = [Horizontal(*widgets, classes="osk-row") for widgets in row_widgets]
        return Vertical(*rows, id=_widget_id(node), classes="osk-block")
    children = [w for w in (build_widget(c) for c in node.children) if w is not None]
    return Vertical(*children, id=_widget_id(node), classes="osk-block")


class KeyboardView(Widget):
    """Live mirror of an OSK's document surface."""

    DEFAULT_CSS = """
    KeyboardView {
        height: auto;
        dock: bottom;
        border-top: solid $accent;
        padding: 0 1;
    }
    KeyboardView .osk-block {
        height: auto;
    }
    KeyboardView .osk-row {
        height: 1;
        width: 100%;
        margin: 0 0 1 0;
    }
    KeyboardView .osk-tabs {
        height: 1;
        width: 1fr;
        scrollbar-size-horizontal: 0;
    }
    """

    def __init__(self, osk: OSK, **kwargs):
        super().__init__(**kwargs)
        self.osk = osk
        self._dispose_observer = None
        self._last_extent: tuple[int, int] | None = None

    @property
    def document(self) -> MemorySurface:
        return self.osk.document

    def compose(self):
        for child in self.document.children:
            widget = build_widget(child)
            if widget is not None:
                yield widget

    def on_mount(self) -> None:
        self._dispose_observer = self.document.observe(self._on_surface_change)
        # The panel may have been attached between compose and now.
        self._on_surface_change(self.document)

    def on_unmount(self) -> None:
        if self._dispose_observer is not None:
            self._dispose_observer()
            self._dispose_observer = None

    def _on_surface_change(self, node: MemorySurface) -> None:
        self.refresh(recompose=True)
        self.call_after_refresh(self._sync_tab_scroll)

    def _sync_tab_scroll(self) -> None:
        """Feed the header strip's real widths back into the tab bar model."""
        tab_bar = self.osk.tab_bar
        if tab_bar is None:
            return
        strips = self.query(HorizontalScroll)
        if not strips:
            return
        strip = strips.first()
        extent = (strip.size.width, strip.virtual_size.width)
        if extent != self._last_extent:
            self._last_extent = extent
            tab_bar.set_extent(*extent)
        strip.scroll_to(x=tab_bar.scroll_offset, animate=False)
