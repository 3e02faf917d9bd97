"""On-screen keyboard: attachment lifecycle.

Two states: detached, or attached to exactly one editor. attach() derives
the groups from the editor's current symbol table and builds the whole
panel; detach() removes it and disposes every handler bound on it, so no
key from an old panel can reach its editor again.

At most one keyboard panel is live per process: attaching any OSK
instance detaches whichever other instance currently holds the panel.

Lifecycle edge cases (double attach, mismatched detach, detach while
detached) are silent no-ops. Render failures propagate to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import ClassVar

from mathosk.catalog import Group, build_groups
from mathosk.config import OSKConfig
from mathosk.controls import build_control_strips
from mathosk.editor import BLUR, FOCUS, EditorHandle
from mathosk.gestures import GestureDisambiguator
from mathosk.key_panel import build_group_panel
from mathosk.markup import MarkupRenderer, TextMarkupRenderer
from mathosk.surface import MemorySurface, VisualSurface
from mathosk.tabs import TabBar

logger = logging.getLogger(__name__)

OSK_ID = "mathosk_osk"


@dataclass(frozen=True)
class PanelState:
    active_group_id: str
    is_scrolling: bool


class OSK:
    """Tabbed symbol keyboard that drives one editor at a time.

    Args:
        config: OSKConfig or a mapping with ``goto_tab``/``gotoTab`` and
            ``attach`` keys.
        document: default host surface for panels attached without an
            explicit host. A fresh MemorySurface when omitted.
        renderer: typesetter for key glyphs.
    """

    _live: ClassVar[OSK | None] = None

    def __init__(
        self,
        config: OSKConfig | dict | None = None,
        *,
        document: VisualSurface | None = None,
        renderer: MarkupRenderer | None = None,
    ) -> None:
        self.config = OSKConfig.coerce(config)
        self.document = document if document is not None else MemorySurface("body")
        self.renderer = renderer if renderer is not None else TextMarkupRenderer()
        self.editor: EditorHandle | None = None
        self.element: VisualSurface | None = None
        self.groups: list[Group] = []
        self.tab_bar: TabBar | None = None
        self.gestures = GestureDisambiguator()

    def __repr__(self) -> str:
        state = "attached" if self.attached else "detached"
        return f"<OSK {state} goto_tab={self.config.goto_tab!r}>"

    # -- State ---------------------------------------------------------------

    @property
    def attached(self) -> bool:
        return self.editor is not None

    @property
    def state(self) -> PanelState | None:
        """Current panel state, or None while detached."""
        if self.tab_bar is None or self.tab_bar.active_group_id is None:
            return None
        return PanelState(self.tab_bar.active_group_id, self.gestures.is_scrolling)

    @classmethod
    def live_instance(cls) -> OSK | None:
        return cls._live

    # -- Lifecycle -----------------------------------------------------------

    def attach(self, editor: EditorHandle, host: VisualSurface | None = None) -> None:
        """Attach to editor and insert the panel into host (or the document)."""
        if self.editor is editor:
            logger.debug("already attached to %r", editor)
            return
        if self.editor is not None:
            self.detach()
        live = OSK._live
        if live is not None and live is not self:
            live.detach()

        groups = build_groups(editor.symbols)
        gestures = GestureDisambiguator()
        target = host if host is not None else self.document
        element = target.create_child("div", id=OSK_ID, classes=("mathosk_osk",))
        try:
            tab_bar = self._build(element, editor, groups, gestures)
        except Exception:
            # Never leave a half-built panel in the host.
            element.remove()
            element.dispose()
            raise

        self.editor = editor
        self.element = element
        self.groups = groups
        self.tab_bar = tab_bar
        self.gestures = gestures
        OSK._live = self
        logger.info("keyboard attached: %d groups, active %r", len(groups), tab_bar.active_group_id)

    def _build(
        self,
        element: VisualSurface,
        editor: EditorHandle,
        groups: list[Group],
        gestures: GestureDisambiguator,
    ) -> TabBar:
        tab_bar = TabBar(element, gestures, self.renderer)
        keys = element.create_child("div", classes=("keys", "tabbed"))
        after_key = self._goto_tab_callback(tab_bar)
        for group in groups:
            tab_bar.add_tab(group)
            panel = build_group_panel(
                keys, group, editor, gestures, self.renderer, after_key=after_key
            )
            tab_bar.set_panel(group.id, panel)
        tab_bar.reset()
        build_control_strips(element, editor)
        return tab_bar

    def _goto_tab_callback(self, tab_bar: TabBar):
        goto_tab = self.config.goto_tab
        if goto_tab is None:
            return None

        def _goto() -> None:
            # Programmatic switch; leaves the gesture flag alone.
            if not tab_bar.select(goto_tab):
                logger.debug("goto_tab %r names no group on this panel", goto_tab)

        return _goto

    def detach(self, editor: EditorHandle | None = None) -> None:
        """Remove the panel if attached (to editor, when given)."""
        if self.editor is None or self.element is None:
            return
        if editor is not None and editor is not self.editor:
            logger.debug("detach for %r ignored; attached to %r", editor, self.editor)
            return
        self.element.remove()
        self.element.dispose()
        self.editor = None
        self.element = None
        self.groups = []
        self.tab_bar = None
        self.gestures = GestureDisambiguator()
        if OSK._live is self:
            OSK._live = None
        logger.info("keyboard detached")

    def watch(self, editor: EditorHandle, host: VisualSurface | None = None) -> bool:
        """Drive attach/detach from editor focus/blur when configured to.

        Returns False (and subscribes nothing) unless attach="focus".
        """
        if not self.config.follows_focus:
            return False
        editor.subscribe(FOCUS, lambda: self.attach(editor, host))
        editor.subscribe(BLUR, lambda: self.detach(editor))
        return True
