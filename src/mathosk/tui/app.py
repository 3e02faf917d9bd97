"""Textual host: an editor pane with the on-screen keyboard docked below."""

from __future__ import annotations

import logging

from textual.app import App, ComposeResult
from textual.widgets import Footer, Header

from mathosk.osk import OSK
from mathosk.scratch_editor import ScratchEditor
from mathosk.tui.editor_pane import EditorPane
from mathosk.tui.keyboard_view import KeyboardView

logger = logging.getLogger(__name__)


class OskApp(App):
    """Demo host wiring one ScratchEditor to one OSK.

    Without attach="focus" the keyboard is attached on startup; with it,
    focusing the editor pane attaches and blurring detaches.
    """

    TITLE = "mathosk"
    BINDINGS = [("ctrl+q", "quit", "Quit")]

    def __init__(self, osk: OSK, editor: ScratchEditor | None = None, **kwargs):
        super().__init__(**kwargs)
        self.osk = osk
        self.editor = editor if editor is not None else ScratchEditor()
        # Subscribe before compose: the editor pane can take focus before on_mount.
        self._follows_focus = osk.watch(self.editor)

    def compose(self) -> ComposeResult:
        yield Header()
        yield EditorPane(self.editor, id="editor")
        yield KeyboardView(self.osk, id="keyboard")
        yield Footer()

    def on_mount(self) -> None:
        if self._follows_focus:
            logger.debug("keyboard follows editor focus")
            self.query_one(EditorPane).focus()
        else:
            self.osk.attach(self.editor)

    def on_unmount(self) -> None:
        self.osk.detach()
