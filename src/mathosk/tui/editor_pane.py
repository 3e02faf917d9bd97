"""Focusable pane showing the scratch editor buffer."""

from __future__ import annotations

from rich.text import Text
from textual.widgets import Static

from mathosk.catalog import TEXT_BLANK
from mathosk.scratch_editor import CARET, RENDER, ScratchEditor

# Physical keys handled directly, for typing alongside the on-screen keys.
_KEY_COMMANDS = {
    "backspace": "backspace",
    "left": "left",
    "right": "right",
    "up": "up",
    "down": "down",
    "shift+left": "sel_left",
    "shift+right": "sel_right",
    "enter": "done",
    "ctrl+z": "undo",
    "ctrl+y": "redo",
}


class EditorPane(Static, can_focus=True):
    DEFAULT_CSS = """
    EditorPane {
        height: 3;
        border: round $primary;
        padding: 0 1;
    }

    EditorPane:focus {
        border: round $accent;
    }
    """

    def __init__(self, editor: ScratchEditor, **kwargs):
        super().__init__("", **kwargs)
        self.editor = editor
        editor.subscribe(RENDER, self.refresh_display)
        self.refresh_display()

    def refresh_display(self) -> None:
        text = Text(self.editor.display())
        text.highlight_words([TEXT_BLANK], style="bold blue")
        text.highlight_words([CARET], style="bold")
        self.update(text)

    def on_focus(self, event) -> None:
        self.editor.focus()

    def on_blur(self, event) -> None:
        self.editor.blur()

    def on_key(self, event) -> None:
        command = _KEY_COMMANDS.get(event.key)
        if command is not None:
            getattr(self.editor, command)()
        elif event.character and event.is_printable:
            self.editor.insert_string(event.character)
        else:
            return
        event.stop()
        event.prevent_default()
        self.editor.render()
