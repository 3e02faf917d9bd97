"""Contract for the host math editor.

The keyboard consumes the editor through this narrow surface only: its
symbol table, a fixed set of edit commands, render(), and focus/blur
subscriptions. Implementations satisfy it structurally.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Protocol, runtime_checkable

FOCUS = "focus"
BLUR = "blur"

# [LAW:one-source-of-truth] Every editor command the keyboard can issue.
LIST_COMMANDS = (
    "list_extend_left",
    "list_extend_right",
    "list_extend_up",
    "list_extend_down",
    "list_extend_copy_left",
    "list_extend_copy_right",
    "list_extend_copy_up",
    "list_extend_copy_down",
    "list_remove",
    "list_remove_row",
)

CONTROL_COMMANDS = (
    "undo",
    "redo",
    "backspace",
    "sel_cut",
    "sel_copy",
    "sel_paste",
    "left",
    "right",
    "up",
    "down",
    "sel_left",
    "sel_right",
    "spacebar",
    "done",
)

EDITOR_COMMANDS = ("insert_string", "insert_symbol") + CONTROL_COMMANDS + LIST_COMMANDS


@runtime_checkable
class EditorHandle(Protocol):
    @property
    def symbols(self) -> Mapping[str, object]: ...

    def insert_string(self, text: str) -> None: ...

    def insert_symbol(self, name: str) -> None: ...

    def undo(self) -> None: ...

    def redo(self) -> None: ...

    def backspace(self) -> None: ...

    def sel_cut(self) -> None: ...

    def sel_copy(self) -> None: ...

    def sel_paste(self) -> None: ...

    def left(self) -> None: ...

    def right(self) -> None: ...

    def up(self) -> None: ...

    def down(self) -> None: ...

    def sel_left(self) -> None: ...

    def sel_right(self) -> None: ...

    def spacebar(self) -> None: ...

    def done(self) -> None: ...

    def list_extend_left(self) -> None: ...

    def list_extend_right(self) -> None: ...

    def list_extend_up(self) -> None: ...

    def list_extend_down(self) -> None: ...

    def list_extend_copy_left(self) -> None: ...

    def list_extend_copy_right(self) -> None: ...

    def list_extend_copy_up(self) -> None: ...

    def list_extend_copy_down(self) -> None: ...

    def list_remove(self) -> None: ...

    def list_remove_row(self) -> None: ...

    def render(self) -> None: ...

    def subscribe(self, event: str, callback: Callable[[], None]) -> None: ...


def run_command(editor: EditorHandle, command: str, *args) -> None:
    """Issue one named command, then request a re-render."""
    if command not in EDITOR_COMMANDS:
        raise ValueError(f"unknown editor command: {command!r}")
    getattr(editor, command)(*args)
    editor.render()
