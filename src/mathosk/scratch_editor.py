"""Minimal single-line editor that satisfies EditorHandle.

It backs the Textual demo and CLI. Symbols are inserted as their plain-text
preview (argument slots shown as [?]); the structured list commands are
recorded but have no matrix model to act on.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass

from mathosk.catalog import PLACEHOLDER_RE, TEXT_BLANK
from mathosk.editor import BLUR, FOCUS
from mathosk.markup import markup_to_text
from mathosk.symbols import SymbolTable

logger = logging.getLogger(__name__)

RENDER = "render"
DONE = "done"

CARET = "│"
MAX_UNDO = 200


def _sym(group: str, latex: str) -> dict:
    return {"attrs": {"group": group}, "output": {"latex": latex}}


# [LAW:one-source-of-truth] Built-in symbol table, in tab order.
DEFAULT_SYMBOLS: dict[str, dict] = {
    "frac": _sym("functions", "\\dfrac{{$1}}{{$2}}"),
    "sqrt": _sym("functions", "\\sqrt{{$1}}"),
    "root": _sym("functions", "\\sqrt[{$1}]{{$2}}"),
    "exp": _sym("functions", "{$1}^{{$2}}"),
    "sub": _sym("functions", "{$1}_{{$2}}"),
    "abs": _sym("functions", "\\left|{$1}\\right|"),
    "paren": _sym("functions", "\\left({$1}\\right)"),
    "ln": _sym("functions", "\\ln\\left({$1}\\right)"),
    "log": _sym("functions", "\\log_{{$1}}\\left({$2}\\right)"),
    "sin": _sym("trigonometry", "\\sin\\left({$1}\\right)"),
    "cos": _sym("trigonometry", "\\cos\\left({$1}\\right)"),
    "tan": _sym("trigonometry", "\\tan\\left({$1}\\right)"),
    "arcsin": _sym("trigonometry", "\\arcsin\\left({$1}\\right)"),
    "arccos": _sym("trigonometry", "\\arccos\\left({$1}\\right)"),
    "arctan": _sym("trigonometry", "\\arctan\\left({$1}\\right)"),
    "int": _sym("calculus", "\\int{$1}d{$2}"),
    "defi": _sym("calculus", "\\int_{{$1}}^{{$2}}{$3}d{$4}"),
    "deriv": _sym("calculus", "\\dfrac{d}{d{$1}}{$2}"),
    "sum": _sym("calculus", "\\sum_{{$1}}^{{$2}}{$3}"),
    "lim": _sym("calculus", "\\lim_{{$1}\\to{$2}}{$3}"),
    "matrix": _sym("array", "\\left[{$1}\\right]"),
    "vector": _sym("array", "\\left({$1}\\right)"),
    "leq": _sym("operations", "\\leq"),
    "geq": _sym("operations", "\\geq"),
    "neq": _sym("operations", "\\neq"),
    "pm": _sym("operations", "\\pm"),
    "times": _sym("operations", "\\times"),
    "div": _sym("operations", "\\div"),
    "alpha": _sym("symbols", "\\alpha"),
    "beta": _sym("symbols", "\\beta"),
    "theta": _sym("symbols", "\\theta"),
    "pi": _sym("symbols", "\\pi"),
    "infinity": _sym("symbols", "\\infty"),
    "text": _sym("editor", "\\text{{$1}}"),
}


@dataclass(frozen=True)
class _Snapshot:
    tokens: tuple[str, ...]
    caret: int


class ScratchEditor:
    """Token buffer with a caret, an optional selection and undo history."""

    def __init__(self, symbols: dict | SymbolTable | None = None) -> None:
        self._symbols = SymbolTable.coerce(DEFAULT_SYMBOLS if symbols is None else symbols)
        self.tokens: list[str] = []
        self.caret = 0
        self.anchor: int | None = None
        self.clipboard: list[str] = []
        self.committed: list[str] = []
        self.list_ops: list[str] = []
        self.focused = False
        self._undo: list[_Snapshot] = []
        self._redo: list[_Snapshot] = []
        self._listeners: dict[str, list[Callable[[], None]]] = defaultdict(list)

    # -- EditorHandle --------------------------------------------------------

    @property
    def symbols(self) -> SymbolTable:
        return self._symbols

    def subscribe(self, event: str, callback: Callable[[], None]) -> None:
        self._listeners[event].append(callback)

    def _fire(self, event: str) -> None:
        for callback in list(self._listeners[event]):
            callback()

    def render(self) -> None:
        self._fire(RENDER)

    def insert_string(self, text: str) -> None:
        self._checkpoint()
        self._delete_selection()
        for ch in text:
            self.tokens.insert(self.caret, ch)
            self.caret += 1

    def insert_symbol(self, name: str) -> None:
        sym = self._symbols.get(name)
        if sym is None:
            logger.warning("insert of unknown symbol %r ignored", name)
            return
        preview = markup_to_text(PLACEHOLDER_RE.sub(lambda _m: TEXT_BLANK, sym.markup))
        self._checkpoint()
        self._delete_selection()
        self.tokens.insert(self.caret, preview)
        self.caret += 1

    def undo(self) -> None:
        if not self._undo:
            return
        self._redo.append(self._snapshot())
        self._restore(self._undo.pop())

    def redo(self) -> None:
        if not self._redo:
            return
        self._undo.append(self._snapshot())
        self._restore(self._redo.pop())

    def backspace(self) -> None:
        if self.anchor is not None and self.anchor != self.caret:
            self._checkpoint()
            self._delete_selection()
            return
        if self.caret == 0:
            return
        self._checkpoint()
        self.caret -= 1
        del self.tokens[self.caret]
        self.anchor = None

    def sel_copy(self) -> None:
        lo, hi = self._selection()
        if lo != hi:
            self.clipboard = self.tokens[lo:hi]

    def sel_cut(self) -> None:
        lo, hi = self._selection()
        if lo == hi:
            return
        self.clipboard = self.tokens[lo:hi]
        self._checkpoint()
        self._delete_selection()

    def sel_paste(self) -> None:
        if not self.clipboard:
            return
        self._checkpoint()
        self._delete_selection()
        self.tokens[self.caret:self.caret] = self.clipboard
        self.caret += len(self.clipboard)

    def left(self) -> None:
        self.anchor = None
        self.caret = max(0, self.caret - 1)

    def right(self) -> None:
        self.anchor = None
        self.caret = min(len(self.tokens), self.caret + 1)

    def up(self) -> None:
        self.anchor = None
        self.caret = 0

    def down(self) -> None:
        self.anchor = None
        self.caret = len(self.tokens)

    def sel_left(self) -> None:
        if self.anchor is None:
            self.anchor = self.caret
        self.caret = max(0, self.caret - 1)

    def sel_right(self) -> None:
        if self.anchor is None:
            self.anchor = self.caret
        self.caret = min(len(self.tokens), self.caret + 1)

    def spacebar(self) -> None:
        self.insert_string(" ")

    def done(self) -> None:
        self.committed.append(self.text)
        logger.info("expression committed: %s", self.text)
        self._fire(DONE)

    def _list_op(self, command: str) -> None:
        self.list_ops.append(command)
        logger.debug("list command %s recorded (no matrix model)", command)

    def list_extend_left(self) -> None:
        self._list_op("list_extend_left")

    def list_extend_right(self) -> None:
        self._list_op("list_extend_right")

    def list_extend_up(self) -> None:
        self._list_op("list_extend_up")

    def list_extend_down(self) -> None:
        self._list_op("list_extend_down")

    def list_extend_copy_left(self) -> None:
        self._list_op("list_extend_copy_left")

    def list_extend_copy_right(self) -> None:
        self._list_op("list_extend_copy_right")

    def list_extend_copy_up(self) -> None:
        self._list_op("list_extend_copy_up")

    def list_extend_copy_down(self) -> None:
        self._list_op("list_extend_copy_down")

    def list_remove(self) -> None:
        self._list_op("list_remove")

    def list_remove_row(self) -> None:
        self._list_op("list_remove_row")

    # -- Focus ---------------------------------------------------------------

    def focus(self) -> None:
        if self.focused:
            return
        self.focused = True
        self._fire(FOCUS)

    def blur(self) -> None:
        if not self.focused:
            return
        self.focused = False
        self._fire(BLUR)

    # -- Buffer --------------------------------------------------------------

    @property
    def text(self) -> str:
        return "".join(self.tokens)

    def display(self) -> str:
        """Buffer text with the caret marked."""
        return "".join(self.tokens[: self.caret]) + CARET + "".join(self.tokens[self.caret :])

    def _selection(self) -> tuple[int, int]:
        if self.anchor is None:
            return self.caret, self.caret
        return min(self.anchor, self.caret), max(self.anchor, self.caret)

    def _delete_selection(self) -> None:
        lo, hi = self._selection()
        if lo != hi:
            del self.tokens[lo:hi]
            self.caret = lo
        self.anchor = None

    def _snapshot(self) -> _Snapshot:
        return _Snapshot(tuple(self.tokens), self.caret)

    def _restore(self, snap: _Snapshot) -> None:
        self.tokens = list(snap.tokens)
        self.caret = snap.caret
        self.anchor = None

    def _checkpoint(self) -> None:
        self._undo.append(self._snapshot())
        del self._undo[:-MAX_UNDO]
        self._redo.clear()
