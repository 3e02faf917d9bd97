"""Shared builders: symbol tables and a recording editor."""

from collections import defaultdict

from mathosk.editor import EDITOR_COMMANDS


def sym(group, latex):
    """One raw editor symbol entry."""
    return {"attrs": {"group": group}, "output": {"latex": latex}}


def make_symbols(**groups):
    """Build a raw symbol table from group=[(name, latex), ...] keyword args.

    Insertion order follows keyword order, then list order.
    """
    table = {}
    for group, entries in groups.items():
        for name, latex in entries:
            table[name] = sym(group, latex)
    return table


def make_default_symbols():
    """Small table covering trig, functions, calculus, array and free text."""
    return make_symbols(
        trigonometry=[("sin", "\\sin\\left({$1}\\right)"), ("cos", "\\cos\\left({$1}\\right)")],
        functions=[("frac", "\\dfrac{{$1}}{{$2}}"), ("sqrt", "\\sqrt{{$1}}")],
        calculus=[("int", "\\int{$1}d{$2}")],
        array=[("matrix", "\\left[{$1}\\right]")],
        editor=[("text", "\\text{{$1}}")],
    )


class RecordingEditor:
    """EditorHandle double that records every command and render call.

    calls holds (command, args) tuples in order; render() is counted
    separately in renders.
    """

    def __init__(self, symbols=None, name="editor"):
        self.symbols = make_default_symbols() if symbols is None else symbols
        self.name = name
        self.calls = []
        self.renders = 0
        self._listeners = defaultdict(list)

    def __repr__(self):
        return f"<RecordingEditor {self.name}>"

    def __getattr__(self, attr):
        if attr in EDITOR_COMMANDS:
            def _command(*args):
                self.calls.append((attr, args))
            return _command
        raise AttributeError(attr)

    def render(self):
        self.renders += 1

    def subscribe(self, event, callback):
        self._listeners[event].append(callback)

    def fire(self, event):
        for callback in list(self._listeners[event]):
            callback()

    def commands(self):
        return [name for name, _args in self.calls]

    def reset(self):
        self.calls.clear()
        self.renders = 0
