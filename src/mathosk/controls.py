"""Fixed control strips (undo/redo/clipboard/navigation).

Controls are discrete buttons outside any scrollable surface, so they skip
the gesture disambiguator entirely: every tap prevents the default, issues
exactly one editor command and re-renders.
"""

from __future__ import annotations

from dataclasses import dataclass

from mathosk.editor import EditorHandle, run_command
from mathosk.gestures import bind_plain_tap
from mathosk.surface import SurfaceEvent, VisualSurface

CONTROL_CLASS = "osk_key"
SPACER_CONTROL_CLASS = "null"


@dataclass(frozen=True)
class ControlSpec:
    key: str            # element id suffix, e.g. "undo"
    label: str
    command: str | None  # None -> inert spacer slot


def _spacer(key: str) -> ControlSpec:
    return ControlSpec(key, "", None)


# [LAW:one-source-of-truth] Control rows, left to right.
PRIMARY_CONTROLS: tuple[ControlSpec, ...] = (
    ControlSpec("undo", "↶", "undo"),
    ControlSpec("redo", "↷", "redo"),
    _spacer("null1"),
    ControlSpec("del", "⌫", "backspace"),
    _spacer("null2"),
    ControlSpec("cut", "✂", "sel_cut"),
    ControlSpec("copy", "⧉", "sel_copy"),
    ControlSpec("paste", "📋", "sel_paste"),
)

SECONDARY_CONTROLS: tuple[ControlSpec, ...] = (
    ControlSpec("lefts", "⇤sel", "sel_left"),
    ControlSpec("sright", "sel⇥", "sel_right"),
    ControlSpec("spc", "␣", "spacebar"),
    ControlSpec("ret", "⏎", "done"),
    _spacer("null3"),
    ControlSpec("left", "←", "left"),
    ControlSpec("top", "↑", "up"),
    ControlSpec("bottom", "↓", "down"),
    ControlSpec("right", "→", "right"),
)


def control_id(key: str) -> str:
    return f"mathosk_key_{key}"


def control_action(editor: EditorHandle, command: str):
    def _action(event: SurfaceEvent) -> None:
        event.prevent_default()
        run_command(editor, command)

    return _action


def _build_row(
    container: VisualSurface, specs: tuple[ControlSpec, ...], editor: EditorHandle
) -> VisualSurface:
    row = container.create_child("div", classes=("controls", "row"))
    for spec in specs:
        classes = (CONTROL_CLASS, spec.key if spec.command else SPACER_CONTROL_CLASS)
        elt = row.create_child("span", id=control_id(spec.key), classes=classes, content=spec.label)
        if spec.command is None:
            continue
        elt.set_attribute("command", spec.command)
        bind_plain_tap(elt, control_action(editor, spec.command))
    return row


def build_control_strips(
    container: VisualSurface, editor: EditorHandle
) -> tuple[VisualSurface, VisualSurface]:
    """Append the primary and secondary control rows to container."""
    return (
        _build_row(container, PRIMARY_CONTROLS, editor),
        _build_row(container, SECONDARY_CONTROLS, editor),
    )
