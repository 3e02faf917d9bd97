"""Key panel builder: one tappable panel per group.

Rows, gaps and keys come straight from the group's descriptors. Each key
gets its action from make_key_action(), which binds the symbol name and the
owning group explicitly instead of closing over loop variables.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from mathosk.catalog import ARRAY_GROUP, Group, KeyKind, is_literal_group
from mathosk.editor import EditorHandle, run_command
from mathosk.gestures import GestureDisambiguator, bind_plain_tap
from mathosk.markup import MarkupRenderer
from mathosk.surface import SurfaceEvent, VisualSurface

logger = logging.getLogger(__name__)

KEY_CLASS = "osk_key"
SPACER_CLASS = "spacer"
GROUP_CLASS = "osk_group"
GROUP_BOX_CLASS = "osk_group_box"
LIST_CONTROL_CLASS = "osk_list_control"


@dataclass(frozen=True)
class ListControl:
    label: str
    command: str


# [LAW:one-source-of-truth] Structural list controls, in display order.
LIST_CONTROLS: tuple[ListControl, ...] = (
    ListControl("←+col", "list_extend_left"),
    ListControl("+col→", "list_extend_right"),
    ListControl("↑+row", "list_extend_up"),
    ListControl("↓+row", "list_extend_down"),
    ListControl("col←col", "list_extend_copy_left"),
    ListControl("col→col", "list_extend_copy_right"),
    ListControl("row↑row", "list_extend_copy_up"),
    ListControl("row↓row", "list_extend_copy_down"),
    ListControl("-col", "list_remove"),
    ListControl("-row", "list_remove_row"),
)


def make_key_action(
    editor: EditorHandle,
    name: str,
    group_id: str,
    *,
    after: Callable[[], None] | None = None,
) -> Callable[[SurfaceEvent], None]:
    """Build the action for one key.

    Literal groups insert the key's text; every other group inserts the
    named structural symbol. after runs once the editor has re-rendered.
    """
    command = "insert_string" if is_literal_group(group_id) else "insert_symbol"

    def _action(event: SurfaceEvent) -> None:
        run_command(editor, command, name)
        if after is not None:
            after()

    return _action


def list_control_action(editor: EditorHandle, command: str) -> Callable[[SurfaceEvent], None]:
    def _action(event: SurfaceEvent) -> None:
        event.prevent_default()
        run_command(editor, command)

    return _action


def build_group_panel(
    container: VisualSurface,
    group: Group,
    editor: EditorHandle,
    gestures: GestureDisambiguator,
    renderer: MarkupRenderer,
    *,
    after_key: Callable[[], None] | None = None,
) -> VisualSurface:
    """Build group's key panel under container and return the group element."""
    group_elt = container.create_child("div", id=group.id, classes=(GROUP_CLASS,))
    box = group_elt.create_child("div", id=f"{group.id}_keys", classes=(GROUP_BOX_CLASS,))
    gestures.track_motion(box)

    for desc in group.keys:
        if desc.kind is KeyKind.BREAK:
            box.create_child("br")
        elif desc.kind is KeyKind.TAB:
            box.create_child("span", classes=(SPACER_CLASS,))
        else:
            key = box.create_child("span", classes=(KEY_CLASS,))
            key.set_attribute("name", desc.name)
            action = make_key_action(editor, desc.name, group.id, after=after_key)
            gestures.bind_tap(key, gestures.guard(action))
            renderer.render(desc.display, key, display_mode=False)

    if group.id == ARRAY_GROUP:
        append_list_controls(box, editor)
    return group_elt


def append_list_controls(box: VisualSurface, editor: EditorHandle) -> list[VisualSurface]:
    box.create_child("br")
    controls = []
    for spec in LIST_CONTROLS:
        elt = box.create_child(
            "span",
            id=f"mathosk_key_{spec.command}",
            classes=(KEY_CLASS, LIST_CONTROL_CLASS),
            content=spec.label,
        )
        elt.set_attribute("command", spec.command)
        bind_plain_tap(elt, list_control_action(editor, spec.command))
        controls.append(elt)
    return controls
