"""Pointer helpers for surface-level and Textual in-process tests.

Surface helpers dispatch events straight to MemorySurface nodes; the
pilot wrappers add await pilot.pause() after each interaction.
"""

from textual.pilot import Pilot

from mathosk.key_panel import KEY_CLASS
from mathosk.surface import CLICK, TOUCHEND, TOUCHMOVE
from mathosk.tui.keyboard_view import KeyChip


def tap(node, event_type=CLICK):
    """Tap a surface node. Returns the dispatched event."""
    return node.emit(event_type)


def touch_tap(node):
    return node.emit(TOUCHEND)


def drag(node):
    """Drag motion over a surface node."""
    return node.emit(TOUCHMOVE)


def find_key(osk, group_id, name):
    """The key element named name inside group_id's panel, or None."""
    group = osk.element.find(group_id)
    if group is None:
        return None
    for node in group.find_all(KEY_CLASS):
        if node.get_attribute("name") == name:
            return node
    return None


def find_header(osk, group_id):
    return osk.tab_bar.header(group_id)


def visible_groups(osk):
    return [g.id for g in osk.groups if osk.element.find(g.id).visible]


def active_headers(osk):
    return [gid for gid in osk.tab_bar.group_ids if osk.tab_bar.header(gid).has_class("active_tab")]


async def click_and_settle(pilot: Pilot, selector=None, offset: tuple[int, int] = (0, 0)) -> None:
    """Click and wait for app to settle."""
    await pilot.click(selector, offset=offset)
    await pilot.pause()


def key_chip(app, name):
    """The mounted KeyChip for the key named name in the visible group."""
    for chip in app.query(KeyChip):
        if chip.node.get_attribute("name") == name:
            return chip
    raise LookupError(f"no visible key chip named {name!r}")


async def click_chip(pilot: Pilot, chip) -> None:
    """Click inside chip's screen region and settle."""
    region = chip.region
    await click_and_settle(pilot, offset=(region.x + 1, region.y))


async def drag_across_chip(pilot: Pilot, chip) -> None:
    """Press on chip, move with the button held, release. No click results."""
    x, y = chip.region.x + 1, chip.region.y
    await pilot.mouse_down(offset=(x, y))
    await pilot.hover(offset=(x + 1, y))
    await pilot.mouse_up(offset=(x + 1, y))
    await pilot.pause()
