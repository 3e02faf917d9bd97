"""In-process Textual tests for the keyboard host app."""

import pytest

from mathosk.tui.editor_pane import EditorPane
from mathosk.tui.keyboard_view import KeyChip
from tests.harness.app_runner import run_app
from tests.harness.interactions import click_and_settle, click_chip, drag_across_chip, key_chip

pytestmark = pytest.mark.textual


async def test_keyboard_attached_on_startup():
    async with run_app() as (pilot, app):
        assert app.osk.attached
        assert app.osk.editor is app.editor
        chip = app.query_one("#mathosk_digits_tab", KeyChip)
        assert chip.has_class("-active")


async def test_clicking_header_switches_group():
    async with run_app() as (pilot, app):
        await click_and_settle(pilot, "#mathosk_functions_tab")
        assert app.osk.state.active_group_id == "functions"
        assert app.query_one("#mathosk_functions_tab", KeyChip).has_class("-active")
        assert not app.query_one("#mathosk_digits_tab", KeyChip).has_class("-active")


async def test_control_keys_edit_buffer():
    async with run_app() as (pilot, app):
        await click_and_settle(pilot, "#mathosk_key_spc")
        await click_and_settle(pilot, "#mathosk_key_spc")
        assert app.editor.text == "  "
        await click_and_settle(pilot, "#mathosk_key_del")
        assert app.editor.text == " "
        await click_and_settle(pilot, "#mathosk_key_undo")
        assert app.editor.text == "  "


async def test_typing_into_editor_pane():
    async with run_app() as (pilot, app):
        app.query_one(EditorPane).focus()
        await pilot.pause()
        await pilot.press("x", "y", "backspace")
        await pilot.pause()
        assert app.editor.text == "x"


async def test_focus_mode_follows_editor_pane():
    async with run_app(config={"attach": "focus"}) as (pilot, app):
        assert app.osk.attached
        app.screen.set_focus(None)
        await pilot.pause()
        await pilot.pause()
        assert not app.osk.attached
        assert not app.query(KeyChip)
        app.query_one(EditorPane).focus()
        await pilot.pause()
        await pilot.pause()
        assert app.osk.attached
        assert app.query("#mathosk_key_spc")



async def test_focus_mode_attaches_at_startup():
    async with run_app(config={"attach": "focus"}) as (pilot, app):
        assert app.focused is app.query_one(EditorPane)
        assert app.editor.focused
        assert app.osk.attached
        assert app.osk.editor is app.editor
        assert app.query_one("#mathosk_digits_tab", KeyChip)


async def test_clicking_literal_keys_inserts_text():
    async with run_app() as (pilot, app):
        await click_chip(pilot, key_chip(app, "7"))
        await click_chip(pilot, key_chip(app, "8"))
        assert app.editor.text == "78"


async def test_clicking_symbol_key_inserts_preview():
    async with run_app() as (pilot, app):
        await click_and_settle(pilot, "#mathosk_functions_tab")
        await click_chip(pilot, key_chip(app, "sqrt"))
        assert app.editor.text == "√[?]"
        assert app.osk.state.active_group_id == "functions"


async def test_drag_suppresses_next_key_click_once():
    async with run_app() as (pilot, app):
        await drag_across_chip(pilot, key_chip(app, "7"))
        assert app.osk.state.is_scrolling
        assert app.editor.text == ""
        await click_chip(pilot, key_chip(app, "8"))
        assert app.editor.text == ""
        assert not app.osk.state.is_scrolling
        await click_chip(pilot, key_chip(app, "8"))
        assert app.editor.text == "8"


async def test_goto_tab_returns_to_digits_after_symbol_key():
    async with run_app(config={"goto_tab": "digits"}) as (pilot, app):
        await click_and_settle(pilot, "#mathosk_functions_tab")
        assert app.osk.state.active_group_id == "functions"
        await click_chip(pilot, key_chip(app, "sqrt"))
        assert app.editor.text == "√[?]"
        assert app.osk.state.active_group_id == "digits"
        assert app.query_one("#mathosk_digits_tab", KeyChip).has_class("-active")
