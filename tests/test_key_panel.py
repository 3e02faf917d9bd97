"""Tests for key panels: layout, key actions, goto-tab and list controls."""

from mathosk.catalog import Group, KeyDescriptor, build_groups
from mathosk.gestures import GestureDisambiguator
from mathosk.key_panel import (
    KEY_CLASS,
    LIST_CONTROL_CLASS,
    LIST_CONTROLS,
    SPACER_CLASS,
    build_group_panel,
    make_key_action,
)
from mathosk.markup import TextMarkupRenderer
from mathosk.osk import OSK
from mathosk.surface import MemorySurface, SurfaceEvent
from tests.harness import RecordingEditor, drag, find_header, find_key, make_symbols, tap, touch_tap


def _panel(group, editor=None):
    editor = editor or RecordingEditor()
    root = MemorySurface("div")
    gestures = GestureDisambiguator()
    panel = build_group_panel(root, group, editor, gestures, TextMarkupRenderer())
    return panel, editor, gestures


class TestLayout:
    def test_rows_gaps_and_keys(self):
        group = Group(
            "custom",
            None,
            (
                KeyDescriptor.key("a", "a"),
                KeyDescriptor.gap(),
                KeyDescriptor.key("b", "b"),
                KeyDescriptor.row_break(),
                KeyDescriptor.key("c", "c"),
            ),
        )
        panel, _, _ = _panel(group)
        (box,) = panel.children
        tags = [(c.tag, c.has_class(SPACER_CLASS)) for c in box.children]
        assert tags == [
            ("span", False),
            ("span", True),
            ("span", False),
            ("br", False),
            ("span", False),
        ]

    def test_key_shows_rendered_display(self, attached):
        osk, _ = attached
        assert find_key(osk, "digits", "*").content == "·"
        assert find_key(osk, "digits", ".").content == ".[?]"
        assert find_key(osk, "functions", "frac").content == "[?]/[?]"
        assert find_key(osk, "editor", "text").content == "[?]"

    def test_no_symbol_omitted_or_duplicated(self, attached):
        osk, editor = attached
        names = []
        for group in osk.groups[3:]:
            names += [n.get_attribute("name") for n in osk.element.find(group.id).find_all(KEY_CLASS)
                      if not n.has_class(LIST_CONTROL_CLASS)]
        assert sorted(names) == sorted(editor.symbols)


class TestKeyActions:
    def test_literal_key_round_trip(self, attached):
        osk, editor = attached
        tap(find_header(osk, "qwerty"))
        tap(find_key(osk, "qwerty", "x"))
        assert editor.calls == [("insert_string", ("x",))]
        assert editor.renders == 1

    def test_uppercase_and_digits_are_literal(self, attached):
        osk, editor = attached
        tap(find_key(osk, "digits", "*"))
        tap(find_key(osk, "QWERTY", "Q"))
        assert editor.calls == [("insert_string", ("*",)), ("insert_string", ("Q",))]

    def test_symbol_key_inserts_symbol(self, attached):
        osk, editor = attached
        tap(find_key(osk, "functions", "frac"))
        assert editor.calls == [("insert_symbol", ("frac",))]
        assert editor.renders == 1

    def test_touchend_also_taps(self, attached):
        osk, editor = attached
        touch_tap(find_key(osk, "digits", "3"))
        assert editor.commands() == ["insert_string"]

    def test_motion_then_tap_suppressed_once(self, attached):
        osk, editor = attached
        drag(find_key(osk, "digits", "5"))
        tap(find_key(osk, "digits", "7"))
        assert editor.calls == []
        assert editor.renders == 0
        tap(find_key(osk, "digits", "8"))
        assert editor.calls == [("insert_string", ("8",))]

    def test_motion_on_panel_box_arms_flag(self, attached):
        osk, editor = attached
        drag(osk.element.find("digits_keys"))
        tap(find_key(osk, "digits", "1"))
        assert editor.calls == []

    def test_make_key_action_binds_its_own_name(self):
        editor = RecordingEditor()
        actions = [make_key_action(editor, name, "symbols") for name in ("alpha", "beta")]
        for action in actions:
            action(SurfaceEvent("click"))
        assert editor.calls == [("insert_symbol", ("alpha",)), ("insert_symbol", ("beta",))]


class TestGotoTab:
    def test_returns_to_configured_group(self, document):
        editor = RecordingEditor()
        osk = OSK({"gotoTab": "digits"}, document=document)
        osk.attach(editor)
        tap(find_header(osk, "trigonometry"))
        assert osk.state.active_group_id == "trigonometry"
        tap(find_key(osk, "trigonometry", "sin"))
        assert editor.calls == [("insert_symbol", ("sin",))]
        assert osk.state.active_group_id == "digits"
        assert osk.element.find("digits").visible
        assert not osk.element.find("trigonometry").visible

    def test_suppressed_tap_does_not_jump(self, document):
        osk = OSK({"goto_tab": "digits"}, document=document)
        osk.attach(RecordingEditor())
        tap(find_header(osk, "calculus"))
        drag(find_key(osk, "calculus", "int"))
        tap(find_key(osk, "calculus", "int"))
        assert osk.state.active_group_id == "calculus"

    def test_goto_is_not_a_gesture(self, document):
        osk = OSK({"goto_tab": "digits"}, document=document)
        editor = RecordingEditor()
        osk.attach(editor)
        tap(find_key(osk, "digits", "1"))
        # The jump itself must not consume or arm the flag.
        drag(find_key(osk, "digits", "2"))
        assert osk.state.is_scrolling
        tap(find_key(osk, "digits", "3"))
        assert editor.calls == [("insert_string", ("1",))]

    def test_unknown_goto_tab_ignored(self, document):
        osk = OSK({"goto_tab": "nowhere"}, document=document)
        editor = RecordingEditor()
        osk.attach(editor)
        tap(find_header(osk, "functions"))
        tap(find_key(osk, "functions", "sqrt"))
        assert editor.commands() == ["insert_symbol"]
        assert osk.state.active_group_id == "functions"

    def test_without_goto_tab_stays(self, attached):
        osk, _ = attached
        tap(find_header(osk, "calculus"))
        tap(find_key(osk, "calculus", "int"))
        assert osk.state.active_group_id == "calculus"


class TestListControls:
    def test_present_iff_array_group(self, document):
        osk = OSK(document=document)
        osk.attach(RecordingEditor())
        assert len(document.find_all(LIST_CONTROL_CLASS)) == len(LIST_CONTROLS) == 10
        assert all(c.parent.id == "array_keys" for c in document.find_all(LIST_CONTROL_CLASS))

        osk.attach(RecordingEditor(make_symbols(symbols=[("pi", "\\pi")])))
        assert document.find_all(LIST_CONTROL_CLASS) == []

    def test_preceded_by_row_break(self, attached):
        osk, _ = attached
        box = osk.element.find("array_keys")
        first = box.children.index(box.find_all(LIST_CONTROL_CLASS)[0])
        assert box.children[first - 1].tag == "br"

    def test_each_control_dispatches_its_command(self, attached):
        osk, editor = attached
        for spec in LIST_CONTROLS:
            ev = tap(osk.element.find(f"mathosk_key_{spec.command}"))
            assert ev.default_prevented
        assert editor.commands() == [spec.command for spec in LIST_CONTROLS]
        assert editor.renders == len(LIST_CONTROLS)

    def test_list_controls_ignore_scroll_flag(self, attached):
        osk, editor = attached
        osk.gestures.note_motion()
        tap(osk.element.find("mathosk_key_list_remove_row"))
        assert editor.commands() == ["list_remove_row"]


def test_groups_match_built_groups(attached):
    osk, editor = attached
    assert [g.id for g in osk.groups] == [g.id for g in build_groups(editor.symbols)]
