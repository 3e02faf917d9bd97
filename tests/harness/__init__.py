"""Test harness for mathosk.

Re-exports all public API for convenient imports:
    from tests.harness import RecordingEditor, tap, drag, find_key, ...
"""

from tests.harness.builders import (
    RecordingEditor,
    make_default_symbols,
    make_symbols,
    sym,
)
from tests.harness.interactions import (
    active_headers,
    click_and_settle,
    drag,
    find_header,
    find_key,
    tap,
    touch_tap,
    visible_groups,
)

__all__ = [
    "RecordingEditor",
    "make_default_symbols",
    "make_symbols",
    "sym",
    "active_headers",
    "click_and_settle",
    "drag",
    "find_header",
    "find_key",
    "tap",
    "touch_tap",
    "visible_groups",
]
