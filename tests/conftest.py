"""Pytest configuration and shared fixtures for mathosk tests."""

import pytest

import mathosk.io.logging_setup
from mathosk.osk import OSK
from mathosk.surface import MemorySurface
from tests.harness.builders import RecordingEditor


@pytest.fixture(autouse=True)
def _no_live_keyboard():
    """Every test starts and ends with no live keyboard panel."""
    OSK._live = None
    yield
    live = OSK.live_instance()
    if live is not None:
        live.detach()
    OSK._live = None


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    """Point settings and log files at a temp dir; undo any logging setup."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("MATHOSK_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("MATHOSK_LOG_FILE", raising=False)
    monkeypatch.delenv("MATHOSK_LOG_LEVEL", raising=False)
    yield
    mathosk.io.logging_setup.reset()


@pytest.fixture
def document():
    return MemorySurface("body")


@pytest.fixture
def editor():
    return RecordingEditor()


@pytest.fixture
def osk(document):
    return OSK(document=document)


@pytest.fixture
def attached(osk, editor):
    """(osk, editor) with the keyboard attached."""
    osk.attach(editor)
    return osk, editor
