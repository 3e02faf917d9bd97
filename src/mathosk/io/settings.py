"""Settings file reading for mathosk.

Reads keyboard defaults from XDG_CONFIG_HOME/mathosk/settings.json. The file
is never written: keyboard state is not persisted between sessions.

Import as: import mathosk.io.settings
"""

import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

OSK_KEY = "osk"


def get_config_path() -> Path:
    """Return path to settings file.

    Uses XDG_CONFIG_HOME (default ~/.config) / mathosk / settings.json.
    """
    config_home = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(config_home) / "mathosk" / "settings.json"


def load_settings() -> dict:
    """Load settings from JSON file. Returns empty dict on missing/corrupt file."""
    path = get_config_path()
    # [LAW:dataflow-not-control-flow] Always attempt read; empty dict is the "no data" value.
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("ignoring unreadable settings file %s: %s", path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def load_setting(key: str, default=None):
    """Load a single setting by key. Returns default if absent."""
    return load_settings().get(key, default)


def load_osk_options() -> dict:
    """Keyboard options block ("osk" key). Empty dict if absent or not a mapping."""
    value = load_setting(OSK_KEY, {})
    return dict(value) if isinstance(value, dict) else {}


def load_symbols_path() -> str | None:
    """Optional default symbol table path."""
    value = load_setting("symbols")
    return value if isinstance(value, str) and value else None
