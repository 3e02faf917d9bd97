"""Keyboard configuration.

// [LAW:single-enforcer] Config validation happens here, once, at construction.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

ATTACH_FOCUS = "focus"
ATTACH_MODES = frozenset({ATTACH_FOCUS})

# Accepted spellings for each option.
_KEY_ALIASES = {
    "goto_tab": "goto_tab",
    "gotoTab": "goto_tab",
    "attach": "attach",
}


class ConfigError(ValueError):
    """Raised for an unrecognized or malformed keyboard option."""


@dataclass(frozen=True)
class OSKConfig:
    """goto_tab: group to return to after every key press (None = stay).
    attach: "focus" to follow editor focus/blur (None = explicit calls only).
    """

    goto_tab: str | None = None
    attach: str | None = None

    def __post_init__(self):
        if self.goto_tab is not None and (not isinstance(self.goto_tab, str) or not self.goto_tab):
            raise ConfigError(f"goto_tab must be a non-empty group id, got {self.goto_tab!r}")
        if self.attach is not None and self.attach not in ATTACH_MODES:
            raise ConfigError(
                f"attach must be one of {sorted(ATTACH_MODES)} or absent, got {self.attach!r}"
            )

    @property
    def follows_focus(self) -> bool:
        return self.attach == ATTACH_FOCUS

    @classmethod
    def from_mapping(cls, data: Mapping[str, object] | None) -> OSKConfig:
        """Build from a plain mapping; unknown keys are rejected."""
        if not data:
            return cls()
        values: dict[str, object] = {}
        for key, value in data.items():
            field_name = _KEY_ALIASES.get(key)
            if field_name is None:
                raise ConfigError(f"unknown keyboard option: {key!r}")
            if value is not None:
                values[field_name] = value
        return cls(**values)

    @classmethod
    def coerce(cls, value: OSKConfig | Mapping[str, object] | None) -> OSKConfig:
        if isinstance(value, OSKConfig):
            return value
        return cls.from_mapping(value)

    def merged(self, overrides: Mapping[str, object]) -> OSKConfig:
        """Return a copy with non-None overrides applied."""
        base = {"goto_tab": self.goto_tab, "attach": self.attach}
        for key, value in overrides.items():
            field_name = _KEY_ALIASES.get(key)
            if field_name is None:
                raise ConfigError(f"unknown keyboard option: {key!r}")
            if value is not None:
                base[field_name] = value
        return OSKConfig(**base)
