"""Ordered symbol table consumed from the host editor.

The editor exposes its symbols as a loose nested mapping
(``{id: {"attrs": {"group": ...}, "output": {"latex": ...}}}``). SymbolTable
turns that into an explicit, ordered, validated collection so the catalog
never enumerates free-form properties.

// [LAW:one-source-of-truth] Iteration order is the insertion order of the raw table.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Symbol:
    """One editor symbol, reduced to what the keyboard needs."""

    name: str
    group: str
    markup: str
    attrs: Mapping[str, object] = field(default_factory=dict, compare=False)


def _entry_to_symbol(name: object, entry: object) -> Symbol | None:
    if not isinstance(name, str) or not name:
        return None
    if not isinstance(entry, Mapping):
        return None
    attrs = entry.get("attrs")
    output = entry.get("output")
    if not isinstance(attrs, Mapping) or not isinstance(output, Mapping):
        return None
    group = attrs.get("group")
    markup = output.get("latex")
    if not isinstance(group, str) or not group.strip():
        return None
    if not isinstance(markup, str):
        return None
    return Symbol(name=name, group=group, markup=markup, attrs=dict(attrs))


class SymbolTable:
    """Ordered mapping of symbol id -> Symbol.

    Malformed raw entries are skipped (and logged) at construction, so
    every Symbol held here carries a usable group and markup.
    """

    def __init__(self, symbols: list[Symbol] | tuple[Symbol, ...] = ()) -> None:
        self._symbols: dict[str, Symbol] = {}
        for sym in symbols:
            self._symbols[sym.name] = sym

    @classmethod
    def from_raw(cls, raw: Mapping[str, object]) -> SymbolTable:
        symbols: list[Symbol] = []
        skipped: list[str] = []
        for name, entry in raw.items():
            sym = _entry_to_symbol(name, entry)
            if sym is None:
                skipped.append(str(name))
                continue
            symbols.append(sym)
        if skipped:
            logger.warning(
                "skipped %d malformed symbol entries: %s",
                len(skipped),
                ", ".join(skipped),
            )
        return cls(symbols)

    @classmethod
    def coerce(cls, value: SymbolTable | Mapping[str, object] | None) -> SymbolTable:
        """Accept an existing table, a raw editor mapping, or None."""
        if isinstance(value, SymbolTable):
            return value
        if value is None:
            return cls()
        return cls.from_raw(value)

    @classmethod
    def load_json(cls, path: str | Path) -> SymbolTable:
        """Load a raw symbol table from a JSON file.

        Raises OSError / json.JSONDecodeError on unreadable input.
        """
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"symbol table in {path} must be a JSON object")
        return cls.from_raw(data)

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols.values())

    def __contains__(self, name: object) -> bool:
        return name in self._symbols

    def __getitem__(self, name: str) -> Symbol:
        return self._symbols[name]

    def get(self, name: str) -> Symbol | None:
        return self._symbols.get(name)

    def names(self) -> list[str]:
        return list(self._symbols)

    def groups(self) -> list[str]:
        """Distinct group names in first-seen order."""
        seen: dict[str, None] = {}
        for sym in self._symbols.values():
            seen.setdefault(sym.group, None)
        return list(seen)
