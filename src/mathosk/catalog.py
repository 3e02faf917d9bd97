"""Symbol catalog adapter: editor symbols + literal sets -> grouped key descriptors.

Pure data transformation. Nothing here touches a surface or an editor
command; the builders downstream consume the Group list produced here.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum, auto

from mathosk.symbols import SymbolTable

logger = logging.getLogger(__name__)

# Highlighted blank shown in place of each argument slot.
BLANK = "\\blue{[?]}"
# Blank shown for the free-text symbol.
TEXT_BLANK = "[?]"
TEXT_SYMBOL = "text"

# Argument slots in symbol markup: {$1}, {$2{\small x}}, ...
PLACEHOLDER_RE = re.compile(r"\{\$[0-9]+(\{[^}]+\})*\}")

DIGITS = "1234567890\n+-=*./"
LETTERS = "qwertyuiop\nasdfghjkl\nzxcvbnm"

ROW_BREAK_MARK = "\n"
GAP_MARK = "\t"

# [LAW:one-source-of-truth] Literal groups, seeded first, in this order.
LITERAL_GROUPS: dict[str, str] = {
    "digits": DIGITS,
    "qwerty": LETTERS,
    "QWERTY": LETTERS.upper(),
}

# Groups whose typeset forms are large; keys render at a smaller scale.
SMALL_GROUPS = frozenset({"calculus", "functions"})
SMALL_PREFIX = "\\small "

# Characters whose display differs from their name.
_LITERAL_DISPLAY = {
    "*": "\\cdot",
    "/": "/",
    ".": "." + BLANK,
}

# [LAW:one-source-of-truth] Header glyphs for well-known group ids.
GROUP_HEADERS: dict[str, str] = {
    "digits": "123",
    "qwerty": "q",
    "QWERTY": "Q",
    "trigonometry": "\\cos",
    "functions": "\\sqrt{\\thinspace}",
    "editor": "\\backslash",
    "calculus": "\\displaystyle\\int",
    "array": "\\left[\\thinspace\\right]",
    "operations": "=",
    "emoji": '\\char"263A',
    "symbols": "\\alpha",
}

ARRAY_GROUP = "array"


class KeyKind(Enum):
    KEY = auto()
    BREAK = auto()
    TAB = auto()


@dataclass(frozen=True)
class KeyDescriptor:
    """Atomic panel entry: a key, a row break, or a spacing gap.

    Only KEY descriptors carry name and display; use the constructors
    below rather than building instances directly.
    """

    kind: KeyKind
    name: str | None = None
    display: str | None = None

    def __post_init__(self):
        has_key = self.name is not None and self.display is not None
        if self.kind is KeyKind.KEY and not has_key:
            raise ValueError("key descriptor needs both name and display")
        if self.kind is not KeyKind.KEY and (self.name is not None or self.display is not None):
            raise ValueError(f"{self.kind.name.lower()} descriptor carries no name/display")

    @classmethod
    def key(cls, name: str, display: str) -> KeyDescriptor:
        return cls(KeyKind.KEY, name, display)

    @classmethod
    def row_break(cls) -> KeyDescriptor:
        return cls(KeyKind.BREAK)

    @classmethod
    def gap(cls) -> KeyDescriptor:
        return cls(KeyKind.TAB)

    @property
    def is_key(self) -> bool:
        return self.kind is KeyKind.KEY


@dataclass(frozen=True)
class Group:
    id: str
    header: str | None
    keys: tuple[KeyDescriptor, ...]

    @property
    def label(self) -> str:
        return tab_display_name(self.id)

    @property
    def is_literal(self) -> bool:
        return is_literal_group(self.id)

    def symbol_names(self) -> list[str]:
        return [k.name for k in self.keys if k.is_key]


def tab_display_name(group_id: str) -> str:
    """'trigonometry' -> 'Trigonometry', 'QWERTY' -> 'Qwerty'."""
    return group_id[:1].upper() + group_id[1:].lower()


def is_literal_group(group_id: str) -> bool:
    return group_id in LITERAL_GROUPS


def header_for(group_id: str) -> str | None:
    return GROUP_HEADERS.get(group_id)


def str_to_keys(source: str) -> list[KeyDescriptor]:
    """Convert a literal layout string into descriptors, one per character."""
    keys: list[KeyDescriptor] = []
    for ch in source:
        if ch == ROW_BREAK_MARK:
            keys.append(KeyDescriptor.row_break())
        elif ch == GAP_MARK:
            keys.append(KeyDescriptor.gap())
        else:
            keys.append(KeyDescriptor.key(ch, _LITERAL_DISPLAY.get(ch, ch)))
    return keys


def symbol_display(name: str, markup: str, group: str) -> str:
    """Preview markup for a symbol key: argument slots become one blank each."""
    if name == TEXT_SYMBOL:
        display = TEXT_BLANK
    else:
        display = PLACEHOLDER_RE.sub(lambda _m: BLANK, markup)
    if group in SMALL_GROUPS:
        display = SMALL_PREFIX + display
    return display


def build_groups(symbol_table) -> list[Group]:
    """Derive the ordered group list for one panel.

    Literal groups come first, then each distinct symbol group in table
    order. Every symbol lands in exactly one group, the one it declares.
    """
    table = SymbolTable.coerce(symbol_table)

    grouped: dict[str, list[KeyDescriptor]] = {
        gid: str_to_keys(source) for gid, source in LITERAL_GROUPS.items()
    }
    for sym in table:
        # [LAW:dataflow-not-control-flow] Unknown groups are created on demand.
        grouped.setdefault(sym.group, []).append(
            KeyDescriptor.key(sym.name, symbol_display(sym.name, sym.markup, sym.group))
        )

    groups = [
        Group(id=gid, header=header_for(gid), keys=tuple(keys))
        for gid, keys in grouped.items()
    ]
    logger.debug(
        "built %d groups from %d symbols: %s",
        len(groups),
        len(table),
        ", ".join(g.id for g in groups),
    )
    return groups
