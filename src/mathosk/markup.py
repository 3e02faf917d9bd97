"""Markup typesetting seam.

The keyboard hands every glyph to a MarkupRenderer: "render this markup
into this slot". TextMarkupRenderer is the terminal-friendly renderer; it
approximates the LaTeX-like markup with Unicode text.

Render failures propagate to the caller. Nothing in this package catches
MarkupError.
"""

from __future__ import annotations

import re
from typing import Protocol

from mathosk.surface import VisualSurface


class MarkupError(ValueError):
    """Raised when markup cannot be typeset."""


class MarkupRenderer(Protocol):
    def render(self, markup: str, slot: VisualSurface, *, display_mode: bool = False) -> None:
        """Typeset markup into slot, replacing its content."""
        ...


# [LAW:one-source-of-truth] Command -> Unicode approximations.
COMMAND_GLYPHS: dict[str, str] = {
    "cdot": "·",
    "times": "×",
    "div": "÷",
    "pm": "±",
    "mp": "∓",
    "le": "≤",
    "leq": "≤",
    "ge": "≥",
    "geq": "≥",
    "neq": "≠",
    "ne": "≠",
    "approx": "≈",
    "infty": "∞",
    "int": "∫",
    "iint": "∬",
    "oint": "∮",
    "sum": "Σ",
    "prod": "Π",
    "partial": "∂",
    "nabla": "∇",
    "sqrt": "√",
    "to": "→",
    "rightarrow": "→",
    "leftarrow": "←",
    "backslash": "\\",
    "alpha": "α",
    "beta": "β",
    "gamma": "γ",
    "delta": "δ",
    "epsilon": "ε",
    "zeta": "ζ",
    "eta": "η",
    "theta": "θ",
    "iota": "ι",
    "kappa": "κ",
    "lambda": "λ",
    "mu": "μ",
    "nu": "ν",
    "xi": "ξ",
    "pi": "π",
    "rho": "ρ",
    "sigma": "σ",
    "tau": "τ",
    "upsilon": "υ",
    "phi": "φ",
    "chi": "χ",
    "psi": "ψ",
    "omega": "ω",
    "Gamma": "Γ",
    "Delta": "Δ",
    "Theta": "Θ",
    "Lambda": "Λ",
    "Pi": "Π",
    "Sigma": "Σ",
    "Phi": "Φ",
    "Psi": "Ψ",
    "Omega": "Ω",
    "thinspace": " ",
    "quad": "  ",
    "left": "",
    "right": "",
    "cos": "cos",
    "sin": "sin",
    "tan": "tan",
    "sec": "sec",
    "csc": "csc",
    "cot": "cot",
    "arccos": "arccos",
    "arcsin": "arcsin",
    "arctan": "arctan",
    "log": "log",
    "ln": "ln",
    "exp": "exp",
    "lim": "lim",
}

# Sizing/spacing commands with no textual rendition.
DROPPED_COMMANDS = frozenset({"small", "displaystyle", "textstyle", "scriptstyle", "large", ","})

# Commands whose single braced argument is kept verbatim (colour wrappers etc).
TRANSPARENT_COMMANDS = frozenset({"blue", "red", "mathrm", "text", "textrm", "mathbf", "operatorname"})

_COMMAND_RE = re.compile(r"\\([A-Za-z]+|.)")
_CHAR_RE = re.compile(r'\\char"([0-9A-Fa-f]+)')
_TRANSPARENT_RE = re.compile(
    r"\\(" + "|".join(sorted(TRANSPARENT_COMMANDS)) + r")\{([^{}]*)\}"
)
_FRAC_RE = re.compile(r"\\d?frac\{([^{}]*)\}\{([^{}]*)\}")


def check_balanced(markup: str) -> None:
    depth = 0
    escaped = False
    for ch in markup:
        if escaped:
            escaped = False
            continue
        if ch == "\\":
            escaped = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth < 0:
                raise MarkupError(f"unbalanced '}}' in markup: {markup!r}")
    if depth:
        raise MarkupError(f"unclosed '{{' in markup: {markup!r}")


def markup_to_text(markup: str) -> str:
    """Approximate markup with Unicode text.

    Raises MarkupError for unbalanced braces.
    """
    check_balanced(markup)
    text = _CHAR_RE.sub(lambda m: chr(int(m.group(1), 16)), markup)
    text = _TRANSPARENT_RE.sub(lambda m: m.group(2), text)
    text = _FRAC_RE.sub(lambda m: f"{m.group(1)}/{m.group(2)}", text)

    def _command(match: re.Match) -> str:
        name = match.group(1)
        if name in DROPPED_COMMANDS or name in TRANSPARENT_COMMANDS:
            return ""
        return COMMAND_GLYPHS.get(name, name)

    text = _COMMAND_RE.sub(_command, text)
    text = text.replace("{", "").replace("}", "")
    return " ".join(text.split())


class TextMarkupRenderer:
    """Typesets markup as plain Unicode text into a surface slot.

    The original markup is kept on the slot as the "markup" attribute so
    a richer front end can re-typeset it.
    """

    def render(self, markup: str, slot: VisualSurface, *, display_mode: bool = False) -> None:
        text = markup_to_text(markup)
        slot.set_attribute("markup", markup)
        slot.set_attribute("display_mode", display_mode)
        slot.set_content(text)
