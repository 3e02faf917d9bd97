"""CLI entry point for mathosk."""

import argparse
import logging
import sys

import mathosk.io.logging_setup
import mathosk.io.settings
from mathosk.catalog import build_groups
from mathosk.config import ATTACH_MODES, ConfigError, OSKConfig
from mathosk.osk import OSK
from mathosk.scratch_editor import DEFAULT_SYMBOLS, ScratchEditor
from mathosk.symbols import SymbolTable
from mathosk.tui.app import OskApp

logger = logging.getLogger(__name__)


def _load_symbols(path: str | None) -> SymbolTable:
    if path is None:
        return SymbolTable.from_raw(DEFAULT_SYMBOLS)
    return SymbolTable.load_json(path)


def _print_groups(table: SymbolTable) -> None:
    for group in build_groups(table):
        names = group.symbol_names()
        print(f"{group.id:<14} {group.label:<14} {len(names):>3} keys  {' '.join(names)}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="On-screen math keyboard")
    parser.add_argument(
        "--goto-tab",
        type=str,
        default=None,
        help="Group to return to after every key press (e.g. digits)",
    )
    parser.add_argument(
        "--attach",
        choices=sorted(ATTACH_MODES),
        default=None,
        help="Attach mode: 'focus' follows editor focus/blur",
    )
    parser.add_argument(
        "--symbols",
        type=str,
        default=None,
        help="Path to a JSON symbol table (default: built-in table)",
    )
    parser.add_argument(
        "--list-groups",
        action="store_true",
        default=False,
        help="Print the derived key groups and exit.",
    )
    args = parser.parse_args(argv)

    # The TUI owns the terminal; log to file only unless just listing.
    runtime = mathosk.io.logging_setup.configure(stream=args.list_groups)
    logger.debug("logging to %s at %s", runtime.file_path, runtime.level_name)

    try:
        config = OSKConfig.from_mapping(mathosk.io.settings.load_osk_options()).merged(
            {"goto_tab": args.goto_tab, "attach": args.attach}
        )
    except ConfigError as exc:
        print(f"mathosk: invalid keyboard settings: {exc}", file=sys.stderr)
        return 2

    symbols_path = args.symbols or mathosk.io.settings.load_symbols_path()
    try:
        table = _load_symbols(symbols_path)
    except (OSError, ValueError) as exc:
        print(f"mathosk: cannot load symbol table {symbols_path}: {exc}", file=sys.stderr)
        return 2

    if args.list_groups:
        _print_groups(table)
        return 0

    app = OskApp(OSK(config), ScratchEditor(table))
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
