"""Pagefill CLI entry point.

Allows running via `python -m pagefill` and provides the console script
defined in `pyproject.toml`.

Usage:
    pagefill [--preview] [--verbose] INPUT [OUTPUT]
    pagefill --version
    pagefill --set-default KEY=VALUE [KEY=VALUE ...]

INPUT may be "-" for standard input; OUTPUT defaults to standard output.
--set-default stores starting parameters (e.g. text_width=65, justify=false)
in the user settings file instead of formatting anything.
"""

from __future__ import annotations

import logging
import sys
from typing import List, Optional

from .controller import Controller
from .errors import FormatError
from .input_parser import InputParser
from .settings_persistence import get_persistence
from .version import get_version_string

USAGE = ("usage: pagefill [--preview] [--verbose] INPUT [OUTPUT]\n"
         "       pagefill --set-default KEY=VALUE [KEY=VALUE ...]")


def format_file(input_path: str, output_path: Optional[str] = None,
                preview: bool = False) -> None:
    """Format INPUT_PATH into OUTPUT_PATH (stdout if None)."""
    if input_path == "-":
        source = sys.stdin.read()
    else:
        with open(input_path, 'r', encoding='utf-8') as f:
            source = f.read()

    settings = get_persistence().load_defaults()
    if output_path is None:
        InputParser(source, Controller(sys.stdout, settings, preview)).process()
        return
    with open(output_path, 'w', encoding='utf-8') as out:
        InputParser(source, Controller(out, settings, preview)).process()


def _parse_setting_value(raw: str):
    """Convert a command line value to a bool or int where it looks like one."""
    lowered = raw.lower()
    if lowered in ("true", "yes", "on"):
        return True
    if lowered in ("false", "no", "off"):
        return False
    try:
        return int(raw)
    except ValueError:
        return raw


def save_defaults(assignments: List[str]) -> None:
    """Apply KEY=VALUE ASSIGNMENTS to the stored defaults and save them."""
    persistence = get_persistence()
    settings = persistence.load_defaults()
    for assignment in assignments:
        key, sep, raw = assignment.partition("=")
        value = _parse_setting_value(raw)
        if not sep or not persistence.validate_setting(key, value):
            raise FormatError(f"Invalid setting: {assignment}", assignment)
        settings = settings.updated(**{key: value})
    if not persistence.save_defaults(settings):
        raise OSError(f"Could not write {persistence.settings_file}")


def main(argv: Optional[List[str]] = None) -> int:
    # Very small arg parsing: flags first, then one or two paths
    args = list(sys.argv[1:] if argv is None else argv)
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return 0
    if args and args[0] == "--set-default":
        if len(args) < 2:
            print(USAGE, file=sys.stderr)
            return 2
        try:
            save_defaults(args[1:])
        except (FormatError, OSError) as e:
            print(f"pagefill: {e}", file=sys.stderr)
            return 1
        return 0

    preview = False
    while args and args[0].startswith("--"):
        flag = args.pop(0)
        if flag == "--preview":
            preview = True
        elif flag == "--verbose":
            logging.basicConfig(level=logging.DEBUG)
        else:
            print(f"Unknown option: {flag}", file=sys.stderr)
            print(USAGE, file=sys.stderr)
            return 2

    if not 1 <= len(args) <= 2:
        print(USAGE, file=sys.stderr)
        return 2

    try:
        format_file(args[0], args[1] if len(args) > 1 else None, preview)
    except FormatError as e:
        print(f"pagefill: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"pagefill: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
