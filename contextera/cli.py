"""Command-line front door for contextera.

Resolves the root folder, runs one refresh through the background indexer,
and prints the resulting table or tree view.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .file_index import make_scanner
from .render import AppView, render_state, theme_for
from .runtime import Indexer
from .runtime.config import (
    load_last_root,
    load_show_hidden,
    load_skip_gitignored,
    load_view_name,
    save_last_root,
    save_show_hidden,
    save_skip_gitignored,
    save_view_name,
)

LOGGER = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contextera",
        description="Index a folder and list its files and folders.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Folder to index. Defaults to the last indexed folder, then the current directory.",
    )
    parser.add_argument(
        "--view",
        choices=[view.value for view in AppView],
        default=None,
        help="How to list entries (default: last used view, else table).",
    )
    hidden = parser.add_mutually_exclusive_group()
    hidden.add_argument("--show-hidden", dest="show_hidden", action="store_true", default=None, help="Include dot-files.")
    hidden.add_argument("--hide-hidden", dest="show_hidden", action="store_false", help="Leave out dot-files.")
    parser.add_argument(
        "--skip-gitignored",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Leave out paths ignored by git.",
    )
    parser.set_defaults(show_hidden=None)
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def _resolve_root(raw_path: str | None, default_path: Path | None) -> Path:
    if raw_path is not None:
        return Path(raw_path)
    remembered = load_last_root()
    if remembered is not None and remembered.is_dir():
        return remembered
    return default_path if default_path is not None else Path.cwd()


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments, index the chosen folder, and print it.

    ``default_path`` is primarily for tests; it replaces the current working
    directory as the last fallback root. Exits with status 1 when indexing
    fails.
    """
    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    path = _resolve_root(args.path, default_path)
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not path.is_dir():
        raise SystemExit(f"Not a folder: {path}")
    root = path.resolve()

    show_hidden = load_show_hidden() if args.show_hidden is None else args.show_hidden
    skip_gitignored = load_skip_gitignored() if args.skip_gitignored is None else args.skip_gitignored
    view = AppView.from_name(args.view if args.view is not None else load_view_name())

    indexer = Indexer(make_scanner(show_hidden=show_hidden, skip_gitignored=skip_gitignored))
    pending = indexer.set_root(root)
    state = pending.result() if pending is not None else indexer.state

    no_color = args.no_color or not sys.stdout.isatty()
    for line in render_state(state, view, theme_for(no_color)):
        sys.stdout.write(line + "\n")

    save_last_root(root)
    save_view_name(view.value)
    if args.show_hidden is not None:
        save_show_hidden(args.show_hidden)
    if args.skip_gitignored is not None:
        save_skip_gitignored(args.skip_gitignored)

    if state.last_error is not None:
        LOGGER.debug("indexing %s ended with error: %s", root, state.last_error)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
