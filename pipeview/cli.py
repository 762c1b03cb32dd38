"""
Usage: pipeview [options] < list-of-paths
Description: Browse a piped list of files as a directory of symlinks.

Reads newline-separated paths from stdin, links every existing one into a
fresh private directory and lists it. Relative paths are taken relative to
the directory pipeview was started from.

Examples:
    find . -name '*.py' | pipeview
    git ls-files -m | pipeview --shell
    locate report.pdf | pipeview --json --keep
"""

from __future__ import annotations

import argparse
import logging
import os
import subprocess
import sys

from .bridge import handle_stdin
from .config import PipeviewConfig
from .reader import reattach_tty
from .serializers import dumps_result
from .session import Session
from .types import BridgeStatus

logger = logging.getLogger(__name__)


def print_listing(session: Session) -> None:
    """Print ``name -> target`` for each entry of the current directory."""
    for name in sorted(os.listdir(session.current_path)):
        path = os.path.join(session.current_path, name)
        try:
            print(f"{name} -> {os.readlink(path)}")
        except OSError:
            print(name)


def run_shell(directory: str) -> int:
    """Run the user's shell inside *directory* until it exits."""
    if not reattach_tty():
        logger.error("No terminal available for an interactive shell")
        return 1
    shell = os.environ.get("SHELL", "/bin/sh")
    return subprocess.call([shell], cwd=directory)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pipeview",
        description="Browse a piped list of files as a directory of symlinks",
    )
    parser.add_argument("--config", help="Path to a JSON config file")
    parser.add_argument("--tmp-dir", help="Where to create the link directory (default: $TMPDIR or /tmp)")
    parser.add_argument("--json", action="store_true", help="Print a JSON report instead of a listing")
    parser.add_argument("--keep", action="store_true", help="Keep the link directory and print its path")
    parser.add_argument("--no-list", action="store_true", help="Do not list the link directory")
    parser.add_argument("--shell", action="store_true", help="Open $SHELL inside the link directory")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
    )

    if sys.stdin.isatty():
        parser.print_usage(sys.stderr)
        print("pipeview: expected a list of paths on stdin", file=sys.stderr)
        return 2

    config = PipeviewConfig.load(args.config)
    if args.tmp_dir:
        config.tmp_dir = args.tmp_dir
    if args.no_list or args.json:
        config.cd_lists_on_the_fly = False

    session = Session.from_cwd(on_refresh=print_listing, last_path_file=config.last_path_file)
    try:
        result = handle_stdin(session, sys.stdin.buffer, config)

        if args.json:
            sys.stdout.write(dumps_result(result, pretty=True).decode() + "\n")

        if result.status is BridgeStatus.SWITCHED and args.shell:
            run_shell(result.directory)

        if args.keep and result.directory:
            session.stdin_tmp_dir = None
            print(result.directory)
    finally:
        session.save_last_path()
        session.teardown()

    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
