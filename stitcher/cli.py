"""
CLI -- Command interface

    stitcher stitch specs/openapi.yaml -o bundled.yaml
    stitcher config --set output.format=json

Library errors surface here as one "Error: ..." line on stderr and exit
status 1.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from .config import ConfigManager
from .errors import StitchError
from .stitcher import Stitcher
from .commands.stitch_cmd import StitchCommand
from .commands.config_cmd import ConfigCommand
from . import __version__


class StitcherCLI:
    """Command-line interface for the stitcher."""

    def __init__(self, project_dir: Path):
        self.project_dir = Path(project_dir)
        self.config_manager = ConfigManager(self.project_dir)
        self.config = self.config_manager.load()
        self.stitcher = Stitcher(config=self.config)

        self._stitch_cmd = StitchCommand(self)
        self._config_cmd = ConfigCommand(self)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stitcher",
        description="Stitcher -- resolve external $refs in multi-file API descriptions",
    )

    parser.add_argument(
        '--project', '-p',
        default=os.environ.get("STITCHER_PROJECT_PATH", "."),
        help='Directory holding .stitcher.yaml (default: STITCHER_PROJECT_PATH or current)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Log fetches and cache activity to stderr'
    )

    parser.add_argument(
        '--version', '-V',
        action='version',
        version=f'stitcher {__version__}'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    from .commands import register_all
    register_all(subparsers)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the stitcher CLI.

    Returns:
        Process exit status
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    configure_logging(args.verbose)

    from .commands import dispatch

    try:
        cli = StitcherCLI(Path(args.project))
        return dispatch(args.command, cli, args) or 0
    except (StitchError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
