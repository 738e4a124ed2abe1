"""
StitchCommand — Resolve a multi-file description into one document

    stitcher stitch specs/openapi.yaml
    stitcher stitch https://example.com/openapi.yaml --format json
    cat openapi.yaml | stitcher stitch - --base specs/ -o bundled.yaml
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from ..commands.base import BaseCommand
from ..presentation.serializer import FORMATS, CanonicalSerializer

logger = logging.getLogger(__name__)

STDIN_SOURCE = "-"


class StitchCommand(BaseCommand):
    """Command that stitches a document and writes the result."""

    def run(
        self,
        source: str,
        output: Optional[str] = None,
        format: Optional[str] = None,
        base: Optional[str] = None
    ) -> int:
        """
        Stitch ``source`` and write it to ``output`` (stdout when None).

        Returns:
            Exit status

        Raises:
            StitchError: resolution failed (reported by the CLI entry point)
        """
        serializer = self.stitcher.serializer
        if format:
            serializer = CanonicalSerializer(format, self.config.output.indent)

        if source == STDIN_SOURCE:
            value = self.stitcher.resolve_content(sys.stdin.read(), base)
        else:
            value = self.stitcher.resolve(source)

        text = serializer.serialize(value)

        if output:
            Path(output).write_text(text, encoding="utf-8")
            logger.info(f"Wrote {len(text)} characters to {output}")
        else:
            sys.stdout.write(text)
        return 0


def register_parser(subparsers):
    """Register stitch command parser."""
    p = subparsers.add_parser('stitch', help='Resolve external $refs into one document')
    p.add_argument('source',
                   help="Path or URL of the root document, or '-' for stdin")
    p.add_argument('--output', '-o', metavar='FILE',
                   help='Write result to FILE instead of stdout')
    p.add_argument('--format', '-f', choices=FORMATS,
                   help='Output format (default: output.format from config)')
    p.add_argument('--base', '-b', metavar='LOCATION',
                   help='Base location for relative refs when reading stdin (default: current directory)')
    return p


def handle(cli, args):
    """Handle stitch command dispatch."""
    return cli._stitch_cmd.run(
        args.source,
        output=args.output,
        format=args.format,
        base=args.base,
    )
