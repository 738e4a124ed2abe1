"""
BaseCommand — Shared foundation for all CLI commands

Commands receive the CLI instance and reach its resources through
properties instead of building their own.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..cli import StitcherCLI


class BaseCommand:
    """Base class for CLI commands with access to shared resources."""

    def __init__(self, cli: 'StitcherCLI'):
        self._cli = cli

    @property
    def project_dir(self):
        """Directory holding the project config."""
        return self._cli.project_dir

    @property
    def config(self):
        """Application configuration."""
        return self._cli.config

    @property
    def config_manager(self):
        return self._cli.config_manager

    @property
    def stitcher(self):
        """Stitcher built from the configuration."""
        return self._cli.stitcher
