"""
ConfigCommand — View and change configuration

    stitcher config
    stitcher config --set output.format=json
    stitcher config --set fetch.timeout=10 --user
"""

from ..commands.base import BaseCommand


class ConfigCommand(BaseCommand):
    """Command for configuration display and modification."""

    def show_config(self) -> int:
        """Show current configuration."""
        print(self.config_manager.display())
        return 0

    def set_config(self, key: str, value: str, scope: str = "project") -> int:
        """Set a configuration value."""
        error = self.config_manager.set(key, value, scope)

        if error:
            print(f"Error: {error}")
            return 1

        if scope == "project":
            saved_to = self.config_manager.project_config_path
        else:
            saved_to = self.config_manager.user_config_path
        print(f"Set {key} = {value}")
        print(f"Saved to: {saved_to}")
        return 0


def register_parser(subparsers):
    """Register config command parser."""
    p = subparsers.add_parser('config', help='View or set configuration')
    p.add_argument('--set', metavar='KEY=VALUE',
                   help='Set config value (e.g., output.format=json)')
    p.add_argument('--user', action='store_true',
                   help='Apply to user config instead of project')
    return p


def handle(cli, args):
    """Handle config command dispatch."""
    if args.set:
        if '=' not in args.set:
            print("Error: Use format KEY=VALUE (e.g., output.format=json)")
            return 1
        key, value = args.set.split('=', 1)
        scope = "user" if args.user else "project"
        return cli._config_cmd.set_config(key, value, scope)
    return cli._config_cmd.show_config()
