"""Entry point for the ``tradejournal`` command.

Defines the root group, its global options and the table of subcommand
modules it imports on demand.
"""

import logging
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from tradejournal.config import get_db_path, load_config


class JournalGroup(click.Group):
    """Root command group whose subcommands live in separate modules.

    A subcommand's module (and the engine it pulls in) is imported only
    once that subcommand is resolved, so ``--help`` stays fast.
    """

    def __init__(self, *args, command_modules: dict[str, str] | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.command_modules = dict(command_modules or {})

    def list_commands(self, ctx: click.Context) -> list[str]:
        return sorted(set(super().list_commands(ctx)) | set(self.command_modules))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Resolve ``cmd_name``, importing its module on first use."""
        command = self.commands.get(cmd_name)
        if command is None and cmd_name in self.command_modules:
            command = self._resolve(cmd_name)
            self.add_command(command)
        return command

    def _resolve(self, cmd_name: str) -> click.Command:
        import importlib

        module_path = self.command_modules[cmd_name]
        module = importlib.import_module(module_path)

        # Match on the click name; ``import`` is defined as ``import_trades``
        matches = [
            value
            for value in vars(module).values()
            if isinstance(value, click.Command) and value.name == cmd_name
        ]
        if not matches:
            raise click.ClickException(f"No '{cmd_name}' command in {module_path}")
        return matches[0]


COMMAND_MODULES = {
    # Journal
    "add": "tradejournal.cli.journal",
    "rm": "tradejournal.cli.journal",
    "trades": "tradejournal.cli.journal",
    "import": "tradejournal.cli.journal",
    "export": "tradejournal.cli.journal",
    # Reports
    "ledger": "tradejournal.cli.report",
    "metrics": "tradejournal.cli.report",
    "daily": "tradejournal.cli.report",
    # Projection
    "project": "tradejournal.cli.forecast",
    # Settings
    "settings": "tradejournal.cli.prefs",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def configure_logging(level: int = logging.DEBUG) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@click.group(cls=JournalGroup, command_modules=COMMAND_MODULES, context_settings=CONTEXT_SETTINGS)
@click.option(
    "--db",
    "db_path",
    envvar="TRADEJOURNAL_DB",
    type=click.Path(dir_okay=False),
    default=None,
    help="Journal database file (env: TRADEJOURNAL_DB).",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
@click.version_option(package_name="tradejournal")
@click.pass_context
def cli(ctx: click.Context, db_path: Optional[str], verbose: bool) -> None:
    """Trade journal - log trades, review performance and project your balance.

    \b
    Quick Start:
      tradejournal add --r 2              # 2R winner at the default risk
      tradejournal add --pnl -50 --date 2024-05-02
      tradejournal metrics                # Win rate, expectancy, drawdown
      tradejournal project --method DAILY_SIM
    """
    if verbose:
        configure_logging()

    ctx.ensure_object(dict)
    config = load_config()
    ctx.obj["config"] = config
    ctx.obj["db_path"] = get_db_path(config, db_path)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
