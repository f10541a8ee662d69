import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from modrepo.core.commands.add_module import DEFAULT_SLOT, AddModuleBuilder
from modrepo.infrastructure.client import RecordingClient
from modrepo.infrastructure.command import OnlineCommandContext, OnlineOptions
from modrepo.infrastructure.config import get_config
from modrepo.infrastructure.errors import (
    CommandFailedError,
    InvalidArgumentError,
    ManagementClientError,
)
from modrepo.infrastructure.logging.log_paths import get_main_log_path as get_log_file_path
from modrepo.infrastructure.version import ManagementVersion

# Logs go to stderr so that rendered commands on stdout stay clean
cli_console = Console(file=sys.stderr)

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def setup_logging(log_level_name: str, console_logging: bool = False):
    """Configure logging for modrepo.

    Logs go to a rotating file in the system-appropriate log directory.
    Console logging via Rich can be enabled for debugging.

    Args:
        log_level_name: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console_logging: If True, also log to the console
    """
    log_level = logging.getLevelName(log_level_name.upper())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    file_handler = RotatingFileHandler(
        get_log_file_path(),
        maxBytes=1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(file_handler)

    if console_logging:
        console_handler = RichHandler(
            console=cli_console,
            rich_tracebacks=True,
            show_path=False,
        )
        console_handler.setLevel(log_level)
        root_logger.addHandler(console_handler)

    root_logger.setLevel(logging.DEBUG)  # Let handlers filter
    logging.getLogger("modrepo").setLevel(log_level)


def parse_property(value: str) -> tuple[str, str]:
    name, sep, prop_value = value.partition("=")
    if not sep or not name:
        raise click.BadParameter(f"expected NAME=VALUE, got {value!r}", param_hint="--property")
    return name, prop_value


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging level (default: from config).",
)
@click.option("--console-log", is_flag=True, help="Also write log messages to stderr.")
@click.pass_context
def cli(ctx, log_level, console_log):
    """Build management commands for a server's module repository."""
    ctx.ensure_object(dict)
    config = get_config(reload=True)
    setup_logging(log_level or config.logging.log_level, console_logging=console_log)
    ctx.obj["CONFIG"] = config


@cli.command(name="add-module")
@click.argument("name")
@click.option("--slot", default=DEFAULT_SLOT, show_default=True, help="Module slot.")
@click.option(
    "--resource",
    "resources",
    multiple=True,
    type=click.Path(path_type=Path),
    help="Resource file to copy into the module (repeatable).",
)
@click.option(
    "--resource-delimiter",
    default=None,
    help="Single character separating resources (servers >= 2.0.0 only).",
)
@click.option("--dependency", "dependencies", multiple=True, help="Module dependency (repeatable).")
@click.option(
    "--module-xml",
    type=click.Path(path_type=Path),
    default=None,
    help="module.xml to use instead of a generated one.",
)
@click.option("--property", "properties", multiple=True, help="NAME=VALUE property (repeatable).")
@click.option("--main-class", default=None, help="Fully qualified name of the main class.")
@click.option(
    "--server-version",
    default=None,
    help="Management protocol version of the target server (default: from config).",
)
@click.option(
    "--domain/--standalone",
    default=None,
    help="Topology of the target server (default: from config).",
)
@click.pass_context
def add_module(
    ctx,
    name,
    slot,
    resources,
    resource_delimiter,
    dependencies,
    module_xml,
    properties,
    main_class,
    server_version,
    domain,
):
    """Print the 'module add' command that registers module NAME.

    The command is rendered for the given server version and topology but is
    not sent anywhere.

    Examples:
        modrepo add-module org.foo --resource lib/foo.jar --dependency javax.api
        modrepo add-module org.foo --server-version 1.7.0 --resource "a b.jar"
    """
    server_config = ctx.obj["CONFIG"].server
    if domain is None:
        domain = server_config.domain

    try:
        version = ManagementVersion.parse(server_version or server_config.management_version)
        builder = AddModuleBuilder(name, slot)
        for resource in resources:
            builder.resource(resource)
        if resource_delimiter is not None:
            builder.resource_delimiter(resource_delimiter)
        for dependency in dependencies:
            builder.dependency(dependency)
        if module_xml is not None:
            builder.module_xml(module_xml)
        for prop in properties:
            builder.property(*parse_property(prop))
        if main_class is not None:
            builder.main_class(main_class)
    except InvalidArgumentError as e:
        raise click.BadParameter(str(e), param_hint=e.parameter) from e

    command = builder.build()
    client = RecordingClient()
    context = OnlineCommandContext(
        client=client,
        options=OnlineOptions(is_domain=domain),
        server_version=version,
    )

    try:
        command.apply(context)
    except (CommandFailedError, ManagementClientError) as e:
        logger.error(f"Could not apply {command}: {e}")
        raise click.ClickException(str(e)) from e

    click.echo(client.last_command)


@cli.group()
def config():
    """Manage modrepo configuration files."""
    pass


@config.command(name="init")
@click.option(
    "--location",
    type=click.Choice(["user", "project"], case_sensitive=False),
    default="user",
    help="Where to create the configuration file.",
)
@click.option(
    "--force",
    is_flag=True,
    help="Overwrite existing configuration file.",
)
def config_init(location, force):
    """Create an example configuration file.

    Examples:
        modrepo config init                     # Create user config
        modrepo config init --location=project  # Create project config
    """
    from modrepo.infrastructure.config import (
        get_config_file_locations,
        write_example_config,
    )

    config_path = get_config_file_locations()[location.lower()]

    if config_path.exists() and not force:
        click.echo(f"Configuration file already exists at {config_path}\nUse --force to overwrite.")
        return

    try:
        created_path = write_example_config(location=location.lower())
    except PermissionError as e:
        raise click.ClickException(f"Permission denied creating config file: {e}") from e
    click.echo(f"Created configuration file: {created_path}")


@config.command(name="show")
def config_show():
    """Show current configuration values."""
    cfg = get_config(reload=True)

    click.echo("Current modrepo Configuration:")
    click.echo("=" * 60)
    click.echo("\n[Logging]")
    click.echo(f"  log_level: {cfg.logging.log_level}")
    click.echo("\n[Server]")
    click.echo(f"  management_version: {cfg.server.management_version}")
    click.echo(f"  domain: {cfg.server.domain}")


if __name__ == "__main__":
    cli()
