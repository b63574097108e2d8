"""
Main entry point for Module Topology.

This module provides the command-line interface for resolving and
activating modules discovered from a directory or installed entry points.
"""

import sys
from typing import NoReturn, Optional, Tuple

import typer
from loguru import logger

from .application.container import Container
from .application.startup import ApplicationStartup, ModuleLoader
from .core.exceptions import ModuleTopologyError
from .core.interfaces.modules import IPluginSource
from .infrastructure.config.loader import ConfigLoader
from .infrastructure.config.models import ApplicationConfig
from .infrastructure.logging.setup import setup_logging
from .plugins.sources import create_plugin_source

# Create CLI application
cli = typer.Typer(
    name="module-topology",
    help="Resolve pluggable application modules into a dependency-safe activation order"
)

LOCATION_ARGUMENT = typer.Argument(
    None, help="Directory to discover modules in (defaults to the configured directory)")
PATTERN_OPTION = typer.Option(
    None, "--pattern", "-p", help="Glob pattern selecting candidate plugin files")
RECURSIVE_OPTION = typer.Option(
    False, "--recursive", "-r", help="Search the directory recursively")
CONFIG_OPTION = typer.Option(
    None, "--config", "-c", help="Configuration file path")
LOG_LEVEL_OPTION = typer.Option(
    None, "--log-level", help="Logging level")


def _prepare(config_file: Optional[str],
             location: Optional[str],
             pattern: Optional[str],
             recursive: bool,
             log_level: Optional[str]) -> Tuple[ApplicationConfig, IPluginSource]:
    """Load configuration, apply command line overrides and set up logging."""
    config = ConfigLoader().load_config(config_file)

    if pattern:
        config.discovery.pattern = pattern
    if recursive:
        config.discovery.recursive = True
    if log_level:
        config.logging.level = log_level.upper()
    if config.debug:
        config.logging.level = "DEBUG"

    setup_logging(config.logging)
    return config, create_plugin_source(config.discovery, location)


def _fail(message: str) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    sys.exit(1)


@cli.command()
def resolve(
    location: Optional[str] = LOCATION_ARGUMENT,
    pattern: Optional[str] = PATTERN_OPTION,
    recursive: bool = RECURSIVE_OPTION,
    config_file: Optional[str] = CONFIG_OPTION,
    log_level: Optional[str] = LOG_LEVEL_OPTION,
) -> None:
    """Print the resolved module order, one identity per line."""
    try:
        _, source = _prepare(config_file, location, pattern, recursive, log_level)
        loaded = ModuleLoader(source).load_modules()
    except (ModuleTopologyError, ValueError, FileNotFoundError) as e:
        _fail(str(e))

    for identity in loaded.order:
        typer.echo(identity)


@cli.command()
def activate(
    location: Optional[str] = LOCATION_ARGUMENT,
    pattern: Optional[str] = PATTERN_OPTION,
    recursive: bool = RECURSIVE_OPTION,
    config_file: Optional[str] = CONFIG_OPTION,
    log_level: Optional[str] = LOG_LEVEL_OPTION,
) -> None:
    """Resolve modules and run their configuration hooks against a fresh container."""
    container = Container()

    try:
        config, source = _prepare(config_file, location, pattern, recursive, log_level)
        logger.info(f"Starting {config.name} v{config.version} ({config.environment})")
        order = ApplicationStartup(container, source, config).configure_services()
    except (ModuleTopologyError, ValueError, FileNotFoundError) as e:
        _fail(str(e))

    for identity in order:
        typer.echo(identity)
    typer.echo(f"Registered {len(container.get_registrations())} service(s)")


@cli.command()
def init_config(
    output: str = typer.Option(
        "module_topology.yaml", "--output", "-o", help="Output configuration file"
    ),
    format: str = typer.Option(
        "yaml", "--format", "-f", help="Configuration format (yaml/json)"
    )
) -> None:
    """Generate a default configuration file."""
    config = ApplicationConfig()
    config_loader = ConfigLoader()

    try:
        config_loader.save_config(config, output, format)
        typer.echo(f"Default configuration saved to {output}")
    except (ValueError, OSError) as e:
        typer.echo(f"Error saving configuration: {e}", err=True)
        sys.exit(1)


@cli.command()
def validate_config(
    config_file: str = typer.Argument(..., help="Configuration file to validate")
) -> None:
    """Validate a configuration file."""
    config_loader = ConfigLoader()

    try:
        config = config_loader.load_config(config_file)
        typer.echo(f"Configuration file {config_file} is valid")
        typer.echo(f"Application: {config.name} v{config.version}")
        typer.echo(f"Discovery: {config.discovery.source} ({config.discovery.directory})")
    except (ValueError, FileNotFoundError) as e:
        typer.echo(f"Configuration validation failed: {e}", err=True)
        sys.exit(1)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
