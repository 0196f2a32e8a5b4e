"""
CLI entry point for Reqline.

Provides commands to parse a statement, run it against its target, and serve
the HTTP API.
"""

import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Optional

import click

from reqline._version import __version__
from reqline.cli.context import CLIContext, pass_context
from reqline.config.settings import get_default_config_path, load_config
from reqline.core.models import NetworkError, ParseError
from reqline.core.parser import parse_reqline
from reqline.exceptions import InvalidConfigurationError
from reqline.logging_config import get_logger, setup_logging_from_config

logger = get_logger(__name__)


def _echo_json(data: Any, err: bool = False) -> None:
    click.echo(json.dumps(data, indent=2), err=err)


@click.group()
@click.option(
    '--config',
    '-c',
    type=click.Path(exists=False, dir_okay=False, path_type=Path),
    default=None,
    help=f'Path to configuration file (default: {get_default_config_path()})',
)
@click.option(
    '--log-level',
    '-l',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'], case_sensitive=False),
    default=None,
    help='Set logging level (default: from configuration)',
)
@click.option(
    '--verbose',
    '-v',
    is_flag=True,
    help='Enable verbose output',
)
@click.version_option(version=__version__, prog_name='reqline')
@pass_context
def cli(ctx: CLIContext, config: Optional[Path], log_level: Optional[str], verbose: bool):
    """
    Reqline - HTTP requests as single-line statements.

    Statements look like: HTTP GET | URL https://api.example.com | QUERY {"page": 1}
    """
    ctx.verbose = verbose
    ctx.config_path = str(config) if config else None

    try:
        ctx.config = load_config(ctx.config_path)
    except InvalidConfigurationError as e:
        click.echo(f"Error: Invalid configuration: {e}", err=True)
        sys.exit(1)

    if log_level:
        ctx.config.logging.level = log_level.upper()
    setup_logging_from_config(ctx.config.logging)

    if verbose:
        logger.info(
            "configuration_loaded",
            path=ctx.config_path or "defaults",
            log_level=ctx.config.logging.level,
        )


@cli.command()
@click.argument('statement')
def parse(statement: str):
    """Parse STATEMENT and print the request descriptor."""
    parsed = parse_reqline(statement)
    if isinstance(parsed, ParseError):
        _echo_json(parsed.to_dict(), err=True)
        sys.exit(1)

    _echo_json(parsed.to_dict())


@cli.command()
@click.argument('statement')
@pass_context
def run(ctx: CLIContext, statement: str):
    """Parse STATEMENT, issue the request and print the result."""
    parsed = parse_reqline(statement)
    if isinstance(parsed, ParseError):
        _echo_json(parsed.to_dict(), err=True)
        sys.exit(1)

    result = asyncio.run(ctx.make_executor().execute(parsed))
    if isinstance(result, NetworkError):
        _echo_json(result.to_dict(), err=True)
        sys.exit(1)

    _echo_json(result.to_dict())


@cli.command()
@click.option('--host', default=None, help='Address to bind (default: from configuration)')
@click.option('--port', type=int, default=None, help='Port to bind (default: from configuration)')
@pass_context
def serve(ctx: CLIContext, host: Optional[str], port: Optional[int]):
    """Serve the reqline HTTP API."""
    from reqline.api.app import run_server

    if host:
        ctx.settings.server.host = host
    if port:
        ctx.settings.server.port = port

    click.echo(f"Reqline API listening on http://{ctx.settings.server.host}:{ctx.settings.server.port}")
    run_server(ctx.settings)


def main():
    """Console script entry point."""
    cli()


if __name__ == '__main__':
    main()
