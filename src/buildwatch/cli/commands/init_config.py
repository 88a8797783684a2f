"""
Init-config command for BuildWatch CLI
"""

import sys

import click
from colorama import Fore, Style

from buildwatch.core.config import DEFAULT_CONFIG_FILE, ConfigError, write_default_config
from buildwatch.cli.utils import handle_cli_exception


@click.command()
@click.argument('config_path', type=click.Path(), default=DEFAULT_CONFIG_FILE)
@click.option('--force', '-f', is_flag=True, help='Overwrite an existing configuration file')
def init_config_command(config_path: str, force: bool):
    """Create a configuration file (TOML, YAML or JSON, chosen by extension).

    Defaults to 'buildwatch.config.toml' if no path is specified.
    """
    
    try:
        created = write_default_config(config_path, force=force)
    except ConfigError as e:
        click.echo(f"{Fore.YELLOW}{e}{Style.RESET_ALL}")
        sys.exit(1)
    except OSError as e:
        handle_cli_exception(e)
    
    click.echo(f"{Fore.GREEN}Configuration file created: {created}{Style.RESET_ALL}")
    click.echo(f"{Fore.CYAN}Edit this file to set your build and run commands.{Style.RESET_ALL}")


@click.command()
@click.argument('config_path', type=click.Path(), default=DEFAULT_CONFIG_FILE)
@click.option('--force', '-f', is_flag=True, help='Overwrite an existing configuration file')
@click.pass_context
def init_alias(ctx, **kwargs):
    """Alias for 'init-config' command."""
    ctx.invoke(init_config_command, **kwargs)
