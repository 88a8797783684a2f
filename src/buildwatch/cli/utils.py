"""
Utility functions for CLI commands
"""

import sys
from pathlib import Path
from typing import Optional

import click
from colorama import Fore, Style

from buildwatch.core.config import WatchConfig, find_config_file, load_config, load_default_config


def load_config_with_fallback(config_file: Optional[str], search_dir: Path, verbose: bool = False) -> WatchConfig:
    """Load configuration with automatic fallback to a config file in search_dir and then the defaults."""
    if not config_file:
        found = find_config_file(search_dir)
        if found:
            config_file = str(found)
            if verbose:
                click.echo(f"{Fore.CYAN}Using config: {config_file}{Style.RESET_ALL}")
    
    if config_file:
        config_obj = load_config(config_file)
        if not config_obj:
            click.echo(f"{Fore.RED}Error: Could not load config file: {config_file}{Style.RESET_ALL}")
            sys.exit(1)
        return config_obj
    
    if verbose:
        click.echo(f"{Fore.YELLOW}No config file found, using defaults (run 'buildwatch init-config' to create one){Style.RESET_ALL}")
    return load_default_config()


def handle_cli_exception(e: Exception, verbose: bool = False) -> None:
    """Handle exceptions in CLI commands consistently."""
    click.echo(f"{Fore.RED}Error: {e}{Style.RESET_ALL}")
    if verbose:
        import traceback
        traceback.print_exc()
    sys.exit(1)
