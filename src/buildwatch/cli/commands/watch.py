"""
Watch command for BuildWatch CLI
"""

import dataclasses
import time
from pathlib import Path
from typing import Optional

import click
from colorama import Fore, Style

from buildwatch.core.watcher import FileWatcher
from buildwatch.cli.utils import load_config_with_fallback
from buildwatch.utils.logging_utils import setup_logger


@click.command()
@click.argument('paths', nargs=-1, type=click.Path(exists=True, file_okay=False))
@click.option('--config', '-c', type=click.Path(),
              help='Path to configuration file (TOML, YAML or JSON)')
@click.option('--extensions', '-e', multiple=True,
              help='File types to watch (e.g. *.go, .html); overrides the config')
@click.option('--exclude', '-x', multiple=True,
              help='Paths to exclude from watching; overrides the config')
@click.option('--delay', '-d', type=click.IntRange(min=1),
              help='Polling interval in milliseconds')
@click.option('--run/--no-run', 'run_on_start', default=None,
              help='Build and launch once before the first change')
@click.option('--verbose', '-v', is_flag=True,
              help='Enable verbose output')
def watch_command(paths: tuple, config: Optional[str], extensions: tuple, exclude: tuple,
                  delay: Optional[int], run_on_start: Optional[bool], verbose: bool):
    """Start watching for changes, rebuilding and restarting the app on every edit.
    
    PATHS: Directories to watch (defaults to the configured include paths)
    """
    
    root = Path.cwd()
    config_obj = load_config_with_fallback(config, root, verbose)
    
    # CLI options take precedence over the config file
    overrides = {}
    if paths:
        overrides['include_paths'] = list(paths)
    if extensions:
        overrides['watch_file_types'] = list(extensions)
    if exclude:
        overrides['exclude_paths'] = list(exclude)
    if delay:
        overrides['delay'] = delay
    if run_on_start is not None:
        overrides['run_on_start'] = run_on_start
    if overrides:
        config_obj = dataclasses.replace(config_obj, **overrides)
    
    setup_logger('buildwatch', 'debug' if verbose else config_obj.log_level)
    
    click.echo(f"{Fore.GREEN}Starting BuildWatch...{Style.RESET_ALL}")
    click.echo(f"{Fore.CYAN}Watching: {', '.join(config_obj.include_paths)}{Style.RESET_ALL}")
    click.echo(f"{Fore.CYAN}File types: {', '.join(config_obj.watch_file_types)}{Style.RESET_ALL}")
    if config_obj.exclude_paths:
        click.echo(f"{Fore.CYAN}Excluding: {', '.join(config_obj.exclude_paths)}{Style.RESET_ALL}")
    click.echo(f"{Fore.CYAN}Delay: {config_obj.delay}ms{Style.RESET_ALL}")
    if config_obj.run_command:
        click.echo(f"{Fore.CYAN}Run command: {config_obj.run_command}{Style.RESET_ALL}")
    
    watcher = FileWatcher(config=config_obj, root=str(root))
    
    try:
        watcher.start()
        click.echo(f"{Fore.YELLOW}Press Ctrl+C to stop watching...{Style.RESET_ALL}")
        
        # Detector threads only end on shutdown
        while watcher.is_alive():
            time.sleep(1)
            
    except KeyboardInterrupt:
        click.echo(f"\n{Fore.YELLOW}Stopping BuildWatch...{Style.RESET_ALL}")
        watcher.stop()
        click.echo(f"{Fore.GREEN}BuildWatch stopped.{Style.RESET_ALL}")


# Alias command
@click.command()
@click.argument('paths', nargs=-1, type=click.Path(exists=True, file_okay=False))
@click.option('--config', '-c', type=click.Path(),
              help='Path to configuration file (TOML, YAML or JSON)')
@click.option('--extensions', '-e', multiple=True,
              help='File types to watch (e.g. *.go, .html); overrides the config')
@click.option('--exclude', '-x', multiple=True,
              help='Paths to exclude from watching; overrides the config')
@click.option('--delay', '-d', type=click.IntRange(min=1),
              help='Polling interval in milliseconds')
@click.option('--run/--no-run', 'run_on_start', default=None,
              help='Build and launch once before the first change')
@click.option('--verbose', '-v', is_flag=True,
              help='Enable verbose output')
@click.pass_context
def watch_alias(ctx, **kwargs):
    """Alias for 'watch' command."""
    ctx.invoke(watch_command, **kwargs)
