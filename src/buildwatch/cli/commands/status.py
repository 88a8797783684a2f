"""
Status command for BuildWatch CLI
"""

from datetime import datetime
from pathlib import Path

import click
from colorama import Fore, Style

from buildwatch.core.config import find_config_file, load_config, load_default_config
from buildwatch.utils.path_utils import resolve_path


@click.command()
@click.argument('directory', type=click.Path(exists=True, file_okay=False), default='.', required=False)
@click.option('--verbose', '-v', is_flag=True, help='Show detailed information')
def status_command(directory: str, verbose: bool):
    """Show the current status of BuildWatch in a directory.
    
    DIRECTORY: Directory to check (default: current directory)
    """
    
    dir_path = Path(directory).resolve()
    
    click.echo(f"{Fore.GREEN}BuildWatch Status for: {dir_path}{Style.RESET_ALL}\n")
    
    config_found = find_config_file(dir_path)
    config_obj = load_config(str(config_found)) if config_found else None
    
    if config_found and config_obj:
        click.echo(f"{Fore.GREEN}✓{Style.RESET_ALL} Configuration: {config_found.name}")
    elif config_found:
        click.echo(f"{Fore.RED}✗{Style.RESET_ALL} Configuration: {config_found.name} could not be loaded")
    else:
        click.echo(f"{Fore.YELLOW}○{Style.RESET_ALL} Configuration: Using defaults (no config file found)")
    
    if config_obj is None:
        config_obj = load_default_config()
    
    if verbose:
        click.echo(f"    File types: {', '.join(config_obj.watch_file_types)}")
        click.echo(f"    Exclude paths: {', '.join(config_obj.exclude_paths) or '(none)'}")
        for command in config_obj.build_commands:
            click.echo(f"    Build: {command}")
        if config_obj.run_command:
            click.echo(f"    Run: {config_obj.run_command}")
    
    # Check include paths
    missing = []
    for include in config_obj.include_paths:
        if resolve_path(include, dir_path).is_dir():
            click.echo(f"{Fore.GREEN}✓{Style.RESET_ALL} Watch path: {include}")
        else:
            click.echo(f"{Fore.YELLOW}○{Style.RESET_ALL} Watch path: {include} (not found)")
            missing.append(include)
    
    # Check build artifact
    artifact = resolve_path(config_obj.build_artifact, dir_path) if config_obj.build_artifact else None
    if artifact is not None and artifact.exists():
        modified = datetime.fromtimestamp(artifact.stat().st_mtime)
        click.echo(f"{Fore.GREEN}✓{Style.RESET_ALL} Build artifact: {config_obj.build_artifact} "
                   f"(modified {modified.strftime('%Y-%m-%d %H:%M:%S')})")
    elif artifact is not None:
        click.echo(f"{Fore.YELLOW}○{Style.RESET_ALL} Build artifact: {config_obj.build_artifact} (not built yet)")
    
    # Suggest next steps
    click.echo(f"\n{Fore.CYAN}Suggested commands:{Style.RESET_ALL}")
    
    if not config_found:
        click.echo(f"  buildwatch init-config    # Create a configuration file")
    if missing:
        click.echo(f"  buildwatch watch PATH     # Watch an existing directory instead")
    click.echo(f"  buildwatch watch          # Start watching and rebuilding")
