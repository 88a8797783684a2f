#!/usr/bin/env python3
"""
BuildWatch CLI - Main entry point
"""

import click
from colorama import init

from buildwatch.cli.commands.watch import watch_command, watch_alias
from buildwatch.cli.commands.init_config import init_config_command, init_alias
from buildwatch.cli.commands.status import status_command

# Initialize colorama for cross-platform colored output
init()


@click.group()
@click.version_option(package_name='buildwatch')
def main():
    """BuildWatch - Rebuild and restart your app whenever its sources change.
    
    Common workflows:
    
      # Create a configuration file in the current directory
      buildwatch init-config
      
      # Watch the configured paths, rebuilding and relaunching on save
      buildwatch watch
      
      # Check what would be watched
      buildwatch status
    
    Use 'buildwatch COMMAND --help' for detailed help on any command.
    """
    pass


# Register main commands
main.add_command(watch_command, name='watch')
main.add_command(init_config_command, name='init-config')
main.add_command(status_command, name='status')

# Register aliases
main.add_command(watch_alias, name='w')
main.add_command(init_alias, name='init')


if __name__ == '__main__':
    main()
