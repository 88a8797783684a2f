"""
CLI commands package for BuildWatch
"""

from .watch import watch_command, watch_alias
from .init_config import init_config_command, init_alias
from .status import status_command

__all__ = [
    'watch_command', 'watch_alias',
    'init_config_command', 'init_alias',
    'status_command',
]
