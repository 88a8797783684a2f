"""
BuildWatch - Rebuild and restart your app when its sources change
"""

__version__ = "0.1.0"
__description__ = "Local development supervisor: watch source trees, rebuild and relaunch on save."

from .core.config import Command, WatchConfig, load_config, load_default_config
from .core.watcher import FileWatcher
from .utils.logging_utils import setup_logger


def watch(config: WatchConfig, root=None) -> FileWatcher:
    """Start a watch session for config and block until it ends"""
    setup_logger('buildwatch', config.log_level)
    watcher = FileWatcher(config, root=root)
    watcher.start()
    watcher.wait()
    return watcher


__all__ = [
    'FileWatcher',
    'Command',
    'WatchConfig',
    'load_config',
    'load_default_config',
    'watch',
]
