"""Core functionality for BuildWatch."""

from .config import Command, WatchConfig, load_config, load_default_config, write_default_config
from .fingerprint import FingerprintStore, file_fingerprint
from .runner import RestartOrchestrator
from .supervisor import ProcessState, ProcessSupervisor
from .watcher import ChangeDetector, ChangeRecord, ChangeStatus, FileWatcher

__all__ = [
    'Command', 'WatchConfig', 'load_config', 'load_default_config', 'write_default_config',
    'FingerprintStore', 'file_fingerprint',
    'RestartOrchestrator',
    'ProcessState', 'ProcessSupervisor',
    'ChangeDetector', 'ChangeRecord', 'ChangeStatus', 'FileWatcher',
]
