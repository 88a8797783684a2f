"""
Polling file watcher that triggers rebuilds on content changes
"""

import json
import logging
import os
import threading
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional, Set

from .config import WatchConfig
from .fingerprint import FingerprintStore, file_fingerprint
from .runner import RestartOrchestrator
from ..utils import path_utils
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)


class ChangeStatus(str, Enum):
    CREATED = 'Created'
    EDITED = 'Edited'
    DELETED = 'Deleted'


@dataclass(frozen=True)
class ChangeRecord:
    """A single classified change seen during one poll cycle"""
    path: str
    status: ChangeStatus

    def to_dict(self) -> Dict[str, str]:
        return {'path': self.path, 'status': self.status.value}


def format_changes(changes: List[ChangeRecord]) -> str:
    return json.dumps([change.to_dict() for change in changes], indent=1)


class ChangeDetector:
    """Polls one watch path and classifies changes against the shared store"""

    def __init__(self, watch_path: str, store: FingerprintStore,
                 extensions: Set[str], exclude_paths: Set[str],
                 on_edit: Optional[Callable[[], object]] = None,
                 delay: float = 0.5, notify_on_change: bool = True):
        """Initialize the detector

        Args:
            watch_path: Absolute directory to poll
            store: Fingerprint store shared with the other detectors
            extensions: Normalized extension allow-list ('*' for everything)
            exclude_paths: Absolute paths to skip during the scan
            on_edit: Called once per cycle in which at least one file was edited
            delay: Seconds to sleep between cycles
            notify_on_change: Log change summaries at INFO instead of DEBUG
        """
        self.watch_path = str(watch_path)
        self.store = store
        self.extensions = extensions
        self.exclude_paths = exclude_paths
        self.on_edit = on_edit
        self.delay = delay
        self.notify_on_change = notify_on_change

    def scan(self) -> List[str]:
        """List the files currently present under the watch path"""
        return path_utils.list_dir_contents(self.watch_path, self.extensions, self.exclude_paths)

    def poll(self) -> List[ChangeRecord]:
        """Run a single poll cycle and return the changes it found"""
        changes: List[ChangeRecord] = []
        checked = {self.watch_path}

        for path in self.scan():
            digest = file_fingerprint(path)
            try:
                os.stat(path)
            except FileNotFoundError:
                # Removed between the scan and now
                changes.append(ChangeRecord(path, ChangeStatus.DELETED))
                self.store.remove(path)
                continue
            except OSError as e:
                logger.error(f"Error reading file: {path} {e}")
                continue

            previous = self.store.update(path, digest)
            if previous is None:
                changes.append(ChangeRecord(path, ChangeStatus.CREATED))
            elif previous != digest:
                changes.append(ChangeRecord(path, ChangeStatus.EDITED))
            checked.add(path)

        for path in self.store.prune(checked, self.watch_path):
            changes.append(ChangeRecord(path, ChangeStatus.DELETED))

        if changes:
            level = logging.INFO if self.notify_on_change else logging.DEBUG
            logger.log(level, f"Modified Files: {format_changes(changes)}")

        if self.on_edit is not None and any(c.status is ChangeStatus.EDITED for c in changes):
            self.on_edit()

        return changes

    def run(self, stop_event: threading.Event):
        """Poll until stop_event is set"""
        while not stop_event.is_set():
            try:
                self.poll()
            except Exception:
                logger.exception(f"Poll cycle failed for {self.watch_path}")
            stop_event.wait(self.delay)


class FileWatcher:
    """Watch session: one detector thread per include path plus the restart worker"""

    def __init__(self, config: WatchConfig, root: Optional[str] = None,
                 orchestrator: Optional[RestartOrchestrator] = None):
        self.config = config
        self.root = Path(root).resolve() if root else Path.cwd()
        self.store = FingerprintStore()
        self.orchestrator = orchestrator or RestartOrchestrator(config, root=self.root)

        extensions = path_utils.normalize_extensions(config.watch_file_types)
        exclude_paths = path_utils.resolve_exclude_paths(config.exclude_paths, self.root)
        self.detectors = [
            ChangeDetector(
                watch_path=str(path_utils.resolve_path(include, self.root)),
                store=self.store,
                extensions=extensions,
                exclude_paths=exclude_paths,
                on_edit=self.orchestrator.request_restart,
                delay=config.delay / 1000.0,
                notify_on_change=config.notify_on_change,
            )
            for include in config.include_paths if include
        ]

        self._stop_event = threading.Event()
        self._threads: List[threading.Thread] = []

    def start(self):
        """Start watching for file changes"""
        self._stop_event.clear()
        self.orchestrator.start()
        if self.config.run_on_start:
            self.orchestrator.request_restart()

        for detector in self.detectors:
            logger.info(f"Starting watcher for: {detector.watch_path}")
            thread = threading.Thread(
                target=detector.run,
                args=(self._stop_event,),
                name=f"buildwatch-{Path(detector.watch_path).name}",
                daemon=True,
            )
            thread.start()
            self._threads.append(thread)

    def wait(self, timeout: Optional[float] = None):
        """Block until every detector thread has finished"""
        for thread in self._threads:
            thread.join(timeout)

    def stop(self, kill_process: bool = True):
        """Stop watching and, by default, the managed process"""
        self._stop_event.set()
        self.wait()
        self._threads = []
        self.orchestrator.stop(kill_process=kill_process)

    def is_alive(self) -> bool:
        """Check if any detector thread is still running"""
        return any(thread.is_alive() for thread in self._threads)
