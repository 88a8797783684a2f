"""
Command execution and the restart sequence
"""

import os
import queue
import subprocess
import threading
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

from .config import Command, WatchConfig
from .supervisor import ProcessSupervisor
from ..utils.logging_utils import get_logger
from ..utils.path_utils import resolve_path

logger = get_logger(__name__)


def run_command(command: Command, cwd: Optional[str] = None) -> bool:
    """Run a command to completion, inheriting stdout/stderr.

    Returns True if the command exited with status 0. Failures are logged,
    never raised.
    """
    logger.info(f"Running: {command}")
    try:
        result = subprocess.run(command.argv(), cwd=cwd, check=False)
    except (OSError, ValueError, subprocess.SubprocessError) as e:
        logger.error(f"Could not run '{command}': {e}")
        return False

    if result.returncode != 0:
        logger.error(f"Command '{command}' exited with status {result.returncode}")
        return False
    return True


def start_command(command: Command, cwd: Optional[str] = None) -> Optional[subprocess.Popen]:
    """Launch a command without waiting for it; returns None on failure"""
    logger.info(f"Starting: {command}")
    try:
        return subprocess.Popen(command.argv(), cwd=cwd)
    except (OSError, ValueError, subprocess.SubprocessError) as e:
        logger.error(f"Could not start '{command}': {e}")
        return None


class RestartOrchestrator:
    """
    Runs the kill -> rebuild -> relaunch sequence for the managed process.

    Restarts are serialized: restart() holds a lock for the whole sequence,
    and request_restart() hands work to a single worker thread through a
    queue. With debounce enabled the queue holds one pending request, so
    edits reported while a restart is already waiting collapse into it.
    """

    def __init__(self, config: WatchConfig, root: Optional[Path] = None,
                 supervisor: Optional[ProcessSupervisor] = None):
        self.config = config
        self.root = Path(root) if root is not None else Path.cwd()
        self.supervisor = supervisor or ProcessSupervisor(kill_timeout=config.kill_timeout / 1000.0)
        self.artifact_path = resolve_path(config.build_artifact, self.root) if config.build_artifact else None
        self.settle_delay = config.settle_delay / 1000.0

        self._restart_lock = threading.Lock()
        self._requests: queue.Queue = queue.Queue(maxsize=1 if config.debounce else 0)
        self._worker: Optional[threading.Thread] = None
        self.restart_count = 0

    # Worker management

    def start(self):
        """Start the background worker that services restart requests"""
        if self._worker is not None and self._worker.is_alive():
            return
        self._worker = threading.Thread(target=self._work_loop, name='buildwatch-restart', daemon=True)
        self._worker.start()

    def stop(self, kill_process: bool = True, timeout: Optional[float] = None):
        """Stop the worker and, optionally, the managed process"""
        if self._worker is not None:
            # Drop pending requests so the sentinel fits in a bounded queue
            self._drain()
            self._requests.put(None)
            self._worker.join(timeout=timeout)
            self._worker = None
        if kill_process:
            with self._restart_lock:
                self.supervisor.kill_current()

    def request_restart(self) -> bool:
        """Queue a restart; returns False if it collapsed into a pending one"""
        if self.config.debounce:
            try:
                self._requests.put_nowait(True)
            except queue.Full:
                logger.debug("Restart already pending, skipping duplicate request")
                return False
        else:
            self._requests.put(True)
        return True

    def _drain(self):
        while True:
            try:
                self._requests.get_nowait()
            except queue.Empty:
                return

    def _work_loop(self):
        while True:
            request = self._requests.get()
            if request is None:
                return
            try:
                self.restart()
            except Exception:
                logger.exception("Restart sequence failed")

    # The restart sequence

    def restart(self) -> bool:
        """Run one full restart sequence.

        Returns True if the sequence ran to the end (even if individual
        commands failed), False if it was aborted.
        """
        with self._restart_lock:
            self.restart_count += 1
            logger.info(f"Restarting (#{self.restart_count})")
            cwd = str(self.root)

            had_process = self.supervisor.current is not None
            if not self.supervisor.kill_current():
                logger.error("Could not stop the running process, aborting restart")
                return False
            if had_process and self.settle_delay > 0:
                # Give the OS time to release the old binary
                time.sleep(self.settle_delay)

            if not self._remove_artifact():
                return False

            ok = True
            for command in self.config.pre_commands:
                ok = run_command(command, cwd=cwd) and ok

            build_ok = True
            for command in self.config.build_commands:
                build_ok = run_command(command, cwd=cwd) and build_ok
            if self.config.build_commands and build_ok:
                self._report_artifact()
            ok = ok and build_ok

            if ok or not self.config.abort_on_failure:
                self._launch(cwd)
            else:
                logger.warning("Skipping launch because a pre/build command failed")

            for command in self.config.post_commands:
                run_command(command, cwd=cwd)

            return True

    def _remove_artifact(self) -> bool:
        if self.artifact_path is None or not self.artifact_path.exists():
            return True
        try:
            os.remove(self.artifact_path)
        except OSError as e:
            logger.error(f"Could not remove build artifact {self.artifact_path}: {e}")
            return False
        logger.debug(f"Removed build artifact {self.artifact_path}")
        return True

    def _report_artifact(self):
        if self.artifact_path is None:
            return
        try:
            mtime = self.artifact_path.stat().st_mtime
        except OSError:
            logger.warning(f"Build artifact not found at {self.artifact_path}")
            return
        logger.info(f"Build artifact {self.artifact_path} modified {datetime.fromtimestamp(mtime).isoformat()}")

    def _launch(self, cwd: str):
        command = self.config.run_command
        if command is None:
            logger.debug("No run command configured")
            return
        process = start_command(command, cwd=cwd)
        if process is not None:
            self.supervisor.track_new(process)
            logger.info(f"Started process {process.pid}")
