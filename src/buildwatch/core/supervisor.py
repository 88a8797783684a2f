"""
Supervision of the managed child process
"""

import subprocess
import threading
from enum import Enum
from typing import Optional

from ..utils.logging_utils import get_logger

logger = get_logger(__name__)


class ProcessState(Enum):
    NOT_RUNNING = 'not_running'
    RUNNING = 'running'
    TERMINATING = 'terminating'


class ProcessSupervisor:
    """Holds the handle of the single managed process launched by the run command.

    State only changes through kill_current() and track_new(), both of which
    take the supervisor lock, so at most one handle is ever held.
    """

    def __init__(self, kill_timeout: float = 5.0):
        """
        Args:
            kill_timeout: Seconds to wait for a graceful exit before killing
        """
        self.kill_timeout = kill_timeout
        self._process: Optional[subprocess.Popen] = None
        self._state = ProcessState.NOT_RUNNING
        self._lock = threading.RLock()

    @property
    def state(self) -> ProcessState:
        with self._lock:
            return self._state

    @property
    def current(self) -> Optional[subprocess.Popen]:
        with self._lock:
            return self._process

    def is_running(self) -> bool:
        """Check if the held process is alive"""
        with self._lock:
            return self._process is not None and self._process.poll() is None

    def kill_current(self) -> bool:
        """Terminate the held process, if any, and wait for it to exit.

        Returns True when no managed process remains alive. If the process
        could not be stopped the handle is kept and False is returned.
        """
        with self._lock:
            process = self._process
            if process is None:
                return True

            if process.poll() is not None:
                logger.debug(f"Managed process {process.pid} already exited with code {process.returncode}")
                self._clear()
                return True

            self._state = ProcessState.TERMINATING
            logger.info(f"Stopping managed process {process.pid}")
            try:
                process.terminate()
                try:
                    process.wait(timeout=self.kill_timeout)
                except subprocess.TimeoutExpired:
                    logger.warning(f"Process {process.pid} did not exit within {self.kill_timeout}s, killing it")
                    process.kill()
                    process.wait(timeout=self.kill_timeout)
            except (OSError, subprocess.SubprocessError) as e:
                logger.error(f"Failed to stop process {process.pid}: {e}")
                if process.poll() is None:
                    self._state = ProcessState.RUNNING
                    return False
                self._clear()
                return True

            logger.debug(f"Managed process {process.pid} exited with code {process.returncode}")
            self._clear()
            return True

    def track_new(self, process: subprocess.Popen) -> None:
        """Record process as the managed process, replacing any previous handle"""
        with self._lock:
            previous = self._process
            if previous is not None and previous is not process and previous.poll() is None:
                logger.warning(f"Replacing live process {previous.pid} without stopping it")
            self._process = process
            self._state = ProcessState.RUNNING
            logger.debug(f"Tracking managed process {process.pid}")

    def _clear(self) -> None:
        self._process = None
        self._state = ProcessState.NOT_RUNNING
