"""
Content fingerprints and the shared fingerprint store

Change detection compares whole-file SHA-256 digests rather than
modification times, so touching a file without changing it is not an edit.
"""

import hashlib
import threading
from typing import Dict, Iterable, List, Optional

from ..utils.logging_utils import get_logger
from ..utils.path_utils import is_within

logger = get_logger(__name__)

# Digest recorded for files that could not be read
UNREADABLE = ''

CHUNK_SIZE = 64 * 1024


def file_fingerprint(path: str) -> str:
    """Return the hex SHA-256 digest of the file, or UNREADABLE on I/O failure"""
    hasher = hashlib.sha256()
    try:
        with open(path, 'rb') as f:
            for chunk in iter(lambda: f.read(CHUNK_SIZE), b''):
                hasher.update(chunk)
    except OSError as e:
        logger.debug(f"Could not fingerprint {path}: {e}")
        return UNREADABLE
    return hasher.hexdigest()


class FingerprintStore:
    """
    Mapping of file path to last-seen content digest.

    One store is shared by every change detector of a watch session, so all
    access goes through a lock. Each method is a single atomic step; in
    particular update() swaps in the new digest and hands back the old one so
    a detector can classify a file without a separate read.
    """

    def __init__(self):
        self._hashes: Dict[str, str] = {}
        self._lock = threading.RLock()

    def get(self, path: str) -> Optional[str]:
        with self._lock:
            return self._hashes.get(path)

    def update(self, path: str, digest: str) -> Optional[str]:
        """Record digest for path and return the previous digest (None if untracked)"""
        with self._lock:
            previous = self._hashes.get(path)
            self._hashes[path] = digest
            return previous

    def remove(self, path: str) -> bool:
        """Forget path; returns True if it was tracked"""
        with self._lock:
            return self._hashes.pop(path, None) is not None

    def prune(self, keep: Iterable[str], root: str) -> List[str]:
        """Remove every tracked path under root that is not in keep.

        Returns the removed paths in sorted order.
        """
        keep = set(keep)
        with self._lock:
            stale = sorted(
                path for path in self._hashes
                if path not in keep and is_within(path, root)
            )
            for path in stale:
                del self._hashes[path]
            return stale

    def snapshot(self) -> Dict[str, str]:
        """Copy of the current mapping"""
        with self._lock:
            return dict(self._hashes)

    def __contains__(self, path: str) -> bool:
        with self._lock:
            return path in self._hashes

    def __len__(self) -> int:
        with self._lock:
            return len(self._hashes)
