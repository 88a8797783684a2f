"""
Path utilities and the directory scanner for BuildWatch
"""

import os
from pathlib import Path
from typing import Iterable, List, Optional, Set

from .logging_utils import get_logger

logger = get_logger(__name__)

WILDCARD = '*'


def resolve_path(path: str, base: Optional[Path] = None) -> Path:
    """Resolve a path to an absolute Path object, relative to base if given."""
    candidate = Path(path)
    if base is not None and not candidate.is_absolute():
        candidate = Path(base) / candidate
    return candidate.resolve()


def normalize_extension(extension: str) -> str:
    """Normalize an extension entry to the '.ext' form.

    '*.go', '.go' and 'go' all become '.go'; the bare wildcard is kept as is.
    """
    extension = extension.strip()
    if extension == WILDCARD:
        return WILDCARD
    if extension.startswith(WILDCARD):
        extension = extension[1:]
    if extension and not extension.startswith('.'):
        extension = '.' + extension
    return extension


def normalize_extensions(extensions: Iterable[str]) -> Set[str]:
    """Normalize a collection of extension entries, dropping empty ones."""
    return {normalize_extension(ext) for ext in extensions if ext and ext.strip()}


def matches_extension(path: str, allowed_extensions: Set[str]) -> bool:
    """Check if a file qualifies under an (already normalized) extension allow-list."""
    if WILDCARD in allowed_extensions:
        return True
    return os.path.splitext(path)[1] in allowed_extensions


def resolve_exclude_paths(exclude_paths: Iterable[str], base: Path) -> Set[str]:
    """Resolve exclude entries to absolute path strings for exact matching."""
    return {str(resolve_path(path, base)) for path in exclude_paths if path}


def list_dir_contents(path: str, allowed_extensions: Set[str],
                      exclude_paths: Set[str]) -> List[str]:
    """Recursively list qualifying files under path.

    Directories and files whose full path exactly matches an entry of
    exclude_paths are skipped; excluded directories are never descended into.
    A directory that cannot be read is logged and treated as empty.
    """
    contents: List[str] = []
    
    try:
        entries = sorted(os.scandir(path), key=lambda entry: entry.name)
    except OSError as e:
        logger.error(f"Error reading directory: {path} {e}")
        return contents
    
    for entry in entries:
        full_path = os.path.join(path, entry.name)
        if full_path in exclude_paths:
            continue
        
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as e:
            logger.warning(f"Could not stat {full_path}: {e}")
            continue
        
        if is_dir:
            contents.extend(list_dir_contents(full_path, allowed_extensions, exclude_paths))
        elif matches_extension(full_path, allowed_extensions):
            contents.append(full_path)
    
    return contents


def is_within(path: str, root: str) -> bool:
    """Check whether path equals root or lies beneath it."""
    return path == root or path.startswith(root.rstrip(os.sep) + os.sep)
