"""Utility functions for BuildWatch."""

from .path_utils import (
    resolve_path,
    normalize_extension,
    normalize_extensions,
    matches_extension,
    resolve_exclude_paths,
    list_dir_contents,
    is_within,
)
from .logging_utils import setup_logger, get_logger

__all__ = [
    # Path utilities
    'resolve_path',
    'normalize_extension',
    'normalize_extensions',
    'matches_extension',
    'resolve_exclude_paths',
    'list_dir_contents',
    'is_within',
    # Logging utilities
    'setup_logger',
    'get_logger',
]
