"""Persistence utilities sub-package.

Contains local filesystem traversal, file reads and content hashing.
"""
from .file_utils import (
    walk_directory,
    collect_local_files,
    read_file,
    hash_bytes,
    is_ignored,
)

__all__ = [
    'walk_directory',
    'collect_local_files',
    'read_file',
    'hash_bytes',
    'is_ignored',
]
