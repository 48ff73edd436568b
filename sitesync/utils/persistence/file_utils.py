"""
File system utilities
"""
import hashlib
import logging
import os
import stat
from typing import List

from ...exceptions import FilesystemError
from ...models.local_file import LocalFile

log = logging.getLogger(__name__)


def is_ignored(full_path, root, ignore):
    """
    Check a walked path against the ignore set.

    Entries may be given either as the joined path (``dist/drafts``) or
    relative to the sync root (``drafts``).

    Args:
        full_path: Path as produced by joining the walked directory and entry
        root: Sync root the walk started from
        ignore: Collection of ignored paths

    Returns:
        True if the path is listed
    """
    if not ignore:
        return False
    rel = os.path.relpath(full_path, root).replace(os.sep, '/')
    return full_path in ignore or os.path.normpath(full_path) in ignore or rel in ignore


def walk_directory(dirname, ignore=(), honor_ignore=False, root=None) -> List[str]:
    """
    Recursively list every file below a directory.

    Directories are expanded, never emitted. Ignored paths are only logged
    unless *honor_ignore* is set, in which case they are left out (and
    ignored directories are not descended into).

    Args:
        dirname: Directory to walk
        ignore: Collection of paths to ignore
        honor_ignore: Actually skip ignored paths
        root: Sync root used for relative ignore matching (defaults to *dirname*)

    Returns:
        Flat list of file paths, in no guaranteed order

    Raises:
        FilesystemError: If a directory listing or stat call fails
    """
    root = dirname if root is None else root

    try:
        entries = os.listdir(dirname)
    except OSError as e:
        raise FilesystemError(f"Cannot list directory {dirname}: {e}") from e

    files = []
    for entry in entries:
        full_path = os.path.join(dirname, entry)
        try:
            stat_result = os.stat(full_path)
        except OSError as e:
            raise FilesystemError(f"Cannot stat {full_path}: {e}") from e

        if is_ignored(full_path, root, ignore):
            log.info("Ignoring %s", full_path)
            if honor_ignore:
                continue

        if stat.S_ISDIR(stat_result.st_mode):
            files.extend(walk_directory(full_path, ignore, honor_ignore, root))
        else:
            files.append(full_path)

    return files


def collect_local_files(root, ignore=(), honor_ignore=False) -> List[LocalFile]:
    """
    Walk *root* and return the files as :class:`LocalFile` entries.

    Raises:
        FilesystemError: If the walk fails
    """
    paths = walk_directory(root, ignore=ignore, honor_ignore=honor_ignore)
    return [LocalFile.from_path(root, path) for path in paths]


def read_file(path) -> bytes:
    """
    Read a whole file.

    Raises:
        FilesystemError: If the file cannot be read
    """
    try:
        with open(path, 'rb') as f:
            return f.read()
    except OSError as e:
        raise FilesystemError(f"Cannot read {path}: {e}") from e


def hash_bytes(data: bytes) -> str:
    """Lowercase hex MD5 digest, the format S3 uses for single-part ETags."""
    return hashlib.md5(data).hexdigest()
