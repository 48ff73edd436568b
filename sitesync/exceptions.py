"""Exception types raised by the deploy pipeline.

Convention:
- Every failure of a list/put/delete call or of a local filesystem call
  is wrapped into one of the :class:`SyncError` subclasses below, with
  the underlying botocore/OS error chained as ``__cause__``.
- :class:`HashMismatchDecode` is the only non-fatal member. The
  reconciler catches it and re-uploads the affected key.
- Everything else propagates to :func:`sitesync.cli.main`, which logs
  it and exits non-zero.
"""


class SyncError(Exception):
    """Base class for all sitesync errors."""


class ConfigError(SyncError):
    """Raised when the configuration cannot be loaded or is incomplete."""


class RemoteListError(SyncError):
    """Raised when a page of the bucket listing cannot be fetched."""


class RemoteWriteError(SyncError):
    """Raised when an object upload fails."""


class RemoteDeleteError(SyncError):
    """Raised when an object delete fails (other than "not found")."""


class FilesystemError(SyncError):
    """Raised when a local directory listing, stat or read fails."""


class HashMismatchDecode(SyncError):
    """Raised when a remote ETag is not a plain content hash.

    Multipart uploads and some S3-compatible stores produce ETags that
    are not the MD5 of the body, so they can never match a local hash.
    """
