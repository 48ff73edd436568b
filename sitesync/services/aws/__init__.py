"""
AWS S3 deploy service package.

- :mod:`operations`  — primitive S3 list/put/delete helpers
- :mod:`sync_engine` — local-to-bucket reconciliation
"""
from .sync_engine import DeploySyncService, decode_etag
from .operations import S3Operations

__all__ = [
    'DeploySyncService',
    'S3Operations',
    'decode_etag',
]
