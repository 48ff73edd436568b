"""Utility modules for sitesync.

Sub-packages:
- persistence/ — local tree walking, file reads, hashing
- aws/ — boto3 session and S3 client construction
"""

from .config_loader import ConfigLoader, load_config
from .content_types import content_type
from .logger import get_logger, setup_logging

__all__ = [
    'ConfigLoader',
    'load_config',
    'content_type',
    'get_logger',
    'setup_logging',
]
