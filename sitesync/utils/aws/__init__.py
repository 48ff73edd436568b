"""AWS utilities sub-package.

Contains boto3 session and S3 client construction.
"""
from .aws_utils import (
    create_boto3_session,
    create_s3_client,
)

__all__ = [
    'create_boto3_session',
    'create_s3_client',
]
