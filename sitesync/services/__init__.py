"""Services for sitesync."""
from .aws import DeploySyncService, S3Operations

__all__ = ['DeploySyncService', 'S3Operations']
