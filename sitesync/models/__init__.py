"""
Data models for sitesync
"""

from .local_file import LocalFile
from .remote_object import RemoteObject
from .plan import ReconciliationPlan

__all__ = ['LocalFile', 'RemoteObject', 'ReconciliationPlan']
