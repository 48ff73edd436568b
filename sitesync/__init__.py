"""
sitesync — one-way deploy of a local build directory to an S3 bucket.

Uploads new or changed files, leaves unchanged files alone and removes
remote objects that no longer have a local counterpart.
"""

__version__ = "1.0.0"
