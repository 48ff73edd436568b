"""
Content-Type lookup for uploaded objects
"""
import os

DEFAULT_CONTENT_TYPE = 'application/octet-stream'

# Suffixes stripped before the lookup, so "app.js.gz" resolves as "app.js"
COMPRESSION_SUFFIXES = ('.gz',)

CONTENT_TYPES = {
    '': 'text/html',
    '.htm': 'text/html',
    '.html': 'text/html',
    '.png': 'image/png',
    '.jpg': 'image/jpeg',
    '.jpeg': 'image/jpeg',
    '.js': 'text/javascript',
    '.css': 'text/css',
    '.svg': 'image/svg+xml',
}


def content_type(name):
    """
    Derive a MIME type from a file name or object key.

    Args:
        name: File name, relative path or S3 key

    Returns:
        MIME type string, ``application/octet-stream`` when unknown
    """
    base = os.path.basename(name)
    root, ext = os.path.splitext(base)
    if ext in COMPRESSION_SUFFIXES:
        ext = os.path.splitext(root)[1]

    return CONTENT_TYPES.get(ext, DEFAULT_CONTENT_TYPE)
