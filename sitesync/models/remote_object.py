"""
Remote object model for entries of a bucket listing
"""


class RemoteObject:
    """
    One object currently stored in the destination bucket.

    ``etag`` is kept exactly as S3 returns it (quoted), decoding happens
    in the reconciler.
    """

    def __init__(self, key, etag, size=None, last_modified=None):
        self.key = key
        self.etag = etag
        self.size = size
        self.last_modified = last_modified

    @classmethod
    def from_s3(cls, data):
        """Build from an element of a ``list_objects`` ``Contents`` array."""
        return cls(
            key=data["Key"],
            etag=data.get("ETag"),
            size=data.get("Size"),
            last_modified=data.get("LastModified"),
        )

    def to_dict(self):
        """Serialize to dictionary"""
        data = {"key": self.key, "etag": self.etag}
        if self.size is not None:
            data["size"] = self.size
        if self.last_modified is not None:
            data["last_modified"] = str(self.last_modified)
        return data

    def __repr__(self):
        return f"RemoteObject({self.key!r}, etag={self.etag!r})"
