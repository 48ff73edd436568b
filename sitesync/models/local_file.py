"""
Local file model
"""
import os


class LocalFile:
    """
    A file found under the sync root.

    The relative path (always ``/``-separated) is the join key against
    remote object keys.
    """

    def __init__(self, relative_path, absolute_path):
        """
        Initialize a LocalFile.

        Args:
            relative_path: Path relative to the sync root, ``/``-separated
            absolute_path: Full path used to read the file
        """
        self.relative_path = relative_path
        self.absolute_path = absolute_path

    @classmethod
    def from_path(cls, root, full_path):
        """Build a LocalFile from a walked path and the sync root."""
        rel = os.path.relpath(full_path, root)
        return cls(rel.replace(os.sep, '/'), os.path.abspath(full_path))

    def to_dict(self):
        """Serialize to dictionary"""
        return {
            "relative_path": self.relative_path,
            "absolute_path": self.absolute_path,
        }

    def __eq__(self, other):
        if not isinstance(other, LocalFile):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"LocalFile({self.relative_path!r})"
