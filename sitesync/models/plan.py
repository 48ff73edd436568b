"""
Reconciliation plan produced by a deploy run
"""


class ReconciliationPlan:
    """
    Partition of local and remote keys decided by one run.

    Every local key lands in exactly one of ``to_upload`` / ``unchanged``
    and every remote key in exactly one of ``unchanged`` / ``to_delete``
    (a remote key that was re-uploaded is in ``to_upload``).
    """

    def __init__(self, to_upload=None, unchanged=None, to_delete=None):
        self.to_upload = sorted(to_upload or [])
        self.unchanged = sorted(unchanged or [])
        self.to_delete = sorted(to_delete or [])

    def is_empty(self):
        """True when the run neither uploads nor deletes anything."""
        return not self.to_upload and not self.to_delete

    def summary(self):
        """One-line human-readable counts."""
        return (
            f"{len(self.to_upload)} uploaded, {len(self.unchanged)} unchanged, "
            f"{len(self.to_delete)} deleted"
        )

    def to_dict(self):
        """Serialize to dictionary"""
        return {
            "to_upload": list(self.to_upload),
            "unchanged": list(self.unchanged),
            "to_delete": list(self.to_delete),
        }

    def __repr__(self):
        return f"ReconciliationPlan({self.summary()})"
