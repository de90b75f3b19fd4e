from .snapshot_checks import SnapshotError, load_snapshot, validate_snapshot

__all__ = ["SnapshotError", "load_snapshot", "validate_snapshot"]
