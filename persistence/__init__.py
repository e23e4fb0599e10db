"""
Flat-file persistence for park records.
"""
from .records import AssignmentRecord, RecordStore, replay_assignments

__all__ = ["AssignmentRecord", "RecordStore", "replay_assignments"]
