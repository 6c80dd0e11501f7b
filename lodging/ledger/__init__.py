"""
Ledger - committed assignments, suggestions and undo/redo history.

This package contains:
- AssignmentLedger: the only writer of the guest <-> bed mapping
- HistoryState / HistoryStack: bounded snapshot stacks
- serialization: plain-data dump/load for an external storage layer
"""

from .history import HistoryStack, HistoryState
from .ledger import AssignmentLedger
from .serialization import (
    assignments_to_pairs,
    dump_ledger,
    history_from_dicts,
    history_to_dicts,
    load_ledger,
    pairs_to_assignments,
)

__all__ = [
    "AssignmentLedger",
    "HistoryStack",
    "HistoryState",
    "assignments_to_pairs",
    "dump_ledger",
    "history_from_dicts",
    "history_to_dicts",
    "load_ledger",
    "pairs_to_assignments",
]
