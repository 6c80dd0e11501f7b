"""
Plain-data representation of the ledger for an external storage layer.

Assignments become ``[[guest_id, bed_id], ...]``; each history entry holds
the same pairs plus the dormitory snapshot dumped through pydantic. Nothing
here touches files.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from lodging.models import Dormitory

from .history import HistoryState
from .ledger import AssignmentLedger


def assignments_to_pairs(assignments: Mapping[str, str]) -> list[list[str]]:
    return [[guest_id, bed_id] for guest_id, bed_id in assignments.items()]


def pairs_to_assignments(pairs: Iterable[Any]) -> dict[str, str]:
    """Inverse of ``assignments_to_pairs``; malformed entries are skipped."""
    result: dict[str, str] = {}
    for entry in pairs or []:
        if not isinstance(entry, list | tuple) or len(entry) != 2:
            continue
        guest_id, bed_id = entry
        if isinstance(guest_id, str) and isinstance(bed_id, str):
            result[guest_id] = bed_id
    return result


def history_to_dicts(states: Iterable[HistoryState]) -> list[dict[str, Any]]:
    return [
        {
            "assignments": [list(pair) for pair in state.assignments],
            "dormitories": [d.model_dump(mode="json") for d in state.dormitories],
        }
        for state in states
    ]


def history_from_dicts(entries: Iterable[Any]) -> list[HistoryState]:
    """Rebuild snapshots. Raises pydantic ValidationError on a bad tree."""
    states: list[HistoryState] = []
    for entry in entries or []:
        if not isinstance(entry, dict):
            continue
        assignments = pairs_to_assignments(entry.get("assignments", []))
        dormitories = [Dormitory.model_validate(d) for d in entry.get("dormitories") or []]
        states.append(HistoryState(assignments=tuple(assignments.items()), dormitories=tuple(dormitories)))
    return states


def dump_ledger(ledger: AssignmentLedger) -> dict[str, Any]:
    return {
        "assignments": assignments_to_pairs(ledger.assignments),
        "assignment_history": history_to_dicts(ledger.history_items()),
    }


def load_ledger(ledger: AssignmentLedger, data: Mapping[str, Any]) -> None:
    """Restore committed assignments and undo history into ``ledger``.

    Only the most recent ``ledger.history_size`` snapshots are kept.
    """
    ledger.reset()
    ledger.load_assignments(pairs_to_assignments(data.get("assignments", [])).items())
    ledger.restore_history(history_from_dicts(data.get("assignment_history", [])))
