"""
Assignment Ledger - the authoritative guest <-> bed mapping.

Owns the committed assignment map, the suggestion overlay and the undo/redo
stacks. Every change to the map goes through ``_link`` / ``_unlink`` so the
map and ``Bed.assigned_guest_id`` always move together. Unknown guest or bed
ids make an operation a silent no-op: nothing changes and no history is
pushed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from lodging.inventory import Inventory
from lodging.models import HISTORY_SIZE, Bed

from .history import HistoryStack, HistoryState

if TYPE_CHECKING:
    from lodging.placement.engine import PlacementEngine

logger = logging.getLogger(__name__)


class AssignmentLedger:
    """Committed assignments, suggestions and history for one inventory."""

    def __init__(self, inventory: Inventory, history_size: int = HISTORY_SIZE) -> None:
        self.inventory = inventory
        self._assignments: dict[str, str] = {}
        self._suggestions: dict[str, str] = {}
        self._history = HistoryStack(maxlen=history_size)
        self._redo = HistoryStack(maxlen=history_size)

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def assignments(self) -> Mapping[str, str]:
        """Live read-only view of guest_id -> bed_id."""
        return MappingProxyType(self._assignments)

    @property
    def suggested_assignments(self) -> Mapping[str, str]:
        return MappingProxyType(self._suggestions)

    @property
    def history_size(self) -> int | None:
        return self._history.maxlen

    def assignment_for_guest(self, guest_id: str) -> str | None:
        return self._assignments.get(guest_id)

    def guest_for_bed(self, bed_id: str) -> str | None:
        for guest_id, assigned_bed_id in self._assignments.items():
            if assigned_bed_id == bed_id:
                return guest_id
        return None

    def guests_in_beds(self, bed_ids: Iterable[str]) -> list[str]:
        wanted = set(bed_ids)
        return [guest_id for guest_id, bed_id in self._assignments.items() if bed_id in wanted]

    def unassigned_guest_ids(self) -> list[str]:
        return [guest.id for guest in self.inventory.guests if guest.id not in self._assignments]

    @property
    def assigned_count(self) -> int:
        return len(self._assignments)

    @property
    def unassigned_count(self) -> int:
        return len(self.unassigned_guest_ids())

    @property
    def has_suggestions(self) -> bool:
        return bool(self._suggestions)

    def suggestion_count_for_beds(self, bed_ids: Iterable[str]) -> int:
        wanted = set(bed_ids)
        return sum(1 for bed_id in self._suggestions.values() if bed_id in wanted)

    @property
    def can_undo(self) -> bool:
        return bool(self._history)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def history_depth(self) -> int:
        return len(self._history)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def history_items(self) -> list[HistoryState]:
        """Undo snapshots, oldest first."""
        return self._history.items()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _link(self, guest_id: str, bed: Bed) -> None:
        self._assignments[guest_id] = bed.bed_id
        bed.assigned_guest_id = guest_id

    def _unlink(self, guest_id: str) -> None:
        bed_id = self._assignments.pop(guest_id, None)
        if bed_id is None:
            return
        bed = self.inventory.bed_by_id(bed_id)
        if bed is not None and bed.assigned_guest_id == guest_id:
            bed.assigned_guest_id = None

    def _drop_suggestions_on_bed(self, bed_id: str, keep: str | None = None) -> None:
        for guest_id, suggested_bed_id in list(self._suggestions.items()):
            if suggested_bed_id == bed_id and guest_id != keep:
                del self._suggestions[guest_id]

    def _capture(self) -> HistoryState:
        return HistoryState.capture(self._assignments, self.inventory.dormitories)

    def _save_to_history(self) -> None:
        self._history.push(self._capture())
        self._redo.clear()

    def _commit(self, guest_id: str, bed: Bed) -> None:
        """Place a guest on a bed, displacing whoever held it. No history."""
        if guest_id in self._assignments:
            self._unlink(guest_id)

        occupant = bed.assigned_guest_id
        if occupant and occupant != guest_id:
            if self._assignments.get(occupant) == bed.bed_id:
                self._unlink(occupant)
            else:
                bed.assigned_guest_id = None
            logger.debug(f"Displaced {occupant} from {bed.bed_id}")

        self._suggestions.pop(guest_id, None)
        self._drop_suggestions_on_bed(bed.bed_id)
        self._link(guest_id, bed)

    def _restore(self, state: HistoryState) -> None:
        self.inventory.replace_dormitories(state.restore_dormitories())
        # In place: views handed out by ``assignments`` must stay live
        self._assignments.clear()
        self._assignments.update(state.assignment_map())
        self._prune_suggestions()

    def _prune_suggestions(self) -> None:
        """Drop suggestions that now collide with committed state."""
        committed_beds = set(self._assignments.values())
        seen: set[str] = set()
        for guest_id, bed_id in list(self._suggestions.items()):
            if (
                guest_id in self._assignments
                or bed_id in committed_beds
                or bed_id in seen
                or self.inventory.bed_by_id(bed_id) is None
            ):
                del self._suggestions[guest_id]
            else:
                seen.add(bed_id)

    # ------------------------------------------------------------------
    # Committed assignments
    # ------------------------------------------------------------------

    def assign(self, guest_id: str, bed_id: str) -> bool:
        """Assign a guest to a bed, replacing the guest's previous bed.

        A different guest already on the bed is displaced to unassigned.
        Returns False when nothing changed.
        """
        guest = self.inventory.guest_by_id(guest_id)
        bed = self.inventory.bed_by_id(bed_id)
        if guest is None or bed is None:
            logger.debug(f"assign: unknown guest {guest_id} or bed {bed_id}")
            return False
        if self._assignments.get(guest_id) == bed_id and bed.assigned_guest_id == guest_id:
            return False

        self._save_to_history()
        self._commit(guest_id, bed)
        logger.debug(f"Assigned {guest_id} -> {bed_id}")
        return True

    def unassign(self, guest_id: str) -> bool:
        if guest_id not in self._assignments:
            return False

        self._save_to_history()
        self._unlink(guest_id)
        logger.debug(f"Unassigned {guest_id}")
        return True

    def unassign_from_beds(self, bed_ids: Iterable[str]) -> int:
        """Unassign everyone on the given beds (a bed, room or dormitory)."""
        guest_ids = self.guests_in_beds(bed_ids)
        if not guest_ids:
            return 0

        self._save_to_history()
        for guest_id in guest_ids:
            self._unlink(guest_id)
        logger.debug(f"Unassigned {len(guest_ids)} guest(s) from beds")
        return len(guest_ids)

    def swap(self, guest_id_1: str, guest_id_2: str) -> bool:
        """Exchange two guests' beds.

        When only one of them is assigned, the other takes that bed and the
        first becomes unassigned.
        """
        if guest_id_1 == guest_id_2:
            return False
        if self.inventory.guest_by_id(guest_id_1) is None or self.inventory.guest_by_id(guest_id_2) is None:
            logger.debug(f"swap: unknown guest {guest_id_1} or {guest_id_2}")
            return False

        bed_1 = self.inventory.bed_by_id(self._assignments.get(guest_id_1, ""))
        bed_2 = self.inventory.bed_by_id(self._assignments.get(guest_id_2, ""))
        if bed_1 is None and bed_2 is None:
            return False

        self._save_to_history()
        self._unlink(guest_id_1)
        self._unlink(guest_id_2)
        if bed_2 is not None:
            self._suggestions.pop(guest_id_1, None)
            self._link(guest_id_1, bed_2)
        if bed_1 is not None:
            self._suggestions.pop(guest_id_2, None)
            self._link(guest_id_2, bed_1)
        logger.debug(f"Swapped {guest_id_1} <-> {guest_id_2}")
        return True

    def clear_all(self) -> bool:
        if not self._assignments:
            return False

        self._save_to_history()
        self._assignments.clear()
        for bed in self.inventory.all_beds(active_only=False):
            bed.assigned_guest_id = None
        logger.debug("Cleared all assignments")
        return True

    def load_assignments(self, pairs: Iterable[tuple[str, str]]) -> int:
        """Replace the committed map from persisted pairs, without history.

        Pairs naming an unknown bed, or a bed already taken by an earlier
        pair, are skipped.
        """
        self._assignments.clear()
        for bed in self.inventory.all_beds(active_only=False):
            bed.assigned_guest_id = None

        for guest_id, bed_id in pairs:
            bed = self.inventory.bed_by_id(bed_id)
            if bed is None or bed.assigned_guest_id:
                logger.debug(f"load_assignments: skipping {guest_id} -> {bed_id}")
                continue
            if guest_id in self._assignments:
                self._unlink(guest_id)
            self._link(guest_id, bed)

        self._prune_suggestions()
        return len(self._assignments)

    # ------------------------------------------------------------------
    # Suggestions
    # ------------------------------------------------------------------

    def suggest(self, guest_id: str, bed_id: str) -> bool:
        """Propose a bed for an unassigned guest.

        Ignored when the bed is committed to someone. Any other guest's
        suggestion on the same bed is evicted.
        """
        if self.inventory.guest_by_id(guest_id) is None:
            return False
        bed = self.inventory.bed_by_id(bed_id)
        if bed is None or bed.assigned_guest_id or guest_id in self._assignments:
            return False

        self._drop_suggestions_on_bed(bed_id, keep=guest_id)
        self._suggestions[guest_id] = bed_id
        return True

    def set_suggestions(self, suggestions: Mapping[str, str]) -> int:
        """Replace the whole overlay. Invalid entries are dropped."""
        self._suggestions.clear()
        for guest_id, bed_id in suggestions.items():
            self.suggest(guest_id, bed_id)
        return len(self._suggestions)

    def clear_suggestions(self) -> None:
        self._suggestions.clear()

    def accept_suggestion(self, guest_id: str) -> bool:
        bed_id = self._suggestions.get(guest_id)
        if bed_id is None:
            return False
        if not self.assign(guest_id, bed_id):
            self._suggestions.pop(guest_id, None)
            return False
        return True

    def _accept(self, pairs: list[tuple[str, str]]) -> int:
        if not pairs:
            return 0

        self._save_to_history()
        accepted = 0
        for guest_id, bed_id in pairs:
            bed = self.inventory.bed_by_id(bed_id)
            self._suggestions.pop(guest_id, None)
            if bed is None or self.inventory.guest_by_id(guest_id) is None:
                continue
            self._commit(guest_id, bed)
            accepted += 1
        logger.debug(f"Accepted {accepted} suggestion(s)")
        return accepted

    def accept_all(self) -> int:
        """Commit every suggestion under a single history snapshot."""
        accepted = self._accept(list(self._suggestions.items()))
        self._suggestions.clear()
        return accepted

    def accept_suggestions_for_beds(self, bed_ids: Iterable[str]) -> int:
        wanted = set(bed_ids)
        return self._accept([(g, b) for g, b in self._suggestions.items() if b in wanted])

    def accept_suggestions_for_room(self, room_name: str) -> int:
        room = self.inventory.room_by_name(room_name)
        if room is None:
            return 0
        return self.accept_suggestions_for_beds(self.inventory.bed_ids_for_room(room))

    # ------------------------------------------------------------------
    # Auto-placement
    # ------------------------------------------------------------------

    def auto_place(self, engine: PlacementEngine) -> dict[str, str]:
        """Replace the overlay with a fresh engine run over all free beds."""
        self._suggestions.clear()
        suggestions = engine.place_all()
        self.set_suggestions(suggestions)
        logger.info(
            f"Auto-placement suggested {len(self._suggestions)} bed(s), "
            f"{self.unassigned_count - len(self._suggestions)} guest(s) left"
        )
        return dict(self._suggestions)

    def auto_place_room(self, engine: PlacementEngine, room_name: str) -> dict[str, str]:
        """Re-run placement for one room, keeping suggestions elsewhere."""
        room = self.inventory.room_by_name(room_name)
        if room is None:
            return {}

        room_bed_ids = set(self.inventory.bed_ids_for_room(room))
        for guest_id, bed_id in list(self._suggestions.items()):
            if bed_id in room_bed_ids:
                del self._suggestions[guest_id]

        new = engine.place_in_room(room, existing=dict(self._suggestions))
        for guest_id, bed_id in new.items():
            self.suggest(guest_id, bed_id)
        return {g: b for g, b in new.items() if self._suggestions.get(g) == b}

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def undo(self) -> bool:
        previous = self._history.pop()
        if previous is None:
            return False

        self._redo.push(self._capture())
        self._restore(previous)
        logger.debug(f"Undo ({len(self._history)} left)")
        return True

    def redo(self) -> bool:
        following = self._redo.pop()
        if following is None:
            return False

        self._history.push(self._capture())
        self._restore(following)
        logger.debug(f"Redo ({len(self._redo)} left)")
        return True

    def clear_history(self) -> None:
        self._history.clear()
        self._redo.clear()

    def restore_history(self, states: Iterable[HistoryState]) -> None:
        """Load persisted undo snapshots (oldest first); redo starts empty."""
        self.clear_history()
        for state in states:
            self._history.push(state)

    def reset(self) -> None:
        """Forget everything; used when guests or beds are rebuilt wholesale."""
        self._assignments.clear()
        self._suggestions.clear()
        self.clear_history()
        for bed in self.inventory.all_beds(active_only=False):
            bed.assigned_guest_id = None
        logger.debug("Ledger reset")

    # ------------------------------------------------------------------
    # Consistency
    # ------------------------------------------------------------------

    def check_invariants(self) -> list[str]:
        """Violations of the map/bed consistency rules; empty when sound."""
        problems: list[str] = []
        seen_beds: dict[str, str] = {}
        for guest_id, bed_id in self._assignments.items():
            bed = self.inventory.bed_by_id(bed_id)
            if bed is None:
                problems.append(f"{guest_id} assigned to missing bed {bed_id}")
            elif bed.assigned_guest_id != guest_id:
                problems.append(f"bed {bed_id} points at {bed.assigned_guest_id}, map says {guest_id}")
            if bed_id in seen_beds:
                problems.append(f"bed {bed_id} assigned to both {seen_beds[bed_id]} and {guest_id}")
            seen_beds[bed_id] = guest_id

        for bed in self.inventory.all_beds(active_only=False):
            if bed.assigned_guest_id and self._assignments.get(bed.assigned_guest_id) != bed.bed_id:
                problems.append(f"bed {bed.bed_id} holds {bed.assigned_guest_id} outside the map")

        suggested_beds: set[str] = set()
        for guest_id, bed_id in self._suggestions.items():
            if bed_id in seen_beds:
                problems.append(f"suggested bed {bed_id} for {guest_id} is already assigned")
            if bed_id in suggested_beds:
                problems.append(f"bed {bed_id} suggested more than once")
            suggested_beds.add(bed_id)

        maxlen = self._history.maxlen
        if maxlen is not None and len(self._history) > maxlen:
            problems.append(f"history holds {len(self._history)} entries, cap is {maxlen}")
        return problems
