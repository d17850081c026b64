# server/draft_manager.py
import logging
import threading
from enum import Enum
from typing import List, Optional, Tuple

from data_loader import RosterSource, parse_roster_csv
from draft_models import Participant, Team
from draft_selection import ChoiceSource, candidate_at, select_candidate
from draft_state import DraftState
from draft_storage import DraftStorage

logger = logging.getLogger(__name__)


class DraftPhase(str, Enum):
    NO_ROSTER = "no_roster"
    IDLE = "idle"
    SPINNING = "spinning"
    PENDING_CONFIRMATION = "pending_confirmation"
    COMPLETE = "complete"


class DraftPhaseError(Exception):
    """Raised when an action is not allowed in the current draft phase."""


class IngestionInProgressError(Exception):
    """Raised when a roster upload starts while another one is still running."""


class DraftManager:
    """
    Owns the one DraftState of this app plus the spin/confirm flow around it.
    Spin picks a candidate, spin_complete unlocks confirm, confirm commits.
    The state is saved after every transition that changes it.
    Every transition holds one lock, so concurrent requests cannot interleave
    a check with another request's mutation.
    """
    def __init__(self, storage: Optional[DraftStorage] = None, rng: Optional[ChoiceSource] = None):
        self.storage = storage
        self.rng = rng
        self.roster: List[Participant] = []
        self.state: Optional[DraftState] = None
        self.pending_index: Optional[int] = None
        self.spinning = False
        self._ingesting = False
        self._lock = threading.RLock()
        if storage is not None:
            self.roster = storage.load_roster() or []
            self.state = storage.load()
            if self.state is not None:
                logger.info("Restored saved draft: %r", self.state)

    @property
    def phase(self) -> DraftPhase:
        if self.state is None:
            return DraftPhase.NO_ROSTER
        if self.spinning:
            return DraftPhase.SPINNING
        if self.pending_index is not None:
            return DraftPhase.PENDING_CONFIRMATION
        if self.state.is_complete():
            return DraftPhase.COMPLETE
        return DraftPhase.IDLE

    @property
    def pending_participant(self) -> Optional[Participant]:
        if self.state is None:
            return None
        return candidate_at(self.state, self.pending_index)

    def _save(self) -> None:
        if self.storage is not None and self.state is not None:
            self.storage.save(self.state)

    def load_roster(self, participants: List[Participant]) -> DraftState:
        """Install a roster; a saved or in-progress draft takes precedence until reset."""
        with self._lock:
            self.roster = list(participants)
            if self.storage is not None:
                self.storage.save_roster(self.roster)
            if self.state is None:
                self.state = DraftState.from_roster(self.roster)
                self._save()
            return self.state

    def begin_ingestion(self) -> None:
        with self._lock:
            if self._ingesting:
                raise IngestionInProgressError("a roster upload is already in progress")
            self._ingesting = True

    def end_ingestion(self) -> None:
        with self._lock:
            self._ingesting = False

    def ingest(self, source: RosterSource) -> DraftState:
        """Parse a roster CSV and install it.  On failure nothing changes."""
        self.begin_ingestion()
        try:
            participants = parse_roster_csv(source)
            return self.load_roster(participants)
        finally:
            self.end_ingestion()

    def spin(self) -> Optional[int]:
        """Pick the next candidate and start the wheel.

        Returns the pool index the wheel must land on, or None when the
        draft is already complete.
        """
        with self._lock:
            if self.state is None:
                raise DraftPhaseError("no roster loaded")
            if self.spinning:
                raise DraftPhaseError("the wheel is already spinning")
            if self.pending_index is not None:
                raise DraftPhaseError("confirm the current selection before spinning again")
            index = select_candidate(self.state, self.rng)
            if index is None:
                return None
            self.pending_index = index
            self.spinning = True
            logger.info(
                "Spin for %s landed on %s",
                self.state.active_team().captain.name,
                self.state.available_pool[index].name,
            )
            return index

    def spin_complete(self) -> None:
        """The wheel stopped; the pending selection can now be confirmed."""
        with self._lock:
            self.spinning = False

    def confirm(self) -> Tuple[Participant, Team]:
        """Commit the pending selection; returns who was drafted and onto which team."""
        with self._lock:
            if self.state is None:
                raise DraftPhaseError("no roster loaded")
            if self.spinning or self.pending_index is None:
                raise DraftPhaseError("nothing to confirm")
            team = self.state.active_team()
            participant = self.state.available_pool[self.pending_index]
            if not self.state.commit(self.pending_index):
                raise DraftPhaseError("selection could not be committed")
            self.pending_index = None
            self._save()
        logger.info("Drafted %s to %s's team", participant.name, team.captain.name)
        return participant, team

    def reset(self) -> DraftState:
        with self._lock:
            # Without the roster a reset would wipe a restored draft.
            if not self.roster:
                raise DraftPhaseError("no roster loaded")
            if self.state is None:
                self.state = DraftState.from_roster(self.roster)
            else:
                self.state.reset(self.roster)
            self.pending_index = None
            self.spinning = False
            self._save()
            logger.info("Draft reset: %r", self.state)
            return self.state
