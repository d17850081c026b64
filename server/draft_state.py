"""
draft_state.py
==============

This module defines the ``DraftState`` class, which encapsulates the
current state of a team draft.  It keeps track of the captains' teams,
the pool of participants nobody has drafted yet, and whose turn it is.

Every participant from the roster lives in exactly one place: either
the available pool or one team (as captain or member).  ``commit`` is
the only operation that moves people around, and it always moves one
participant from the pool onto the active team before handing the turn
to the next captain.

The class does **not** decide who gets drafted; that lives in
:mod:`draft_selection`.

Usage
-----

```python
from data_loader import parse_roster_csv
from draft_selection import select_candidate
from draft_state import DraftState

roster = parse_roster_csv("participants.csv")
state = DraftState.from_roster(roster)

index = select_candidate(state)
if index is not None:
    state.commit(index)
```
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from draft_models import Participant, SkillBalance, Team


class DraftState:
    """Maintain the state of an ongoing team draft.

    Parameters
    ----------
    teams : List[Team]
        One team per captain, in draft order.
    available_pool : List[Participant]
        Non-captains that have not been drafted yet.
    active_team_index : int
        Index into ``teams`` of the captain currently picking.
    """

    def __init__(
        self,
        teams: List[Team],
        available_pool: List[Participant],
        active_team_index: int = 0,
    ) -> None:
        self.teams: List[Team] = teams
        self.available_pool: List[Participant] = available_pool
        self.active_team_index: int = active_team_index

    @classmethod
    def from_roster(cls, participants: Sequence[Participant]) -> "DraftState":
        """Build a fresh state: captains become teams, everyone else the pool.

        Input order is preserved for both teams and pool.  The caller's
        sequence is not modified.
        """
        teams = [Team(captain=p) for p in participants if p.is_captain]
        pool = [p for p in participants if not p.is_captain]
        return cls(teams=teams, available_pool=pool, active_team_index=0)

    def reset(self, participants: Sequence[Participant]) -> None:
        """Discard all draft progress and rebuild from the original roster."""
        fresh = DraftState.from_roster(participants)
        self.teams = fresh.teams
        self.available_pool = fresh.available_pool
        self.active_team_index = fresh.active_team_index

    def is_complete(self) -> bool:
        """Return True once nobody is left to draft (or no captain can pick)."""
        return not self.available_pool or not self.teams

    def active_team(self) -> Optional[Team]:
        """Return the team whose captain is picking, or None when complete."""
        if self.is_complete():
            return None
        return self.teams[self.active_team_index]

    def team_balance(self, team_index: int) -> SkillBalance:
        return self.teams[team_index].balance

    def participant_count(self) -> int:
        """Total people tracked by the state: captains, members and pool."""
        return len(self.available_pool) + sum(1 + len(t.members) for t in self.teams)

    def commit(self, index: int) -> bool:
        """Move the participant at ``index`` in the pool onto the active team.

        The turn then passes to the next captain (wrapping around).  If the
        draft is complete or ``index`` is out of range, nothing changes and
        False is returned.

        Parameters
        ----------
        index : int
            Position of the chosen participant in ``available_pool``.

        Returns
        -------
        bool
            True if the participant was drafted.
        """
        if self.is_complete():
            return False
        if not (0 <= index < len(self.available_pool)):
            return False
        participant = self.available_pool.pop(index)
        self.teams[self.active_team_index].add_member(participant)
        self.active_team_index = (self.active_team_index + 1) % len(self.teams)
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "teams": [t.to_dict() for t in self.teams],
            "availablePool": [p.to_dict() for p in self.available_pool],
            "activeTeamIndex": self.active_team_index,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DraftState":
        """Rebuild a state from :meth:`to_dict` output.

        Raises
        ------
        ValueError
            If the payload is not a valid serialised draft state.
        """
        try:
            teams = [Team.from_dict(t) for t in data["teams"]]
            pool = [Participant.from_dict(p) for p in data["availablePool"]]
            index = int(data["activeTeamIndex"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"invalid draft state payload: {exc}") from exc
        if teams and not (0 <= index < len(teams)):
            raise ValueError(f"activeTeamIndex {index} out of range for {len(teams)} team(s)")
        if not teams and index != 0:
            raise ValueError("activeTeamIndex must be 0 when there are no teams")
        if any(p.is_captain for p in pool):
            raise ValueError("captains cannot be in the available pool")
        seen = set()
        for person in [t.captain for t in teams] + [m for t in teams for m in t.members] + pool:
            if person.name in seen:
                raise ValueError(f"{person.name!r} appears more than once in the draft state")
            seen.add(person.name)
        return cls(teams=teams, available_pool=pool, active_team_index=index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DraftState):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (
            f"DraftState(teams={len(self.teams)}, available={len(self.available_pool)}, "
            f"active_team_index={self.active_team_index})"
        )
