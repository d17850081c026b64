"""
draft_selection.py
==================

Candidate selection for the team draft.  Given the current
:class:`draft_state.DraftState`, this module works out which undrafted
participants would best balance the active captain's team and then draws
one of them at random.

The balancing heuristic is greedy and memoryless: it only compares the
active team's frontend and backend counts.  Randomness comes from an
injectable source (anything with a ``choice`` method, such as
``random.Random``) so tests can pin the outcome.
"""

from __future__ import annotations

import random
from typing import List, Optional, Protocol, Sequence, TypeVar

from draft_models import Participant, SkillBalance, SkillCategory
from draft_state import DraftState

T = TypeVar("T")


class ChoiceSource(Protocol):
    def choice(self, seq: Sequence[T]) -> T: ...


_default_rng = random.Random()


def preferred_categories(balance: SkillBalance) -> set[SkillCategory]:
    """Return the skill categories a team with ``balance`` should draft next.

    A team short on frontend (or backend) people prefers that category;
    fullstack people are always welcome.  A team with equal counts only
    prefers fullstack.  Mobile is never preferred, so mobile participants
    are only drafted through the whole-pool fallback.
    """
    wanted = {SkillCategory.FULLSTACK}
    if balance.needs_frontend:
        wanted.add(SkillCategory.FRONTEND)
    if balance.needs_backend:
        wanted.add(SkillCategory.BACKEND)
    return wanted


def find_best_candidates(state: DraftState) -> List[int]:
    """Return pool indices of the participants preferred for the active team.

    Indices refer to ``state.available_pool`` and keep its order.  The list
    is empty when the draft is complete or nobody in the pool matches.
    """
    team = state.active_team()
    if team is None:
        return []
    wanted = preferred_categories(team.balance)
    return [i for i, p in enumerate(state.available_pool) if p.skill_category in wanted]


def select_candidate(state: DraftState, rng: Optional[ChoiceSource] = None) -> Optional[int]:
    """Choose the next participant for the active captain.

    The selection process computes the preferred subset with
    :func:`find_best_candidates`, falls back to the whole available pool
    when that subset is empty, and then picks one entry uniformly at
    random.

    Parameters
    ----------
    state : DraftState
        The current draft state.  It is not modified.
    rng : ChoiceSource, optional
        Source of randomness.  Defaults to a module-level
        ``random.Random`` instance.

    Returns
    -------
    Optional[int]
        Index of the chosen participant within ``state.available_pool``,
        or ``None`` if the draft is complete.
    """
    if state.is_complete():
        return None
    candidates = find_best_candidates(state)
    if not candidates:
        candidates = list(range(len(state.available_pool)))
    return (rng or _default_rng).choice(candidates)


def candidate_at(state: DraftState, index: Optional[int]) -> Optional[Participant]:
    """Return the pool participant at ``index``, or None if it is not valid."""
    if index is None or not (0 <= index < len(state.available_pool)):
        return None
    return state.available_pool[index]
