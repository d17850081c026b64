"""
draft_utils.py
==============

Helper functions for presenting the draft, such as building the
segments of the selection wheel and the labels shown for each team's
skill mix.  Nothing here changes draft state.
"""

from __future__ import annotations

from typing import Dict, List, Sequence

from draft_models import Participant, SkillBalance, SkillCategory

WHEEL_LABEL_MAX = 15
WHEEL_COLORS = ("#FFD6D6", "#D6E4FF", "#FFE4CC", "#D6FFD6", "#E6D6FF")
WHEEL_TEXT_COLOR = "#000000"
# Seconds; the confirm action stays disabled until the spin reports completion.
WHEEL_SPIN_DURATION = 0.8

SKILL_BADGES: Dict[SkillCategory, str] = {
    SkillCategory.FRONTEND: "FE",
    SkillCategory.BACKEND: "BE",
    SkillCategory.MOBILE: "Mobile",
    SkillCategory.FULLSTACK: "FS",
}


def wheel_label(name: str, max_len: int = WHEEL_LABEL_MAX) -> str:
    """Return ``name`` truncated to ``max_len`` characters plus an ellipsis."""
    if len(name) > max_len:
        return name[:max_len] + "..."
    return name


def wheel_segments(pool: Sequence[Participant]) -> List[Dict[str, str]]:
    """Build one wheel segment per available participant.

    Segment order matches the pool, so a selection index from
    :func:`draft_selection.select_candidate` is also the segment the
    wheel has to land on.

    Parameters
    ----------
    pool : Sequence[Participant]
        The draft state's available pool.

    Returns
    -------
    List[Dict[str, str]]
        ``{"option", "background_color", "text_color"}`` per participant.
    """
    return [
        {
            "option": wheel_label(p.name),
            "background_color": WHEEL_COLORS[i % len(WHEEL_COLORS)],
            "text_color": WHEEL_TEXT_COLOR,
        }
        for i, p in enumerate(pool)
    ]


def balance_badges(balance: SkillBalance) -> Dict[str, int]:
    """Return badge label -> count, always showing FE/BE and others when non-zero."""
    badges = {
        SKILL_BADGES[SkillCategory.FRONTEND]: balance.frontend,
        SKILL_BADGES[SkillCategory.BACKEND]: balance.backend,
    }
    if balance.mobile:
        badges[SKILL_BADGES[SkillCategory.MOBILE]] = balance.mobile
    if balance.fullstack:
        badges[SKILL_BADGES[SkillCategory.FULLSTACK]] = balance.fullstack
    return badges
