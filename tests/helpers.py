"""
Builders and test doubles shared by the test modules.
"""
from __future__ import annotations

from typing import List, Sequence

from draft_models import Participant, SkillCategory


def make_participant(name: str, category: SkillCategory = SkillCategory.BACKEND, *, captain: bool = False) -> Participant:
    return Participant(
        name=name,
        department="Engineering",
        raw_skills="",
        skill_category=category,
        is_captain=captain,
        email=f"{name.lower()}@example.com",
    )


class RecordingChoice:
    """Deterministic choice source: always picks ``seq[pick]`` and records what it saw."""

    def __init__(self, pick: int = 0) -> None:
        self.pick = pick
        self.seen: List[Sequence] = []

    def choice(self, seq):
        self.seen.append(list(seq))
        return seq[self.pick]
