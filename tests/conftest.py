"""
Shared fixtures for the team draft tests.
"""
from __future__ import annotations

from typing import List

import pytest

from draft_models import Participant, SkillCategory
from helpers import make_participant


@pytest.fixture
def roster() -> List[Participant]:
    return [
        make_participant("CaptainA", captain=True),
        make_participant("CaptainB", captain=True),
        make_participant("P1", SkillCategory.FRONTEND),
        make_participant("P2", SkillCategory.BACKEND),
    ]


@pytest.fixture
def big_roster() -> List[Participant]:
    captains = [make_participant(f"Cap{i}", captain=True) for i in range(3)]
    categories = [
        SkillCategory.FRONTEND,
        SkillCategory.BACKEND,
        SkillCategory.MOBILE,
        SkillCategory.FULLSTACK,
    ]
    others = [make_participant(f"P{i}", categories[i % 4]) for i in range(10)]
    return captains[:1] + others[:4] + captains[1:] + others[4:]
