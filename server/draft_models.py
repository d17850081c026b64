"""
draft_models.py
===============

Definitions of core domain objects used by the team draft.  These
classes encapsulate participant data and team membership, providing a
structured and type-safe way to represent people in the draft.

The design uses lightweight dataclasses: a frozen one for the immutable
value object (`Participant`) and a regular one for mutable state (`Team`).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class SkillCategory(str, Enum):
    """Broad skill bucket inferred from a participant's free-text skills."""

    FRONTEND = "frontend"
    BACKEND = "backend"
    MOBILE = "mobile"
    FULLSTACK = "fullstack"


@dataclass(frozen=True)
class Participant:
    """Represents one person on the roster.

    Attributes
    ----------
    name : str
        Display name.  Names are unique within a roster and act as the
        identity key.
    department : str
        Department the participant belongs to.
    raw_skills : str
        The skills column exactly as it was supplied.
    skill_category : SkillCategory
        Category derived from ``raw_skills``.
    is_captain : bool
        Captains lead a team and are never part of the draft pool.
    email : str
        Contact address, empty when not supplied.
    """

    name: str
    department: str
    raw_skills: str
    skill_category: SkillCategory
    is_captain: bool
    email: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "department": self.department,
            "rawSkills": self.raw_skills,
            "skillCategory": self.skill_category.value,
            "isCaptain": self.is_captain,
            "email": self.email,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participant":
        is_captain = data.get("isCaptain", False)
        if not isinstance(is_captain, bool):
            raise ValueError(f"isCaptain must be a boolean, got {is_captain!r}")
        return cls(
            name=str(data["name"]),
            department=str(data["department"]),
            raw_skills=str(data.get("rawSkills") or ""),
            skill_category=SkillCategory(data["skillCategory"]),
            is_captain=is_captain,
            email=str(data.get("email") or ""),
        )


@dataclass
class SkillBalance:
    """Per-category member counts for a single team."""

    frontend: int = 0
    backend: int = 0
    mobile: int = 0
    fullstack: int = 0

    @classmethod
    def of(cls, members: List[Participant]) -> "SkillBalance":
        balance = cls()
        for member in members:
            attr = member.skill_category.value
            setattr(balance, attr, getattr(balance, attr) + 1)
        return balance

    @property
    def needs_frontend(self) -> bool:
        return self.frontend < self.backend

    @property
    def needs_backend(self) -> bool:
        return self.backend < self.frontend


@dataclass
class Team:
    """A captain and the members drafted onto their team so far.

    ``members`` only grows during a draft; it is emptied when the draft is
    reset (by building a fresh team).
    """

    captain: Participant
    members: List[Participant] = field(default_factory=list)

    def add_member(self, participant: Participant) -> None:
        self.members.append(participant)

    @property
    def balance(self) -> SkillBalance:
        return SkillBalance.of(self.members)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "captain": self.captain.to_dict(),
            "members": [m.to_dict() for m in self.members],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        return cls(
            captain=Participant.from_dict(data["captain"]),
            members=[Participant.from_dict(m) for m in data.get("members", [])],
        )
