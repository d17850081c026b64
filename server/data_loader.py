"""
data_loader.py
================

This module provides utilities for loading and cleaning a team draft
roster.  It reads the participants CSV exported from the signup form,
drops rows that lack the fields a participant needs, infers a skill
category from the free-text skills column and returns a list of
:class:`draft_models.Participant` objects ready to seed a draft.

The main entry point is :func:`parse_roster_csv`.

Example
-------

```python
from data_loader import parse_roster_csv

participants = parse_roster_csv("/path/to/participants.csv")
captains = [p for p in participants if p.is_captain]
```
"""

from __future__ import annotations

import io
import logging
import os
from typing import BinaryIO, List, TextIO, Union

import pandas as pd

from draft_models import Participant, SkillCategory

logger = logging.getLogger(__name__)

NAME_COL = "Name"
DEPARTMENT_COL = "Department"
SKILLS_COL = "Skills"
CAPTAIN_COL = "Is captain?"
EMAIL_COL = "Email Address"

REQUIRED_COLUMNS = (NAME_COL, DEPARTMENT_COL)
OPTIONAL_COLUMNS = (SKILLS_COL, CAPTAIN_COL, EMAIL_COL)

# Only this exact value marks a captain ("yes", "YES", " Yes" do not).
CAPTAIN_MARKER = "Yes"

RosterSource = Union[str, os.PathLike, bytes, BinaryIO, TextIO]

_SYNONYMS = (
    ("node.js", "nodejs"),
    ("node js", "nodejs"),
    ("reactjs", "react"),
    ("react.js", "react"),
    ("react js", "react"),
)

MOBILE_KEYWORDS = ("react native", "react-native", "flutter", "ios", "android", "native")
# Trailing spaces are word boundaries: "java " must not match "javascript".
BACKEND_KEYWORDS = (
    "nodejs",
    "node ",
    "php",
    "python",
    "java ",
    "flask",
    "fastapi",
    "fast api",
    "go ",
    "golang",
    "nest",
    "express",
)
FRONTEND_KEYWORDS = ("next", "vue", "angular", "html", "css", "webflow")
GENERAL_KEYWORDS = ("typescript", "javascript")


class RosterIngestionError(Exception):
    """Raised when a roster file cannot be read as a participants table."""


def normalize_skills(text: str) -> str:
    """Lowercase, trim and collapse known spelling variants of a skill list."""
    normalized = (text or "").lower().strip()
    for variant, canonical in _SYNONYMS:
        normalized = normalized.replace(variant, canonical)
    return normalized


def _contains_any(text: str, keywords) -> bool:
    return any(k in text for k in keywords)


def classify_skills(text: str) -> SkillCategory:
    """Infer a :class:`SkillCategory` from free-text skills.

    Three independent signals are detected by substring search on the
    normalised text, then resolved in a fixed order:

    - backend and frontend -> ``fullstack``
    - backend only -> ``backend``
    - frontend only -> ``frontend``
    - mobile -> ``mobile``
    - anything else (including plain TypeScript/JavaScript and empty
      text) -> ``backend``

    Parameters
    ----------
    text : str
        The raw skills cell, e.g. ``"React, Node.js"``.

    Returns
    -------
    SkillCategory
        The inferred category.
    """
    skills = normalize_skills(text)

    has_mobile = _contains_any(skills, MOBILE_KEYWORDS)
    has_backend = _contains_any(skills, BACKEND_KEYWORDS)
    plain_react = (
        "react" in skills
        and "react native" not in skills
        and "react-native" not in skills
    )
    has_frontend = plain_react or _contains_any(skills, FRONTEND_KEYWORDS)

    if has_backend and has_frontend:
        return SkillCategory.FULLSTACK
    if has_backend:
        return SkillCategory.BACKEND
    if has_frontend:
        return SkillCategory.FRONTEND
    if has_mobile:
        return SkillCategory.MOBILE
    if _contains_any(skills, GENERAL_KEYWORDS):
        return SkillCategory.BACKEND
    return SkillCategory.BACKEND


def _read_roster_frame(source: RosterSource) -> pd.DataFrame:
    """Internal helper to read the raw CSV into a string-typed DataFrame.

    Every cell is read as text; blank cells become empty strings rather
    than NaN so that the captain and skills columns compare literally.
    Any read failure is re-raised as :class:`RosterIngestionError`.
    """
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)
    try:
        df = pd.read_csv(source, dtype=str, keep_default_na=False)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError, ValueError, OSError) as exc:
        raise RosterIngestionError(f"could not parse roster CSV: {exc}") from exc
    return df.fillna("")


def _clean_roster(df: pd.DataFrame) -> pd.DataFrame:
    """Clean the raw roster DataFrame.

    - Fails if the ``Name`` or ``Department`` column is absent.
    - Adds empty optional columns that the file does not provide.
    - Strips whitespace from ``Name`` and ``Department`` and drops rows
      where either is empty.
    - Drops repeated names, keeping the first occurrence, since the name
      is the participant's identity.
    """
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise RosterIngestionError(f"roster CSV is missing required column(s): {', '.join(missing)}")

    df = df.copy()
    for col in OPTIONAL_COLUMNS:
        if col not in df.columns:
            df[col] = ""

    df[NAME_COL] = df[NAME_COL].astype(str).str.strip()
    df[DEPARTMENT_COL] = df[DEPARTMENT_COL].astype(str).str.strip()
    before = len(df)
    df = df[(df[NAME_COL] != "") & (df[DEPARTMENT_COL] != "")]
    dropped = before - len(df)
    if dropped:
        logger.info("Dropped %d roster row(s) without a name or department", dropped)

    dupes = df[df.duplicated(subset=[NAME_COL], keep="first")]
    if not dupes.empty:
        logger.warning("Ignoring duplicate roster name(s): %s", ", ".join(dupes[NAME_COL]))
        df = df.drop_duplicates(subset=[NAME_COL], keep="first")

    return df.reset_index(drop=True)


def parse_roster_csv(source: RosterSource) -> List[Participant]:
    """Load and return a list of ``Participant`` objects from a roster CSV.

    Parameters
    ----------
    source : str, path-like, bytes or file object
        The CSV to read.  Expected columns are ``Name``, ``Department``,
        ``Skills``, ``Is captain?`` and ``Email Address``.

    Returns
    -------
    List[Participant]
        Participants in file order.

    Raises
    ------
    RosterIngestionError
        If the input cannot be parsed.  No partial result is returned.
    """
    df = _clean_roster(_read_roster_frame(source))
    participants: List[Participant] = []
    for _, row in df.iterrows():
        skills = row.get(SKILLS_COL, "")
        participants.append(
            Participant(
                name=row[NAME_COL],
                department=row[DEPARTMENT_COL],
                raw_skills=skills,
                skill_category=classify_skills(skills),
                is_captain=row.get(CAPTAIN_COL, "") == CAPTAIN_MARKER,
                email=row.get(EMAIL_COL, ""),
            )
        )
    logger.info(
        "Loaded roster: %d participant(s), %d captain(s)",
        len(participants),
        sum(1 for p in participants if p.is_captain),
    )
    return participants
