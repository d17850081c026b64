from pydantic import BaseModel, Field
from typing import Dict, List, Optional


class ParticipantOut(BaseModel):
    name: str
    department: str
    skills: str
    skill_category: str
    is_captain: bool
    email: str

class TeamOut(BaseModel):
    captain: ParticipantOut
    members: List[ParticipantOut]
    skill_counts: Dict[str, int]

class StateOut(BaseModel):
    phase: str
    teams: List[TeamOut]
    available: List[ParticipantOut]
    active_team_index: int
    current_captain: Optional[str] = None
    pending: Optional[ParticipantOut] = None
    complete: bool

class RosterUploadResponse(BaseModel):
    participants: int
    captains: int
    restored: bool
    state: StateOut

class WheelSegment(BaseModel):
    option: str
    background_color: str
    text_color: str

class WheelOut(BaseModel):
    items: List[WheelSegment]
    target_index: Optional[int] = None
    spinning: bool
    spin_duration: float = Field(..., gt=0)

class SpinResponse(BaseModel):
    complete: bool
    target_index: Optional[int] = None
    wheel: WheelOut

class ConfirmResponse(BaseModel):
    drafted: ParticipantOut
    team_captain: str
    state: StateOut
