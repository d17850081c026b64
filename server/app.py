# server/app.py
from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
import os, logging, random, uuid, time

from api_models import (
    ParticipantOut, TeamOut, StateOut, RosterUploadResponse,
    WheelSegment, WheelOut, SpinResponse, ConfirmResponse,
)
from data_loader import RosterIngestionError
from draft_manager import DraftManager, DraftPhase, DraftPhaseError, IngestionInProgressError
from draft_models import Participant, Team
from draft_storage import DraftStorage, JsonFileStore
from draft_utils import WHEEL_SPIN_DURATION, balance_badges, wheel_segments

STORE_PATH = os.getenv("TEAM_DRAFT_STORE_PATH", os.path.join("data", "team_draft_store.json"))
CORS_ORIGINS = [
    o.strip()
    for o in os.getenv(
        "TEAM_DRAFT_CORS_ORIGINS",
        "http://127.0.0.1:5173,http://localhost:5173,http://localhost:3000",
    ).split(",")
    if o.strip()
]
_seed = os.getenv("TEAM_DRAFT_SEED")
RNG = random.Random(int(_seed)) if _seed else None

app = FastAPI(title="Team Draft Assistant", version="0.1.0")
logger = logging.getLogger("uvicorn.error")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request, call_next):
    rid = str(uuid.uuid4())[:8]
    start = time.perf_counter()
    response = None
    try:
        logger.info("REQ %s %s %s", rid, request.method, request.url.path)
        response = await call_next(request)
        return response
    finally:
        dur = time.perf_counter() - start
        logger.info("RES %s %s %.2fs %s", rid, request.url.path, dur, getattr(response, "status_code", "?"))


manager = DraftManager(storage=DraftStorage(JsonFileStore(STORE_PATH)), rng=RNG)


def to_participant_out(p: Participant) -> ParticipantOut:
    return ParticipantOut(
        name=p.name,
        department=p.department,
        skills=p.raw_skills,
        skill_category=p.skill_category.value,
        is_captain=p.is_captain,
        email=p.email,
    )

def to_team_out(team: Team) -> TeamOut:
    return TeamOut(
        captain=to_participant_out(team.captain),
        members=[to_participant_out(m) for m in team.members],
        skill_counts=balance_badges(team.balance),
    )

def build_state_out(mgr: DraftManager) -> StateOut:
    state = mgr.state
    active = state.active_team()
    pending = mgr.pending_participant
    return StateOut(
        phase=mgr.phase.value,
        teams=[to_team_out(t) for t in state.teams],
        available=[to_participant_out(p) for p in state.available_pool],
        active_team_index=state.active_team_index,
        current_captain=active.captain.name if active else None,
        pending=to_participant_out(pending) if pending else None,
        complete=state.is_complete(),
    )

def build_wheel_out(mgr: DraftManager) -> WheelOut:
    return WheelOut(
        items=[WheelSegment(**s) for s in wheel_segments(mgr.state.available_pool)],
        target_index=mgr.pending_index,
        spinning=mgr.spinning,
        spin_duration=WHEEL_SPIN_DURATION,
    )

def require_state(mgr: DraftManager) -> None:
    if mgr.state is None:
        raise HTTPException(status_code=404, detail="no roster loaded")


@app.get("/health")
def health():
    return {"ok": True}

@app.post("/roster", response_model=RosterUploadResponse)
def upload_roster(file: UploadFile = File(...)):
    # Plain def: FastAPI runs it in the threadpool while the CSV is parsed and saved.
    mgr = manager
    restored = mgr.state is not None
    try:
        mgr.ingest(file.file)
    except IngestionInProgressError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except RosterIngestionError as exc:
        logger.warning("Error parsing CSV %s: %s", file.filename, exc)
        raise HTTPException(status_code=400, detail="Error parsing CSV file")

    return RosterUploadResponse(
        participants=len(mgr.roster),
        captains=sum(1 for p in mgr.roster if p.is_captain),
        restored=restored,
        state=build_state_out(mgr),
    )

@app.get("/state", response_model=StateOut)
def get_state():
    require_state(manager)
    return build_state_out(manager)

@app.get("/wheel", response_model=WheelOut)
def get_wheel():
    require_state(manager)
    return build_wheel_out(manager)

@app.post("/spin", response_model=SpinResponse)
def spin():
    require_state(manager)
    try:
        index = manager.spin()
    except DraftPhaseError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    return SpinResponse(
        complete=index is None,
        target_index=index,
        wheel=build_wheel_out(manager),
    )

@app.post("/spin/complete", response_model=StateOut)
def spin_complete():
    require_state(manager)
    manager.spin_complete()
    return build_state_out(manager)

@app.post("/confirm", response_model=ConfirmResponse)
def confirm():
    require_state(manager)
    if manager.phase is not DraftPhase.PENDING_CONFIRMATION:
        raise HTTPException(status_code=409, detail="nothing to confirm")
    try:
        drafted, team = manager.confirm()
    except DraftPhaseError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    return ConfirmResponse(
        drafted=to_participant_out(drafted),
        team_captain=team.captain.name,
        state=build_state_out(manager),
    )

@app.post("/reset", response_model=StateOut)
def reset():
    try:
        manager.reset()
    except DraftPhaseError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return build_state_out(manager)
