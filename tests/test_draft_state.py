"""
Tests for DraftState: initialisation, commits, turn rotation, reset and
serialisation.
"""
from __future__ import annotations

import random
from collections import Counter

import pytest

from draft_models import Participant, SkillCategory
from draft_selection import select_candidate
from draft_state import DraftState
from helpers import make_participant


def _locations(state: DraftState) -> Counter:
    names = Counter(p.name for p in state.available_pool)
    for team in state.teams:
        names[team.captain.name] += 1
        names.update(m.name for m in team.members)
    return names


def test_from_roster_partitions_captains_and_pool(roster):
    state = DraftState.from_roster(roster)
    assert [t.captain.name for t in state.teams] == ["CaptainA", "CaptainB"]
    assert all(t.members == [] for t in state.teams)
    assert [p.name for p in state.available_pool] == ["P1", "P2"]
    assert state.active_team_index == 0
    assert not state.is_complete()


def test_from_roster_does_not_mutate_input(roster):
    before = list(roster)
    state = DraftState.from_roster(roster)
    state.commit(0)
    assert roster == before


def test_commit_moves_participant_and_advances_turn(roster):
    state = DraftState.from_roster(roster)
    assert state.commit(1) is True
    assert [m.name for m in state.teams[0].members] == ["P2"]
    assert state.teams[1].members == []
    assert [p.name for p in state.available_pool] == ["P1"]
    assert state.active_team_index == 1


def test_commit_rejects_out_of_range_index(roster):
    state = DraftState.from_roster(roster)
    snapshot = state.to_dict()
    assert state.commit(2) is False
    assert state.commit(-1) is False
    assert state.to_dict() == snapshot


def test_commit_on_complete_draft_is_noop(roster):
    state = DraftState.from_roster(roster)
    assert state.commit(0)
    assert state.commit(0)
    assert state.is_complete()
    assert state.active_team() is None
    snapshot = state.to_dict()
    assert state.commit(0) is False
    assert state.to_dict() == snapshot


def test_no_captains_is_complete_from_the_start():
    state = DraftState.from_roster([make_participant("Solo"), make_participant("Duo")])
    assert state.teams == []
    assert state.is_complete()
    assert state.commit(0) is False
    assert len(state.available_pool) == 2


def test_turn_rotation_returns_to_start(big_roster):
    state = DraftState.from_roster(big_roster)
    n_teams = len(state.teams)
    start = state.active_team_index
    for _ in range(n_teams):
        assert state.commit(0)
    assert state.active_team_index == start


def test_partition_and_monotonic_shrink_over_full_draft(big_roster):
    rng = random.Random(7)
    state = DraftState.from_roster(big_roster)
    total = len(big_roster)
    while not state.is_complete():
        pool_before = len(state.available_pool)
        sizes_before = [len(t.members) for t in state.teams]
        index = select_candidate(state, rng)
        assert state.commit(index)
        assert len(state.available_pool) == pool_before - 1
        sizes_after = [len(t.members) for t in state.teams]
        grown = [a - b for a, b in zip(sizes_after, sizes_before)]
        assert sorted(grown) == [0] * (len(grown) - 1) + [1]

        locations = _locations(state)
        assert set(locations.values()) == {1}
        assert sum(locations.values()) == total
        assert state.participant_count() == total

    assert state.available_pool == []
    assert sum(len(t.members) for t in state.teams) == 10


def test_teams_fill_round_robin(big_roster):
    state = DraftState.from_roster(big_roster)
    while state.commit(0):
        pass
    # 10 picks over 3 teams: 4, 3, 3
    assert [len(t.members) for t in state.teams] == [4, 3, 3]


def test_reset_discards_progress_and_is_idempotent(big_roster):
    state = DraftState.from_roster(big_roster)
    state.commit(0)
    state.commit(3)
    state.reset(big_roster)
    once = state.to_dict()
    state.reset(big_roster)
    assert state.to_dict() == once
    assert state == DraftState.from_roster(big_roster)


def test_team_balance_counts_member_categories(big_roster):
    state = DraftState.from_roster(big_roster)
    while state.commit(0):
        pass
    total = sum(
        (state.team_balance(i).frontend + state.team_balance(i).backend
         + state.team_balance(i).mobile + state.team_balance(i).fullstack)
        for i in range(len(state.teams))
    )
    assert total == 10


def test_serialisation_round_trip_mid_draft(roster):
    state = DraftState.from_roster(roster)
    state.commit(1)
    data = state.to_dict()
    assert data["activeTeamIndex"] == 1
    assert data["teams"][0]["members"][0] == {
        "name": "P2",
        "department": "Engineering",
        "rawSkills": "",
        "skillCategory": "backend",
        "isCaptain": False,
        "email": "p2@example.com",
    }
    assert [p["name"] for p in data["availablePool"]] == ["P1"]
    assert DraftState.from_dict(data) == state


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"teams": [], "availablePool": []},
        {"teams": "nope", "availablePool": [], "activeTeamIndex": 0},
        {
            "teams": [{"captain": {"name": "A", "department": "x", "skillCategory": "wizard"}}],
            "availablePool": [],
            "activeTeamIndex": 0,
        },
        {
            "teams": [{"captain": {"name": "A", "department": "x", "skillCategory": "backend"}}],
            "availablePool": [],
            "activeTeamIndex": 3,
        },
        {
            "teams": [
                {
                    "captain": {"name": "A", "department": "x", "skillCategory": "backend", "isCaptain": True},
                    "members": [{"name": "P", "department": "x", "skillCategory": "backend"}],
                }
            ],
            "availablePool": [{"name": "P", "department": "x", "skillCategory": "backend"}],
            "activeTeamIndex": 0,
        },
        {
            "teams": [{"captain": {"name": "A", "department": "x", "skillCategory": "backend", "isCaptain": True}}],
            "availablePool": [{"name": "B", "department": "x", "skillCategory": "backend", "isCaptain": True}],
            "activeTeamIndex": 0,
        },
        {
            "teams": [{"captain": {"name": "A", "department": "x", "skillCategory": "backend", "isCaptain": "false"}}],
            "availablePool": [],
            "activeTeamIndex": 0,
        },
        [],
    ],
)
def test_from_dict_rejects_malformed_payloads(payload):
    with pytest.raises(ValueError):
        DraftState.from_dict(payload)


@pytest.mark.parametrize("flag", ["false", "yes", 1, None])
def test_participant_captain_flag_must_be_boolean(flag):
    data = make_participant("A").to_dict()
    data["isCaptain"] = flag
    with pytest.raises(ValueError):
        Participant.from_dict(data)


def test_participant_without_captain_flag_is_not_captain():
    data = make_participant("A").to_dict()
    del data["isCaptain"]
    assert Participant.from_dict(data).is_captain is False


def test_mobile_participants_counted_in_balance():
    roster = [
        make_participant("Cap", captain=True),
        make_participant("M", SkillCategory.MOBILE),
    ]
    state = DraftState.from_roster(roster)
    state.commit(0)
    balance = state.team_balance(0)
    assert balance.mobile == 1
    assert not balance.needs_frontend and not balance.needs_backend
