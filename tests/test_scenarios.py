"""Tests for the Scenario Registry and Session Ledger."""

import pytest

from medsim_registry.clock import ManualClock
from medsim_registry.models.common import revise
from medsim_registry.models.result import FailureKind
from medsim_registry.models.session import SessionState
from medsim_registry.scenarios.registry import ScenarioRegistry
from medsim_registry.sessions.ledger import SessionLedger

CREATOR = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"
OTHER = "ST2PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"
T0 = 1_700_000_000_000


def _create(registry: ScenarioRegistry, caller: str = CREATOR, scenario_id: str = "scenario-123"):
    return registry.create(
        caller,
        scenario_id,
        "Cardiac Arrest Management",
        "Simulation of cardiac arrest in an adult patient",
        3,
        ["Cardiology", "Emergency Medicine"],
    )


class TestScenarioRegistry:
    def setup_method(self):
        self.clock = ManualClock(start=T0)
        self.registry = ScenarioRegistry(clock=self.clock)

    def test_create(self):
        result = _create(self.registry)
        assert result.ok
        assert result.value == "scenario-123"

        scenario = self.registry.get("scenario-123")
        assert scenario.created_by == CREATOR
        assert scenario.created_at == T0
        assert scenario.updated_at == T0
        assert scenario.active is True
        assert scenario.specialties == ["Cardiology", "Emergency Medicine"]

    def test_duplicate_create_rejected(self):
        _create(self.registry)
        before = self.registry.get("scenario-123")
        result = _create(self.registry, caller=OTHER)
        assert result.error == FailureKind.ALREADY_EXISTS
        assert self.registry.get("scenario-123") == before

    def test_update_by_creator(self):
        _create(self.registry)
        self.clock.advance(5_000)

        result = self.registry.update(
            CREATOR,
            "scenario-123",
            "Advanced Cardiac Arrest Management",
            "Updated description",
            4,
            ["Cardiology", "Emergency Medicine", "Critical Care"],
        )
        assert result.ok

        scenario = self.registry.get("scenario-123")
        assert scenario.name == "Advanced Cardiac Arrest Management"
        assert scenario.difficulty == 4
        assert scenario.updated_at == T0 + 5_000
        assert scenario.created_at == T0
        assert scenario.created_by == CREATOR

    def test_update_unauthorized_leaves_record(self):
        _create(self.registry)
        before = self.registry.get("scenario-123")
        result = self.registry.update(OTHER, "scenario-123", "Hijacked", "x", 1, [])
        assert result.error == FailureKind.UNAUTHORIZED
        assert self.registry.get("scenario-123") == before

    def test_update_missing(self):
        result = self.registry.update(CREATOR, "scenario-999", "X", "Y", 1, [])
        assert result.error == FailureKind.NOT_FOUND

    def test_many_updates_preserve_creation_fields(self):
        _create(self.registry)
        for difficulty in range(1, 6):
            self.clock.advance(1_000)
            assert self.registry.update(
                CREATOR, "scenario-123", f"Rev {difficulty}", "d", difficulty, []
            ).ok

        scenario = self.registry.get("scenario-123")
        assert scenario.created_by == CREATOR
        assert scenario.created_at == T0
        assert scenario.updated_at == T0 + 5_000
        assert scenario.name == "Rev 5"


class TestSessionLedger:
    def setup_method(self):
        self.clock = ManualClock(start=T0)
        self.scenarios = ScenarioRegistry(clock=self.clock)
        self.ledger = SessionLedger(self.scenarios, clock=self.clock)
        _create(self.scenarios)

    def test_start_session(self):
        result = self.ledger.start_session(
            OTHER, "session-123", "scenario-123", ["student-1", "student-2"]
        )
        assert result.ok
        assert result.value == "session-123"

        session = self.ledger.get("session-123")
        assert session.instructor == OTHER
        assert session.start_time == T0
        assert session.end_time == 0
        assert session.completed is False
        assert session.state == SessionState.OPEN
        assert session.participants == ["student-1", "student-2"]

    def test_start_on_missing_scenario(self):
        result = self.ledger.start_session(CREATOR, "session-123", "scenario-999", [])
        assert result.error == FailureKind.NOT_FOUND
        assert self.ledger.get("session-123") is None

    def test_start_on_inactive_scenario(self):
        # No public operation retires a scenario yet; flip the stored flag directly.
        self.scenarios._scenarios["scenario-123"] = revise(
            self.scenarios._scenarios["scenario-123"], active=False
        )
        result = self.ledger.start_session(CREATOR, "session-123", "scenario-123", [])
        assert result.error == FailureKind.NOT_FOUND

    def test_scenario_checked_before_session_existence(self):
        self.ledger.start_session(CREATOR, "session-123", "scenario-123", [])
        result = self.ledger.start_session(CREATOR, "session-123", "scenario-999", [])
        assert result.error == FailureKind.NOT_FOUND

    def test_duplicate_session_rejected(self):
        self.ledger.start_session(CREATOR, "session-123", "scenario-123", ["a"])
        before = self.ledger.get("session-123")
        result = self.ledger.start_session(OTHER, "session-123", "scenario-123", ["b"])
        assert result.error == FailureKind.ALREADY_EXISTS
        assert self.ledger.get("session-123") == before

    def test_ledger_never_mutates_scenarios(self):
        before = self.scenarios.get("scenario-123")
        self.ledger.start_session(CREATOR, "session-123", "scenario-123", [])
        self.ledger.complete_session(CREATOR, "session-123")
        assert self.scenarios.get("scenario-123") == before

    def test_complete_session(self):
        self.ledger.start_session(CREATOR, "session-123", "scenario-123", [])
        self.clock.advance(30 * 60_000)

        result = self.ledger.complete_session(CREATOR, "session-123")
        assert result.ok

        session = self.ledger.get("session-123")
        assert session.completed is True
        assert session.end_time == T0 + 30 * 60_000
        assert session.state == SessionState.COMPLETED

    def test_complete_twice_rejected(self):
        self.ledger.start_session(CREATOR, "session-123", "scenario-123", [])
        self.clock.advance(1_000)
        self.ledger.complete_session(CREATOR, "session-123")
        self.clock.advance(1_000)

        result = self.ledger.complete_session(CREATOR, "session-123")
        assert result.error == FailureKind.SESSION_ALREADY_COMPLETED
        assert self.ledger.get("session-123").end_time == T0 + 1_000

    def test_complete_by_other_instructor(self):
        self.ledger.start_session(CREATOR, "session-123", "scenario-123", [])
        result = self.ledger.complete_session(OTHER, "session-123")
        assert result.error == FailureKind.UNAUTHORIZED
        assert self.ledger.get("session-123").completed is False

    def test_unauthorized_checked_before_completed(self):
        self.ledger.start_session(CREATOR, "session-123", "scenario-123", [])
        self.ledger.complete_session(CREATOR, "session-123")
        assert self.ledger.complete_session(OTHER, "session-123").error == FailureKind.UNAUTHORIZED

    def test_complete_missing(self):
        assert self.ledger.complete_session(CREATOR, "session-999").error == FailureKind.NOT_FOUND

    @pytest.mark.parametrize("participants", [[], ["solo"], ["b", "a", "b"]])
    def test_participants_kept_verbatim(self, participants):
        self.ledger.start_session(CREATOR, "session-123", "scenario-123", participants)
        assert self.ledger.get("session-123").participants == participants
