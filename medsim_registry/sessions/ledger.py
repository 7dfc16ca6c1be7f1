"""
Session Ledger — practice sessions run against registered scenarios.

Lifecycle: open --complete--> completed. ``completed`` is terminal.

Behavioral Contract:
- A session can only start on a scenario that exists and is active
- The starting caller becomes the session's instructor, permanently
- Only that instructor may complete the session
- Completing twice is rejected, never silently accepted
- Reads the scenario registry; never writes to it
"""

import logging
from threading import Lock
from typing import Dict, List, Optional

from medsim_registry.clock import Clock, system_clock
from medsim_registry.models.common import revise
from medsim_registry.models.result import FailureKind, OperationResult
from medsim_registry.models.session import SessionRecord
from medsim_registry.scenarios.registry import ScenarioRegistry

logger = logging.getLogger(__name__)


class SessionLedger:
    """In-memory keyed store of practice sessions."""

    def __init__(self, scenarios: ScenarioRegistry, clock: Clock = system_clock):
        self._scenarios = scenarios
        self._clock = clock
        self._sessions: Dict[str, SessionRecord] = {}
        self._lock = Lock()

    @property
    def scenarios(self) -> ScenarioRegistry:
        """The scenario registry sessions are validated against. Read only."""
        return self._scenarios

    def _reject(self, operation: str, caller: str, session_id: str, kind: FailureKind) -> OperationResult:
        logger.debug(
            "session %s rejected",
            operation,
            extra={"data": {"caller": caller, "session": session_id, "error": kind.value}},
        )
        return OperationResult.failure(kind)

    def start_session(
        self,
        caller: str,
        session_id: str,
        scenario_id: str,
        participants: List[str],
        now: Optional[int] = None,
    ) -> OperationResult:
        """Open a session on an active scenario, led by ``caller``."""
        # Lock order: ledger, then scenarios (taken inside ScenarioRegistry.get).
        with self._lock:
            scenario = self._scenarios.get(scenario_id)
            if scenario is None or not scenario.active:
                return self._reject("start", caller, session_id, FailureKind.NOT_FOUND)
            if session_id in self._sessions:
                return self._reject("start", caller, session_id, FailureKind.ALREADY_EXISTS)

            current_time = self._clock() if now is None else now
            self._sessions[session_id] = SessionRecord(
                scenario_id=scenario_id,
                instructor=caller,
                start_time=current_time,
                end_time=0,
                participants=participants,
                completed=False,
            )

        logger.info(
            "session started",
            extra={"data": {
                "session": session_id,
                "scenario": scenario_id,
                "instructor": caller,
                "participants": len(participants),
            }},
        )
        return OperationResult.success(session_id)

    def complete_session(
        self,
        caller: str,
        session_id: str,
        now: Optional[int] = None,
    ) -> OperationResult:
        """Close an open session. Instructor only; rejects re-completion."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return self._reject("complete", caller, session_id, FailureKind.NOT_FOUND)
            if session.instructor != caller:
                return self._reject("complete", caller, session_id, FailureKind.UNAUTHORIZED)
            if session.completed:
                return self._reject(
                    "complete", caller, session_id, FailureKind.SESSION_ALREADY_COMPLETED
                )

            current_time = self._clock() if now is None else now
            self._sessions[session_id] = revise(
                session, end_time=current_time, completed=True
            )

        logger.info(
            "session completed",
            extra={"data": {"session": session_id, "ended": current_time}},
        )
        return OperationResult.success(True)

    def get(self, session_id: str) -> Optional[SessionRecord]:
        with self._lock:
            record = self._sessions.get(session_id)
        return record.model_copy(deep=True) if record else None
