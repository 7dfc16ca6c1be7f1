"""
Scenario Registry — training scenario definitions.

Behavioral Contract:
- Any caller may create a scenario and becomes its creator
- Only the creator may update it; existence is checked first
- An update replaces all content fields, bumps ``updated_at``, and keeps
  ``created_by`` and ``created_at`` untouched
- Scenarios are never deleted
"""

import logging
from threading import Lock
from typing import Dict, List, Optional

from medsim_registry.clock import Clock, system_clock
from medsim_registry.models.result import FailureKind, OperationResult
from medsim_registry.models.scenario import ScenarioRecord

logger = logging.getLogger(__name__)


class ScenarioRegistry:
    """In-memory keyed store of scenario definitions."""

    def __init__(self, clock: Clock = system_clock):
        self._clock = clock
        self._scenarios: Dict[str, ScenarioRecord] = {}
        self._lock = Lock()

    def create(
        self,
        caller: str,
        scenario_id: str,
        name: str,
        description: str,
        difficulty: int,
        specialties: List[str],
        now: Optional[int] = None,
    ) -> OperationResult:
        """Define a new scenario owned by ``caller``."""
        with self._lock:
            if scenario_id in self._scenarios:
                logger.debug(
                    "scenario create rejected",
                    extra={"data": {"scenario": scenario_id, "error": FailureKind.ALREADY_EXISTS.value}},
                )
                return OperationResult.failure(FailureKind.ALREADY_EXISTS)

            current_time = self._clock() if now is None else now
            self._scenarios[scenario_id] = ScenarioRecord(
                name=name,
                description=description,
                difficulty=difficulty,
                specialties=specialties,
                created_by=caller,
                created_at=current_time,
                updated_at=current_time,
                active=True,
            )

        logger.info(
            "scenario created",
            extra={"data": {"scenario": scenario_id, "created_by": caller}},
        )
        return OperationResult.success(scenario_id)

    def update(
        self,
        caller: str,
        scenario_id: str,
        name: str,
        description: str,
        difficulty: int,
        specialties: List[str],
        now: Optional[int] = None,
    ) -> OperationResult:
        """Replace a scenario's content. Creator only."""
        with self._lock:
            existing = self._scenarios.get(scenario_id)
            if existing is None:
                failure = FailureKind.NOT_FOUND
            elif existing.created_by != caller:
                failure = FailureKind.UNAUTHORIZED
            else:
                failure = None
            if failure:
                logger.debug(
                    "scenario update rejected",
                    extra={"data": {"caller": caller, "scenario": scenario_id, "error": failure.value}},
                )
                return OperationResult.failure(failure)

            current_time = self._clock() if now is None else now
            self._scenarios[scenario_id] = ScenarioRecord(
                name=name,
                description=description,
                difficulty=difficulty,
                specialties=specialties,
                created_by=existing.created_by,
                created_at=existing.created_at,
                updated_at=current_time,
                active=True,
            )

        logger.info("scenario updated", extra={"data": {"scenario": scenario_id}})
        return OperationResult.success(True)

    def get(self, scenario_id: str) -> Optional[ScenarioRecord]:
        with self._lock:
            record = self._scenarios.get(scenario_id)
        return record.model_copy(deep=True) if record else None
