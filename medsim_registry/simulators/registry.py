"""
Simulator Registry — equipment inventory with per-record ownership.

Behavioral Contract:
- Any caller may register a simulator and becomes its permanent owner
- Only the owner may record maintenance or change status
- Existence is checked before ownership
- Status values are stored verbatim; only the empty string is refused
"""

import logging
from threading import Lock
from typing import Dict, List, Optional

from medsim_registry.clock import Clock, system_clock
from medsim_registry.models.common import revise
from medsim_registry.models.result import FailureKind, OperationResult
from medsim_registry.models.simulator import STATUS_ACTIVE, OwnerRecord, SimulatorRecord

logger = logging.getLogger(__name__)


class SimulatorRegistry:
    """In-memory keyed store of simulators and their owners."""

    def __init__(self, clock: Clock = system_clock):
        self._clock = clock
        self._simulators: Dict[str, SimulatorRecord] = {}
        self._owners: Dict[str, OwnerRecord] = {}
        self._lock = Lock()

    def register(
        self,
        caller: str,
        simulator_id: str,
        name: str,
        model: str,
        manufacturer: str,
        purchase_date: int,
        features: List[str],
        now: Optional[int] = None,
    ) -> OperationResult:
        """Add a simulator to the inventory, owned by ``caller``."""
        with self._lock:
            if simulator_id in self._simulators:
                logger.debug(
                    "simulator register rejected",
                    extra={"data": {"simulator": simulator_id, "error": FailureKind.ALREADY_EXISTS.value}},
                )
                return OperationResult.failure(FailureKind.ALREADY_EXISTS)

            current_time = self._clock() if now is None else now
            record = SimulatorRecord(
                name=name,
                model=model,
                manufacturer=manufacturer,
                purchase_date=purchase_date,
                last_maintenance=current_time,
                status=STATUS_ACTIVE,
                features=features,
            )
            owner = OwnerRecord(owner=caller)
            self._simulators[simulator_id] = record
            self._owners[simulator_id] = owner

        logger.info(
            "simulator registered",
            extra={"data": {"simulator": simulator_id, "owner": caller}},
        )
        return OperationResult.success(simulator_id)

    def _check_owner(self, caller: str, simulator_id: str) -> Optional[FailureKind]:
        """Caller must hold the lock."""
        if simulator_id not in self._simulators:
            return FailureKind.NOT_FOUND
        if self._owners[simulator_id].owner != caller:
            return FailureKind.UNAUTHORIZED
        return None

    def record_maintenance(
        self,
        caller: str,
        simulator_id: str,
        now: Optional[int] = None,
    ) -> OperationResult:
        """Stamp the simulator as maintained now."""
        with self._lock:
            failure = self._check_owner(caller, simulator_id)
            if failure:
                logger.debug(
                    "maintenance rejected",
                    extra={"data": {"caller": caller, "simulator": simulator_id, "error": failure.value}},
                )
                return OperationResult.failure(failure)
            current_time = self._clock() if now is None else now
            self._simulators[simulator_id] = revise(
                self._simulators[simulator_id], last_maintenance=current_time
            )

        logger.info(
            "simulator maintenance recorded",
            extra={"data": {"simulator": simulator_id, "at": current_time}},
        )
        return OperationResult.success(True)

    def set_status(self, caller: str, simulator_id: str, new_status: str) -> OperationResult:
        """Overwrite the simulator's status with any non-empty value."""
        with self._lock:
            failure = self._check_owner(caller, simulator_id)
            if failure:
                logger.debug(
                    "status change rejected",
                    extra={"data": {"caller": caller, "simulator": simulator_id, "error": failure.value}},
                )
                return OperationResult.failure(failure)
            self._simulators[simulator_id] = revise(
                self._simulators[simulator_id], status=new_status
            )

        logger.info(
            "simulator status changed",
            extra={"data": {"simulator": simulator_id, "status": new_status}},
        )
        return OperationResult.success(True)

    def get(self, simulator_id: str) -> Optional[SimulatorRecord]:
        with self._lock:
            record = self._simulators.get(simulator_id)
        return record.model_copy(deep=True) if record else None

    def get_owner(self, simulator_id: str) -> Optional[OwnerRecord]:
        with self._lock:
            return self._owners.get(simulator_id)
