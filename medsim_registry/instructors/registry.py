"""
Instructor Registry — certification records for simulation instructors.

Behavioral Contract:
- Every mutation requires the caller to be the current certification authority
- Authorization is checked before existence
- Records are created once per instructor identity and never deleted
- Renewal recomputes expiry from the renewal instant and reactivates the record
- Deactivation flips ``active`` and nothing else
"""

import logging
from threading import Lock
from typing import Dict, List, Optional

from medsim_registry.authority.store import AuthorityStore
from medsim_registry.clock import Clock, system_clock
from medsim_registry.models.common import MS_PER_DAY, revise
from medsim_registry.models.instructor import InstructorRecord
from medsim_registry.models.result import FailureKind, OperationResult

logger = logging.getLogger(__name__)


def _expiry(now: int, valid_for_days: int) -> int:
    if valid_for_days < 0:
        raise ValueError("valid_for_days must be non-negative")
    return now + valid_for_days * MS_PER_DAY


class InstructorRegistry:
    """In-memory keyed store of instructor certifications."""

    def __init__(self, authority_store: AuthorityStore, clock: Clock = system_clock):
        self._authority = authority_store
        self._clock = clock
        self._instructors: Dict[str, InstructorRecord] = {}
        self._lock = Lock()

    @property
    def authority_store(self) -> AuthorityStore:
        """The store whose holder may mutate this registry."""
        return self._authority

    def _reject(self, operation: str, caller: str, instructor_id: str, kind: FailureKind) -> OperationResult:
        logger.debug(
            "instructor %s rejected",
            operation,
            extra={"data": {"caller": caller, "instructor": instructor_id, "error": kind.value}},
        )
        return OperationResult.failure(kind)

    def register(
        self,
        caller: str,
        instructor_id: str,
        name: str,
        specialization: str,
        certification_level: int,
        valid_for_days: int,
        certifications: List[str],
        now: Optional[int] = None,
    ) -> OperationResult:
        """Certify a new instructor. Returns the instructor id."""
        with self._lock:
            if not self._authority.is_authority(caller):
                return self._reject("register", caller, instructor_id, FailureKind.UNAUTHORIZED)
            if instructor_id in self._instructors:
                return self._reject("register", caller, instructor_id, FailureKind.ALREADY_EXISTS)

            current_time = self._clock() if now is None else now
            record = InstructorRecord(
                name=name,
                specialization=specialization,
                certification_date=current_time,
                expiration_date=_expiry(current_time, valid_for_days),
                certification_level=certification_level,
                active=True,
                certifications=certifications,
            )
            self._instructors[instructor_id] = record

        logger.info(
            "instructor registered",
            extra={"data": {"instructor": instructor_id, "expires": record.expiration_date}},
        )
        return OperationResult.success(instructor_id)

    def renew(
        self,
        caller: str,
        instructor_id: str,
        valid_for_days: int,
        now: Optional[int] = None,
    ) -> OperationResult:
        """Extend certification from now and reactivate the instructor."""
        with self._lock:
            if not self._authority.is_authority(caller):
                return self._reject("renew", caller, instructor_id, FailureKind.UNAUTHORIZED)
            record = self._instructors.get(instructor_id)
            if record is None:
                return self._reject("renew", caller, instructor_id, FailureKind.NOT_FOUND)

            current_time = self._clock() if now is None else now
            renewed = revise(
                record,
                expiration_date=_expiry(current_time, valid_for_days),
                active=True,
            )
            self._instructors[instructor_id] = renewed

        logger.info(
            "instructor certification renewed",
            extra={"data": {"instructor": instructor_id, "expires": renewed.expiration_date}},
        )
        return OperationResult.success(True)

    def deactivate(self, caller: str, instructor_id: str) -> OperationResult:
        """Suspend an instructor's certification without touching its dates."""
        with self._lock:
            if not self._authority.is_authority(caller):
                return self._reject("deactivate", caller, instructor_id, FailureKind.UNAUTHORIZED)
            record = self._instructors.get(instructor_id)
            if record is None:
                return self._reject("deactivate", caller, instructor_id, FailureKind.NOT_FOUND)
            self._instructors[instructor_id] = revise(record, active=False)

        logger.info("instructor deactivated", extra={"data": {"instructor": instructor_id}})
        return OperationResult.success(True)

    def get(self, instructor_id: str) -> Optional[InstructorRecord]:
        """Get a copy of an instructor record, or None."""
        with self._lock:
            record = self._instructors.get(instructor_id)
        return record.model_copy(deep=True) if record else None

    def is_certified(self, instructor_id: str, now: Optional[int] = None) -> bool:
        """True when the instructor is active and not yet expired. Never fails."""
        with self._lock:
            record = self._instructors.get(instructor_id)
        if record is None:
            return False
        current_time = self._clock() if now is None else now
        return record.active and record.expiration_date > current_time
