"""
Authority Store — holds the single certification-authority identity.

Behavioral Contract:
- Exactly one authority at any time
- Only the current authority may name its successor
- Replacement is a single assignment; no partial state is observable
"""

import logging
from threading import Lock

from medsim_registry.models.result import FailureKind, OperationResult

logger = logging.getLogger(__name__)


class AuthorityStore:
    """
    Injected handle to the certification authority.

    Each instance is independent, so tests and tenants never share one.
    """

    def __init__(self, initial_authority: str):
        if not initial_authority:
            raise ValueError("initial_authority must be a non-empty identity")
        self._authority = initial_authority
        self._lock = Lock()

    @property
    def authority(self) -> str:
        """The identity currently permitted to mutate the instructor registry."""
        return self._authority

    def is_authority(self, caller: str) -> bool:
        return caller == self._authority

    def set_authority(self, caller: str, new_authority: str) -> OperationResult:
        """Hand authority to ``new_authority``. Only the current holder may do this."""
        if not new_authority:
            raise ValueError("new_authority must be a non-empty identity")
        with self._lock:
            if caller != self._authority:
                logger.debug(
                    "authority change rejected",
                    extra={"data": {"caller": caller, "error": FailureKind.UNAUTHORIZED.value}},
                )
                return OperationResult.failure(FailureKind.UNAUTHORIZED)
            previous = self._authority
            self._authority = new_authority
        logger.info(
            "certification authority transferred",
            extra={"data": {"from": previous, "to": new_authority}},
        )
        return OperationResult.success(new_authority)
