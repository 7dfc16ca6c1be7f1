"""
Medsim Registry API — FastAPI endpoints.

Exposes every registry operation over HTTP for:
- Certification authority handover
- Instructor certification
- Simulator inventory
- Scenario definitions
- Practice sessions

The caller identity is taken from a request header that the surrounding
gateway has already authenticated.
"""

from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from pydantic import BaseModel, Field

from medsim_registry.authority.store import AuthorityStore
from medsim_registry.clock import Clock, system_clock
from medsim_registry.config import RegistrySettings, load_settings
from medsim_registry.instructors.registry import InstructorRegistry
from medsim_registry.logging_config import configure_logging
from medsim_registry.models.result import FailureKind, OperationResult
from medsim_registry.scenarios.registry import ScenarioRegistry
from medsim_registry.sessions.ledger import SessionLedger
from medsim_registry.simulators.registry import SimulatorRegistry

FAILURE_STATUS = {
    FailureKind.UNAUTHORIZED: 403,
    FailureKind.NOT_FOUND: 404,
    FailureKind.ALREADY_EXISTS: 409,
    FailureKind.SESSION_ALREADY_COMPLETED: 409,
}


# --- Request Models ---

class AuthorityChangeRequest(BaseModel):
    new_authority: str = Field(min_length=1)


class InstructorRegisterRequest(BaseModel):
    instructor_id: str = Field(min_length=1)
    name: str
    specialization: str
    certification_level: int
    valid_for_days: int = Field(ge=0)
    certifications: List[str] = []


class InstructorRenewRequest(BaseModel):
    valid_for_days: int = Field(ge=0)


class SimulatorRegisterRequest(BaseModel):
    simulator_id: str = Field(min_length=1)
    name: str
    model: str
    manufacturer: str
    purchase_date: int = Field(ge=0)
    features: List[str] = []


class SimulatorStatusRequest(BaseModel):
    status: str = Field(min_length=1)


class ScenarioContent(BaseModel):
    name: str
    description: str
    difficulty: int
    specialties: List[str] = []


class ScenarioCreateRequest(ScenarioContent):
    scenario_id: str = Field(min_length=1)


class SessionStartRequest(BaseModel):
    session_id: str = Field(min_length=1)
    scenario_id: str
    participants: List[str] = []


def _unwrap(result: OperationResult):
    """Turn a failed result into the matching HTTP error."""
    if not result.ok:
        raise HTTPException(FAILURE_STATUS[result.error], result.error.value)
    return result.value


# --- Application Factory ---

def create_app(
    authority_store: Optional[AuthorityStore] = None,
    instructor_registry: Optional[InstructorRegistry] = None,
    simulator_registry: Optional[SimulatorRegistry] = None,
    scenario_registry: Optional[ScenarioRegistry] = None,
    session_ledger: Optional[SessionLedger] = None,
    settings: Optional[RegistrySettings] = None,
    clock: Clock = system_clock,
) -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Medsim Registry API",
        description="Authorization-gated registries for medical-simulation training",
        version="0.1.0",
    )

    # Initialize components. Dependent components share the stores they were built on.
    if instructor_registry is not None:
        if authority_store is not None and authority_store is not instructor_registry.authority_store:
            raise ValueError("instructor_registry is bound to a different AuthorityStore")
        authority_store = instructor_registry.authority_store
    if session_ledger is not None:
        if scenario_registry is not None and scenario_registry is not session_ledger.scenarios:
            raise ValueError("session_ledger is bound to a different ScenarioRegistry")
        scenario_registry = session_ledger.scenarios

    if authority_store is None:
        if not settings.certification_authority:
            raise RuntimeError(
                "MEDSIM_CERTIFICATION_AUTHORITY must be set when no AuthorityStore is supplied"
            )
        authority_store = AuthorityStore(settings.certification_authority)
    authority = authority_store
    instructors = instructor_registry or InstructorRegistry(authority, clock=clock)
    simulators = simulator_registry or SimulatorRegistry(clock=clock)
    scenarios = scenario_registry or ScenarioRegistry(clock=clock)
    sessions = session_ledger or SessionLedger(scenarios, clock=clock)

    app.state.authority_store = authority
    app.state.instructor_registry = instructors
    app.state.simulator_registry = simulators
    app.state.scenario_registry = scenarios
    app.state.session_ledger = sessions

    def caller_identity(request: Request) -> str:
        caller = request.headers.get(settings.caller_header)
        if not caller:
            raise HTTPException(401, f"missing {settings.caller_header.lower()} header")
        return caller

    # === AUTHORITY ===

    @app.get("/authority")
    def get_authority():
        """Current certification authority."""
        return {"authority": authority.authority}

    @app.put("/authority")
    def set_authority(req: AuthorityChangeRequest, caller: str = Depends(caller_identity)):
        """Hand certification authority to another identity."""
        return {"authority": _unwrap(authority.set_authority(caller, req.new_authority))}

    # === INSTRUCTORS ===

    @app.post("/instructors")
    def register_instructor(req: InstructorRegisterRequest, caller: str = Depends(caller_identity)):
        """Certify a new instructor (authority only)."""
        instructor_id = _unwrap(instructors.register(
            caller,
            req.instructor_id,
            req.name,
            req.specialization,
            req.certification_level,
            req.valid_for_days,
            req.certifications,
        ))
        return {"id": instructor_id}

    @app.post("/instructors/{instructor_id}/renew")
    def renew_instructor(
        instructor_id: str,
        req: InstructorRenewRequest,
        caller: str = Depends(caller_identity),
    ):
        """Extend an instructor's certification (authority only)."""
        return {"renewed": _unwrap(instructors.renew(caller, instructor_id, req.valid_for_days))}

    @app.post("/instructors/{instructor_id}/deactivate")
    def deactivate_instructor(instructor_id: str, caller: str = Depends(caller_identity)):
        """Suspend an instructor (authority only)."""
        return {"deactivated": _unwrap(instructors.deactivate(caller, instructor_id))}

    @app.get("/instructors/{instructor_id}")
    def get_instructor(instructor_id: str):
        record = instructors.get(instructor_id)
        if not record:
            raise HTTPException(404, "not found")
        return record.model_dump(mode="json")

    @app.get("/instructors/{instructor_id}/certified")
    def is_certified(instructor_id: str):
        """Whether the instructor currently holds a valid certification."""
        return {"certified": instructors.is_certified(instructor_id)}

    # === SIMULATORS ===

    @app.post("/simulators")
    def register_simulator(req: SimulatorRegisterRequest, caller: str = Depends(caller_identity)):
        """Add a simulator; the caller becomes its owner."""
        simulator_id = _unwrap(simulators.register(
            caller,
            req.simulator_id,
            req.name,
            req.model,
            req.manufacturer,
            req.purchase_date,
            req.features,
        ))
        return {"id": simulator_id}

    @app.post("/simulators/{simulator_id}/maintenance")
    def record_maintenance(simulator_id: str, caller: str = Depends(caller_identity)):
        """Stamp the simulator as maintained (owner only)."""
        return {"recorded": _unwrap(simulators.record_maintenance(caller, simulator_id))}

    @app.put("/simulators/{simulator_id}/status")
    def set_simulator_status(
        simulator_id: str,
        req: SimulatorStatusRequest,
        caller: str = Depends(caller_identity),
    ):
        """Change the simulator's status (owner only)."""
        return {"updated": _unwrap(simulators.set_status(caller, simulator_id, req.status))}

    @app.get("/simulators/{simulator_id}")
    def get_simulator(simulator_id: str):
        record = simulators.get(simulator_id)
        if not record:
            raise HTTPException(404, "not found")
        return record.model_dump(mode="json")

    @app.get("/simulators/{simulator_id}/owner")
    def get_simulator_owner(simulator_id: str):
        owner = simulators.get_owner(simulator_id)
        if not owner:
            raise HTTPException(404, "not found")
        return owner.model_dump(mode="json")

    # === SCENARIOS ===

    @app.post("/scenarios")
    def create_scenario(req: ScenarioCreateRequest, caller: str = Depends(caller_identity)):
        """Define a new scenario; the caller becomes its creator."""
        scenario_id = _unwrap(scenarios.create(
            caller,
            req.scenario_id,
            req.name,
            req.description,
            req.difficulty,
            req.specialties,
        ))
        return {"id": scenario_id}

    @app.put("/scenarios/{scenario_id}")
    def update_scenario(
        scenario_id: str,
        req: ScenarioContent,
        caller: str = Depends(caller_identity),
    ):
        """Replace a scenario's content (creator only)."""
        return {"updated": _unwrap(scenarios.update(
            caller,
            scenario_id,
            req.name,
            req.description,
            req.difficulty,
            req.specialties,
        ))}

    @app.get("/scenarios/{scenario_id}")
    def get_scenario(scenario_id: str):
        record = scenarios.get(scenario_id)
        if not record:
            raise HTTPException(404, "not found")
        return record.model_dump(mode="json")

    # === SESSIONS ===

    @app.post("/sessions")
    def start_session(req: SessionStartRequest, caller: str = Depends(caller_identity)):
        """Open a practice session on an active scenario."""
        session_id = _unwrap(sessions.start_session(
            caller, req.session_id, req.scenario_id, req.participants
        ))
        return {"id": session_id}

    @app.post("/sessions/{session_id}/complete")
    def complete_session(session_id: str, caller: str = Depends(caller_identity)):
        """Close a session (starting instructor only)."""
        return {"completed": _unwrap(sessions.complete_session(caller, session_id))}

    @app.get("/sessions/{session_id}")
    def get_session(session_id: str):
        record = sessions.get(session_id)
        if not record:
            raise HTTPException(404, "not found")
        data = record.model_dump(mode="json")
        data["state"] = record.state.value
        return data

    return app
