"""Competition lifecycle endpoints: read state, propose/confirm/execute transitions, reconcile."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from eliterank.database import get_db
from eliterank.lifecycle.clock import Clock, SystemClock
from eliterank.lifecycle.exceptions import (
    ConfirmationRequiredError,
    ConflictError,
    LifecycleError,
    NotFoundError,
    ValidationError,
)
from eliterank.lifecycle.reconciler import reconcile_once
from eliterank.lifecycle.service import LifecycleService, TransitionProposal
from eliterank.lifecycle.status import CompetitionStatus, is_publicly_viewable, parse_status
from eliterank.lifecycle.store import CompetitionStore, SqlCompetitionStore, same_instant
from eliterank.logging_config import get_logger
from eliterank.schemas import (
    AutoTransitionResponse,
    CompetitionResponse,
    ConfirmedTransitionResponse,
    ConfirmTransitionRequest,
    DriftResponse,
    ExecuteTransitionRequest,
    LifecycleResponse,
    ProposeTransitionRequest,
    ReadinessResponse,
    ReconciliationResponse,
    TransitionProposalResponse,
)

logger = get_logger(__name__)
router = APIRouter(prefix="/api/competitions", tags=["competitions"])


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


async def get_store(db: AsyncSession = Depends(get_db)) -> CompetitionStore:
    return SqlCompetitionStore(db)


def get_clock() -> Clock:
    return SystemClock()


def get_lifecycle_service(
    store: CompetitionStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
) -> LifecycleService:
    return LifecycleService(store, clock)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _parse_requested_status(value: str) -> CompetitionStatus:
    try:
        return parse_status(value)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Unknown status '{value}'")


def _to_http_error(exc: LifecycleError) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail="Competition not found")
    if isinstance(exc, ConflictError):
        return HTTPException(
            status_code=409,
            detail={
                "message": "Competition was modified by someone else. Reload and try again.",
                "actual_updated_at": (
                    exc.actual_updated_at.isoformat() if exc.actual_updated_at else None
                ),
            },
        )
    if isinstance(exc, ValidationError):
        return HTTPException(
            status_code=422,
            detail={"errors": exc.errors, "warnings": exc.warnings},
        )
    if isinstance(exc, ConfirmationRequiredError):
        return HTTPException(
            status_code=428,
            detail={
                "message": str(exc),
                "current_status": exc.current_status,
                "new_status": exc.new_status,
            },
        )
    return HTTPException(status_code=400, detail=str(exc))


def _proposal_response(proposal: TransitionProposal) -> TransitionProposalResponse:
    return TransitionProposalResponse(
        competition_id=proposal.record_id,
        current_status=proposal.current_status,
        new_status=proposal.new_status,
        valid=proposal.validation.valid,
        errors=proposal.validation.errors,
        warnings=proposal.validation.warnings,
        requires_confirmation=proposal.requires_confirmation,
        expected_updated_at=proposal.expected_updated_at,
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post("/reconcile", response_model=ReconciliationResponse)
async def run_reconciliation(
    store: CompetitionStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
):
    """Run one reconciliation sweep now instead of waiting for the loop."""
    report = await reconcile_once(store, clock)
    return ReconciliationResponse(**report.as_dict())


@router.get("/{competition_id}/lifecycle", response_model=LifecycleResponse)
async def get_lifecycle(
    competition_id: UUID,
    service: LifecycleService = Depends(get_lifecycle_service),
):
    """Current status, computed phase, drift and publish readiness."""
    try:
        snapshot = await service.read(competition_id)
    except LifecycleError as exc:
        raise _to_http_error(exc)

    next_transition = None
    if snapshot.next_transition is not None:
        next_transition = AutoTransitionResponse.model_validate(snapshot.next_transition)

    return LifecycleResponse(
        competition=CompetitionResponse.model_validate(snapshot.record),
        phase=snapshot.phase,
        publicly_viewable=is_publicly_viewable(snapshot.phase),
        drift=DriftResponse.model_validate(snapshot.drift),
        readiness=ReadinessResponse(
            ready=snapshot.readiness.ready,
            checks=snapshot.readiness.as_dict(),
            errors=snapshot.readiness.errors(),
            warnings=snapshot.readiness.warnings(),
        ),
        next_transition=next_transition,
        restriction=snapshot.restriction,
    )


@router.post(
    "/{competition_id}/transitions/propose",
    response_model=TransitionProposalResponse,
)
async def propose_transition(
    competition_id: UUID,
    body: ProposeTransitionRequest,
    service: LifecycleService = Depends(get_lifecycle_service),
):
    """Validate a status change without writing anything."""
    new_status = _parse_requested_status(body.status)
    try:
        proposal = await service.propose(competition_id, new_status)
    except LifecycleError as exc:
        raise _to_http_error(exc)
    return _proposal_response(proposal)


@router.post(
    "/{competition_id}/transitions/confirm",
    response_model=ConfirmedTransitionResponse,
)
async def confirm_transition(
    competition_id: UUID,
    body: ConfirmTransitionRequest,
    service: LifecycleService = Depends(get_lifecycle_service),
):
    """Operator confirmation gate.  Writes nothing."""
    new_status = _parse_requested_status(body.status)
    try:
        proposal = await service.propose(competition_id, new_status)
        if body.expected_updated_at is not None and not same_instant(
            proposal.expected_updated_at, body.expected_updated_at
        ):
            raise ConflictError(
                competition_id, body.expected_updated_at, proposal.expected_updated_at
            )
        confirmed = service.confirm(proposal)
    except LifecycleError as exc:
        raise _to_http_error(exc)

    return ConfirmedTransitionResponse(
        competition_id=confirmed.record_id,
        new_status=confirmed.new_status,
        expected_updated_at=confirmed.expected_updated_at,
    )


@router.post(
    "/{competition_id}/transitions/execute",
    response_model=CompetitionResponse,
)
async def execute_transition(
    competition_id: UUID,
    body: ExecuteTransitionRequest,
    service: LifecycleService = Depends(get_lifecycle_service),
):
    """Apply a status change.

    Returns 428 when the change needs confirmation and ``confirmed`` is
    false, 409 when the competition changed since ``expected_updated_at``.
    """
    new_status = _parse_requested_status(body.status)
    try:
        record = await service.execute(
            competition_id,
            new_status,
            body.expected_updated_at,
            confirmed=body.confirmed,
        )
    except LifecycleError as exc:
        raise _to_http_error(exc)

    return CompetitionResponse.model_validate(record)
