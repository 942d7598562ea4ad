"""LifecycleService: the read and write contract for admin tooling.

Status changes are a two-phase command::

    proposal = await service.propose(competition_id, "archive")
    if proposal.requires_confirmation:
        confirmed = service.confirm(proposal)   # operator said yes
        await service.execute_confirmed(confirmed)

Declining is simply not calling ``confirm``; nothing is written.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from eliterank.logging_config import (
    bind_transition_context,
    clear_transition_context,
    get_logger,
)

from .clock import Clock, SystemClock
from .drift import DriftReport, detect_drift
from .exceptions import (
    ConfirmationRequiredError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from .executor import TransitionExecutor
from .guidance import AutoTransition, next_auto_transition, status_change_restriction
from .phase import compute_phase
from .readiness import RequirementReport, check_publish_requirements
from .record import CompetitionRecord
from .state_machine import ValidationResult, requires_confirmation, validate_transition
from .status import CompetitionStatus, Phase, parse_status
from .store import CompetitionStore, same_instant

logger = get_logger(__name__)


@dataclass(frozen=True)
class LifecycleSnapshot:
    record: CompetitionRecord
    phase: Phase
    drift: DriftReport
    readiness: RequirementReport
    next_transition: AutoTransition | None
    restriction: str


@dataclass(frozen=True)
class TransitionProposal:
    record_id: Any
    current_status: CompetitionStatus
    new_status: CompetitionStatus
    validation: ValidationResult
    requires_confirmation: bool
    expected_updated_at: datetime | None


@dataclass(frozen=True)
class ConfirmedTransition:
    record_id: Any
    new_status: CompetitionStatus
    expected_updated_at: datetime | None


class LifecycleService:
    """Validate, confirm and execute status changes for one store."""

    def __init__(self, store: CompetitionStore, clock: Clock | None = None):
        self.store = store
        self.clock = clock or SystemClock()
        self.executor = TransitionExecutor(store, self.clock)

    async def _load(self, record_id: Any) -> CompetitionRecord:
        record = await self.store.get(record_id)
        if record is None:
            raise NotFoundError(record_id)
        return record

    async def read(self, record_id: Any) -> LifecycleSnapshot:
        record = await self._load(record_id)
        now = self.clock.now()
        return LifecycleSnapshot(
            record=record,
            phase=compute_phase(record, now),
            drift=detect_drift(record, now),
            readiness=check_publish_requirements(record),
            next_transition=next_auto_transition(record),
            restriction=status_change_restriction(record.status),
        )

    async def propose(
        self,
        record_id: Any,
        new_status: CompetitionStatus | str,
    ) -> TransitionProposal:
        record = await self._load(record_id)
        new = parse_status(new_status)
        return TransitionProposal(
            record_id=record.id,
            current_status=record.status,
            new_status=new,
            validation=validate_transition(record, new),
            requires_confirmation=requires_confirmation(record.status, new),
            expected_updated_at=record.updated_at,
        )

    def confirm(self, proposal: TransitionProposal) -> ConfirmedTransition:
        """Record the operator's confirmation.  Writes nothing."""
        if not proposal.validation.valid:
            raise ValidationError(proposal.validation.errors, proposal.validation.warnings)
        return ConfirmedTransition(
            record_id=proposal.record_id,
            new_status=proposal.new_status,
            expected_updated_at=proposal.expected_updated_at,
        )

    async def execute(
        self,
        record_id: Any,
        new_status: CompetitionStatus | str,
        expected_updated_at: datetime | None,
        confirmed: bool = False,
    ) -> CompetitionRecord:
        """Validate against the current record, then write.

        Raises NotFoundError, ConflictError, ValidationError or
        ConfirmationRequiredError; on any of them nothing was written.
        """
        new = parse_status(new_status)
        bind_transition_context(record_id, requested_status=new.value)
        try:
            record = await self._load(record_id)
            if not same_instant(record.updated_at, expected_updated_at):
                raise ConflictError(record_id, expected_updated_at, record.updated_at)

            validation = validate_transition(record, new)
            if not validation.valid:
                logger.info("transition_rejected", errors=validation.errors)
                raise ValidationError(validation.errors, validation.warnings)

            if requires_confirmation(record.status, new) and not confirmed:
                raise ConfirmationRequiredError(record.status.value, new.value)

            if validation.warnings:
                logger.info("transition_warnings", warnings=validation.warnings)

            return await self.executor.execute(record_id, new, expected_updated_at)
        finally:
            clear_transition_context()

    async def execute_confirmed(self, confirmed: ConfirmedTransition) -> CompetitionRecord:
        return await self.execute(
            confirmed.record_id,
            confirmed.new_status,
            confirmed.expected_updated_at,
            confirmed=True,
        )


__all__ = [
    "ConfirmedTransition",
    "LifecycleService",
    "LifecycleSnapshot",
    "TransitionProposal",
]
