"""Pydantic v2 request/response schemas for the lifecycle endpoints."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from eliterank.lifecycle.status import CompetitionStatus, Phase


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


class CompetitionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Any
    name: str | None = None
    status: CompetitionStatus
    nomination_start: datetime | None = None
    nomination_end: datetime | None = None
    voting_start: datetime | None = None
    voting_end: datetime | None = None
    finals_date: datetime | None = None
    city_id: str | None = None
    category_id: str | None = None
    demographic_id: str | None = None
    host_id: str | None = None
    min_contestants: int | None = None
    max_contestants: int | None = None
    updated_at: datetime | None = None


class DriftResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    needs_update: bool
    current_status: CompetitionStatus
    computed_phase: Phase
    target_status: CompetitionStatus


class ReadinessResponse(BaseModel):
    ready: bool
    checks: dict[str, bool]
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class AutoTransitionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    next_status: CompetitionStatus
    trigger_at: datetime
    description: str


class LifecycleResponse(BaseModel):
    competition: CompetitionResponse
    phase: Phase
    publicly_viewable: bool
    drift: DriftResponse
    readiness: ReadinessResponse
    next_transition: AutoTransitionResponse | None = None
    restriction: str


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------


class ProposeTransitionRequest(BaseModel):
    status: str = Field(..., min_length=1, max_length=20)


class ConfirmTransitionRequest(BaseModel):
    status: str = Field(..., min_length=1, max_length=20)
    expected_updated_at: datetime | None = None


class ExecuteTransitionRequest(BaseModel):
    status: str = Field(..., min_length=1, max_length=20)
    expected_updated_at: datetime | None = None
    confirmed: bool = False


class TransitionProposalResponse(BaseModel):
    competition_id: Any
    current_status: CompetitionStatus
    new_status: CompetitionStatus
    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    requires_confirmation: bool
    expected_updated_at: datetime | None = None


class ConfirmedTransitionResponse(BaseModel):
    competition_id: Any
    new_status: CompetitionStatus
    expected_updated_at: datetime | None = None
    confirmed: bool = True


# ---------------------------------------------------------------------------
# Reconciliation
# ---------------------------------------------------------------------------


class ReconciliationResponse(BaseModel):
    checked: int
    transitioned: list[dict] = Field(default_factory=list)
    conflicts: list[str] = Field(default_factory=list)
    failed: list[str] = Field(default_factory=list)
    skipped: list[dict] = Field(default_factory=list)
