"""Competition lifecycle engine.

Pure rules (status, phase, readiness, transition validation, drift) plus
the async executor, reconciliation sweep and service built on top of a
``CompetitionStore``.
"""

from .clock import Clock, FixedClock, SystemClock, utcnow
from .drift import DriftReport, detect_drift
from .editability import (
    FIELD_RULES,
    edit_warning,
    editable_fields,
    fields_requiring_warning,
    is_field_editable,
    locked_fields,
    locked_reason,
    warn_fields,
)
from .exceptions import (
    ConfirmationRequiredError,
    ConflictError,
    LifecycleError,
    MalformedRecordError,
    NotFoundError,
    ValidationError,
)
from .executor import TransitionExecutor
from .guidance import AutoTransition, next_auto_transition, status_change_restriction
from .phase import compute_phase
from .readiness import RequirementReport, check_publish_requirements
from .reconciler import ReconciliationReport, reconcile_once
from .record import CompetitionRecord
from .service import (
    ConfirmedTransition,
    LifecycleService,
    LifecycleSnapshot,
    TransitionProposal,
)
from .state_machine import (
    ValidationResult,
    ensure_valid_transition,
    is_automatic_transition,
    requires_confirmation,
    validate_transition,
)
from .status import CompetitionStatus, Phase, is_publicly_viewable, parse_status
from .store import CompetitionStore, InMemoryCompetitionStore, SqlCompetitionStore

__all__ = [
    "AutoTransition",
    "Clock",
    "CompetitionRecord",
    "CompetitionStatus",
    "CompetitionStore",
    "ConfirmationRequiredError",
    "ConfirmedTransition",
    "ConflictError",
    "DriftReport",
    "FIELD_RULES",
    "FixedClock",
    "InMemoryCompetitionStore",
    "LifecycleError",
    "LifecycleService",
    "LifecycleSnapshot",
    "MalformedRecordError",
    "NotFoundError",
    "Phase",
    "ReconciliationReport",
    "RequirementReport",
    "SqlCompetitionStore",
    "SystemClock",
    "TransitionExecutor",
    "TransitionProposal",
    "ValidationError",
    "ValidationResult",
    "check_publish_requirements",
    "compute_phase",
    "detect_drift",
    "edit_warning",
    "editable_fields",
    "ensure_valid_transition",
    "fields_requiring_warning",
    "is_automatic_transition",
    "is_field_editable",
    "is_publicly_viewable",
    "locked_fields",
    "locked_reason",
    "next_auto_transition",
    "parse_status",
    "reconcile_once",
    "requires_confirmation",
    "status_change_restriction",
    "utcnow",
    "validate_transition",
    "warn_fields",
]
