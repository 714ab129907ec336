from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence, Tuple

from gcpfootprint.models.record import ResourceRecord
from gcpfootprint.models.scope import Scope


class OutcomeStatus(str, Enum):
    OK             = "ok"
    NOT_APPLICABLE = "not_applicable"
    FAILED         = "failed"
    SKIPPED        = "skipped"


class ErrorCategory(str, Enum):
    AUTH              = "auth"
    PERMISSION_DENIED = "permission_denied"
    QUOTA             = "quota"
    NETWORK           = "network"
    INVALID           = "invalid"
    UNKNOWN           = "unknown"


@dataclass(frozen=True)
class ProviderOutcome:
    provider: str
    scope: Scope
    status: OutcomeStatus
    records: Tuple[ResourceRecord, ...] = field(default_factory=tuple)
    category: Optional[ErrorCategory] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, provider: str, scope: Scope, records: Sequence[ResourceRecord]) -> "ProviderOutcome":
        return cls(provider, scope, OutcomeStatus.OK, tuple(records))

    @classmethod
    def not_applicable(cls, provider: str, scope: Scope, reason: str = "") -> "ProviderOutcome":
        return cls(provider, scope, OutcomeStatus.NOT_APPLICABLE, error=reason or None)

    @classmethod
    def failed(
        cls, provider: str, scope: Scope, category: ErrorCategory, error: str
    ) -> "ProviderOutcome":
        return cls(provider, scope, OutcomeStatus.FAILED, category=category, error=error)

    @classmethod
    def skipped(cls, provider: str, scope: Scope) -> "ProviderOutcome":
        return cls(provider, scope, OutcomeStatus.SKIPPED)

    @property
    def is_failure(self) -> bool:
        return self.status == OutcomeStatus.FAILED
