import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from gcpfootprint.models.outcome import ErrorCategory, OutcomeStatus, ProviderOutcome


@dataclass(frozen=True)
class ProviderStat:
    provider: str
    scope: str
    status: OutcomeStatus
    count: int = 0
    category: Optional[ErrorCategory] = None
    error: Optional[str] = None
    in_report: bool = True

    def to_dict(self) -> dict:
        return {
            "provider": self.provider,
            "scope": self.scope,
            "status": self.status.value,
            "count": self.count,
            "category": self.category.value if self.category else None,
            "error": self.error,
            "in_report": self.in_report,
        }


@dataclass
class RunSummary:
    """
    Per (provider, scope) tally collected by the Collector.

    Entries are appended in report order by a single writer; the lock keeps
    readers consistent if they look while a run is still going. After a
    cancelled run, calls that finished but never reached the report are
    appended last with ``in_report=False``. ``abandoned`` counts calls still
    running when the grace period ran out.
    """
    stats: List[ProviderStat] = field(default_factory=list)
    cancelled: bool = False
    abandoned: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record(self, outcome: ProviderOutcome, in_report: bool = True) -> ProviderStat:
        stat = ProviderStat(
            provider=outcome.provider,
            scope=outcome.scope.name,
            status=outcome.status,
            count=len(outcome.records),
            category=outcome.category,
            error=outcome.error,
            in_report=in_report,
        )
        with self._lock:
            self.stats.append(stat)
        return stat

    def _with_status(self, status: OutcomeStatus) -> List[ProviderStat]:
        with self._lock:
            return [s for s in self.stats if s.status == status]

    @property
    def failures(self) -> List[ProviderStat]:
        return self._with_status(OutcomeStatus.FAILED)

    @property
    def not_applicable(self) -> List[ProviderStat]:
        return self._with_status(OutcomeStatus.NOT_APPLICABLE)

    @property
    def total_records(self) -> int:
        with self._lock:
            return sum(s.count for s in self.stats)

    def counts_by_kind(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        with self._lock:
            for s in self.stats:
                counts[s.provider] = counts.get(s.provider, 0) + s.count
        return counts
