"""
Collector: drives every provider across the scope sequence and feeds the
reporter.

Provider calls run on a bounded pool of daemon threads. The calling
thread is the only writer: it walks the planned sections in order, waits
for each section's calls and renders the section, so the report never
depends on completion order. Cancellation stops new calls and stops the
writer before the next section; the section being waited on is dropped,
never half written. Calls still running after the grace period are
abandoned and do not keep the process alive.
"""
import queue
import threading
from concurrent.futures import Future, wait
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Optional, Sequence

from gcpfootprint.config import MAX_WORKERS_LIMIT
from gcpfootprint.context import RunContext
from gcpfootprint.models.outcome import OutcomeStatus, ProviderOutcome
from gcpfootprint.models.scope import Scope, ScopeKind
from gcpfootprint.models.summary import RunSummary
from gcpfootprint.providers.base import Placement, ResourceProvider, classify_error, describe_error
from gcpfootprint.reporters.text import TextReporter
from gcpfootprint.scopes import ScopeEnumerator

GLOBAL_SECTION_TITLE = "GLOBAL RESOURCES"

_POLL_INTERVAL = 0.1


@dataclass
class Task:
    provider: ResourceProvider
    scope: Scope
    future: Optional[Future] = None
    recorded: bool = False


@dataclass
class Section:
    title: str
    scope: Scope
    tasks: List[Task] = field(default_factory=list)
    zones: List[Scope] = field(default_factory=list)


def _unique(providers: Iterable[ResourceProvider]) -> List[ResourceProvider]:
    seen = set()
    result = []
    for p in providers:
        if id(p) not in seen:
            seen.add(id(p))
            result.append(p)
    return result


def plan_sections(providers: Sequence[ResourceProvider], scopes: Sequence[Scope]) -> List[Section]:
    """
    Lay out the report: header sections, the global section, one section
    per region (region providers, then zonal providers for each derived
    zone), then trailing sections. Each provider appears once per scope it
    applies to; global providers therefore run exactly once per run.
    """
    providers = _unique(providers)
    global_providers = [p for p in providers if p.applies_to(ScopeKind.GLOBAL)]
    region_providers = [p for p in providers if p.applies_to(ScopeKind.REGION)]
    zone_providers = [p for p in providers if p.applies_to(ScopeKind.ZONE)]

    if not scopes or scopes[0].kind != ScopeKind.GLOBAL:
        raise ValueError("scope sequence must start with the global scope")

    head: List[Section] = []
    regions: List[Section] = []
    tail: List[Section] = []

    for scope in scopes:
        if scope.kind == ScopeKind.GLOBAL:
            if head:
                raise ValueError("scope sequence contains more than one global scope")
            global_section = Section(GLOBAL_SECTION_TITLE, scope)
            for p in global_providers:
                if p.placement == Placement.GLOBAL:
                    global_section.tasks.append(Task(p, scope))
                else:
                    target = head if p.placement == Placement.HEADER else tail
                    target.append(Section(p.section_title or p.kind.upper(), scope, [Task(p, scope)]))
            head.append(global_section)
        elif scope.kind == ScopeKind.REGION:
            regions.append(Section(f"REGION: {scope.name}", scope, [Task(p, scope) for p in region_providers]))
        else:
            if not regions or regions[-1].scope.name != scope.parent_region:
                raise ValueError(f"zone '{scope.name}' does not follow its region '{scope.parent_region}'")
            regions[-1].zones.append(scope)

    for section in regions:
        for p in zone_providers:
            section.tasks.extend(Task(p, zone) for zone in section.zones)

    return head + regions + tail


def _invoke(provider: ResourceProvider, scope: Scope, ctx: RunContext) -> ProviderOutcome:
    if ctx.cancelled:
        return ProviderOutcome.skipped(provider.kind, scope)
    try:
        return provider.query(scope, ctx)
    except Exception as exc:
        # query() already classifies backend errors; this catches provider bugs
        return ProviderOutcome.failed(provider.kind, scope, classify_error(exc), describe_error(exc))


def _warn_failure(outcome: ProviderOutcome, ctx: RunContext) -> None:
    ctx.console.print(
        f"[yellow]Warning:[/yellow] {outcome.provider} failed in {outcome.scope.name} "
        f"({outcome.category.value}): {outcome.error}"
    )


class WorkerPool:
    """
    Bounded pool of daemon worker threads.

    Same submit/Future contract as ThreadPoolExecutor, but workers are
    daemon threads and are never joined at interpreter exit, so a call that
    outlives the grace period cannot hold the process open.
    """

    def __init__(self, max_workers: int, name: str = "gcpfootprint"):
        self._queue: "queue.SimpleQueue" = queue.SimpleQueue()
        self._threads = [
            threading.Thread(target=self._work, name=f"{name}_{i}", daemon=True)
            for i in range(max_workers)
        ]
        for t in self._threads:
            t.start()

    def submit(self, fn: Callable[..., Any], *args: Any) -> Future:
        future: Future = Future()
        self._queue.put((future, fn, args))
        return future

    def _work(self) -> None:
        while True:
            item = self._queue.get()
            if item is None:
                return
            future, fn, args = item
            if not future.set_running_or_notify_cancel():
                continue
            try:
                result = fn(*args)
            except BaseException as exc:
                future.set_exception(exc)
            else:
                future.set_result(result)

    def shutdown(self) -> None:
        """Cancel queued calls and let idle workers exit; running calls are not interrupted."""
        while True:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                break
            if item is not None:
                item[0].cancel()
        for _ in self._threads:
            self._queue.put(None)


class Collector:
    def __init__(
        self,
        providers: Sequence[ResourceProvider],
        enumerator: ScopeEnumerator,
        reporter: TextReporter,
        max_workers: int = 8,
        grace_period: float = 10.0,
    ):
        if not 1 <= max_workers <= MAX_WORKERS_LIMIT:
            raise ValueError(f"max_workers must be between 1 and {MAX_WORKERS_LIMIT}, got {max_workers}")
        self.providers = list(providers)
        self.enumerator = enumerator
        self.reporter = reporter
        self.max_workers = max_workers
        self.grace_period = grace_period

    def run(self, ctx: RunContext) -> RunSummary:
        summary = RunSummary()
        sections = plan_sections(self.providers, self.enumerator.enumerate())
        written = 0

        self.reporter.begin(ctx)
        pool = WorkerPool(self.max_workers)
        try:
            for section in sections:
                for task in section.tasks:
                    task.future = pool.submit(_invoke, task.provider, task.scope, ctx)

            for section in sections:
                if ctx.cancelled:
                    break
                self._announce(section, ctx)
                outcomes = self._await(section, ctx)
                if outcomes is None:
                    break
                self._write(section, outcomes, summary, ctx)
                written += 1
        except KeyboardInterrupt:
            ctx.console.print("\n[yellow]Interrupted:[/yellow] finishing the report written so far.")
            ctx.cancel()
        finally:
            summary.abandoned = self._shutdown(pool, sections, ctx)
            summary.cancelled = written < len(sections)
            self._record_unwritten(sections, summary)
            self.reporter.finish()

        return summary

    def _announce(self, section: Section, ctx: RunContext) -> None:
        if section.scope.kind == ScopeKind.REGION:
            ctx.console.print(f"\nChecking region: {section.scope.name}")
        elif section.title == GLOBAL_SECTION_TITLE:
            ctx.console.print("\nQuerying global resources...")

    def _await(self, section: Section, ctx: RunContext) -> Optional[List[ProviderOutcome]]:
        futures = [t.future for t in section.tasks]
        pending = set(futures)
        while pending:
            _, pending = wait(pending, timeout=_POLL_INTERVAL)
            if pending and ctx.cancelled:
                return None
        outcomes = [f.result() for f in futures]
        if ctx.cancelled or any(o.status == OutcomeStatus.SKIPPED for o in outcomes):
            return None
        return outcomes

    def _write(
        self, section: Section, outcomes: List[ProviderOutcome], summary: RunSummary, ctx: RunContext
    ) -> None:
        self.reporter.begin_section(section.title)
        for task, outcome in zip(section.tasks, outcomes):
            summary.record(outcome)
            task.recorded = True
            if outcome.is_failure:
                _warn_failure(outcome, ctx)
                continue
            if outcome.records:
                ctx.console.print(f"  Found {len(outcome.records)} {outcome.provider}(s) in {outcome.scope.name}")
            for record in outcome.records:
                self.reporter.append_record(record)
        self.reporter.end_section()

    def _record_unwritten(self, sections: List[Section], summary: RunSummary) -> None:
        # Calls that finished but whose section was dropped still count in
        # the summary, flagged as absent from the report.
        for section in sections:
            for task in section.tasks:
                future = task.future
                if task.recorded or future is None or not future.done() or future.cancelled():
                    continue
                if future.exception() is not None:
                    continue
                outcome = future.result()
                if outcome.status != OutcomeStatus.SKIPPED:
                    summary.record(outcome, in_report=False)

    def _shutdown(self, pool: WorkerPool, sections: List[Section], ctx: RunContext) -> int:
        """Stop queued calls and wait out the grace period; returns the number of abandoned calls."""
        pool.shutdown()
        in_flight = [
            t.future for s in sections for t in s.tasks
            if t.future is not None and not t.future.done()
        ]
        if not in_flight:
            return 0
        _, still_running = wait(in_flight, timeout=self.grace_period)
        if still_running:
            ctx.console.print(
                f"[yellow]Warning:[/yellow] {len(still_running)} provider call(s) still running "
                f"after {self.grace_period:g}s, abandoning them."
            )
        return len(still_running)
