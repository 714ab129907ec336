"""
In-memory providers and helpers shared by the engine tests.
"""
import io
import threading
import time
from datetime import datetime
from typing import Callable, Dict, Iterable, Optional, Union

from google.api_core import exceptions as gexc
from rich.console import Console

from gcpfootprint.collector import Collector
from gcpfootprint.context import RunContext
from gcpfootprint.models.record import ResourceRecord
from gcpfootprint.models.scope import ScopeKind
from gcpfootprint.providers.base import Placement, ResourceProvider
from gcpfootprint.reporters.text import TextReporter
from gcpfootprint.scopes import ScopeEnumerator

FIXED_TIME = datetime(2024, 5, 1, 12, 30, 0)


class FakeProvider(ResourceProvider):
    def __init__(
        self,
        kind: str,
        scopes: Iterable[ScopeKind],
        records: Union[int, Dict[str, int]] = 0,
        fail_at: Iterable[str] = (),
        absent_at: Iterable[str] = (),
        placement: Placement = Placement.GLOBAL,
        section_title: Optional[str] = None,
        delay: Optional[Callable[[str], float]] = None,
    ):
        self.kind = kind
        self.scopes = frozenset(scopes)
        self.placement = placement
        self.section_title = section_title
        self._records = records
        self._fail_at = set(fail_at)
        self._absent_at = set(absent_at)
        self._delay = delay
        self._lock = threading.Lock()
        self.calls = []

    def list_resources(self, scope, ctx):
        with self._lock:
            self.calls.append(scope)
        if self._delay:
            time.sleep(self._delay(scope.name))
        if scope.name in self._fail_at:
            raise gexc.Forbidden(f"caller lacks permission to list {self.kind} in {scope.name}")
        if scope.name in self._absent_at:
            raise gexc.NotFound(f"The resource '{scope.name}' was not found")
        if isinstance(self._records, dict):
            count = self._records.get(scope.name, 0)
        else:
            count = self._records
        return [
            ResourceRecord(self.kind, scope, [("Name", f"{scope.name}-{i}"), ("Scope", scope.name)])
            for i in range(count)
        ]


def make_ctx(project_id: str = "demo-project") -> RunContext:
    return RunContext(project_id=project_id, console=Console(file=io.StringIO()), clock=lambda: FIXED_TIME)


def run_collector(providers, regions, zone_suffixes=("a",), workers=4, reporter_cls=TextReporter, ctx=None):
    """Run a collector into a string buffer; returns (summary, report text, ctx)."""
    ctx = ctx or make_ctx()
    sink = io.StringIO()
    reporter = reporter_cls(sink)
    collector = Collector(providers, ScopeEnumerator(regions, zone_suffixes), reporter, max_workers=workers)
    summary = collector.run(ctx)
    return summary, sink.getvalue(), ctx


def section_titles(text: str):
    """Titles underlined with a rule of '=' of the same length."""
    lines = text.split("\n")
    titles = []
    for i in range(len(lines) - 1):
        rule = lines[i + 1]
        if lines[i] and rule and set(rule) == {"="} and len(rule) == len(lines[i]):
            titles.append(lines[i])
    return titles


def section_body(text: str, title: str) -> str:
    """Text of one section, up to the next section title."""
    start = text.index(f"\n{title}\n{'=' * len(title)}\n")
    rest = text[start + len(title) * 2 + 3:]
    for other in section_titles(rest):
        rest = rest.split(f"\n\n{other}\n", 1)[0]
        break
    return rest
