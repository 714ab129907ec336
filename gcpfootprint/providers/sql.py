"""
Cloud SQL instances.

The Admin API only lists per project, so the listing is fetched once per run
and filtered by region. A failed listing is replayed for every region so
each (provider, region) pair still reports its own failure.
"""
import threading
from typing import Any, Dict, Iterable, List, Optional

from gcpfootprint.models.record import ResourceRecord
from gcpfootprint.models.scope import Scope, ScopeKind
from gcpfootprint.providers.base import ResourceProvider


class CloudSqlInstanceProvider(ResourceProvider):
    kind = "Cloud SQL Instance"
    scopes = frozenset({ScopeKind.REGION})

    def __init__(self):
        self._lock = threading.Lock()
        self._owner: Optional[Any] = None
        self._items: List[Dict[str, Any]] = []
        self._error: Optional[Exception] = None

    def _fetch(self, ctx) -> List[Dict[str, Any]]:
        service = ctx.clients.sqladmin()
        items: List[Dict[str, Any]] = []
        request = service.instances().list(project=ctx.project_id)
        while request is not None:
            response = request.execute()
            items.extend(response.get("items", []))
            request = service.instances().list_next(previous_request=request, previous_response=response)
        return items

    def _instances(self, ctx) -> List[Dict[str, Any]]:
        with self._lock:
            if self._owner is not ctx:
                self._owner = ctx
                self._items, self._error = [], None
                try:
                    self._items = self._fetch(ctx)
                except Exception as exc:
                    self._error = exc
            if self._error is not None:
                raise self._error
            return self._items

    def list_resources(self, scope: Scope, ctx) -> Iterable[ResourceRecord]:
        for item in self._instances(ctx):
            if item.get("region") != scope.name:
                continue
            settings = item.get("settings") or {}
            yield ResourceRecord(self.kind, scope, [
                ("Name", item.get("name")),
                ("Database Version", item.get("databaseVersion")),
                ("Tier", settings.get("tier")),
                ("Region", item.get("region")),
                ("State", item.get("state")),
            ])
