from typing import Iterable

from gcpfootprint.models.record import ResourceRecord
from gcpfootprint.models.scope import Scope, ScopeKind
from gcpfootprint.providers.base import ResourceProvider, enum_name, http_status


class GkeClusterProvider(ResourceProvider):
    """Regional GKE listing; zonal clusters in the region are included."""

    kind = "GKE Cluster"
    scopes = frozenset({ScopeKind.REGION})

    def is_scope_absent(self, exc: BaseException, scope: Scope) -> bool:
        if super().is_scope_absent(exc, scope):
            return True
        # GKE answers 400 INVALID_ARGUMENT "Location ... does not exist."
        return http_status(exc) == 400 and "does not exist" in str(exc).lower()

    def list_resources(self, scope: Scope, ctx) -> Iterable[ResourceRecord]:
        parent = f"projects/{ctx.project_id}/locations/{scope.name}"
        response = ctx.clients.clusters().list_clusters(parent=parent)
        for cluster in response.clusters:
            yield ResourceRecord(self.kind, scope, [
                ("Name", cluster.name),
                ("Location", cluster.location),
                ("Master Version", cluster.current_master_version),
                ("Node Count", cluster.current_node_count),
                ("Status", enum_name(cluster.status)),
            ])
