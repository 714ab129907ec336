"""
Lazy, cached Google Cloud clients.

Credentials come from Application Default Credentials (the
GOOGLE_APPLICATION_CREDENTIALS key file when set). A client that cannot be
built raises from the accessor, inside the provider that asked for it, so
a credentials problem shows up as that provider's failure.
"""
import threading
from typing import Any, Callable, Dict, Optional

from google.cloud import compute_v1, container_v1, iam_admin_v1, resourcemanager_v3, storage
from googleapiclient import discovery


class ClientFactory:
    def __init__(self, project_id: str, credentials: Optional[Any] = None):
        self.project_id = project_id
        self._credentials = credentials
        self._cache: Dict[str, Any] = {}
        self._lock = threading.Lock()

    def _get(self, key: str, build: Callable[[], Any]) -> Any:
        with self._lock:
            client = self._cache.get(key)
            if client is None:
                client = build()
                self._cache[key] = client
            return client

    # ----------------------------------------- Resource Manager / IAM
    def projects(self) -> resourcemanager_v3.ProjectsClient:
        return self._get("projects", lambda: resourcemanager_v3.ProjectsClient(credentials=self._credentials))

    def iam(self) -> iam_admin_v1.IAMClient:
        return self._get("iam", lambda: iam_admin_v1.IAMClient(credentials=self._credentials))

    # ----------------------------------------- Storage
    def storage_client(self) -> storage.Client:
        return self._get(
            "storage",
            lambda: storage.Client(project=self.project_id, credentials=self._credentials),
        )

    # ----------------------------------------- Compute Engine
    def instances(self) -> compute_v1.InstancesClient:
        return self._get("instances", lambda: compute_v1.InstancesClient(credentials=self._credentials))

    def disks(self) -> compute_v1.DisksClient:
        return self._get("disks", lambda: compute_v1.DisksClient(credentials=self._credentials))

    def networks(self) -> compute_v1.NetworksClient:
        return self._get("networks", lambda: compute_v1.NetworksClient(credentials=self._credentials))

    def subnetworks(self) -> compute_v1.SubnetworksClient:
        return self._get("subnetworks", lambda: compute_v1.SubnetworksClient(credentials=self._credentials))

    def firewalls(self) -> compute_v1.FirewallsClient:
        return self._get("firewalls", lambda: compute_v1.FirewallsClient(credentials=self._credentials))

    def snapshots(self) -> compute_v1.SnapshotsClient:
        return self._get("snapshots", lambda: compute_v1.SnapshotsClient(credentials=self._credentials))

    # ----------------------------------------- GKE / Cloud SQL
    def clusters(self) -> container_v1.ClusterManagerClient:
        return self._get("clusters", lambda: container_v1.ClusterManagerClient(credentials=self._credentials))

    def sqladmin(self) -> Any:
        return self._get(
            "sqladmin",
            lambda: discovery.build(
                "sqladmin", "v1beta4", credentials=self._credentials, cache_discovery=False
            ),
        )
