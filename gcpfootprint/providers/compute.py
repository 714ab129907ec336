"""
Compute Engine instances, persistent disks and snapshots.
"""
from typing import Iterable

from gcpfootprint.models.record import ResourceRecord
from gcpfootprint.models.scope import Scope, ScopeKind
from gcpfootprint.providers.base import (
    Placement,
    ResourceProvider,
    ZonalProvider,
    format_timestamp,
    last_segment,
)


def _external_ip(instance) -> str:
    for nic in instance.network_interfaces or []:
        for access in nic.access_configs or []:
            if access.nat_i_p:
                return access.nat_i_p
        # only the primary interface is reported
        break
    return ""


class ComputeInstanceProvider(ZonalProvider):
    kind = "Compute Instance"

    def list_resources(self, scope: Scope, ctx) -> Iterable[ResourceRecord]:
        for instance in ctx.clients.instances().list(project=ctx.project_id, zone=scope.name):
            attrs = [
                ("Name", instance.name),
                ("Machine Type", last_segment(instance.machine_type)),
                ("Status", instance.status),
                ("Zone", scope.name),
                ("Created", format_timestamp(instance.creation_timestamp)),
            ]
            ip = _external_ip(instance)
            if ip:
                attrs.append(("External IP", ip))
            yield ResourceRecord(self.kind, scope, attrs)


class PersistentDiskProvider(ZonalProvider):
    kind = "Persistent Disk"

    def list_resources(self, scope: Scope, ctx) -> Iterable[ResourceRecord]:
        for disk in ctx.clients.disks().list(project=ctx.project_id, zone=scope.name):
            yield ResourceRecord(self.kind, scope, [
                ("Name", disk.name),
                ("Size", f"{disk.size_gb} GB"),
                ("Type", last_segment(disk.type_)),
                ("Status", disk.status),
                ("Zone", scope.name),
            ])


class SnapshotProvider(ResourceProvider):
    kind = "Snapshot"
    scopes = frozenset({ScopeKind.GLOBAL})
    placement = Placement.TRAILING
    section_title = "GLOBAL SNAPSHOTS"

    def list_resources(self, scope: Scope, ctx) -> Iterable[ResourceRecord]:
        for snapshot in ctx.clients.snapshots().list(project=ctx.project_id):
            yield ResourceRecord(self.kind, scope, [
                ("Name", snapshot.name),
                ("Disk Size", f"{snapshot.disk_size_gb} GB"),
                ("Status", snapshot.status),
                ("Created", format_timestamp(snapshot.creation_timestamp)),
            ])
