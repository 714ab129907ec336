"""
VPC networks, subnets and firewall rules.
"""
from typing import Iterable

from gcpfootprint.models.record import ResourceRecord
from gcpfootprint.models.scope import Scope, ScopeKind
from gcpfootprint.providers.base import Placement, ResourceProvider, format_timestamp, http_status, last_segment


class VpcNetworkProvider(ResourceProvider):
    # Networks are global resources: listed once, in the global section.
    kind = "VPC Network"
    scopes = frozenset({ScopeKind.GLOBAL})

    def list_resources(self, scope: Scope, ctx) -> Iterable[ResourceRecord]:
        for network in ctx.clients.networks().list(project=ctx.project_id):
            yield ResourceRecord(self.kind, scope, [
                ("Name", network.name),
                ("Description", network.description),
                ("Auto Create Subnetworks", bool(network.auto_create_subnetworks)),
                ("Created", format_timestamp(network.creation_timestamp)),
            ])


class SubnetProvider(ResourceProvider):
    kind = "Subnet"
    scopes = frozenset({ScopeKind.REGION})

    def is_scope_absent(self, exc: BaseException, scope: Scope) -> bool:
        # Compute answers 400 "Unknown region." for regions it does not serve
        if super().is_scope_absent(exc, scope):
            return True
        return http_status(exc) == 400 and "unknown region" in str(exc).lower()

    def list_resources(self, scope: Scope, ctx) -> Iterable[ResourceRecord]:
        for subnet in ctx.clients.subnetworks().list(project=ctx.project_id, region=scope.name):
            yield ResourceRecord(self.kind, scope, [
                ("Name", subnet.name),
                ("Network", last_segment(subnet.network)),
                ("IP Range", subnet.ip_cidr_range),
                ("Region", last_segment(subnet.region) or scope.name),
                ("Created", format_timestamp(subnet.creation_timestamp)),
            ])


class FirewallRuleProvider(ResourceProvider):
    kind = "Firewall Rule"
    scopes = frozenset({ScopeKind.GLOBAL})
    placement = Placement.TRAILING
    section_title = "GLOBAL FIREWALL RULES"

    def list_resources(self, scope: Scope, ctx) -> Iterable[ResourceRecord]:
        for rule in ctx.clients.firewalls().list(project=ctx.project_id):
            yield ResourceRecord(self.kind, scope, [
                ("Name", rule.name),
                ("Direction", rule.direction),
                ("Priority", rule.priority),
                ("Source Ranges", ", ".join(rule.source_ranges)),
                ("Target Tags", ", ".join(rule.target_tags)),
            ])
