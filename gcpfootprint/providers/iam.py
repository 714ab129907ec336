from typing import Iterable

from gcpfootprint.models.record import ResourceRecord
from gcpfootprint.models.scope import Scope, ScopeKind
from gcpfootprint.providers.base import ResourceProvider


class IamBindingProvider(ResourceProvider):
    """One record per role binding in the project's IAM policy."""

    kind = "IAM Binding"
    scopes = frozenset({ScopeKind.GLOBAL})

    def list_resources(self, scope: Scope, ctx) -> Iterable[ResourceRecord]:
        policy = ctx.clients.projects().get_iam_policy(resource=f"projects/{ctx.project_id}")
        for binding in policy.bindings:
            yield ResourceRecord(self.kind, scope, [
                ("Role", binding.role),
                ("Members", ", ".join(binding.members)),
            ])


class ServiceAccountProvider(ResourceProvider):
    kind = "Service Account"
    scopes = frozenset({ScopeKind.GLOBAL})

    def list_resources(self, scope: Scope, ctx) -> Iterable[ResourceRecord]:
        for account in ctx.clients.iam().list_service_accounts(name=f"projects/{ctx.project_id}"):
            yield ResourceRecord(self.kind, scope, [
                ("Email", account.email),
                ("Display Name", account.display_name),
                ("Unique ID", account.unique_id),
            ])
