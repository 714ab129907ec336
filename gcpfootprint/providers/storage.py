from typing import Iterable

from gcpfootprint.models.record import ResourceRecord
from gcpfootprint.models.scope import Scope, ScopeKind
from gcpfootprint.providers.base import ResourceProvider, format_timestamp


class StorageBucketProvider(ResourceProvider):
    kind = "Storage Bucket"
    scopes = frozenset({ScopeKind.GLOBAL})

    def list_resources(self, scope: Scope, ctx) -> Iterable[ResourceRecord]:
        for bucket in ctx.clients.storage_client().list_buckets(project=ctx.project_id):
            yield ResourceRecord(self.kind, scope, [
                ("Name", bucket.name),
                ("Location", bucket.location),
                ("Storage Class", bucket.storage_class),
                ("Created", format_timestamp(bucket.time_created)),
            ])
