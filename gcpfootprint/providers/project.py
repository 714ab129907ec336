from typing import Iterable

from gcpfootprint.models.record import ResourceRecord
from gcpfootprint.models.scope import Scope, ScopeKind
from gcpfootprint.providers.base import Placement, ResourceProvider, enum_name, format_timestamp


class ProjectInfoProvider(ResourceProvider):
    kind = "Project"
    scopes = frozenset({ScopeKind.GLOBAL})
    placement = Placement.HEADER
    section_title = "PROJECT INFORMATION"

    def list_resources(self, scope: Scope, ctx) -> Iterable[ResourceRecord]:
        project = ctx.clients.projects().get_project(name=f"projects/{ctx.project_id}")
        # name is "projects/<number>" in the v3 API
        number = project.name.split("/", 1)[-1] if project.name else ""
        yield ResourceRecord(self.kind, scope, [
            ("Name", project.display_name),
            ("Project ID", project.project_id),
            ("Project Number", number),
            ("State", enum_name(project.state)),
            ("Create Time", format_timestamp(project.create_time)),
        ])
