"""
Scope enumeration.

The scope sequence is a pure function of the region catalog: the global
scope, then each region followed by its derived zones. Zones are named
'<region>-<suffix>' and are never checked for existence here; providers
report a missing zone as not applicable.
"""
from typing import Iterable, List, Sequence, Tuple

from gcpfootprint.errors import ConfigurationError
from gcpfootprint.models.scope import GLOBAL_SCOPE, Scope


class ScopeEnumerator:
    def __init__(self, regions: Iterable[str], zone_suffixes: Sequence[str] = ("a",)):
        self.regions: Tuple[str, ...] = tuple(regions)
        self.zone_suffixes: Tuple[str, ...] = tuple(zone_suffixes)

        if not self.regions:
            raise ConfigurationError("region catalog is empty")
        seen = set()
        for region in self.regions:
            if not region:
                raise ConfigurationError("region names must be non-empty")
            if region in seen:
                raise ConfigurationError(f"region '{region}' listed twice")
            seen.add(region)
        if len(set(self.zone_suffixes)) != len(self.zone_suffixes):
            raise ConfigurationError("zone suffixes must be unique")

    def zones_for(self, region: str) -> List[Scope]:
        return [Scope.zone(f"{region}-{suffix}", region) for suffix in self.zone_suffixes]

    def enumerate(self) -> Tuple[Scope, ...]:
        scopes: List[Scope] = [GLOBAL_SCOPE]
        for region in self.regions:
            scopes.append(Scope.region(region))
            scopes.extend(self.zones_for(region))
        return tuple(scopes)
