"""
The provider catalog. Order here is display order inside each section.
"""
from typing import Iterable, List

from gcpfootprint.errors import ConfigurationError
from gcpfootprint.providers.base import ResourceProvider
from gcpfootprint.providers.compute import (
    ComputeInstanceProvider,
    PersistentDiskProvider,
    SnapshotProvider,
)
from gcpfootprint.providers.containers import GkeClusterProvider
from gcpfootprint.providers.iam import IamBindingProvider, ServiceAccountProvider
from gcpfootprint.providers.network import FirewallRuleProvider, SubnetProvider, VpcNetworkProvider
from gcpfootprint.providers.project import ProjectInfoProvider
from gcpfootprint.providers.sql import CloudSqlInstanceProvider
from gcpfootprint.providers.storage import StorageBucketProvider

PROVIDERS = [
    ProjectInfoProvider,
    StorageBucketProvider,
    IamBindingProvider,
    ServiceAccountProvider,
    VpcNetworkProvider,
    ComputeInstanceProvider,
    GkeClusterProvider,
    CloudSqlInstanceProvider,
    SubnetProvider,
    PersistentDiskProvider,
    FirewallRuleProvider,
    SnapshotProvider,
]


def known_kinds() -> List[str]:
    return [p.kind for p in PROVIDERS]


def select_providers(disabled: Iterable[str] = ()) -> List[ResourceProvider]:
    """Instantiate the catalog minus the kinds named in *disabled*."""
    disabled = list(disabled)
    kinds = known_kinds()
    lowered = {k.lower(): k for k in kinds}
    unknown = [d for d in disabled if d.lower() not in lowered]
    if unknown:
        raise ConfigurationError(
            f"unknown resource kind(s) in disabled_providers: {', '.join(unknown)} "
            f"(known: {', '.join(kinds)})"
        )
    skip = {lowered[d.lower()] for d in disabled}
    return [cls() for cls in PROVIDERS if cls.kind not in skip]
