"""
Scope enumeration tests.
"""
import pytest

from gcpfootprint.config import DEFAULT_REGIONS
from gcpfootprint.errors import ConfigurationError
from gcpfootprint.models.scope import GLOBAL_SCOPE, Scope, ScopeKind
from gcpfootprint.scopes import ScopeEnumerator


class TestScopeEnumerator:
    def setup_method(self):
        self.enumerator = ScopeEnumerator(["us-central1", "europe-west1"], ["a", "b"])

    def test_global_scope_first(self):
        scopes = self.enumerator.enumerate()
        assert scopes[0] == GLOBAL_SCOPE
        assert sum(1 for s in scopes if s.kind == ScopeKind.GLOBAL) == 1

    def test_order(self):
        names = [s.name for s in self.enumerator.enumerate()]
        assert names == [
            "global",
            "us-central1", "us-central1-a", "us-central1-b",
            "europe-west1", "europe-west1-a", "europe-west1-b",
        ]

    def test_deterministic(self):
        again = ScopeEnumerator(["us-central1", "europe-west1"], ["a", "b"])
        assert self.enumerator.enumerate() == self.enumerator.enumerate()
        assert self.enumerator.enumerate() == again.enumerate()

    def test_zone_follows_its_region(self):
        seen_regions = set()
        for scope in ScopeEnumerator(DEFAULT_REGIONS, ["a", "b", "c"]).enumerate():
            if scope.kind == ScopeKind.REGION:
                seen_regions.add(scope.name)
            elif scope.kind == ScopeKind.ZONE:
                assert scope.parent_region in seen_regions
                assert scope.name.startswith(scope.parent_region + "-")

    def test_zones_for(self):
        zones = self.enumerator.zones_for("us-central1")
        assert [z.name for z in zones] == ["us-central1-a", "us-central1-b"]
        assert all(z.parent_region == "us-central1" for z in zones)

    def test_no_zone_suffixes(self):
        scopes = ScopeEnumerator(["us-east1"], []).enumerate()
        assert [s.kind for s in scopes] == [ScopeKind.GLOBAL, ScopeKind.REGION]

    def test_default_catalog_size(self):
        scopes = ScopeEnumerator(DEFAULT_REGIONS).enumerate()
        assert len(scopes) == 1 + 2 * len(DEFAULT_REGIONS)

    def test_empty_catalog_rejected(self):
        with pytest.raises(ConfigurationError):
            ScopeEnumerator([])

    def test_duplicate_region_rejected(self):
        with pytest.raises(ConfigurationError):
            ScopeEnumerator(["us-east1", "us-east1"])

    def test_duplicate_suffix_rejected(self):
        with pytest.raises(ConfigurationError):
            ScopeEnumerator(["us-east1"], ["b", "b"])


class TestScope:
    def test_zone_requires_parent(self):
        with pytest.raises(ValueError):
            Scope(ScopeKind.ZONE, "us-east1-b")

    def test_region_rejects_parent(self):
        with pytest.raises(ValueError):
            Scope(ScopeKind.REGION, "us-east1", parent_region="us")

    def test_scopes_are_values(self):
        assert Scope.region("us-east1") == Scope.region("us-east1")
        assert hash(Scope.zone("us-east1-b", "us-east1")) == hash(Scope.zone("us-east1-b", "us-east1"))
        assert str(Scope.region("us-east1")) == "us-east1"
