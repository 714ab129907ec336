from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ScopeKind(str, Enum):
    GLOBAL = "Global"
    REGION = "Region"
    ZONE   = "Zone"


@dataclass(frozen=True)
class Scope:
    kind: ScopeKind
    name: str                           # "global", "us-central1", "us-central1-a"
    parent_region: Optional[str] = None  # set for zones only

    def __post_init__(self) -> None:
        if self.kind == ScopeKind.ZONE and not self.parent_region:
            raise ValueError(f"zone scope '{self.name}' has no parent region")
        if self.kind != ScopeKind.ZONE and self.parent_region is not None:
            raise ValueError(f"{self.kind.value} scope '{self.name}' cannot have a parent region")

    @classmethod
    def region(cls, name: str) -> "Scope":
        return cls(ScopeKind.REGION, name)

    @classmethod
    def zone(cls, name: str, parent_region: str) -> "Scope":
        return cls(ScopeKind.ZONE, name, parent_region)

    @property
    def is_global(self) -> bool:
        return self.kind == ScopeKind.GLOBAL

    def __str__(self) -> str:
        return self.name


GLOBAL_SCOPE = Scope(ScopeKind.GLOBAL, "global")
