from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Tuple, Union

from gcpfootprint.models.scope import GLOBAL_SCOPE, Scope

Attributes = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]


def render_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class ResourceRecord:
    kind: str                 # display name, e.g. "Compute Instance"
    scope: Scope = GLOBAL_SCOPE
    attributes: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any ordered mapping or pair sequence; freeze it in display order.
        pairs = self.attributes.items() if isinstance(self.attributes, Mapping) else self.attributes
        frozen = tuple((str(k), render_value(v)) for k, v in pairs)
        object.__setattr__(self, "attributes", frozen)

    def get(self, name: str, default: str = "") -> str:
        for key, value in self.attributes:
            if key == name:
                return value
        return default

    @property
    def name(self) -> str:
        return self.get("Name")

    def render(self) -> str:
        """Attribute block as ``Name: value`` lines."""
        return "\n".join(f"{k}: {v}" for k, v in self.attributes)
