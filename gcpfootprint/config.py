"""
Run configuration.

Defaults reproduce the built-in region catalog; a YAML file
('gcpfootprint.yaml' in the working directory, or an explicit path) can
override any field.
"""
import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

import yaml

from gcpfootprint.errors import ConfigurationError

DEFAULT_CONFIG_FILE = "gcpfootprint.yaml"

DEFAULT_REGIONS = [
    "us-central1", "us-east1", "us-east4", "us-west1", "us-west2", "us-west3", "us-west4",
    "europe-west1", "europe-west2", "europe-west3", "europe-west4", "europe-west6",
    "europe-north1", "europe-central2",
    "asia-east1", "asia-east2", "asia-northeast1", "asia-northeast2", "asia-northeast3",
    "asia-south1", "asia-south2", "asia-southeast1", "asia-southeast2",
    "australia-southeast1", "australia-southeast2",
    "northamerica-northeast1", "northamerica-northeast2",
    "southamerica-east1", "southamerica-west1",
    "me-west1", "me-central1",
    "africa-south1",
]

MAX_WORKERS_LIMIT = 64


@dataclass
class FootprintConfig:
    regions: List[str] = field(default_factory=lambda: list(DEFAULT_REGIONS))
    zone_suffixes: List[str] = field(default_factory=lambda: ["a"])
    max_workers: int = 8
    grace_period: float = 10.0
    timeout: Optional[float] = None
    output_dir: str = "."
    disabled_providers: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if not isinstance(self.regions, list) or not all(isinstance(r, str) and r for r in self.regions):
            raise ConfigurationError("'regions' must be a list of region names")
        if not isinstance(self.zone_suffixes, list) or not all(
            isinstance(s, str) and s for s in self.zone_suffixes
        ):
            raise ConfigurationError("'zone_suffixes' must be a list of non-empty strings")
        if isinstance(self.max_workers, bool) or not isinstance(self.max_workers, int):
            raise ConfigurationError("'max_workers' must be an integer")
        if not 1 <= self.max_workers <= MAX_WORKERS_LIMIT:
            raise ConfigurationError(f"'max_workers' must be between 1 and {MAX_WORKERS_LIMIT}")
        if not _is_number(self.grace_period) or self.grace_period < 0:
            raise ConfigurationError("'grace_period' must be a non-negative number of seconds")
        if self.timeout is not None and (not _is_number(self.timeout) or self.timeout <= 0):
            raise ConfigurationError("'timeout' must be a positive number of seconds")
        if not isinstance(self.output_dir, str) or not self.output_dir:
            raise ConfigurationError("'output_dir' must be a path")
        if not isinstance(self.disabled_providers, list):
            raise ConfigurationError("'disabled_providers' must be a list of resource kinds")

    def with_overrides(self, **overrides: Any) -> "FootprintConfig":
        """Copy with CLI overrides applied; None values leave the field alone."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return FootprintConfig(**values)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _read_yaml(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except OSError as exc:
        raise ConfigurationError(f"cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"invalid YAML in {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: top level must be a mapping")
    return data


def load_config(path: Optional[str] = None) -> FootprintConfig:
    """
    Load configuration from *path*, or from 'gcpfootprint.yaml' in the
    working directory when no path is given and that file exists.
    """
    if path is None:
        if not os.path.exists(DEFAULT_CONFIG_FILE):
            return FootprintConfig()
        path = DEFAULT_CONFIG_FILE
    elif not os.path.exists(path):
        raise ConfigurationError(f"config file {path} does not exist")

    data = _read_yaml(path)
    known = {f.name for f in fields(FootprintConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(f"{path}: unknown setting(s): {', '.join(unknown)}")

    try:
        return FootprintConfig(**data)
    except TypeError as exc:
        raise ConfigurationError(f"{path}: {exc}") from exc
