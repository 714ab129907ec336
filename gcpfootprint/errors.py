"""
Error taxonomy.

Only setup errors propagate out of a run. Provider failures are reported as
ProviderOutcome values and never raised past the provider boundary.
"""


class FootprintError(Exception):
    """Base class for gcpfootprint errors."""


class SetupError(FootprintError):
    """Fatal error raised before any scope is processed."""


class ConfigurationError(SetupError):
    """Missing project identifier, invalid config file or value."""


class OutputSinkError(SetupError):
    """The report file could not be created."""
