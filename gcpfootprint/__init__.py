"""gcpfootprint: inventory a GCP project's resources into a text report."""

__version__ = "1.0.0"
