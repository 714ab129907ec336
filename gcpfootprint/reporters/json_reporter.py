"""
JSON run summary: counts per resource kind and every failure.
"""
import json

from gcpfootprint import __version__
from gcpfootprint.models.summary import RunSummary


def build_summary(summary: RunSummary, ctx) -> str:
    report = {
        "meta": {
            "generated": ctx.clock().strftime("%Y-%m-%dT%H:%M:%S"),
            "project_id": ctx.project_id,
            "tool": "gcpfootprint",
            "version": __version__,
            "cancelled": summary.cancelled,
            "abandoned": summary.abandoned,
        },
        "totals": {
            "records": summary.total_records,
            "invocations": len(summary.stats),
            "failures": len(summary.failures),
            "not_applicable": len(summary.not_applicable),
        },
        "counts": summary.counts_by_kind(),
        "failures": [s.to_dict() for s in summary.failures],
        "invocations": [s.to_dict() for s in summary.stats],
    }
    return json.dumps(report, indent=2)
