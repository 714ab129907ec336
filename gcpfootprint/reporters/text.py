"""
Plain-text footprint report.

The document is written as it is produced: every section title and every
resource block goes out in a single write followed by a flush, so a run
that dies halfway leaves a truncated but well-formed report.
"""
from typing import IO, Optional

from jinja2 import Environment

from gcpfootprint.errors import OutputSinkError
from gcpfootprint.models.record import ResourceRecord

_HEADER_TEMPLATE = """\
GCP FOOTPRINT REPORT
====================
Generated: {{ generated }}
Project ID: {{ project_id }}

This report contains information about GCP resources in your project.
"""

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def report_filename(project_id: str) -> str:
    return f"gcp_footprint_{project_id}.txt"


def format_section(title: str) -> str:
    return f"\n\n{title}\n{'=' * len(title)}\n"


def format_record(record: ResourceRecord) -> str:
    return f"\n[{record.kind}]\n{record.render()}\n"


class TextReporter:
    def __init__(self, sink: IO[str], owns_sink: bool = False):
        self._sink = sink
        self._owns_sink = owns_sink
        self._section: Optional[str] = None
        self._env = Environment(autoescape=False, keep_trailing_newline=True)
        self.sections_written = 0
        self.records_written = 0

    @classmethod
    def open(cls, path: str) -> "TextReporter":
        try:
            fh = open(path, "w", encoding="utf-8", newline="\n")
        except OSError as exc:
            raise OutputSinkError(f"cannot create output file {path}: {exc}") from exc
        return cls(fh, owns_sink=True)

    def _write(self, text: str) -> None:
        self._sink.write(text)
        self._sink.flush()

    def begin(self, ctx) -> None:
        template = self._env.from_string(_HEADER_TEMPLATE)
        self._write(template.render(
            generated=ctx.clock().strftime(_TIMESTAMP_FORMAT),
            project_id=ctx.project_id,
        ))

    def begin_section(self, title: str) -> None:
        if self._section is not None:
            self.end_section()
        self._section = title
        self._write(format_section(title))
        self.sections_written += 1

    def append_record(self, record: ResourceRecord) -> None:
        if self._section is None:
            raise RuntimeError("append_record() called outside a section")
        self._write(format_record(record))
        self.records_written += 1

    def end_section(self) -> None:
        self._section = None

    def finish(self) -> None:
        self._section = None
        self._sink.flush()
        if self._owns_sink:
            self._sink.close()
