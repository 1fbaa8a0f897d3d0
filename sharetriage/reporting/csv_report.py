# sharetriage/reporting/csv_report.py
# Flat CSV export: every field quoted, quotes doubled, line breaks collapsed.

from __future__ import annotations

import csv
import io
import re
from typing import List, Sequence, Union

from ..findings.models import AggregatedFinding, Finding
from ..parsers.timestamps import format_timestamp

LINE_BREAKS_RE = re.compile(r"[\r\n]+")

FINDING_COLUMNS = ["Rating", "Rights", "Hostname", "FullName", "CreationTime", "LastWriteTime", "Context"]
AGGREGATED_COLUMNS = ["FileName", "Rating", "Rights", "Hostnames", "FullPaths", "CreationTime", "LastWriteTime", "Context"]


def flatten_cell(value: str) -> str:
    """Collapse every run of CR/LF into a single space."""
    return LINE_BREAKS_RE.sub(" ", value or "")


def _row(record: Union[Finding, AggregatedFinding]) -> List[str]:
    tail = [
        format_timestamp(record.creation_time),
        format_timestamp(record.last_write_time),
        record.context,
    ]
    if isinstance(record, AggregatedFinding):
        head = [record.file_name, record.rating, record.rights, record.hostnames_text, record.full_paths_text]
    else:
        head = [record.rating, record.rights, record.hostname, record.full_path]
    return [flatten_cell(cell) for cell in head + tail]


def render_csv(records: Sequence[Union[Finding, AggregatedFinding]], aggregated: bool = False) -> str:
    """
    Render records as CSV text. The header follows the record type; the
    aggregated flag only picks the header for an empty report.
    """
    if records:
        aggregated = isinstance(records[0], AggregatedFinding)
        if any(isinstance(r, AggregatedFinding) != aggregated for r in records):
            raise TypeError("Cannot mix raw and aggregated findings in one CSV report")
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\r\n")
    writer.writerow(AGGREGATED_COLUMNS if aggregated else FINDING_COLUMNS)
    for record in records:
        writer.writerow(_row(record))
    return buf.getvalue()
