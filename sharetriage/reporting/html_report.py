# sharetriage/reporting/html_report.py
# Colour-coded, filterable HTML report.

from __future__ import annotations

import html
from collections import Counter
from typing import Dict, List, Sequence, Union

from ..findings.models import AggregatedFinding, Finding
from ..findings.severity import DEFAULT_LABEL, Rating, label_for
from ..parsers.timestamps import format_timestamp

ROW_BACKGROUNDS: Dict[str, str] = {
    Rating.RED.value: "#ffcccc",
    Rating.YELLOW.value: "#ffffcc",
    Rating.GREEN.value: "#ccffcc",
    Rating.BLACK.value: "#000000",
}
DEFAULT_BACKGROUND = "#ffffff"
BLACK_TEXT_COLOUR = "#ffffff"

COLUMNS = ["Rating", "Rights", "Hostname(s)", "FullPath(s)", "CreationTime", "LastWriteTime", "Context"]

_STYLE = """
body { font-family: Segoe UI, Arial, sans-serif; font-size: 13px; margin: 16px; }
table { border-collapse: collapse; width: 100%; }
th, td { border: 1px solid #999999; padding: 4px 6px; vertical-align: top; text-align: left; }
th { background: #333333; color: #ffffff; position: sticky; top: 0; }
pre { margin: 0; white-space: pre-wrap; word-break: break-all; }
.summary span { margin-right: 16px; }
#filter { width: 40%; margin: 8px 0; padding: 4px; }
"""

_SCRIPT = """
document.getElementById('filter').addEventListener('input', function () {
  var needle = this.value.toLowerCase();
  document.querySelectorAll('#findings tbody tr').forEach(function (row) {
    row.style.display = row.textContent.toLowerCase().indexOf(needle) === -1 ? 'none' : '';
  });
});
"""


def escape(text: str) -> str:
    """Escape ``&``, ``<`` and ``>`` in free text."""
    return html.escape(text or "", quote=False)


def _multi(values: Sequence[str]) -> str:
    return "<br>".join(escape(v) for v in values)


def _context_cell(record: Union[Finding, AggregatedFinding]) -> str:
    if not record.context:
        return ""
    if record.rating == Rating.BLACK.value:
        return f'<span style="white-space: pre-wrap; color: {BLACK_TEXT_COLOUR}">{escape(record.context)}</span>'
    return f"<pre>{escape(record.context)}</pre>"


def _row(record: Union[Finding, AggregatedFinding]) -> str:
    background = ROW_BACKGROUNDS.get(record.rating, DEFAULT_BACKGROUND)
    style = f"background-color: {background}"
    if record.rating == Rating.BLACK.value:
        style += f"; color: {BLACK_TEXT_COLOUR}"
    cells = [
        escape(record.rating),
        escape(record.rights),
        _multi(record.hostnames),
        _multi(record.full_paths),
        escape(format_timestamp(record.creation_time)),
        escape(format_timestamp(record.last_write_time)),
        _context_cell(record),
    ]
    return f'<tr style="{style}">' + "".join(f"<td>{c}</td>" for c in cells) + "</tr>"


def build_summary(records: Sequence[Union[Finding, AggregatedFinding]]) -> Dict[str, int]:
    """Record count per rating label, most severe first."""
    counts = Counter(label_for(r.rating) for r in records)
    order = [r.value for r in Rating] + [DEFAULT_LABEL]
    return {label: counts.get(label, 0) for label in order}


def render_html(
    records: Sequence[Union[Finding, AggregatedFinding]],
    title: str = "File Share Triage Report",
    source: str = "",
    created_at: str = "",
) -> str:
    summary = build_summary(records)
    lines: List[str] = []
    lines.append("<!DOCTYPE html>")
    lines.append('<html lang="en">')
    lines.append("<head>")
    lines.append('<meta charset="utf-8">')
    lines.append(f"<title>{escape(title)}</title>")
    lines.append(f"<style>{_STYLE}</style>")
    lines.append("</head>")
    lines.append("<body>")
    lines.append(f"<h1>{escape(title)}</h1>")
    if source:
        lines.append(f"<p>Source: <code>{escape(source)}</code></p>")
    if created_at:
        lines.append(f"<p>Generated: {escape(created_at)}</p>")
    lines.append('<p class="summary">')
    lines.append(f"<span><b>Total:</b> {len(records)}</span>")
    for label, count in summary.items():
        lines.append(f"<span><b>{escape(label)}:</b> {count}</span>")
    lines.append("</p>")
    lines.append('<input id="filter" type="search" placeholder="Filter rows...">')
    lines.append('<table id="findings">')
    lines.append("<thead><tr>" + "".join(f"<th>{c}</th>" for c in COLUMNS) + "</tr></thead>")
    lines.append("<tbody>")
    lines.extend(_row(r) for r in records)
    lines.append("</tbody>")
    lines.append("</table>")
    lines.append(f"<script>{_SCRIPT}</script>")
    lines.append("</body>")
    lines.append("</html>")
    return "\n".join(lines) + "\n"
