from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class ReportArtifact:
    report_id: str
    created_at: str  # ISO8601
    source: str  # input file the report was built from
    format: str  # "html" or "csv"
    aggregated: bool
    record_count: int
    content: str

    @property
    def extension(self) -> str:
        return f".{self.format}"


def iso_now() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")
