from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Iterable, List, Sequence, Union

from ..base.errors import ConfigurationError, ErrorCode, TriageError
from ..findings.models import AggregatedFinding, Finding
from .csv_report import render_csv
from .html_report import render_html
from .types import ReportArtifact, iso_now

logger = logging.getLogger(__name__)


class ReportComposer:
    """
    Renders triaged records into report artifacts and writes them to disk.

    Rendering is pure; only ``save`` touches the filesystem.
    """

    RENDERERS = ("html", "csv")

    def __init__(self, source: Union[str, Path], title: str = "File Share Triage Report") -> None:
        self._source = str(source)
        self._title = title

    def compose(
        self,
        records: Sequence[Union[Finding, AggregatedFinding]],
        formats: Iterable[str] = RENDERERS,
        aggregated: bool = True,
    ) -> List[ReportArtifact]:
        artifacts: List[ReportArtifact] = []
        for fmt in formats:
            fmt = fmt.lower()
            created_at = iso_now()
            if fmt == "html":
                content = render_html(records, title=self._title, source=self._source, created_at=created_at)
            elif fmt == "csv":
                content = render_csv(records, aggregated=aggregated)
            else:
                raise ConfigurationError(
                    f"Unsupported report format: {fmt}",
                    details={"format": fmt, "allowed": list(self.RENDERERS)},
                )
            artifacts.append(
                ReportArtifact(
                    report_id=str(uuid.uuid4()),
                    created_at=created_at,
                    source=self._source,
                    format=fmt,
                    aggregated=aggregated,
                    record_count=len(records),
                    content=content,
                )
            )
        return artifacts

    def output_path(self, artifact: ReportArtifact, out_dir: Union[str, Path]) -> Path:
        stem = Path(self._source).stem or "report"
        suffix = "_aggregated" if artifact.aggregated else ""
        return Path(out_dir) / f"{stem}_triage{suffix}{artifact.extension}"

    def save(self, artifact: ReportArtifact, out_dir: Union[str, Path]) -> Path:
        target = self.output_path(artifact, out_dir)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            # newline="" keeps the CSV writer's CRLF row endings intact
            with open(target, "w", encoding="utf-8", newline="") as fh:
                fh.write(artifact.content)
        except OSError as e:
            raise TriageError(
                ErrorCode.REPORT_WRITE_FAILED,
                f"Cannot write {artifact.format} report to {target}: {e}",
                details={"path": str(target), "format": artifact.format},
            )
        logger.info("Wrote %s report (%d records) to %s", artifact.format.upper(), artifact.record_count, target)
        return target
