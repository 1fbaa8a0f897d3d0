# sharetriage/pipeline.py
# parse -> classify -> sort -> [aggregate -> sort]

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from .base.config import TriageConfig, get_config
from .findings.aggregator import aggregate as aggregate_findings
from .findings.models import AggregatedFinding, Finding
from .findings.ordering import SortKey, resolve_sort_key, sort_findings
from .findings.severity import Rating, classify
from .parsers.dispatch import load_findings

logger = logging.getLogger(__name__)

TriageResult = Union[List[Finding], List[AggregatedFinding]]


def filter_by_rating(findings: Iterable[Finding], min_rating: Optional[Union[str, Rating]]) -> List[Finding]:
    """Keep findings at least as severe as ``min_rating`` (all of them when None)."""
    if min_rating is None:
        return list(findings)
    floor = classify(min_rating)
    return [f for f in findings if f.severity_rank <= floor]


def triage(
    findings: Sequence[Finding],
    sort_by: Union[str, SortKey] = SortKey.FULL_NAME,
    aggregate: bool = True,
    min_rating: Optional[str] = None,
) -> TriageResult:
    """
    Order parsed findings and optionally fold them per file.

    ``sort_by`` is validated before anything else happens.
    """
    key = resolve_sort_key(sort_by)
    kept = filter_by_rating(findings, min_rating)
    ordered = sort_findings(kept, key)
    if not aggregate:
        return ordered
    return sort_findings(aggregate_findings(ordered), key)


def triage_file(path: Union[str, Path], config: Optional[TriageConfig] = None) -> TriageResult:
    cfg = config or get_config()
    findings = load_findings(path)
    result = triage(findings, cfg.sort_by, aggregate=cfg.aggregate, min_rating=cfg.min_rating)
    logger.info(
        "Triaged %d findings from %s into %d %s",
        len(findings),
        path,
        len(result),
        "aggregated records" if cfg.aggregate else "records",
    )
    return result
