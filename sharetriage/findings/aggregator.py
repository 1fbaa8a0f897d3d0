# sharetriage/findings/aggregator.py
# Folds findings that refer to the same file (by basename) into one record.

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Sequence, Union

from .models import AggregatedFinding, Finding

logger = logging.getLogger(__name__)


def _group_key(record: Union[Finding, AggregatedFinding], position: int) -> Union[str, int]:
    name = record.file_name
    if not name:
        # No basename: never merged with anything else.
        return position
    return name.casefold()


def _fold(group: Sequence[Union[Finding, AggregatedFinding]]) -> AggregatedFinding:
    best = group[0]
    hostnames = sorted({host for member in group for host in member.hostnames if host})
    full_paths = sorted({path for member in group for path in member.full_paths if path})
    return AggregatedFinding(
        file_name=best.file_name,
        rating=best.rating,
        rights=best.rights,
        creation_time=best.creation_time,
        last_write_time=best.last_write_time,
        context=best.context,
        hostnames=tuple(hostnames),
        full_paths=tuple(full_paths),
    )


def aggregate(sorted_records: Iterable[Union[Finding, AggregatedFinding]]) -> List[AggregatedFinding]:
    """
    Group already-sorted records by case-insensitive file basename.

    Scalar fields come from the first (best-ranked) member of each group;
    hostnames and full paths are the sorted, de-duplicated union across
    the group. Groups are emitted in order of their first member, so the
    output keeps the input ranking. Aggregated records are accepted as
    input too, which makes the operation idempotent.
    """
    groups: Dict[Union[str, int], List[Union[Finding, AggregatedFinding]]] = {}
    for position, record in enumerate(sorted_records):
        groups.setdefault(_group_key(record, position), []).append(record)

    folded = [_fold(members) for members in groups.values()]
    logger.debug("Aggregated %d groups", len(folded))
    return folded
