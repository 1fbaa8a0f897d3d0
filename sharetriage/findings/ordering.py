# sharetriage/findings/ordering.py
# Deterministic ordering: severity rank first, then one caller-chosen field.

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Iterable, List, Tuple, TypeVar, Union

from ..base.errors import ConfigurationError, ErrorCode
from .models import AggregatedFinding, Finding

logger = logging.getLogger(__name__)

Record = TypeVar("Record", Finding, AggregatedFinding)


class SortKey(str, Enum):
    RATING = "Rating"
    RIGHTS = "Rights"
    FULL_NAME = "FullName"
    CREATION_TIME = "CreationTime"
    LAST_WRITE_TIME = "LastWriteTime"
    HOSTNAME = "Hostname"


DEFAULT_SORT_KEY = SortKey.FULL_NAME

_KEYS_BY_FOLDED_NAME = {key.value.casefold(): key for key in SortKey}


def resolve_sort_key(name: Union[str, SortKey, None]) -> SortKey:
    """
    Validate a secondary key against the allow-list.

    Matching is case-insensitive ("fullname" -> SortKey.FULL_NAME).
    Raises ConfigurationError for anything else, including None.
    """
    if isinstance(name, SortKey):
        return name
    key = _KEYS_BY_FOLDED_NAME.get((name or "").strip().casefold())
    if key is None:
        raise ConfigurationError(
            f"Invalid sort key {name!r}; expected one of: {', '.join(k.value for k in SortKey)}",
            details={"sort_by": name, "allowed": [k.value for k in SortKey]},
            code=ErrorCode.CONFIG_INVALID_SORT_KEY,
        )
    return key


def _ordering_key(record: Union[Finding, AggregatedFinding], key: SortKey) -> Tuple[int, int, Any]:
    value = record.sort_value(key.value)
    # Absent values (None / "") go after present ones within the same rank.
    if value is None or value == "":
        return (record.severity_rank, 1, "")
    return (record.severity_rank, 0, value)


def sort_findings(records: Iterable[Record], sort_by: Union[str, SortKey] = DEFAULT_SORT_KEY) -> List[Record]:
    """
    Return a new list ordered by severity rank, then by ``sort_by``.

    The sort is stable: records equal on both keys keep their input order.
    """
    key = resolve_sort_key(sort_by)
    ordered = sorted(records, key=lambda record: _ordering_key(record, key))
    logger.debug("Sorted %d records by severity, %s", len(ordered), key.value)
    return ordered
