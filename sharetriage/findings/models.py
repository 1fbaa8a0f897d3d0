# sharetriage/findings/models.py
# Normalized finding records shared by parsers, sorter, aggregator and writers.

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from .hostnames import extract_hostname, file_basename
from .severity import classify

# Separator used when a multi-valued column is rendered as one string.
LIST_JOINER = "\n"


class _TriageRecord(BaseModel):
    """Fields and read surface common to raw and aggregated findings."""

    model_config = ConfigDict(frozen=True)

    rating: str = ""
    rights: str = ""
    creation_time: Optional[datetime] = None
    last_write_time: Optional[datetime] = None
    context: str = ""

    @field_validator("rating", "rights", "context", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def severity_rank(self) -> int:
        return classify(self.rating)

    @property
    def hostnames_text(self) -> str:
        return LIST_JOINER.join(self.hostnames)

    @property
    def full_paths_text(self) -> str:
        return LIST_JOINER.join(self.full_paths)

    def sort_value(self, key: str) -> Any:
        """Value compared for the given secondary sort key name."""
        if key == "Rating":
            return self.rating
        if key == "Rights":
            return self.rights
        if key == "FullName":
            return self.full_paths_text
        if key == "Hostname":
            return self.hostnames_text
        if key == "CreationTime":
            return self.creation_time
        if key == "LastWriteTime":
            return self.last_write_time
        raise KeyError(key)


class Finding(_TriageRecord):
    """One match extracted from a single log entry or line."""

    full_path: str = ""

    @field_validator("full_path", mode="before")
    @classmethod
    def _path_none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def hostname(self) -> str:
        return extract_hostname(self.full_path)

    @property
    def file_name(self) -> str:
        return file_basename(self.full_path)

    @property
    def hostnames(self) -> Tuple[str, ...]:
        return (self.hostname,) if self.hostname else ()

    @property
    def full_paths(self) -> Tuple[str, ...]:
        return (self.full_path,) if self.full_path else ()


class AggregatedFinding(_TriageRecord):
    """All findings sharing a file basename, folded into one row."""

    file_name: str = ""
    hostnames: Tuple[str, ...] = Field(default_factory=tuple)
    full_paths: Tuple[str, ...] = Field(default_factory=tuple)
