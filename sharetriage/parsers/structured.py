r"""
Structured (JSON) log parser.

Document shape::

    {"entries": [
        {"level": "Warn",
         "eventProperties": {
             "<label>": {
                 "Type": "FileResult",
                 "FileResult": {
                     "FileInfo": {"FullName": "\\\\SRV\\share\\f.txt",
                                  "CreationTime": "...", "LastWriteTime": "..."},
                     "MatchedRule": {"RuleName": "...", "Triage": "Red"}}}}}]}

Only entries at the warning level are considered. Inside an entry every
event property is a mapping whose object values are candidate file
properties; a candidate becomes a Finding when its matched rule carries
a triage label. Everything else is skipped without error.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..findings.models import Finding
from .timestamps import parse_timestamp

logger = logging.getLogger(__name__)

WARNING_LEVEL = "Warn"


class FileInfo(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    full_name: str = Field(default="", alias="FullName")
    creation_time: Optional[datetime] = Field(default=None, alias="CreationTime")
    last_write_time: Optional[datetime] = Field(default=None, alias="LastWriteTime")

    @field_validator("full_name", mode="before")
    @classmethod
    def _string_or_empty(cls, v: Any) -> str:
        return v if isinstance(v, str) else ""

    @field_validator("creation_time", "last_write_time", mode="before")
    @classmethod
    def _tolerant_timestamp(cls, v: Any) -> Optional[datetime]:
        return parse_timestamp(v)


class MatchedRule(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    rule_name: str = Field(default="", alias="RuleName")
    triage: str = Field(default="", alias="Triage")

    @field_validator("rule_name", "triage", mode="before")
    @classmethod
    def _label(cls, v: Any) -> str:
        if v is None or isinstance(v, (dict, list)):
            return ""
        return str(v).strip()


class FileResult(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    file_info: Optional[FileInfo] = Field(default=None, alias="FileInfo")
    matched_rule: Optional[MatchedRule] = Field(default=None, alias="MatchedRule")

    @field_validator("file_info", "matched_rule", mode="before")
    @classmethod
    def _mapping_or_none(cls, v: Any) -> Any:
        return v if isinstance(v, Mapping) else None

    def to_finding(self) -> Optional[Finding]:
        if self.matched_rule is None or not self.matched_rule.triage:
            return None
        info = self.file_info or FileInfo()
        return Finding(
            rating=self.matched_rule.triage,
            rights="",
            full_path=info.full_name,
            creation_time=info.creation_time,
            last_write_time=info.last_write_time,
            context="",
        )


def _candidates(entry: Mapping[str, Any]) -> List[Mapping[str, Any]]:
    event_properties = entry.get("eventProperties")
    if not isinstance(event_properties, Mapping):
        return []
    out: List[Mapping[str, Any]] = []
    for event in event_properties.values():
        if not isinstance(event, Mapping):
            continue
        out.extend(value for value in event.values() if isinstance(value, Mapping))
    return out


def parse_structured(document: Any) -> List[Finding]:
    """Walk entries -> event properties -> file properties and emit findings."""
    entries = document.get("entries") if isinstance(document, Mapping) else None
    if not isinstance(entries, list):
        return []

    findings: List[Finding] = []
    for entry in entries:
        if not isinstance(entry, Mapping) or entry.get("level") != WARNING_LEVEL:
            continue
        for candidate in _candidates(entry):
            try:
                finding = FileResult.model_validate(candidate).to_finding()
            except ValidationError as e:
                logger.debug("Skipping malformed file properties: %s", e)
                continue
            if finding is not None:
                findings.append(finding)

    logger.debug("Structured parser: %d findings from %d entries", len(findings), len(entries))
    return findings


def is_structured_document(document: Any) -> bool:
    return isinstance(document, dict) and isinstance(document.get("entries"), list)
