"""
Line-format parser for human-readable scanner logs.

Grammar (one finding per line; anything before the marker is an ignored
prefix such as ``[DOMAIN\\user@HOST] 2024-01-01 10:00:00Z``)::

    [File] {RATING}<RULE|RIGHTS|MATCH...|SIZE|TIMESTAMP>(PATH) CONTEXT

RATING
    Required. Any run of characters other than ``}``. Lines without
    ``[File] {...}`` are not findings and are skipped.
RIGHTS
    The pipe-delimited field directly after the rule name, when it is
    exactly ``R`` or ``RW``. Otherwise empty.
TIMESTAMP
    The last pipe-delimited field before the ``>`` that closes the
    field block, shaped ``YYYY-MM-DD[ T]HH:MM:SS[.fff]Z``. Parsed into
    ``creation_time``; an unparseable value leaves it unset.
PATH
    Opens at the first ``>(`` (the ``>`` closing the field block) whose
    ``(`` is followed by either two separators (a UNC share path) or a
    drive letter (``C:\\``, a local scan root). Parenthesised text inside
    MATCH is never taken as the path. PATH ends at the first ``)`` that
    balances the opening one and is followed by whitespace or end of
    line, so nested segments such as ``Program Files (x86)`` or
    ``Copy (2) of passwords.xlsx`` are kept whole. When an unclosed ``(``
    inside the path leaves no balancing ``)``, PATH ends at the first
    ``)`` followed by whitespace or end of line.
CONTEXT
    The rest of the line after PATH, stripped. Greedy to end of line.

``last_write_time`` is never present in this format.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Tuple

from ..findings.models import Finding
from .timestamps import parse_timestamp

logger = logging.getLogger(__name__)

RATING_RE = re.compile(r"\[File\]\s*\{(?P<rating>[^}]*)\}")
RIGHTS_RE = re.compile(r"<[^|<>]*\|(?P<rights>RW|R)\|")
TIMESTAMP_RE = re.compile(
    r"\|(?P<timestamp>\d{4}-\d{2}-\d{2}[ T]\d{2}:\d{2}:\d{2}(?:\.\d+)?Z)>"
)
PATH_OPEN_RE = re.compile(r">\((?=[\\/]{2}[^\\/\s)]|[A-Za-z]:[\\/])")
PATH_CLOSE_RE = re.compile(r"\)(?=\s|$)")


def split_path(text: str) -> Tuple[str, str]:
    """Split the text after an opening ``(`` into (path, remainder)."""
    depth = 0
    for i, ch in enumerate(text):
        if ch == "(":
            depth += 1
        elif ch == ")":
            if depth > 0:
                depth -= 1
            elif PATH_CLOSE_RE.match(text, i):
                return text[:i], text[i + 1:]

    close = PATH_CLOSE_RE.search(text)
    if close:
        return text[:close.start()], text[close.end():]
    return text, ""


def parse_line(line: str) -> Optional[Finding]:
    """Extract one Finding from a log line, or None when it is not a finding line."""
    match = RATING_RE.search(line)
    if not match:
        return None
    rest = line[match.end():]

    rights_match = RIGHTS_RE.match(rest)
    rights = rights_match.group("rights") if rights_match else ""

    creation_time = None
    path_match = PATH_OPEN_RE.search(rest)
    if path_match:
        path, remainder = split_path(rest[path_match.end():])
        full_path = path.strip()
        context = remainder.strip()
        # keep the closing ">" so the timestamp anchor still matches
        fields_block = rest[:path_match.start() + 1]
    else:
        full_path = ""
        context = ""
        fields_block = rest

    ts_match = TIMESTAMP_RE.search(fields_block)
    if ts_match:
        creation_time = parse_timestamp(ts_match.group("timestamp"))

    return Finding(
        rating=match.group("rating").strip(),
        rights=rights,
        full_path=full_path,
        creation_time=creation_time,
        last_write_time=None,
        context=context,
    )


def parse_lines(lines: Iterable[str]) -> List[Finding]:
    """Parse every finding line; non-finding lines are skipped silently."""
    findings: List[Finding] = []
    skipped = 0
    for line in lines:
        finding = parse_line(line.rstrip("\r\n"))
        if finding is None:
            skipped += 1
            continue
        findings.append(finding)
    logger.debug("Line parser: %d findings, %d non-finding lines skipped", len(findings), skipped)
    return findings


def looks_like_line_format(lines: Iterable[str]) -> bool:
    """True when at least one line carries the finding marker."""
    return any(RATING_RE.search(line) for line in lines)
