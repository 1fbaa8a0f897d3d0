# sharetriage/parsers/dispatch.py
# Input acquisition: decoding, format detection and the structured -> line probe.

from __future__ import annotations

import codecs
import json
import locale
import logging
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from ..base.errors import ErrorCode, InputFormatError, TriageError
from ..findings.models import Finding
from .lines import looks_like_line_format, parse_lines
from .structured import is_structured_document, parse_structured

logger = logging.getLogger(__name__)


class InputFormat(str, Enum):
    STRUCTURED = "structured"
    LINES = "lines"
    UNKNOWN = "unknown"


EXTENSION_HINTS = {
    ".json": InputFormat.STRUCTURED,
    ".txt": InputFormat.LINES,
    ".log": InputFormat.LINES,
}

_BOMS = (
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
)


def decode_bytes(raw: bytes) -> str:
    """
    Decode log bytes without failing.

    BOM-marked UTF-8/UTF-16 first (PowerShell redirection writes UTF-16),
    then plain UTF-8, then the platform's preferred encoding with
    replacement characters for anything undecodable.
    """
    for bom, encoding in _BOMS:
        if raw.startswith(bom):
            return raw.decode(encoding, errors="replace")
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        fallback = locale.getpreferredencoding(False) or "latin-1"
        logger.debug("Input is not UTF-8, decoding as %s", fallback)
        return raw.decode(fallback, errors="replace")


def detect_format(path: Union[str, Path]) -> InputFormat:
    return EXTENSION_HINTS.get(Path(path).suffix.lower(), InputFormat.UNKNOWN)


def _try_structured(text: str) -> Optional[List[Finding]]:
    try:
        document = json.loads(text)
    except ValueError:
        return None
    if not is_structured_document(document):
        return None
    return parse_structured(document)


def parse_document(text: str, hint: InputFormat = InputFormat.UNKNOWN) -> List[Finding]:
    """
    Parse decoded input, choosing the parser from ``hint``.

    Structured parsing is attempted first unless the hint says the input
    is a text log; when it does not apply the line parser is used. Input
    that was not declared textual and contains no finding lines matches
    neither format and raises InputFormatError.
    """
    if hint is not InputFormat.LINES:
        findings = _try_structured(text)
        if findings is not None:
            logger.debug("Parsed input as structured document")
            return findings
        if hint is InputFormat.STRUCTURED:
            logger.debug("Input hinted as structured is not a structured document, trying line format")

    lines = text.splitlines()
    if hint is not InputFormat.LINES and not looks_like_line_format(lines):
        raise InputFormatError(
            "Input is neither a structured log document nor a line-format log",
            details={"hint": hint.value, "lines": len(lines)},
        )
    return parse_lines(lines)


def load_findings(path: Union[str, Path]) -> List[Finding]:
    """Read ``path`` and return its findings in input order."""
    source = Path(path)
    try:
        raw = source.read_bytes()
    except FileNotFoundError:
        raise TriageError(
            ErrorCode.INPUT_NOT_FOUND,
            f"Input file not found: {source}",
            details={"path": str(source)},
        )
    except OSError as e:
        raise TriageError(
            ErrorCode.INPUT_UNREADABLE,
            f"Cannot read input file {source}: {e}",
            details={"path": str(source), "original_type": type(e).__name__},
        )

    hint = detect_format(source)
    logger.debug("Loaded %d bytes from %s (hint=%s)", len(raw), source, hint.value)
    return parse_document(decode_bytes(raw), hint)
