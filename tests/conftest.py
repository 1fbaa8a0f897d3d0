"""Pytest configuration and shared fixtures for sharetriage."""
from __future__ import annotations

import pytest

from sharetriage.base.config import set_config

LINE_LOG = "\n".join(
    [
        r"[DOMAIN\user@WS01] 2024-03-01 10:00:00Z [Info] Creating a TreeWalker task for \\SRV1\share",
        r"[DOMAIN\user@WS01] 2024-03-01 10:00:01Z [Share] {Green}<\\SRV1\share>()",
        (
            r"[DOMAIN\user@WS01] 2024-03-01 10:00:02Z [File] {Red}"
            r"<KeepPassOrKeyInCode|RW|passw?o?r?d\s*=|7.7kB|2024-02-28 08:15:00Z>"
            r'(\\SRV1\share\scripts\deploy.ps1) $password = "hunter2"'
        ),
        (
            r"[DOMAIN\user@WS01] 2024-03-01 10:00:03Z [File] {Black}"
            r"<KeepSSHKeysByFileName|R|^id_rsa$|1.7kB|2023-11-02 12:00:00Z>"
            r"(\\SRV2\backup\home\id_rsa) "
        ),
        "not a finding at all",
    ]
)


@pytest.fixture(autouse=True)
def reset_config(monkeypatch):
    """Isolate tests from SHARETRIAGE_* variables and the cached config."""
    for var in (
        "SHARETRIAGE_SORT_BY",
        "SHARETRIAGE_AGGREGATE",
        "SHARETRIAGE_FORMATS",
        "SHARETRIAGE_MIN_RATING",
        "SHARETRIAGE_OUTPUT_DIR",
        "SHARETRIAGE_LOG_LEVEL",
        "SHARETRIAGE_LOG_FILE",
    ):
        monkeypatch.delenv(var, raising=False)
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def line_log() -> str:
    return LINE_LOG


@pytest.fixture
def structured_document() -> dict:
    return {
        "entries": [
            {"time": "2024-03-01T10:00:00Z", "level": "Info", "message": "starting"},
            {
                "level": "Warn",
                "eventProperties": {
                    "Red": {
                        "DateTime": "2024-03-01T10:00:02Z",
                        "Type": "FileResult",
                        "FileResult": {
                            "FileInfo": {
                                "FullName": "\\\\SRV1\\share\\web.config",
                                "CreationTime": "2023-01-05T09:30:00.1234567+00:00",
                                "LastWriteTime": "2024-02-01T11:00:00Z",
                            },
                            "MatchedRule": {"RuleName": "KeepConfigRegexRed", "Triage": "Red"},
                        },
                    }
                },
            },
            {
                "level": "Warn",
                "eventProperties": {
                    "Yellow": {
                        "Type": "ShareResult",
                        "ShareResult": {"SharePath": "\\\\SRV1\\share", "Triage": "Yellow"},
                    }
                },
            },
        ]
    }
