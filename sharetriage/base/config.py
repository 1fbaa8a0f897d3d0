# ============================================================================
# sharetriage/base/config.py
# Run Configuration and Logging Setup
# ============================================================================
#
# Settings come from SHARETRIAGE_* environment variables and are overridden
# by CLI flags. Every setting is validated when the config object is built,
# so a bad sort key or output format stops the run before any input is read.
#
# ============================================================================

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ..findings.ordering import resolve_sort_key
from ..findings.severity import Rating
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

REPORT_FORMATS: Tuple[str, ...] = ("html", "csv")


@dataclass(frozen=True)
class LogConfig:
    level: str = "INFO"
    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    file_enabled: bool = False
    file_name: str = "sharetriage.log"
    max_file_size_mb: int = 10
    backup_count: int = 3


@dataclass(frozen=True)
class TriageConfig:
    # Secondary sort key (see findings.ordering.SortKey for the allow-list)
    sort_by: str = "FullName"

    # Fold findings sharing a file basename into one row
    aggregate: bool = True

    # Which report artifacts to produce
    formats: Tuple[str, ...] = REPORT_FORMATS

    # Drop findings less severe than this rating (None keeps everything)
    min_rating: Optional[str] = None

    # Where reports are written; None means next to the input file
    output_dir: Optional[Path] = None

    log: LogConfig = field(default_factory=LogConfig)

    def __post_init__(self):
        object.__setattr__(self, "sort_by", resolve_sort_key(self.sort_by).value)

        formats = tuple(f.strip().lower() for f in self.formats if f and f.strip())
        unknown = [f for f in formats if f not in REPORT_FORMATS]
        if unknown or not formats:
            raise ConfigurationError(
                f"Invalid report format(s): {', '.join(unknown) or '(none)'}",
                details={"formats": list(self.formats), "allowed": list(REPORT_FORMATS)},
            )
        object.__setattr__(self, "formats", formats)

        if self.min_rating is not None:
            try:
                Rating(self.min_rating)
            except ValueError:
                raise ConfigurationError(
                    f"Invalid minimum rating {self.min_rating!r}",
                    details={"min_rating": self.min_rating, "allowed": [r.value for r in Rating]},
                )

        if not isinstance(logging.getLevelName(self.log.level.upper()), int):
            raise ConfigurationError(
                f"Invalid log level {self.log.level!r}",
                details={"level": self.log.level},
            )

    @classmethod
    def env_settings(cls) -> Dict[str, Any]:
        """Raw SHARETRIAGE_* values, keyed like the from_env() overrides."""
        settings: Dict[str, Any] = {}

        formats_str = os.getenv("SHARETRIAGE_FORMATS", "")
        if formats_str:
            settings["formats"] = tuple(formats_str.split(","))

        output_dir = os.getenv("SHARETRIAGE_OUTPUT_DIR")
        if output_dir:
            settings["output_dir"] = Path(output_dir)

        settings["sort_by"] = os.getenv("SHARETRIAGE_SORT_BY", "FullName")
        settings["aggregate"] = os.getenv("SHARETRIAGE_AGGREGATE", "true").lower() == "true"
        settings["min_rating"] = os.getenv("SHARETRIAGE_MIN_RATING") or None
        settings["log_level"] = os.getenv("SHARETRIAGE_LOG_LEVEL", "INFO")
        settings["log_file"] = os.getenv("SHARETRIAGE_LOG_FILE", "false").lower() == "true"
        return settings

    @classmethod
    def from_env(cls, **overrides: Any) -> "TriageConfig":
        """
        Build from the environment with explicit overrides applied first,
        so an overridden setting is never validated from its env value.
        """
        settings = cls.env_settings()
        settings.update(overrides)

        log = LogConfig(
            level=settings.pop("log_level"),
            file_enabled=settings.pop("log_file"),
        )
        return cls(log=log, **settings)


_config: Optional[TriageConfig] = None


def get_config() -> TriageConfig:
    global _config
    if _config is None:
        _config = TriageConfig.from_env()
    return _config


def set_config(config: Optional[TriageConfig]) -> None:
    global _config
    _config = config


def setup_logging(config: Optional[TriageConfig] = None, log_dir: Optional[Path] = None) -> None:
    cfg = config or get_config()

    handlers: List[logging.Handler] = [logging.StreamHandler()]

    if cfg.log.file_enabled:
        from logging.handlers import RotatingFileHandler
        log_path = (log_dir or cfg.output_dir or Path.cwd()) / cfg.log.file_name
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=cfg.log.max_file_size_mb * 1024 * 1024,
            backupCount=cfg.log.backup_count,
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=getattr(logging, cfg.log.level.upper()),
        format=cfg.log.format,
        handlers=handlers,
        force=True,
    )
