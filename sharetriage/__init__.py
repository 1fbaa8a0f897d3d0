# ============================================================================
# sharetriage/__init__.py
# File-share scanner log triage
# ============================================================================
#
# PURPOSE:
# Turns the output of a file-share content scanner (structured JSON log or
# line-format text log) into ranked, de-duplicated findings and renders
# them as an HTML report and a CSV export.
#
# LAYOUT:
# - base/: configuration and the error taxonomy
# - findings/: finding models, severity ranking, ordering, aggregation
# - parsers/: input decoding, format dispatch and the two log parsers
# - reporting/: HTML/CSV renderers and the report composer
# - pipeline.py: parse -> classify -> sort -> [aggregate -> sort]
# - cli.py: command-line entrypoint
#
# ============================================================================

__version__ = "0.1.0"
