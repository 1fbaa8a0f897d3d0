# ============================================================================
# sharetriage/findings/__init__.py
# ============================================================================
#
# The format-independent core:
# - severity.py: Rating labels and their fixed rank table
# - hostnames.py: UNC host and basename extraction
# - models.py: immutable Finding / AggregatedFinding records
# - ordering.py: secondary-key allow-list and the stable two-key sort
# - aggregator.py: per-file folding of sorted findings
#
# ============================================================================
