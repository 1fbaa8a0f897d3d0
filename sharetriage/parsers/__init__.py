# ============================================================================
# sharetriage/parsers/__init__.py
# ============================================================================
#
# Both parsers produce the same Finding shape; format-specific extraction
# stays inside its own module.
# - structured.py: JSON entries -> event properties -> file properties
# - lines.py: one regex grammar per text line
# - dispatch.py: decoding, extension hints, structured-then-lines probe
# - timestamps.py: tolerant timestamp parsing shared by both
#
# ============================================================================
