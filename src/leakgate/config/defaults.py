"""Starter files written by ``leakgate init``."""

DEFAULT_SETTINGS_TOML = """\
# leakgate runtime settings
# Suppression policy lives in .talismanrc, not here.
version = "1.0"

[scan]
workers = 1               # threads used to evaluate additions / commits
# timeout = 300           # seconds; the scan reports "incomplete" past this
max_file_size_kb = 1024   # additions above this size are flagged by the filesize detector

[output]
format = "terminal"       # terminal | json
show_summary = true

[logging]
level = "error"           # error | warn | info | debug
"""

DEFAULT_TALISMANRC = """\
# Paste entries suggested by `leakgate checksum <pattern>` below.
fileignoreconfig: []
# scopeconfig:
#   - scope: go
# custom_patterns:
#   - "internal-[0-9a-f]{32}"
threshold: low             # report ranking only; every finding still blocks
version: "1.0"
"""
