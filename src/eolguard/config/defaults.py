"""Starter .eolguard.toml template."""

DEFAULT_TOML = """\
# eolguard configuration
version = "1.0"

[check]
case_sensitive = false    # compare extensions case-sensitively
detect_renames = true
chunk_size_kb = 1024

[policies]
# Files with these extensions must use a single line-ending style.
# crlf = ["bat", "cmd", "sln"]
# lf = ["sh", "py"]
# cr = []
# disable = ["lf"]

[output]
format = "terminal"       # terminal | json
verbose = false           # list every checked file

[ignore]
# files = ["vendor/*", "*.min.js"]
"""
