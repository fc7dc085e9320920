"""Starter .tokenrule.toml templates."""

DEFAULT_TOML = """\
# tokenrule configuration
version = "1.0"

[store]
path = ".tokenrule/rules.yaml"

[output]
format = "terminal"       # terminal | json
show_summary = true
"""

FULL_TOML = DEFAULT_TOML + """
[draft]
# Initial values for every new rule draft.
expression_type = "regular"   # regular | literal
case_sensitivity = "match"    # match | ignore | match-unicode
token_range_enabled = false
token_range_from = 0          # clamped to 0..99
token_range_to = 0            # clamped to 0..99
canonical_equivalence = false
dot_all = true                # always on while case_sensitivity = "match"
multiline = false
unix_lines = false

[logging]
level = "WARNING"             # DEBUG | INFO | WARNING | ERROR | CRITICAL
"""
