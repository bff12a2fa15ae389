"""Starter .sandboxscore.toml template."""

CONFIG_FILENAME = ".sandboxscore.toml"

DEFAULT_TOML = """\
# SandboxScore Configuration
version = "1.0"

[scan]
profile = "personal"      # personal | professional | sensitive
# fail_on = "score>=50"   # gate: exit 1 when the condition holds (score, grade, exposures)
# categories = ["credentials", "personal_data"]   # empty = all

[output]
format = "human"          # human | json | raw
show_summary = true
show_remediation = true
"""
