"""
page-digest configuration.

Modules
───────
settings  — environment-driven Settings dataclass
"""
