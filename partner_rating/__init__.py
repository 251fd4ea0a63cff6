"""
Partner Rating Platform.

Partner registration, rubric scoring, versioned evaluation history and
role-gated access over a Snowflake store.
"""

__version__ = "1.0.0"
