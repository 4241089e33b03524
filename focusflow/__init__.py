"""
FocusFlow - focus-session runtime and session analytics

Runs one timed focus session at a time against a prioritized task,
tracks interruptions, and derives productivity and progress statistics.
"""

__version__ = "0.1.0"
