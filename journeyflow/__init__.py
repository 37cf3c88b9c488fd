"""
JourneyFlow - A resumable, multi-step journey engine.

Drive a caller-defined graph of states with pluggable handlers, persisting
progress between calls, with checkpoint resume and back navigation.
"""

__version__ = "1.0.0"
