"""SREC Connect: campus events, clubs and live notifications."""

__version__ = "0.1.0"
