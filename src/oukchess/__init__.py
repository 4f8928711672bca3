"""Rules engine for a Cambodian-influenced chess variant."""

__version__ = "0.1.0"
