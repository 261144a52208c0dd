"""Parsers for macOS Unified Log chunk preambles, UUIDText and timesync files, and printf-style value formatting."""

__version__ = "0.1.0"