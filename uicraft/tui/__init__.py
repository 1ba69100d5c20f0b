"""Textual app for interactive generation sessions.

CRITICAL: Rich and Textual cannot mix in the same command execution.
Use Rich console.print() ONLY before or after TUI execution, never during.
"""
from .apps import StudioApp

__all__ = ["StudioApp"]
