"""
CLI module for Rigger.

Provides the command-line interface using Click.
"""

from rigger.cli.main import cli, main

__all__ = ["main", "cli"]
