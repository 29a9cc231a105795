"""
Shared constants for Rigger.

This module provides a single source of truth for default values
that are used across multiple modules.
"""

# Values sources
OVERRIDE_SEPARATOR = "="
"""Separates the key path from the literal in an inline override (``a.b=x``)."""

PATH_SEPARATOR = "."
"""Separates mapping keys in a canonical value path."""

# Environment
ENV_PREFIX = "RIGGER_"
"""Prefix for settings read from environment variables."""

# Template discovery
DEFAULT_TEMPLATE_EXTENSION = "jinja2"
"""Extension (without the dot) of compose template files."""

DEFAULT_LOG_LEVEL = "WARNING"
"""Log level used when neither settings nor --verbose say otherwise."""
