"""
Configuration module for Rigger.

Uses pydantic-settings for environment variable loading.
"""

from rigger.config.settings import Settings

__all__ = ["Settings"]
