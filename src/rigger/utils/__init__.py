"""
Utility functions for Rigger.

General-purpose utilities that don't belong to a specific domain.
"""

import rigger.utils.walk as walk
from rigger.utils.walk import find_files, get_files_with_extension, get_files_with_name

__all__ = ["find_files", "get_files_with_extension", "get_files_with_name", "walk"]
