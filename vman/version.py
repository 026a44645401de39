"""
Version management for the POM Version Manager.

This module provides centralized version information to avoid hardcoding
version numbers throughout the codebase.
"""

from . import __version__


def get_version() -> str:
    """
    Get the current version of the POM Version Manager.
    
    Returns:
        Version string (e.g., "0.1.0")
    """
    return __version__


def get_full_name_with_version() -> str:
    """
    Get the full tool name with version.
    
    Returns:
        Full name string (e.g., "POM Version Manager v0.1.0")
    """
    return f"POM Version Manager v{__version__}"
