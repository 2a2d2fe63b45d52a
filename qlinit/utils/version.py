"""
version.py - Version management utilities

This module provides version information for qlinit.
"""

# Version information
__version__ = "0.3.0"


def get_version() -> str:
    """
    Get qlinit version

    Returns:
        Version string
    """
    return __version__


def get_user_agent() -> str:
    """User agent sent with GitHub API requests"""
    return f"qlinit/{__version__}"
