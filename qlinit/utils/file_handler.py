"""
file_handler.py - Utilities for file operations

This module provides file handling utilities for qlinit, including
path containment checks, atomic writes and repository discovery.
"""

import os
import shutil
import tempfile
from typing import Optional


def is_git_repository(path: str) -> bool:
    """
    Check if a directory is a git repository

    Args:
        path: Directory path to check

    Returns:
        True if the directory contains a .git directory
    """
    git_dir = os.path.join(path, ".git")
    return os.path.isdir(git_dir)


def find_repository_root(start_path: str) -> Optional[str]:
    """
    Find the root of a git repository

    Args:
        start_path: Path to start searching from

    Returns:
        Root directory of the repository, or None if not found
    """
    current_path = os.path.abspath(start_path)

    # Handle file paths by using the parent directory
    if os.path.isfile(current_path):
        current_path = os.path.dirname(current_path)

    # Walk up the directory tree
    while True:
        if is_git_repository(current_path):
            return current_path

        parent_path = os.path.dirname(current_path)
        if parent_path == current_path:
            # Reached root directory
            return None

        current_path = parent_path


def is_path_within(root: str, path: str, resolve_links: bool = False) -> bool:
    """
    Check whether a path lies inside a directory

    Args:
        root: Directory that should contain the path
        path: Path to check; the root itself counts as inside
        resolve_links: Resolve symlinks on both sides before comparing

    Returns:
        True if path is root or below it
    """
    if resolve_links:
        root = os.path.realpath(root)
        path = os.path.realpath(path)
    else:
        root = os.path.abspath(root)
        path = os.path.abspath(path)

    root = root.rstrip(os.sep) + os.sep
    return (path.rstrip(os.sep) + os.sep).startswith(root)


def atomic_write_file(file_path: str, content: str) -> None:
    """
    Write content to a file, replacing any existing file in one step

    Args:
        file_path: Path to the file to write
        content: Content to write

    Raises:
        OSError: If the file cannot be written
    """
    directory = os.path.dirname(os.path.abspath(file_path))
    os.makedirs(directory, exist_ok=True)

    # Write to a temporary file first
    fd, temp_path = tempfile.mkstemp(dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)

        # Replace the original file with the temporary one
        shutil.move(temp_path, file_path)
    finally:
        # Clean up the temporary file if it still exists
        if os.path.exists(temp_path):
            os.unlink(temp_path)


def read_text_file(file_path: str) -> str:
    with open(file_path, "r", encoding="utf-8") as f:
        return f.read()
