"""
utils package for qlinit

Helpers for files, YAML, the GitHub API, settings, resource flags and logging.
"""
