"""
yaml_handler.py - Utilities for YAML processing

This module provides the YAML loading and dumping used for qlinit
configuration files.
"""

import yaml
from typing import Any, Optional, TextIO, cast


def load_yaml(content: str) -> Any:
    """
    Load YAML content

    Args:
        content: YAML content as string

    Returns:
        Parsed document, or None for an empty document

    Raises:
        yaml.YAMLError: If YAML parsing fails
    """
    return yaml.safe_load(content)


def dump_yaml(obj: Any, stream: Optional[TextIO] = None, **kwargs: Any) -> Optional[str]:
    """
    Dump an object as block-style YAML, keeping key order

    Args:
        obj: Object to dump
        stream: Output stream or None to return as string
        **kwargs: Additional arguments for yaml.safe_dump

    Returns:
        YAML string if stream is None, otherwise None
    """
    kwargs.setdefault("sort_keys", False)
    kwargs.setdefault("default_flow_style", False)

    return cast(Optional[str], yaml.safe_dump(obj, stream, **kwargs))
