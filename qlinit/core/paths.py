"""
paths.py - Validation of paths and paths-ignore filters

Filters are globs relative to the source root. They are matched by prefix
downstream, so a trailing "**" adds nothing and is removed here.
"""

import logging
import re
from typing import Optional

from .errors import FieldInvalidError

log = logging.getLogger(__name__)

TRAILING_WILDCARD = re.compile(r"/\*\*/?$")
# "**" must fill a whole path segment
INVALID_WILDCARD = re.compile(r"([^/]\*\*)|(\*\*[^/])")
UNSUPPORTED_CHARACTERS = re.compile(r"[?+\[\]!]")


def validate_and_sanitise_path(
    original_path: str,
    property_name: str,
    config_file: Optional[str],
    logger: Optional[logging.Logger] = None,
) -> str:
    """
    Validate a path filter and return its sanitised form

    Args:
        original_path: Filter as written by the user
        property_name: Config property the filter came from ("paths" or "paths-ignore")
        config_file: Config file the filter came from, for error messages
        logger: Logger to report rewrites and warnings to

    Returns:
        The filter with leading slashes and trailing "**" removed

    Raises:
        FieldInvalidError: If the filter is not a usable glob
    """
    logger = logger or log
    path = original_path.lstrip("/")

    if path in ("", "**"):
        raise FieldInvalidError(
            config_file,
            property_name,
            f'"{original_path}" is not a valid path. '
            "It is not necessary to include it, and it is not allowed to exclude it.",
        )

    while TRAILING_WILDCARD.search(path):
        path = TRAILING_WILDCARD.sub("/", path)
    if path != original_path.lstrip("/"):
        logger.info(f'Path filter "{original_path}" in {property_name} was rewritten to "{path}"')

    if INVALID_WILDCARD.search(path):
        raise FieldInvalidError(
            config_file,
            property_name,
            f'"{original_path}" contains an invalid "**" wildcard. '
            'They must be immediately preceded and followed by a slash as in "/**/", '
            "or come at the start or end.",
        )

    if "\\" in path:
        raise FieldInvalidError(
            config_file,
            property_name,
            f'"{original_path}" contains an "\\" character. These are not allowed in filters. '
            'If running on windows we recommend using "/" instead for path filters.',
        )

    # Other glob syntax is not supported and will be matched literally
    if UNSUPPORTED_CHARACTERS.search(path):
        logger.warning(
            str(
                FieldInvalidError(
                    config_file,
                    property_name,
                    f'"{original_path}" contains an unsupported character. '
                    "The filter pattern characters ?, +, [, ], ! are not supported "
                    "and will be matched literally.",
                )
            )
        )

    return path
