"""Utility functions for normie."""

import re
from pathlib import Path
from typing import Final

from .errors import EmptyResultNameError
from .types import RenameOptions

# Characters removed by -r. Dots, hyphens and underscores are kept.
SPECIAL_CHARS: Final = "!\"#$%&'()*+,/:;<=>?@[\\]^`{|}~ªº"

SEPARATOR: Final = "_"

_SPECIAL_TABLE: Final = str.maketrans("", "", SPECIAL_CHARS)

# A run of whitespace and/or underscores
SEPARATOR_RUN: Final = re.compile(r"[\s_]+")


def remove_special_chars(text: str) -> str:
    """Delete every character of SPECIAL_CHARS from text."""
    return text.translate(_SPECIAL_TABLE)


def collapse_separators(text: str) -> str:
    """Replace each run of whitespace or underscores with a single separator."""
    return SEPARATOR_RUN.sub(SEPARATOR, text)


def normalize_filename(name: str, options: RenameOptions) -> str:
    """Compute the normalized form of a single file or directory name.

    Args:
        name: The current name (last path segment, extension included)
        options: The transformations to apply

    Returns:
        The target name. It may equal ``name``, in which case there is nothing to do.

    Raises:
        EmptyResultNameError: if nothing but separators would be left of the name
    """
    base = name
    if options.remove_special:
        base = remove_special_chars(name)
        if base != name:
            # Strip separators the removal left dangling at the ends
            base = collapse_separators(base).strip(SEPARATOR)

    base = collapse_separators(base)
    if not base.strip(SEPARATOR) and base != name:
        raise EmptyResultNameError(Path(name))

    if options.insert_prefix:
        base = options.insert_prefix + base
    if options.append_suffix:
        base = base + options.append_suffix

    if options.lowercase:
        base = base.lower()
    elif options.uppercase:
        base = base.upper()

    return collapse_separators(base)
