"""Recursively normalize file and directory names to a Unix-friendly form."""

from .normalize_files import RenameSummary, normalize_files
from .types import CliOptions, RenameOptions
from .utils import normalize_filename

__version__ = "1.0.2"

__all__ = ["CliOptions", "RenameOptions", "RenameSummary", "normalize_filename", "normalize_files"]
