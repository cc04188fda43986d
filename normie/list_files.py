import logging
from collections.abc import Iterator
from pathlib import Path

from .errors import NormieError, os_error
from .types import DirectoryBatch


def is_walkable_dir(path: Path) -> bool:
    """Directories are descended into; symlinks to directories are not."""
    return path.is_dir() and not path.is_symlink()


def list_directory(directory: Path) -> list[Path]:
    """Return the children of directory, sorted by name."""
    children = list(directory.iterdir())
    children.sort()
    return children


def iter_directory_batches(directory: Path) -> Iterator[DirectoryBatch | NormieError]:
    """Iterate over the contents of directory in post-order.

    Each directory's children are listed once. Every subdirectory is walked
    before the batch holding it is yielded, so a consumer that renames the
    children of each batch it receives never invalidates a path the walk
    still has to visit.

    A directory that cannot be read is yielded as an error in place of its
    batch; its siblings are still walked.
    """
    try:
        children = list_directory(directory)
    except OSError as e:
        logging.debug(f"Cannot list {directory}: {e}")
        yield os_error(directory, e)
        return

    logging.debug(f"Listed {len(children)} entries in {directory}")
    for child in children:
        if is_walkable_dir(child):
            yield from iter_directory_batches(child)

    if children:
        yield DirectoryBatch(directory, children)
