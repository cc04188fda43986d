import logging
import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from .errors import EmptyResultNameError, NameConflictError, NormieError, PathNotFoundError, os_error
from .list_files import is_walkable_dir, iter_directory_batches
from .types import CliOptions
from .utils import normalize_filename

Confirm = Callable[[str], bool]


@dataclass
class RenameSummary:
    """What happened during a run."""

    renamed: list[tuple[Path, Path]] = field(default_factory=list)
    unchanged: int = 0
    declined: list[Path] = field(default_factory=list)
    errors: list[NormieError] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        """True if any error that should fail the run occurred."""
        return any(error.fatal for error in self.errors)

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0

    def errors_of(self, kind: type[NormieError]) -> list[NormieError]:
        """Return the collected errors of the given kind, in the order they occurred."""
        return [error for error in self.errors if isinstance(error, kind)]

    def describe(self, *, dry_run: bool = False) -> str:
        verb = "Would rename" if dry_run else "Renamed"
        parts = [f"{verb} {len(self.renamed)}", f"{self.unchanged} unchanged"]
        if self.declined:
            parts.append(f"{len(self.declined)} declined")
        if self.errors:
            parts.append(f"{len(self.errors)} not renamed due to errors")
        return ", ".join(parts)


def ask_confirmation(prompt: str) -> bool:
    """Ask on the terminal; anything but yes means no."""
    return click.confirm(prompt, default=False)


def drop_nested_roots(roots: list[Path]) -> list[Path]:
    """Drop repeated roots and roots that lie inside another root directory.

    Walking the enclosing directory already handles them, and it may rename
    them before their own turn comes.
    """
    absolute = [Path(os.path.abspath(root)) for root in roots]
    walked = {path for root, path in zip(roots, absolute) if is_walkable_dir(root)}
    kept: list[Path] = []
    seen: set[Path] = set()
    for root, path in zip(roots, absolute):
        if path in seen or any(parent in walked for parent in path.parents):
            logging.debug(f"Skipping {root}: already covered by another path")
            continue
        seen.add(path)
        kept.append(root)
    return kept


class Normalizer:
    """Renames entries batch by batch, keeping track of the names in each directory."""

    def __init__(
        self,
        options: CliOptions,
        *,
        confirm: Confirm | None = None,
        console: Console | None = None,
        err_console: Console | None = None,
    ):
        self.options = options
        self.confirm = confirm or ask_confirmation
        self.console = console or Console(soft_wrap=True, emoji=False)
        self.err_console = err_console or Console(stderr=True, soft_wrap=True, emoji=False)
        self.summary = RenameSummary()

    def report_error(self, error: NormieError) -> None:
        self.summary.errors.append(error)
        color = "red" if error.fatal else "yellow"
        self.err_console.print(f"[bold]normie[/bold]: [{color}]{escape(str(error))}[/{color}]")

    def log_action(self, message: str) -> None:
        if self.options.verbose:
            self.console.print(escape(message))

    def plan(self, path: Path) -> str | None:
        """Return the target name for path, or None when there is nothing to rename."""
        try:
            target = normalize_filename(path.name, self.options.rename_options)
        except EmptyResultNameError:
            self.report_error(EmptyResultNameError(path))
            return None
        if target == path.name:
            self.summary.unchanged += 1
            self.log_action(f"Nothing to do with '{path}'")
            return None
        logging.debug(f"Planned {path} → {target}")
        return target

    def taken_on_disk(self, source: Path, target: Path) -> bool:
        """Check whether target exists as an entry other than source itself."""
        if self.options.dry_run or not os.path.lexists(target):
            return False
        try:
            # case-only renames on case-insensitive filesystems
            return not os.path.samefile(source, target)
        except OSError:
            return True

    def apply(self, source: Path, target: Path) -> bool:
        """Confirm and perform a single rename. Returns False if it did not happen."""
        if self.options.interactive and not self.confirm(f"rename '{source}' to '{target}'?"):
            self.summary.declined.append(source)
            self.log_action(f"Declined {source} → {target.name}")
            return False

        if self.options.dry_run:
            self.console.print(escape(f"Would rename {source} → {target.name}"))
        else:
            try:
                source.rename(target)
            except OSError as e:
                self.report_error(os_error(source, e, target))
                return False
            self.log_action(f"Renamed {source} → {target.name}")

        self.summary.renamed.append((source, target))
        return True

    def rename_batch(self, directory: Path, entries: Iterable[Path], occupied: set[str]) -> None:
        """Rename sibling entries of directory.

        occupied holds every name currently present in directory. A rename
        whose target is held by a sibling that is itself about to be renamed
        waits for that sibling to move. Whatever is still blocked once no
        more renames can happen is a conflict.
        """
        pending: dict[str, tuple[Path, str]] = {}
        for entry in entries:
            target = self.plan(entry)
            if target is not None:
                pending[entry.name] = (entry, target)

        progress = True
        while pending and progress:
            progress = False
            for name, (source, target) in list(pending.items()):
                if target in occupied:
                    if target in pending:
                        logging.debug(f"Deferring {source}: waiting for '{target}' to move")
                        continue
                    del pending[name]
                    self.report_error(NameConflictError(source, target))
                    continue

                del pending[name]
                progress = True
                target_path = directory / target
                if self.taken_on_disk(source, target_path):
                    self.report_error(NameConflictError(source, target))
                elif self.apply(source, target_path):
                    occupied.discard(name)
                    occupied.add(target)

        # Nothing left can move: what remains is blocked by a cycle
        for source, target in pending.values():
            self.report_error(NameConflictError(source, target))

    def rename_roots(self, roots: list[Path]) -> None:
        """Rename the paths given on the command line, grouped by parent directory."""
        groups: dict[Path, list[Path]] = {}
        for root in roots:
            if root.name in ("", ".", ".."):
                continue
            if not os.path.lexists(root):
                logging.debug(f"Skipping {root}: no longer there")
                continue
            siblings = groups.setdefault(root.parent, [])
            if root not in siblings:
                siblings.append(root)

        for parent, siblings in groups.items():
            try:
                occupied = set(os.listdir(parent))
            except OSError as e:
                logging.debug(f"Cannot list {parent}: {e}")
                occupied = {root.name for root in siblings}
            self.rename_batch(parent, siblings, occupied)

    def run(self, paths: Iterable[Path]) -> RenameSummary:
        roots = []
        for path in paths:
            if not os.path.lexists(path):
                self.report_error(PathNotFoundError(path))
                continue
            roots.append(path)
        roots = drop_nested_roots(roots)

        for root in roots:
            if not is_walkable_dir(root):
                continue
            for batch in iter_directory_batches(root):
                if isinstance(batch, NormieError):
                    self.report_error(batch)
                    continue
                occupied = {child.name for child in batch.children}
                self.rename_batch(batch.directory, batch.children, occupied)

        self.rename_roots(roots)
        return self.summary


def normalize_files(
    paths: Iterable[Path],
    *,
    options: CliOptions,
    confirm: Confirm | None = None,
    console: Console | None = None,
    err_console: Console | None = None,
) -> RenameSummary:
    """Normalize the names of paths and, for directories, of everything below them.

    Args:
        paths: Files and directories given on the command line
        options: Command-line options
        confirm: Asked before each rename when options.interactive is set;
            returns True to go ahead. Defaults to a terminal prompt.
        console: Where the action log goes
        err_console: Where diagnostics go

    Returns:
        The summary of the run. Its exit_code is non-zero if any fatal error occurred.
    """
    normalizer = Normalizer(options, confirm=confirm, console=console, err_console=err_console)
    return normalizer.run(paths)
