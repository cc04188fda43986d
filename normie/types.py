from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class RenameOptions:
    """Options for computing normalized names."""

    lowercase: bool = False
    uppercase: bool = False
    remove_special: bool = False
    insert_prefix: str | None = None
    append_suffix: str | None = None

    def __post_init__(self) -> None:
        if self.lowercase and self.uppercase:
            raise ValueError("lowercase and uppercase are mutually exclusive")


@dataclass(frozen=True)
class CliOptions:
    rename_options: RenameOptions = field(default_factory=RenameOptions)
    interactive: bool = False
    verbose: bool = False
    dry_run: bool = False


@dataclass
class DirectoryBatch:
    """A directory and the children listed from it, ready to be renamed."""

    directory: Path
    children: list[Path]
