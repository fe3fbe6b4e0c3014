from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class FolderEntry:
    name: str
    path: str
    modified: datetime | None = None


@dataclass(frozen=True)
class FileEntry:
    name: str
    path: str
    size: int | None = None
    modified: datetime | None = None


@dataclass(frozen=True)
class DirectoryListing:
    """Immediate contents of one directory.

    `path` is the absolute, forward-slash path that was listed and `parent`
    its directory component.
    """

    path: str
    parent: str
    folders: tuple[FolderEntry, ...] = field(default_factory=tuple)
    files: tuple[FileEntry, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class VolumeEntry:
    label: str
    path: str
