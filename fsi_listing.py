import os
import types
import logging
from dataclasses import dataclass, field
from datetime import datetime

import fsi_paths
import fsi_common
import fsi_config
import fsi_probes
from fsi_models import DirectoryListing, FileEntry, FolderEntry

log = logging.getLogger(f'{fsi_common.NAME}.listing')


@dataclass
class ListerConfig:
    hide_dotfiles: bool = False
    working_directory: str = field(default_factory=os.getcwd)

    @classmethod
    def from_settings(cls, working_directory: str | None = None) -> 'ListerConfig':
        config = cls(hide_dotfiles=fsi_config.navigation.hide_dotfiles)
        if working_directory is not None:
            config.working_directory = working_directory
        return config


class DirectoryLister:
    """Lists the immediate folders and files of directories.

    Each lister has its own `ListerConfig`. The platform probe decides what
    counts as a hidden file, it's looked up for the running system if not given.
    """

    def __init__(
        self,
        config: ListerConfig | None = None,
        probe: types.ModuleType | None = None,
        pathmod: types.ModuleType = os.path,
    ):
        self.config = config if config is not None else ListerConfig()
        self.probe = probe if probe is not None else fsi_probes.get_probe()
        self.pathmod = pathmod

    def resolve(self, path: str) -> tuple[str, str]:
        return fsi_paths.resolve(path, self.config.working_directory, self.pathmod)

    def list(self, path: str) -> DirectoryListing:
        """Get the folders and files directly inside `path`.

        Errors reading the directory itself are raised as they come
        (`FileNotFoundError`, `NotADirectoryError`, `PermissionError`).
        Entries that can't be stat'ed are left out.
        """
        path, parent = self.resolve(path)
        scan_path = path
        # A bare drive "C:" means the current dir on that drive, we want its root.
        if scan_path.endswith(':'):
            scan_path += '/'

        folders: list[FolderEntry] = []
        files: list[FileEntry] = []
        with os.scandir(scan_path) as entries:
            for entry in entries:
                try:
                    is_dir = entry.is_dir()
                    info = entry.stat()
                except OSError as error:
                    log.debug('Skipping "%s": %s', entry.name, error)
                    continue

                entry_path = _join(path, entry.name)
                modified = datetime.fromtimestamp(info.st_mtime)
                if is_dir:
                    folders.append(FolderEntry(entry.name, entry_path, modified))
                    continue

                if self.config.hide_dotfiles and self.probe.is_hidden(entry):
                    continue
                files.append(FileEntry(entry.name, entry_path, info.st_size, modified))

        return DirectoryListing(path, parent, tuple(folders), tuple(files))


def _join(path: str, name: str) -> str:
    if path.endswith('/'):
        return path + name
    return f'{path}/{name}'
