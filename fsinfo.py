"""
fsinfo - folder contents and mounted drives for local file browsing.

Module level functions work on one default `DirectoryLister` configured from
the user settings. Create own `fsi_listing.DirectoryLister` instances for
independent configurations. Relative paths resolve against the working
directory at import time.
"""

import os
import logging

import fsi_paths
import fsi_common
import fsi_probes
import fsi_sizes
from fsi_listing import DirectoryLister, ListerConfig
from fsi_models import DirectoryListing, VolumeEntry

log = logging.getLogger(fsi_common.NAME)
WORKING_DIRECTORY = os.getcwd()
_lister: DirectoryLister | None = None


def get_lister() -> DirectoryLister:
    global _lister
    if _lister is None:
        _lister = DirectoryLister(ListerConfig.from_settings(WORKING_DIRECTORY))
    return _lister


def resolve_and_list_directory(path: str) -> DirectoryListing:
    """Get absolute path, parent, subfolders and files of a relative or absolute `path`."""
    return get_lister().list(path)


def enumerate_volumes() -> list[VolumeEntry]:
    """Get the drives/volumes available on this machine. Empty on unknown systems."""
    try:
        probe = fsi_probes.get_probe()
    except fsi_probes.UnsupportedPlatform as error:
        log.warning('Cannot enumerate volumes: %s', error)
        return []
    return probe.get_volumes()


def get_home_directory() -> str:
    path = os.path.expanduser('~')
    if path == '~':
        raise RuntimeError('Could not determine home directory!')
    return fsi_paths.to_slash(path)


def format_byte_size(size: int) -> str:
    return fsi_sizes.format_bytes(size)


def set_hide_dotfiles(enabled: bool) -> None:
    get_lister().config.hide_dotfiles = bool(enabled)


def get_hide_dotfiles() -> bool:
    return get_lister().config.hide_dotfiles


if __name__ == '__main__':
    drives = enumerate_volumes()
    width = max((len(d.label) for d in drives), default=4) + 2
    print(f'{"Name":<{width}}Path')
    for drive in drives:
        print(f'{drive.label:<{width}}{drive.path}')
