"""
Windows probe. Volumes are found by trying the drive letters.
"""

import os
import stat
import string

from fsi_models import VolumeEntry


def matches() -> bool:
    """Tell if we're running on Windows."""
    return os.name == 'nt'


def is_hidden(entry: os.DirEntry) -> bool:
    """Tell if the entry has the hidden attribute set. Directories never count."""
    if entry.is_dir():
        return False
    attributes = getattr(entry.stat(), 'st_file_attributes', 0)
    return bool(attributes & stat.FILE_ATTRIBUTE_HIDDEN)


def get_volumes(letters: str = string.ascii_uppercase) -> list[VolumeEntry]:
    volumes = []
    for letter in letters:
        name = f'{letter}:'
        try:
            with os.scandir(f'{name}\\'):
                pass
        except OSError:
            continue
        volumes.append(VolumeEntry(name, f'{name}/'))
    return volumes
