"""
Linux/Unix probe. Volumes come from the kernel mount table with `df` as fallback.
"""

import os
import re
import shutil
import logging
import subprocess

import fsi_common
import fsi_config
from fsi_sizes import format_bytes
from fsi_models import VolumeEntry

ROOT_LABEL = 'File system'
ROOT_PATH = '/'
DF_COMMAND = ['df', '-P', '-k']
_OCTAL_ESCAPE = re.compile(r'\\([0-7]{3})')
_HEX_DIGITS = frozenset('0123456789abcdefABCDEF')

log = logging.getLogger(f'{fsi_common.NAME}.probes.posix')


def matches() -> bool:
    """Tell if we're running on a Unix-like system."""
    return os.name == 'posix'


def is_hidden(entry: os.DirEntry) -> bool:
    return entry.name.startswith('.')


def get_volumes(
    media_root: str | None = None,
    mount_table: str | None = None,
    use_df_fallback: bool | None = None,
) -> list[VolumeEntry]:
    """Get the root file system plus all volumes mounted under `media_root`.

    Reading the mount table or running `df` may fail, this never raises. Worst
    case only the root entry is returned.
    """
    if media_root is None:
        media_root = fsi_config.volumes.media_root
    if mount_table is None:
        mount_table = fsi_config.volumes.mount_table
    if use_df_fallback is None:
        use_df_fallback = fsi_config.volumes.use_df_fallback

    volumes = [VolumeEntry(ROOT_LABEL, ROOT_PATH)]
    try:
        mounts = read_mount_table(mount_table)
    except OSError as error:
        log.warning('Could not read mount table "%s": %s', mount_table, error)
        if not use_df_fallback:
            return volumes
        try:
            mounts = read_df()
        except (OSError, subprocess.CalledProcessError) as error:
            log.warning('Could not get mounts from `df`: %s', error)
            return volumes

    for path, size in mounts:
        if not path.startswith(media_root):
            continue
        volumes.append(VolumeEntry(get_label(path, size), path))
    return volumes


def read_mount_table(mount_table: str) -> list[tuple[str, int | None]]:
    with open(mount_table, encoding='utf8', errors='surrogateescape') as file_obj:
        return parse_mountinfo(file_obj.read())


def parse_mountinfo(content: str) -> list[tuple[str, int | None]]:
    """Get mount points from `/proc/self/mountinfo` formatted text.

    The mount point is the 5th field. Sizes are not part of this format.
    """
    mounts: list[tuple[str, int | None]] = []
    for line in content.splitlines():
        fields = line.split()
        if len(fields) < 5:
            continue
        mounts.append((unescape(fields[4]), None))
    return mounts


def read_df() -> list[tuple[str, int | None]]:
    env = dict(os.environ, LC_ALL='C')
    result = subprocess.run(DF_COMMAND, capture_output=True, text=True, check=True, env=env)
    return parse_df(result.stdout)


def parse_df(content: str) -> list[tuple[str, int | None]]:
    """Get mount points and total sizes from `df -P -k` output.

    Columns: Filesystem, 1024-blocks, Used, Available, Capacity, Mounted on.
    The mount point is last and may contain spaces.
    """
    mounts: list[tuple[str, int | None]] = []
    for line in content.splitlines()[1:]:
        fields = line.split(maxsplit=5)
        if len(fields) < 6:
            continue
        try:
            size = int(fields[1]) * 1024
        except ValueError:
            size = None
        mounts.append((fields[5], size))
    return mounts


def unescape(path: str) -> str:
    r"""Decode the kernels octal escapes. I.e. `\040` -> space."""
    return _OCTAL_ESCAPE.sub(lambda match: chr(int(match.group(1), 8)), path)


def get_label(path: str, size: int | None = None) -> str:
    """Get a display name for a mount point.

    Unlabeled media gets auto-mounted under its file system UUID. That's no
    name for humans, so these are called after their size instead.
    """
    label = path.rstrip('/').rsplit('/', 1)[-1]
    if not is_uuid(label):
        return label

    if size is None:
        try:
            size = shutil.disk_usage(path).total
        except OSError as error:
            log.debug('Could not get size of "%s": %s', path, error)
            return label
    return f'Volume of {format_bytes(size)}'


def is_uuid(name: str) -> bool:
    """Tell if `name` looks like a file system UUID: `XXXX-XXXX` or 16 hex digits."""
    if len(name) == 9:
        if name[4] != '-':
            return False
        return _is_hex(name[:4]) and _is_hex(name[5:])
    if len(name) == 16:
        return _is_hex(name)
    return False


def _is_hex(text: str) -> bool:
    return all(char in _HEX_DIGITS for char in text)
