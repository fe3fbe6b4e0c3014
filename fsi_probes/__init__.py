"""
Platform probes: hidden-file detection and volume discovery per OS family.

Every module in here provides:
  `matches() -> bool`  tell if it handles the running platform
  `is_hidden(entry: os.DirEntry) -> bool`
  `get_volumes() -> list[fsi_models.VolumeEntry]`
"""

import os
import types
import logging
import importlib

import fsi_common

_THIS_DIR = os.path.abspath(os.path.dirname(__file__))
_LIB_NAME = os.path.basename(_THIS_DIR)
log = logging.getLogger(f'{fsi_common.NAME}.probes')


def get_all() -> dict[str, types.ModuleType]:
    """Import all available probe modules."""
    probes: dict[str, types.ModuleType] = {}
    for item in os.scandir(_THIS_DIR):
        if item.is_dir() or item.name == '__init__.py':
            continue
        base, ext = os.path.splitext(item.name)
        if ext.lower() != '.py':
            continue
        module = importlib.import_module(f'{_LIB_NAME}.{base}')
        probes[base] = module
    return probes


def get_probe() -> types.ModuleType:
    """Get the probe module for the running platform."""
    for name, probe in get_all().items():
        if probe.matches():
            log.debug('Using "%s" platform probe.', name)
            return probe
    raise UnsupportedPlatform(f'Unsupported System: {os.name}')


class UnsupportedPlatform(Exception):
    pass


if __name__ == '__main__':
    print(get_probe())
