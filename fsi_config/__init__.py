"""
fsinfo configuration/settings subsystem.

Defaults ship as json files in the `defaults` directory. Whatever differs from
them is written to a per-user file of the same name.
"""

import os
import json

import fsi_common

_EXT = '.json'
_DEFAULTS = 'defaults'
_THIS_DIR = os.path.abspath(os.path.dirname(__file__))
_DEFAULTS_DIR = os.path.join(_THIS_DIR, _DEFAULTS)
DIRNAME = f'.{fsi_common.NAME}'
ENV_VAR = 'FSINFO_CONFIG_DIR'

if os.environ.get(ENV_VAR):
    PATH = os.environ[ENV_VAR]
elif os.name == 'nt':
    PATH = os.path.join(os.environ['LOCALAPPDATA'], DIRNAME)
elif os.name == 'posix':
    PATH = os.path.join(os.path.expanduser('~'), '.config', DIRNAME)
else:
    raise RuntimeError(f'Unsupported System: {os.name}')


def load_json(json_path: str) -> dict[str, bool | int | str | list[str]]:
    with open(json_path, encoding='utf8') as file_object:
        return json.load(file_object)


def dump_json(json_path: str, data: dict[str, bool | int | str | list[str]]):
    os.makedirs(os.path.dirname(json_path), exist_ok=True)
    with open(json_path, 'w', encoding='utf8') as file_object:
        return json.dump(data, file_object, indent=2, sort_keys=True)


class _Settings:
    def __init__(self, name):
        file_name = f'{name}{_EXT}'
        self._user_data_path = os.path.join(PATH, file_name)
        self._defaults = load_json(os.path.join(_DEFAULTS_DIR, file_name))

        self._user_data: dict = {}
        self._time: int | float = 0
        self._load_data()

    def _has_user_data(self) -> bool:
        return os.path.isfile(self._user_data_path)

    def _load_data(self) -> None:
        if not self._has_user_data():
            return
        self._user_data.clear()
        self._user_data.update(load_json(self._user_data_path))
        self._time = self._file_time

    @property
    def _file_time(self) -> float:
        if self._has_user_data():
            return os.path.getmtime(self._user_data_path)
        return 0

    def __getattribute__(self, name: str):
        """Handle getting the user preferences.
        Settings exist upfront as `None` members, resolve them from user data or defaults.
        Update user data in case the file changed on disk.
        """
        try:
            member = super().__getattribute__(name)
        except AttributeError:
            member = None

        if name == '_defaults' or name not in self._defaults:
            return member

        if self._file_time > self._time:
            self._load_data()

        if name in self._user_data:
            member = self._user_data[name]
        else:
            member = self._defaults[name]

        return member

    def __setattr__(self, name, value):
        """Handle setting the user preferences.
        Internal member variables are set as usual.
        `None` just declares a setting.
        Values identical to defaults get removed from the user data,
        no user data left removes the user data file.
        """
        if name in ('_user_data_path', '_defaults') or name not in self._defaults:
            super().__setattr__(name, value)
            return
        # Declaring the member variables.
        if value is None:
            super().__setattr__(name, value)
            return

        if value == self._defaults[name]:
            if name not in self._user_data:
                return
            del self._user_data[name]
            if not self._user_data:
                if self._has_user_data():
                    os.unlink(self._user_data_path)
                self._time = 0
                return
        else:
            self._user_data[name] = value
        dump_json(self._user_data_path, self._user_data)
        self._time = self._file_time


class _General(_Settings):
    def __init__(self):
        super().__init__('general')

        self.port: int = None
        self.port_range: int = None


class _Navigation(_Settings):
    def __init__(self):
        super().__init__('navigation')

        self.hide_dotfiles: bool = None
        self.start_up_directory: str = None

        self._last_directory: str = None


class _Volumes(_Settings):
    def __init__(self):
        super().__init__('volumes')

        self.media_root: str = None
        self.mount_table: str = None
        self.use_df_fallback: bool = None


general = _General()
navigation = _Navigation()
volumes = _Volumes()
