import os
import ntpath
import posixpath
import types


def resolve(
    path: str, working_directory: str | None = None, pathmod: types.ModuleType = os.path
) -> tuple[str, str]:
    """Get the absolute, forward-slash version of `path` and its parent directory.

    Pure string work, nothing is checked on disk. Relative paths are joined onto
    `working_directory` (defaults to the current one). `pathmod` is the path
    flavor to work with: `posixpath` or `ntpath`.
    """
    path = clean(path, pathmod)
    if not pathmod.isabs(path):
        if working_directory is None:
            working_directory = os.getcwd()
        path = clean(pathmod.join(working_directory, path), pathmod)
    parent = pathmod.dirname(path)

    # Cleaning bare drives on Windows can leave "C:." behind.
    if pathmod is ntpath:
        path = path.rstrip('.')
        parent = parent.rstrip('.')
    return to_slash(path, pathmod), to_slash(parent, pathmod)


def clean(path: str, pathmod: types.ModuleType = os.path) -> str:
    """Lexically normalize `path`. Unlike plain `normpath` a leading `//` is collapsed too."""
    path = pathmod.normpath(path)
    if pathmod is posixpath and path.startswith('//'):
        path = '/' + path.lstrip('/')
    return path


def to_slash(path: str, pathmod: types.ModuleType = os.path) -> str:
    if pathmod.sep == '/':
        return path
    return path.replace(pathmod.sep, '/')
