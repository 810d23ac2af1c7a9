# File: src/mstair/xrepr/base/fs_helpers.py
"""
Locating and loading the `.env` file that feeds environment-driven settings.

Both the representation limits and the log level configuration read their
values from `os.environ`; this module is where a project-local `.env` file
gets merged into it first.
"""

import threading
from pathlib import Path
from typing import IO, TypeAlias

import dotenv


__all__ = ["StrPath", "fs_find_dotenv", "fs_load_dotenv"]

StrPath: TypeAlias = str | Path

_loaded_lock = threading.Lock()
_loaded_paths: set[str] = set()


def fs_find_dotenv() -> str:
    """Return the nearest `.env` at or above the working directory, or "" if there is none."""
    return dotenv.find_dotenv(usecwd=True)


def fs_load_dotenv(
    *,
    dotenv_path: StrPath | None = None,
    stream: IO[str] | None = None,
    verbose: bool = False,
    override: bool = False,
    reload: bool = False,
) -> bool:
    """
    Merge `.env` variables into the process environment.

    Without `dotenv_path` or `stream` the file is found with `fs_find_dotenv()`.
    A given file is read once per process unless `reload` is set; streams are
    always read. Existing variables are kept unless `override` is set.

    :param dotenv_path: Path of the file to load.
    :param stream: Text stream with `.env` content, used instead of a file.
    :param verbose: Let python-dotenv warn when the file is missing.
    :param override: Replace variables that are already set.
    :param reload: Read the file again even if it was loaded before.
    :return: True if the source defined at least one variable.
    """
    if stream is not None:
        return dotenv.load_dotenv(stream=stream, verbose=verbose, override=override)

    path = str(dotenv_path) if dotenv_path is not None else fs_find_dotenv()
    if not path:
        return False
    with _loaded_lock:
        if path in _loaded_paths and not reload:
            return False
        _loaded_paths.add(path)
    return dotenv.load_dotenv(dotenv_path=path, verbose=verbose, override=override)


# End of file: src/mstair/xrepr/base/fs_helpers.py
