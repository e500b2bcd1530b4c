"""Per-run cache of directory listings grouped by base file name."""

from __future__ import annotations

import os
import stat
from typing import Callable, Dict, List

from ..logging import get_logger

DirFiles = Dict[str, List[str]]


class DirectoryFileIndex:
    """Maps a directory to ``{base_name: [full_path, ...]}`` for its regular files.

    Each directory is listed at most once; the result is reused for the rest
    of the build run. e.g. a directory ``/test/src`` holding ``a.js`` and
    ``a.css`` yields ``{"a": ["/test/src/a.css", "/test/src/a.js"]}``.
    """

    def __init__(self, listdir: Callable[[str], List[str]] = os.listdir) -> None:
        self._listdir = listdir
        self._entries: Dict[str, DirFiles] = {}
        self._logger = get_logger("stores.dir_index")

    def get(self, directory: str) -> DirFiles:
        key = os.path.abspath(directory)
        cached = self._entries.get(key)
        if cached is not None:
            return cached

        # Listing errors propagate; a missing directory is not an empty one.
        names = sorted(self._listdir(key))
        grouped: DirFiles = {}
        for name in names:
            full_path = os.path.join(key, name)
            try:
                stat_result = os.stat(full_path)
            except OSError:
                continue
            if not stat.S_ISREG(stat_result.st_mode):
                continue
            base_name = os.path.splitext(name)[0]
            grouped.setdefault(base_name, []).append(full_path)

        self._entries[key] = grouped
        self._logger.debug("Indexed %d file groups in %s", len(grouped), key)
        return grouped

    def __contains__(self, directory: object) -> bool:
        if not isinstance(directory, str):
            return False
        return os.path.abspath(directory) in self._entries

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["DirectoryFileIndex", "DirFiles"]
