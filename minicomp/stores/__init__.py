"""Caches owned by a single build run."""

from .dir_index import DirectoryFileIndex

__all__ = ["DirectoryFileIndex"]
