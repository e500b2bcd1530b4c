"""In-memory build graph: file registration, classification and resolution."""

from __future__ import annotations

import os
from collections import OrderedDict
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from .components.base import FileGraph
from .config import BuildConfig
from .logging import get_logger
from .models import FileRecord, ResolvedModule

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    "__pycache__",
}


class BuildGraph(FileGraph):
    """Tracks every file of a build run and the order it should be processed in."""

    def __init__(self, config: BuildConfig) -> None:
        self.config = config
        self.logger = get_logger("graph")
        self._files: Dict[str, FileRecord] = {}
        self._pending: "OrderedDict[str, FileRecord]" = OrderedDict()

    # ------------------------------------------------------------------
    # Registration

    def scan_source(self) -> List[FileRecord]:
        """Register every file under the source directory."""
        source_dir = Path(self.config.source_dir)
        if not source_dir.exists():
            raise FileNotFoundError(f"Source directory not found: {source_dir}")
        if not source_dir.is_dir():
            raise NotADirectoryError(f"Source path is not a directory: {source_dir}")

        skipped = {Path(self.config.output_dir).resolve()}
        skipped.update((Path(self.config.root) / name).resolve() for name in self.config.module_dirs)

        records: List[FileRecord] = []
        for dirpath, dirnames, filenames in os.walk(source_dir):
            current = Path(dirpath)
            dirnames[:] = sorted(
                name
                for name in dirnames
                if name not in _EXCLUDED_DIRS and (current / name).resolve() not in skipped
            )
            for filename in sorted(filenames):
                records.append(self.register_file(str(current / filename)))
        self.logger.debug("Registered %d source files", len(records))
        return records

    def register_file(self, full_path: str) -> FileRecord:
        key = os.path.abspath(full_path)
        record = self._files.get(key)
        if record is None:
            record = self._classify(key)
            self._files[key] = record
            self._pending[key] = record
        elif key in self._pending:
            # re-registration defers a queued file behind everything added since
            self._pending.move_to_end(key)
        return record

    def get_file_by_full_path(self, full_path: str) -> Optional[FileRecord]:
        return self._files.get(os.path.abspath(full_path))

    def files(self) -> List[FileRecord]:
        return list(self._files.values())

    def pending(self) -> Iterator[FileRecord]:
        """Yield queued records in order until the queue is drained."""
        while self._pending:
            _, record = self._pending.popitem(last=False)
            yield record

    def _classify(self, full_path: str) -> FileRecord:
        extension = os.path.splitext(full_path)[1][1:].lower()
        return FileRecord(
            full_path=full_path,
            directory=os.path.dirname(full_path),
            extension=extension,
            is_json=extension in self.config.json_extensions,
            is_script=extension in self.config.script_extensions,
        )

    # ------------------------------------------------------------------
    # Resolution

    def resolve(self, script: FileRecord, reference: str) -> Optional[str]:
        if not isinstance(reference, str) or not reference:
            return None

        cached = script.resolved_module_ids.get(reference)
        if cached is not None:
            return cached.identifier

        target_path = self._find_target(script, reference)
        if target_path is None:
            self.logger.debug("Unable to resolve %s from %s", reference, script.full_path)
            return None

        target = self.register_file(target_path)
        identifier = _module_identifier(script.directory, target_path)
        script.resolved_module_ids[reference] = ResolvedModule(
            identifier=identifier, file=target
        )
        self.logger.debug("Resolved %s from %s to %s", reference, script.full_path, identifier)
        return identifier

    def _find_target(self, script: FileRecord, reference: str) -> Optional[str]:
        if reference.startswith(("./", "../")):
            bases = [os.path.join(script.directory, reference)]
        elif reference.startswith("/"):
            bases = [os.path.join(str(self.config.source_dir), reference.lstrip("/"))]
        else:
            root = str(self.config.root)
            bases = [os.path.join(root, name, reference) for name in self.config.module_dirs]

        for base in bases:
            base = os.path.normpath(base)
            for candidate in self._candidates(base):
                if os.path.isfile(candidate):
                    return candidate
        return None

    def _candidates(self, base: str) -> Iterator[str]:
        extensions = self.config.script_extensions
        if os.path.splitext(base)[1][1:] in extensions:
            yield base
        for extension in extensions:
            yield f"{base}.{extension}"
        for extension in extensions:
            yield os.path.join(base, f"index.{extension}")


def _module_identifier(from_dir: str, target_path: str) -> str:
    stem = os.path.splitext(target_path)[0]
    relative = Path(os.path.relpath(stem, from_dir)).as_posix()
    if not relative.startswith("."):
        relative = f"./{relative}"
    return relative


__all__ = ["BuildGraph"]
