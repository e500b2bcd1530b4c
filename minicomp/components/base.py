"""Contract for the build graph the component engine runs against."""

from abc import ABC, abstractmethod
from typing import Optional

from ..models import FileRecord


class FileGraph(ABC):
    """Owns file registration, lookup and module resolution."""

    @abstractmethod
    def register_file(self, full_path: str) -> FileRecord:
        """Return the record for ``full_path``, creating and classifying it if needed."""

    @abstractmethod
    def get_file_by_full_path(self, full_path: str) -> Optional[FileRecord]:
        """Return an already registered record, or None."""

    @abstractmethod
    def resolve(self, script: FileRecord, reference: str) -> Optional[str]:
        """Resolve ``reference`` relative to ``script``; None when nothing matches."""

    def link_component(self, script: FileRecord, descriptor: FileRecord) -> None:
        """Associate a component script with its descriptor."""
        descriptor.component = script
        script.descriptor = descriptor

    def assign_owner(self, record: FileRecord, owner: FileRecord) -> None:
        """Mark ``record`` as produced by ``owner``.

        Graphs that fold several definitions into one source file (single-file
        components and the like) call this; the built-in graph never does. An
        owned descriptor is linked to its script but its siblings are left
        alone.
        """
        record.owner = owner
