"""Core data models shared across minicomp components."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Union

Content = Union[bytes, str]


@dataclass
class ResolvedModule:
    """Outcome of resolving one `usingComponents` reference."""

    identifier: str
    file: Optional["FileRecord"] = None


@dataclass(eq=False)
class FileRecord:
    """A file registered with the build graph."""

    full_path: str
    directory: str
    extension: str
    content: Optional[bytes] = None
    is_json: bool = False
    is_script: bool = False
    is_component_config: bool = False
    is_analysed_components: bool = False
    component: Optional["FileRecord"] = field(default=None, repr=False)
    descriptor: Optional["FileRecord"] = field(default=None, repr=False)
    # only written through FileGraph.assign_owner
    owner: Optional["FileRecord"] = field(default=None, repr=False)
    native_flags: Set[str] = field(default_factory=set)
    resolved_module_ids: Dict[str, ResolvedModule] = field(
        default_factory=dict, repr=False
    )

    @property
    def base_name(self) -> str:
        """File name without its last extension."""
        return os.path.splitext(os.path.basename(self.full_path))[0]

    def mark_native(self, flag: str) -> None:
        # flags are only ever added
        self.native_flags.add(flag)

    def read(self) -> bytes:
        if self.content is None:
            with open(self.full_path, "rb") as handle:
                self.content = handle.read()
        return self.content


@dataclass
class ProcessResult:
    """Replacement content produced for a processed file."""

    content: Content


@dataclass
class ComponentSummary:
    """What the build learned about a single component."""

    script: str
    descriptor: Optional[str]
    native_flags: List[str] = field(default_factory=list)
    using: Dict[str, str] = field(default_factory=dict)


@dataclass
class BuildReport:
    """Aggregated output of a build run."""

    root: str
    outputs: Dict[str, Content] = field(default_factory=dict)
    components: List[ComponentSummary] = field(default_factory=list)
    rewritten: List[str] = field(default_factory=list)
    indexed_dirs: int = 0
