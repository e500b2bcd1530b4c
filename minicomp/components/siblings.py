"""Discovery of the definition files that sit beside a component script."""

from __future__ import annotations

import os
from typing import List, Optional, Tuple

from ..logging import get_logger
from ..models import FileRecord
from ..stores import DirectoryFileIndex
from .base import FileGraph
from .kinds import SIBLING_KINDS, native_flag_for

_logger = get_logger("components.siblings")


def is_in_source_dir(full_path: str, source_dir: str) -> bool:
    return full_path.startswith(source_dir.rstrip(os.sep) + os.sep)


def discover_siblings(
    script: FileRecord,
    *,
    source_dir: str,
    graph: FileGraph,
    index: DirectoryFileIndex,
) -> Optional[FileRecord]:
    """Register the same-named siblings of ``script`` and return its descriptor.

    Scripts outside the source tree are matched through the directory index;
    scripts inside it are probed by exact path against the graph. The
    descriptor, when found, is registered after every other sibling.
    """
    if is_in_source_dir(script.full_path, source_dir):
        descriptor, to_add = _probe_source_siblings(script, graph)
    else:
        descriptor, to_add = _scan_external_siblings(script, graph, index)

    if descriptor is not None:
        descriptor.is_component_config = True
        graph.link_component(script, descriptor)
        to_add.append(descriptor.full_path)

    for full_path in to_add:
        graph.register_file(full_path)
    return descriptor


def _scan_external_siblings(
    script: FileRecord, graph: FileGraph, index: DirectoryFileIndex
) -> Tuple[Optional[FileRecord], List[str]]:
    same_name = index.get(script.directory).get(script.base_name, [])

    descriptor: Optional[FileRecord] = None
    ignored: List[str] = []
    for full_path in same_name:
        record = graph.register_file(full_path)
        flag = native_flag_for(record.extension)
        if flag is not None:
            script.mark_native(flag)
        elif record.is_json:
            if descriptor is None:
                descriptor = record
            else:
                ignored.append(full_path)

    if ignored:
        _logger.warning(
            "Multiple descriptors found for %s; using %s and ignoring %s",
            script.full_path,
            descriptor.full_path if descriptor else None,
            ", ".join(ignored),
        )
    return descriptor, []


def _probe_source_siblings(
    script: FileRecord, graph: FileGraph
) -> Tuple[Optional[FileRecord], List[str]]:
    path_base = os.path.join(script.directory, script.base_name)
    descriptor = graph.get_file_by_full_path(f"{path_base}.json")
    if descriptor is None or descriptor.owner is not None:
        # an owned descriptor implies its siblings were already handled
        return descriptor, []

    to_add: List[str] = []
    for extension in SIBLING_KINDS:
        record = graph.get_file_by_full_path(f"{path_base}.{extension}")
        if record is None:
            continue
        to_add.append(record.full_path)
        flag = native_flag_for(extension)
        if flag is not None:
            script.mark_native(flag)
    _logger.debug("Found %d siblings for %s", len(to_add), script.full_path)
    return descriptor, to_add


__all__ = ["discover_siblings", "is_in_source_dir"]
