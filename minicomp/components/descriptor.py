"""Resolution and rewrite of component JSON descriptors."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Optional

from ..logging import get_logger
from ..models import FileRecord, ProcessResult
from .gate import ComponentAnalyser
from .kinds import USING_COMPONENTS_KEY, to_hyphen

Resolver = Callable[[FileRecord, str], Optional[str]]


def rewrite_descriptor(
    descriptor: FileRecord,
    *,
    resolve: Resolver,
    analyser: ComponentAnalyser,
    logger: Optional[logging.Logger] = None,
) -> ProcessResult:
    """Resolve the ``usingComponents`` table of ``descriptor`` and re-serialise it.

    Each usage is resolved against the owning script; tags are hyphenated and
    entries with empty references are dropped. Every resolved sub-component
    script is handed to ``analyser`` so its own siblings get discovered.

    Only a malformed descriptor is contained here: it is logged and its
    original content is returned. Resolver and analysis errors propagate.
    """
    logger = logger or get_logger("components.descriptor")
    original = descriptor.read()

    try:
        config = _parse(original)
    except ValueError as exc:
        logger.error("Parse component config %s fail: %s", descriptor.full_path, exc)
        return ProcessResult(content=original)

    if not isinstance(config, dict):
        return ProcessResult(content=original)
    using_components = config.get(USING_COMPONENTS_KEY)
    script = descriptor.component
    if not isinstance(using_components, dict) or script is None:
        if using_components and script is not None:
            logger.warning(
                "Ignoring non-object %s in %s", USING_COMPONENTS_KEY, descriptor.full_path
            )
        return ProcessResult(content=original)

    result: Dict[str, Any] = {}
    for tag, reference in using_components.items():
        if not reference:
            continue
        if not isinstance(reference, str):
            logger.warning(
                "Dropping non-string usage %r in %s", tag, descriptor.full_path
            )
            continue

        resolved = resolve(script, reference)
        result[to_hyphen(tag)] = resolved or reference

        module_info = script.resolved_module_ids.get(reference)
        if module_info is not None and module_info.file is not None:
            analyser.analyse(module_info.file)

    config[USING_COMPONENTS_KEY] = result
    logger.debug(
        "Rewrote %d component usages in %s", len(result), descriptor.full_path
    )
    return ProcessResult(content=json.dumps(config, indent=4, ensure_ascii=False))


def _parse(content: bytes | str) -> Any:
    text = content.decode("utf-8") if isinstance(content, bytes) else content
    return json.loads(text)


__all__ = ["Resolver", "rewrite_descriptor"]
