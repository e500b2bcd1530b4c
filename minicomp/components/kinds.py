"""Recognized component sibling kinds and naming helpers."""

from __future__ import annotations

import re
from typing import Dict, Optional, Tuple

# extension -> (kind, native flag). Order is the direct-probe order.
SIBLING_KINDS: Dict[str, Tuple[str, Optional[str]]] = {
    "wxml": ("markup", "wx"),
    "swan": ("markup", "swan"),
    "axml": ("markup", "ant"),
    "ttml": ("markup", "tt"),
    "acss": ("style", None),
    "ttss": ("style", None),
    "wxss": ("style", None),
    "css": ("style", None),
    "js": ("script", None),
}

USING_COMPONENTS_KEY = "usingComponents"

_UPPER = re.compile(r"[A-Z]")


def native_flag_for(extension: str) -> Optional[str]:
    """Return the native flag an extension sets on its script, if any."""
    entry = SIBLING_KINDS.get(extension)
    return entry[1] if entry else None


def is_sibling_kind(extension: str) -> bool:
    return extension in SIBLING_KINDS


def to_hyphen(name: str) -> str:
    """Convert ``myButton`` style names to ``my-button``."""
    converted = _UPPER.sub(lambda match: "-" + match.group(0).lower(), name)
    if converted.startswith("-") and not name.startswith("-"):
        converted = converted[1:]
    return converted


__all__ = [
    "SIBLING_KINDS",
    "USING_COMPONENTS_KEY",
    "is_sibling_kind",
    "native_flag_for",
    "to_hyphen",
]
