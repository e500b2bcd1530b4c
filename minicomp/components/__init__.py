"""Component sibling discovery, analysis gating and descriptor rewriting."""

from __future__ import annotations

from .base import FileGraph
from .descriptor import rewrite_descriptor
from .gate import AnalyseOptions, ComponentAnalyser, analyse_component
from .kinds import SIBLING_KINDS, to_hyphen
from .siblings import discover_siblings

__all__ = [
    "AnalyseOptions",
    "ComponentAnalyser",
    "FileGraph",
    "SIBLING_KINDS",
    "analyse_component",
    "discover_siblings",
    "rewrite_descriptor",
    "to_hyphen",
]
