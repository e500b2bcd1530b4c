"""One-shot guard around sibling discovery for component scripts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..config import BuildConfig
from ..logging import get_logger
from ..models import FileRecord
from ..stores import DirectoryFileIndex
from .base import FileGraph
from .siblings import discover_siblings


@dataclass
class AnalyseOptions:
    """Everything a single analysis call needs."""

    graph: FileGraph
    config: BuildConfig
    index: DirectoryFileIndex


class ComponentAnalyser:
    """Runs sibling discovery at most once per script for a build run."""

    def __init__(
        self,
        graph: FileGraph,
        config: BuildConfig,
        index: Optional[DirectoryFileIndex] = None,
    ) -> None:
        self.graph = graph
        self.config = config
        self.index = index if index is not None else DirectoryFileIndex()
        self.logger = get_logger("components.gate")

    def analyse(self, script: FileRecord) -> None:
        if script.is_analysed_components:
            return
        # Claimed before any work so cycles in the usage graph stop here.
        script.is_analysed_components = True

        if not self.config.supports_components:
            self.logger.debug(
                "Skipping component analysis for %s (app type %s)",
                script.full_path,
                self.config.app_type,
            )
            return

        discover_siblings(
            script,
            source_dir=str(self.config.source_dir),
            graph=self.graph,
            index=self.index,
        )


def analyse_component(script: FileRecord, options: AnalyseOptions) -> None:
    """Analyse ``script`` with a throwaway analyser bound to ``options``."""
    ComponentAnalyser(options.graph, options.config, options.index).analyse(script)


__all__ = ["AnalyseOptions", "ComponentAnalyser", "analyse_component"]
