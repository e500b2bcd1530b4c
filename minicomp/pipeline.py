"""Build driver that feeds registered files through the component engine."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .components import ComponentAnalyser, rewrite_descriptor
from .config import BuildConfig
from .graph import BuildGraph
from .logging import get_logger
from .models import BuildReport, ComponentSummary, FileRecord
from .stores import DirectoryFileIndex


class BuildPipeline:
    """Runs one build pass over a project's source tree."""

    def __init__(
        self,
        config: BuildConfig,
        graph: Optional[BuildGraph] = None,
        index: Optional[DirectoryFileIndex] = None,
    ) -> None:
        self.config = config
        self.graph = graph or BuildGraph(config)
        self.index = index if index is not None else DirectoryFileIndex()
        self.analyser = ComponentAnalyser(self.graph, config, self.index)
        self.logger = get_logger("pipeline")

    def run(self) -> BuildReport:
        """Process every file reachable from the source tree."""
        self.logger.info("Building %s (app type %s)", self.config.source_dir, self.config.app_type)
        for record in self.graph.scan_source():
            if record.is_script:
                self.analyser.analyse(record)

        report = BuildReport(root=str(self.config.root))
        for record in self.graph.pending():
            self._process(record, report)

        report.components = self._summarise_components()
        report.indexed_dirs = len(self.index)
        self.logger.info(
            "Processed %d files, %d components, %d descriptors rewritten",
            len(report.outputs),
            len(report.components),
            len(report.rewritten),
        )
        return report

    def write(self, report: BuildReport, output_dir: Optional[Path] = None) -> int:
        """Write processed files below ``output_dir``; return the count written."""
        target_root = Path(output_dir or self.config.output_dir)
        root = Path(self.config.root)
        written = 0
        for full_path, content in report.outputs.items():
            try:
                relative = Path(full_path).relative_to(root)
            except ValueError:
                self.logger.warning("Skipping %s: outside project root %s", full_path, root)
                continue
            destination = target_root / relative
            destination.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, str):
                destination.write_text(content, encoding="utf-8")
            else:
                destination.write_bytes(content)
            written += 1
        return written

    def _process(self, record: FileRecord, report: BuildReport) -> None:
        if record.is_script:
            self.analyser.analyse(record)

        if record.is_component_config:
            result = rewrite_descriptor(
                record,
                resolve=self.graph.resolve,
                analyser=self.analyser,
            )
            report.outputs[record.full_path] = result.content
            if result.content is not record.content:
                report.rewritten.append(record.full_path)
            return

        report.outputs[record.full_path] = record.read()

    def _summarise_components(self) -> list[ComponentSummary]:
        summaries = []
        for record in self.graph.files():
            descriptor = record.descriptor
            if descriptor is None:
                continue
            using = {
                reference: module.identifier
                for reference, module in record.resolved_module_ids.items()
            }
            summaries.append(
                ComponentSummary(
                    script=record.full_path,
                    descriptor=descriptor.full_path,
                    native_flags=sorted(record.native_flags),
                    using=using,
                )
            )
        return summaries


__all__ = ["BuildPipeline"]
