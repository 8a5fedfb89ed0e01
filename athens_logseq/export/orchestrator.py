"""
Export orchestrator.

Takes an Athens snapshot and writes it out as a tree of Markdown files named
and formatted the way Logseq expects:

    <root>/journals/2021_07_16.md
    <root>/pages/Project.Notes.md
    <root>/logseq/              (left empty for Logseq)

The output directory may already exist; files are overwritten on rerun.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from ..config import ConfigManager, config as default_config
from ..database import GraphStore
from ..exceptions import ExportError, OutputWriteError, PageLookupError
from ..importers import BaseImporter, importer_for_path
from ..models import ExportReport, PageFailure, PageTarget, PathCollision
from .journals import classify, journal_target
from .paths import map_title
from .references import ReferenceResolver, RewriteMap
from .serializer import BlockSerializer, to_document


def ensure_directories(root: Path, settings: ConfigManager) -> None:
    """Create the journals, pages and metadata directories under root."""
    for name in (settings.journals_directory, settings.pages_directory, settings.metadata_directory):
        directory = root / name
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputWriteError(directory, str(e))


def write_document(path: Path, content: str) -> None:
    """Write one output file as UTF-8."""
    try:
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
    except (OSError, ValueError) as e:
        raise OutputWriteError(path, str(e))


def find_collisions(targets: List[PageTarget]) -> List[PathCollision]:
    """Group targets that would be written to the same file."""
    by_path: Dict[Path, List[str]] = {}
    for target in targets:
        by_path.setdefault(target.path, []).append(target.title)
    return [
        PathCollision(path=path, titles=titles)
        for path, titles in by_path.items() if len(titles) > 1
    ]


class LogseqExporter:
    """
    Drives a full export: load, resolve references, render and write pages.
    """

    def __init__(
        self,
        importer: BaseImporter,
        output_root: Union[str, Path],
        settings: Optional[ConfigManager] = None
    ):
        """
        Initialize the exporter.

        Args:
            importer: Source of the graph's blocks
            output_root: Directory that receives the Logseq tree
            settings: Configuration (defaults to the global config)
        """
        self.importer = importer
        self.output_root = Path(output_root)
        self.settings = settings or default_config

    def plan_targets(self, titles: List[str]) -> List[PageTarget]:
        """
        Compute output targets, journals first, then regular pages.
        """
        journals = []
        pages = []
        for title in titles:
            journal = classify(title)
            if journal:
                journals.append(journal_target(journal, self.output_root, self.settings))
            else:
                pages.append(map_title(title, self.output_root, self.settings))

        logging.info(f"Found {len(journals)} journal pages and {len(pages)} regular pages")
        return journals + pages

    def render_target(self, store: GraphStore, serializer: BlockSerializer, target: PageTarget) -> str:
        root = store.page_by_title(target.title)
        if root is None:
            raise PageLookupError(target.title)
        lines = serializer.render_page(root)
        return to_document(lines, target.preamble, self.settings.convert_task_markers)

    def export(self) -> ExportReport:
        """
        Run the export.

        Returns:
            ExportReport describing what was written and what failed

        Raises:
            SourceReadError: If the snapshot cannot be read
            OutputWriteError: If the output directories cannot be created
        """
        # Read the snapshot before touching the output directory
        blocks = self.importer.get_all_blocks()

        report = ExportReport(output_root=self.output_root)

        with GraphStore() as store:
            store.initialize_database()
            store.load(blocks)

            ensure_directories(self.output_root, self.settings)

            resolver = ReferenceResolver(store)
            rewrite_map: RewriteMap = resolver.resolve()
            report.references_rewritten = len(rewrite_map)
            report.missing_references = list(resolver.missing_targets)

            targets = self.plan_targets(store.list_titles())
            report.collisions = find_collisions(targets)
            for collision in report.collisions:
                logging.warning(
                    f"Titles {collision.titles} all map to {collision.path}; "
                    f"'{collision.titles[-1]}' will be kept"
                )

            serializer = BlockSerializer(store, rewrite_map, indent=self.settings.indent)
            documents: List[Tuple[PageTarget, str]] = []
            for target in targets:
                try:
                    documents.append((target, self.render_target(store, serializer, target)))
                except ExportError as e:
                    self._record_failure(report, target, e)

        self._write_all(documents, report)

        logging.info(
            f"Export finished: {report.journals_written} journals, {report.pages_written} pages, "
            f"{len(report.failures)} failures"
        )
        return report

    def _write_all(self, documents: List[Tuple[PageTarget, str]], report: ExportReport) -> None:
        # Colliding targets must be written in order so that the last one wins
        if self.settings.max_workers > 1 and not report.collisions:
            with ThreadPoolExecutor(max_workers=self.settings.max_workers) as executor:
                errors = list(executor.map(lambda document: self._try_write(*document), documents))
        else:
            errors = [self._try_write(target, content) for target, content in documents]

        for (target, _), error in zip(documents, errors):
            if error is not None:
                self._record_failure(report, target, error)
                continue
            logging.debug(f"Wrote {target.path}")
            if target.kind == "journal":
                report.journals_written += 1
            else:
                report.pages_written += 1

    @staticmethod
    def _try_write(target: PageTarget, content: str) -> Optional[OutputWriteError]:
        try:
            write_document(target.path, content)
        except OutputWriteError as e:
            return e
        return None

    @staticmethod
    def _record_failure(report: ExportReport, target: PageTarget, error: ExportError) -> None:
        logging.error(f"Failed to export page '{target.title}': {error}")
        report.failures.append(PageFailure(title=target.title, path=target.path, error=str(error)))


def export(
    source_path: Union[str, Path],
    output_root: Union[str, Path],
    settings: Optional[ConfigManager] = None
) -> ExportReport:
    """
    Export the Athens snapshot at source_path into a Logseq tree at output_root.
    """
    return LogseqExporter(importer_for_path(source_path), output_root, settings).export()
