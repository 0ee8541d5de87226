import logging
import time
from pathlib import Path
from typing import List, Optional

from config import AppConfig
from core.index.alphabetical import AlphabeticalIndex
from core.index.comments import JavadocCommentRenderer
from core.index.links import MarkdownLinkResolver, ReferenceResolver, RelativePathResolver
from core.index.models import Entity, TableModel
from core.index.rows import RowRenderer
from core.index.table import TabTableBuilder
from core.ports.scan_port import CodebaseScanner

logger = logging.getLogger(__name__)


def create_resolver(link_style: str, *, suffix: str = ".html") -> ReferenceResolver:
    """Return the reference resolver for an output style ("html" or "markdown")."""

    style = (link_style or "html").strip().lower()
    if style == "markdown":
        return MarkdownLinkResolver(suffix=suffix)
    if style == "html":
        return RelativePathResolver(suffix=suffix)
    raise ValueError(f"Unknown link style: {link_style!r} (expected html/markdown)")


class ClassIndexService:
    """Use Case for building the all-classes index of a codebase directory."""

    def __init__(
        self,
        scanner: CodebaseScanner,
        config: Optional[AppConfig] = None,
        *,
        link_style: str = "html",
    ):
        self.scanner = scanner
        self.config = config or AppConfig()
        self.resolver = create_resolver(link_style, suffix=self.config.index_link_suffix)

    def builder(self) -> TabTableBuilder:
        renderer = RowRenderer(self.resolver, JavadocCommentRenderer(), self.config.labels)
        return TabTableBuilder(
            renderer,
            labels=self.config.labels,
            table_id=self.config.index_table_id,
        )

    def build_from_entities(self, entities: List[Entity]) -> TableModel:
        index = AlphabeticalIndex.from_entities(entities)
        return self.builder().build(index)

    def build_for_directory(self, directory: Path) -> TableModel:
        """
        Scan a directory and build its class table.

        Args:
            directory: Root of the Java sources.

        Returns:
            The built table model.
        """
        start_time = time.time()
        logger.info("Building class index for %s", directory)

        entities = self.scanner.scan(directory, exclude_tests=bool(self.config.index_exclude_tests))
        if not entities:
            logger.warning("No type declarations found in %s", directory)

        model = self.build_from_entities(entities)

        duration = time.time() - start_time
        logger.info("Class index built in %.2fs", duration)
        return model
