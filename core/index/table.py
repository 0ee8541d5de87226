from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Optional, Sequence, Set, Tuple

from config import IndexLabels
from core.index.alphabetical import AlphabeticalIndexLike
from core.index.classifier import Category, classify, default_categories
from core.index.errors import IndexInputError
from core.index.models import Entity, FilterScript, IndexItem, Row, TableModel, TableTab
from core.index.rows import RowRenderer

logger = logging.getLogger(__name__)


DEFAULT_TABLE_ID = "all-classes-table"


class TabTableBuilder:
    """Build the tabbed class table from an alphabetical index.

    Rows follow the index traversal order. Every row lands in the default view
    and in each category whose predicate matches it. Categories that end up
    empty are left out of the model.
    """

    def __init__(
        self,
        renderer: RowRenderer,
        *,
        categories: Optional[Sequence[Category]] = None,
        labels: Optional[IndexLabels] = None,
        table_id: str = DEFAULT_TABLE_ID,
    ) -> None:
        self._renderer = renderer
        self._labels = labels or IndexLabels()
        self._categories: Tuple[Category, ...] = tuple(
            categories if categories is not None else default_categories(self._labels)
        )
        self._table_id = table_id or DEFAULT_TABLE_ID

    def _tab_id(self, position: int) -> str:
        return f"{self._table_id}-tab{position}"

    def _iter_items(self, index: AlphabeticalIndexLike):
        try:
            characters = list(index.ordered_characters())
        except Exception as e:
            raise IndexInputError(f"Cannot read index characters: {e}") from e

        for character in characters:
            if not isinstance(character, str) or len(character) != 1:
                raise IndexInputError(f"Index character must be a single character, got: {character!r}")
            try:
                items = list(index.items_for(character))
            except Exception as e:
                raise IndexInputError(f"Cannot read index items for {character!r}: {e}") from e

            for item in items:
                if not isinstance(item, IndexItem):
                    raise IndexInputError(
                        f"Index bucket {character!r} holds {type(item).__name__}, expected IndexItem"
                    )
                if item.entity is not None and not isinstance(item.entity, Entity):
                    raise IndexInputError(
                        f"Index item {item.label!r} holds {type(item.entity).__name__}, expected Entity"
                    )
                yield item

    def build(self, index: AlphabeticalIndexLike) -> TableModel:
        """Traverse the index and assemble the table model.

        Args:
            index: Alphabetical index to traverse. It is not modified.

        Returns:
            A fully built, immutable TableModel.

        Raises:
            IndexInputError: If the index cannot be traversed consistently.
        """

        default_rows: List[Row] = []
        by_category: Dict[str, List[Row]] = {c.key: [] for c in self._categories}
        seen: Set[Entity] = set()
        skipped = 0

        for item in self._iter_items(index):
            entity = item.entity
            if entity is None:
                logger.debug("Skipping index item without a declaration: %s", item.label)
                skipped += 1
                continue
            if not entity.is_core:
                logger.debug("Skipping non-core entity: %s", entity.qualified_name or entity.name)
                skipped += 1
                continue
            if entity in seen:
                raise IndexInputError(
                    f"Entity {entity.qualified_name or entity.name!r} appears more than once in the index"
                )
            seen.add(entity)

            matched = classify(entity, self._categories)
            row = self._renderer.render(
                entity,
                row_id=f"i{len(default_rows)}",
                tab_keys=[c.key for c in matched],
            )
            default_rows.append(row)
            for category in matched:
                by_category[category.key].append(row)

        default_tab = TableTab(
            key="all",
            label=self._labels.all_classes,
            tab_id=self._tab_id(0),
            rows=tuple(default_rows),
        )

        tabs: List[TableTab] = []
        for position, category in enumerate(self._categories, start=1):
            rows = by_category[category.key]
            if not rows:
                continue
            tabs.append(
                TableTab(
                    key=category.key,
                    label=category.label,
                    tab_id=self._tab_id(position),
                    rows=tuple(rows),
                )
            )

        distinct: Set[FrozenSet[str]] = set()
        for view in [default_tab] + tabs:
            if view.rows:
                distinct.add(frozenset(view.row_ids))
        needs_filtering = len(distinct) >= 2

        caption = default_tab.label
        if not needs_filtering and len(tabs) == 1:
            caption = tabs[0].label

        script = self._filter_script(default_tab, tabs) if needs_filtering else None

        logger.info(
            "Built class table %s: %d rows, %d visible tabs, %d skipped",
            self._table_id,
            len(default_rows),
            len(tabs),
            skipped,
        )

        return TableModel(
            table_id=self._table_id,
            caption=caption,
            headers=(self._labels.class_column, self._labels.description_column),
            default_tab=default_tab,
            tabs=tuple(tabs),
            needs_filtering=needs_filtering,
            script=script,
        )

    def _filter_script(self, default_tab: TableTab, tabs: Sequence[TableTab]) -> FilterScript:
        bits = {c.key: 1 << i for i, c in enumerate(self._categories)}
        all_bits = sum(bits.values())

        row_masks: Dict[str, int] = {}
        for row in default_tab.rows:
            row_masks[row.row_id] = sum(bits[k] for k in row.tab_keys if k in bits)

        tab_entries = [(all_bits, default_tab.tab_id, default_tab.label)]
        for tab in tabs:
            tab_entries.append((bits[tab.key], tab.tab_id, tab.label))

        return FilterScript(row_masks=MappingProxyType(row_masks), tabs=tuple(tab_entries))


def build_class_table(
    index: AlphabeticalIndexLike,
    renderer: RowRenderer,
    *,
    labels: Optional[IndexLabels] = None,
    categories: Optional[Sequence[Category]] = None,
    table_id: str = DEFAULT_TABLE_ID,
) -> TableModel:
    """Convenience wrapper around TabTableBuilder."""

    builder = TabTableBuilder(renderer, categories=categories, labels=labels, table_id=table_id)
    return builder.build(index)
