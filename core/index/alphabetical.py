from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Protocol, Sequence, Tuple

from core.index.errors import IndexInputError
from core.index.models import Entity, IndexItem

logger = logging.getLogger(__name__)


class AlphabeticalIndexLike(Protocol):
    """Structural type for anything the table builder can traverse.

    Characters come back in code point order, and the items of each character
    come back sorted by display name. The builder relies on both orderings and
    never re-sorts.
    """

    def ordered_characters(self) -> Sequence[str]:
        ...

    def items_for(self, character: str) -> Sequence[IndexItem]:
        ...


def _item_sort_key(item: IndexItem) -> str:
    return (item.label or "").casefold()


class AlphabeticalIndex:
    """Read-only mapping from leading character to the items starting with it."""

    def __init__(self, buckets: Mapping[str, Iterable[IndexItem]]) -> None:
        """Create an index from pre-grouped buckets.

        Buckets are re-ordered by display name (case-insensitive, stable for
        ties) and characters by code point.

        Args:
            buckets: Mapping of leading character -> items.

        Raises:
            IndexInputError: If a key is not a single character or a bucket
                holds something other than IndexItem.
        """

        normalized: Dict[str, Tuple[IndexItem, ...]] = {}
        for character, items in (buckets or {}).items():
            if not isinstance(character, str) or len(character) != 1:
                raise IndexInputError(f"Index key must be a single character, got: {character!r}")
            bucket = list(items or [])
            for item in bucket:
                if not isinstance(item, IndexItem):
                    raise IndexInputError(
                        f"Index bucket {character!r} holds {type(item).__name__}, expected IndexItem"
                    )
            if bucket:
                normalized[character] = tuple(sorted(bucket, key=_item_sort_key))

        self._characters: Tuple[str, ...] = tuple(sorted(normalized.keys()))
        self._buckets = normalized

    @classmethod
    def from_entities(
        cls,
        entities: Iterable[Optional[Entity]],
        *,
        include: Optional[Callable[[Entity], bool]] = None,
    ) -> "AlphabeticalIndex":
        """Bucket entities by leading character.

        Args:
            entities: Entities to index. None entries are dropped.
            include: Optional filter applied before bucketing. Defaults to
                core visibility (`Entity.is_core`).

        Returns:
            A new AlphabeticalIndex.
        """

        keep = include or (lambda e: e.is_core)
        buckets: Dict[str, List[IndexItem]] = {}
        dropped = 0
        for entity in entities:
            if entity is None:
                continue
            if not keep(entity):
                dropped += 1
                continue
            character = entity.leading_character
            if not character:
                logger.debug("Skipping entity with blank name: %r", entity.qualified_name)
                continue
            buckets.setdefault(character, []).append(IndexItem.of(entity))

        if dropped:
            logger.debug("Excluded %d non-core entities from the alphabetical index", dropped)
        return cls(buckets)

    def ordered_characters(self) -> Tuple[str, ...]:
        return self._characters

    def items_for(self, character: str) -> Tuple[IndexItem, ...]:
        return self._buckets.get(character, ())

    def __len__(self) -> int:
        return sum(len(b) for b in self._buckets.values())

    def __repr__(self) -> str:
        return f"AlphabeticalIndex(characters={''.join(self._characters)!r}, items={len(self)})"
