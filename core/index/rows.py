from __future__ import annotations

from typing import Optional, Protocol, Sequence

from config import IndexLabels
from core.index.links import ReferenceResolver
from core.index.models import Entity, Row


class CommentRenderer(Protocol):
    """Renders the comment text shown in the description column."""

    def summary(self, entity: Entity) -> str:
        ...

    def deprecation_comment(self, entity: Entity, note: str) -> str:
        ...


class RowRenderer:
    """Build the reference/description pair for one entity.

    Deprecated entities show the deprecation phrase followed by the first
    deprecation note only. Everything else shows its summary sentence.
    """

    def __init__(
        self,
        resolver: ReferenceResolver,
        comments: CommentRenderer,
        labels: Optional[IndexLabels] = None,
    ) -> None:
        self._resolver = resolver
        self._comments = comments
        self._labels = labels or IndexLabels()

    def description(self, entity: Entity) -> str:
        if not entity.deprecated:
            return self._comments.summary(entity) or ""

        phrase = (
            self._labels.deprecated_for_removal_phrase
            if entity.for_removal
            else self._labels.deprecated_phrase
        )
        notes = entity.deprecation_notes
        if not notes:
            return phrase

        note = self._comments.deprecation_comment(entity, notes[0])
        return f"{phrase} {note}".strip() if note else phrase

    def render(self, entity: Entity, *, row_id: str, tab_keys: Sequence[str] = ()) -> Row:
        return Row(
            row_id=row_id,
            entity=entity,
            reference=self._resolver.link(entity),
            description=self.description(entity),
            tab_keys=tuple(tab_keys),
        )
