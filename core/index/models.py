from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Optional, Tuple


class EntityKind(str, Enum):
    """Kinds of Java type declarations the index knows about."""

    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    ANNOTATION_TYPE = "annotation_type"
    RECORD = "record"


@dataclass(frozen=True)
class Entity:
    """A documented type declaration as seen by the class index.

    `supertypes` holds the qualified names of the superclass chain, nearest
    first. It is what the exception/error predicates look at.
    """

    name: str
    kind: EntityKind
    qualified_name: str = ""
    package: str = ""
    supertypes: Tuple[str, ...] = ()
    is_core: bool = True
    deprecated: bool = False
    for_removal: bool = False
    deprecation_notes: Tuple[str, ...] = ()
    doc_comment: Optional[str] = None
    source_path: Optional[str] = None

    @property
    def leading_character(self) -> str:
        """Upper-cased first character of the display name ("" for blank names)."""

        stripped = (self.name or "").strip()
        if not stripped:
            return ""
        # Some characters upper-case to several (e.g. "ß" -> "SS"); keep those as-is.
        upper = stripped[0].upper()
        return upper if len(upper) == 1 else stripped[0]

    @property
    def sort_key(self) -> str:
        return (self.name or "").casefold()


@dataclass(frozen=True)
class IndexItem:
    """One slot of the alphabetical index.

    `entity` is None when the declaration behind the slot could not be
    resolved. Such slots are skipped by the table builder.
    """

    label: str
    entity: Optional[Entity] = None

    @property
    def is_missing(self) -> bool:
        return self.entity is None

    @classmethod
    def of(cls, entity: Entity) -> "IndexItem":
        return cls(label=entity.name, entity=entity)

    @classmethod
    def missing(cls, label: str) -> "IndexItem":
        return cls(label=label, entity=None)


@dataclass(frozen=True)
class Row:
    """A rendered two-cell table row bound to one entity."""

    row_id: str
    entity: Entity
    reference: str
    description: str
    tab_keys: Tuple[str, ...] = ()


@dataclass(frozen=True)
class TableTab:
    """A named view over the table rows."""

    key: str
    label: str
    tab_id: str
    rows: Tuple[Row, ...] = ()

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def row_ids(self) -> Tuple[str, ...]:
        return tuple(r.row_id for r in self.rows)


@dataclass(frozen=True)
class FilterScript:
    """Client-side tab filtering descriptor.

    Each row id maps to a bitmask of the category tabs it belongs to. Each
    visible tab maps its mask to `(tab_id, label)`. The default tab uses the
    union of all category bits.
    """

    row_masks: Mapping[str, int]
    tabs: Tuple[Tuple[int, str, str], ...]

    def to_dict(self) -> Dict[str, object]:
        return {
            "data": dict(self.row_masks),
            "tabs": {str(mask): [tab_id, label] for mask, tab_id, label in self.tabs},
        }

    def to_javascript(self) -> str:
        payload = self.to_dict()
        return (
            f"var data = {json.dumps(payload['data'], ensure_ascii=False)};\n"
            f"var tabs = {json.dumps(payload['tabs'], ensure_ascii=False)};\n"
        )


@dataclass(frozen=True)
class TableModel:
    """The result of a table build, immutable once returned."""

    table_id: str
    caption: str
    headers: Tuple[str, str]
    default_tab: TableTab
    tabs: Tuple[TableTab, ...] = ()
    needs_filtering: bool = False
    script: Optional[FilterScript] = field(default=None)

    @property
    def rows(self) -> Tuple[Row, ...]:
        return self.default_tab.rows

    @property
    def is_empty(self) -> bool:
        return not self.default_tab.rows

    def tab(self, key: str) -> Optional[TableTab]:
        for t in self.tabs:
            if t.key == key:
                return t
        return None
