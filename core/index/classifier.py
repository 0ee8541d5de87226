from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from config import IndexLabels
from core.index.models import Entity, EntityKind


JAVA_LANG_EXCEPTION = "java.lang.Exception"
JAVA_LANG_ERROR = "java.lang.Error"


@dataclass(frozen=True)
class Category:
    """A selectable tab: a stable key, its display label, and a pure predicate."""

    key: str
    label: str
    predicate: Callable[[Entity], bool]

    def matches(self, entity: Entity) -> bool:
        return bool(self.predicate(entity))


def _lineage(entity: Entity) -> Tuple[str, ...]:
    return (entity.qualified_name,) + tuple(entity.supertypes)


def is_interface(entity: Entity) -> bool:
    return entity.kind == EntityKind.INTERFACE


def is_enum(entity: Entity) -> bool:
    return entity.kind == EntityKind.ENUM


def is_annotation_type(entity: Entity) -> bool:
    return entity.kind == EntityKind.ANNOTATION_TYPE


def is_error(entity: Entity) -> bool:
    """True for java.lang.Error and its subclasses."""

    return entity.kind == EntityKind.CLASS and JAVA_LANG_ERROR in _lineage(entity)


def is_exception(entity: Entity) -> bool:
    """True for java.lang.Exception and its subclasses, errors excluded."""

    if entity.kind != EntityKind.CLASS or is_error(entity):
        return False
    return JAVA_LANG_EXCEPTION in _lineage(entity)


def is_ordinary_class(entity: Entity) -> bool:
    return entity.kind == EntityKind.CLASS and not is_exception(entity) and not is_error(entity)


def default_categories(labels: Optional[IndexLabels] = None) -> Tuple[Category, ...]:
    """Return the fixed tab list in display order."""

    lbl = labels or IndexLabels()
    return (
        Category("interface", lbl.interface_summary, is_interface),
        Category("class", lbl.class_summary, is_ordinary_class),
        Category("enum", lbl.enum_summary, is_enum),
        Category("exception", lbl.exception_summary, is_exception),
        Category("error", lbl.error_summary, is_error),
        Category("annotation_type", lbl.annotation_type_summary, is_annotation_type),
    )


def classify(entity: Optional[Entity], categories: Sequence[Category]) -> Tuple[Category, ...]:
    """Return every category the entity belongs to, in category order.

    A missing entity belongs to nothing. Categories are not assumed to be
    mutually exclusive.
    """

    if entity is None:
        return ()
    return tuple(c for c in categories if c.matches(entity))
