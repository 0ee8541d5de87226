from __future__ import annotations

import html
from typing import Protocol

from core.index.models import Entity, EntityKind


class ReferenceResolver(Protocol):
    """Turns an entity into renderable link content."""

    def link(self, entity: Entity) -> str:
        ...


_KIND_WORDS = {
    EntityKind.CLASS: "class",
    EntityKind.INTERFACE: "interface",
    EntityKind.ENUM: "enum",
    EntityKind.ANNOTATION_TYPE: "annotation type",
    EntityKind.RECORD: "record",
}


def entity_page_path(entity: Entity, *, suffix: str = ".html") -> str:
    """Return the package-relative page path of an entity.

    Nested types keep their enclosing names: `com/example/Outer.Inner.html`.
    """

    package = entity.package or ""
    qualified = entity.qualified_name or entity.name
    local = qualified[len(package) + 1 :] if package and qualified.startswith(package + ".") else qualified
    prefix = package.replace(".", "/") + "/" if package else ""
    return f"{prefix}{local}{suffix}"


def entity_title(entity: Entity) -> str:
    word = _KIND_WORDS.get(entity.kind, "type")
    return f"{word} in {entity.package}" if entity.package else word


class RelativePathResolver:
    """Resolve entities to HTML anchors relative to the index page."""

    def __init__(self, *, base: str = "", suffix: str = ".html") -> None:
        self._base = base.rstrip("/") + "/" if base else ""
        self._suffix = suffix

    def href(self, entity: Entity) -> str:
        return self._base + entity_page_path(entity, suffix=self._suffix)

    def link(self, entity: Entity) -> str:
        return (
            f'<a href="{html.escape(self.href(entity))}" '
            f'title="{html.escape(entity_title(entity))}">{html.escape(entity.name)}</a>'
        )


class MarkdownLinkResolver(RelativePathResolver):
    """Resolve entities to Markdown links."""

    def link(self, entity: Entity) -> str:
        name = entity.name.replace("[", "\\[").replace("]", "\\]")
        return f"[{name}]({self.href(entity)})"
