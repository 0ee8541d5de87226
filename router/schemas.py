from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class ClassIndexRequest(BaseModel):
    """Class index request payload."""

    path: str = Field(..., min_length=1, description="Root directory of the Java sources (scanned recursively).")
    link_style: str = Field(
        default="html",
        pattern="^(html|markdown)$",
        description='Format of the reference cells: "html" anchors or "markdown" links.',
    )


class ClassIndexRow(BaseModel):
    """One row of the class table."""

    id: str
    name: str
    qualified_name: str
    kind: str
    deprecated: bool = False
    reference: str
    description: str
    tabs: List[str] = Field(default_factory=list)


class ClassIndexTab(BaseModel):
    """A view over the rows, referencing them by id."""

    key: str
    id: str
    label: str
    rows: List[str] = Field(default_factory=list)


class ClassIndexScript(BaseModel):
    """Client-side tab filtering descriptor.

    `data` maps row id -> category bitmask; `tabs` maps bitmask -> [tab id, label].
    """

    data: Dict[str, int]
    tabs: Dict[str, List[str]]
    javascript: str


class ClassIndexResponse(BaseModel):
    """Class index response payload.

    When `is_empty` is true the client should omit the table entirely. `script`
    is only present when more than one distinct view exists.
    """

    table_id: str
    caption: str
    headers: List[str]
    is_empty: bool
    needs_filtering: bool
    default_tab: ClassIndexTab
    tabs: List[ClassIndexTab] = Field(default_factory=list)
    rows: List[ClassIndexRow] = Field(default_factory=list)
    script: Optional[ClassIndexScript] = None
