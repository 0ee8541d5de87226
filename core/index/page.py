from __future__ import annotations

from typing import Any, Dict, List, Optional

from core.index.models import Row, TableModel, TableTab


def _cell(text: str) -> str:
    return (text or "").replace("|", "\\|").replace("\n", " ").strip()


def _markdown_table(headers, rows) -> List[str]:
    lines = [f"| {_cell(headers[0])} | {_cell(headers[1])} |", "| --- | --- |"]
    for row in rows:
        lines.append(f"| {_cell(row.reference)} | {_cell(row.description)} |")
    return lines


def render_markdown(model: TableModel, *, title: Optional[str] = None) -> str:
    """Render a class table as a Markdown page.

    An empty model produces the heading only. When the model needs filtering,
    each visible category tab follows the full table as its own section.
    """

    lines: List[str] = [f"# {title or model.default_tab.label}", ""]
    if model.is_empty:
        return "\n".join(lines).strip() + "\n"

    lines.append(f"## {model.caption}")
    lines.append("")
    lines.extend(_markdown_table(model.headers, model.rows))

    if model.needs_filtering:
        for tab in model.tabs:
            lines.append("")
            lines.append(f"## {tab.label}")
            lines.append("")
            lines.extend(_markdown_table(model.headers, tab.rows))

    return "\n".join(lines).strip() + "\n"


def _row_dict(row: Row) -> Dict[str, Any]:
    entity = row.entity
    return {
        "id": row.row_id,
        "name": entity.name,
        "qualified_name": entity.qualified_name,
        "kind": entity.kind.value,
        "deprecated": entity.deprecated,
        "reference": row.reference,
        "description": row.description,
        "tabs": list(row.tab_keys),
    }


def _tab_dict(tab: TableTab) -> Dict[str, Any]:
    return {"key": tab.key, "id": tab.tab_id, "label": tab.label, "rows": list(tab.row_ids)}


def table_to_dict(model: TableModel) -> Dict[str, Any]:
    """Serialize a table model into a JSON-ready dict.

    Rows appear once, under `rows`. Tabs reference them by id.
    """

    script: Optional[Dict[str, Any]] = None
    if model.script is not None:
        script = model.script.to_dict()
        script["javascript"] = model.script.to_javascript()

    return {
        "table_id": model.table_id,
        "caption": model.caption,
        "headers": list(model.headers),
        "is_empty": model.is_empty,
        "needs_filtering": model.needs_filtering,
        "default_tab": _tab_dict(model.default_tab),
        "tabs": [_tab_dict(t) for t in model.tabs],
        "rows": [_row_dict(r) for r in model.rows],
        "script": script,
    }
