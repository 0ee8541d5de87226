from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
def health(request: Request) -> Dict[str, Any]:
    """Lightweight health/status endpoint."""

    config = getattr(request.app.state, "config", None)

    return {
        "status": "ok",
        "config_path": getattr(request.app.state, "config_path", "class-index.yaml"),
        "debug_level": getattr(config, "debug_level", "INFO"),
        "java_codebase_dir": getattr(config, "java_codebase_dir", "./"),
        "project_name": getattr(config, "project_name", None),
        "index_table_id": getattr(config, "index_table_id", "all-classes-table"),
        "startup_error": getattr(request.app.state, "startup_error", None),
    }
