from __future__ import annotations

import logging
from pathlib import Path

from fastapi import APIRouter, HTTPException, Request

from config import AppConfig
from core.index.errors import IndexInputError
from core.index.page import table_to_dict
from core.scanning.scanner import JavaTypeScanner
from core.services.class_index_service import ClassIndexService
from router.schemas import ClassIndexRequest, ClassIndexResponse


router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/class-index", response_model=ClassIndexResponse)
def build_class_index(request: Request, req: ClassIndexRequest) -> ClassIndexResponse:
    """Scan a directory and return its all-classes table."""

    if getattr(request.app.state, "startup_error", None):
        raise HTTPException(
            status_code=503, detail=f"Startup failed: {request.app.state.startup_error}"
        )

    directory = Path(req.path).expanduser()
    if not directory.is_absolute():
        directory = (Path.cwd() / directory).resolve()

    if not directory.exists() or not directory.is_dir():
        raise HTTPException(status_code=400, detail=f"Not a directory: {directory}")

    config = getattr(request.app.state, "config", None) or AppConfig()
    scanner = getattr(request.app.state, "class_index_scanner", None) or JavaTypeScanner()
    service = ClassIndexService(scanner, config, link_style=req.link_style)

    try:
        model = service.build_for_directory(directory)
    except IndexInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        logger.exception("Class index build failed for %s", directory)
        raise HTTPException(status_code=500, detail=f"Failed to build class index: {e}")

    return ClassIndexResponse(**table_to_dict(model))
