from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field


DEFAULT_CONFIG_PATH = "class-index.yaml"


class IndexLabels(BaseModel):
    """Pre-resolved display strings used by the class index.

    The defaults mirror the English javadoc resource bundle. Deployments that
    need another language override them under the `labels:` key in YAML.
    """

    all_classes: str = "All Classes"
    class_column: str = "Class"
    description_column: str = "Description"

    interface_summary: str = "Interface Summary"
    class_summary: str = "Class Summary"
    enum_summary: str = "Enum Summary"
    exception_summary: str = "Exception Summary"
    error_summary: str = "Error Summary"
    annotation_type_summary: str = "Annotation Types Summary"

    deprecated_phrase: str = "Deprecated."
    deprecated_for_removal_phrase: str = (
        "Deprecated, for removal: This API element is subject to removal in a future version."
    )


class AppConfig(BaseModel):
    debug_level: str = "INFO"
    java_codebase_dir: str = "./"

    # Optional project name shown as the index page title prefix.
    project_name: Optional[str] = None

    # FastAPI / Uvicorn
    api_port: int = 8000

    # CORS
    # If True, enables permissive CORS headers for browser clients (dev-friendly).
    # When False, no CORS middleware is installed.
    cors_enabled: bool = False

    # Base directory where generated index pages are written by the CLI.
    docs_output_dir: str = "OUTPUT"

    # Scanning: exclude test files
    # If true (default), scanning skips Java sources located under a directory
    # literally named "test" (case-insensitive), such as Maven/Gradle layouts
    # like src/test/java/**.
    index_exclude_tests: bool = True

    # HTML id of the generated table; tab ids are derived from it.
    index_table_id: str = "all-classes-table"

    # Suffix of per-class pages targeted by index links.
    index_link_suffix: str = ".html"

    labels: IndexLabels = Field(default_factory=IndexLabels)


def load_config(path: Optional[str] = None) -> AppConfig:
    """Load application configuration from YAML.

    Precedence:
    1) explicit `path`
    2) env var `CLASS_INDEX_CONFIG`
    3) `class-index.yaml` in the current working directory

    Missing config file falls back to defaults.
    """

    config_path = path or os.getenv("CLASS_INDEX_CONFIG") or DEFAULT_CONFIG_PATH

    if not os.path.exists(config_path):
        return AppConfig()

    with open(config_path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    if raw is None:
        return AppConfig()

    if not isinstance(raw, dict):
        raise ValueError(f"Invalid YAML config (expected mapping), got: {type(raw).__name__}")

    data: Dict[str, Any] = dict(raw)
    return AppConfig(**data)


def configure_logging(debug_level: str) -> None:
    level_name = (debug_level or "INFO").upper().strip()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        raise ValueError(f"Invalid debug_level: {debug_level!r} (expected DEBUG/INFO/WARNING/ERROR)")

    logging.basicConfig(level=level)
