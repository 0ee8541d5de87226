from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from config import AppConfig, configure_logging, load_config
from core.index.errors import IndexInputError
from core.index.page import render_markdown, table_to_dict
from core.scanning.scanner import JavaTypeScanner
from core.services.class_index_service import ClassIndexService

logger = logging.getLogger(__name__)


_OUTPUT_NAMES = {
    "markdown": "allclasses-index.md",
    "json": "allclasses-index.json",
}


def generate_index(
    *,
    root_dir: Path,
    config: AppConfig,
    output_format: str,
) -> str:
    """Scan `root_dir` and render its class index in the requested format."""

    link_style = "markdown" if output_format == "markdown" else "html"
    service = ClassIndexService(JavaTypeScanner(), config, link_style=link_style)
    model = service.build_for_directory(root_dir)

    if output_format == "json":
        return json.dumps(table_to_dict(model), ensure_ascii=False, indent=2) + "\n"

    title = config.labels.all_classes
    if config.project_name:
        title = f"{config.project_name}: {title}"
    return render_markdown(model, title=title)


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""

    parser = argparse.ArgumentParser(description="Generate the all-classes index of a Java codebase")

    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML config (defaults to CLASS_INDEX_CONFIG or class-index.yaml)",
    )
    parser.add_argument(
        "--root-dir",
        default=None,
        help="Root directory to scan (overrides config.java_codebase_dir).",
    )
    parser.add_argument(
        "--format",
        choices=sorted(_OUTPUT_NAMES.keys()),
        default="markdown",
        help="Output format (default: markdown).",
    )
    parser.add_argument(
        "--output",
        default=None,
        help=(
            "Where to write the index. Defaults to <docs_output_dir>/allclasses-index.<ext>. "
            "Use '-' to print to stdout."
        ),
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entrypoint for class index generation."""

    load_dotenv(override=False)

    args = _parse_args(argv)
    config = load_config(args.config)
    configure_logging(config.debug_level)

    root_dir = Path(args.root_dir or config.java_codebase_dir).expanduser().resolve()
    if not root_dir.is_dir():
        logger.error("Not a directory: %s", root_dir)
        return 1

    try:
        content = generate_index(root_dir=root_dir, config=config, output_format=args.format)
    except IndexInputError as e:
        logger.error("Class index generation failed: %s", e)
        return 1
    except Exception as e:
        logger.error("Class index generation failed: %s: %s", type(e).__name__, e)
        return 2

    if args.output == "-":
        sys.stdout.write(content)
        return 0

    if args.output:
        output_path = Path(args.output).expanduser().resolve()
    else:
        base_output_dir = Path(str(config.docs_output_dir or "OUTPUT")).expanduser()
        if not base_output_dir.is_absolute():
            base_output_dir = (Path.cwd() / base_output_dir).resolve()
        output_path = base_output_dir / _OUTPUT_NAMES[args.format]

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding="utf-8")
    logger.info("Wrote class index to %s", output_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
