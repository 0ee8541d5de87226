from __future__ import annotations

from typing import Any, Optional

_JAVA_LANGUAGE: Optional[Any] = None


def load_java_language() -> Any:
    """Return the tree-sitter Java language, loading it on first use.

    The grammar ships as the `tree-sitter-java` wheel, so nothing is cloned or
    compiled at runtime.
    """

    global _JAVA_LANGUAGE
    if _JAVA_LANGUAGE is not None:
        return _JAVA_LANGUAGE

    # Delay tree-sitter imports so the rest of the app can run without it.
    try:
        import tree_sitter_java  # type: ignore
        from tree_sitter import Language  # type: ignore
    except ImportError as e:
        raise RuntimeError(
            "tree-sitter Java grammar is not installed. "
            "Install it (pip install tree-sitter tree-sitter-java)."
        ) from e

    _JAVA_LANGUAGE = Language(tree_sitter_java.language())
    return _JAVA_LANGUAGE
