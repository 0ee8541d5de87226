from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

pytest.importorskip("tree_sitter")
pytest.importorskip("tree_sitter_java")

from core.parsing.java_parser import JavaParser  # noqa: E402
from core.scanning.scanner import JavaTypeScanner  # noqa: E402


SOURCE = """package com.acme;

import java.io.IOException;
import java.util.*;

/**
 * Public API entry point.
 */
public class Api {
    /** Nested config. */
    public static class Config {}

    private static class Hidden {}

    interface Callback {}
}

/**
 * Old stuff.
 * @deprecated use {@link Api} instead
 */
@Deprecated(since = "2", forRemoval = true)
public class Legacy extends Api {}

public interface Listener {
    class Event {}
}

public enum Color {
    RED, GREEN;

    public static class Palette {}
}

public @interface Marker {}

public record Point(int x, int y) {}

class PackagePrivate {}

public class Failure extends IOException {}

public class Box<T> extends java.util.ArrayList<T> {}
"""


@pytest.fixture(scope="module")
def parsed():
    return JavaParser().parse_java_file(SOURCE, file_path="Api.java")


def test_package_and_imports(parsed) -> None:
    assert parsed.package == "com.acme"
    assert parsed.imports == {"IOException": "java.io.IOException"}


def test_declarations_and_kinds(parsed) -> None:
    kinds = {t.qualified_name: t.kind for t in parsed.types}

    assert kinds == {
        "com.acme.Api": "class",
        "com.acme.Api.Config": "class",
        "com.acme.Api.Hidden": "class",
        "com.acme.Api.Callback": "interface",
        "com.acme.Legacy": "class",
        "com.acme.Listener": "interface",
        "com.acme.Listener.Event": "class",
        "com.acme.Color": "enum",
        "com.acme.Color.Palette": "class",
        "com.acme.Marker": "annotation_type",
        "com.acme.Point": "record",
        "com.acme.PackagePrivate": "class",
        "com.acme.Failure": "class",
        "com.acme.Box": "class",
    }


def test_core_visibility(parsed) -> None:
    core = {t.qualified_name: t.is_core for t in parsed.types}

    assert core["com.acme.Api"] is True
    assert core["com.acme.Api.Config"] is True
    assert core["com.acme.Api.Hidden"] is False
    assert core["com.acme.Api.Callback"] is False
    assert core["com.acme.Listener.Event"] is True
    assert core["com.acme.Color.Palette"] is True
    assert core["com.acme.PackagePrivate"] is False


def test_deprecation_superclass_and_javadoc(parsed) -> None:
    by_name = {t.qualified_name: t for t in parsed.types}

    legacy = by_name["com.acme.Legacy"]
    assert legacy.deprecated is True
    assert legacy.for_removal is True
    assert legacy.superclass == "Api"
    assert "Old stuff." in (legacy.javadoc or "")

    assert "Public API entry point." in (by_name["com.acme.Api"].javadoc or "")
    assert "Nested config." in (by_name["com.acme.Api.Config"].javadoc or "")
    assert by_name["com.acme.Api.Hidden"].javadoc is None
    assert by_name["com.acme.Failure"].superclass == "IOException"
    assert by_name["com.acme.Box"].superclass == "java.util.ArrayList"


def test_scanner_with_real_parser_builds_entities() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)
        (root / "Api.java").write_text(SOURCE, encoding="utf-8")

        entities = {e.qualified_name: e for e in JavaTypeScanner().scan(root)}

    failure = entities["com.acme.Failure"]
    assert failure.supertypes == ("java.io.IOException", "java.lang.Exception", "java.lang.Throwable")

    legacy = entities["com.acme.Legacy"]
    assert legacy.supertypes == ("com.acme.Api",)
    assert legacy.deprecation_notes == ("use {@link Api} instead",)
    assert entities["com.acme.Color.Palette"].name == "Color.Palette"
