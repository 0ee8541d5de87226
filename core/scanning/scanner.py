from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol, Tuple

from core.index.comments import block_tags
from core.index.models import Entity, EntityKind
from core.parsing.models import ParsedJavaFile, ParsedType
from core.ports.scan_port import CodebaseScanner, ScanProgressCallback

logger = logging.getLogger(__name__)


# Superclass links of well-known JDK throwables (qualified name -> parent).
KNOWN_THROWABLES: Dict[str, Optional[str]] = {
    "java.lang.Throwable": None,
    "java.lang.Exception": "java.lang.Throwable",
    "java.lang.Error": "java.lang.Throwable",
    "java.lang.RuntimeException": "java.lang.Exception",
    "java.lang.IllegalArgumentException": "java.lang.RuntimeException",
    "java.lang.IllegalStateException": "java.lang.RuntimeException",
    "java.lang.UnsupportedOperationException": "java.lang.RuntimeException",
    "java.lang.NullPointerException": "java.lang.RuntimeException",
    "java.lang.IndexOutOfBoundsException": "java.lang.RuntimeException",
    "java.lang.ClassCastException": "java.lang.RuntimeException",
    "java.lang.ArithmeticException": "java.lang.RuntimeException",
    "java.lang.NumberFormatException": "java.lang.IllegalArgumentException",
    "java.lang.InterruptedException": "java.lang.Exception",
    "java.lang.CloneNotSupportedException": "java.lang.Exception",
    "java.lang.ReflectiveOperationException": "java.lang.Exception",
    "java.lang.ClassNotFoundException": "java.lang.ReflectiveOperationException",
    "java.lang.AssertionError": "java.lang.Error",
    "java.lang.LinkageError": "java.lang.Error",
    "java.lang.VirtualMachineError": "java.lang.Error",
    "java.lang.OutOfMemoryError": "java.lang.VirtualMachineError",
    "java.lang.StackOverflowError": "java.lang.VirtualMachineError",
    "java.io.IOException": "java.lang.Exception",
    "java.io.UncheckedIOException": "java.lang.RuntimeException",
    "java.io.FileNotFoundException": "java.io.IOException",
    "java.lang.SecurityException": "java.lang.RuntimeException",
    "java.lang.ArrayIndexOutOfBoundsException": "java.lang.IndexOutOfBoundsException",
    "java.lang.NoSuchFieldException": "java.lang.ReflectiveOperationException",
    "java.lang.NoSuchMethodException": "java.lang.ReflectiveOperationException",
    "java.lang.InstantiationException": "java.lang.ReflectiveOperationException",
    "java.lang.IllegalAccessException": "java.lang.ReflectiveOperationException",
    "java.lang.ExceptionInInitializerError": "java.lang.LinkageError",
    "java.lang.NoClassDefFoundError": "java.lang.LinkageError",
    "java.lang.InternalError": "java.lang.VirtualMachineError",
    "java.io.EOFException": "java.io.IOException",
    "java.io.UnsupportedEncodingException": "java.io.IOException",
    "java.net.MalformedURLException": "java.io.IOException",
    "java.net.URISyntaxException": "java.lang.Exception",
    "java.nio.file.FileSystemException": "java.io.IOException",
    "java.nio.file.NoSuchFileException": "java.nio.file.FileSystemException",
    "java.sql.SQLException": "java.lang.Exception",
    "java.text.ParseException": "java.lang.Exception",
    "java.util.NoSuchElementException": "java.lang.RuntimeException",
    "java.util.ConcurrentModificationException": "java.lang.RuntimeException",
    "java.util.concurrent.TimeoutException": "java.lang.Exception",
    "java.util.concurrent.ExecutionException": "java.lang.Exception",
    "java.util.concurrent.CancellationException": "java.lang.IllegalStateException",
    "java.util.concurrent.CompletionException": "java.lang.RuntimeException",
}


class JavaParserLike(Protocol):
    """Structural type for parsers that can extract Java type declarations.

    This allows the scanner to be tested with a lightweight stub without
    requiring tree-sitter to be present.
    """

    def parse_java_file(self, java_code: str, *, file_path: Optional[str] = None) -> ParsedJavaFile:
        ...


def _is_test_path(path: Path, *, root: Path) -> bool:
    """Return True when a file is located under a directory named "test"."""
    try:
        rel = path.resolve().relative_to(root.resolve())
    except Exception:
        rel = path

    parts_lower = [p.lower() for p in rel.parts]
    return "test" in parts_lower


class SupertypeResolver:
    """Resolve `extends` clauses to qualified names and walk superclass chains."""

    def __init__(self, declarations: Dict[str, Tuple[ParsedType, ParsedJavaFile]]) -> None:
        self._declarations = declarations
        self._by_simple_name: Dict[str, List[str]] = {}
        for qualified, (parsed, _) in declarations.items():
            self._by_simple_name.setdefault(parsed.name, []).append(qualified)

    def _known(self, qualified: str) -> bool:
        return qualified in self._declarations or qualified in KNOWN_THROWABLES

    def resolve(self, raw: str, parsed: ParsedType, unit: ParsedJavaFile) -> str:
        if "." in raw:
            if self._known(raw):
                return raw
            head = raw.split(".", 1)[0]
            imported = unit.imports.get(head)
            if unit.package and self._known(f"{unit.package}.{raw}"):
                return f"{unit.package}.{raw}"
            if imported:
                return imported + raw[len(head) :]
            return raw

        # An explicit single-type import names the type exactly, known or not.
        imported = unit.imports.get(raw)
        if imported:
            return imported

        candidates: List[str] = []
        if parsed.enclosing:
            candidates.append(f"{parsed.enclosing}.{raw}")
        candidates.append(f"{unit.package}.{raw}" if unit.package else raw)
        candidates.append(f"java.lang.{raw}")
        for candidate in candidates:
            if candidate and self._known(candidate):
                return candidate

        same_name = self._by_simple_name.get(raw, [])
        if len(same_name) == 1:
            return same_name[0]
        return raw

    def parent_of(self, qualified: str) -> Optional[str]:
        entry = self._declarations.get(qualified)
        if entry is not None:
            parsed, unit = entry
            if not parsed.superclass:
                return None
            return self.resolve(parsed.superclass, parsed, unit)
        return KNOWN_THROWABLES.get(qualified)

    def chain(self, qualified: str) -> Tuple[str, ...]:
        chain: List[str] = []
        visited = {qualified}
        current = self.parent_of(qualified)
        while current and current not in visited:
            chain.append(current)
            visited.add(current)
            current = self.parent_of(current)
        return tuple(chain)


def _to_entity(parsed: ParsedType, supertypes: Tuple[str, ...]) -> Entity:
    notes: Tuple[str, ...] = ()
    if parsed.javadoc:
        notes = tuple(block_tags(parsed.javadoc, "deprecated"))

    # Nested types are listed as Outer.Inner.
    name = parsed.name
    if parsed.enclosing:
        prefix = parsed.package + "." if parsed.package else ""
        name = parsed.qualified_name[len(prefix) :]

    return Entity(
        name=name,
        kind=EntityKind(parsed.kind),
        qualified_name=parsed.qualified_name,
        package=parsed.package,
        supertypes=supertypes,
        is_core=parsed.is_core,
        deprecated=parsed.deprecated or bool(notes),
        for_removal=parsed.for_removal,
        deprecation_notes=notes,
        doc_comment=parsed.javadoc,
        source_path=parsed.file_path,
    )


class JavaTypeScanner(CodebaseScanner):
    """File system scanner producing index entities from Java sources."""

    def __init__(self, parser: Optional[JavaParserLike] = None) -> None:
        self._parser = parser

    def _get_parser(self) -> JavaParserLike:
        if self._parser is None:
            from core.parsing.java_parser import JavaParser

            self._parser = JavaParser()
        return self._parser

    def iter_files(self, root_dir: Path, exclude_tests: bool = True) -> Iterable[Path]:
        """Yield Java source files under a directory."""
        if not root_dir.exists():
            return []

        def _should_skip_dir(p: Path) -> bool:
            name = p.name
            if name in {".git", ".venv", "venv", "build", "target", "vendor", "__pycache__", "node_modules"}:
                return True
            if exclude_tests and name.lower() == "test":
                return True
            return False

        for dirpath, dirnames, filenames in os.walk(root_dir):
            dirnames[:] = sorted(d for d in dirnames if not _should_skip_dir(Path(dirpath) / d))

            for filename in sorted(filenames):
                if not filename.endswith(".java"):
                    continue
                # package-info.java and module-info.java declare no types.
                if filename in {"package-info.java", "module-info.java"}:
                    continue

                path = Path(dirpath) / filename
                if exclude_tests and _is_test_path(path, root=root_dir):
                    continue
                yield path

    def scan(
        self,
        root_dir: Path,
        exclude_tests: bool = True,
        progress_callback: Optional[ScanProgressCallback] = None,
    ) -> List[Entity]:
        """Scan a directory and return one entity per type declaration.

        Unreadable or unparsable files are logged and skipped.
        """

        files = list(self.iter_files(root_dir, exclude_tests=exclude_tests))
        total_files = len(files)
        logger.info("Scanning %d Java files under %s", total_files, root_dir)

        if progress_callback is not None:
            progress_callback(0, total_files, None)

        parser = self._get_parser() if files else None
        declarations: Dict[str, Tuple[ParsedType, ParsedJavaFile]] = {}
        processed_files = 0

        for path in files:
            try:
                java_code = path.read_text(encoding="utf-8")
                unit = parser.parse_java_file(java_code, file_path=str(path))
            except Exception as e:
                logger.warning("Skipping unparsable file %s: %s", path, e)
            else:
                for parsed in unit.types:
                    if parsed.qualified_name in declarations:
                        logger.warning(
                            "Duplicate declaration of %s in %s; keeping the first one",
                            parsed.qualified_name,
                            path,
                        )
                        continue
                    declarations[parsed.qualified_name] = (parsed, unit)

            processed_files += 1
            if progress_callback is not None:
                progress_callback(processed_files, total_files, str(path))

        resolver = SupertypeResolver(declarations)
        entities = [
            _to_entity(parsed, resolver.chain(qualified))
            for qualified, (parsed, _unit) in declarations.items()
        ]
        logger.info("Found %d type declarations", len(entities))
        return entities
