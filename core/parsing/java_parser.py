from __future__ import annotations

import re
from typing import Any, List, Optional

from core.parsing.models import ParsedJavaFile, ParsedType
from core.parsing.tree_sitter_setup import load_java_language


_DECLARATION_KINDS = {
    "class_declaration": "class",
    "interface_declaration": "interface",
    "enum_declaration": "enum",
    "annotation_type_declaration": "annotation_type",
    "record_declaration": "record",
}

# Bodies whose direct members may be nested type declarations.
_BODY_TYPES = {
    "class_body",
    "interface_body",
    "enum_body",
    "enum_body_declarations",
    "annotation_type_body",
}

_MODIFIER_KEYWORDS = {"public", "protected", "private", "static", "abstract", "final", "sealed", "non-sealed", "strictfp"}

# Members of interfaces and annotation types are implicitly public.
_IMPLICITLY_PUBLIC_CONTAINERS = {"interface", "annotation_type"}


class JavaParser:
    """Parser for Java type declarations using tree-sitter."""

    def __init__(self):
        # Delay tree-sitter imports so other modules can be imported without it.
        from tree_sitter import Parser  # type: ignore

        self.java_language = load_java_language()
        self.parser = Parser(self.java_language)

    def parse_java_file(self, java_code: str, *, file_path: Optional[str] = None) -> ParsedJavaFile:
        code = bytes(java_code, "utf8")
        tree = self.parser.parse(code)
        root = tree.root_node

        result = ParsedJavaFile(file_path=file_path)
        for child in root.children:
            if child.type == "package_declaration":
                result.package = self._extract_name(child, code)
            elif child.type == "import_declaration":
                self._collect_import(child, code, result)

        self._walk(root, code, result, enclosing=None)
        return result

    def _text(self, node, code: bytes) -> str:
        return code[node.start_byte : node.end_byte].decode("utf8")

    def _extract_name(self, node, code: bytes) -> str:
        for child in node.named_children:
            if child.type in {"identifier", "scoped_identifier"}:
                return self._text(child, code)
        return ""

    def _collect_import(self, node, code: bytes, result: ParsedJavaFile) -> None:
        child_types = {c.type for c in node.children}
        if "static" in child_types or "asterisk" in child_types:
            return
        qualified = self._extract_name(node, code)
        if qualified:
            result.imports[qualified.rsplit(".", 1)[-1]] = qualified

    def _walk(self, node, code: bytes, result: ParsedJavaFile, *, enclosing: Optional[ParsedType]) -> None:
        for child in node.children:
            kind = _DECLARATION_KINDS.get(child.type)
            if kind is not None:
                parsed = self._parse_declaration(child, kind, code, result, enclosing=enclosing)
                if parsed is None:
                    continue
                result.types.append(parsed)
                body = child.child_by_field_name("body")
                if body is not None:
                    self._walk(body, code, result, enclosing=parsed)
            elif child.type in _BODY_TYPES:
                self._walk(child, code, result, enclosing=enclosing)

    def _parse_declaration(
        self,
        node,
        kind: str,
        code: bytes,
        result: ParsedJavaFile,
        *,
        enclosing: Optional[ParsedType],
    ) -> Optional[ParsedType]:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return None
        name = self._text(name_node, code)

        if enclosing is not None:
            qualified = f"{enclosing.qualified_name}.{name}"
        elif result.package:
            qualified = f"{result.package}.{name}"
        else:
            qualified = name

        modifiers: List[str] = []
        deprecated = False
        for_removal = False
        modifiers_node = self._child_of_type(node, "modifiers")
        if modifiers_node is not None:
            for m in modifiers_node.children:
                if m.type in _MODIFIER_KEYWORDS:
                    modifiers.append(m.type)
                elif m.type in {"marker_annotation", "annotation"}:
                    if self._is_deprecated_annotation(m, code):
                        deprecated = True
                        for_removal = for_removal or self._is_for_removal(m, code)

        superclass: Optional[str] = None
        superclass_node = node.child_by_field_name("superclass")
        if superclass_node is not None and superclass_node.named_children:
            superclass = self._strip_type_arguments(self._text(superclass_node.named_children[0], code))

        visible = "public" in modifiers or "protected" in modifiers
        if enclosing is not None:
            if enclosing.kind in _IMPLICITLY_PUBLIC_CONTAINERS and "private" not in modifiers:
                visible = True
            visible = visible and enclosing.is_core

        return ParsedType(
            name=name,
            qualified_name=qualified,
            kind=kind,
            package=result.package,
            modifiers=modifiers,
            superclass=superclass,
            deprecated=deprecated,
            for_removal=for_removal,
            javadoc=self._extract_javadoc(node, code),
            enclosing=enclosing.qualified_name if enclosing is not None else None,
            is_core=visible,
            file_path=result.file_path,
            start_line=int(getattr(node, "start_point", (0, 0))[0]) + 1,
        )

    def _child_of_type(self, node, type_name: str) -> Optional[Any]:
        for child in node.children:
            if child.type == type_name:
                return child
        return None

    def _is_deprecated_annotation(self, node, code: bytes) -> bool:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return False
        return self._text(name_node, code) in {"Deprecated", "java.lang.Deprecated"}

    def _is_for_removal(self, node, code: bytes) -> bool:
        args = node.child_by_field_name("arguments")
        if args is None:
            return False
        for pair in args.named_children:
            if pair.type != "element_value_pair":
                continue
            key = pair.child_by_field_name("key")
            value = pair.child_by_field_name("value")
            if key is not None and value is not None:
                if self._text(key, code) == "forRemoval" and self._text(value, code).strip() == "true":
                    return True
        return False

    def _strip_type_arguments(self, type_text: str) -> str:
        depth = 0
        out: List[str] = []
        for ch in type_text:
            if ch == "<":
                depth += 1
            elif ch == ">":
                depth -= 1
            elif depth == 0:
                out.append(ch)
        return re.sub(r"\s+", "", "".join(out))

    def _extract_javadoc(self, node, code: bytes) -> Optional[str]:
        prev_sibling = node.prev_sibling
        if prev_sibling is not None and prev_sibling.type in {"block_comment", "comment"}:
            comment_text = self._text(prev_sibling, code)
            if comment_text.startswith("/**"):
                return comment_text

        lookback_start = max(0, node.start_byte - 4000)
        prefix = code[lookback_start : node.start_byte].decode("utf8", errors="ignore")
        start = prefix.rfind("/**")
        if start == -1:
            return None
        match = re.match(r"(/\*\*[\s\S]*?\*/)[\s]*\Z", prefix[start:])
        if match:
            return match.group(1)

        return None
