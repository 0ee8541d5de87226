from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class ParsedType:
    """A type declaration extracted from one Java source file."""

    name: str
    qualified_name: str
    kind: str  # "class", "interface", "enum", "annotation_type", "record"
    package: str = ""
    modifiers: List[str] = field(default_factory=list)
    superclass: Optional[str] = None  # as written in source, generics stripped
    deprecated: bool = False
    for_removal: bool = False
    javadoc: Optional[str] = None

    # Context fields
    enclosing: Optional[str] = None  # qualified name of the enclosing type
    is_core: bool = True
    file_path: Optional[str] = None
    start_line: Optional[int] = None


@dataclass
class ParsedJavaFile:
    """Package, imports and type declarations of one compilation unit."""

    package: str = ""
    imports: Dict[str, str] = field(default_factory=dict)  # simple name -> qualified name
    types: List[ParsedType] = field(default_factory=list)
    file_path: Optional[str] = None
