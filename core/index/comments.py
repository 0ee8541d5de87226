from __future__ import annotations

import re
from typing import List, Optional

from core.index.models import Entity


_INLINE_TAG_RE = re.compile(r"\{@(\w+)\s*([^{}]*)\}")
# Real HTML tags only: a tag name, then `name=value` attributes. Text such as
# "a<b and c>d" is left alone.
_HTML_TAG_RE = re.compile(
    r"</?[a-zA-Z][a-zA-Z0-9]*"
    r"(?:\s+[a-zA-Z_:][-\w:.]*\s*=\s*(?:\"[^\"]*\"|'[^']*'|[^\s\"'=<>`]+))*"
    r"\s*/?>"
)
_PARAGRAPH_RE = re.compile(r"<p\b[^>]*>", re.IGNORECASE)
_SENTENCE_END_RE = re.compile(r"[.!?](?=\s|$)")
_PLACEHOLDER_RE = re.compile("\x00(\\d+)\x00")


def _normalize_line_endings(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def strip_comment_markers(comment: str) -> List[str]:
    """Return the content lines of a javadoc comment without `/**`, `*/` and `*` gutters."""

    lines: List[str] = []
    for line in _normalize_line_endings(comment or "").split("\n"):
        s = line.strip()
        if s.startswith("/**"):
            s = s[3:]
        if s.endswith("*/"):
            s = s[:-2]
        s = s.strip()
        if s.startswith("*"):
            s = s[1:].strip()
        lines.append(s)
    return lines


def comment_body(comment: str) -> str:
    """Return the main description: everything before the first block tag."""

    body: List[str] = []
    for line in strip_comment_markers(comment):
        if line.startswith("@"):
            break
        body.append(line)
    return " ".join(x for x in body if x).strip()


def block_tags(comment: str, name: str) -> List[str]:
    """Return the bodies of every `@<name>` block tag, in source order."""

    tags: List[str] = []
    current: Optional[List[str]] = None
    for line in strip_comment_markers(comment):
        if line.startswith("@"):
            if current is not None:
                tags.append(" ".join(x for x in current if x).strip())
                current = None
            tag, _, rest = line.partition(" ")
            if tag == f"@{name}":
                current = [rest.strip()]
            continue
        if current is not None:
            current.append(line)
    if current is not None:
        tags.append(" ".join(x for x in current if x).strip())
    return tags


def _render_inline_tag(tag: str, content: str) -> str:
    content = re.sub(r"\s+", " ", content).strip()
    if tag in {"link", "linkplain"}:
        # {@link pkg.Type#member label}: prefer the label, else the reference.
        ref, _, label = content.partition(" ")
        if label.strip():
            return label.strip()
        return ref.lstrip("#").replace("#", ".")
    return content


def first_sentence(text: str) -> str:
    """Extract the first sentence from javadoc text, as plain text.

    The sentence ends at the first `.`, `!` or `?` followed by whitespace, at an
    HTML paragraph break, or at the end of the text. Inline tags are masked
    while the sentence is cut and HTML is stripped, then expanded verbatim.
    """

    rendered: List[str] = []

    def _mask(match: "re.Match[str]") -> str:
        rendered.append(_render_inline_tag(match.group(1), match.group(2)))
        return f"\x00{len(rendered) - 1}\x00"

    masked = _INLINE_TAG_RE.sub(_mask, text or "")
    masked = _PARAGRAPH_RE.split(masked, maxsplit=1)[0]
    masked = _HTML_TAG_RE.sub("", masked)
    masked = re.sub(r"\s+", " ", masked).strip()

    match = _SENTENCE_END_RE.search(masked)
    if match:
        masked = masked[: match.end()].strip()

    return _PLACEHOLDER_RE.sub(lambda m: rendered[int(m.group(1))], masked)


class JavadocCommentRenderer:
    """Render summary and deprecation text from javadoc comments."""

    def summary(self, entity: Entity) -> str:
        if not entity.doc_comment:
            return ""
        return first_sentence(comment_body(entity.doc_comment))

    def deprecation_comment(self, entity: Entity, note: str) -> str:
        return first_sentence(note)
