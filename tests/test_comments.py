from __future__ import annotations

from core.index.comments import block_tags, comment_body, first_sentence, strip_comment_markers


JAVADOC = """/**
 * Holds the cached configuration. Values are read lazily.
 *
 * <p>Thread-safe.
 *
 * @deprecated use {@link com.acme.Settings}
 *     for new code.
 * @since 1.2
 * @deprecated second note
 */"""


def test_strip_comment_markers_single_line() -> None:
    assert strip_comment_markers("/** Single line. */") == ["Single line."]


def test_comment_body_stops_at_first_block_tag() -> None:
    body = comment_body(JAVADOC)

    assert body.startswith("Holds the cached configuration.")
    assert "@since" not in body
    assert "second note" not in body


def test_block_tags_collect_continuation_lines() -> None:
    assert block_tags(JAVADOC, "deprecated") == [
        "use {@link com.acme.Settings} for new code.",
        "second note",
    ]
    assert block_tags(JAVADOC, "since") == ["1.2"]
    assert block_tags(JAVADOC, "author") == []


def test_first_sentence_ends_at_period_followed_by_space() -> None:
    assert first_sentence("Returns the value. More text.") == "Returns the value."
    assert first_sentence("Version 1.2 is here. Then more") == "Version 1.2 is here."
    assert first_sentence("No terminator") == "No terminator"


def test_first_sentence_renders_inline_tags_as_text() -> None:
    text = "Uses {@code Foo} and {@link java.util.List the list}. Next."

    assert first_sentence(text) == "Uses Foo and the list."
    assert first_sentence("See {@link Map#get}.") == "See Map.get."


def test_first_sentence_stops_at_paragraph_and_strips_html() -> None:
    assert first_sentence("Intro <b>text</b><p>Details follow.") == "Intro text"


def test_first_sentence_of_blank_is_empty() -> None:
    assert first_sentence("") == ""


def test_first_sentence_does_not_end_inside_inline_code() -> None:
    assert first_sentence("Parses {@code 1.5 e.g. values} quickly. More.") == "Parses 1.5 e.g. values quickly."


def test_first_sentence_keeps_angle_brackets_in_code_and_text() -> None:
    comment = "/** A {@code Map<String, Integer>} backed cache. */"
    assert first_sentence(comment_body(comment)) == "A Map<String, Integer> backed cache."
    assert first_sentence("Holds values where a<b and c>d hold.") == "Holds values where a<b and c>d hold."
    assert first_sentence('Uses <b>bold</b> and <a href="x.html">links</a>.') == "Uses bold and links."


def test_first_sentence_renders_member_links_without_leading_dot() -> None:
    assert first_sentence("See {@link #member}.") == "See member."
    assert first_sentence("See {@linkplain #reset() reset it}.") == "See reset it."
