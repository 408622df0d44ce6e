"""Unit tests for core/frontmatter.py"""

from mdpage.core.frontmatter import extract_frontmatter


def test_extracts_meta_and_body():
    """A delimited header is parsed and removed from the body."""
    meta, body = extract_frontmatter("---\ntitle: Hello\nauthor: Ada\n---\n# Body\n")
    assert meta == {"title": "Hello", "author": "Ada"}
    assert body == "# Body\n"


def test_no_frontmatter_returns_input():
    """Text without a header comes back whole with empty meta."""
    text = "# No frontmatter\n"
    assert extract_frontmatter(text) == ({}, text)


def test_value_keeps_extra_colons():
    """Only the first colon separates key and value."""
    meta, _ = extract_frontmatter("---\ndate: 2024-01-01 10:30\n---\nbody")
    assert meta["date"] == "2024-01-01 10:30"


def test_lines_without_colon_ignored():
    """Lines lacking a colon are skipped silently."""
    meta, _ = extract_frontmatter("---\njust text\ntitle: T\n---\nbody")
    assert meta == {"title": "T"}


def test_first_occurrence_wins():
    """Duplicate keys keep the first value."""
    meta, _ = extract_frontmatter("---\ntitle: First\ntitle: Second\n---\nbody")
    assert meta["title"] == "First"


def test_unclosed_header_is_not_extracted():
    """A header without closing delimiter and newline yields no partial extraction."""
    text = "---\ntitle: Hello\n# Body\n"
    assert extract_frontmatter(text) == ({}, text)


def test_closing_delimiter_needs_trailing_newline():
    """The closing `---` must be followed by a newline."""
    text = "---\ntitle: Hello\n---"
    assert extract_frontmatter(text) == ({}, text)


def test_values_are_strings():
    """Values are opaque strings, not YAML-typed."""
    meta, _ = extract_frontmatter("---\ncount: 3\ndraft: true\n---\n")
    assert meta == {"count": "3", "draft": "true"}
