"""Unit tests for core/blocks.py"""

import pytest

from mdpage.core.blocks import parse_blocks
from mdpage.core.models import (
    Alignment, BlockquoteBlock, CodeBlock, DiagramBlock, HeadingBlock,
    ImageBlock, ListBlock, ParagraphBlock, RuleBlock, TableBlock,
)


def _kinds(md: str, **kwargs) -> list[str]:
    return [b.kind for b in parse_blocks(md, **kwargs).blocks]


def test_sample_block_sequence(sample_result):
    """Each construct in the sample becomes exactly one block, in order."""
    assert [b.kind for b in sample_result.blocks] == [
        "heading", "paragraph", "heading", "list", "code",
        "blockquote", "table", "rule", "paragraph",
    ]


def test_paragraph_lines_join_with_spaces(sample_result):
    para = sample_result.blocks[1]
    assert isinstance(para, ParagraphBlock)
    assert para.text == "A paragraph with **bold** text that continues here."


def test_blank_line_separates_paragraphs():
    assert _kinds("one\n\ntwo\n") == ["paragraph", "paragraph"]


# --- headings ---

def test_heading_outline_and_ids():
    result = parse_blocks("# Hello **World**\n\n### Sub `part`\n")
    assert [(h.level, h.text, h.id) for h in result.headings] == [
        (1, "Hello World", "hello-world"),
        (3, "Sub part", "sub-part"),
    ]
    heading = result.blocks[0]
    assert isinstance(heading, HeadingBlock)
    assert heading.text == "Hello **World**"
    assert heading.id == result.headings[0].id


def test_duplicate_headings_get_unique_ids():
    result = parse_blocks("## Setup\n\n## Setup\n")
    assert [h.id for h in result.headings] == ["setup", "setup-1"]


def test_seven_hashes_is_a_paragraph():
    assert _kinds("####### too deep\n") == ["paragraph"]


def test_skip_title_drops_first_matching_h1():
    """The title heading is omitted from both blocks and outline."""
    result = parse_blocks("# Hello World\n\nBody\n", skip_title="hello world")
    assert [b.kind for b in result.blocks] == ["paragraph"]
    assert result.headings == []


def test_skip_title_applies_only_once():
    result = parse_blocks("# Title\n\n# Title\n", skip_title="Title")
    assert _kinds("# Title\n\n# Title\n", skip_title="Title") == ["heading"]
    assert len(result.headings) == 1


def test_skip_title_ignores_other_levels_and_text():
    assert _kinds("## Title\n", skip_title="Title") == ["heading"]
    assert _kinds("# Other\n", skip_title="Title") == ["heading"]


# --- lists ---

def test_task_items():
    result = parse_blocks("- [x] Done\n- [ ] Todo\n- Item\n- [X] Upper\n")
    (lst,) = result.blocks
    assert isinstance(lst, ListBlock)
    assert [(i.text, i.checked) for i in lst.items] == [
        ("Done", True), ("Todo", False), ("Item", None), ("Upper", True),
    ]
    assert [i.is_task for i in lst.items] == [True, True, False, True]


def test_ordered_list_drops_numbers():
    (lst,) = parse_blocks("1. first\n7. second\n").blocks
    assert lst.ordered
    assert [i.text for i in lst.items] == ["first", "second"]


def test_list_type_change_starts_new_list():
    result = parse_blocks("- a\n- b\n1. c\n")
    assert [(b.kind, b.ordered) for b in result.blocks] == [("list", False), ("list", True)]


def test_blank_line_keeps_list_open():
    (lst,) = parse_blocks("- a\n\n- b\n").blocks
    assert [i.text for i in lst.items] == ["a", "b"]


def test_paragraph_line_closes_list():
    assert _kinds("- a\nplain text\n") == ["list", "paragraph"]


def test_list_interrupts_paragraph():
    assert _kinds("intro\n- a\n") == ["paragraph", "list"]


def test_digit_without_dot_space_is_paragraph():
    assert _kinds("2024 was a year\n") == ["paragraph"]


def test_indented_items_join_flat_list():
    (lst,) = parse_blocks("- a\n  - nested\n").blocks
    assert [i.text for i in lst.items] == ["a", "nested"]


# --- code fences ---

def test_code_block_is_verbatim():
    (code,) = parse_blocks("```python\nx = **1**\n# not a heading\n```\n").blocks
    assert isinstance(code, CodeBlock)
    assert code.language == "python"
    assert code.content == "x = **1**\n# not a heading"


def test_code_fence_flushes_open_constructs():
    assert _kinds("para\n```\ncode\n```\n") == ["paragraph", "code"]
    assert _kinds("- a\n```\ncode\n```\n") == ["list", "code"]


@pytest.mark.parametrize("lang,mermaid,highlight", [
    ("mermaid", True, False),
    ("python", False, True),
    ("", False, False),
])
def test_feature_flags(lang, mermaid, highlight):
    result = parse_blocks(f"```{lang}\ncontent\n```\n")
    assert result.has_mermaid is mermaid
    assert result.has_syntax_highlighting is highlight


def test_mermaid_becomes_diagram_block():
    (diagram,) = parse_blocks("```mermaid\ngraph TD\n  A-->B\n```\n").blocks
    assert isinstance(diagram, DiagramBlock)
    assert diagram.source == "graph TD\n  A-->B"


def test_unterminated_fence_is_kept_as_code():
    result = parse_blocks("intro\n\n```js\nlet a = 1;\n")
    assert [b.kind for b in result.blocks] == ["paragraph", "code"]
    assert result.blocks[-1].content == "let a = 1;"
    assert result.has_syntax_highlighting


# --- tables ---

def test_table_alignments_and_rows():
    (table,) = parse_blocks("| A | B | C |\n|:---|:---:|---:|\n| 1 | 2 | 3 |\n").blocks
    assert isinstance(table, TableBlock)
    assert table.headers == ["A", "B", "C"]
    assert table.alignments == [Alignment.left, Alignment.center, Alignment.right]
    assert table.rows == [["1", "2", "3"]]


def test_table_without_separator_defaults_left():
    (table,) = parse_blocks("| A | B |\n| 1 | 2 |\n").blocks
    assert table.align(0) == Alignment.left
    assert table.align(5) == Alignment.left
    assert table.rows == [["1", "2"]]


def test_table_flushed_by_other_line():
    assert _kinds("| A |\n| 1 |\nafter\n") == ["table", "paragraph"]


def test_pipe_inside_text_is_not_a_table():
    assert _kinds("a | b | c\n") == ["paragraph"]


def test_unbalanced_rows_are_kept():
    (table,) = parse_blocks("| A | B |\n| 1 |\n| 1 | 2 | 3 |\n").blocks
    assert table.rows == [["1"], ["1", "2", "3"]]


# --- blockquotes ---

def test_blockquote_joins_lines(sample_result):
    quote = sample_result.blocks[5]
    assert isinstance(quote, BlockquoteBlock)
    assert quote.text == "quoted line second line"


def test_blockquote_continuation_without_space():
    (quote,) = parse_blocks("> first\n>second\n>\n").blocks
    assert quote.text == "first second "


def test_bare_marker_does_not_open_quote():
    assert _kinds(">not a quote\n") == ["paragraph"]


def test_blank_line_ends_blockquote():
    assert _kinds("> a\n\n> b\n") == ["blockquote", "blockquote"]


# --- rules and images ---

@pytest.mark.parametrize("line", ["---", "***", "___", "  -----  "])
def test_thematic_break(line):
    assert _kinds(f"{line}\n") == ["rule"]


def test_rule_after_list():
    result = parse_blocks("- a\n---\n")
    assert isinstance(result.blocks[1], RuleBlock)


def test_image_interrupts_paragraph():
    result = parse_blocks('Look: ![A cat](cat.png "Sleepy") nice.\n')
    assert [b.kind for b in result.blocks] == ["paragraph", "image", "paragraph"]
    img = result.blocks[1]
    assert isinstance(img, ImageBlock)
    assert (img.alt, img.url, img.caption) == ("A cat", "cat.png", "Sleepy")


def test_standalone_image_caption_falls_back_to_alt():
    (img,) = parse_blocks("![Diagram](d.png)\n").blocks
    assert img.caption == "Diagram"


def test_image_in_code_span_stays_in_paragraph():
    assert _kinds("Write `![alt](src.png)` for images.\n") == ["paragraph"]


def test_image_in_link_label_stays_in_paragraph():
    assert _kinds("Click [![badge](b.svg)](https://ci.example.com) now\n") == ["paragraph"]


def test_image_after_code_span_still_splits():
    result = parse_blocks("Use `x` here ![pic](p.png)\n")
    assert [b.kind for b in result.blocks] == ["paragraph", "image"]
    assert result.blocks[0].text == "Use `x` here"


# --- robustness ---

def test_empty_input():
    result = parse_blocks("")
    assert result.blocks == []
    assert result.headings == []
    assert not result.has_mermaid and not result.has_syntax_highlighting


def test_no_content_line_dropped():
    """Every non-blank line ends up in some block."""
    md = "# H\ntext\n- item\n> quote\n| a |\n```\ncode\n```\n***\n1. one\n"
    result = parse_blocks(md)
    assert [b.kind for b in result.blocks] == [
        "heading", "paragraph", "list", "blockquote", "table", "code", "rule", "list",
    ]
