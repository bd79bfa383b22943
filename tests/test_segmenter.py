import pytest

from postrender.markdown.nodes import (
    Blank,
    BulletList,
    CodeBlock,
    Divider,
    Heading,
    Paragraph,
    Quote,
    Table,
)
from postrender.markdown.segmenter import BlockSegmenter, RunMode, segment, segment_text, split_lines


def test_blocks_follow_source_order():
    lines = [
        "# Title",
        "intro",
        "> quoted",
        "- one",
        "- two",
        "",
        "---",
        "| a | b |",
        "|---|---|",
        "```py",
        "x = 1",
        "```",
    ]

    assert segment(lines) == [
        Heading(1, "Title"),
        Paragraph("intro"),
        Quote("quoted"),
        BulletList(("one", "two")),
        Blank(),
        Divider(),
        Table(("| a | b |", "|---|---|")),
        CodeBlock("py", "x = 1"),
    ]


def test_code_fence_content_is_never_reinterpreted():
    lines = ["```", "| a | b |", "# not a heading", "- not an item", "> not a quote", "```"]

    assert segment(lines) == [
        CodeBlock(None, "| a | b |\n# not a heading\n- not an item\n> not a quote"),
    ]


def test_code_fence_keeps_language_tag_and_indentation():
    lines = ["```  python ", "def f():", "    return 1", "```"]

    assert segment(lines) == [CodeBlock("python", "def f():\n    return 1")]


def test_unclosed_code_fence_is_flushed_at_end():
    assert segment(["```js", "let x"]) == [CodeBlock("js", "let x")]


def test_fence_closes_open_table():
    lines = ["| a | b |", "```", "code", "```"]

    assert segment(lines) == [Table(("| a | b |",)), CodeBlock(None, "code")]


def test_table_ends_on_line_without_pipe():
    lines = ["| a | b |", "| 1 | 2 |", "after"]

    assert segment(lines) == [
        Table(("| a | b |", "| 1 | 2 |")),
        Paragraph("after"),
    ]


def test_table_ends_on_blank_line():
    lines = ["| a | b |", "", "next"]

    assert segment(lines) == [Table(("| a | b |",)), Blank(), Paragraph("next")]


def test_table_continues_on_single_pipe_rows():
    lines = ["| a | b |", "1 | 2"]

    assert segment(lines) == [Table(("| a | b |", "1 | 2"))]


def test_single_pipe_line_is_a_paragraph():
    assert segment(["this | that"]) == [Paragraph("this | that")]


def test_list_markers_are_stripped():
    assert segment(["- dash", "* star", "+ plus"]) == [BulletList(("dash", "star", "plus"))]


def test_list_tolerates_one_blank_line():
    lines = ["- a", "", "- b"]

    assert segment(lines) == [BulletList(("a", "b"))]


def test_second_blank_line_ends_list():
    lines = ["- a", "", "", "- b"]

    assert segment(lines) == [BulletList(("a",)), Blank(), BulletList(("b",))]


def test_list_ended_by_text_keeps_pending_blank():
    lines = ["- a", "", "text"]

    assert segment(lines) == [BulletList(("a",)), Blank(), Paragraph("text")]


def test_list_ended_by_text():
    assert segment(["- a", "text"]) == [BulletList(("a",)), Paragraph("text")]


def test_open_list_is_flushed_at_end():
    assert segment(["para", "- last"]) == [Paragraph("para"), BulletList(("last",))]


def test_heading_level_is_capped():
    assert segment(["######## deep"]) == [Heading(6, "deep")]
    assert segment(["#### deep"], max_heading_level=3) == [Heading(3, "deep")]


def test_heading_level_cap_follows_setting(settings_override):
    settings_override(POSTRENDER_MAX_HEADING_LEVEL=2)

    assert segment(["### three"]) == [Heading(2, "three")]


def test_quote_strips_marker_and_one_space():
    assert segment([">tight", "> spaced", "> > nested"]) == [
        Quote("tight"),
        Quote("spaced"),
        Quote("> nested"),
    ]


@pytest.mark.parametrize("line", ["---", "***", "___", "-----", "  ---  "])
def test_dividers(line):
    assert segment([line]) == [Divider()]


def test_blank_lines_collapse():
    lines = ["", "", "a", "", "", "", "b", ""]

    assert segment(lines) == [Paragraph("a"), Blank(), Paragraph("b"), Blank()]


def test_paragraph_lines_are_not_merged():
    assert segment(["first line", "second line"]) == [
        Paragraph("first line"),
        Paragraph("second line"),
    ]


def test_split_lines_drops_one_trailing_newline():
    assert split_lines("a\nb\n") == ["a", "b"]
    assert split_lines("a\n\n") == ["a", ""]


def test_segment_text():
    assert segment_text("# Hi\nthere\n") == [Heading(1, "Hi"), Paragraph("there")]


def test_segmenter_is_reusable():
    segmenter = BlockSegmenter()

    first = segmenter.segment(["- a"])
    second = segmenter.segment(["b"])

    assert first == [BulletList(("a",))]
    assert second == [Paragraph("b")]
    assert segmenter.mode is RunMode.NONE
