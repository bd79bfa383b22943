import pytest

from postrender.markdown.errors import InlineTransformError
from postrender.markdown.inline import ATOM, parse_inline, serialize, transform_inline
from postrender.markdown.nodes import (
    CodeSpan,
    Emphasis,
    ImageNode,
    LinkedImageNode,
    LinkNode,
    LinkPart,
    RawHtmlPart,
    Strong,
    TextRun,
    UnavailableImageNode,
)
from postrender.markdown.reconciler import reconcile

# hex of "https://example.com/a.png"
CAMO_URL = "https://camo.githubusercontent.com/abc123/68747470733a2f2f6578616d706c652e636f6d2f612e706e67"


def test_link_round_trip():
    parts = reconcile(transform_inline("[x](http://example.com)"))

    assert parts == [LinkPart(href="http://example.com", text="x")]


def test_bold_italic_and_code():
    html = transform_inline("**bold**, *italic* and `code`")

    assert html == "<strong>bold</strong>, <em>italic</em> and <code>code</code>"


def test_parse_emphasis_nodes():
    assert parse_inline("a **b** c") == [TextRun("a "), Strong((TextRun("b"),)), TextRun(" c")]


def test_code_span_content_stays_literal():
    assert parse_inline("`a*b*c`") == [CodeSpan("a*b*c")]
    assert transform_inline("`<b>`") == "<code>&lt;b&gt;</code>"


def test_asterisks_inside_link_are_not_emphasis():
    nodes = parse_inline("[a *b* c](http://x.com/*y*)")

    assert nodes == [LinkNode(href="http://x.com/*y*", text="a *b* c")]
    assert reconcile(transform_inline("[a *b* c](http://x.com/*y*)")) == [
        LinkPart(href="http://x.com/*y*", text="a *b* c")
    ]


def test_emphasis_can_wrap_a_link():
    nodes = parse_inline("**[x](http://a.com)**")

    assert nodes == [Strong((LinkNode(href="http://a.com", text="x"),))]
    assert reconcile(transform_inline("**[x](http://a.com)**")) == [
        RawHtmlPart("<strong>"),
        LinkPart(href="http://a.com", text="x"),
        RawHtmlPart("</strong>"),
    ]


def test_several_links_keep_their_order():
    parts = reconcile(transform_inline("[one](https://a.com) and *[two](https://b.com)*"))

    links = [part for part in parts if isinstance(part, LinkPart)]
    assert links == [LinkPart("https://a.com", "one"), LinkPart("https://b.com", "two")]


def test_link_title_is_ignored():
    assert parse_inline('[x](https://a.com "A title")') == [LinkNode("https://a.com", "x")]


def test_markdown_image_gets_sizing_hints():
    assert parse_inline("![alt](https://cdn.example.com/a.png)") == [
        ImageNode("https://cdn.example.com/a.png", "alt", "max-width: 100%; height: auto"),
    ]


def test_raw_img_keeps_author_style():
    nodes = parse_inline('<img src="a.png" alt="A" style="width: 50px">')

    assert nodes == [ImageNode("a.png", "A", "width: 50px; height: auto")]


def test_image_is_not_read_as_link():
    nodes = parse_inline("![a](https://cdn.example.com/a.png)")

    assert not any(isinstance(node, LinkNode) for node in nodes)


def test_unreliable_image_host_is_replaced():
    nodes = parse_inline(f"![diagram]({CAMO_URL})")

    assert nodes == [UnavailableImageNode("diagram", "https://example.com/a.png", True)]

    parts = reconcile(transform_inline(f"![diagram]({CAMO_URL})"))
    assert LinkPart("https://example.com/a.png", "https://example.com/a.png") in parts
    assert "Image unavailable: diagram" in "".join(
        part.html for part in parts if isinstance(part, RawHtmlPart)
    )


def test_undecodable_wrapped_image_falls_back_to_wrapped_url():
    url = "https://camo.githubusercontent.com/not-hex"

    assert parse_inline(f"![x]({url})") == [UnavailableImageNode("x", url, False)]
    assert LinkPart(url, "View original") in reconcile(transform_inline(f"![x]({url})"))


def test_disallowed_markup_is_escaped():
    html = transform_inline("<script>alert(1)</script> ok")

    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_plain_text_is_escaped_where_needed():
    assert transform_inline("a < b & c") == "a &lt; b &amp; c"


@pytest.mark.parametrize(
    "text",
    [
        "plain",
        "[a](https://a.com) [b](https://b.com)",
        "**[a](https://a.com)** *[b](https://b.com)*",
        "`[not](a link)` [link](https://c.com)",
        "stray \x00 byte",
        "**unbalanced [x](https://d.com)",
    ],
)
def test_output_never_contains_atom_markers(text):
    assert ATOM not in transform_inline(text)


def test_unbalanced_emphasis_is_left_as_text():
    assert transform_inline("**open") == "**open"


def test_serialize_rejects_unknown_nodes():
    with pytest.raises(InlineTransformError):
        serialize([TextRun("ok"), object()])


def test_serialize_nested_emphasis():
    nodes = [Emphasis((TextRun("a"), Strong((CodeSpan("b"),))))]

    assert serialize(nodes) == "<em>a<strong><code>b</code></strong></em>"


BADGE = "[![build](https://img.shields.io/b.svg)](https://github.com/x/y)"


def test_linked_image_is_parsed_as_one_node():
    assert parse_inline(BADGE) == [
        LinkedImageNode(
            "https://github.com/x/y",
            ImageNode("https://img.shields.io/b.svg", "build", "max-width: 100%; height: auto"),
        )
    ]


def test_linked_image_becomes_an_external_anchor():
    html = transform_inline(BADGE)

    assert html.startswith("<a ")
    assert html.endswith("</a>")
    assert 'href="https://github.com/x/y"' in html
    assert 'target="_blank"' in html
    assert 'rel="noopener noreferrer"' in html
    assert '<img src="https://img.shields.io/b.svg"' in html
    assert "](" not in html

    parts = reconcile(html)
    assert all(isinstance(part, RawHtmlPart) for part in parts)


def test_internal_linked_image_is_a_plain_anchor():
    html = transform_inline("[![home](/logo.png)](/posts/1)")

    assert html.startswith('<a href="/posts/1"><img')
    assert "target" not in html


def test_badges_side_by_side():
    nodes = parse_inline(f"{BADGE} [![b](https://cdn.example.com/b.png)](https://b.com)")

    assert [type(node) for node in nodes] == [LinkedImageNode, TextRun, LinkedImageNode]
    assert nodes[2].href == "https://b.com"


def test_emphasis_can_wrap_a_linked_image():
    nodes = parse_inline(f"**{BADGE}**")

    assert len(nodes) == 1
    assert isinstance(nodes[0], Strong)
    assert isinstance(nodes[0].children[0], LinkedImageNode)


def test_unavailable_image_is_never_wrapped_in_a_link():
    nodes = parse_inline(f"[![a]({CAMO_URL})](https://a.com)")

    assert nodes == [
        TextRun("["),
        UnavailableImageNode("a", "https://example.com/a.png", True),
        TextRun("](https://a.com)"),
    ]


def test_code_span_around_a_link_shows_it_literally():
    text = "`[x](y)` and `a*b*c`"

    assert parse_inline(text) == [CodeSpan("[x](y)"), TextRun(" and "), CodeSpan("a*b*c")]
    assert transform_inline(text) == "<code>[x](y)</code> and <code>a*b*c</code>"


def test_code_span_around_images_shows_them_literally():
    assert parse_inline("`![a](https://cdn.example.com/a.png)`") == [
        CodeSpan("![a](https://cdn.example.com/a.png)")
    ]
    assert parse_inline(f"`{BADGE}`") == [CodeSpan(BADGE)]

    html = transform_inline('`<img src="a.png">`')
    assert "<img" not in html
    assert html.startswith("<code>&lt;img")


def test_backtick_inside_link_text_does_not_open_a_code_span():
    assert parse_inline("[a`b](https://a.com) and `c`") == [
        LinkNode("https://a.com", "a`b"),
        TextRun(" and "),
        CodeSpan("c"),
    ]
