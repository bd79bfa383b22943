from django.template import Context, Template
from django.utils.safestring import SafeString

from postrender.markdown.adapter import render_code, render_link, style_attrs, tree_to_html
from postrender.markdown.highlight import get_lexer, highlight_code, style_for_theme
from postrender.markdown.nodes import CodeNode, CodePart, LinkPart, StyleRecord
from postrender.markdown.renderer import render_document


def render(text, **kwargs):
    return tree_to_html(render_document(text), **kwargs)


def test_output_is_safe_string():
    assert isinstance(render("hello"), SafeString)


def test_heading_gets_anchor_and_classes():
    assert render("# Hi") == '<h1 id="hi" class="post-heading">Hi</h1>'


def test_paragraph_list_and_quote():
    html = render("text\n- a\n- b\n> quoted")

    assert '<p class="post-paragraph">text</p>' in html
    assert '<ul class="post-list"><li>a</li><li>b</li></ul>' in html
    assert '<blockquote class="post-quote">quoted</blockquote>' in html


def test_divider_and_spacer():
    html = render("a\n\n---")

    assert '<div class="post-break" aria-hidden="true"></div>' in html
    assert '<hr class="post-divider">' in html


def test_external_link_gets_badge():
    html = render("[repo](https://github.com/x)")

    assert 'href="https://github.com/x"' in html
    assert 'target="_blank"' in html
    assert 'rel="noopener noreferrer"' in html
    assert 'data-link-type="tech"' in html
    assert 'title="GitHub - github.com"' in html
    assert "background-color: #f6f8fa" in html


def test_internal_link_has_no_badge():
    html = render("[post](/posts/1)", site_origin="https://blog.example.com")

    assert '<a href="/posts/1" class="enhanced-link">post</a>' in html
    assert "link-badge" not in html


def test_link_text_is_escaped():
    html = render_link(LinkPart("https://a.example", "<b>x</b>"), "https://blog.example.com")

    assert "&lt;b&gt;x&lt;/b&gt;" in html
    assert "<b>" not in html
    assert 'title="External link - a.example"' in html


def test_code_block_header_and_highlighting():
    html = render("```python\nx = 1\ny = 2\n```")

    assert '<span class="code-block__language">PYTHON</span>' in html
    assert '<span class="code-block__lines">2 lines</span>' in html
    assert 'data-language="python"' in html
    assert 'class="highlight"' in html


def test_code_header_uses_block_line_count():
    part = CodePart("sql", "select 1\nfrom t\nwhere x")

    assert part.line_count == 3
    assert CodeNode(None, "one").line_count == 1
    assert '<span class="code-block__lines">3 lines</span>' in render_code(part)
    assert '<span class="code-block__language">TEXT</span>' in render_code(CodeNode(None, "one"))


def test_code_is_escaped():
    html = render("```html\n<script>alert(1)</script>\n```")

    assert "<script>" not in html


def test_unknown_language_falls_back_to_plain_text():
    html = render("```nosuchlang\nhello\n```")

    assert "NOSUCHLANG" in html
    assert "1 line<" in html
    assert "hello" in html


def test_theme_only_changes_code_palette():
    text = "# T\n```python\nx = 1\n```"

    light = render(text)
    dark = render(text, theme="dark")

    assert light != dark
    assert light.split("<div class=\"code-block\"")[0] == dark.split("<div class=\"code-block\"")[0]
    assert "#272822" in dark


def test_table():
    html = render("| a | b |\n|:--|--:|\n| 1 | 2 |")

    assert html.startswith('<div class="table-scroll-wrapper"><table class="post-table" style="width: 100%; border-collapse: collapse">')
    assert '<th style="text-align: left">a</th>' in html
    assert '<td style="text-align: right">2</td>' in html
    assert '<tr class="post-table__row--hover">' in html


def test_image_viewer_overlay_is_emitted_once():
    html = render("![a](https://cdn.example.com/a.png)\n![b](https://cdn.example.com/b.png)")

    assert html.count('class="image-viewer"') == 1
    assert 'data-image-count="2"' in html
    assert 'data-zoom-index="1"' in html


def test_no_overlay_without_images():
    assert "image-viewer" not in render("text")


def test_mixed_html_body():
    html = render('<p>Hi <a href="https://github.com/x">repo</a></p>')

    assert html.startswith('<div class="post-html"><p>Hi <a href="https://github.com/x"')
    assert 'title="GitHub - github.com"' in html


def test_style_attrs():
    assert style_attrs(StyleRecord()) == ""
    assert style_attrs(StyleRecord(("a", "b"), (("color", "red"),))) == ' class="a b" style="color: red"'


def test_get_lexer_aliases_and_fallback():
    assert get_lexer("yml").name == "YAML"
    assert get_lexer(None).name == "Text only"
    assert get_lexer("no-such-language").name == "Text only"


def test_style_for_theme(settings_override):
    assert style_for_theme("light") == "default"
    assert style_for_theme("dark") == "monokai"
    assert style_for_theme("sepia") == "default"

    settings_override(POSTRENDER_CODE_THEMES={"dark": "native"})
    assert style_for_theme("dark") == "native"


def test_highlight_code_inlines_styles():
    html = highlight_code("def f(): pass", "python")

    assert html.startswith('<div class="highlight"')
    assert "style=" in html


def test_markdown_filter():
    html = Template("{% load markdown_tags %}{{ body|markdown }}").render(Context({"body": "**x**"}))

    assert '<p class="post-paragraph"><strong>x</strong></p>' in html


def test_markdown_with_context_uses_theme():
    template = Template("{% load markdown_tags %}{% markdown_with_context body %}")

    html = template.render(Context({"body": "```python\nx = 1\n```", "theme": "dark"}))

    assert "#272822" in html


def test_markdown_toc_filter():
    template = Template(
        "{% load markdown_tags %}"
        "{% for item in body|markdown_toc %}{{ item.id }}({% for child in item.children %}{{ child.id }}{% endfor %});{% endfor %}"
    )

    html = template.render(Context({"body": "# A\n## B\n# C"}))

    assert html == "a(b);c();"


def test_markdown_metadata_filter():
    template = Template("{% load markdown_tags %}{% with meta=body|markdown_metadata %}{{ meta.title }}|{{ meta.tags|join:',' }}{% endwith %}")

    html = template.render(Context({"body": "---\ntitle: Hi\ntags: [x, y]\n---\ntext"}))

    assert html == "Hi|x,y"
