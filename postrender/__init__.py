"""
Markdown and mixed-HTML rendering for blog posts, as a Django app.

    from postrender.markdown.renderer import render_document
    from postrender.markdown.adapter import tree_to_html

    html = tree_to_html(render_document(post_text), theme="dark")
"""

__version__ = "0.1.0"
