# postrender/markdown/postprocessors/table_enhancer.py
"""
Postprocessor that restyles tables embedded in mixed-HTML posts.

Posts pasted from other editors often carry their own table markup with
zebra striping and no borders. This postprocessor:
- Ensures proper table structure (thead, tbody)
- Gives header and body cells borders and padding
- Removes zebra striping (bgcolor attributes, row background declarations)
- Marks body rows with a hover class
- Wraps tables in a scroll wrapper so wide tables do not break the layout

Output:
    <div class="table-wrapper block">
        <div class="table-scroll-wrapper">
            <table style="border-collapse: collapse; width: 100%">
                <thead><tr><th style="border: 1px solid #000000; ...">...</th></tr></thead>
                <tbody><tr class="post-table__row--hover">...</tr></tbody>
            </table>
        </div>
    </div>
"""

from bs4 import BeautifulSoup, Tag

from ..config import get_render_config
from .utils import format_style, get_shared_soup, parse_style, soup_to_html

ZEBRA_CLASSES = {"odd", "even", "striped", "zebra", "alt", "alternate"}


def _apply_declarations(element: Tag, declarations) -> None:
    """Add the given declarations, keeping any the author already set."""
    existing = parse_style(element.get("style", ""))
    present = {name for name, _ in existing}
    merged = existing + [(name, value) for name, value in declarations if name not in present]
    element["style"] = format_style(merged)


def _remove_striping(row: Tag) -> None:
    for element in [row, *row.find_all(["td", "th"], recursive=False)]:
        if element.has_attr("bgcolor"):
            del element["bgcolor"]

        declarations = [
            (name, value)
            for name, value in parse_style(element.get("style", ""))
            if name not in ("background", "background-color")
        ]
        if declarations:
            element["style"] = format_style(declarations)
        elif element.has_attr("style"):
            del element["style"]

    classes = row.get("class", [])
    if isinstance(classes, str):
        classes = classes.split()
    row["class"] = [cls for cls in classes if cls.lower() not in ZEBRA_CLASSES]
    if not row["class"]:
        del row["class"]


def _is_header_row(row: Tag) -> bool:
    cells = row.find_all(["td", "th"], recursive=False)
    return bool(cells) and all(cell.name == "th" for cell in cells)


def _ensure_table_structure(soup: BeautifulSoup, table: Tag) -> None:
    """
    Ensure table has proper thead/tbody structure.

    Pasted tables frequently put every row straight under <table>, and the
    sanitizer has usually wrapped those rows in a tbody already. A first row
    made only of <th> cells becomes the thead, the rest go into a tbody.
    """
    first_body = table.find("tbody", recursive=False)

    if table.find("thead", recursive=False) is None:
        container = first_body if first_body is not None else table
        first = container.find("tr", recursive=False)
        if first is not None and first is table.find("tr") and _is_header_row(first):
            thead = soup.new_tag("thead")
            anchor = first_body if first_body is not None else first
            anchor.insert_before(thead)
            thead.append(first.extract())
            if first_body is not None and first_body.find("tr") is None:
                first_body.decompose()
                first_body = None

    loose_rows = table.find_all("tr", recursive=False)
    if loose_rows and first_body is None:
        tbody = soup.new_tag("tbody")
        loose_rows[0].insert_before(tbody)
        for row in loose_rows:
            tbody.append(row.extract())


def _wrap_table(soup: BeautifulSoup, table: Tag) -> Tag:
    """
    Wrap table in nested div structure.

    Returns:
        The outer wrapper div
    """
    # Check if table is already wrapped (avoid double-wrapping)
    parent = table.parent
    if parent and parent.name == "div":
        parent_classes = parent.get("class", [])
        if isinstance(parent_classes, str):
            parent_classes = parent_classes.split()
        if "table-scroll-wrapper" in parent_classes:
            return parent.parent or parent

    outer_wrapper = soup.new_tag("div")
    outer_wrapper["class"] = ["table-wrapper", "block"]

    inner_wrapper = soup.new_tag("div")
    inner_wrapper["class"] = ["table-scroll-wrapper"]

    table.insert_before(outer_wrapper)
    table.extract()
    inner_wrapper.append(table)
    outer_wrapper.append(inner_wrapper)

    return outer_wrapper


def table_enhancer(html: str, context: dict) -> str:
    """
    Restyle every table in a mixed-HTML document.

    Args:
        html: HTML string to process
        context: Context dictionary for shared soup caching

    Returns:
        Processed HTML with styled, wrapped tables
    """
    styles = get_render_config()["table_html"]
    soup = get_shared_soup(html, context)

    for table in soup.find_all("table"):
        _ensure_table_structure(soup, table)
        _apply_declarations(table, styles["table"])

        for row in table.find_all("tr"):
            _remove_striping(row)
            if row.find_parent("thead") is None and row.find("td") is not None:
                classes = row.get("class", [])
                if isinstance(classes, str):
                    classes = classes.split()
                if styles["row_hover_class"] not in classes:
                    row["class"] = [*classes, styles["row_hover_class"]]

        for cell in table.find_all("th"):
            _apply_declarations(cell, styles["th"])
        for cell in table.find_all("td"):
            _apply_declarations(cell, styles["td"])

        _wrap_table(soup, table)

    return soup_to_html(context, soup)


def table_enhancer_default(html: str, context: dict) -> str:
    """
    Default configuration for table_enhancer.

    This is the function that should be registered in POSTPROCESSORS.
    """
    return table_enhancer(html, context)
