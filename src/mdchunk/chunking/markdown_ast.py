"""Markdown block-tree parsing and section extraction.

Markdown is tokenized with markdown-it-py (CommonMark plus GFM tables and
strikethrough) and converted into a small mdast-style tree of ``MarkdownNode``
objects. ``extract_sections`` then walks the top-level blocks in document
order and groups every non-heading block under its enclosing heading path.

Example:
    >>> root = parse_markdown("# Title\\n\\nSome content\\n\\n## Section\\n\\nMore")
    >>> [s.headings for s in extract_sections(root)]
    [['Title'], ['Title', 'Section']]
"""

import logging
from dataclasses import dataclass, field

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from mdchunk.chunking.hierarchy import HeadingStack
from mdchunk.lib.errors import ParseError

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 100

# markdown-it token types that map directly onto an mdast node kind
_BLOCK_TYPES = {
    "paragraph": "paragraph",
    "blockquote": "blockquote",
    "bullet_list": "list",
    "ordered_list": "list",
    "list_item": "listItem",
    "hr": "thematicBreak",
    "html_block": "html",
    "fence": "code",
    "code_block": "code",
    "table": "table",
    "heading": "heading",
}

_INLINE_CONTAINERS = {
    "em": "emphasis",
    "strong": "strong",
    "s": "delete",
    "link": "link",
}


@dataclass
class MarkdownNode:
    """A node of the parsed markdown tree.

    Only the attributes relevant to the node's ``type`` are set.

    Attributes:
        type: mdast node kind (``paragraph``, ``code``, ``list``, ``text``...)
        children: Child nodes, in document order
        value: Literal text for ``text``, ``code``, ``inlineCode`` and ``html``
        depth: Heading level, 1-6
        lang: Code fence language tag
        ordered: Whether a list is ordered
        start: First number of an ordered list
        url: Link or image target
        alt: Image alternative text
    """

    type: str
    children: list["MarkdownNode"] = field(default_factory=list)
    value: str | None = None
    depth: int | None = None
    lang: str | None = None
    ordered: bool | None = None
    start: int | None = None
    url: str | None = None
    alt: str | None = None


@dataclass
class Section:
    """Heading-scoped group of block nodes.

    Attributes:
        headings: Heading hierarchy, root first, skipped levels removed
        nodes: Non-heading block nodes under that hierarchy
    """

    headings: list[str]
    nodes: list[MarkdownNode]


def _preview(markdown: object) -> str:
    """Build the single-line input preview used in parse errors."""
    text = markdown if isinstance(markdown, str) else repr(markdown)
    preview = text[:PREVIEW_LENGTH].replace("\n", " ")
    if len(text) > PREVIEW_LENGTH:
        preview += "..."
    return preview


def create_parser() -> MarkdownIt:
    """Create a markdown-it parser with the extensions the chunkers rely on."""
    return MarkdownIt("commonmark").enable(["table", "strikethrough"])


def parse_markdown(markdown: str, source_file: str | None = None) -> MarkdownNode:
    """Parse markdown text into a ``root`` node of block-level children.

    Args:
        markdown: The markdown text to parse.
        source_file: Optional document name, included in error messages.

    Returns:
        The root node.

    Raises:
        ParseError: If the input cannot be tokenized. The error carries a
            preview of the input and the underlying cause.
    """
    try:
        tokens = create_parser().parse(markdown)
        root = _convert_block(SyntaxTreeNode(tokens))
    except Exception as e:
        raise ParseError(_preview(markdown), e, source_file) from e

    logger.debug(
        f"Parsed {len(markdown)} chars into {len(root.children)} top-level blocks"
    )
    return root


def _convert_block(node: SyntaxTreeNode) -> MarkdownNode:
    """Convert a block-level syntax tree node."""
    if node.type == "root":
        return MarkdownNode(
            type="root", children=[_convert_block(child) for child in node.children]
        )

    kind = _BLOCK_TYPES.get(node.type)

    if kind == "heading":
        return MarkdownNode(
            type="heading", depth=int(node.tag[1:]), children=_inline_children(node)
        )
    if kind == "paragraph":
        return MarkdownNode(type="paragraph", children=_inline_children(node))
    if kind == "code":
        info = (node.info or "").strip() if node.type == "fence" else ""
        value = node.content
        if value.endswith("\n"):
            value = value[:-1]
        return MarkdownNode(type="code", value=value, lang=info.split()[0] if info else None)
    if kind == "list":
        ordered = node.type == "ordered_list"
        start = None
        if ordered:
            start = int(node.attrs.get("start", 1))
        return MarkdownNode(
            type="list",
            ordered=ordered,
            start=start,
            children=[_convert_block(child) for child in node.children],
        )
    if kind in ("listItem", "blockquote"):
        return MarkdownNode(
            type=kind, children=[_convert_block(child) for child in node.children]
        )
    if kind == "thematicBreak":
        return MarkdownNode(type="thematicBreak")
    if kind == "html":
        return MarkdownNode(type="html", value=node.content.rstrip("\n"))
    if kind == "table":
        return MarkdownNode(type="table", children=_table_rows(node))

    # Unmapped block kinds keep their token name and serialize to nothing
    return MarkdownNode(
        type=node.type, children=[_convert_block(child) for child in node.children]
    )


def _table_rows(table: SyntaxTreeNode) -> list[MarkdownNode]:
    """Flatten thead/tbody into an ordered list of ``tableRow`` nodes."""
    rows: list[MarkdownNode] = []
    for part in table.children:
        for row in part.children:
            cells = [
                MarkdownNode(type="tableCell", children=_inline_children(cell))
                for cell in row.children
            ]
            rows.append(MarkdownNode(type="tableRow", children=cells))
    return rows


def _inline_children(node: SyntaxTreeNode) -> list[MarkdownNode]:
    """Convert the ``inline`` child of a block into phrasing nodes."""
    phrasing: list[MarkdownNode] = []
    for child in node.children:
        if child.type == "inline":
            phrasing.extend(_convert_inline(grandchild) for grandchild in child.children)
    return _merge_text(phrasing)


def _convert_inline(node: SyntaxTreeNode) -> MarkdownNode:
    """Convert an inline syntax tree node."""
    if node.type == "text":
        return MarkdownNode(type="text", value=node.content)
    if node.type == "softbreak":
        return MarkdownNode(type="text", value="\n")
    if node.type == "hardbreak":
        return MarkdownNode(type="break")
    if node.type == "code_inline":
        return MarkdownNode(type="inlineCode", value=node.content)
    if node.type == "image":
        return MarkdownNode(
            type="image", url=str(node.attrs.get("src", "")), alt=node.content
        )
    if node.type == "html_inline":
        return MarkdownNode(type="html", value=node.content)

    kind = _INLINE_CONTAINERS.get(node.type, node.type)
    children = _merge_text([_convert_inline(child) for child in node.children])
    if kind == "link":
        return MarkdownNode(
            type="link", url=str(node.attrs.get("href", "")), children=children
        )
    return MarkdownNode(type=kind, children=children)


def _merge_text(nodes: list[MarkdownNode]) -> list[MarkdownNode]:
    """Join adjacent text nodes, as mdast keeps soft breaks inside text."""
    merged: list[MarkdownNode] = []
    for node in nodes:
        if node.type == "text" and merged and merged[-1].type == "text":
            merged[-1].value = (merged[-1].value or "") + (node.value or "")
        else:
            merged.append(node)
    return merged


def extract_text(node: MarkdownNode) -> str:
    """Flatten phrasing content to plain text.

    Emphasis, strong, strikethrough and links contribute their children;
    images contribute their alt text; line breaks become newlines; anything
    else (raw inline HTML) contributes nothing.
    """
    if node.type in ("text", "inlineCode"):
        return node.value or ""
    if node.type in ("emphasis", "strong", "delete", "link"):
        return "".join(extract_text(child) for child in node.children)
    if node.type == "image":
        return node.alt or ""
    if node.type == "break":
        return "\n"
    return ""


def extract_heading_text(node: MarkdownNode) -> str:
    """Return the plain text of a heading node."""
    return "".join(extract_text(child) for child in node.children)


def extract_sections(root: MarkdownNode) -> list[Section]:
    """Group the root's block nodes by heading hierarchy.

    A section is closed each time a heading follows buffered content, and
    once more at the end of the document. Sections without content nodes are
    never emitted, so consecutive headings only shape the hierarchy.

    Args:
        root: Root node returned by ``parse_markdown``.

    Returns:
        Sections in document order.
    """
    sections: list[Section] = []
    stack = HeadingStack()
    current_nodes: list[MarkdownNode] = []

    for node in root.children:
        if node.type == "heading":
            if current_nodes:
                sections.append(Section(headings=stack.hierarchy(), nodes=current_nodes))
                current_nodes = []
            stack.push(node.depth or 1, extract_heading_text(node))
        else:
            current_nodes.append(node)

    if current_nodes:
        sections.append(Section(headings=stack.hierarchy(), nodes=current_nodes))

    return sections
