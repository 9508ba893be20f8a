"""Render parsed markdown nodes back to markdown text.

Each supported block kind has its own formatter. Unsupported kinds (and
headings, which chunks carry as a separate prefix) render as an empty string
and are dropped by ``serialize_nodes``.
"""

from mdchunk.chunking.markdown_ast import MarkdownNode

BLOCK_SEPARATOR = "\n\n"
LIST_INDENT = "  "


def serialize_node(node: MarkdownNode) -> str:
    """Serialize a single block node.

    Args:
        node: Block-level node.

    Returns:
        Markdown text, or an empty string for unsupported node kinds.
    """
    if node.type == "paragraph":
        return serialize_phrasing(node.children)
    if node.type == "code":
        return serialize_code(node)
    if node.type == "list":
        return serialize_list(node)
    if node.type == "table":
        return serialize_table(node)
    if node.type == "blockquote":
        return serialize_blockquote(node)
    if node.type == "thematicBreak":
        return "---"
    if node.type == "html":
        return node.value or ""
    return ""


def serialize_nodes(nodes: list[MarkdownNode]) -> str:
    """Serialize block nodes separated by blank lines, skipping empty output."""
    parts = [serialize_node(node) for node in nodes]
    return BLOCK_SEPARATOR.join(part for part in parts if part)


def serialize_phrasing(children: list[MarkdownNode]) -> str:
    """Serialize inline content with its formatting markers."""
    parts: list[str] = []
    for child in children:
        if child.type == "text":
            parts.append(child.value or "")
        elif child.type == "emphasis":
            parts.append(f"*{serialize_phrasing(child.children)}*")
        elif child.type == "strong":
            parts.append(f"**{serialize_phrasing(child.children)}**")
        elif child.type == "delete":
            parts.append(f"~~{serialize_phrasing(child.children)}~~")
        elif child.type == "inlineCode":
            parts.append(f"`{child.value or ''}`")
        elif child.type == "link":
            parts.append(f"[{serialize_phrasing(child.children)}]({child.url or ''})")
        elif child.type == "image":
            parts.append(f"![{child.alt or ''}]({child.url or ''})")
        elif child.type == "break":
            parts.append("\n")
    return "".join(parts)


def serialize_code(node: MarkdownNode) -> str:
    """Serialize a code block as a fenced block with its language tag."""
    return f"```{node.lang or ''}\n{node.value or ''}\n```"


def serialize_list(node: MarkdownNode) -> str:
    """Serialize a list; nested lists are indented two spaces per level.

    Other block children of an item (code, blockquotes, html) are indented to
    the item's content column so they stay inside the item.
    """
    lines: list[str] = []
    start = node.start if node.start is not None else 1
    for index, item in enumerate(node.children):
        prefix = f"{start + index}. " if node.ordered else "- "
        parts: list[str] = []
        for child in item.children:
            if child.type == "paragraph":
                parts.append(serialize_phrasing(child.children))
            elif child.type == "list":
                parts.append(_indent(serialize_list(child), LIST_INDENT))
            else:
                block = serialize_node(child)
                if not block:
                    continue
                # The first block sits on the marker line
                indented = _indent(block, " " * len(prefix))
                parts.append(indented if parts else indented.lstrip(" "))
        content = "\n".join(part for part in parts if part)
        lines.append(prefix + content)
    return "\n".join(lines)


def _indent(text: str, indent: str) -> str:
    return "\n".join(indent + line if line else line for line in text.split("\n"))


def serialize_table(node: MarkdownNode) -> str:
    """Serialize a table as a GFM pipe table with a header separator row."""
    rows = [
        "| " + " | ".join(serialize_phrasing(cell.children) for cell in row.children) + " |"
        for row in node.children
    ]
    if not rows:
        return ""

    separator = "|" + "|".join("---" for _ in node.children[0].children) + "|"
    return "\n".join([rows[0], separator, *rows[1:]])


def serialize_blockquote(node: MarkdownNode) -> str:
    """Serialize a blockquote, prefixing every line with ``> ``.

    Child blocks are separated by a bare ``>`` line so that consecutive
    paragraphs stay separate paragraphs inside the quote.
    """
    quoted: list[str] = []
    for child in node.children:
        content = serialize_node(child)
        if content:
            quoted.append("\n".join(f"> {line}" for line in content.split("\n")))
    return "\n>\n".join(quoted)
