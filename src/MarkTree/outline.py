from __future__ import annotations

from typing import Iterable, List

from .model import (
    Block,
    CodeBlock,
    Document,
    Heading,
    InlineElement,
    InlineLink,
    InlineText,
    ListBlock,
    ListItem,
)


def format_document(doc: Document) -> str:
    """Indented one-node-per-line view of a document tree."""
    lines: List[str] = []
    for block in doc.blocks:
        _format_block(block, 0, lines)
    return "\n".join(lines)


def _format_block(block: Block, depth: int, lines: List[str]) -> None:
    indent = "  " * depth
    if isinstance(block, Heading):
        lines.append(f"{indent}{block.kind} level={block.level}")
        _format_inline(block.inline, depth + 1, lines)
    elif isinstance(block, ListBlock):
        header = f"{indent}{block.kind} ordered={str(block.ordered).lower()}"
        if block.start is not None:
            header += f" start={block.start}"
        lines.append(header)
        for item in block.items:
            _format_item(item, depth + 1, lines)
    elif isinstance(block, CodeBlock):
        header = f"{indent}{block.kind}"
        if block.language:
            header += f" language={block.language}"
        lines.append(header)
        lines.append(f"{indent}  {block.code!r}")
    else:
        lines.append(f"{indent}{block.kind}")
        _format_inline(getattr(block, "inline", []), depth + 1, lines)


def _format_item(item: ListItem, depth: int, lines: List[str]) -> None:
    lines.append(f"{'  ' * depth}{item.kind} indent={item.indent}")
    _format_inline(item.inline, depth + 1, lines)


def _format_inline(inline: Iterable[InlineElement], depth: int, lines: List[str]) -> None:
    indent = "  " * depth
    for element in inline:
        if isinstance(element, InlineLink):
            lines.append(f"{indent}{element.kind} url={element.url}")
            _format_inline(element.inline, depth + 1, lines)
        elif isinstance(element, InlineText):
            flags = sorted(fmt.value for fmt in element.formats)
            suffix = f" [{', '.join(flags)}]" if flags else ""
            lines.append(f"{indent}{element.kind} {element.text!r}{suffix}")
