from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Mapping, Optional, Sequence

from .model import (
    Block,
    CodeBlock,
    Heading,
    HorizontalRule,
    InlineContainer,
    InlineText,
    ListBlock,
    ListItem,
    Paragraph,
    Quote,
)

BlockBuilder = Callable[[List[Block], InlineText, "re.Match[str]"], Optional[InlineContainer]]


@dataclass(frozen=True)
class BlockTransformer:
    name: str
    pattern: re.Pattern[str]
    builder: BlockBuilder


def _replace_placeholder(blocks: List[Block], block: Block) -> None:
    blocks[-1] = block


def build_paragraph(blocks: List[Block], run: InlineText, match: re.Match[str]) -> InlineContainer:
    return blocks[-1]  # type: ignore[return-value]


def build_heading(blocks: List[Block], run: InlineText, match: re.Match[str]) -> InlineContainer:
    level = len(match.group(1) or "") if match.re.groups else 1
    heading = Heading(level=min(max(level, 1), 6), inline=[run])
    _replace_placeholder(blocks, heading)
    return heading


def build_quote(blocks: List[Block], run: InlineText, match: re.Match[str]) -> InlineContainer:
    quote = Quote(inline=[run])
    _replace_placeholder(blocks, quote)
    return quote


def build_code(blocks: List[Block], run: InlineText, match: re.Match[str]) -> None:
    language = match.group(1) if match.re.groups else None
    _replace_placeholder(blocks, CodeBlock(language=language or None, code=run.text))
    return None


def build_horizontal_rule(blocks: List[Block], run: InlineText, match: re.Match[str]) -> None:
    _replace_placeholder(blocks, HorizontalRule())
    return None


def _list_builder(ordered: bool) -> BlockBuilder:
    def build_list(blocks: List[Block], run: InlineText, match: re.Match[str]) -> InlineContainer:
        leading = (match.group(1) or "") if match.re.groups else ""
        item = ListItem(inline=[run], indent=len(leading) // 4)
        previous = blocks[-2] if len(blocks) > 1 else None
        if isinstance(previous, ListBlock) and previous.ordered == ordered:
            previous.items.append(item)
            blocks.pop()
        else:
            start = None
            number = match.group(2) if ordered and match.re.groups >= 2 else None
            if number and number.isdecimal():
                start = int(number)
            _replace_placeholder(blocks, ListBlock(items=[item], ordered=ordered, start=start))
        return item

    build_list.__name__ = "build_ordered_list" if ordered else "build_unordered_list"
    return build_list


build_unordered_list = _list_builder(ordered=False)
build_ordered_list = _list_builder(ordered=True)


HEADING = BlockTransformer("heading", re.compile(r"^(#{1,6})\s"), build_heading)
QUOTE = BlockTransformer("quote", re.compile(r"^>\s"), build_quote)
CODE = BlockTransformer("code", re.compile(r"^```(\w{1,10})?\s"), build_code)
UNORDERED_LIST = BlockTransformer("unordered_list", re.compile(r"^(\s*)[-*+]\s"), build_unordered_list)
ORDERED_LIST = BlockTransformer("ordered_list", re.compile(r"^(\s*)(\d+)\.\s"), build_ordered_list)
# Trailing space is optional for a rule, nothing else may follow it.
HR = BlockTransformer("horizontal_rule", re.compile(r"^(---|\*\*\*|___)\s?$"), build_horizontal_rule)

BLOCK_TRANSFORMERS: tuple[BlockTransformer, ...] = (
    HEADING,
    QUOTE,
    CODE,
    UNORDERED_LIST,
    ORDERED_LIST,
    HR,
)

BUILTIN_TRANSFORMERS: Mapping[str, BlockTransformer] = {
    transformer.name: transformer for transformer in BLOCK_TRANSFORMERS
}

BUILDERS: Mapping[str, BlockBuilder] = {
    "paragraph": build_paragraph,
    "heading": build_heading,
    "quote": build_quote,
    "code": build_code,
    "unordered_list": build_unordered_list,
    "ordered_list": build_ordered_list,
    "horizontal_rule": build_horizontal_rule,
}


def run_block_transformers(
    blocks: List[Block],
    line: str,
    transformers: Sequence[BlockTransformer] = BLOCK_TRANSFORMERS,
) -> InlineContainer | None:
    """Append ``line`` to ``blocks`` and return the node whose inline content needs scanning.

    ``None`` means the line became a block that is never inline-scanned.
    """
    run = InlineText(line)
    paragraph = Paragraph(inline=[run])
    blocks.append(paragraph)
    for transformer in transformers:
        match = transformer.pattern.match(line)
        if match:
            run.text = line[match.end():]
            return transformer.builder(blocks, run, match)
    return paragraph
