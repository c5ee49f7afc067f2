from __future__ import annotations

import logging
from typing import Iterable

from .blocks import BLOCK_TRANSFORMERS, BlockTransformer, run_block_transformers
from .config import ConverterConfig
from .fenced import scan_fenced_code
from .formats import TEXT_TRANSFORMERS, TextTransformer
from .inline import DEFAULT_MAX_DEPTH, transform_inline
from .model import Document

logger = logging.getLogger(__name__)


def parse_markdown(text: str, config: ConverterConfig | None = None) -> Document:
    config = config or ConverterConfig()
    return convert(
        text,
        block_transformers=config.block_transformers,
        text_transformers=config.text_transformers,
        max_depth=config.max_depth,
    )


def convert(
    markdown: str,
    block_transformers: Iterable[BlockTransformer] = BLOCK_TRANSFORMERS,
    text_transformers: Iterable[TextTransformer] = TEXT_TRANSFORMERS,
    document: Document | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Document:
    """Rebuild ``document`` (or a new one) from ``markdown`` and return it.

    Existing blocks are discarded first. Each line is offered to the fenced
    code scanner, which may consume several lines; otherwise it goes through
    the block transformers and its remaining text through the inline
    transformers and link extraction. The cursor ends up after the last block.
    """
    block_transformers = tuple(block_transformers)
    text_transformers = tuple(text_transformers)
    if document is None:
        document = Document(blocks=[])
    document.clear()
    blocks = document.blocks

    lines = markdown.split("\n")
    logger.debug("Converting %d lines", len(lines))
    i = 0
    while i < len(lines):
        # Fenced code goes first, nothing inside it is processed further.
        code_block, end = scan_fenced_code(lines, i, blocks)
        if code_block is not None:
            i = end + 1
            continue
        container = run_block_transformers(blocks, lines[i], block_transformers)
        if container is not None:
            container.inline = transform_inline(container.inline, text_transformers, max_depth)
        i += 1

    document.cursor = document.end_position()
    return document
