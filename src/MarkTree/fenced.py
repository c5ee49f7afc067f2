from __future__ import annotations

import logging
import re
from typing import List, Sequence

from .model import Block, CodeBlock

logger = logging.getLogger(__name__)

FENCE_PATTERN = re.compile(r"^```(\w{1,10})?\s?$")


def scan_fenced_code(lines: Sequence[str], start: int, blocks: List[Block]) -> tuple[CodeBlock | None, int]:
    """Emit a code block for a fence opened at ``lines[start]``.

    Returns the block and the index of the closing fence line. When the line is
    not a fence, or no closing fence follows it, nothing is emitted and
    ``start`` comes back unchanged so the line is processed as ordinary text.
    The closing fence does not have to repeat the language.
    """
    opening = FENCE_PATTERN.match(lines[start])
    if opening is None:
        return None, start
    for end in range(start + 1, len(lines)):
        if FENCE_PATTERN.match(lines[end]):
            code_block = CodeBlock(language=opening.group(1), code="\n".join(lines[start + 1 : end]))
            blocks.append(code_block)
            return code_block, end
    logger.debug("Unterminated code fence on line %d, treating it as text", start + 1)
    return None, start
