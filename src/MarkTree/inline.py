from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Iterable, List, Sequence

from .formats import TEXT_TRANSFORMERS, TextFormat, TextTransformer, transformers_by_tag
from .links import extract_links
from .model import InlineElement, InlineText, split_run

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 32

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "build_pattern",
    "split_run",
    "transform_inline",
    "transform_text",
]


def build_pattern(table: Iterable[TextTransformer]) -> re.Pattern[str] | None:
    return _pattern_for(tuple(table))


@lru_cache(maxsize=32)
def _pattern_for(table: tuple[TextTransformer, ...]) -> re.Pattern[str] | None:
    if not table:
        return None
    tags = "|".join(re.escape(transformer.tag) for transformer in table)
    return re.compile(rf"({tags})(?!\s)(.+?)(?<!\s)\1")


def transform_text(
    run: InlineText,
    table: Iterable[TextTransformer] = TEXT_TRANSFORMERS,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> List[InlineElement]:
    table = tuple(table)
    pattern = build_pattern(table)
    formats_by_tag = transformers_by_tag(table)

    output: List[InlineElement] = []
    # Top of the stack is always the leftmost run not yet emitted.
    pending: list[tuple[InlineText, int]] = [(run, 0)]
    while pending:
        current, depth = pending.pop()
        if current.code:
            output.append(current)
            continue
        if depth >= max_depth:
            logger.debug("Nesting cap %d reached, keeping %r literally", max_depth, current.text)
            output.extend(extract_links(current))
            continue
        match = pattern.search(current.text) if pattern is not None else None
        if match is None:
            output.extend(extract_links(current))
            continue

        before = after = None
        if match.group(0) == current.text:
            matched = current
        else:
            before, matched, after = split_run(current, match.start(), match.end())
        matched.text = match.group(2)
        for fmt in formats_by_tag.get(match.group(1), ()):
            matched.apply_format(fmt)

        if before is not None:
            output.extend(extract_links(before))
        if after is not None:
            pending.append((after, depth))
        if matched.has_format(TextFormat.CODE):
            output.append(matched)
        else:
            pending.append((matched, depth + 1))
    return output


def transform_inline(
    inline: Sequence[InlineElement],
    table: Iterable[TextTransformer] = TEXT_TRANSFORMERS,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> List[InlineElement]:
    table = tuple(table)
    result: List[InlineElement] = []
    for element in inline:
        if isinstance(element, InlineText):
            result.extend(transform_text(element, table, max_depth))
        else:
            result.append(element)
    return result
