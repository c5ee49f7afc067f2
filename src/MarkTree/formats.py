from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Iterable, Mapping


class TextFormat(str, Enum):
    BOLD = "bold"
    ITALIC = "italic"
    STRIKETHROUGH = "strikethrough"
    CODE = "code"


@dataclass(frozen=True)
class TextTransformer:
    """Delimiter tag and the formats a span wrapped in it receives."""

    tag: str
    formats: tuple[TextFormat, ...]

    @classmethod
    def of(cls, tag: str, formats: Iterable[str | TextFormat]) -> "TextTransformer":
        if not tag:
            raise ValueError("Text transformer tag must not be empty.")
        return cls(tag=tag, formats=tuple(TextFormat(fmt) for fmt in formats))


# Code goes first since nothing inside it is transformed further, then
# longer tags ahead of their single-character prefixes.
TEXT_TRANSFORMERS: tuple[TextTransformer, ...] = (
    TextTransformer("`", (TextFormat.CODE,)),
    TextTransformer("***", (TextFormat.BOLD, TextFormat.ITALIC)),
    TextTransformer("___", (TextFormat.BOLD, TextFormat.ITALIC)),
    TextTransformer("**", (TextFormat.BOLD,)),
    TextTransformer("__", (TextFormat.BOLD,)),
    TextTransformer("~~", (TextFormat.STRIKETHROUGH,)),
    TextTransformer("*", (TextFormat.ITALIC,)),
    TextTransformer("_", (TextFormat.ITALIC,)),
)


def transformers_by_tag(table: Iterable[TextTransformer]) -> Mapping[str, tuple[TextFormat, ...]]:
    """Tag lookup for a transformer table; the first entry wins on duplicate tags."""
    return _lookup_for(tuple(table))


@lru_cache(maxsize=32)
def _lookup_for(table: tuple[TextTransformer, ...]) -> Mapping[str, tuple[TextFormat, ...]]:
    lookup: dict[str, tuple[TextFormat, ...]] = {}
    for transformer in table:
        lookup.setdefault(transformer.tag, transformer.formats)
    return lookup
