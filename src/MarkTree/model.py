from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import ClassVar, List, Union

from .formats import TextFormat


@dataclass
class Block:
    """Base class for block-level nodes."""

    kind: ClassVar[str] = "block"


@dataclass
class Cursor:
    block_index: int
    offset: int


@dataclass
class Document:
    blocks: List[Block] = field(default_factory=list)
    cursor: Cursor | None = None

    def clear(self) -> None:
        self.blocks.clear()
        self.cursor = None

    def end_position(self) -> Cursor | None:
        """Position right after the content of the last block."""
        if not self.blocks:
            return None
        last = self.blocks[-1]
        return Cursor(block_index=len(self.blocks) - 1, offset=len(block_text(last)))


@dataclass
class InlineElement:
    """Base class for inline nodes."""

    kind: ClassVar[str] = "inline"


@dataclass
class InlineText(InlineElement):
    kind: ClassVar[str] = "text"

    text: str
    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    code: bool = False

    @property
    def formats(self) -> frozenset[TextFormat]:
        return frozenset(fmt for fmt in TextFormat if getattr(self, fmt.value))

    def has_format(self, fmt: TextFormat) -> bool:
        return getattr(self, TextFormat(fmt).value)

    def apply_format(self, fmt: TextFormat) -> None:
        # Setting a flag twice leaves it set.
        setattr(self, TextFormat(fmt).value, True)

    def with_text(self, text: str) -> "InlineText":
        return replace(self, text=text)


@dataclass
class InlineLink(InlineElement):
    kind: ClassVar[str] = "link"

    url: str
    inline: List[InlineText] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(child.text for child in self.inline)


InlineContainer = Union["Paragraph", "Heading", "Quote", "ListItem"]


def inline_text(inline: List[InlineElement]) -> str:
    return "".join(element.text for element in inline)  # type: ignore[attr-defined]


@dataclass
class Paragraph(Block):
    kind: ClassVar[str] = "paragraph"

    inline: List[InlineElement] = field(default_factory=list)

    @property
    def text(self) -> str:
        return inline_text(self.inline)


@dataclass
class Heading(Block):
    kind: ClassVar[str] = "heading"

    level: int
    inline: List[InlineElement] = field(default_factory=list)

    @property
    def text(self) -> str:
        return inline_text(self.inline)


@dataclass
class Quote(Block):
    kind: ClassVar[str] = "quote"

    inline: List[InlineElement] = field(default_factory=list)

    @property
    def text(self) -> str:
        return inline_text(self.inline)


@dataclass
class ListItem:
    kind: ClassVar[str] = "listitem"

    inline: List[InlineElement] = field(default_factory=list)
    indent: int = 0

    @property
    def text(self) -> str:
        return inline_text(self.inline)


@dataclass
class ListBlock(Block):
    kind: ClassVar[str] = "list"

    items: List[ListItem]
    ordered: bool
    start: int | None = None


@dataclass
class CodeBlock(Block):
    kind: ClassVar[str] = "code"

    language: str | None
    code: str

    @property
    def text(self) -> str:
        return self.code


@dataclass
class HorizontalRule(Block):
    """Horizontal rule / thematic break."""

    kind: ClassVar[str] = "horizontalrule"


def block_text(block: Block) -> str:
    if isinstance(block, ListBlock):
        return block.items[-1].text if block.items else ""
    if isinstance(block, HorizontalRule):
        return ""
    return block.text  # type: ignore[attr-defined]


def split_run(
    run: InlineText, start: int, end: int
) -> tuple[InlineText | None, InlineText, InlineText | None]:
    """Split ``run`` around ``run.text[start:end]`` into new runs with the same formats.

    Empty parts on either side come back as ``None``.
    """
    length = len(run.text)
    if not 0 <= start < end <= length:
        raise IndexError(f"Invalid split offsets {start}:{end} for text of length {length}")
    before = run.with_text(run.text[:start]) if start > 0 else None
    after = run.with_text(run.text[end:]) if end < length else None
    return before, run.with_text(run.text[start:end]), after
