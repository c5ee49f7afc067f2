from dataclasses import fields

import pytest

from MarkTree import markdown_parser
from MarkTree.model import (
    CodeBlock,
    Cursor,
    Document,
    Heading,
    HorizontalRule,
    InlineLink,
    InlineText,
    ListBlock,
    Paragraph,
    Quote,
)


def test_parse_blocks_and_inline():
    md_text = "\n".join(
        [
            "# Введение",
            "Текст с *курсивом*, **жирным** и `кодом`.",
            "- Первый пункт",
            "- Второй пункт",
            "> Цитата",
            "```python",
            "print('**not bold**')",
            "```",
            "---",
        ]
    )
    document = markdown_parser.parse_markdown(md_text)
    assert isinstance(document.blocks[0], Heading)
    assert isinstance(document.blocks[1], Paragraph)
    assert any(isinstance(item, InlineText) and item.code for item in document.blocks[1].inline)
    assert isinstance(document.blocks[2], ListBlock) and len(document.blocks[2].items) == 2
    assert isinstance(document.blocks[3], Quote)
    assert isinstance(document.blocks[4], CodeBlock)
    assert document.blocks[4].code == "print('**not bold**')"
    assert isinstance(document.blocks[5], HorizontalRule)
    assert len(document.blocks) == 6


@pytest.mark.parametrize("level", range(1, 7))
def test_heading_level_follows_hash_count(level):
    document = markdown_parser.convert("#" * level + " Section title")
    [heading] = document.blocks
    assert isinstance(heading, Heading)
    assert heading.level == level
    assert heading.text == "Section title"


def test_seven_hashes_is_not_a_heading():
    document = markdown_parser.convert("####### too deep")
    assert isinstance(document.blocks[0], Paragraph)
    assert document.blocks[0].text == "####### too deep"


def test_bold_and_italic_runs():
    document = markdown_parser.convert("**bold** and *italic*")
    [paragraph] = document.blocks
    assert isinstance(paragraph, Paragraph)
    assert paragraph.inline == [
        InlineText("bold", bold=True),
        InlineText(" and "),
        InlineText("italic", italic=True),
    ]


def test_triple_star_is_bold_italic():
    document = markdown_parser.convert("***x***")
    assert document.blocks[0].inline == [InlineText("x", bold=True, italic=True)]


def test_fenced_code_block():
    document = markdown_parser.convert("```js\ncode\n```")
    [block] = document.blocks
    assert isinstance(block, CodeBlock)
    assert block.language == "js"
    assert block.code == "code"


def test_fenced_code_keeps_markup_literal():
    document = markdown_parser.convert("```\n**a** [b](c)\n_d_\n```")
    [block] = document.blocks
    assert block.language is None
    assert block.code == "**a** [b](c)\n_d_"


def test_closing_fence_does_not_need_language():
    document = markdown_parser.convert("intro\n```py\nx = 1\n```\noutro")
    assert [type(block) for block in document.blocks] == [Paragraph, CodeBlock, Paragraph]
    assert document.blocks[1].language == "py"
    assert document.blocks[2].text == "outro"


def test_unterminated_fence_is_plain_text():
    document = markdown_parser.convert("```js\nhello")
    assert not any(isinstance(block, CodeBlock) for block in document.blocks)
    assert len(document.blocks) == 2
    assert isinstance(document.blocks[0], Paragraph)
    assert "js" in document.blocks[0].text
    assert isinstance(document.blocks[1], Paragraph)
    assert document.blocks[1].text == "hello"


def test_single_line_code_form():
    document = markdown_parser.convert("```py print(*args)")
    [block] = document.blocks
    assert isinstance(block, CodeBlock)
    assert block.language == "py"
    assert block.code == "print(*args)"


def test_adjacent_unordered_items_merge():
    document = markdown_parser.convert("- a\n- b")
    [block] = document.blocks
    assert isinstance(block, ListBlock)
    assert not block.ordered
    assert [item.text for item in block.items] == ["a", "b"]


def test_adjacent_ordered_items_merge_with_start():
    document = markdown_parser.convert("1. a\n2. b")
    [block] = document.blocks
    assert block.ordered
    assert block.start == 1
    assert [item.text for item in block.items] == ["a", "b"]


def test_ordered_start_is_taken_from_first_item():
    document = markdown_parser.convert("3. c\n1. d")
    [block] = document.blocks
    assert block.start == 3
    assert len(block.items) == 2


def test_list_kinds_do_not_merge():
    document = markdown_parser.convert("- a\n1. b\n* c")
    assert [block.ordered for block in document.blocks] == [False, True, False]


def test_lists_separated_by_paragraph_do_not_merge():
    document = markdown_parser.convert("- a\nbreak\n- b")
    assert [type(block) for block in document.blocks] == [ListBlock, Paragraph, ListBlock]


@pytest.mark.parametrize("spaces", [0, 1, 3, 4, 7, 8, 12])
def test_list_item_indent(spaces):
    document = markdown_parser.convert(" " * spaces + "- item")
    [block] = document.blocks
    assert block.items[0].indent == spaces // 4
    assert block.items[0].text == "item"


def test_list_item_inline_formatting():
    document = markdown_parser.convert("+ **done** item")
    item = document.blocks[0].items[0]
    assert item.inline == [InlineText("done", bold=True), InlineText(" item")]


@pytest.mark.parametrize("line", ["---", "***", "___", "--- "])
def test_horizontal_rule(line):
    document = markdown_parser.convert(line)
    assert document.blocks == [HorizontalRule()]


def test_horizontal_rule_requires_bare_line():
    document = markdown_parser.convert("--- more")
    assert isinstance(document.blocks[0], Paragraph)


def test_quote_gets_inline_formatting():
    document = markdown_parser.convert("> hi **there**")
    [quote] = document.blocks
    assert isinstance(quote, Quote)
    assert quote.inline == [InlineText("hi "), InlineText("there", bold=True)]


def test_link_paragraph():
    document = markdown_parser.convert("[label](http://x)")
    [paragraph] = document.blocks
    [link] = paragraph.inline
    assert isinstance(link, InlineLink)
    assert link.url == "http://x"
    assert link.inline == [InlineText("label")]


def test_link_before_formatted_span_is_extracted():
    document = markdown_parser.convert("[a](u) **b**")
    inline = document.blocks[0].inline
    assert isinstance(inline[0], InlineLink) and inline[0].url == "u"
    assert inline[1:] == [InlineText(" "), InlineText("b", bold=True)]


def test_empty_input_gives_one_empty_paragraph():
    document = markdown_parser.convert("")
    assert document.blocks == [Paragraph(inline=[InlineText("")])]
    assert document.cursor == Cursor(block_index=0, offset=0)


def test_convert_replaces_existing_content():
    existing = Document(blocks=[Paragraph(inline=[InlineText("old")])])
    result = markdown_parser.convert("# new", document=existing)
    assert result is existing
    assert len(existing.blocks) == 1
    assert isinstance(existing.blocks[0], Heading)


def test_cursor_is_placed_at_end():
    document = markdown_parser.convert("first\nlast **line**")
    assert document.cursor == Cursor(block_index=1, offset=len("last line"))


def test_no_characters_lost_without_markup():
    text = "plain words, 2 * 3 * 4 and a_b stay as they are"
    document = markdown_parser.convert(text)
    assert document.blocks[0].text == text


def test_document_holds_only_blocks_and_cursor():
    assert [f.name for f in fields(Document)] == ["blocks", "cursor"]


def test_link_url_keeps_inner_closing_paren():
    [link] = markdown_parser.convert("[a](u) b)").blocks[0].inline
    assert link.url == "u) b"
