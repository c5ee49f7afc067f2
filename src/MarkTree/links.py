from __future__ import annotations

import re
from typing import List

from .model import InlineElement, InlineLink, InlineText, split_run

LINK_PATTERN = re.compile(r"\[([^\[]+)\]\(([^(]+)\)")


def extract_links(run: InlineText) -> List[InlineElement]:
    """Replace every ``[text](url)`` span of ``run`` with an InlineLink.

    The link's text run keeps the formats of the run it was cut from. Runs
    formatted as code come back untouched.
    """
    if run.code:
        return [run]
    result: List[InlineElement] = []
    remainder: InlineText | None = run
    while remainder is not None:
        match = LINK_PATTERN.search(remainder.text)
        if match is None:
            result.append(remainder)
            break
        before, replaced, remainder = split_run(remainder, match.start(), match.end())
        if before is not None:
            result.append(before)
        result.append(InlineLink(url=match.group(2), inline=[replaced.with_text(match.group(1))]))
    return result
