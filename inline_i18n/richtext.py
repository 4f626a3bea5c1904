"""Bracket-tag parsing for rich text translations (``Read <link>terms</link>``)."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RichTextSegment:
    type: str
    content: str
    component_name: str | None = None


def parse_rich_text(template: str, component_names: Sequence[str]) -> list[RichTextSegment]:
    """
    Split a rendered string into text and component segments.

    Only tags named in ``component_names`` are recognised; tags do not nest.

    >>> parse_rich_text("Read <link>terms</link>", ["link"])[1]
    RichTextSegment(type='component', content='terms', component_name='link')
    """
    if not component_names:
        return [RichTextSegment("text", template)]

    names = "|".join(re.escape(name) for name in component_names)
    pattern = re.compile(rf"<({names})>(.*?)</\1>", re.DOTALL)

    segments: list[RichTextSegment] = []
    last_index = 0
    for match in pattern.finditer(template):
        if match.start() > last_index:
            segments.append(RichTextSegment("text", template[last_index:match.start()]))
        segments.append(RichTextSegment("component", match.group(2), match.group(1)))
        last_index = match.end()

    if last_index < len(template):
        segments.append(RichTextSegment("text", template[last_index:]))
    return segments


__all__ = ["RichTextSegment", "parse_rich_text"]
