"""
Rewrite Obsidian-style wikilinks into HTML before markdown conversion.

`[[My Note]]` becomes `<a href="my-note.html">My Note</a>` and
`![[diagram.png]]` becomes `<img src="diagram.png">`. Everything else is
copied through untouched, so the result can be handed straight to the
markdown renderer (raw HTML passes through it).

The scanner never fails. An unterminated `[[` / `![[` swallows the rest of
the input into the pending link text and never closes, which leaves the
opener and everything after it in the output verbatim.
"""

from __future__ import annotations

from enum import Enum
from typing import List


class LinkMode(Enum):
    OUTSIDE = "outside"
    IN_LINK = "in_link"
    IN_ASSET = "in_asset"


def slugify(text: str) -> str:
    """Lower-case and turn spaces into hyphens. Nothing else is touched."""
    return text.lower().replace(" ", "-")


def link_markup(text: str) -> str:
    return f'<a href="{slugify(text)}.html">{text}</a>'


def asset_markup(text: str) -> str:
    return f'<img src="{text}">'


def rewrite_links(text: str) -> str:
    """Single left-to-right pass over `text`, replacing [[...]] and ![[...]] spans."""
    out: List[str] = []
    link_text: List[str] = []
    mode = LinkMode.OUTSIDE
    last_copied = 0

    for i, ch in enumerate(text):
        nxt = text[i + 1 : i + 2]
        if ch == "[" and nxt == "[":
            # an opener inside an open span is ignored
            if mode is LinkMode.OUTSIDE:
                out.append(text[last_copied:i])
                last_copied = i
                mode = LinkMode.IN_LINK
        elif ch == "!" and text[i + 1 : i + 3] == "[[":
            if mode is LinkMode.OUTSIDE:
                out.append(text[last_copied:i])
                last_copied = i
                mode = LinkMode.IN_ASSET
        elif ch == "]" and nxt == "]":
            if mode is not LinkMode.OUTSIDE:
                captured = "".join(link_text)
                if mode is LinkMode.IN_LINK:
                    out.append(link_markup(captured))
                else:
                    out.append(asset_markup(captured))
                link_text.clear()
                last_copied = i + 2
                mode = LinkMode.OUTSIDE
        elif mode is not LinkMode.OUTSIDE:
            if ch not in "[!":
                link_text.append(ch)

    out.append(text[last_copied:])
    return "".join(out)
