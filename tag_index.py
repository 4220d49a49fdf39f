"""Group notes by the tags declared in their frontmatter."""

from __future__ import annotations

from typing import Dict, Iterable, List

from note_tree import Note

TagIndex = Dict[str, List[Note]]


def record_tag(tags: TagIndex, tag: str, note: Note) -> None:
    # no dedup: a tag declared twice lists the note twice
    tags.setdefault(tag, []).append(note)


def record_note_tags(tags: TagIndex, note: Note, declared: Iterable[str]) -> None:
    for tag in declared:
        record_tag(tags, tag, note)
