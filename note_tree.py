"""Notes and the folder tree that drives the site index."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path, PurePath
from typing import Iterable, List, Sequence, Union


# -- data structures --
@dataclass(frozen=True)
class Note:
    """One emitted page: its title and where its HTML file lives."""

    title: str
    output_path: Path

    @property
    def href(self) -> str:
        return PurePath(self.output_path).as_posix()


class TreeNode:
    """A folder in the index tree with its subfolders and the notes directly inside it."""

    def __init__(self, label: str):
        self.label = label
        self.children: List["TreeNode"] = []
        self.notes: List[Note] = []

    def child(self, label: str) -> "TreeNode":
        """Return the child folder called `label`, creating it on first sight."""
        for node in self.children:
            if node.label == label:
                return node
        node = TreeNode(label)
        self.children.append(node)
        return node

    def __repr__(self) -> str:
        return f"TreeNode({self.label!r}, children={len(self.children)}, notes={len(self.notes)})"


def relative_to_root(path: Union[str, Path], output_root: Path) -> Path:
    """Path of `path` below `output_root`; paths already relative are returned unchanged."""
    path = Path(path)
    try:
        return path.relative_to(output_root)
    except ValueError:
        return path


def folder_chain(path: Path) -> Sequence[str]:
    """Folders from just under the root down to the file's parent."""
    return path.parts[:-1]


def find_or_create_node(parts: Sequence[str], node: TreeNode) -> TreeNode:
    if not parts:
        return node
    return find_or_create_node(parts[1:], node.child(parts[0]))


def build_note_tree(notes: Iterable[Note], output_root: Path) -> TreeNode:
    """Group notes into nested folders following their output paths.

    Folders and notes keep the order in which they were first seen, so the
    same input always yields the same tree.
    """
    output_root = Path(output_root)
    root = TreeNode(output_root.name)
    for note in notes:
        rel = relative_to_root(note.output_path, output_root)
        node = find_or_create_node(folder_chain(rel), root)
        node.notes.append(replace(note, output_path=rel))
    return root
