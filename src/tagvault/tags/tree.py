"""Prefix tree of tag segments, used for cached tag navigation."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from tagvault.tags.path import TagPath

ROOT_NAME = "root"


@dataclass
class TagNode:
    """One node per tag segment; the root node stands for the empty prefix.

    Children are keyed by segment name and always iterated in lexicographic
    order, so display and serialisation are stable regardless of insert order.
    """

    name: str = ROOT_NAME
    children: dict[str, TagNode] = field(default_factory=dict)

    @classmethod
    def build(cls, tags: Iterable[TagPath]) -> TagNode:
        root = cls()
        for tag in tags:
            root.insert(tag)
        return root

    def insert(self, tag: TagPath) -> None:
        node = self
        for segment in tag.segments:
            child = node.children.get(segment)
            if child is None:
                child = TagNode(name=segment)
                node.children[segment] = child
            node = child

    def child(self, name: str) -> TagNode | None:
        return self.children.get(name)

    def find(self, tag: TagPath) -> TagNode | None:
        node: TagNode | None = self
        for segment in tag.segments:
            if node is None:
                return None
            node = node.child(segment)
        return node

    def children_names(self) -> list[str]:
        return sorted(self.children)

    def sorted_children(self) -> list[TagNode]:
        return [self.children[name] for name in self.children_names()]

    def iter_paths(self, prefix: tuple[str, ...] = ()) -> Iterator[TagPath]:
        """Yield the tag for every node below this one, depth-first, sorted."""
        for child in self.sorted_children():
            segments = prefix + (child.name,)
            yield TagPath(segments)
            yield from child.iter_paths(segments)

    def count(self) -> int:
        """Number of nodes below this one."""
        return sum(1 + c.count() for c in self.children.values())

    def is_empty(self) -> bool:
        return not self.children

    # ------------------------------------------------------------------
    # JSON shape: {"name": ..., "children": {name: {...}}}
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "children": {c.name: c.to_dict() for c in self.sorted_children()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TagNode:
        """Rebuild a tree from ``to_dict`` output.

        Raises:
            ValueError: If *data* does not have the expected shape.
        """
        if not isinstance(data, dict) or not isinstance(data.get("children", {}), dict):
            raise ValueError("Malformed tag tree node")
        node = cls(name=str(data.get("name", ROOT_NAME)))
        for key, child in data.get("children", {}).items():
            sub = cls.from_dict(child)
            sub.name = str(key)
            node.children[sub.name] = sub
        return node
