"""Frontmatter document reader/writer.

A document is ``---\\n<yaml>\\n---\\n<body>``. Text that does not start with a
``---`` line is all body with empty metadata. Metadata is read with
yaml.safe_load(). On render, the original frontmatter text is written back
verbatim while the metadata is unchanged; only edited metadata is re-dumped
with yaml.safe_dump(), keeping key order.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

_DELIMITER = "---"


class FrontmatterError(ValueError):
    """Raised when a document's frontmatter block is not a valid YAML mapping."""


@dataclass
class Document:
    metadata: dict[str, Any] = field(default_factory=dict)
    body: str = ""
    had_frontmatter: bool = False
    raw: str | None = None  # frontmatter text between the delimiters, as read
    _original: dict[str, Any] | None = field(default=None, init=False, repr=False, compare=False)

    @classmethod
    def parse(cls, text: str) -> Document:
        """Split *text* into metadata and body.

        Raises:
            FrontmatterError: If the frontmatter block is not a YAML mapping.
        """
        raw, body = split_frontmatter(text)
        if raw is None:
            return cls(metadata={}, body=text, had_frontmatter=False)
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise FrontmatterError(f"Invalid YAML frontmatter: {exc}") from exc
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise FrontmatterError(
                f"Frontmatter must be a mapping, got {type(data).__name__}"
            )
        doc = cls(metadata=data, body=body, had_frontmatter=True, raw=raw)
        doc._original = copy.deepcopy(data)
        return doc

    @classmethod
    def read(cls, path: Path) -> Document:
        return cls.parse(path.read_text(encoding="utf-8"))

    @property
    def metadata_changed(self) -> bool:
        return self.raw is None or self.metadata != self._original

    def render(self) -> str:
        """Serialise back to text; metadata-less documents stay frontmatter-less.

        Untouched frontmatter keeps its original text (comments, quoting,
        timestamps) byte for byte.
        """
        if not self.metadata and not self.had_frontmatter:
            return self.body
        if not self.metadata_changed:
            return f"{_DELIMITER}\n{self.raw}{_DELIMITER}\n{self.body}"
        dumped = ""
        if self.metadata:
            dumped = yaml.safe_dump(
                self.metadata,
                sort_keys=False,
                allow_unicode=True,
                default_flow_style=False,
            )
        return f"{_DELIMITER}\n{dumped}{_DELIMITER}\n{self.body}"

    def append_alias(self, alias: str) -> None:
        """Append *alias* to the ``aliases`` list, keeping existing entries."""
        current = self.metadata.get("aliases")
        if isinstance(current, list):
            aliases = list(current)
        elif current is None or current == "":
            aliases = []
        else:
            aliases = [current]
        aliases.append(alias)
        self.metadata["aliases"] = aliases


def split_frontmatter(text: str) -> tuple[str | None, str]:
    """Return ``(raw_yaml, body)``; ``raw_yaml`` is None when there is no block.

    The opening delimiter must be the first line; the block ends at the next
    line that is exactly ``---``. An unterminated block counts as no block.
    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip("\r\n") != _DELIMITER:
        return None, text
    for i in range(1, len(lines)):
        if lines[i].rstrip("\r\n").rstrip() == _DELIMITER:
            return "".join(lines[1:i]), "".join(lines[i + 1 :])
    return None, text
