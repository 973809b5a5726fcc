"""Tag scanner — primary and secondary tag extraction.

Primary tag: the first significant line of the body is a marker
``{ #tag/path }``. At most one per document; it decides the location.

Secondary tags, in first-seen order and deduplicated by slash string:
  1. frontmatter tags under the first present key of ``tags``, ``tag``,
     ``Tags``, ``Tag`` — each list element is one independent tag;
  2. inline ``#segment[/segment...]`` markers outside fenced code blocks;
  3. the primary tag, if any.

Scanning never raises on bad input: a document whose frontmatter cannot be
parsed yields no tags and a UserWarning naming the file.
"""

from __future__ import annotations

import re
import warnings
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from tagvault.tags.path import TagPath, dedupe
from tagvault.vault.document import Document, FrontmatterError
from tagvault.vault.walker import VaultWalker

# First significant body line: "{ #tag/path }"
_PRIMARY_RE = re.compile(r"^\{\s*#([^}\s][^}]*?)\s*\}")

# Inline "#tag" or "#parent/child"; segment chars are ASCII alnum, "_" and "-"
_INLINE_TAG_RE = re.compile(r"(?<!\w)#([A-Za-z0-9_\-/]+)")

_FENCES = ("```", "~~~")

FRONTMATTER_TAG_KEYS: tuple[str, ...] = ("tags", "tag", "Tags", "Tag")


@dataclass(frozen=True)
class ScanItem:
    path: Path
    primary_tag: TagPath | None = None
    secondary_tags: tuple[TagPath, ...] = field(default_factory=tuple)


# ------------------------------------------------------------------
# Primary tag marker
# ------------------------------------------------------------------


def format_primary_marker(tag: TagPath) -> str:
    return f"{{ #{tag} }}"


def _first_significant_line(lines: list[str]) -> int | None:
    for i, line in enumerate(lines):
        if line.strip():
            return i
    return None


def extract_primary_tag(body: str) -> TagPath | None:
    """Return the tag of the ``{ #... }`` marker opening *body*, if any."""
    lines = body.split("\n")
    idx = _first_significant_line(lines)
    if idx is None:
        return None
    match = _PRIMARY_RE.match(lines[idx].strip())
    if not match:
        return None
    return TagPath.maybe(match.group(1))


def replace_primary_tag(body: str, tag: TagPath) -> str:
    """Rewrite the primary marker in *body*, inserting one at the top if absent."""
    marker = format_primary_marker(tag)
    lines = body.split("\n")
    idx = _first_significant_line(lines)
    if idx is not None and _PRIMARY_RE.match(lines[idx].strip()):
        # Only the marker span; text after it on the same line stays
        lines[idx] = _PRIMARY_RE.sub(lambda _: marker, lines[idx].lstrip(), count=1)
        return "\n".join(lines)
    rest = body.lstrip("\r\n")
    return f"{marker}\n\n{rest}" if rest else f"{marker}\n"


# ------------------------------------------------------------------
# Secondary tags
# ------------------------------------------------------------------


def frontmatter_tags(metadata: dict[str, Any]) -> list[TagPath]:
    """Tags declared under the first present tag key.

    A list value gives one tag per element; a plain string is a single tag.
    Non-string elements are ignored.
    """
    for key in FRONTMATTER_TAG_KEYS:
        if key not in metadata:
            continue
        value = metadata[key]
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, list):
            continue
        tags: list[TagPath] = []
        for element in value:
            if isinstance(element, str) and (tag := TagPath.maybe(element)):
                tags.append(tag)
        return tags
    return []


def body_tags(body: str) -> list[TagPath]:
    """Inline ``#tag`` markers, skipping fenced code blocks."""
    tags: list[TagPath] = []
    in_fence = False
    for line in body.split("\n"):
        if line.lstrip().startswith(_FENCES):
            in_fence = not in_fence
            continue
        if in_fence:
            continue
        for match in _INLINE_TAG_RE.finditer(line):
            if tag := TagPath.maybe(match.group(1)):
                tags.append(tag)
    return tags


# ------------------------------------------------------------------
# Per-document classification
# ------------------------------------------------------------------


def classify(text: str, source: Path | str = "<text>") -> tuple[TagPath | None, list[TagPath]]:
    """Return ``(primary_tag, secondary_tags)`` for a document's raw text."""
    try:
        doc = Document.parse(text)
    except FrontmatterError as exc:
        warnings.warn(f"{source}: {exc} — no tags read", UserWarning, stacklevel=2)
        return None, []

    primary = extract_primary_tag(doc.body)
    secondary = frontmatter_tags(doc.metadata) + body_tags(doc.body)
    if primary is not None:
        secondary.append(primary)
    return primary, dedupe(secondary)


def scan_document(path: Path, text: str) -> ScanItem:
    primary, secondary = classify(text, source=path)
    return ScanItem(path=path, primary_tag=primary, secondary_tags=tuple(secondary))


def scan_vault(vault: Path, templates_path: Path | None = None) -> list[ScanItem]:
    """Classify every document under *vault* (hidden dirs and templates excluded)."""
    walker = VaultWalker(vault, templates_path=templates_path)
    return [scan_document(path, text) for path, text in walker.walk()]


def documents_with_tag(items: Iterable[ScanItem], tag: TagPath) -> list[ScanItem]:
    """Items carrying *tag* or any of its descendants among their secondary tags."""
    return [
        item
        for item in items
        if any(t.starts_with(tag) for t in item.secondary_tags)
    ]
