"""Tag model, scanner and caches."""

from tagvault.tags.cache import PrimaryTagIndex, TagCache
from tagvault.tags.path import TagPath
from tagvault.tags.scanner import ScanItem, classify, scan_vault
from tagvault.tags.tree import TagNode

__all__ = [
    "PrimaryTagIndex",
    "ScanItem",
    "TagCache",
    "TagNode",
    "TagPath",
    "classify",
    "scan_vault",
]
