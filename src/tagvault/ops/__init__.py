"""Vault operations — retag, redir and cross-tree rename."""

from tagvault.ops.base import (
    BatchReport,
    CollisionError,
    CrossTreeRenameError,
    ItemResult,
    ItemStatus,
    MappingNotFoundError,
    OutsideTagRootError,
    TargetNotFoundError,
    VaultOpError,
)
from tagvault.ops.mapping import DirMappingIndex

__all__ = [
    "BatchReport",
    "CollisionError",
    "CrossTreeRenameError",
    "DirMappingIndex",
    "ItemResult",
    "ItemStatus",
    "MappingNotFoundError",
    "OutsideTagRootError",
    "TargetNotFoundError",
    "VaultOpError",
]
