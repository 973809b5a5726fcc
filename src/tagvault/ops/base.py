"""Shared error taxonomy and batch reporting for the vault operations."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path

from tagvault.vault.document import FrontmatterError


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class VaultOpError(Exception):
    """Base class for errors raised by retag, redir and rename."""


class TargetNotFoundError(VaultOpError):
    """The file or directory an operation was pointed at does not exist."""


class OutsideTagRootError(VaultOpError):
    """A document or directory lies outside the configured tag root."""


class CollisionError(VaultOpError):
    """The destination of a move or rename already exists."""


class MappingNotFoundError(VaultOpError):
    """No configured dir mapping covers the directory being renamed."""


class CrossTreeRenameError(VaultOpError):
    """The second half of a dual rename failed after the first succeeded.

    Attributes:
        rolled_back: True if the first rename was undone and both trees are
            back in their original state.
    """

    def __init__(self, message: str, *, rolled_back: bool) -> None:
        super().__init__(message)
        self.rolled_back = rolled_back


# Errors caught per document in a batch; anything else propagates.
ITEM_ERRORS: tuple[type[Exception], ...] = (VaultOpError, FrontmatterError, OSError, UnicodeDecodeError)


# ---------------------------------------------------------------------------
# Reporting
# ---------------------------------------------------------------------------


class ItemStatus(enum.Enum):
    CHANGED = "changed"
    SKIPPED = "skipped"
    ERROR = "error"


@dataclass
class ItemResult:
    path: Path
    status: ItemStatus
    detail: str = ""
    destination: Path | None = None


@dataclass
class BatchReport:
    """Outcome of a retag or redir run, one entry per document visited."""

    items: list[ItemResult] = field(default_factory=list)

    def add(self, result: ItemResult) -> ItemResult:
        self.items.append(result)
        return result

    def _count(self, status: ItemStatus) -> int:
        return sum(1 for r in self.items if r.status is status)

    @property
    def changed(self) -> int:
        return self._count(ItemStatus.CHANGED)

    @property
    def skipped(self) -> int:
        return self._count(ItemStatus.SKIPPED)

    @property
    def errored(self) -> int:
        return self._count(ItemStatus.ERROR)

    @property
    def errors(self) -> list[ItemResult]:
        return [r for r in self.items if r.status is ItemStatus.ERROR]
