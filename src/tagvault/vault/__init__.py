"""Vault file access — document format, directory walking, writes and backups."""

from tagvault.vault.document import Document, FrontmatterError
from tagvault.vault.walker import VaultWalker
from tagvault.vault.writer import create_backup, write_text_atomic

__all__ = [
    "Document",
    "FrontmatterError",
    "VaultWalker",
    "create_backup",
    "write_text_atomic",
]
