"""
GitHub domain models for treepull.

This module contains strongly typed data classes and enums representing
the repository coordinate and the entries of a recursive tree listing.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class EntryType(Enum):
    """Git object types reported by the tree listing that we care about."""

    BLOB = "blob"       # A file
    TREE = "tree"       # A directory


@dataclass(frozen=True)
class RepositoryCoordinate:
    """Immutable owner/name/branch triple identifying what to list."""

    owner: str
    name: str
    branch: str = "master"

    @property
    def full_name(self) -> str:
        return f'{self.owner}/{self.name}'

    def __post_init__(self) -> None:
        if not self.owner or not self.name:
            raise ValueError("Repository owner and name are required")
        if not self.branch:
            raise ValueError("Branch is required")

    def __str__(self) -> str:
        return f'{self.full_name}@{self.branch}'


@dataclass(frozen=True)
class TreeEntry:
    """A single entry of a recursive tree listing."""

    path: str
    type: str  # 'blob', 'tree', 'commit'
    size: Optional[int] = None
    sha: Optional[str] = None

    @property
    def is_blob(self) -> bool:
        return self.type == EntryType.BLOB.value

    @property
    def is_tree(self) -> bool:
        return self.type == EntryType.TREE.value


__all__ = [
    "EntryType",
    "RepositoryCoordinate",
    "TreeEntry",
]
