"""Ordered list of directories searched when a dictionary is loaded."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from typing import TYPE_CHECKING

from ._bindings import borrow_string, take_string_array

if TYPE_CHECKING:
    from .engine import Morfeusz

__all__ = ["DictionarySearchPaths"]


class DictionarySearchPaths:
    """
    Live view of an engine's dictionary search paths.

    The list lives in the native engine; every read returns a fresh snapshot.
    Duplicates are allowed. After ``Morfeusz.clone()`` each engine has its
    own copy of the list.

    Example:
        >>> paths = m.search_paths
        >>> paths.prepend("/opt/dicts")
        >>> paths.remove("/opt/dicts")
        1
    """

    __slots__ = ("_morf",)

    def __init__(self, morf: Morfeusz):
        self._morf = morf

    def to_list(self) -> list[str]:
        """Snapshot of the paths, first searched first."""
        m = self._morf
        arr = m._lib.morf_search_paths(m._handle)
        # File system names, not text in the engine charset
        return take_string_array(
            m._lib, arr, sys.getfilesystemencoding(), sys.getfilesystemencodeerrors()
        )

    def prepend(self, path: str | os.PathLike[str]) -> None:
        """Insert ``path`` at the front of the list."""
        m = self._morf
        m._lib.morf_search_paths_prepend(m._handle, borrow_string(os.fsencode(path)))

    def append(self, path: str | os.PathLike[str]) -> None:
        """Add ``path`` at the end of the list."""
        m = self._morf
        m._lib.morf_search_paths_append(m._handle, borrow_string(os.fsencode(path)))

    def remove(self, path: str | os.PathLike[str]) -> int:
        """Remove every element equal to ``path``; return how many were removed."""
        m = self._morf
        return m._lib.morf_search_paths_remove(m._handle, borrow_string(os.fsencode(path)))

    def clear(self) -> None:
        m = self._morf
        m._lib.morf_search_paths_clear(m._handle)

    def __iter__(self) -> Iterator[str]:
        return iter(self.to_list())

    def __len__(self) -> int:
        return len(self.to_list())

    def __contains__(self, path: object) -> bool:
        return path in self.to_list()

    def __repr__(self) -> str:
        return f"DictionarySearchPaths({self.to_list()!r})"
