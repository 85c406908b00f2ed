"""
Tag, name and label tables of a loaded dictionary.

Three independent string <-> id namespaces, plus the label-set mapping (one
labels id can stand for several labels). Ids are stable for one loaded
dictionary and become meaningless after ``Morfeusz.set_dictionary``.

Lookups never raise for unknown input: an id outside the table resolves to
``""`` (``[]`` for ``labels``) and an unknown string resolves to ``-1``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ._bindings import borrow_string, take_string, take_string_array
from .types import INVALID_ID

if TYPE_CHECKING:
    from .engine import Morfeusz

__all__ = ["IdResolver"]

_C_INT_MIN = -(2**31)
_C_INT_MAX = 2**31 - 1


def _fits_c_int(value: int) -> bool:
    return isinstance(value, int) and _C_INT_MIN <= value <= _C_INT_MAX


class IdResolver:
    """
    Id tables of one Morfeusz instance.

    Obtained from ``Morfeusz.resolver``; keeps its engine alive.

    Example:
        >>> r = m.resolver
        >>> r.tag(r.tag_id("subst:sg:gen:m3"))
        'subst:sg:gen:m3'
        >>> r.tag_id("xyz")
        -1
    """

    __slots__ = ("_morf",)

    def __init__(self, morf: Morfeusz):
        self._morf = morf

    def __repr__(self) -> str:
        return f"IdResolver({self._morf!r})"

    def _resolve(self, func_name: str, item_id: int) -> str:
        if not _fits_c_int(item_id):
            return ""
        m = self._morf
        func = getattr(m._lib, func_name)
        return take_string(m._lib, func(m._handle, item_id), m._encoding)

    def _lookup(self, func_name: str, value: str) -> int:
        m = self._morf
        try:
            data = value.encode(m._encoding)
        except (AttributeError, UnicodeEncodeError):
            return INVALID_ID
        return getattr(m._lib, func_name)(m._handle, borrow_string(data))

    # =========================================================================
    # Tags
    # =========================================================================

    @property
    def tagset_id(self) -> str:
        """Tagset id, as given in the first line of the tagset file."""
        m = self._morf
        return take_string(m._lib, m._lib.morf_tagset_id(m._handle), m._encoding)

    def tag(self, tag_id: int) -> str:
        """Inflectional tag for an id, or "" when the id is invalid."""
        return self._resolve("morf_tag", tag_id)

    def tag_id(self, tag: str) -> int:
        """Id of an inflectional tag, or -1 when the tag is unknown."""
        return self._lookup("morf_tag_id", tag)

    @property
    def tags_count(self) -> int:
        m = self._morf
        return m._lib.morf_tags_count(m._handle)

    # =========================================================================
    # Names
    # =========================================================================

    def name(self, name_id: int) -> str:
        """Named-entity type for an id, or "" when the id is invalid."""
        return self._resolve("morf_name", name_id)

    def name_id(self, name: str) -> int:
        """Id of a named-entity type, or -1 when the name is unknown."""
        return self._lookup("morf_name_id", name)

    @property
    def names_count(self) -> int:
        m = self._morf
        return m._lib.morf_names_count(m._handle)

    # =========================================================================
    # Labels
    # =========================================================================

    def labels_as_string(self, labels_id: int) -> str:
        """String form of a label set, or "" when the id is invalid."""
        return self._resolve("morf_labels_as_string", labels_id)

    def labels(self, labels_id: int) -> list[str]:
        """Individual labels of a label set, or [] when the id is invalid."""
        if not _fits_c_int(labels_id):
            return []
        m = self._morf
        return take_string_array(m._lib, m._lib.morf_labels(m._handle, labels_id), m._encoding)

    def labels_id(self, labels: str) -> int:
        """Id of a label set given in string form, or -1 when unknown."""
        return self._lookup("morf_labels_id", labels)

    @property
    def labels_count(self) -> int:
        m = self._morf
        return m._lib.morf_labels_count(m._handle)
