"""TokenInfo - one morphological interpretation of one input span."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .types import IGN_TAG_ID, WHITESPACE_TAG_ID

if TYPE_CHECKING:
    from .engine import Morfeusz

__all__ = ["TokenInfo"]


@dataclass(frozen=True, slots=True)
class TokenInfo:
    """
    Interpretation of a token, copied out of native memory.

    Instances own nothing native: the orth and lemma buffers are released
    as soon as the record is read, so a TokenInfo can be kept for as long
    as needed. The three ids are only meaningful for the engine (and
    dictionary) that produced the record.

    Attributes
    ----------
    orth : str
        Spelling of the token as it appears in the input.
    lemma : str
        Lemma, possibly with a homonym qualifier (e.g. ``"bez:S"``).
    start_node, end_node : int
        Node range in the analysis graph. Competing segmentations of the
        same span share a node range.
    tag_id, name_id, labels_id : int
        Ids in the engine's tag, name and label tables.

    Example:
        >>> for t in m.analyse("Ala ma kota."):
        ...     print(t.start_node, t.end_node, t.orth, t.lemma, t.tag(m))
    """

    orth: str
    lemma: str
    start_node: int
    end_node: int
    tag_id: int
    name_id: int
    labels_id: int

    @property
    def is_ign(self) -> bool:
        """True when the token is an unknown word."""
        return self.tag_id == IGN_TAG_ID

    @property
    def is_whitespace(self) -> bool:
        """True when the token represents whitespace."""
        return self.tag_id == WHITESPACE_TAG_ID

    def tag(self, morf: Morfeusz) -> str:
        """Inflectional tag of the token."""
        return morf.resolver.tag(self.tag_id)

    def name(self, morf: Morfeusz) -> str:
        """Named-entity type of the token ("" when none)."""
        return morf.resolver.name(self.name_id)

    def labels_as_string(self, morf: Morfeusz) -> str:
        return morf.resolver.labels_as_string(self.labels_id)

    def labels(self, morf: Morfeusz) -> list[str]:
        return morf.resolver.labels(self.labels_id)
