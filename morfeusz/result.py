"""
Lazy, pull-based stream of analysis results.

States: created -> iterating -> exhausted. ``has_next()`` never changes
state; each pull advances by exactly one token. Pulls never fail mid-stream.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ._bindings import take_token_info
from ._logging import scoped_logger
from .exceptions import StateError
from .token import TokenInfo

if TYPE_CHECKING:
    from .engine import Morfeusz

__all__ = ["AnalysisResult"]

logger = scoped_logger("result")


class AnalysisResult:
    """
    Result of morphological analysis of one text.

    Returned by ``Morfeusz.analyse()``. Tokens come in left-to-right order
    with non-decreasing node indices; competing interpretations of one span
    are separate tokens with the same ``start_node``/``end_node``.

    The result holds a native cursor. It keeps its engine alive, is closed
    automatically when the engine is closed, and is released when garbage
    collected; ``close()`` releases it earlier.

    Example:
        >>> with m.analyse("Ala ma kota.") as result:
        ...     for token in result:
        ...         print(token.orth, token.lemma, token.tag(m))
    """

    __slots__ = ("_morf", "_ptr")

    def __init__(self, morf: Morfeusz, ptr: int):
        self._morf = morf
        self._ptr: int | None = ptr

    @property
    def _handle(self) -> int:
        """Get the native cursor, raising if it or its engine is closed."""
        if self.closed:
            raise StateError("AnalysisResult is closed")
        return self._ptr

    @property
    def closed(self) -> bool:
        # The engine drops every cursor it owns when it is closed.
        return self._ptr is None or self._ptr not in self._morf._cursors

    def has_next(self) -> bool:
        """Return True while there are tokens left. Does not advance."""
        return bool(self._morf._lib.morf_result_has_next(self._handle))

    def next_token(self) -> TokenInfo | None:
        """Return the next token, or None once the result is exhausted."""
        handle = self._handle
        lib = self._morf._lib
        if not lib.morf_result_has_next(handle):
            return None
        # The empty-orth record also marks the end of the stream.
        return take_token_info(lib, lib.morf_result_next(handle), self._morf._encoding)

    def to_list(self) -> list[TokenInfo]:
        """Pull every remaining token."""
        return list(self)

    def __iter__(self) -> AnalysisResult:
        return self

    def __next__(self) -> TokenInfo:
        token = self.next_token()
        if token is None:
            raise StopIteration
        return token

    def close(self) -> None:
        """
        Release the native cursor.

        Safe to call multiple times (idempotent).
        """
        ptr = getattr(self, "_ptr", None)
        if not ptr:
            return
        self._ptr = None
        cursors = self._morf._cursors
        if ptr not in cursors:
            return
        cursors.discard(ptr)
        self._morf._lib.morf_result_free(ptr)
        logger.debug("Analysis result released")

    def __enter__(self) -> AnalysisResult:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def __del__(self):
        try:
            self.close()
        except Exception:
            pass

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<AnalysisResult {state}>"
