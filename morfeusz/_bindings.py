"""
Library loading and marshaling for the morfeusz shim.

Ownership contract (the native side performs no double-free protection):

- Strings passed *to* the shim are borrowed views into Python-owned buffers.
  The shim must not retain or free them, and they only need to live for the
  duration of the call.
- Strings, records and arrays returned *from* the shim are native
  allocations. Every ``take_*`` helper copies the payload into Python objects
  and releases the native memory exactly once before returning, so nothing
  native escapes this module except the opaque engine and result handles.
- Arrays are released element buffers first, then the backing storage, all
  in the same call.
"""

import ctypes
import ctypes.util
import os
import platform
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from ._logging import scoped_logger
from ._native import MorfString, MorfStringArray, MorfTokenInfo, MorfTokenInfoArray, setup_signatures
from .exceptions import LibraryError
from .token import TokenInfo

__all__ = [
    "get_lib",
    "borrow_string",
    "take_string",
    "take_error",
    "take_string_array",
    "take_token_info",
    "take_token_info_array",
]

logger = scoped_logger("bindings")

_lib: Any = None

# Raw copy of a MorfTokenInfo: (orth, lemma, start, end, tag_id, name_id, labels_id)
_RawToken = tuple[bytes, bytes, int, int, int, int, int]


# =============================================================================
# Library loading
# =============================================================================


def _library_filename() -> str:
    """Get platform-specific library name."""
    system = platform.system()
    if system == "Darwin":
        return "libmorfeusz_shim.dylib"
    if system == "Windows":
        return "morfeusz_shim.dll"
    return "libmorfeusz_shim.so"


def _candidate_paths() -> Iterator[str]:
    env_path = os.environ.get("MORFEUSZ_LIBRARY")
    if env_path:
        yield env_path
    bundled = Path(__file__).parent / _library_filename()
    if bundled.exists():
        yield str(bundled)
    found = ctypes.util.find_library("morfeusz_shim")
    if found:
        yield found


def get_lib() -> Any:
    """Load the shim library once and install its signatures.

    Raises
    ------
        LibraryError: If no candidate library can be loaded.
    """
    global _lib
    if _lib is not None:
        return _lib

    tried: list[str] = []
    for path in _candidate_paths():
        try:
            lib = ctypes.CDLL(path)
            setup_signatures(lib)
        except (OSError, AttributeError) as exc:
            tried.append(f"{path}: {exc}")
            continue
        logger.debug("Loaded native library", extra={"path": path})
        _lib = lib
        return _lib

    raise LibraryError(
        "Cannot load the morfeusz shim library. "
        "Set MORFEUSZ_LIBRARY or rebuild the package with Morfeusz 2 installed.",
        details={"tried": tried, "filename": _library_filename()},
    )


# =============================================================================
# Input direction (borrowed)
# =============================================================================


def borrow_string(data: bytes | None) -> MorfString:
    """Wrap ``data`` as a borrowed MorfString; ``None`` becomes a null view.

    The returned struct keeps its buffer alive through ctypes' ``_objects``;
    it must not be stored beyond the call it is passed to.
    """
    if data is None:
        return MorfString()
    buf = (ctypes.c_char * len(data)).from_buffer_copy(data)
    return MorfString(ctypes.cast(buf, ctypes.POINTER(ctypes.c_char)), len(data))


# =============================================================================
# Output direction (owned, copy then release)
# =============================================================================


def _copy_bytes(s: MorfString) -> bytes:
    if not s.p or s.n <= 0:
        return b""
    return ctypes.string_at(s.p, s.n)


def _release_chars(lib: Any, s: MorfString) -> None:
    if s.p:
        lib.morf_free_chars(s.p)


def take_string(lib: Any, s: MorfString, encoding: str) -> str:
    """Copy a native string into a ``str`` and release it."""
    try:
        data = _copy_bytes(s)
    finally:
        _release_chars(lib, s)
    return data.decode(encoding)


def take_error(lib: Any, s: MorfString, encoding: str) -> str | None:
    """Read an error signal. Returns None for "no error".

    A non-null pointer is an error even when the message is empty.
    """
    if not s.p:
        return None
    try:
        data = _copy_bytes(s)
    finally:
        _release_chars(lib, s)
    return data.decode(encoding, errors="replace") or "unknown error"


def take_string_array(
    lib: Any, arr: MorfStringArray, encoding: str, errors: str = "strict"
) -> list[str]:
    """Copy every element, release every element, then release the backing."""
    raw: list[bytes] = []
    try:
        for i in range(arr.length if arr.strings else 0):
            raw.append(_copy_bytes(arr.strings[i]))
    finally:
        for i in range(arr.length if arr.strings else 0):
            _release_chars(lib, arr.strings[i])
        lib.morf_free_string_array(ctypes.byref(arr))
    return [item.decode(encoding, errors) for item in raw]


def _copy_token(t: MorfTokenInfo) -> _RawToken:
    return (
        _copy_bytes(t.orth),
        _copy_bytes(t.lemma),
        t.start_node,
        t.end_node,
        t.tag_id,
        t.name_id,
        t.labels_id,
    )


def _decode_token(raw: _RawToken, encoding: str) -> TokenInfo:
    orth, lemma, start, end, tag_id, name_id, labels_id = raw
    return TokenInfo(
        orth=orth.decode(encoding),
        lemma=lemma.decode(encoding),
        start_node=start,
        end_node=end,
        tag_id=tag_id,
        name_id=name_id,
        labels_id=labels_id,
    )


def take_token_info(lib: Any, t: MorfTokenInfo, encoding: str) -> TokenInfo | None:
    """Copy a native record and release both of its string fields.

    Returns None for the end-of-stream record, recognised by its empty orth.
    """
    try:
        raw = _copy_token(t)
    finally:
        lib.morf_free_token_info(ctypes.byref(t))
    if not raw[0]:
        return None
    return _decode_token(raw, encoding)


def take_token_info_array(
    lib: Any, arr: MorfTokenInfoArray, encoding: str
) -> tuple[list[TokenInfo], str | None]:
    """Copy a generated record array and release it in one pass.

    Returns
    -------
        Tuple of (tokens, error_message). When error_message is not None the
        token list is empty and must not be trusted.
    """
    count = arr.length if arr.tokens else 0
    error: bytes | None = None
    raw: list[_RawToken] = []
    try:
        if arr.error.p:
            error = _copy_bytes(arr.error)
        else:
            raw = [_copy_token(arr.tokens[i]) for i in range(count)]
    finally:
        for i in range(count):
            lib.morf_free_token_info(ctypes.byref(arr.tokens[i]))
        # Backing storage and the error buffer go last: they are the only
        # path to the element buffers released above.
        lib.morf_free_token_info_array(ctypes.byref(arr))

    if error is not None:
        return ([], error.decode(encoding, errors="replace") or "unknown error")
    return ([_decode_token(item, encoding) for item in raw], None)
