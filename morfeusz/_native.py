"""
C structures and function signatures of the morfeusz shim library.

Mirrors ``native/morfeusz_shim.h``. Every struct has a fixed layout and every
variable-size payload rides behind a pointer+length pair. None of the structs
records who owns the memory it points to; ownership is a per-function
contract enforced in ``_bindings.py``.
"""

import ctypes
from typing import Any

__all__ = [
    "MorfString",
    "MorfStringArray",
    "MorfTokenInfo",
    "MorfTokenInfoArray",
    "SIGNATURES",
    "RELEASE_FUNCTIONS",
    "setup_signatures",
]


class MorfString(ctypes.Structure):
    """Pointer+length string. Also used as the error signal (null = no error)."""

    _fields_ = [
        ("p", ctypes.POINTER(ctypes.c_char)),
        ("n", ctypes.c_int),
    ]


class MorfStringArray(ctypes.Structure):
    _fields_ = [
        ("strings", ctypes.POINTER(MorfString)),
        ("length", ctypes.c_int),
    ]


class MorfTokenInfo(ctypes.Structure):
    """One morphological interpretation of one input span."""

    _fields_ = [
        ("orth", MorfString),
        ("lemma", MorfString),
        ("start_node", ctypes.c_int),
        ("end_node", ctypes.c_int),
        ("tag_id", ctypes.c_int),
        ("name_id", ctypes.c_int),
        ("labels_id", ctypes.c_int),
    ]


class MorfTokenInfoArray(ctypes.Structure):
    _fields_ = [
        ("tokens", ctypes.POINTER(MorfTokenInfo)),
        ("length", ctypes.c_int),
        ("error", MorfString),
    ]


_handle = ctypes.c_void_p
_int = ctypes.c_int

# name -> (argtypes, restype)
SIGNATURES: dict[str, tuple[list[Any], Any]] = {
    # Lifecycle
    "morf_create": ([MorfString, _int], _handle),
    "morf_clone": ([_handle], _handle),
    "morf_free": ([_handle], None),
    # Analysis
    "morf_analyse": ([_handle, MorfString], _handle),
    "morf_result_has_next": ([_handle], _int),
    "morf_result_next": ([_handle], MorfTokenInfo),
    "morf_result_free": ([_handle], None),
    # Generation
    "morf_generate": ([_handle, MorfString], MorfTokenInfoArray),
    "morf_generate_with_tag": ([_handle, _int, MorfString], MorfTokenInfoArray),
    # Id resolver
    "morf_tagset_id": ([_handle], MorfString),
    "morf_tag": ([_handle, _int], MorfString),
    "morf_tag_id": ([_handle, MorfString], _int),
    "morf_name": ([_handle, _int], MorfString),
    "morf_name_id": ([_handle, MorfString], _int),
    "morf_labels_as_string": ([_handle, _int], MorfString),
    "morf_labels": ([_handle, _int], MorfStringArray),
    "morf_labels_id": ([_handle, MorfString], _int),
    "morf_tags_count": ([_handle], _int),
    "morf_names_count": ([_handle], _int),
    "morf_labels_count": ([_handle], _int),
    # Dictionary info
    "morf_dict_id": ([_handle], MorfString),
    "morf_dict_copyright": ([_handle], MorfString),
    # Settings
    "morf_set_aggl": ([_handle, MorfString], MorfString),
    "morf_set_praet": ([_handle, MorfString], MorfString),
    "morf_set_dictionary": ([_handle, MorfString], MorfString),
    "morf_set_charset": ([_handle, _int], MorfString),
    "morf_set_case_handling": ([_handle, _int], MorfString),
    "morf_set_token_numbering": ([_handle, _int], MorfString),
    "morf_set_whitespace_handling": ([_handle, _int], MorfString),
    "morf_aggl": ([_handle], MorfString),
    "morf_praet": ([_handle], MorfString),
    "morf_charset": ([_handle], _int),
    "morf_case_handling": ([_handle], _int),
    "morf_token_numbering": ([_handle], _int),
    "morf_whitespace_handling": ([_handle], _int),
    "morf_available_aggl_options": ([_handle], MorfStringArray),
    "morf_available_praet_options": ([_handle], MorfStringArray),
    # Dictionary search paths
    "morf_search_paths": ([_handle], MorfStringArray),
    "morf_search_paths_prepend": ([_handle, MorfString], None),
    "morf_search_paths_append": ([_handle, MorfString], None),
    "morf_search_paths_remove": ([_handle, MorfString], _int),
    "morf_search_paths_clear": ([_handle], None),
    # Library info
    "morf_version": ([], MorfString),
    "morf_default_dict_name": ([], MorfString),
    "morf_copyright": ([], MorfString),
    # Release family, one per wire struct kind
    "morf_free_chars": ([ctypes.POINTER(ctypes.c_char)], None),
    "morf_free_token_info": ([ctypes.POINTER(MorfTokenInfo)], None),
    "morf_free_string_array": ([ctypes.POINTER(MorfStringArray)], None),
    "morf_free_token_info_array": ([ctypes.POINTER(MorfTokenInfoArray)], None),
}

RELEASE_FUNCTIONS = (
    "morf_free",
    "morf_result_free",
    "morf_free_chars",
    "morf_free_token_info",
    "morf_free_string_array",
    "morf_free_token_info_array",
)


def setup_signatures(lib: Any) -> None:
    """Install argtypes/restype for every shim function on ``lib``."""
    for name, (argtypes, restype) in SIGNATURES.items():
        func = getattr(lib, name)
        func.argtypes = argtypes
        func.restype = restype
