"""
Tests for ctypes argtypes/restype configuration.

Every shim function needs its signature installed before the first call.
A missing restype truncates returned handles to a C int on 64-bit systems,
and a missing argtypes entry passes structs by the wrong convention.
"""

import ctypes
import re
from pathlib import Path

import pytest

from morfeusz._native import (
    RELEASE_FUNCTIONS,
    SIGNATURES,
    MorfString,
    MorfStringArray,
    MorfTokenInfo,
    MorfTokenInfoArray,
    setup_signatures,
)

HEADER = Path(__file__).resolve().parents[3] / "native" / "morfeusz_shim.h"
SOURCE = HEADER.with_suffix(".cc")

# Exports that only release memory or clear a list, which cannot throw.
NOTHROW = {
    "morf_free",
    "morf_result_free",
    "morf_search_paths_clear",
    "morf_free_chars",
    "morf_free_token_info",
    "morf_free_string_array",
    "morf_free_token_info_array",
}


class _FakeFunc:
    argtypes = None
    restype = ctypes.c_int


class _FakeLib:
    def __init__(self):
        self.funcs = {}

    def __getattr__(self, name):
        return self.funcs.setdefault(name, _FakeFunc())


class TestSignatureTable:
    """Tests for the SIGNATURES table itself."""

    def test_setup_installs_every_signature(self):
        lib = _FakeLib()

        setup_signatures(lib)

        assert set(lib.funcs) == set(SIGNATURES)
        for name, (argtypes, restype) in SIGNATURES.items():
            assert lib.funcs[name].argtypes == argtypes
            assert lib.funcs[name].restype is restype

    @pytest.mark.parametrize("name", ["morf_create", "morf_clone", "morf_analyse"])
    def test_handles_are_pointers(self, name):
        """Handle-returning functions must not default to c_int."""
        assert SIGNATURES[name][1] is ctypes.c_void_p

    def test_setters_return_error_strings(self):
        for name, (_, restype) in SIGNATURES.items():
            if name.startswith("morf_set_"):
                assert restype is MorfString, name

    def test_release_family_takes_pointers(self):
        for name in RELEASE_FUNCTIONS:
            argtypes, restype = SIGNATURES[name]
            assert restype is None
            assert len(argtypes) == 1

    def test_matches_header(self):
        """Every function declared in the C header has a signature, and no more."""
        declared = set(re.findall(r"\b(morf_\w+)\(", HEADER.read_text()))

        assert declared == set(SIGNATURES)

    def test_exports_catch_native_exceptions(self):
        """A C++ exception must not cross the C boundary into the caller."""
        source = SOURCE.read_text().split('extern "C" {', 1)[1]
        starts = list(re.finditer(r"^\w[\w\s\*]*?\b(morf_\w+)\(", source, re.MULTILINE))
        bodies = {
            m.group(1): source[m.start() : nxt.start() if nxt else len(source)]
            for m, nxt in zip(starts, starts[1:] + [None])
        }

        assert set(bodies) == set(SIGNATURES)
        unguarded = sorted(name for name, body in bodies.items() if "try {" not in body)
        assert unguarded == sorted(NOTHROW)


class TestStructLayout:
    """Struct layouts match the C declarations."""

    def test_string(self):
        assert [f[0] for f in MorfString._fields_] == ["p", "n"]

    def test_token_info(self):
        assert [f[0] for f in MorfTokenInfo._fields_] == [
            "orth",
            "lemma",
            "start_node",
            "end_node",
            "tag_id",
            "name_id",
            "labels_id",
        ]

    def test_arrays(self):
        assert [f[0] for f in MorfStringArray._fields_] == ["strings", "length"]
        assert [f[0] for f in MorfTokenInfoArray._fields_] == ["tokens", "length", "error"]

