"""
Id resolver tests.

Tests for morfeusz.resolver.IdResolver: round-trips, sentinels and counts.
"""

import pytest


class TestTags:
    """Tests for the tag table."""

    def test_round_trip_from_string(self, morf):
        """tag(tag_id(t)) == t for every known tag."""
        r = morf.resolver

        for tag in ("subst:sg:nom:f", "ign", "sp", "brev:pun"):
            assert r.tag(r.tag_id(tag)) == tag

    def test_round_trip_from_id(self, morf):
        """tag_id(tag(i)) == i for every id in range."""
        r = morf.resolver

        for i in range(r.tags_count):
            assert r.tag_id(r.tag(i)) == i

    def test_reserved_ids(self, morf):
        """Ids 0 and 1 are the unknown-word and whitespace tags."""
        from morfeusz import IGN_TAG_ID, WHITESPACE_TAG_ID

        assert morf.resolver.tag(IGN_TAG_ID) == "ign"
        assert morf.resolver.tag(WHITESPACE_TAG_ID) == "sp"

    def test_tagset_id(self, morf):
        assert morf.resolver.tagset_id


class TestSentinels:
    """Unknown ids and strings are sentinels, never exceptions."""

    @pytest.mark.parametrize("method", ["tag", "name", "labels_as_string"])
    @pytest.mark.parametrize("bad_id", [-1, 10_000, 2**31, -(2**40)])
    def test_invalid_id_is_empty_string(self, fake_lib, morf, method, bad_id):
        """An id outside the table resolves to ""."""
        assert getattr(morf.resolver, method)(bad_id) == ""
        assert fake_lib.ledger.unknown_frees == []

    @pytest.mark.parametrize("method", ["tag_id", "name_id", "labels_id"])
    def test_unknown_string_is_minus_one(self, morf, method):
        """An unknown string resolves to -1."""
        from morfeusz import INVALID_ID

        assert getattr(morf.resolver, method)("xyz") == INVALID_ID

    def test_unencodable_string_is_minus_one(self, morf):
        """A string the current charset cannot carry resolves to -1."""
        morf.charset = "CP1250"

        assert morf.resolver.tag_id("日本") == -1

    def test_invalid_labels_id_is_empty_list(self, morf):
        assert morf.resolver.labels(-1) == []


class TestNamesAndLabels:
    """Tests for the name and label tables."""

    def test_names(self, morf):
        r = morf.resolver

        assert r.name(r.name_id("imię")) == "imię"
        assert r.names_count >= 1

    def test_labels(self, morf):
        """One labels id can stand for several labels."""
        r = morf.resolver
        labels_id = r.labels_id("pot.,środ.")

        assert labels_id >= 0
        assert r.labels_as_string(labels_id) == "pot.,środ."
        assert r.labels(labels_id) == ["pot.", "środ."]
        assert r.labels_count >= 1

    def test_ids_follow_dictionary(self, morf):
        """Tables are those of the current dictionary after set_dictionary."""
        morf.set_dictionary("polimorf")

        assert morf.resolver.tag_id("subst:sg:gen:m3") >= 0

    def test_token_helpers(self, morf):
        """TokenInfo resolves its ids through the engine."""
        token = next(t for t in morf.analyse("kota") if t.lemma == "kot:Sm1")

        assert token.tag(morf) == "subst:sg:gen.acc:m1"
        assert token.name(morf) == "nazwa_pospolita"
        assert token.labels_as_string(morf) == "pot.,środ."
        assert token.labels(morf) == ["pot.", "środ."]
        assert not token.is_ign and not token.is_whitespace
