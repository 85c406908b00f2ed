"""
Tests against the SGJP dictionary shipped with Morfeusz 2.
"""

import pytest

from morfeusz import (
    CaseHandling,
    Charset,
    ConfigurationError,
    DictionaryError,
    GenerationError,
    Morfeusz,
    TokenNumbering,
    Usage,
    ValidationError,
    WhitespaceHandling,
)
from tests.result.test_result import ALA_MA_KOTA

NP = "nazwa_pospolita"
BOT = "bot."

BEZ_FORMS = [
    ("bez", "bez:S", "subst:sg:nom.acc:m3", NP, BOT),
    ("bzu", "bez:S", "subst:sg:gen:m3", NP, BOT),
    ("bzowi", "bez:S", "subst:sg:dat:m3", NP, BOT),
    ("bzem", "bez:S", "subst:sg:inst:m3", NP, BOT),
    ("bzie", "bez:S", "subst:sg:loc:m3", NP, BOT),
    ("bzie", "bez:S", "subst:sg:voc:m3", NP, BOT),
    ("bzy", "bez:S", "subst:pl:nom.acc.voc:m3", NP, BOT),
    ("bzów", "bez:S", "subst:pl:gen:m3", NP, BOT),
    ("bzom", "bez:S", "subst:pl:dat:m3", NP, BOT),
    ("bzami", "bez:S", "subst:pl:inst:m3", NP, BOT),
    ("bzach", "bez:S", "subst:pl:loc:m3", NP, BOT),
    ("beze", "bez:P", "prep:gen:wok", "", ""),
    ("bez", "bez:P", "prep:gen:nwok", "", ""),
    ("b", "bez", "brev:pun", "", ""),
]


def forms(tokens, m):
    return sorted((t.orth, t.lemma, t.tag(m), t.name(m), t.labels_as_string(m)) for t in tokens)


class TestConstruction:
    @pytest.mark.parametrize(
        "kwargs,error",
        [
            ({"dict_name": "xyz"}, DictionaryError),
            ({"aggl": "xyz"}, ConfigurationError),
            ({"praet": "xyz"}, ConfigurationError),
            ({"charset": 4}, ValidationError),
            ({"token_numbering": 2}, ValidationError),
            ({"case_handling": 3}, ValidationError),
            ({"whitespace_handling": 3}, ValidationError),
            ({"usage": 3}, ValidationError),
        ],
    )
    def test_rejected(self, sgjp, kwargs, error):
        with pytest.raises(error):
            Morfeusz(**kwargs)

    def test_library_info(self, sgjp):
        import morfeusz

        assert morfeusz.version()
        assert morfeusz.default_dict_name()
        assert morfeusz.copyright()


class TestAnalyse:
    def test_ala_ma_kota(self, sgjp):
        tokens = sgjp.analyse("Ala ma kota.").to_list()
        got = [
            (t.start_node, t.end_node, t.orth, t.lemma, t.tag(sgjp), t.name(sgjp), t.labels_as_string(sgjp))
            for t in tokens
        ]

        assert sorted(got) == sorted(ALA_MA_KOTA)

    def test_keep_whitespaces(self, sgjp):
        sgjp.whitespace_handling = WhitespaceHandling.KEEP_WHITESPACES

        tokens = sgjp.analyse("bez xyz").to_list()

        assert [(t.start_node, t.orth) for t in tokens if t.is_whitespace] == [(1, " ")]
        assert [(t.orth, t.tag(sgjp)) for t in tokens if t.is_ign] == [("xyz", "ign")]
        assert len(tokens) == 5

    def test_exhausted_result_returns_none(self, sgjp):
        result = sgjp.analyse("dom")
        result.to_list()

        assert result.next_token() is None


class TestGenerate:
    def test_bez(self, sgjp):
        assert forms(sgjp.generate("bez"), sgjp) == sorted(BEZ_FORMS)

    def test_homonym(self, sgjp):
        assert forms(sgjp.generate("bez:P"), sgjp) == sorted(f for f in BEZ_FORMS if f[1] == "bez:P")

    def test_unknown_lemma(self, sgjp):
        (token,) = sgjp.generate("xyz")

        assert token.is_ign
        assert (token.orth, token.lemma) == ("xyz", "xyz")

    @pytest.mark.parametrize("lemma", ["bez:S", "bez"])
    def test_with_tag(self, sgjp, lemma):
        tokens = sgjp.generate(lemma, tag="subst:sg:gen:m3")

        assert forms(tokens, sgjp) == [("bzu", "bez:S", "subst:sg:gen:m3", NP, BOT)]

    def test_with_tag_no_match(self, sgjp):
        assert sgjp.generate("bez", tag="subst:sg:gen:m1") == []

    def test_analyse_only(self, real_lib):
        with Morfeusz(usage=Usage.ANALYSE_ONLY) as m:
            with pytest.raises(GenerationError):
                m.generate("dom")


class TestResolver:
    def test_known(self, sgjp):
        r = sgjp.resolver

        assert r.tag_id("subst:sg:nom:f") >= 0
        assert r.name_id("imię") >= 0
        assert r.labels_id("pot.") >= 0
        assert min(r.tags_count, r.names_count, r.labels_count) > 0
        assert r.tagset_id
        assert r.tag(611) and r.name(12) and r.labels_as_string(466)
        assert r.labels(466)

    def test_unknown(self, sgjp):
        r = sgjp.resolver

        assert r.tag_id("xyz") == r.name_id("xyz") == r.labels_id("xyz") == -1
        assert r.tag(-1) == r.name(-1) == r.labels_as_string(-1) == ""

    def test_dictionary_identity(self, sgjp):
        assert sgjp.dict_id
        assert sgjp.dict_copyright


class TestSettings:
    @pytest.mark.parametrize(
        "option,value",
        [
            ("charset", Charset.CP852),
            ("token_numbering", TokenNumbering.CONTINUOUS_NUMBERING),
            ("case_handling", CaseHandling.IGNORE_CASE),
            ("whitespace_handling", WhitespaceHandling.KEEP_WHITESPACES),
        ],
    )
    def test_enum_setting_survives_bad_value(self, sgjp, option, value):
        setattr(sgjp, option, value)
        with pytest.raises(ValidationError):
            setattr(sgjp, option, 42)

        assert getattr(sgjp, option) is value

    @pytest.mark.parametrize("option,value", [("aggl", "permissive"), ("praet", "composite")])
    def test_string_setting_survives_bad_value(self, sgjp, option, value):
        setattr(sgjp, option, value)
        with pytest.raises(ConfigurationError):
            setattr(sgjp, option, "xyz")

        assert getattr(sgjp, option) == value

    def test_available_options(self, sgjp):
        assert sgjp.available_aggl_options
        assert sgjp.available_praet_options


class TestSearchPathsAndClone:
    def test_search_paths(self, sgjp):
        paths = sgjp.search_paths
        initial = paths.to_list()

        paths.prepend("first_path")
        paths.prepend("first_path")
        paths.append("last_path")
        assert paths.to_list() == ["first_path", "first_path", *initial, "last_path"]

        assert paths.remove("first_path") == 2
        assert paths.remove("xyz") == 0
        assert paths.to_list() == [*initial, "last_path"]

        paths.clear()
        assert paths.to_list() == []

    def test_clone_matches(self, sgjp):
        with sgjp.clone() as c:
            assert forms(c.analyse("dom"), c) == forms(sgjp.analyse("dom"), sgjp)
            assert forms(c.generate("dom"), c) == forms(sgjp.generate("dom"), sgjp)
            assert forms(c.generate("dom", tag="subst:sg:dat:m3"), c) == forms(
                sgjp.generate("dom", tag="subst:sg:dat:m3"), sgjp
            )
