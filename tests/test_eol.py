"""Tests for the EOL tokenizer, accumulator and EOLStat."""

import pytest

from eolguard.scanner.eol import EOLStat, calc_eol_stat, iter_eol_tokens, split_eol

SAMPLES = [
    b"",
    b"a",
    b"\r",
    b"\n",
    b"\r\n",
    b"\0",
    b"\r\r\n\n",
    b"line one\r\nline two\nline three\rend",
    b"\0\0abc\r\n\x00\r",
    b"no terminators at all",
    b"\n\n\r\n\r\r",
]


class TestSplitEOL:
    def test_empty(self):
        assert split_eol(b"") == (b"", b"")

    @pytest.mark.parametrize("first", [b"\n", b"\0"])
    def test_single_byte_tokens(self, first):
        assert split_eol(first + b"rest") == (first, b"rest")

    def test_crlf_pair(self):
        assert split_eol(b"\r\nx") == (b"\r\n", b"x")

    def test_lone_cr(self):
        assert split_eol(b"\rx") == (b"\r", b"x")

    def test_trailing_cr_is_bare(self):
        assert split_eol(b"\r") == (b"\r", b"")

    def test_cr_cr_lf(self):
        assert split_eol(b"\r\r\n") == (b"\r", b"\r\n")

    def test_plain_run_stops_at_special(self):
        assert split_eol(b"hello\nworld") == (b"hello", b"\nworld")
        assert split_eol(b"abc\0def") == (b"abc", b"\0def")
        assert split_eol(b"abc\rdef") == (b"abc", b"\rdef")

    def test_plain_run_to_end(self):
        assert split_eol(b"hello") == (b"hello", b"")


class TestPartition:
    @pytest.mark.parametrize("data", SAMPLES)
    def test_tokens_reproduce_input(self, data):
        assert b"".join(iter_eol_tokens(data)) == data

    @pytest.mark.parametrize("data", SAMPLES)
    def test_split_and_iter_agree(self, data):
        tokens = []
        rest = data
        while rest:
            token, rest = split_eol(rest)
            tokens.append(token)
        assert tokens == list(iter_eol_tokens(data))

    @pytest.mark.parametrize("data", SAMPLES)
    def test_each_token_is_one_grammar_case(self, data):
        for token in iter_eol_tokens(data):
            assert token
            if token in (b"\r", b"\n", b"\r\n", b"\0"):
                continue
            assert not any(b in token for b in b"\r\n\0")


class TestCalcEOLStat:
    def test_counts(self):
        stat = calc_eol_stat(b"a\r\nb\nc\rd\0e\r\n")
        assert stat == EOLStat(cr=1, crlf=2, lf=1, nul=1)

    def test_empty(self):
        assert calc_eol_stat(b"") == EOLStat()

    def test_cr_before_crlf(self):
        assert calc_eol_stat(b"\r\r\n") == EOLStat(cr=1, crlf=1)

    def test_lf_cr_is_two_terminators(self):
        assert calc_eol_stat(b"\n\r") == EOLStat(cr=1, lf=1)

    def test_additivity_without_split_pair(self):
        a = b"one\r\ntwo\n\0"
        b = b"three\rfour\r\n"
        assert calc_eol_stat(a) + calc_eol_stat(b) == calc_eol_stat(a + b)

    def test_split_pair_breaks_additivity(self):
        assert calc_eol_stat(b"a\r") + calc_eol_stat(b"\nb") != calc_eol_stat(b"a\r\nb")


class TestEOLStat:
    def test_no_terminators_is_every_style(self):
        stat = calc_eol_stat(b"single line")
        assert stat.is_cr and stat.is_crlf and stat.is_lf
        assert not stat.is_mixed

    def test_cr_and_lf_is_mixed(self):
        stat = calc_eol_stat(b"a\rb\n")
        assert stat.is_mixed
        assert not stat.is_cr
        assert not stat.is_crlf
        assert not stat.is_lf

    def test_pure_styles(self):
        assert calc_eol_stat(b"a\r\nb\r\n").is_crlf
        assert calc_eol_stat(b"a\nb\n").is_lf
        assert calc_eol_stat(b"a\rb\r").is_cr
        assert not calc_eol_stat(b"a\nb\n").is_crlf

    def test_str_order(self):
        assert str(EOLStat(cr=1, crlf=1, lf=1)) == "CR CRLF LF"
        assert str(EOLStat(lf=3, cr=2)) == "CR LF"
        assert str(EOLStat(crlf=5)) == "CRLF"

    def test_str_empty(self):
        assert str(EOLStat()) == ""

    def test_nul_wins(self):
        stat = calc_eol_stat(b"a\r\nb\nc\r\0")
        assert stat.is_binary
        assert stat.is_mixed
        assert str(stat) == "binary"

    def test_add(self):
        total = EOLStat(cr=1, nul=2) + EOLStat(crlf=3, lf=4, nul=1)
        assert total == EOLStat(cr=1, crlf=3, lf=4, nul=3)

    def test_to_dict(self):
        assert EOLStat(lf=2).to_dict() == {"cr": 0, "crlf": 0, "lf": 2, "nul": 0}

    def test_frozen(self):
        stat = EOLStat()
        with pytest.raises(AttributeError):
            stat.lf = 1  # type: ignore[misc]
