"""Test the peek/scan contract and lazy, cached tokenization."""

import pytest

from pathglob.errors import ExhaustedStreamError
from pathglob.lexer import GlobTokenizer
from pathglob.tokens import GlobTokenKind


class TestPeekScan:
    def test_peek_is_stable(self):
        t = GlobTokenizer("a/b")
        first = t.peek()
        assert t.peek() is first
        assert t.scan() is first

    def test_scan_advances(self):
        t = GlobTokenizer("a/b")
        assert t.scan().value == "a"
        assert t.scan().kind == GlobTokenKind.PATH_SEPARATOR
        assert t.peek().value == "b"

    def test_at_end_after_last_scan(self):
        t = GlobTokenizer("*")
        assert not t.at_end()
        t.scan()
        assert t.at_end()

    def test_tokens_does_not_move_cursor(self):
        t = GlobTokenizer("a/b")
        assert len(t.tokens()) == 3
        assert t.peek().value == "a"


class TestExhaustion:
    def test_empty_pattern_has_no_tokens(self):
        t = GlobTokenizer("")
        assert t.tokens() == ()
        assert t.at_end()

    def test_peek_on_empty_raises(self):
        with pytest.raises(ExhaustedStreamError):
            GlobTokenizer("").peek()

    def test_scan_on_empty_raises(self):
        with pytest.raises(ExhaustedStreamError):
            GlobTokenizer("").scan()

    def test_scan_past_end_raises(self):
        t = GlobTokenizer("ab")
        t.scan()
        with pytest.raises(ExhaustedStreamError) as exc_info:
            t.scan()
        assert exc_info.value.offset == 2
        assert exc_info.value.pattern == "ab"


class TestLaziness:
    def test_no_work_until_first_read(self, monkeypatch):
        calls = []
        original = GlobTokenizer._lex

        def counting(self):
            calls.append(self.pattern)
            return original(self)

        monkeypatch.setattr(GlobTokenizer, "_lex", counting)
        t = GlobTokenizer("a/b")
        assert calls == []

        t.peek()
        t.scan()
        t.scan()
        t.tokens()
        assert calls == ["a/b"]

    def test_cached_sequence_is_reused(self):
        t = GlobTokenizer("a/b")
        assert t.tokens() is t.tokens()

    def test_instances_are_independent(self):
        a = GlobTokenizer("x/y")
        b = GlobTokenizer("x/y")
        a.scan()
        a.scan()
        assert b.peek().value == "x"
