"""Tests for the pull-based token stream."""

import pytest
from pydantic import ValidationError

from models import TokenKind
from token_source import TokenStream


def test_yields_each_token_once(toks):
    src = TokenStream(toks("ID", "INT"))
    assert src.next_token().type == TokenKind.ID
    assert src.next_token().type == TokenKind.INT
    assert src.next_token().type == TokenKind.EOS


def test_keeps_returning_eos(toks):
    src = TokenStream(toks("ID", "EOS", "INT"))
    src.next_token()
    eos = src.next_token()
    assert eos.type == TokenKind.EOS
    assert src.next_token() is eos
    assert src.next_token() is eos


def test_synthesized_eos_takes_last_position(toks):
    src = TokenStream(toks("ID", "STRING"))
    src.next_token(); src.next_token()
    eos = src.next_token()
    assert eos.type == TokenKind.EOS
    assert eos.line == 2


def test_empty_stream():
    eos = TokenStream([]).next_token()
    assert eos.type == TokenKind.EOS
    assert (eos.line, eos.col) == (0, 0)


def test_from_dicts():
    src = TokenStream.from_dicts([
        {"type": "IF", "lexeme": "if", "line": 1, "col": 1},
        {"type": "ID", "lexeme": "x", "line": 1, "col": 4},
    ])
    tok = src.next_token()
    assert tok.type == TokenKind.IF
    assert tok.describe() == "IF 'if' @ 1:1"


def test_from_dicts_rejects_unknown_kind():
    with pytest.raises(ValidationError):
        TokenStream.from_dicts([{"type": "LBRACE"}])


def test_tokens_are_immutable(toks):
    tok = toks("ID")[0]
    with pytest.raises(ValidationError):
        tok.lexeme = "y"
