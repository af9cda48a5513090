import pytest
from models import Token, TokenKind
from parser import Parser
from token_source import TokenStream


def make_tokens(*kinds):
    return [Token(type=TokenKind(k), lexeme=k.lower(), line=i + 1, col=1)
            for i, k in enumerate(kinds)]


class CountingSource:
    """Token source that records how many tokens were pulled."""

    def __init__(self, kinds):
        self.stream = TokenStream(make_tokens(*kinds))
        self.pulled = 0

    def next_token(self):
        self.pulled += 1
        return self.stream.next_token()


@pytest.fixture
def toks():
    """Build tokens from kind names, one per line."""
    return make_tokens


@pytest.fixture
def parse():
    """Parse a stream of kind names; returns (verdict, parser)."""
    def run(*kinds):
        p = Parser(TokenStream(make_tokens(*kinds)))
        return p.parse(), p
    return run


@pytest.fixture
def counting_source():
    return CountingSource
