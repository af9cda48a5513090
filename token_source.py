from typing import Any, Dict, Iterable, List, Protocol
from models import Token, TokenKind

class TokenSource(Protocol):
    def next_token(self) -> Token: ...

class TokenStream:
    """Pull-based token source; once exhausted it keeps returning EOS."""

    def __init__(self, tokens: Iterable[Token]):
        self.it = iter(tokens)
        self.last = None
        self.done = False

    @classmethod
    def from_dicts(cls, rows: List[Dict[str, Any]]) -> "TokenStream":
        return cls([Token.model_validate(r) for r in rows])

    def next_token(self) -> Token:
        if not self.done:
            tok = next(self.it, None)
            if tok is not None and tok.type != TokenKind.EOS:
                self.last = tok
                return tok
            self.done = True
            if tok is not None: self.last = tok
        if self.last is not None and self.last.type == TokenKind.EOS:
            return self.last
        line = self.last.line if self.last else 0
        col = self.last.col if self.last else 0
        self.last = Token(type=TokenKind.EOS, line=line, col=col)
        return self.last
