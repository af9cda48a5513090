from fastapi import FastAPI
from pydantic import BaseModel, ValidationError
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import List, Dict, Any, Optional
from models import ApiOk, ApiErr, Token, TokenKind as K
from token_source import TokenSource, TokenStream
from logging_config import setup_logging
import os, logging

LOG_LEVEL = os.getenv("PARSER_LOG_LEVEL", "INFO")
TRACE = os.getenv("PARSER_TRACE", "0") == "1"

TOO_DEEP = "nesting too deep"

log = logging.getLogger("luna.parser")
trace_log = logging.getLogger("luna.parser.trace")

@dataclass(frozen=True)
class Outcome:
    ok: bool
    error: Optional[str] = None
    token: Optional[Token] = None

    def __bool__(self): return self.ok

OK = Outcome(True)

class Parser:
    """
    Recursive descent recognizer over a token source with one token of
    lookahead. Rules return an Outcome; the first diagnostic set travels
    up unchanged, an expression failure carries none until a caller
    names it.
    """

    def __init__(self, source: TokenSource):
        self.init(source)

    def init(self, source: TokenSource):
        self.source = source
        self.la: Optional[Token] = None
        self.tok: Optional[Token] = None
        self.outcome: Optional[Outcome] = None

    @property
    def error(self) -> Optional[str]:
        return self.outcome.error if self.outcome is not None else None

    # lookahead

    def next(self) -> Token:
        self.tok = self.source.next_token()
        return self.tok

    def peek(self) -> Token:
        if self.la is None: self.la = self.next()
        return self.la

    def is_(self, kind: K) -> bool:
        return self.peek().type == kind

    def accept(self, kind: K) -> Optional[Token]:
        tok = self.peek()
        if tok.type != kind: return None
        self.la = None
        return tok

    def fail(self, msg: Optional[str] = None) -> Outcome:
        return Outcome(False, msg, self.tok)

    def trace(self, name: str):
        if trace_log.isEnabledFor(logging.DEBUG):
            trace_log.debug("%s %s", name, self.tok.describe() if self.tok else "-")

    # grammar

    def whitespace(self):
        # newline*
        while self.accept(K.NEWLINE): pass

    def primitive_expr(self) -> bool:
        # id | string | int | float
        self.trace("primitive_expr")
        return bool(self.accept(K.ID) or self.accept(K.STRING)
                    or self.accept(K.INT) or self.accept(K.FLOAT))

    def expr(self) -> bool:
        self.trace("expr")
        return self.primitive_expr()

    def expr_stmt(self) -> Outcome:
        self.trace("expr_stmt")
        if not self.expr(): return self.fail()
        return OK

    def body(self, msg: str) -> Outcome:
        # unnamed failures inside the block are reported in the caller's words
        if not self.is_(K.INDENT): return self.fail(msg)
        res = self.block()
        if not res and res.error is None: return Outcome(False, msg, res.token)
        return res

    def if_stmt(self) -> Outcome:
        # ('if' | 'unless') expr block ('else' 'if' expr block)* ('else' block)?
        self.trace("if_stmt")
        self.accept(K.IF) or self.accept(K.UNLESS)
        if not self.expr(): return self.fail("if missing condition")
        res = self.body("if missing block")
        if not res: return res
        while self.accept(K.ELSE):
            if not self.accept(K.IF):
                return self.body("else missing block")
            if not self.expr(): return self.fail("else if missing condition")
            res = self.body("else if missing block")
            if not res: return res
        return OK

    def while_stmt(self) -> Outcome:
        # ('while' | 'until') expr block
        self.trace("while_stmt")
        self.accept(K.WHILE) or self.accept(K.UNTIL)
        if not self.expr(): return self.fail("while missing condition")
        return self.body("while missing block")

    def stmt(self) -> Outcome:
        self.trace("stmt")
        if self.is_(K.IF) or self.is_(K.UNLESS): return self.if_stmt()
        if self.is_(K.WHILE) or self.is_(K.UNTIL): return self.while_stmt()
        return self.expr_stmt()

    def block(self) -> Outcome:
        # INDENT ws (stmt ws)+ OUTDENT
        self.trace("block")
        if not self.accept(K.INDENT): return self.fail("block missing indentation")
        self.whitespace()
        while True:
            res = self.stmt()
            if not res: return res
            self.whitespace()
            if self.accept(K.OUTDENT): return OK

    def program(self) -> Outcome:
        # ws (stmt ws)* EOS
        self.whitespace()
        self.trace("program")
        while not self.accept(K.EOS):
            res = self.stmt()
            if not res:
                if res.error is None: return Outcome(False, "statement missing expression", res.token)
                return res
            self.whitespace()
        return OK

    def parse(self) -> bool:
        try:
            self.outcome = self.program()
        except RecursionError:
            self.outcome = self.fail(TOO_DEEP)
        return self.outcome.ok

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(LOG_LEVEL, TRACE)
    yield

app = FastAPI(title="parser-svc", lifespan=lifespan)

@app.get("/healthz")
def healthz():
    return {"ok": True}

class ParseReq(BaseModel):
    tokens: List[Dict[str, Any]]

@app.post("/parse")
def parse_api(req: ParseReq):
    try:
        source = TokenStream.from_dicts(req.tokens)
    except ValidationError as e:
        err = e.errors()[0]
        loc = ".".join(str(x) for x in err["loc"])
        log.warning("rejected token stream: %s %s", loc, err["msg"])
        return ApiErr(code="E_PARSE_TOKEN", msg=f"Bad token field {loc}: {err['msg']}")

    p = Parser(source)
    if p.parse():
        log.info("accepted %d tokens", len(req.tokens))
        return ApiOk(data={"accepted": True, "tokens": len(req.tokens)})

    out = p.outcome
    tok = out.token
    log.warning("syntax error: %s at %s", out.error, tok.describe() if tok else "-")
    code = "E_PARSE_DEPTH" if out.error == TOO_DEEP else "E_PARSE_SYNTAX"
    return ApiErr(line=tok.line if tok else None, col=tok.col if tok else None,
                  code=code, msg=out.error)
