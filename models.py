from enum import Enum
from pydantic import BaseModel, ConfigDict
from typing import Optional, Any, Literal

class TokenKind(str, Enum):
    ID = "ID"
    STRING = "STRING"
    INT = "INT"
    FLOAT = "FLOAT"
    IF = "IF"
    UNLESS = "UNLESS"
    ELSE = "ELSE"
    WHILE = "WHILE"
    UNTIL = "UNTIL"
    INDENT = "INDENT"
    OUTDENT = "OUTDENT"
    NEWLINE = "NEWLINE"
    EOS = "EOS"

class Token(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: TokenKind
    lexeme: str = ""
    line: int = 0
    col: int = 0
    value: Optional[Any] = None

    def describe(self) -> str:
        text = f"{self.type.value}"
        if self.lexeme: text += f" {self.lexeme!r}"
        return f"{text} @ {self.line}:{self.col}"

class ApiErr(BaseModel):
    ok: Literal[False] = False
    phase: Literal["parse"] = "parse"
    line: Optional[int] = None
    col: Optional[int] = None
    code: str
    msg: str

class ApiOk(BaseModel):
    ok: Literal[True] = True
    data: Any
