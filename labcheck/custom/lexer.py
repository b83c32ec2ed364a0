"""
Tokenizer for check scripts.
"""

from dataclasses import dataclass

from labcheck.core.errors import CheckScriptSyntaxError

KEYWORDS = frozenset(
    {"let", "return", "and", "or", "not", "in", "if", "else", "for", "true", "false", "null", "True", "False", "None"}
)

# Longest operators first so "==" wins over "="
OPERATORS = (
    "==",
    "!=",
    "<=",
    ">=",
    "&&",
    "||",
    "<",
    ">",
    "+",
    "-",
    "*",
    "/",
    "%",
    "(",
    ")",
    "[",
    "]",
    "{",
    "}",
    ",",
    ":",
    ".",
    "=",
    ";",
    "!",
)

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", "'": "'", '"': '"', "0": "\0"}


def _is_digit(char: str) -> bool:
    # ASCII only; str.isdigit() also accepts superscripts that int() rejects
    return "0" <= char <= "9"


@dataclass(frozen=True)
class Token:
    kind: str  # NUMBER, STRING, NAME, KEYWORD, OP, NEWLINE, EOF
    value: object
    line: int
    column: int

    def is_op(self, *ops: str) -> bool:
        return self.kind == "OP" and self.value in ops

    def is_keyword(self, *words: str) -> bool:
        return self.kind == "KEYWORD" and self.value in words


class Lexer:
    """Turns script text into tokens; newlines inside brackets are ignored."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1
        self.depth = 0

    def tokenize(self) -> list[Token]:
        tokens: list[Token] = []
        while self.pos < len(self.text):
            char = self.text[self.pos]

            if char == "\n":
                if self.depth == 0:
                    tokens.append(Token("NEWLINE", "\n", self.line, self.column))
                self._advance()
                continue
            if char in " \t\r":
                self._advance()
                continue
            if char == "#" or self.text.startswith("//", self.pos):
                while self.pos < len(self.text) and self.text[self.pos] != "\n":
                    self._advance()
                continue
            if _is_digit(char):
                tokens.append(self._number())
                continue
            if char in "\"'":
                tokens.append(self._string(char))
                continue
            if char.isalpha() or char == "_":
                tokens.append(self._name())
                continue

            tokens.append(self._operator())

        tokens.append(Token("EOF", None, self.line, self.column))
        return tokens

    def _advance(self, count: int = 1) -> None:
        for _ in range(count):
            if self.text[self.pos] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def _number(self) -> Token:
        line, column, start = self.line, self.column, self.pos
        while self.pos < len(self.text) and _is_digit(self.text[self.pos]):
            self._advance()
        is_float = False
        if (
            self.pos + 1 < len(self.text)
            and self.text[self.pos] == "."
            and _is_digit(self.text[self.pos + 1])
        ):
            is_float = True
            self._advance()
            while self.pos < len(self.text) and _is_digit(self.text[self.pos]):
                self._advance()
        raw = self.text[start : self.pos]
        return Token("NUMBER", float(raw) if is_float else int(raw), line, column)

    def _string(self, quote: str) -> Token:
        line, column = self.line, self.column
        self._advance()
        chars: list[str] = []
        while True:
            if self.pos >= len(self.text) or self.text[self.pos] == "\n":
                raise CheckScriptSyntaxError("Unterminated string literal", line, column)
            char = self.text[self.pos]
            if char == quote:
                self._advance()
                break
            if char == "\\" and self.pos + 1 < len(self.text):
                escaped = self.text[self.pos + 1]
                chars.append(_ESCAPES.get(escaped, "\\" + escaped))
                self._advance(2)
                continue
            chars.append(char)
            self._advance()
        return Token("STRING", "".join(chars), line, column)

    def _name(self) -> Token:
        line, column, start = self.line, self.column, self.pos
        while self.pos < len(self.text) and (self.text[self.pos].isalnum() or self.text[self.pos] == "_"):
            self._advance()
        word = self.text[start : self.pos]
        return Token("KEYWORD" if word in KEYWORDS else "NAME", word, line, column)

    def _operator(self) -> Token:
        line, column = self.line, self.column
        for op in OPERATORS:
            if self.text.startswith(op, self.pos):
                if op in "([{":
                    self.depth += 1
                elif op in ")]}":
                    self.depth = max(0, self.depth - 1)
                self._advance(len(op))
                return Token("OP", op, line, column)
        raise CheckScriptSyntaxError(f"Unexpected character {self.text[self.pos]!r}", line, column)


def tokenize(text: str) -> list[Token]:
    return Lexer(text).tokenize()
