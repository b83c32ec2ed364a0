"""
Recursive-descent parser for check scripts.

Precedence, lowest first: conditional (a if c else b), or, and, not,
comparison, + -, * / %, unary minus, postfix (call, index, .field).
"""

from labcheck.core.errors import CheckScriptSyntaxError
from labcheck.custom import syntax as ast
from labcheck.custom.lexer import Token, tokenize

_COMPARISON_OPS = ("==", "!=", "<", "<=", ">", ">=")
_CONSTANTS = {"true": True, "True": True, "false": False, "False": False, "null": None, "None": None}


class Parser:
    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.pos = 0

    # --- Token helpers ---

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def _peek(self, offset: int = 1) -> Token:
        index = min(self.pos + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def _next(self) -> Token:
        token = self.current
        if token.kind != "EOF":
            self.pos += 1
        return token

    def _error(self, message: str, token: Token | None = None) -> CheckScriptSyntaxError:
        token = token or self.current
        return CheckScriptSyntaxError(message, token.line, token.column)

    def _expect_op(self, op: str) -> Token:
        if not self.current.is_op(op):
            raise self._error(f"Expected '{op}' but found {self._describe(self.current)}")
        return self._next()

    def _expect_name(self) -> str:
        if self.current.kind != "NAME":
            raise self._error(f"Expected a name but found {self._describe(self.current)}")
        return str(self._next().value)

    @staticmethod
    def _describe(token: Token) -> str:
        if token.kind == "EOF":
            return "end of script"
        if token.kind == "NEWLINE":
            return "end of line"
        return repr(token.value)

    def _at_statement_end(self) -> bool:
        return self.current.kind in ("NEWLINE", "EOF") or self.current.is_op(";")

    # --- Statements ---

    def parse_program(self) -> ast.Program:
        statements: list[ast.Statement] = []
        while True:
            while self.current.kind == "NEWLINE" or self.current.is_op(";"):
                self._next()
            if self.current.kind == "EOF":
                break
            statements.append(self._statement())
            if not self._at_statement_end():
                raise self._error(f"Unexpected {self._describe(self.current)}")
        return ast.Program(tuple(statements))

    def _statement(self) -> ast.Statement:
        if self.current.is_keyword("let"):
            self._next()
            name = self._expect_name()
            self._expect_op("=")
            return ast.Let(name, self.expression())
        if self.current.is_keyword("return"):
            self._next()
            if self._at_statement_end():
                return ast.Return(ast.Literal(None))
            return ast.Return(self.expression())
        if self.current.kind == "NAME" and self._peek().is_op("="):
            name = str(self._next().value)
            self._next()
            return ast.Let(name, self.expression())
        return ast.ExprStatement(self.expression())

    # --- Expressions ---

    def expression(self) -> ast.Expr:
        body = self._or()
        if self.current.is_keyword("if"):
            self._next()
            test = self._or()
            if not self.current.is_keyword("else"):
                raise self._error("Expected 'else' in conditional expression")
            self._next()
            return ast.Conditional(body, test, self.expression())
        return body

    def _or(self) -> ast.Expr:
        left = self._and()
        while self.current.is_keyword("or") or self.current.is_op("||"):
            self._next()
            left = ast.Logical("or", left, self._and())
        return left

    def _and(self) -> ast.Expr:
        left = self._not()
        while self.current.is_keyword("and") or self.current.is_op("&&"):
            self._next()
            left = ast.Logical("and", left, self._not())
        return left

    def _not(self) -> ast.Expr:
        if self.current.is_keyword("not") or self.current.is_op("!"):
            self._next()
            return ast.Unary("not", self._not())
        return self._comparison()

    def _comparison(self) -> ast.Expr:
        left = self._additive()
        if self.current.kind == "OP" and self.current.value in _COMPARISON_OPS:
            op = str(self._next().value)
            return ast.Compare(op, left, self._additive())
        if self.current.is_keyword("in"):
            self._next()
            return ast.Compare("in", left, self._additive())
        if self.current.is_keyword("not") and self._peek().is_keyword("in"):
            self._next()
            self._next()
            return ast.Compare("not in", left, self._additive())
        return left

    def _additive(self) -> ast.Expr:
        left = self._term()
        while self.current.is_op("+", "-"):
            op = str(self._next().value)
            left = ast.Binary(op, left, self._term())
        return left

    def _term(self) -> ast.Expr:
        left = self._unary()
        while self.current.is_op("*", "/", "%"):
            op = str(self._next().value)
            left = ast.Binary(op, left, self._unary())
        return left

    def _unary(self) -> ast.Expr:
        if self.current.is_op("-"):
            self._next()
            return ast.Unary("-", self._unary())
        return self._postfix()

    def _postfix(self) -> ast.Expr:
        expr = self._primary()
        while True:
            if self.current.is_op("("):
                if not isinstance(expr, ast.Name):
                    raise self._error("Only builtin functions can be called")
                self._next()
                expr = ast.Call(expr.id, self._arguments(")"))
            elif self.current.is_op("["):
                self._next()
                index = self.expression()
                self._expect_op("]")
                expr = ast.Index(expr, index)
            elif self.current.is_op("."):
                self._next()
                name = self._expect_name()
                if self.current.is_op("("):
                    self._next()
                    expr = ast.MethodCall(expr, name, self._arguments(")"))
                else:
                    expr = ast.Attribute(expr, name)
            else:
                return expr

    def _arguments(self, closing: str) -> tuple[ast.Expr, ...]:
        args: list[ast.Expr] = []
        while not self.current.is_op(closing):
            args.append(self.expression())
            if not self.current.is_op(","):
                break
            self._next()
        self._expect_op(closing)
        return tuple(args)

    def _primary(self) -> ast.Expr:
        token = self.current
        if token.kind in ("NUMBER", "STRING"):
            self._next()
            return ast.Literal(token.value)
        if token.kind == "KEYWORD" and token.value in _CONSTANTS:
            self._next()
            return ast.Literal(_CONSTANTS[str(token.value)])
        if token.kind == "NAME":
            self._next()
            return ast.Name(str(token.value))
        if token.is_op("("):
            self._next()
            expr = self.expression()
            self._expect_op(")")
            return expr
        if token.is_op("["):
            self._next()
            return self._list_display()
        if token.is_op("{"):
            self._next()
            return self._dict_display()
        raise self._error(f"Unexpected {self._describe(token)}")

    def _list_display(self) -> ast.Expr:
        if self.current.is_op("]"):
            self._next()
            return ast.ListDisplay(())
        first = self.expression()
        if self.current.is_keyword("for"):
            self._next()
            variable = self._expect_name()
            if not self.current.is_keyword("in"):
                raise self._error("Expected 'in' in comprehension")
            self._next()
            iterable = self._or()
            condition = None
            if self.current.is_keyword("if"):
                self._next()
                condition = self._or()
            self._expect_op("]")
            return ast.Comprehension(first, variable, iterable, condition)
        items = [first]
        while self.current.is_op(","):
            self._next()
            if self.current.is_op("]"):
                break
            items.append(self.expression())
        self._expect_op("]")
        return ast.ListDisplay(tuple(items))

    def _dict_display(self) -> ast.Expr:
        pairs: list[tuple[ast.Expr, ast.Expr]] = []
        while not self.current.is_op("}"):
            key_token = self.current
            if key_token.kind == "NAME" and self._peek().is_op(":"):
                # bare keys like {passed: true} are strings
                self._next()
                key: ast.Expr = ast.Literal(key_token.value)
            else:
                key = self.expression()
            self._expect_op(":")
            pairs.append((key, self.expression()))
            if not self.current.is_op(","):
                break
            self._next()
        self._expect_op("}")
        return ast.DictDisplay(tuple(pairs))


def parse(text: str) -> ast.Program:
    """Parse script text into a Program, raising CheckScriptSyntaxError on bad input."""
    try:
        return Parser(tokenize(text)).parse_program()
    except RecursionError as e:
        raise CheckScriptSyntaxError("Script is nested too deeply") from e
