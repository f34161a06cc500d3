"""Syntax tree and recursive-descent parser for the lam language.

The grammar is LL(1) and is parsed with a single token of pushback:

```
<expr> ::= "(" <expr> ")"
         | "lam" <identifier> <expr>        ; single-parameter function
         | "app" <expr> <expr>              ; application of a function to one argument
         | <number> | <bool> | <identifier>
```

`lam` and `app` are only keywords at the head of an expression: everywhere else (as a lambda parameter, or referenced
as a variable) they are ordinary identifiers.

Parsing never raises. Errors are returned as error nodes, and every production checks its subexpressions and returns
the first error node it encounters unchanged.
"""

import sys
from dataclasses import dataclass
from enum import Enum

from laminterp.lang.error import ExpectError, GenericException, ParseError
from laminterp.lang.lexical import Lexer, TokenType

if hasattr(sys, "set_int_max_str_digits"):
    sys.set_int_max_str_digits(0)  # number literals have no length limit


class SyntaxType(Enum):
    """Syntactic categories the parser can expect. The values are the names used in error messages."""
    EXPRESSION = "expression"
    RIGHT_PAREN = "')'"
    NUMBER = "number"
    BOOL = "bool"
    IDENTIFIER = "identifier"
    EOF = "EOF"

    def __str__(self):
        return self.value


class NodeType(Enum):
    ERROR = "error"            # val is a ParseError
    APP = "app"                # val is an AppNode
    LAM = "lam"                # val is a LamNode
    IDENTIFIER = "identifier"  # val is the identifier's name
    NUMBER = "number"          # val is an int
    BOOL = "bool"              # val is a bool


@dataclass(frozen=True)
class AppNode:
    fn: "Node"
    arg: "Node"


@dataclass(frozen=True)
class LamNode:
    param: str
    body: "Node"


@dataclass(frozen=True)
class Node:
    """Generic node in the syntax tree. See NodeType for the payload stored in val."""
    type: NodeType
    val: object
    INDENT = "    "

    @property
    def is_leaf(self):
        return self.type in (NodeType.IDENTIFIER, NodeType.NUMBER, NodeType.BOOL)

    @property
    def literal(self):
        """Source text of a leaf node."""
        if self.type is NodeType.BOOL:
            return "true" if self.val else "false"
        return str(self.val)

    def display(self, indents=0):
        """Recursively displays the tree in a readable format.

        Format:
        lam <param> <leaf>
        lam <param>
            <body>
        app <leaf> <leaf>
        app
            <fn>
            <arg>
        """
        indent = Node.INDENT * indents

        if self.is_leaf:
            return indent + self.literal

        elif self.type is NodeType.LAM:
            lam = self.val
            if lam.body.is_leaf:
                return f"{indent}lam {lam.param} {lam.body.literal}"
            return f"{indent}lam {lam.param}\n{lam.body.display(indents + 1)}"

        elif self.type is NodeType.APP:
            app = self.val
            if app.fn.is_leaf and app.arg.is_leaf:
                return f"{indent}app {app.fn.literal} {app.arg.literal}"
            return f"{indent}app\n{app.fn.display(indents + 1)}\n{app.arg.display(indents + 1)}"

        return f"{indent}<error: {self.val}>"

    def __str__(self):
        if self.type is NodeType.ERROR:
            return str(self.val)
        return self.display()


def error_node(error):
    return Node(NodeType.ERROR, error)


class Parser:
    """Parser state over a single source string."""

    def __init__(self, source):
        self.lexer = Lexer(source)
        self.buf = None  # storage for unnext

    def next(self):
        """Returns the next token, taking it from the pushback buffer if a token was saved there."""
        if self.buf is not None:
            token, self.buf = self.buf, None
            return token
        return self.lexer.next_token()

    def unnext(self, token):
        """Saves token to be returned by the next call to next. There's room for only one token."""
        if self.buf is not None:
            raise GenericException("internal parser error: multiple unnext", internal=True)
        self.buf = token

    @staticmethod
    def expect_error(want, token):
        return error_node(ExpectError(want, token.type, token.start, token.end))

    def parse_identifier(self):
        token = self.next()
        if token.type is not TokenType.IDENTIFIER:
            return Parser.expect_error(SyntaxType.IDENTIFIER, token)
        return Node(NodeType.IDENTIFIER, token.val)

    def parse_number(self):
        """Precondition: the next token is a number token."""
        token = self.next()
        try:
            return Node(NodeType.NUMBER, int(token.val, 10))
        except ValueError:
            return error_node(ParseError(f"bad number: '{token.val}'", token.start, token.end))

    def parse_bool(self):
        """Precondition: the next token is a bool token."""
        token = self.next()
        if token.val not in ("true", "false"):
            # bools are validated by the lexer
            return error_node(ParseError(f"bad bool: '{token.val}'", token.start, token.end))
        return Node(NodeType.BOOL, token.val == "true")

    def parse_app(self):
        """Parses "app" <expr> <expr>. Precondition: the 'app' token has been consumed."""
        fn = self.parse_expression()
        if fn.type is NodeType.ERROR:
            return fn

        arg = self.parse_expression()
        if arg.type is NodeType.ERROR:
            return arg

        return Node(NodeType.APP, AppNode(fn, arg))

    def parse_lam(self):
        """Parses "lam" <identifier> <expr>. Precondition: the 'lam' token has been consumed."""
        param = self.parse_identifier()
        if param.type is NodeType.ERROR:
            return param

        body = self.parse_expression()
        if body.type is NodeType.ERROR:
            return body

        return Node(NodeType.LAM, LamNode(param.val, body))

    def parse_expression(self):
        token = self.next()

        if token.type is TokenType.LEFT_PAREN:
            expr = self.parse_expression()
            if expr.type is NodeType.ERROR:
                return expr

            token = self.next()
            if token.type is not TokenType.RIGHT_PAREN:
                return Parser.expect_error(SyntaxType.RIGHT_PAREN, token)
            return expr

        elif token.type is TokenType.RIGHT_PAREN:
            return Parser.expect_error(SyntaxType.EXPRESSION, token)

        elif token.type is TokenType.IDENTIFIER and token.val == "lam":
            return self.parse_lam()

        elif token.type is TokenType.IDENTIFIER and token.val == "app":
            return self.parse_app()

        elif token.type is TokenType.NUMBER:
            self.unnext(token)
            return self.parse_number()

        elif token.type is TokenType.BOOL:
            self.unnext(token)
            return self.parse_bool()

        elif token.type is TokenType.IDENTIFIER:
            self.unnext(token)
            return self.parse_identifier()

        elif token.type is TokenType.ERROR:
            return error_node(token.error())

        elif token.type is TokenType.EOF:
            return Parser.expect_error(SyntaxType.EXPRESSION, token)

        raise GenericException(f"illegal token: {token}", internal=True)

    def parse(self):
        """Parses a whole program: one expression followed by the end of input."""
        root = self.parse_expression()
        if root.type is NodeType.ERROR:
            return root

        token = self.next()
        if token.type is not TokenType.EOF:
            return Parser.expect_error(SyntaxType.EOF, token)
        return root


def parse(source):
    """Parses source into a syntax tree. Never raises: failures are returned as an error node.

    Nesting depth is bounded by Python's recursion limit; deeper programs give a parse error.
    """
    try:
        return Parser(source).parse()
    except RecursionError:
        return error_node(ParseError("maximum nesting depth exceeded"))


def is_incomplete(node):
    """Whether node is a parse error caused by reaching the end of input, i.e. more input could complete it."""
    return node.type is NodeType.ERROR and isinstance(node.val, ExpectError) and node.val.got is TokenType.EOF
