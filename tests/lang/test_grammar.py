import sys
import unittest

from laminterp.lang.error import ExpectError, GenericException, ParseError
from laminterp.lang.grammar import AppNode, LamNode, Node, NodeType, Parser, SyntaxType, is_incomplete, parse
from laminterp.lang.lexical import Token, TokenType


def app(fn, arg):
    return Node(NodeType.APP, AppNode(fn, arg))


def lam(param, body):
    return Node(NodeType.LAM, LamNode(param, body))


def ident(name):
    return Node(NodeType.IDENTIFIER, name)


def num(n):
    return Node(NodeType.NUMBER, n)


def error(msg):
    return Node(NodeType.ERROR, ParseError(msg))


X, Y, F = ident("x"), ident("y"), ident("f")
IF, GT, ADD = ident("if"), ident("gt"), ident("add")
TRUE = Node(NodeType.BOOL, True)
FALSE = Node(NodeType.BOOL, False)


class ParserTestCase(unittest.TestCase):

    def test_parse(self):
        cases = {
            "2": num(2),
            "-7": num(-7),
            "true": TRUE,
            "false": FALSE,
            "x": X,
            "(x)": X,
            "(((x)))": X,
            " ( x ) ": X,
            "app (lam x x) 2": app(lam("x", X), num(2)),
            "app app add 1 3": app(app(ADD, num(1)), num(3)),
            "lam x x": lam("x", X),
            "app app gt 1 2": app(app(GT, num(1)), num(2)),
            "app app app if (app app gt 3 1) 10 5": app(app(app(IF, app(app(GT, num(3)), num(1))), num(10)), num(5)),
            "app app (app (lam f lam y lam x (app (app f y) x)) (lam x lam y x)) 3 4": app(app(
                app(lam("f", lam("y", lam("x", app(app(F, Y), X)))), lam("x", lam("y", X))),
                num(3)), num(4)),
            "app\nlam x\n  x\n1": app(lam("x", X), num(1)),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse(case), case)

    def test_contextual_keywords(self):
        cases = {
            "lam lam x": lam("lam", X),
            "lam app 1": lam("app", num(1)),
            "app lam app 2 1": app(lam("app", num(2)), num(1)),
            "(lam lam (lam app x))": lam("lam", lam("app", X)),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse(case), case)

        # in head position they are always keywords
        should_fail = {
            "lam lam lam": "expecting identifier; got EOF",
            "lam app app": "expecting expression; got EOF",
        }
        for case, expected in should_fail.items():
            self.assertEqual(error(expected), parse(case), case)

    def test_big_numbers(self):
        digits = "1234567890" * 30
        cases = {digits: int(digits), "-" + digits: -int(digits), "007": 7, "-0": 0}
        for case, expected in cases.items():
            self.assertEqual(num(expected), parse(case), case)

    def test_long_literals(self):
        digits = "9" * 5000
        self.assertEqual(num(10 ** 5000 - 1), parse(digits))
        self.assertEqual(num(1 - 10 ** 5000), parse("-" + digits))

    def test_nesting_depth(self):
        depth = sys.getrecursionlimit() + 100
        root = parse("(" * depth + "1" + ")" * depth)
        self.assertEqual(error("maximum nesting depth exceeded"), root)
        self.assertFalse(is_incomplete(root))

        depth = 50
        self.assertEqual(num(1), parse("(" * depth + "1" + ")" * depth))

    def test_errors(self):
        cases = {
            "": "expecting expression; got EOF",
            "()": "expecting expression; got ')'",
            ")": "expecting expression; got ')'",
            "(1": "expecting ')'; got EOF",
            "(1 2)": "expecting ')'; got number",
            "1)": "expecting EOF; got ')'",
            "1 2": "expecting EOF; got number",
            "x (": "expecting EOF; got '('",
            "2s": "bad number syntax: '2s'",
            "lam 1 x": "expecting identifier; got number",
            "lam true x": "expecting identifier; got bool",
            "lam (x) x": "expecting identifier; got '('",
            "lam x lam 1 y": "expecting identifier; got number",
            "app (lam 1 x) 2": "expecting identifier; got number",
            "app (lam x x) (lam 1 x)": "expecting identifier; got number",
            "app x": "expecting expression; got EOF",
            "app x ]": "illegal character: ']'",
            "lam x": "expecting expression; got EOF",
        }
        for case, expected in cases.items():
            root = parse(case)
            self.assertEqual(error(expected), root, case)
            self.assertEqual(expected, str(root), case)

    def test_expect_error(self):
        root = parse("(1 2)")
        self.assertIsInstance(root.val, ExpectError)
        self.assertEqual(SyntaxType.RIGHT_PAREN, root.val.want)
        self.assertEqual(TokenType.NUMBER, root.val.got)
        self.assertEqual((3, 4), (root.val.start, root.val.end))

        root = parse("lam x' x")
        self.assertNotIsInstance(root.val, ExpectError)
        self.assertEqual((4, 6), (root.val.start, root.val.end))

    def test_is_incomplete(self):
        should_pass = ["", "lam x", "(", "(1", "app", "app f", "app (lam x", "lam"]
        for case in should_pass:
            self.assertTrue(is_incomplete(parse(case)), case)

        should_fail = ["1", "lam x x", "1)", "()", "lam 1 x", "3x", "(1 2", "x ]"]
        for case in should_fail:
            self.assertFalse(is_incomplete(parse(case)), case)

    def test_unnext(self):
        parser = Parser("x y")
        token = parser.next()
        parser.unnext(token)
        self.assertRaises(GenericException, parser.unnext, token)
        self.assertEqual(Token(TokenType.IDENTIFIER, "x"), parser.next())
        self.assertEqual(Token(TokenType.IDENTIFIER, "y"), parser.next())

    def test_display(self):
        cases = {
            "x": "x",
            "-3": "-3",
            "false": "false",
            "lam x x": "lam x x",
            "app f 1": "app f 1",
            "lam x lam y x": "lam x\n    lam y x",
            "app (lam x x) 2": "app\n    lam x x\n    2",
            "app app add 1 3": "app\n    app add 1\n    3",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse(case).display(), case)

        self.assertEqual("    lam x x", parse("lam x x").display(1))


if __name__ == '__main__':
    unittest.main()
