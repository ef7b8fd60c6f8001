import unittest

from enum import Enum

from tokenstream.config import default_config
from tokenstream.errors import ParseError, UnexpectedToken
from tokenstream.format import color
from tokenstream.token import Diagnostic, Token


class Kind(Enum):
    NAME = 1
    OPERATOR = 2


SOURCE = """first line
x = y +
last line"""


def plain_config():
    config = default_config()
    config.override({"color": False})
    return config


class TestToken(unittest.TestCase):
    def test_defaults(self):
        tok = Token("abc", Kind.NAME)

        self.assertEqual(tok.position, 0)
        self.assertEqual(tok.source, "abc")
        self.assertEqual(tok.end, 3)

    def test_immutable(self):
        tok = Token("abc", Kind.NAME)

        with self.assertRaises(AttributeError):
            tok.content = "def"

        with self.assertRaises(AttributeError):
            del tok.type

    def test_line_and_column(self):
        position = SOURCE.index("y")
        tok = Token("y", Kind.NAME, position, SOURCE)

        self.assertEqual(tok.line, 2)
        self.assertEqual(tok.column, 5)
        self.assertEqual(SOURCE[tok.position:tok.end], tok.content)

    def test_concatenate(self):
        source = "a->b"
        minus = Token("-", Kind.OPERATOR, 1, source)
        greater = Token(">", Kind.OPERATOR, 2, source)

        arrow = minus.concatenate(greater, Kind.NAME)

        self.assertEqual(arrow.content, "->")
        self.assertEqual(arrow.type, Kind.NAME)
        self.assertEqual(arrow.position, 1)
        self.assertIs(arrow.source, source)
        self.assertEqual(minus.content, "-")

    def test_add_keeps_type(self):
        tok = Token("<", Kind.OPERATOR) + Token("=", Kind.NAME)

        self.assertEqual(tok.content, "<=")
        self.assertEqual(tok.type, Kind.OPERATOR)

    def test_equality(self):
        a = Token("x", Kind.NAME, 4, "abc x")
        b = Token("x", Kind.NAME, 4, "abc x")
        c = Token("x", Kind.NAME, 0)

        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))
        self.assertNotEqual(a, c)
        self.assertNotEqual(a, "x")

    def test_str(self):
        tok = Token("12", "NUMBER")

        self.assertEqual(str(tok), f"(NUMBER: {color('blue', '12')})")
        self.assertEqual(str(Token("a", Kind.NAME)),
                         f"(NAME: {color('blue', 'a')})")

    def test_repr(self):
        self.assertEqual(repr(Token("12", "NUMBER", 3)),
                         "Token('12', 'NUMBER', 3)")


class TestDiagnostics(unittest.TestCase):
    def token(self) -> Token:
        return Token("+", Kind.OPERATOR, SOURCE.index("+"), SOURCE)

    def test_diagnose(self):
        diagnostic = self.token().diagnose("oops", plain_config())

        self.assertEqual(diagnostic, Diagnostic(
            "oops", 2, "1 | first line\n2 | x = y +\n3 | last line"))

    def test_diagnose_highlights_content(self):
        diagnostic = self.token().diagnose("oops")

        self.assertIn("\x1b[41m+\x1b[0m", diagnostic.excerpt)

    def test_report(self):
        diagnostic = Diagnostic("oops", 2, "2 | x")

        self.assertEqual(diagnostic.report(width=5),
                         "=====\n2 | x\n=====\noops (line 2)")

    def test_error_raises(self):
        with self.assertLogs("tokenstream.diagnostic", "ERROR") as logs:
            with self.assertRaises(ParseError) as context:
                self.token().error("bad operator", config=plain_config())

        e = context.exception
        self.assertEqual(e.message, "bad operator")
        self.assertEqual(e.line, 2)
        self.assertIs(e.token.source, SOURCE)
        self.assertIn("2 | x = y +", e.excerpt)
        self.assertEqual(str(e), f"bad operator\n\n{e.excerpt}")
        self.assertIn("bad operator (line 2)", logs.output[0])

    def test_error_class(self):
        with self.assertLogs("tokenstream.diagnostic", "ERROR"):
            with self.assertRaises(UnexpectedToken):
                self.token().error("bad", UnexpectedToken)
