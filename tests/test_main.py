import unittest

from pathlib import Path
from tempfile import TemporaryDirectory

from click.testing import CliRunner

from tokenstream.__main__ import main
from tokenstream.config import ConfigError
from tokenstream.errors import TokenizeError
from tokenstream.main import (
    FileEvalError,
    RulesNotFound,
    create_config,
    load_rules,
    tokenize_file
)

RULES = """
from enum import StrEnum


class Kind(StrEnum):
    NUMBER = "number"
    PLUS = "plus"


RULES = [
    (r"\\d+", Kind.NUMBER),
    (r"\\+", Kind.PLUS),
]
"""


class FilesMixin:
    def setUp(self):
        self._tmp = TemporaryDirectory()
        self.directory = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def write(self, name: str, text: str) -> Path:
        path = self.directory / name
        path.write_text(text, encoding="UTF-8")
        return path


class TestMain(FilesMixin, unittest.TestCase):
    def test_load_rules(self):
        rules = load_rules(self.write("rules.py", RULES))

        self.assertEqual([tp.name for _, tp in rules], ["NUMBER", "PLUS"])

    def test_rules_not_defined(self):
        with self.assertRaises(RulesNotFound):
            load_rules(self.write("rules.py", "X = 1\n"))

    def test_rules_syntax_error(self):
        with self.assertRaises(FileEvalError):
            load_rules(self.write("rules.py", "RULES = [\n"))

    def test_rules_exit(self):
        with self.assertRaises(FileEvalError):
            load_rules(self.write("rules.py", "import sys\nsys.exit(1)\n"))

    def test_tokenize_file(self):
        rules = load_rules(self.write("rules.py", RULES))
        source = self.write("input.txt", "1 + 22\n+ 333\n")

        stream = tokenize_file(source, rules)

        self.assertEqual([(tok.content, tok.line) for tok in stream],
                         [("1", 1), ("+", 1), ("22", 1), ("+", 2),
                          ("333", 2)])

    def test_create_config(self):
        config_file = self.write("config.py", "context_lines = 3\n")

        config = create_config(config_file, ["color=no"])

        self.assertEqual(config.context_lines, 3)
        self.assertEqual(config.color, False)
        self.assertEqual(create_config().context_lines, 1)

    def test_create_config_error(self):
        with self.assertRaises(ConfigError):
            create_config(options=["bar_width=wide"])


class TestCommandLine(FilesMixin, unittest.TestCase):
    def setUp(self):
        super().setUp()
        self.runner = CliRunner()
        self.rules = self.write("rules.py", RULES)

    def test_tokenize(self):
        source = self.write("input.txt", "1 + 22\n  + 3")

        result = self.runner.invoke(main, [
            "tokenize", str(source), "--rules", str(self.rules),
            "-d", "color=false"
        ])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.splitlines(), [
            "1:1\t(NUMBER: 1)",
            "1:3\t(PLUS: +)",
            "1:5\t(NUMBER: 22)",
            "2:3\t(PLUS: +)",
            "2:5\t(NUMBER: 3)",
        ])

    def test_tokenize_error(self):
        source = self.write("input.txt", "1 - 2")

        result = self.runner.invoke(main, [
            "tokenize", str(source), "-r", str(self.rules)
        ])

        self.assertEqual(result.exit_code, 1)
        self.assertIsInstance(result.exception, TokenizeError)

    def test_tokenize_requires_rules(self):
        source = self.write("input.txt", "1")

        result = self.runner.invoke(main, ["tokenize", str(source)])

        self.assertEqual(result.exit_code, 2)

    def test_options(self):
        result = self.runner.invoke(main, ["options"])

        self.assertEqual(result.exit_code, 0)
        self.assertIn("context_lines (int, default 1)", result.output)
        self.assertIn("whitespace", result.output)
