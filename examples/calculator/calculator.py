import math

from argparse import ArgumentParser
from enum import StrEnum

from tokenstream import (
    TokenStream,
    TokenStreamError,
    ParseError,
    tokenize
)


WELCOME_MSG = """
interactive calculator
type .help to get help, .quit to quit
"""

HELP_MSG = """
interactive calculator -- help
operations:
  a + b
  a - b
  a ** b
  a * b
  a / b
functions:
  sqrt(x)   -- square root of x
  mod(a, b) -- a % b
commands:
  .help -- print this message
  .quit -- quit the calculator
"""

FUNCTIONS = {
    "sqrt": ((lambda x: math.sqrt(x)), 1),
    "mod": ((lambda a, b: a % b), 2)
}

VARIABLES = {
    "pi": math.pi
}


class Kind(StrEnum):
    NUMBER = "number"
    NAME = "name"
    OPERATOR = "operator"
    PUNCT = "punct"


RULES = [
    (r"\d+(\.\d*)?", Kind.NUMBER),
    (r"[A-Za-z_]\w*", Kind.NAME),
    (r"\*\*|[-+*/]", Kind.OPERATOR),
    (r"[(),]", Kind.PUNCT),
]

BINARY = {
    "+": (1, lambda a, b: a + b),
    "-": (1, lambda a, b: a - b),
    "*": (2, lambda a, b: a * b),
    "/": (2, lambda a, b: a / b),
    "**": (3, lambda a, b: a ** b),
}

RIGHT_ASSOC = {"**"}


class CalculatorError(Exception):
    pass


class Calculator:

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def evaluate(self, text: str) -> int | float:
        stream = tokenize(text, RULES)
        result = self.expression(stream)
        if stream:
            stream.get_token().error(f"Unexpected token '{stream.get()}'")
        return result

    def expression(self, stream: TokenStream, min_prec: int = 1):
        lhs = self.unary(stream)

        while stream.has(Kind.OPERATOR):
            op = stream.get()
            prec, fn = BINARY[op]
            if prec < min_prec:
                break
            stream.next()
            next_prec = prec if op in RIGHT_ASSOC else prec + 1
            rhs = self.expression(stream, next_prec)
            lhs = fn(lhs, rhs)

        return lhs

    def unary(self, stream: TokenStream):
        if stream.optional("-"):
            return -self.unary(stream)
        stream.optional("+")
        return self.primary(stream)

    def primary(self, stream: TokenStream):
        if not stream:
            raise CalculatorError("unexpected end of input")

        if stream.has("("):
            group = stream.end_of("(", ")")
            result = self.expression(group)
            if group:
                group.get_token().error(f"Unexpected token '{group.get()}'")
            return result

        if stream.has(Kind.NUMBER):
            content = stream.next()
            return float(content) if '.' in content else int(content)

        name = stream.next(Kind.NAME)
        if stream.has("("):
            args = stream.end_of("(", ")")
            values = args.delimited_list(self.expression, ",")
            return self.function(name, *values)
        return self.variable(name)

    def function(self, name: str, *args: int | float):
        if self.verbose:
            args_str = ', '.join(str(i) for i in args)
            print(f"  (verbose) function: {name}, args: {args_str}")

        fn_info = FUNCTIONS.get(name)
        if not fn_info:
            raise CalculatorError(f"no such function: {name}")

        fn, args_count = fn_info
        if len(args) != args_count:
            raise CalculatorError(
                f"wrong number of arguments for function {name}: "
                f"expected {args_count}, got {len(args)}"
            )

        return fn(*args)

    def variable(self, name: str):
        if self.verbose:
            print(f"  (verbose) variable: {name}")

        var = VARIABLES.get(name)
        if var is None:
            raise CalculatorError(f"no such variable: {name}")
        return var


def evaluate(text: str) -> int | float:
    return Calculator().evaluate(text)


def run(calc: Calculator, line: str) -> bool:
    line = line.strip()
    if not line:
        return True
    if line == ".quit":
        return False
    if line == ".help":
        print(HELP_MSG.strip())
        return True

    try:
        print(f"= {calc.evaluate(line)}")
    except ParseError as e:
        print(e.message)
    except (TokenStreamError, CalculatorError) as e:
        print(e)
    except ZeroDivisionError:
        print("attempt to divide by zero")
    return True


def main():
    argparser = ArgumentParser()
    argparser.add_argument("file", nargs='?')
    argparser.add_argument("--verbose", "-v", action="store_true")
    ns = argparser.parse_args()

    calc = Calculator(ns.verbose)

    if ns.file:
        with open(ns.file, 'r', encoding="UTF-8") as fin:
            for line in fin:
                if not run(calc, line):
                    break
        return

    print(WELCOME_MSG.strip())

    while True:
        try:
            if not run(calc, input('> ')):
                break
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print()


if __name__ == "__main__":
    exit(main())
