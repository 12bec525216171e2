"""
Expression Evaluator for WebCalc
Validates, rewrites and safely evaluates calculator expressions
"""
import ast
import math
import operator
import re
import warnings
from decimal import Decimal

import config

ALLOWED_PATTERN = re.compile(r'^[0-9+\-*/().% \t]+$')
PERCENT_PATTERN = re.compile(r'(\d+(\.\d+)?)%')
LEADING_ZEROS_PATTERN = re.compile(r'(?<![\d.])0+(?=\d)')
# ++ and -- are increment/decrement operators, not two signs
DOUBLED_SIGN_PATTERN = re.compile(r"\+\+|--")
# Integer parts this long are past the float range and past the parser's digit limit
OVERSIZED_NUMBER_PATTERN = re.compile(r"(?<![\d.])\d{310,}(?:\.\d*)?")
INFINITE_LITERAL = "1e999"

BINARY_OPERATORS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
}

UNARY_OPERATORS = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}

# Results inside this range are written out in plain decimal notation
PLAIN_LOWER_BOUND = Decimal("1e-6")
PLAIN_UPPER_BOUND = Decimal("1e21")


class ExpressionError(ValueError):
    """Base class for expressions that cannot be evaluated."""


class IllegalCharacterError(ExpressionError):
    """The expression contains a character outside the allowed set."""


class ExpressionSyntaxError(ExpressionError):
    """The expression is not a well-formed arithmetic expression."""


class EvaluationError(ExpressionError):
    """Arithmetic failed on a structurally valid expression."""


def validate_expression(text):
    """Raise IllegalCharacterError unless text uses only allowed characters"""
    if not ALLOWED_PATTERN.fullmatch(text):
        raise IllegalCharacterError(f"Invalid characters in {text!r}")
    return text


def transform_percent(text):
    """Rewrite every N% as (N/100)"""
    return PERCENT_PATTERN.sub(r'(\1/100)', text)


def strip_leading_zeros(text):
    """Drop redundant leading zeros from number tokens (010 -> 10)"""
    return LEADING_ZEROS_PATTERN.sub('', text)


def replace_oversized_numbers(text):
    """Write numbers beyond the float range as an infinite literal"""
    return OVERSIZED_NUMBER_PATTERN.sub(INFINITE_LITERAL, text)


def _number(value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ExpressionSyntaxError(f"Unsupported constant {value!r}")
    try:
        return float(value)
    except OverflowError:
        return math.inf


def _eval_node(node):
    if isinstance(node, ast.Expression):
        return _eval_node(node.body)
    if isinstance(node, ast.Constant):
        return _number(node.value)
    if isinstance(node, ast.BinOp) and type(node.op) in BINARY_OPERATORS:
        left = _eval_node(node.left)
        right = _eval_node(node.right)
        return BINARY_OPERATORS[type(node.op)](left, right)
    if isinstance(node, ast.UnaryOp) and type(node.op) in UNARY_OPERATORS:
        return UNARY_OPERATORS[type(node.op)](_eval_node(node.operand))
    raise ExpressionSyntaxError(f"Unsupported syntax: {type(node).__name__}")


def parse_expression(text):
    """Parse prepared text into an AST, mapping parser failures to ExpressionSyntaxError"""
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", SyntaxWarning)
            return ast.parse(text.strip(), mode="eval")
    except (SyntaxError, ValueError, RecursionError) as e:
        raise ExpressionSyntaxError(str(e)) from e


def safe_evaluate(text):
    """Evaluate a calculator expression and return a float.

    The text is validated against the allowed character set, percent
    notation is rewritten, and the result is computed by walking the
    parsed tree over numbers, + - * /, unary signs and parentheses only.
    Raises an ExpressionError subclass on any failure.
    """
    validate_expression(text)
    prepared = strip_leading_zeros(transform_percent(text))
    if DOUBLED_SIGN_PATTERN.search(prepared):
        raise ExpressionSyntaxError(f"Invalid operator sequence in {text!r}")
    prepared = replace_oversized_numbers(prepared)
    tree = parse_expression(prepared)
    try:
        return _eval_node(tree)
    except (ZeroDivisionError, OverflowError, RecursionError) as e:
        raise EvaluationError(str(e) or type(e).__name__) from e


def format_result(value, precision=None):
    """Format a numeric result for the display.

    Finite values are rounded to `precision` significant digits and written
    without trailing zeros. Non-finite values keep Python's float text.
    """
    precision = precision or config.DISPLAY_PRECISION
    if not math.isfinite(value):
        return str(value)

    text = f"{value:.{precision}g}"
    rounded = Decimal(text)
    if rounded.is_zero():
        return "0"
    if PLAIN_LOWER_BOUND <= abs(rounded) < PLAIN_UPPER_BOUND:
        return format(rounded, "f")
    return text
