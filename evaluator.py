"""
Expression Evaluator for SciCal
Substitutes scientific function notation and reduces the result left to right
"""
import logging
import math
import re
from decimal import Decimal

import config

logger = logging.getLogger(__name__)

# Leading numeric prefix, read the way a lenient float parser would
_NUMBER_PREFIX = re.compile(
    r'\s*([+-]?(?:inf(?:inity)?|nan|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))',
    re.IGNORECASE,
)
_DIVIDE_BY_ZERO = re.compile(r'/\s*0(?!\d)')


def parse_number(text):
    """Parse the leading number in text, 0.0 when there is none"""
    match = _NUMBER_PREFIX.match(text or "")
    if not match:
        return 0.0
    value = float(match.group(1))
    if math.isnan(value):
        return 0.0
    return value


def format_number(value):
    """Write a value back into the expression in fixed-point form.

    Exponent notation would leave a later pass such as x! or x% matching only
    the exponent digits.
    """
    return format(Decimal(repr(float(value))), "f")


def _guarded(func, value):
    """Call a math function, mapping domain errors to nan and overflow to inf"""
    try:
        return func(value)
    except OverflowError:
        return math.inf
    except ValueError:
        return math.nan


def _sin(x):
    return _guarded(math.sin, math.radians(x))


def _cos(x):
    return _guarded(math.cos, math.radians(x))


def _tan(x):
    return _guarded(math.tan, math.radians(x))


def _log(x):
    return math.log10(x) if x > 0 else 0


def _ln(x):
    return math.log(x) if x > 0 else 0


def _sqrt(x):
    return math.sqrt(x) if x >= 0 else 0


def _exp(x):
    return _guarded(math.exp, x)


def _square(x):
    return _guarded(lambda v: v ** 2, x)


def _inverse(x):
    return 1 / x if x != 0 else 0


def _percent(x):
    return x / 100


def factorial(n):
    """Factorial of a whole number as a float.

    Returns 0 outside 0..FACTORIAL_LIMIT. Anything above 170 does not fit in a
    float and comes back as infinity.
    """
    if n < 0 or n > config.FACTORIAL_LIMIT:
        return 0
    if n > 170:
        return math.inf
    return float(math.factorial(int(n)))


def _factorial(x):
    if math.isinf(x):
        return 0
    return factorial(math.floor(x))


# (pattern, function) pairs, applied in this order
SUBSTITUTIONS = [
    (re.compile(r'sin\(([^)]+)\)'), _sin),
    (re.compile(r'cos\(([^)]+)\)'), _cos),
    (re.compile(r'tan\(([^)]+)\)'), _tan),
    (re.compile(r'log\(([^)]+)\)'), _log),
    (re.compile(r'ln\(([^)]+)\)'), _ln),
    (re.compile(r'√\(([^)]+)\)'), _sqrt),
    (re.compile(r'exp\(([^)]+)\)'), _exp),
    (re.compile(r'\(([^)]+)\)²'), _square),
    (re.compile(r'(\d+(?:\.\d+)?)!'), _factorial),
    (re.compile(r'1/\(([^)]+)\)'), _inverse),
    (re.compile(r'\|([^|]+)\|'), abs),
    (re.compile(r'-\(([^)]+)\)'), lambda x: -x),
    (re.compile(r'(\d+(?:\.\d+)?)%'), _percent),
]

CONSTANTS = [
    (re.compile(r'π'), math.pi),
    (re.compile(r'\be\b'), math.e),
]


def substitute_functions(expression):
    """Replace every function notation in the expression with its value"""
    for pattern, func in SUBSTITUTIONS:
        expression = pattern.sub(
            lambda match, func=func: format_number(func(parse_number(match.group(1)))),
            expression,
        )
    for pattern, value in CONSTANTS:
        expression = pattern.sub(format_number(value), expression)
    return expression


def normalize_division_by_zero(expression):
    """Rewrite '/0' style divisions so the zero lands in its own token"""
    return _DIVIDE_BY_ZERO.sub('/ 0', expression)


def reduce_tokens(expression):
    """Fold a flat 'number op number ...' string strictly left to right.

    There is no operator precedence: '2 + 3 * 4' is (2 + 3) * 4.
    """
    tokens = [token for token in expression.split(' ') if token]
    if not tokens:
        return 0.0

    result = parse_number(tokens[0])
    for i in range(1, len(tokens), 2):
        operator = tokens[i]
        operand = parse_number(tokens[i + 1]) if i + 1 < len(tokens) else 0.0

        if operator == '+':
            result += operand
        elif operator == '-':
            result -= operand
        elif operator == '*':
            result *= operand
        elif operator == '/':
            result = result / operand if operand != 0 else 0.0

    return result


def format_result(value):
    """Render a numeric result for the display"""
    if math.isnan(value) or math.isinf(value):
        value = 0.0

    if float(value).is_integer():
        text = str(int(value))
        if len(text) <= config.MAX_RESULT_LENGTH:
            return text

    value = round(value, config.RESULT_PRECISION)
    if abs(value) >= 1e21:
        return repr(value)

    text = f"{value:.{config.RESULT_PRECISION}f}".rstrip('0').rstrip('.')
    if text in ('-0', ''):
        text = '0'
    return text


def evaluate(expression):
    """Evaluate an expression string.

    Returns (result_string, is_error). Never raises: anything the pipeline
    cannot handle comes back as (config.ERROR_TEXT, True).
    """
    try:
        substituted = substitute_functions(expression)
        substituted = normalize_division_by_zero(substituted)
        result = reduce_tokens(substituted)
        return format_result(result), False
    except Exception:
        logger.exception("Failed to evaluate %r", expression)
        return config.ERROR_TEXT, True
