"""
Calculator Engine for SciCal
Builds the expression from key presses and hands it to the evaluator
"""
import logging
import re
from dataclasses import dataclass

import config
from evaluator import evaluate
from history_manager import HistoryManager

logger = logging.getLogger(__name__)

# An operator padded by one space on each side, kept as its own segment
_PADDED_OPERATOR = re.compile(r'( [+\-*/] )')

# Function name -> notation template; {v} is the value the function applies to
FUNCTION_NOTATIONS = {
    'sin': 'sin({v})',
    'cos': 'cos({v})',
    'tan': 'tan({v})',
    'log': 'log({v})',
    'ln': 'ln({v})',
    'sqrt': '√({v})',
    'pow': '({v})²',
    'factorial': '{v}!',
    'percent': '{v}%',
    'inverse': '1/({v})',
    'abs': '|{v}|',
    'negate': '-({v})',
    'exp': 'exp({v})',
}

# Constants multiply whatever value precedes them (3 then π gives 3 * π)
CONSTANT_SYMBOLS = {
    'pi': 'π',
    'e': 'e',
}


@dataclass
class CalculatorState:
    current_expression: str = ""
    last_result: str = "0"
    should_clear_display: bool = False


def split_segments(expression):
    """Split an expression into [operand, ' op ', operand, ...]"""
    return _PADDED_OPERATOR.split(expression)


def trailing_operand(expression):
    """Text of the last operand, '' right after an operator"""
    return split_segments(expression)[-1].strip()


def ends_with_operator(expression):
    stripped = expression.rstrip()
    return bool(stripped) and stripped[-1] in config.OPERATORS


class Calculator:
    def __init__(self, on_display_changed=None, on_history_changed=None,
                 on_history_cleared=None, history_manager=None):
        self.state = CalculatorState()
        self.on_display_changed = on_display_changed or (lambda text: None)
        self.on_history_changed = on_history_changed or (lambda text: None)
        self.on_history_cleared = on_history_cleared or (lambda: None)
        self.history_manager = history_manager if history_manager is not None else HistoryManager()

    @property
    def current_expression(self):
        return self.state.current_expression

    @property
    def last_result(self):
        return self.state.last_result

    @property
    def should_clear_display(self):
        return self.state.should_clear_display

    @property
    def display_text(self):
        """What the readout shows for the expression being built"""
        return self.state.current_expression or "0"

    def _start_fresh_if_needed(self):
        if self.state.should_clear_display:
            self.state.current_expression = ""
            self.state.should_clear_display = False

    def append_digit(self, digit):
        """Add a digit to the current expression"""
        digit = str(digit)
        if len(digit) != 1 or digit not in config.DIGITS:
            logger.debug("Ignoring digit input %r", digit)
            return self.state.current_expression

        self._start_fresh_if_needed()
        if self.state.current_expression == "0":
            self.state.current_expression = digit
        else:
            self.state.current_expression += digit

        self.on_display_changed(self.state.current_expression)
        return self.state.current_expression

    def append_decimal_point(self):
        """Add a decimal point unless the current number already has one"""
        self._start_fresh_if_needed()
        expression = self.state.current_expression

        if '.' not in trailing_operand(expression):
            if expression in ("", "0"):
                expression = "0."
            elif ends_with_operator(expression):
                expression = expression.rstrip() + " 0."
            else:
                expression += "."
            self.state.current_expression = expression

        self.on_display_changed(self.display_text)
        return self.state.current_expression

    def append_operator(self, operator):
        """Add an operator; a second operator in a row replaces the first"""
        if operator not in config.OPERATORS:
            logger.debug("Ignoring operator input %r", operator)
            return self.state.current_expression

        if self.state.should_clear_display:
            self.state.current_expression = self.state.last_result
            self.state.should_clear_display = False

        expression = self.state.current_expression

        # Prevent multiple consecutive operators
        if ends_with_operator(expression):
            expression = expression.rstrip()[:-1].rstrip()

        # An operator always needs a left operand
        if not expression.strip():
            expression = self.state.last_result

        self.state.current_expression = f"{expression} {operator} "
        self.on_display_changed(self.state.current_expression)
        self.on_history_changed(self.state.current_expression)
        return self.state.current_expression

    def append_function(self, func):
        """Wrap the current value in a function's notation.

        With a fresh display the notation applies to the last result and
        becomes the whole expression; otherwise it replaces the trailing
        operand, so notations nest (sin then sqrt gives √(sin(30))).
        """
        starting_fresh = self.state.should_clear_display or not self.state.current_expression
        if starting_fresh:
            value = self.state.last_result
        else:
            value = trailing_operand(self.state.current_expression) or self.state.last_result

        if func in FUNCTION_NOTATIONS:
            notation = FUNCTION_NOTATIONS[func].format(v=value)
        elif func in CONSTANT_SYMBOLS:
            symbol = CONSTANT_SYMBOLS[func]
            notation = f"{value} * {symbol}" if value and value != "0" else symbol
        else:
            logger.debug("Ignoring unknown function %r", func)
            return self.state.current_expression

        if starting_fresh:
            self.state.current_expression = notation
        else:
            segments = split_segments(self.state.current_expression)
            segments[-1] = notation
            self.state.current_expression = "".join(segments)

        self.state.should_clear_display = False
        self.on_display_changed(self.state.current_expression)
        self.on_history_changed(self.state.current_expression)
        return self.state.current_expression

    def delete_last(self):
        """Remove the last character, or the whole operator if one ends the expression"""
        if self.state.should_clear_display:
            return self.clear()

        expression = self.state.current_expression
        if expression.endswith(" "):
            expression = expression.strip()
            if expression and expression[-1] in config.OPERATORS:
                expression = expression[:-1].strip()
        else:
            expression = expression[:-1]

        self.state.current_expression = expression
        self.on_display_changed(self.display_text)
        return self.state.current_expression

    def clear(self):
        """Reset the expression, the last result and the history line"""
        self.state.current_expression = ""
        self.state.last_result = "0"
        self.state.should_clear_display = False
        self.on_display_changed("0")
        self.on_history_cleared()
        return self.state.current_expression

    def calculate(self):
        """Evaluate the current expression and show the result.

        Returns the display text. Failures show config.ERROR_TEXT and the next
        key press starts a new expression.
        """
        expression = self.state.current_expression
        if not expression:
            return self.display_text

        result, is_error = evaluate(expression)
        self.state.should_clear_display = True

        if is_error:
            self.on_display_changed(config.ERROR_TEXT)
            return config.ERROR_TEXT

        self.state.last_result = result
        self.history_manager.add_calculation(expression, result)
        self.on_display_changed(result)
        self.on_history_changed(f"{expression} =")
        return result

    def handle_key(self, key):
        """Dispatch a keyboard key; returns True when the key was handled"""
        if len(key) == 1 and key in config.DIGITS:
            self.append_digit(key)
        elif key in config.OPERATORS:
            self.append_operator(key)
        elif key in ('Enter', 'Return', '='):
            self.calculate()
        elif key in ('Escape', 'c', 'C'):
            self.clear()
        elif key in ('BackSpace', 'Backspace'):
            self.delete_last()
        elif key == '.':
            self.append_decimal_point()
        else:
            return False
        return True
