import pytest

import evaluator
from calculator import Calculator, split_segments, trailing_operand
from history_manager import HistoryManager


class Screen:
    """Records what the calculator asks the host to show"""

    def __init__(self):
        self.display = "0"
        self.history = ""
        self.history_cleared = 0

    def show(self, text):
        self.display = text

    def show_history(self, text):
        self.history = text

    def clear_history(self):
        self.history = ""
        self.history_cleared += 1


@pytest.fixture
def screen():
    return Screen()


@pytest.fixture
def calc(screen):
    return Calculator(
        on_display_changed=screen.show,
        on_history_changed=screen.show_history,
        on_history_cleared=screen.clear_history,
    )


def press(calc, keys):
    for key in keys:
        calc.handle_key(key)


def test_digits_concatenate_without_leading_zero(calc, screen):
    calc.clear()
    calc.append_digit("0")
    calc.append_digit("5")
    assert calc.current_expression == "5"

    press(calc, "123")
    assert calc.current_expression == "5123"
    assert screen.display == "5123"


def test_invalid_digit_is_ignored(calc):
    calc.append_digit("7")
    calc.append_digit("x")
    calc.append_digit("12")
    assert calc.current_expression == "7"


def test_second_operator_replaces_first(calc, screen):
    calc.append_digit("3")
    calc.append_operator("+")
    calc.append_operator("-")
    assert calc.current_expression == "3 - "
    assert screen.history == "3 - "


def test_operator_on_empty_expression_uses_last_result(calc):
    assert calc.append_operator("*") == "0 * "


def test_unknown_operator_is_ignored(calc):
    calc.append_digit("3")
    assert calc.append_operator("^") == "3"


def test_sequential_evaluation(calc, screen):
    press(calc, "2+3*4")
    assert calc.calculate() == "20"
    assert screen.display == "20"
    assert screen.history == "2 + 3 * 4 ="
    assert calc.last_result == "20"
    assert calc.should_clear_display


def test_division_by_zero_shows_zero(calc):
    press(calc, "5/0")
    assert calc.calculate() == "0"


def test_digit_after_result_starts_fresh(calc):
    press(calc, "2+2=")
    calc.append_digit("7")
    assert calc.current_expression == "7"
    assert not calc.should_clear_display


def test_operator_after_result_continues_from_it(calc):
    press(calc, "2+3=")
    assert calc.append_operator("*") == "5 * "


def test_decimal_point(calc):
    assert calc.append_decimal_point() == "0."
    calc.append_digit("5")
    assert calc.append_decimal_point() == "0.5"

    calc.append_operator("+")
    assert calc.append_decimal_point() == "0.5 + 0."
    calc.append_digit("2")
    assert calc.append_decimal_point() == "0.5 + 0.2"


def test_decimal_point_on_zero_and_after_result(calc):
    calc.append_digit("0")
    assert calc.append_decimal_point() == "0."

    press(calc, "5=")
    assert calc.append_decimal_point() == "0."


def test_decimal_point_follows_number(calc):
    press(calc, "12")
    assert calc.append_decimal_point() == "12."


def test_sqrt_round_trip(calc):
    calc.append_digit("9")
    assert calc.append_function("sqrt") == "√(9)"
    assert calc.calculate() == "3"


def test_factorial_round_trip(calc):
    calc.append_digit("5")
    assert calc.append_function("factorial") == "5!"
    assert calc.calculate() == "120"


@pytest.mark.parametrize("func, notation", [
    ("sin", "sin(4)"),
    ("cos", "cos(4)"),
    ("tan", "tan(4)"),
    ("log", "log(4)"),
    ("ln", "ln(4)"),
    ("sqrt", "√(4)"),
    ("pow", "(4)²"),
    ("factorial", "4!"),
    ("percent", "4%"),
    ("inverse", "1/(4)"),
    ("abs", "|4|"),
    ("negate", "-(4)"),
    ("exp", "exp(4)"),
    ("pi", "4 * π"),
    ("e", "4 * e"),
])
def test_function_replaces_trailing_operand(calc, screen, func, notation):
    press(calc, "3+4")
    expected = "3 + " + notation
    assert calc.append_function(func) == expected
    assert screen.display == expected
    assert screen.history == expected


def test_function_applies_to_last_result_after_calculation(calc):
    press(calc, "2+2=")
    assert calc.append_function("sqrt") == "√(4)"
    assert not calc.should_clear_display
    assert calc.calculate() == "2"


def test_function_right_after_operator_uses_last_result(calc):
    press(calc, "3+")
    assert calc.append_function("sqrt") == "3 + √(0)"


def test_functions_nest(calc):
    press(calc, "30")
    calc.append_function("sin")
    assert calc.append_function("sqrt") == "√(sin(30))"
    assert calc.calculate() == "0.7071067812"


def test_constants(calc):
    assert calc.append_function("pi") == "π"
    calc.clear()
    calc.append_digit("3")
    assert calc.append_function("pi") == "3 * π"
    assert calc.calculate() == "9.4247779608"


def test_unknown_function_leaves_state(calc, screen):
    calc.append_digit("8")
    assert calc.append_function("cosh") == "8"
    assert screen.history == ""


def test_delete_last_removes_padded_operator(calc, screen):
    press(calc, "3+")
    assert calc.current_expression == "3 + "
    assert calc.delete_last() == "3"
    assert screen.display == "3"


def test_delete_last_character(calc, screen):
    press(calc, "12")
    assert calc.delete_last() == "1"
    assert calc.delete_last() == ""
    assert screen.display == "0"
    assert calc.delete_last() == ""


def test_delete_after_result_clears(calc, screen):
    press(calc, "2*3=")
    calc.delete_last()
    assert calc.current_expression == ""
    assert calc.last_result == "0"
    assert screen.history_cleared == 1


def test_clear_resets_everything(calc, screen):
    press(calc, "9*9=")
    calc.append_operator("+")
    calc.clear()
    assert calc.current_expression == ""
    assert calc.last_result == "0"
    assert not calc.should_clear_display
    assert screen.display == "0"
    assert screen.history == ""
    assert screen.history_cleared == 1


def test_calculate_on_empty_expression_does_nothing(calc, screen):
    assert calc.calculate() == "0"
    assert not calc.should_clear_display
    assert len(calc.history_manager) == 0


def test_evaluation_failure_shows_error(calc, screen, monkeypatch):
    def explode(expression):
        raise RuntimeError("boom")

    monkeypatch.setattr(evaluator, "reduce_tokens", explode)
    press(calc, "1+1")
    assert calc.calculate() == "Error"
    assert screen.display == "Error"
    assert calc.should_clear_display
    assert calc.last_result == "0"

    calc.append_digit("4")
    assert calc.current_expression == "4"


def test_successful_calculations_go_to_history():
    history = HistoryManager()
    calc = Calculator(history_manager=history)
    press(calc, "1+2=")
    press(calc, "4*5=")
    entries = history.get_calculation_history()
    assert [(expr, result) for expr, result, _ in entries] == [
        ("4 * 5", "20"),
        ("1 + 2", "3"),
    ]


def test_handle_key():
    calc = Calculator()
    assert calc.handle_key("7")
    assert calc.handle_key(".")
    assert calc.handle_key("5")
    assert calc.handle_key("*")
    assert calc.handle_key("2")
    assert calc.handle_key("Return")
    assert calc.last_result == "15"
    assert calc.handle_key("Escape")
    assert calc.last_result == "0"
    assert not calc.handle_key("x")
    assert not calc.handle_key("F1")


def test_instances_are_independent():
    first, second = Calculator(), Calculator()
    first.append_digit("1")
    second.append_digit("2")
    assert first.current_expression == "1"
    assert second.current_expression == "2"


def test_split_segments():
    assert split_segments("3 + sin(4) * 2") == ["3", " + ", "sin(4)", " * ", "2"]
    assert split_segments("-(5)") == ["-(5)"]
    assert trailing_operand("3 + ") == ""
    assert trailing_operand("1/(5)") == "1/(5)"


def test_operator_after_lone_minus_gets_left_operand(calc):
    calc.append_digit("5")
    calc.append_function("negate")
    for _ in range(3):
        calc.delete_last()
    assert calc.current_expression == "-"
    assert calc.append_operator("+") == "0 + "
