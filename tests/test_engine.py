"""
Testing pure game logic.
"""

from itertools import permutations

import pytest

from numbrainer.engine import is_valid_number, is_win, score_guess, validate_number
from numbrainer.errors import ValidationError


def test_validate_accepts_unique_digits():
    assert validate_number("1234") is None
    assert validate_number("0987") is None
    assert is_valid_number("9012") is True


def test_validate_every_unique_four_digit_number_is_valid():
    for digits in permutations("0123456789", 4):
        assert validate_number("".join(digits)) is None


@pytest.mark.parametrize("number", ["", "123", "12345", "1234 "])
def test_validate_wrong_length(number):
    error = validate_number(number)
    assert isinstance(error, ValidationError)
    assert error.reason == "Number must be exactly 4 digits long."


@pytest.mark.parametrize("number", ["12a4", "-123", "12.3", "abcd", "١٢٣٤"])
def test_validate_non_digits(number):
    error = validate_number(number)
    assert isinstance(error, ValidationError)
    assert error.reason == "Only numeric digits (0-9) are allowed."


@pytest.mark.parametrize("number", ["1123", "1231", "0000", "9899"])
def test_validate_repeated_digits(number):
    error = validate_number(number)
    assert isinstance(error, ValidationError)
    assert error.reason == "Digits must not repeat."


def test_validate_rule_order_non_digit_beats_repeat():
    # "11a2" breaks both rule 2 and rule 3; the digit rule is checked first
    assert validate_number("11a2").reason == "Only numeric digits (0-9) are allowed."
    # wrong length beats everything
    assert validate_number("11a").reason == "Number must be exactly 4 digits long."


def test_validate_non_string_is_length_error():
    assert validate_number(1234).reason == "Number must be exactly 4 digits long."
    assert is_valid_number(None) is False


def test_score_guess_no_matches():
    result = score_guess("1234", "5678")
    correct_digits = result[0]
    correct_positions = result[1]

    assert correct_digits == 0
    assert correct_positions == 0


def test_score_guess_digits_and_positions():
    # 1, 2 and 3 are in the target; only the 1 is in the right place
    correct_digits, correct_positions = score_guess("1234", "1325")
    assert correct_digits == 3
    assert correct_positions == 1


def test_score_guess_all_digits_wrong_order():
    assert score_guess("1234", "4321") == (4, 0)


def test_score_guess_exact_match():
    assert score_guess("9051", "9051") == (4, 4)


def test_score_guess_length_mismatch():
    with pytest.raises(ValueError):
        score_guess("1234", "123")
    with pytest.raises(ValueError):
        score_guess("", "")


def test_is_win_true_and_false():
    assert is_win("1234", "1234") is True
    assert is_win("1234", "1235") is False
    assert is_win("1234", "123") is False
