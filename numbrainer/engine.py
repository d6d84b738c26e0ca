"""
Pure game logic (no HTTP, no state).
Every secret number and every guess is 4 digits with no repeats, so we can
compute the two feedback numbers for each guess very simply:
- correct_positions: how many indices are exactly correct (right digit, right place)
- correct_digits: how many guess digits appear anywhere in the target,
including those already in correct position.
"""

from typing import Optional, Tuple

from .errors import ValidationError
from .types import SecretNumber

NUMBER_LENGTH = 4
DIGITS = "0123456789"  # ASCII only; str.isdigit() would accept things like "٣"


def validate_number(number: str) -> Optional[ValidationError]:
    """
    Rules are checked in a fixed order and the first one that fails wins,
    so the same input always gets the same message:
      1. exactly 4 characters
      2. only digits 0-9
      3. no repeated digit
    Returns None when the number is valid.
    """

    # 1. Length
    if not isinstance(number, str) or len(number) != NUMBER_LENGTH:
        return ValidationError("Number must be exactly 4 digits long.")

    # 2. Digits only
    for ch in number:
        if ch not in DIGITS:
            return ValidationError("Only numeric digits (0-9) are allowed.")

    # 3. Unique digits
    if len(set(number)) != NUMBER_LENGTH:
        return ValidationError("Digits must not repeat.")

    return None


def is_valid_number(number: str) -> bool:
    return validate_number(number) is None


def score_guess(target: SecretNumber, guess: SecretNumber) -> Tuple[int, int]:
    """
    Example:
      target = "1234"
      guess  = "1325"
      correct_digits    = 3  (1, 2 and 3 are all somewhere in the target)
      correct_positions = 1  (only the first 1 is in the right place)
      Returns a tuple: (correct_digits, correct_positions)
    """

    # 0. Validate lengths match
    n = len(target)
    if n == 0 or len(guess) != n:
        raise ValueError("Target and guess must be the same non-zero length.")

    correct_digits = 0
    correct_positions = 0
    i = 0
    while i < n:
        # 1. Right digit, right place
        if guess[i] == target[i]:
            correct_positions += 1
        # 2. Right digit, anywhere
        if guess[i] in target:
            correct_digits += 1
        i += 1

    return (correct_digits, correct_positions)


def is_win(target: SecretNumber, guess: SecretNumber) -> bool:
    """Win = every digit matches in order."""
    if len(target) == 0 or len(guess) != len(target):
        return False
    return guess == target
