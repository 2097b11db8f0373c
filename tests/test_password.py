import pytest

from idcheck.checks.password import evaluate_password, longest_run, strength_score
from idcheck.checks.rules import load_password_rules
from idcheck.config import PasswordPolicy
from idcheck.results import POLICY_VIOLATIONS, ErrorCode


def test_weak_password_with_default_policy():
    r = evaluate_password("abcdefgh")
    assert not r.valid
    assert r.reasons == (
        ErrorCode.MISSING_UPPERCASE,
        ErrorCode.MISSING_NUMBER,
        ErrorCode.MISSING_SYMBOL,
    )
    assert r.metadata == {"strength": 0, "length": 8}

def test_strong_password():
    r = evaluate_password("Str0ng!Pass99")
    assert r.valid
    assert r.normalized is None
    assert r.metadata["strength"] == 6
    assert r.metadata["length"] == 13

def test_all_reasons_are_policy_violations():
    r = evaluate_password(" aaa ")
    assert r.reasons
    assert set(r.reasons) <= POLICY_VIOLATIONS

def test_length_bounds():
    policy = PasswordPolicy(min_length=4, max_length=6)
    assert ErrorCode.PASSWORD_TOO_SHORT in evaluate_password("A1!", policy).reasons
    assert ErrorCode.PASSWORD_TOO_LONG in evaluate_password("Ab1!Ab1", policy).reasons
    assert evaluate_password("Ab1!", policy).valid

def test_missing_classes_respect_flags():
    policy = PasswordPolicy(require_upper=False, require_number=False, require_symbol=False)
    assert evaluate_password("abcdefgh", policy).valid

def test_missing_lowercase():
    assert ErrorCode.MISSING_LOWERCASE in evaluate_password("ABCDEFG1!").reasons

def test_three_in_a_row_is_rejected():
    assert ErrorCode.REPEATED_CHARACTERS in evaluate_password("Paaass1!x").reasons
    assert ErrorCode.REPEATED_CHARACTERS not in evaluate_password("Paass1!xy").reasons

def test_repeat_limit_is_configurable():
    policy = PasswordPolicy(max_consecutive_repeats=3)
    assert evaluate_password("Paaass1!x", policy).valid

@pytest.mark.parametrize("raw", ["Password123", "PASSWORD", "qwerty"])
def test_common_password_case_insensitive(raw):
    assert ErrorCode.COMMON_PASSWORD in evaluate_password(raw).reasons

def test_common_password_can_be_allowed():
    policy = PasswordPolicy(forbid_common_passwords=False)
    assert ErrorCode.COMMON_PASSWORD not in evaluate_password("Password123", policy).reasons

@pytest.mark.parametrize("raw", [" Str0ng!Pass", "Str0ng!Pass ", "\tStr0ng!Pass"])
def test_surrounding_whitespace(raw):
    assert ErrorCode.SURROUNDING_WHITESPACE in evaluate_password(raw).reasons

def test_none_is_an_empty_password():
    r = evaluate_password(None)
    assert ErrorCode.PASSWORD_TOO_SHORT in r.reasons
    assert r.metadata == {"strength": 0, "length": 0}

def test_deterministic():
    policy = PasswordPolicy(min_length=10)
    first = evaluate_password("Hello-World1", policy)
    assert all(evaluate_password("Hello-World1", policy) == first for _ in range(5))


class TestStrength:
    """Score components add up independently."""

    def test_components(self):
        assert strength_score("") == 0
        assert strength_score("a" * 12) == 2
        assert strength_score("aB") == 1
        assert strength_score("1") == 1
        assert strength_score("!") == 2

    def test_invalid_result_still_scored(self):
        r = evaluate_password("password")
        assert not r.valid
        assert "strength" in r.metadata

    def test_longest_run(self):
        assert longest_run("") == 0
        assert longest_run("abc") == 1
        assert longest_run("abbbc") == 3


def test_rules_loaded_from_yaml():
    rules = load_password_rules()
    assert "!" in rules.symbols
    assert "password" in rules.common_passwords


@pytest.mark.parametrize("raw", ["Abcdefg²!", "Abcdefg٣!"])
def test_non_ascii_digits_do_not_count_as_numbers(raw):
    assert ErrorCode.MISSING_NUMBER in evaluate_password(raw).reasons
    assert strength_score(raw[-2]) == 0
