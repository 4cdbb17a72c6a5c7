import pytest

from finboard.functional import (
    Left,
    Nothing,
    Right,
    Some,
    parse_amount,
    parse_amount_or,
    pipe,
    validate_lookup_name,
    validate_paycheck_split,
    validate_transaction_input,
)


def test_maybe_map_and_bind():
    assert Some(5).map(lambda x: x * 2) == Some(10)
    assert Nothing().map(lambda x: x * 2).is_none()
    assert Some(0).bind(lambda x: Nothing() if x == 0 else Some(10 / x)).is_none()


def test_either_map_and_bind():
    assert Right(2).map(lambda x: x + 1).get_or_else(0) == 3
    left = Left("boom").map(lambda x: x + 1)
    assert left.is_left()
    assert left.get_error() == "boom"
    assert Right(1).bind(lambda x: Left("nope")) == Left("nope")


def test_parse_amount():
    assert parse_amount("12.50") == Some(12.5)
    assert parse_amount(" 7 ") == Some(7.0)
    assert parse_amount(3) == Some(3.0)
    assert parse_amount("").is_none()
    assert parse_amount("abc").is_none()
    assert parse_amount(None).is_none()
    assert parse_amount("nan").is_none()
    assert parse_amount("inf").is_none()


def test_parse_amount_or_default():
    assert parse_amount_or("", 0.0) == 0.0
    assert parse_amount_or("4", 0.0) == 4.0


def test_validate_transaction_input_ok():
    result = validate_transaction_input("2024-01-01", "42.5", " Shopping ", "expense", "shoes")
    assert result.is_right()
    row = result.get_or_else(None)
    assert row["amount"] == 42.5
    assert row["category"] == "Shopping"
    assert row["transaction_type"] == "expense"


def test_validate_transaction_input_requires_amount_and_category():
    missing_amount = validate_transaction_input("2024-01-01", "", "Shopping", "expense")
    assert missing_amount.get_error()["message"] == "Please fill in amount and category"
    missing_category = validate_transaction_input("2024-01-01", "10", "", "expense")
    assert missing_category.is_left()


def test_validate_transaction_input_rejects_unknown_type():
    result = validate_transaction_input("2024-01-01", "10", "Other", "transfer")
    assert result.get_error()["error"] == "invalid_type"


def test_paycheck_split_percentages_must_sum_to_100():
    ok = validate_paycheck_split(
        "Monthly", "2000", "percentage",
        percentages={"investing": "20", "spending": "50", "savings": "30"},
    )
    assert ok.is_right()
    assert ok.get_or_else(None)["debt_percentage"] == 0.0

    bad = validate_paycheck_split(
        "Monthly", "2000", "percentage",
        percentages={"investing": "20", "spending": "50", "savings": "20"},
    )
    assert bad.get_error()["message"] == "Percentages must add up to 100%"
    assert bad.get_error()["total_percentage"] == 90


def test_paycheck_split_percentage_tolerance():
    result = validate_paycheck_split(
        "Monthly", "2000", "percentage",
        percentages={"investing": "33", "spending": "33", "savings": "33"},
    )
    assert result.is_left()
    result = validate_paycheck_split(
        "Monthly", "2000", "percentage",
        percentages={"investing": "33.335", "spending": "33.33", "savings": "33.33"},
    )
    assert result.is_right()


def test_paycheck_split_dollar_amounts_convert_to_percentages():
    result = validate_paycheck_split(
        "Monthly", "2000", "dollar",
        amounts={"investing": "500", "spending": "1000", "savings": "300", "debt": "200"},
    )
    row = result.get_or_else(None)
    assert row["investing_percentage"] == 25
    assert row["spending_percentage"] == 50
    assert row["debt_percentage"] == pytest.approx(10)


def test_paycheck_split_dollar_amounts_must_match_paycheck():
    result = validate_paycheck_split("Monthly", "2000", "dollar", amounts={"spending": "1500"})
    assert result.get_error()["message"] == "Dollar amounts must add up to the total paycheck amount"


def test_paycheck_split_bad_paycheck():
    assert validate_paycheck_split("x", "abc").is_left()
    assert validate_paycheck_split("x", "0", "dollar", amounts={}).is_left()
    assert validate_paycheck_split("x", "10", "weekly").is_left()


def test_validate_lookup_name():
    assert validate_lookup_name("  Rent ") == Right("Rent")
    assert validate_lookup_name("   ").is_left()


def test_pipe():
    def add1(x):
        return x + 1

    def mul2(x):
        return x * 2

    assert pipe(3, add1, mul2) == 8
