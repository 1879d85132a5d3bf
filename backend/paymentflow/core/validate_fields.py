"""Field Validation — amount, currency, and account-id checks on a parsed instruction.

Invariants:
    - All functions are PURE: no IO, no side effects
    - Check functions return a failed InstructionResult on violation, None on success
    - validate_fields chains checks in fixed precedence — first error wins:
        AM02 (positive decimal) → AM01 (not a positive integer) → CU02 → AC04
    - Character classes are ASCII only; str.isdigit()/isalnum() are never used
      (they accept Unicode digits and letters)

Design Decisions:
    - AM02 runs before AM01 so "100.50" gets the more specific message; a negative
      decimal fails the > 0 test and falls through to AM01
    - Amount-stage failures report amount and currency as None: neither is validated yet
"""

import math
from dataclasses import dataclass

from paymentflow.core.domain_types import (
    StatusCode, TransactionType, SUPPORTED_CURRENCIES,
)
from paymentflow.core.instruction_result import InstructionResult, reject
from paymentflow.core.match_grammar import ParsedInstruction


_ACCOUNT_ID_SYMBOLS = frozenset("-.@")


@dataclass(frozen=True)
class ValidatedInstruction:
    """Typed instruction fields, ready for account resolution."""
    type: TransactionType
    amount: int
    currency: str
    debit_account_id: str
    credit_account_id: str
    date_token: str | None = None


# ─── Character classes ───────────────────────────────────────────

def is_ascii_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def is_ascii_letter(ch: str) -> bool:
    return "a" <= ch <= "z" or "A" <= ch <= "Z"


def is_digit_string(value: str) -> bool:
    """Non-empty and ASCII digits only — no sign, no separators."""
    return bool(value) and all(is_ascii_digit(ch) for ch in value)


def digits_to_int(value: str) -> int:
    """Base-10 value of an ASCII digit string, free of int()'s digit-count limit."""
    result = 0
    for ch in value:
        result = result * 10 + (ord(ch) - 48)
    return result


def is_valid_account_id(value: str | None) -> bool:
    """Non-empty; ASCII letters, digits, '-', '.', '@' only."""
    if not value:
        return False
    return all(
        is_ascii_digit(ch) or is_ascii_letter(ch) or ch in _ACCOUNT_ID_SYMBOLS
        for ch in value
    )


def is_decimal_literal(value: str) -> bool:
    """[+-]digits[.digits][e[+-]digits] with at least one mantissa digit."""
    i, n = 0, len(value)
    if i < n and value[i] in "+-":
        i += 1
    mantissa_digits = 0
    while i < n and is_ascii_digit(value[i]):
        i += 1
        mantissa_digits += 1
    if i < n and value[i] == ".":
        i += 1
        while i < n and is_ascii_digit(value[i]):
            i += 1
            mantissa_digits += 1
    if mantissa_digits == 0:
        return False
    if i < n and value[i] in "eE":
        i += 1
        if i < n and value[i] in "+-":
            i += 1
        exponent_start = i
        while i < n and is_ascii_digit(value[i]):
            i += 1
        if i == exponent_start:
            return False
    return i == n


# ─── Checks ──────────────────────────────────────────────────────

def _known_fields(parsed: ParsedInstruction) -> dict:
    return {
        "type": parsed.type,
        "debit_account": parsed.debit_account_id or None,
        "credit_account": parsed.credit_account_id or None,
        "execute_by": parsed.date_token or None,
    }


def check_decimal_amount(parsed: ParsedInstruction) -> InstructionResult | None:
    """AM02: a well-formed positive decimal is rejected — whole units only."""
    token = parsed.amount_token
    if "." not in token or not is_decimal_literal(token):
        return None
    value = float(token)
    if math.isfinite(value) and value > 0:
        return reject(StatusCode.AMOUNT_NOT_WHOLE, **_known_fields(parsed))
    return None


def check_positive_integer_amount(
    parsed: ParsedInstruction,
) -> InstructionResult | None:
    """AM01: amount must be ASCII digits with a value above zero."""
    token = parsed.amount_token
    if not is_digit_string(token) or digits_to_int(token) <= 0:
        return reject(
            StatusCode.AMOUNT_NOT_POSITIVE_INTEGER, **_known_fields(parsed),
        )
    return None


def check_supported_currency(
    parsed: ParsedInstruction, amount: int,
) -> InstructionResult | None:
    """CU02: currency must be one of SUPPORTED_CURRENCIES."""
    currency = parsed.currency_token.upper()
    if currency not in SUPPORTED_CURRENCIES:
        return reject(
            StatusCode.UNSUPPORTED_CURRENCY,
            amount=amount, currency=currency or None, **_known_fields(parsed),
        )
    return None


def check_account_ids(
    parsed: ParsedInstruction, amount: int, currency: str,
) -> InstructionResult | None:
    """AC04: both ids share one verdict — either failing rejects the pair."""
    if not (
        is_valid_account_id(parsed.debit_account_id)
        and is_valid_account_id(parsed.credit_account_id)
    ):
        return reject(
            StatusCode.INVALID_ACCOUNT_ID,
            amount=amount, currency=currency, **_known_fields(parsed),
        )
    return None


def validate_fields(
    parsed: ParsedInstruction,
) -> ValidatedInstruction | InstructionResult:
    """Chain all field checks. Returns the first error or the typed fields."""
    error = check_decimal_amount(parsed) or check_positive_integer_amount(parsed)
    if error:
        return error

    amount = digits_to_int(parsed.amount_token)
    currency = parsed.currency_token.upper()
    error = (
        check_supported_currency(parsed, amount)
        or check_account_ids(parsed, amount, currency)
    )
    if error:
        return error

    return ValidatedInstruction(
        type=parsed.type,
        amount=amount,
        currency=currency,
        debit_account_id=parsed.debit_account_id,
        credit_account_id=parsed.credit_account_id,
        date_token=parsed.date_token or None,
    )
