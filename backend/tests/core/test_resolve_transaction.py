"""Transaction Resolver — tests for account checks and settlement timing.

Tests cover:
    - collect_involved keeps snapshot order, skips malformed entries, dedupes ids
    - AC03 when either account is missing (partial matches attached)
    - CU01 across debit/credit/instruction currencies (case-insensitive)
    - AC02 only after existence and currency pass
    - AC01 for short or non-numeric debit balances, with the shortfall reason
    - DT01 for invalid dates; pending only for dates after today
    - Check order: first failure wins
"""

from datetime import date

from paymentflow.core.domain_types import StatusCode, TransactionType
from paymentflow.core.instruction_result import InstructionResult
from paymentflow.core.resolve_transaction import (
    Resolution,
    collect_involved,
    resolve_transaction,
)
from paymentflow.core.validate_fields import ValidatedInstruction

TODAY = date(2025, 6, 15)


def _instruction(**overrides) -> ValidatedInstruction:
    fields = {
        "type": TransactionType.DEBIT,
        "amount": 100,
        "currency": "USD",
        "debit_account_id": "a",
        "credit_account_id": "b",
        "date_token": None,
    }
    fields.update(overrides)
    return ValidatedInstruction(**fields)


def _accounts(a_balance=500, b_balance=200, a_cur="USD", b_cur="USD"):
    return [
        {"id": "a", "balance": a_balance, "currency": a_cur},
        {"id": "b", "balance": b_balance, "currency": b_cur},
    ]


# ─── collect_involved ────────────────────────────────────────────

def test_collect_involved_keeps_snapshot_order():
    snapshot = [
        {"id": "b", "balance": 1, "currency": "usd"},
        {"id": "x", "balance": 2, "currency": "USD"},
        {"id": "a", "balance": 3, "currency": "USD"},
    ]
    involved = collect_involved(snapshot, "a", "b")
    assert [r.id for r in involved.records] == ["b", "a"]
    assert involved.records[0].currency == "USD"
    assert involved.debit is snapshot[2]
    assert involved.credit is snapshot[0]


def test_collect_involved_skips_malformed_entries():
    snapshot = [None, "a", {"id": 7}, {"balance": 5}, {"id": "a", "balance": 5, "currency": "USD"}]
    involved = collect_involved(snapshot, "a", "b")
    assert [r.id for r in involved.records] == ["a"]
    assert involved.credit is None


def test_collect_involved_same_id_appears_once():
    snapshot = [{"id": "a", "balance": 5, "currency": "USD"}]
    involved = collect_involved(snapshot, "a", "a")
    assert len(involved.records) == 1
    assert involved.debit is involved.credit


def test_collect_involved_first_duplicate_wins():
    snapshot = [
        {"id": "a", "balance": 5, "currency": "USD"},
        {"id": "a", "balance": 9, "currency": "USD"},
    ]
    involved = collect_involved(snapshot, "a", "b")
    assert len(involved.records) == 1
    assert involved.debit["balance"] == 5


# ─── Failures ────────────────────────────────────────────────────

def test_missing_credit_account_is_ac03_with_partial_accounts():
    result = resolve_transaction(_instruction(), _accounts()[:1], TODAY)
    assert result.status_code == StatusCode.ACCOUNT_NOT_FOUND
    assert [a.id for a in result.accounts] == ["a"]
    assert result.accounts[0].balance == result.accounts[0].balance_before == 500


def test_no_accounts_is_ac03_with_empty_list():
    result = resolve_transaction(_instruction(), [], TODAY)
    assert result.status_code == StatusCode.ACCOUNT_NOT_FOUND
    assert result.accounts == ()


def test_account_currency_mismatch_is_cu01():
    result = resolve_transaction(_instruction(), _accounts(b_cur="GBP"), TODAY)
    assert result.status_code == StatusCode.CURRENCY_MISMATCH
    assert len(result.accounts) == 2


def test_instruction_currency_mismatch_is_cu01():
    result = resolve_transaction(
        _instruction(currency="NGN"), _accounts(), TODAY,
    )
    assert result.status_code == StatusCode.CURRENCY_MISMATCH


def test_account_currency_compared_case_insensitively():
    result = resolve_transaction(
        _instruction(), _accounts(a_cur="usd", b_cur="Usd"), TODAY,
    )
    assert isinstance(result, Resolution)


def test_same_account_is_ac02():
    snapshot = [{"id": "a", "balance": 500, "currency": "USD"}]
    result = resolve_transaction(
        _instruction(credit_account_id="a"), snapshot, TODAY,
    )
    assert result.status_code == StatusCode.SAME_ACCOUNT
    assert [a.id for a in result.accounts] == ["a"]


def test_same_missing_account_is_ac03_not_ac02():
    result = resolve_transaction(
        _instruction(debit_account_id="z", credit_account_id="z"), _accounts(), TODAY,
    )
    assert result.status_code == StatusCode.ACCOUNT_NOT_FOUND


def test_insufficient_funds_is_ac01_with_shortfall():
    result = resolve_transaction(_instruction(), _accounts(a_balance=10), TODAY)
    assert result.status_code == StatusCode.INSUFFICIENT_FUNDS
    assert result.status_reason == (
        "Insufficient funds in debit account a: has 10 USD, needs 100 USD"
    )
    assert all(a.balance == a.balance_before for a in result.accounts)


def test_exact_balance_is_sufficient():
    result = resolve_transaction(_instruction(), _accounts(a_balance=100), TODAY)
    assert isinstance(result, Resolution)


def test_non_numeric_debit_balance_is_ac01():
    for balance in ("500", None, True):
        result = resolve_transaction(
            _instruction(), _accounts(a_balance=balance), TODAY,
        )
        assert result.status_code == StatusCode.INSUFFICIENT_FUNDS


def test_non_numeric_credit_balance_is_malformed():
    result = resolve_transaction(_instruction(), _accounts(b_balance="200"), TODAY)
    assert result.status_code == StatusCode.MALFORMED_INSTRUCTION
    assert len(result.accounts) == 2


def test_funds_checked_before_date():
    result = resolve_transaction(
        _instruction(date_token="not-a-date"), _accounts(a_balance=1), TODAY,
    )
    assert result.status_code == StatusCode.INSUFFICIENT_FUNDS


def test_invalid_date_is_dt01():
    result = resolve_transaction(
        _instruction(date_token="2025-02-30"), _accounts(), TODAY,
    )
    assert isinstance(result, InstructionResult)
    assert result.status_code == StatusCode.INVALID_DATE
    assert result.execute_by == "2025-02-30"
    assert len(result.accounts) == 2


# ─── Settlement timing ───────────────────────────────────────────

def test_no_date_is_immediate():
    resolution = resolve_transaction(_instruction(), _accounts(), TODAY)
    assert resolution.pending is False
    assert resolution.execute_by is None


def test_future_date_is_pending():
    resolution = resolve_transaction(
        _instruction(date_token="2025-06-16"), _accounts(), TODAY,
    )
    assert resolution.pending is True
    assert resolution.execute_by == "2025-06-16"


def test_today_and_past_dates_are_immediate():
    for token in ("2025-06-15", "2024-01-15"):
        resolution = resolve_transaction(
            _instruction(date_token=token), _accounts(), TODAY,
        )
        assert resolution.pending is False
        assert resolution.execute_by == token
