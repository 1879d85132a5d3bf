"""Transaction Resolver — account lookup, cross-account invariants, and settlement timing.

Invariants:
    - All functions are PURE: the caller's snapshot is read, never mutated
    - Involved accounts are collected in one scan, in snapshot order; each id appears
      at most once (an entry matching both roles, or a repeated id)
    - resolve_transaction chains checks in fixed order — first error wins:
        AC03 (missing account) → CU01 → AC02 → AC01 → DT01
    - Every failure here attaches the involved accounts unmutated
    - Funds are checked against the current balance even for future-dated instructions

Design Decisions:
    - AC02 is checked after existence and currency: a self-transfer with a valid
      account reports AC02, an unknown one reports AC03
    - Snapshot entries that are not mappings or lack a string id are skipped,
      so a malformed entry reads as "not found" rather than crashing the scan
    - bool is excluded from numeric balances (it subclasses int)
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Any

from paymentflow.core.calendar_dates import is_future_date, parse_calendar_date
from paymentflow.core.domain_types import StatusCode
from paymentflow.core.instruction_result import (
    InstructionResult, SettledAccount, reject,
)
from paymentflow.core.status_messages import format_insufficient_funds
from paymentflow.core.validate_fields import ValidatedInstruction


@dataclass(frozen=True)
class InvolvedAccounts:
    """Snapshot entries matching either role, plus the entry bound to each role."""
    records: tuple[SettledAccount, ...]
    debit: Mapping | None
    credit: Mapping | None


@dataclass(frozen=True)
class Resolution:
    """A transaction that passed every check and is ready to settle."""
    instruction: ValidatedInstruction
    involved: InvolvedAccounts
    pending: bool
    execute_by: str | None


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def normalize_currency(value: Any) -> str:
    return str(value or "").upper()


def collect_involved(
    accounts: Sequence, debit_id: str, credit_id: str,
) -> InvolvedAccounts:
    """Single scan over the snapshot. First entry per id wins."""
    records: list[SettledAccount] = []
    seen: set[str] = set()
    debit = credit = None
    for entry in accounts:
        if not isinstance(entry, Mapping) or not isinstance(entry.get("id"), str):
            continue
        account_id = entry["id"]
        if account_id not in (debit_id, credit_id) or account_id in seen:
            continue
        seen.add(account_id)
        records.append(SettledAccount(
            id=account_id,
            balance=entry.get("balance"),
            balance_before=entry.get("balance"),
            currency=normalize_currency(entry.get("currency")),
        ))
        if account_id == debit_id:
            debit = entry
        if account_id == credit_id:
            credit = entry
    return InvolvedAccounts(records=tuple(records), debit=debit, credit=credit)


# ─── Checks ──────────────────────────────────────────────────────

def _known_fields(instruction: ValidatedInstruction, involved: InvolvedAccounts) -> dict:
    return {
        "type": instruction.type,
        "amount": instruction.amount,
        "currency": instruction.currency,
        "debit_account": instruction.debit_account_id,
        "credit_account": instruction.credit_account_id,
        "execute_by": instruction.date_token,
        "accounts": involved.records,
    }


def check_accounts_exist(
    instruction: ValidatedInstruction, involved: InvolvedAccounts,
) -> InstructionResult | None:
    """AC03: both the debit and the credit account must be in the snapshot."""
    if involved.debit is None or involved.credit is None:
        return reject(
            StatusCode.ACCOUNT_NOT_FOUND, **_known_fields(instruction, involved),
        )
    return None


def check_currency_match(
    instruction: ValidatedInstruction, involved: InvolvedAccounts,
) -> InstructionResult | None:
    """CU01: debit, credit and instruction currencies must all agree."""
    debit_currency = normalize_currency(involved.debit.get("currency"))
    credit_currency = normalize_currency(involved.credit.get("currency"))
    if debit_currency != credit_currency or debit_currency != instruction.currency:
        return reject(
            StatusCode.CURRENCY_MISMATCH, **_known_fields(instruction, involved),
        )
    return None


def check_distinct_accounts(
    instruction: ValidatedInstruction, involved: InvolvedAccounts,
) -> InstructionResult | None:
    """AC02: an account cannot pay itself."""
    if instruction.debit_account_id == instruction.credit_account_id:
        return reject(
            StatusCode.SAME_ACCOUNT, **_known_fields(instruction, involved),
        )
    return None


def check_sufficient_funds(
    instruction: ValidatedInstruction, involved: InvolvedAccounts,
) -> InstructionResult | None:
    """AC01: the debit balance must be a number covering the amount."""
    balance = involved.debit.get("balance")
    if is_number(balance) and balance >= instruction.amount:
        return None
    reason = format_insufficient_funds(
        instruction.debit_account_id, balance, instruction.amount,
        normalize_currency(involved.debit.get("currency")),
    )
    return reject(
        StatusCode.INSUFFICIENT_FUNDS, reason, **_known_fields(instruction, involved),
    )


def check_credit_balance(
    instruction: ValidatedInstruction, involved: InvolvedAccounts,
) -> InstructionResult | None:
    """SY03: a credit balance that is not a number cannot be settled."""
    if not is_number(involved.credit.get("balance")):
        return reject(
            StatusCode.MALFORMED_INSTRUCTION, **_known_fields(instruction, involved),
        )
    return None


def resolve_transaction(
    instruction: ValidatedInstruction, accounts: Sequence, today: date,
) -> Resolution | InstructionResult:
    """Run the account checks, then decide pending vs immediate settlement."""
    involved = collect_involved(
        accounts, instruction.debit_account_id, instruction.credit_account_id,
    )
    error = (
        check_accounts_exist(instruction, involved)
        or check_currency_match(instruction, involved)
        or check_distinct_accounts(instruction, involved)
        or check_sufficient_funds(instruction, involved)
        or check_credit_balance(instruction, involved)
    )
    if error:
        return error

    if instruction.date_token is None:
        return Resolution(instruction, involved, pending=False, execute_by=None)

    execute_on = parse_calendar_date(instruction.date_token)
    if execute_on is None:
        return reject(
            StatusCode.INVALID_DATE, **_known_fields(instruction, involved),
        )
    return Resolution(
        instruction, involved,
        pending=is_future_date(execute_on, today),
        execute_by=instruction.date_token,
    )
