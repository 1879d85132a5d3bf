"""Instruction Result — the single output shape for every outcome.

Invariants:
    - Every field is always present; undetermined fields are None, never omitted
    - status is derived from status_code (never set independently)
    - accounts holds new records; input snapshots are never referenced or mutated
    - to_response() emits keys in wire order: type, amount, currency, debit_account,
      credit_account, execute_by, status, status_reason, status_code, accounts

Design Decisions:
    - Dataclass over dict: stages build results through one constructor, so a
      misspelled field fails loudly instead of silently widening the schema
    - reject() accepts already-determined fields as keywords: each stage passes
      exactly what it knows and the rest defaults to None
"""

from dataclasses import dataclass, field
from typing import Any

from paymentflow.core.domain_types import StatusCode, TransactionType
from paymentflow.core.status_messages import get_status_reason


@dataclass(frozen=True)
class SettledAccount:
    """Output account record — balance after this instruction, plus the snapshot value."""
    id: str
    balance: Any
    balance_before: Any
    currency: str

    def to_response(self) -> dict:
        return {
            "id": self.id,
            "balance": self.balance,
            "balance_before": self.balance_before,
            "currency": self.currency,
        }


@dataclass(frozen=True)
class InstructionResult:
    """Uniform result — success, pending, and every failure class share this shape."""
    status_code: StatusCode
    status_reason: str
    type: TransactionType | None = None
    amount: int | None = None
    currency: str | None = None
    debit_account: str | None = None
    credit_account: str | None = None
    execute_by: str | None = None
    accounts: tuple[SettledAccount, ...] = field(default_factory=tuple)

    @property
    def status(self) -> str:
        return self.status_code.status.value

    def to_response(self) -> dict:
        """Convert to the wire dictionary (JSON-ready)."""
        return {
            "type": self.type.value if self.type else None,
            "amount": self.amount,
            "currency": self.currency,
            "debit_account": self.debit_account,
            "credit_account": self.credit_account,
            "execute_by": self.execute_by,
            "status": self.status,
            "status_reason": self.status_reason,
            "status_code": self.status_code.value,
            "accounts": [a.to_response() for a in self.accounts],
        }


def reject(
    code: StatusCode, reason: str | None = None, **known: Any,
) -> InstructionResult:
    """Build a failed result carrying whatever fields were already determined."""
    accounts = tuple(known.pop("accounts", ()))
    return InstructionResult(
        status_code=code,
        status_reason=reason or get_status_reason(code),
        accounts=accounts,
        **known,
    )


def malformed(reason: str | None = None) -> InstructionResult:
    """SY03 with every field null — the fallback for unparseable input."""
    return reject(StatusCode.MALFORMED_INSTRUCTION, reason)
