"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - Every StatusCode implies exactly one TransactionStatus (AP00/AP01 are the only non-failures)
    - SUPPORTED_CURRENCIES is the single source of truth for accepted currency codes
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (wire contract is JSON)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

AccountId = NewType("AccountId", str)


# ─── Value Types ─────────────────────────────────────────────────

Amount = NewType("Amount", int)              # > 0, whole units only
CurrencyCode = NewType("CurrencyCode", str)  # uppercased ISO-4217 code


SUPPORTED_CURRENCIES: tuple[str, ...] = ("NGN", "USD", "GBP", "GHS")


# ─── Enums ───────────────────────────────────────────────────────

class TransactionType(str, Enum):
    """Sentence form — decides which token positions carry which account."""
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


class TransactionStatus(str, Enum):
    """Outcome class of an instruction."""
    SUCCESSFUL = "successful"
    PENDING = "pending"
    FAILED = "failed"


class StatusCode(str, Enum):
    """Stable status codes — the externally visible contract."""
    MISSING_KEYWORD = "SY01"
    INVALID_KEYWORD_ORDER = "SY02"
    MALFORMED_INSTRUCTION = "SY03"
    AMOUNT_NOT_POSITIVE_INTEGER = "AM01"
    AMOUNT_NOT_WHOLE = "AM02"
    UNSUPPORTED_CURRENCY = "CU02"
    INVALID_ACCOUNT_ID = "AC04"
    ACCOUNT_NOT_FOUND = "AC03"
    CURRENCY_MISMATCH = "CU01"
    SAME_ACCOUNT = "AC02"
    INSUFFICIENT_FUNDS = "AC01"
    INVALID_DATE = "DT01"
    SCHEDULED = "AP01"
    EXECUTED = "AP00"

    @property
    def status(self) -> TransactionStatus:
        if self is StatusCode.EXECUTED:
            return TransactionStatus.SUCCESSFUL
        if self is StatusCode.SCHEDULED:
            return TransactionStatus.PENDING
        return TransactionStatus.FAILED
