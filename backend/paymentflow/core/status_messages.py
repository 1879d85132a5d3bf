"""Status Messages — centralized human-readable reasons for every status code.

Invariants:
    - All strings are pure data (no IO, no computation beyond formatting)
    - Covers every StatusCode member
    - Only AC01 is parameterized; every other reason is a fixed string
    - Formatting never raises: ints are rendered in fixed-width chunks, so amounts
      past the interpreter's int-to-str digit limit still produce a reason

Design Decisions:
    - Single table over inline literals: rejection paths and tests share one source of truth
"""

from paymentflow.core.domain_types import StatusCode, SUPPORTED_CURRENCIES

_DIGIT_CHUNK_WIDTH = 18
_DIGIT_CHUNK = 10 ** _DIGIT_CHUNK_WIDTH


def _supported_currency_list() -> str:
    *head, last = SUPPORTED_CURRENCIES
    return f"{', '.join(head)}, and {last}"


STATUS_REASONS: dict[StatusCode, str] = {
    StatusCode.MISSING_KEYWORD: "Missing required keyword",
    StatusCode.INVALID_KEYWORD_ORDER: "Invalid keyword order",
    StatusCode.MALFORMED_INSTRUCTION: (
        "Malformed instruction: unable to parse keywords"
    ),
    StatusCode.AMOUNT_NOT_POSITIVE_INTEGER: "Amount must be a positive integer",
    StatusCode.AMOUNT_NOT_WHOLE: "Amount must be a whole number",
    StatusCode.UNSUPPORTED_CURRENCY: (
        f"Unsupported currency. Only {_supported_currency_list()} are supported"
    ),
    StatusCode.INVALID_ACCOUNT_ID: "Invalid account ID format",
    StatusCode.ACCOUNT_NOT_FOUND: "Account not found",
    StatusCode.CURRENCY_MISMATCH: "Account currency mismatch",
    StatusCode.SAME_ACCOUNT: "Debit and credit accounts cannot be the same",
    StatusCode.INSUFFICIENT_FUNDS: "Insufficient funds in debit account",
    StatusCode.INVALID_DATE: "Invalid date format",
    StatusCode.SCHEDULED: "Transaction scheduled for future execution",
    StatusCode.EXECUTED: "Transaction executed successfully",
}


def get_status_reason(code: StatusCode) -> str:
    """Fixed reason text for a status code."""
    return STATUS_REASONS[code]


def format_number(value: object) -> str:
    """Decimal text for a balance or amount, free of str()'s int digit limit."""
    if not isinstance(value, int) or isinstance(value, bool):
        return str(value)
    if value < 0:
        return "-" + format_number(-value)
    chunks = []
    while value >= _DIGIT_CHUNK:
        value, low = divmod(value, _DIGIT_CHUNK)
        chunks.append(f"{low:0{_DIGIT_CHUNK_WIDTH}d}")
    chunks.append(str(value))
    return "".join(reversed(chunks))


def format_insufficient_funds(
    account_id: str, balance: object, amount: int, currency: str,
) -> str:
    """AC01 reason reporting what the debit account has versus what it needs."""
    return (
        f"{STATUS_REASONS[StatusCode.INSUFFICIENT_FUNDS]} {account_id}: "
        f"has {format_number(balance)} {currency}, "
        f"needs {format_number(amount)} {currency}"
    )
