"""Grammar Matcher — classifies a token sequence as DEBIT-form or CREDIT-form.

Invariants:
    - Only two sentence templates exist (positions 0-indexed):
        DEBIT  <amt> <cur> FROM ACCOUNT <debit>  FOR CREDIT TO   ACCOUNT <credit> [ON <date>]
        CREDIT <amt> <cur> TO   ACCOUNT <credit> FOR DEBIT  FROM ACCOUNT <debit>  [ON <date>]
    - A match consumes exactly 11 tokens, or 13 when token 11 is ON
    - Keyword comparison uses the uppercased view; extracted ids/date keep original case
    - Checks run in fixed order: opener, length, ON marker, slot presence, keywords

Design Decisions:
    - Closed set of frozen InstructionForm variants, each with its own keyword table,
      over subclass dispatch: adding a form means adding data, not behavior
    - Returns ParsedInstruction on success, InstructionResult on rejection — the
      caller short-circuits on the latter (same pattern as the validator chain)
"""

from dataclasses import dataclass

from paymentflow.core.domain_types import StatusCode, TransactionType
from paymentflow.core.instruction_result import InstructionResult, malformed, reject
from paymentflow.core.tokenize_instruction import strip_trailing_punctuation


BASE_TOKEN_COUNT: int = 11
DATED_TOKEN_COUNT: int = 13
DATE_MARKER_POSITION: int = 11
DATE_POSITION: int = 12
AMOUNT_POSITION: int = 1
CURRENCY_POSITION: int = 2

# Openers that signal a transfer attempt missing its DEBIT/CREDIT keyword
_INCOMPLETE_OPENERS = frozenset({"SEND", "TRANSFER"})


@dataclass(frozen=True)
class InstructionForm:
    """One sentence template: its type, fixed keywords, and account-id slots."""
    type: TransactionType
    keywords: dict[int, str]
    debit_position: int
    credit_position: int


DEBIT_FORM = InstructionForm(
    type=TransactionType.DEBIT,
    keywords={3: "FROM", 4: "ACCOUNT", 6: "FOR", 7: "CREDIT", 8: "TO", 9: "ACCOUNT"},
    debit_position=5,
    credit_position=10,
)

CREDIT_FORM = InstructionForm(
    type=TransactionType.CREDIT,
    keywords={3: "TO", 4: "ACCOUNT", 6: "FOR", 7: "DEBIT", 8: "FROM", 9: "ACCOUNT"},
    debit_position=10,
    credit_position=5,
)

FORMS: dict[str, InstructionForm] = {
    TransactionType.DEBIT.value: DEBIT_FORM,
    TransactionType.CREDIT.value: CREDIT_FORM,
}


@dataclass(frozen=True)
class ParsedInstruction:
    """Raw, unvalidated field substrings pulled from a matched sentence."""
    type: TransactionType
    amount_token: str
    currency_token: str
    debit_account_id: str
    credit_account_id: str
    date_token: str | None = None


def _has_slots(tokens: list[str]) -> bool:
    """Positions 3–10 must all be present before keywords are compared."""
    return len(tokens) > BASE_TOKEN_COUNT - 1 and all(
        tokens[i] for i in range(3, BASE_TOKEN_COUNT)
    )


def match_instruction(tokens: list[str]) -> ParsedInstruction | InstructionResult:
    """Match tokens against the two templates. Rejects with SY01/SY02/SY03."""
    if not tokens:
        return malformed()

    upper = [t.upper() for t in tokens]
    form = FORMS.get(upper[0])
    if form is None:
        if upper[0] in _INCOMPLETE_OPENERS:
            return reject(StatusCode.MISSING_KEYWORD)
        return malformed()

    count = len(tokens)
    if count < BASE_TOKEN_COUNT:
        return reject(StatusCode.MISSING_KEYWORD)
    if count not in (BASE_TOKEN_COUNT, DATED_TOKEN_COUNT):
        return reject(StatusCode.INVALID_KEYWORD_ORDER, type=form.type)
    has_date = count == DATED_TOKEN_COUNT
    if has_date and upper[DATE_MARKER_POSITION] != "ON":
        return reject(StatusCode.INVALID_KEYWORD_ORDER, type=form.type)

    if not _has_slots(tokens):
        return reject(StatusCode.MISSING_KEYWORD, type=form.type)
    for position, keyword in form.keywords.items():
        if upper[position] != keyword:
            return reject(StatusCode.INVALID_KEYWORD_ORDER, type=form.type)

    return ParsedInstruction(
        type=form.type,
        amount_token=tokens[AMOUNT_POSITION],
        currency_token=tokens[CURRENCY_POSITION],
        debit_account_id=strip_trailing_punctuation(tokens[form.debit_position]),
        credit_account_id=strip_trailing_punctuation(tokens[form.credit_position]),
        date_token=(
            strip_trailing_punctuation(tokens[DATE_POSITION]) if has_date else None
        ),
    )
