"""Payment Instruction Schemas — Pydantic models for the HTTP request/response boundary.

Invariants:
    - Request fields are strict: id/currency/instruction must be JSON strings,
      balance a JSON number (bool and numeric strings rejected)
    - Response fields are all required but nullable — the schema never drops a key
    - StatusCode / TransactionType from core/ used for enum fields

Design Decisions:
    - Strict types over lax coercion: "100" as a balance is a malformed request (SY03),
      not a silently converted one
    - StrictInt | StrictFloat keeps integer balances as ints in the response
"""

from pydantic import BaseModel, Field, StrictFloat, StrictInt, StrictStr

from paymentflow.core.domain_types import StatusCode, TransactionType


class AccountSnapshot(BaseModel):
    """One caller-supplied account and its current balance."""
    id: StrictStr
    balance: StrictInt | StrictFloat
    currency: StrictStr


class PaymentInstructionRequest(BaseModel):
    """Request body — account snapshot plus the instruction sentence."""
    accounts: list[AccountSnapshot]
    instruction: StrictStr = Field(
        examples=["DEBIT 100 USD FROM ACCOUNT a FOR CREDIT TO ACCOUNT b"],
    )


class SettledAccountResponse(BaseModel):
    """Account after the instruction; balance_before is the snapshot value."""
    id: str
    balance: int | float
    balance_before: int | float
    currency: str


class InstructionResultResponse(BaseModel):
    """Uniform result — success, pending, and every rejection."""
    type: TransactionType | None
    amount: int | None
    currency: str | None
    debit_account: str | None
    credit_account: str | None
    execute_by: str | None
    status: str
    status_reason: str
    status_code: StatusCode
    accounts: list[SettledAccountResponse]
