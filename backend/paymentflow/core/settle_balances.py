"""Balance Settlement — applies a resolved transaction and builds the final result.

Invariants:
    - Output records are new SettledAccount values; balance_before is the snapshot balance
    - Immediate: debit -= amount, credit += amount, each exactly once
    - Pending: every balance equals balance_before
    - Amount is conserved: sum(balance) == sum(balance_before) for AP00
"""

from dataclasses import replace

from paymentflow.core.domain_types import StatusCode
from paymentflow.core.instruction_result import InstructionResult, SettledAccount
from paymentflow.core.resolve_transaction import Resolution
from paymentflow.core.status_messages import get_status_reason


def apply_balances(resolution: Resolution) -> tuple[SettledAccount, ...]:
    """Move the amount between the involved accounts unless settlement is pending."""
    instruction = resolution.instruction
    if resolution.pending:
        return resolution.involved.records

    settled = []
    for record in resolution.involved.records:
        if record.id == instruction.debit_account_id:
            record = replace(record, balance=record.balance_before - instruction.amount)
        elif record.id == instruction.credit_account_id:
            record = replace(record, balance=record.balance_before + instruction.amount)
        settled.append(record)
    return tuple(settled)


def settle(resolution: Resolution) -> InstructionResult:
    """AP01 for future-dated instructions, AP00 otherwise."""
    code = StatusCode.SCHEDULED if resolution.pending else StatusCode.EXECUTED
    instruction = resolution.instruction
    return InstructionResult(
        status_code=code,
        status_reason=get_status_reason(code),
        type=instruction.type,
        amount=instruction.amount,
        currency=instruction.currency,
        debit_account=instruction.debit_account_id,
        credit_account=instruction.credit_account_id,
        execute_by=resolution.execute_by,
        accounts=apply_balances(resolution),
    )
