"""Payment Instructions Route — POST endpoint that runs the instruction pipeline.

Invariants:
    - Always HTTP 200 with the InstructionResult shape; rejections are results, not errors
    - Request body is validated by Pydantic before reaching the handler (failures → SY03)
    - today comes from the get_today dependency, never read inline

Design Decisions:
    - Thin route: converts the schema to plain mappings and delegates to the pure core
    - Completion logged with status_code, both account ids and duration_ms
"""

import logging
import time
from datetime import date

from fastapi import APIRouter, Depends

from paymentflow.core.process_instruction import process_instruction
from paymentflow.infrastructure.clock import get_today
from paymentflow.schemas.payment_instruction import (
    InstructionResultResponse, PaymentInstructionRequest,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/payment-instructions", tags=["payments"])


@router.post("", response_model=InstructionResultResponse)
async def create_payment_instruction(
    body: PaymentInstructionRequest, today: date = Depends(get_today),
):
    """Parse and execute a payment instruction between two accounts."""
    started = time.perf_counter()
    accounts = [account.model_dump() for account in body.accounts]
    result = process_instruction(accounts, body.instruction, today)
    logger.info(
        "payment-instruction-processed",
        extra={
            "status_code": result.status_code.value,
            "status": result.status,
            "debit_account": result.debit_account,
            "credit_account": result.credit_account,
            "duration_ms": round((time.perf_counter() - started) * 1000, 3),
        },
    )
    return result.to_response()
