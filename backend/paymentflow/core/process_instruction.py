"""Instruction Pipeline — the single entry point from raw input to InstructionResult.

Invariants:
    - PURE and deterministic: same (accounts, instruction, today) → equal result
    - Never raises for any input; every branch returns a full InstructionResult
    - Stages run strictly in order and short-circuit on the first rejection:
        tokenize → match grammar → validate fields → resolve → settle
    - today is injected; the core never reads the wall clock

Design Decisions:
    - Shape checks (accounts is a list/tuple, instruction is a str) live here as well as
      in the HTTP schema: direct callers get the same SY03 contract
"""

from collections.abc import Sequence
from datetime import date
from typing import Any

from paymentflow.core.instruction_result import InstructionResult, malformed
from paymentflow.core.match_grammar import match_instruction
from paymentflow.core.resolve_transaction import resolve_transaction
from paymentflow.core.settle_balances import settle
from paymentflow.core.tokenize_instruction import tokenize
from paymentflow.core.validate_fields import validate_fields


def process_instruction(
    accounts: Sequence[Any], instruction: str, today: date,
) -> InstructionResult:
    """Parse, validate and settle one payment instruction against a snapshot."""
    if not isinstance(accounts, (list, tuple)) or not isinstance(instruction, str):
        return malformed()

    parsed = match_instruction(tokenize(instruction))
    if isinstance(parsed, InstructionResult):
        return parsed

    validated = validate_fields(parsed)
    if isinstance(validated, InstructionResult):
        return validated

    resolution = resolve_transaction(validated, accounts, today)
    if isinstance(resolution, InstructionResult):
        return resolution

    return settle(resolution)
