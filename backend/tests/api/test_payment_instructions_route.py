"""Payment Instructions Route — HTTP contract of POST /api/v1/payment-instructions.

Invariants:
    - Every outcome (success, pending, rejection, bad body, crash) is HTTP 200
      with the full InstructionResult shape
    - The overridden clock decides pending vs immediate
    - Each processed instruction is logged with its status code and duration
"""

import logging

import pytest

URL = "/api/v1/payment-instructions"

RESULT_KEYS = {
    "type", "amount", "currency", "debit_account", "credit_account",
    "execute_by", "status", "status_reason", "status_code", "accounts",
}


def _body(instruction, accounts=None):
    return {
        "accounts": accounts if accounts is not None else [
            {"id": "N90394", "balance": 1000, "currency": "USD"},
            {"id": "N9122", "balance": 500, "currency": "usd"},
        ],
        "instruction": instruction,
    }


async def test_successful_debit(client):
    res = await client.post(URL, json=_body(
        "DEBIT 500 USD FROM ACCOUNT N90394 FOR CREDIT TO ACCOUNT N9122",
    ))
    assert res.status_code == 200
    data = res.json()
    assert data["status"] == "successful"
    assert data["status_code"] == "AP00"
    assert data["amount"] == 500
    assert data["accounts"] == [
        {"id": "N90394", "balance": 500, "balance_before": 1000, "currency": "USD"},
        {"id": "N9122", "balance": 1000, "balance_before": 500, "currency": "USD"},
    ]


async def test_completion_logged_with_duration(client, caplog):
    caplog.set_level(logging.INFO, logger="paymentflow.api.routes.payment_instructions")
    await client.post(URL, json=_body(
        "DEBIT 500 USD FROM ACCOUNT N90394 FOR CREDIT TO ACCOUNT N9122",
    ))
    [record] = [r for r in caplog.records if r.getMessage() == "payment-instruction-processed"]
    assert record.status_code == "AP00"
    assert record.debit_account == "N90394"
    assert record.duration_ms >= 0


async def test_future_date_pending_uses_injected_clock(client):
    res = await client.post(URL, json=_body(
        "DEBIT 100 USD FROM ACCOUNT N90394 FOR CREDIT TO ACCOUNT N9122 ON 2025-06-16",
    ))
    data = res.json()
    assert data["status"] == "pending"
    assert data["status_code"] == "AP01"
    assert data["execute_by"] == "2025-06-16"
    assert all(a["balance"] == a["balance_before"] for a in data["accounts"])


async def test_rejection_is_http_200(client):
    res = await client.post(URL, json=_body(
        "DEBIT 50 XYZ FROM ACCOUNT N90394 FOR CREDIT TO ACCOUNT N9122",
    ))
    assert res.status_code == 200
    data = res.json()
    assert data["status_code"] == "CU02"
    assert data["status"] == "failed"
    assert set(data) == RESULT_KEYS


async def test_send_opener_is_missing_keyword(client):
    res = await client.post(URL, json=_body("SEND 100 USD TO ACCOUNT b"))
    assert res.json()["status_code"] == "SY01"


async def test_float_balance_preserved(client):
    res = await client.post(URL, json=_body(
        "DEBIT 100 GBP FROM ACCOUNT a FOR CREDIT TO ACCOUNT b",
        accounts=[
            {"id": "a", "balance": 150.5, "currency": "GBP"},
            {"id": "b", "balance": 0, "currency": "GBP"},
        ],
    ))
    accounts = res.json()["accounts"]
    assert accounts[0]["balance"] == 50.5
    assert accounts[1]["balance"] == 100


@pytest.mark.parametrize("body", [
    {"instruction": "DEBIT 1 USD FROM ACCOUNT a FOR CREDIT TO ACCOUNT b"},
    {"accounts": []},
    {"accounts": "nope", "instruction": "x"},
    {"accounts": [], "instruction": 5},
    {"accounts": [{"id": "a", "balance": "100", "currency": "USD"}], "instruction": "x"},
    {"accounts": [{"id": 1, "balance": 100, "currency": "USD"}], "instruction": "x"},
    {"accounts": [{"id": "a", "balance": True, "currency": "USD"}], "instruction": "x"},
    {"accounts": [{"id": "a", "currency": "USD"}], "instruction": "x"},
])
async def test_malformed_body_is_sy03(client, body):
    res = await client.post(URL, json=body)
    assert res.status_code == 200
    data = res.json()
    assert data["status_code"] == "SY03"
    assert data["status"] == "failed"
    assert data["status_reason"].startswith("Malformed request:")
    assert data["accounts"] == []
    assert set(data) == RESULT_KEYS


async def test_invalid_json_is_sy03(client):
    res = await client.post(
        URL, content=b"{not json", headers={"content-type": "application/json"},
    )
    assert res.status_code == 200
    assert res.json()["status_code"] == "SY03"


async def test_unexpected_exception_is_sy03(client, monkeypatch):
    def _boom(*args, **kwargs):
        raise RuntimeError("secret internals")

    monkeypatch.setattr(
        "paymentflow.api.routes.payment_instructions.process_instruction", _boom,
    )
    res = await client.post(URL, json=_body("DEBIT 1 USD FROM ACCOUNT a FOR CREDIT TO ACCOUNT b"))
    assert res.status_code == 200
    data = res.json()
    assert data["status_code"] == "SY03"
    assert "secret" not in data["status_reason"]


async def test_api_docs_served(client):
    res = await client.get("/api-docs")
    assert res.status_code == 200
    schema = (await client.get("/openapi.json")).json()
    assert URL in schema["paths"]
