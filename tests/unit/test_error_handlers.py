import json

import pytest

from libs.result import Error
from src.api.app import handle_client_error, handle_server_error
from src.api.error import ClientError, ServerError


@pytest.mark.asyncio
async def test_client_error_renders_details():
    exc = ClientError(
        Error("DUPLICATE_ASSIGNMENT", "Member is already assigned", {"campus_id": "c1"}),
        status_code=409,
    )

    response = await handle_client_error(None, exc)

    assert response.status_code == 409
    assert json.loads(response.body) == {
        "error": {
            "code": "DUPLICATE_ASSIGNMENT",
            "message": "Member is already assigned",
            "details": {"campus_id": "c1"},
        }
    }
    assert "retry-after" not in response.headers


@pytest.mark.asyncio
async def test_retryable_conflict_sets_retry_after():
    exc = ClientError(
        Error("CONCURRENCY_CONFLICT", "Busy", {"member_id": "m1", "retryable": True}),
        status_code=409,
    )

    response = await handle_client_error(None, exc)

    assert response.status_code == 409
    assert response.headers["retry-after"] == "1"
    assert json.loads(response.body)["error"]["details"]["retryable"] is True


@pytest.mark.asyncio
async def test_server_error_hides_message():
    response = await handle_server_error(None, ServerError(Error("DB_DOWN", "connection refused")))

    assert response.status_code == 500
    assert json.loads(response.body) == {
        "error": {"code": "DB_DOWN", "message": "Internal server error"}
    }
