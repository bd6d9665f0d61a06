import pytest
from structlog.contextvars import get_contextvars

from src.core.errors import ProviderError
from src.core.observability import (
    _redact_obj,
    clear_correlation_id,
    debug_wrapper,
    set_correlation_id,
    trace_adapter,
)


def test_correlation_id_bound_and_cleared() -> None:
    set_correlation_id("test-cid-1234")
    try:
        assert get_contextvars()["correlation_id"] == "test-cid-1234"
    finally:
        clear_correlation_id()

    assert "correlation_id" not in get_contextvars()


@pytest.mark.asyncio
async def test_trace_adapter_keeps_async_result() -> None:
    @trace_adapter
    async def fetch_guild(ally_code: str) -> dict:
        return {"ally_code": ally_code}

    assert await fetch_guild("123456789") == {"ally_code": "123456789"}
    assert fetch_guild.__name__ == "fetch_guild"


@pytest.mark.asyncio
async def test_wrapper_reraises_errors_unchanged() -> None:
    @debug_wrapper(capture_args=True)
    async def failing(password: str) -> None:
        raise ProviderError("swgoh.help down", status_code=503)

    with pytest.raises(ProviderError) as exc_info:
        await failing(password="hunter2-secret")

    assert exc_info.value.status_code == 503


def test_wrapper_supports_sync_functions() -> None:
    @debug_wrapper(capture_result=True)
    def add(a: int, b: int) -> int:
        return a + b

    assert add(2, 3) == 5


def test_sensitive_keys_are_masked() -> None:
    redacted = _redact_obj(
        {"username": "rex", "password": "very-secret-value", "nested": [{"api_token": "short"}]}
    )

    assert redacted["username"] == "rex"
    assert redacted["password"] == "very…lue"
    assert redacted["nested"] == [{"api_token": "***"}]
