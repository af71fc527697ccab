import httpx
import pytest

from askiep.services.http_service import backoff_delay, request_with_retries


def _counting(responses):
    calls = []

    async def request_fn():
        calls.append(1)
        item = responses[min(len(calls), len(responses)) - 1]
        if isinstance(item, Exception):
            raise item
        return item

    return request_fn, calls


@pytest.mark.asyncio
async def test_retries_server_errors_then_succeeds():
    request_fn, calls = _counting([httpx.Response(503), httpx.Response(200)])

    response = await request_with_retries(request_fn, max_attempts=3, base_delay=0)

    assert response.status_code == 200
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_client_errors_are_not_retried():
    request_fn, calls = _counting([httpx.Response(400)])

    response = await request_with_retries(request_fn, max_attempts=3, base_delay=0)

    assert response.status_code == 400
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_transport_errors_exhaust_attempts_and_reraise():
    request_fn, calls = _counting([httpx.ConnectError("down")])

    with pytest.raises(httpx.ConnectError):
        await request_with_retries(request_fn, max_attempts=3, base_delay=0)
    assert len(calls) == 3


@pytest.mark.asyncio
async def test_retry_status_hook():
    request_fn, calls = _counting([httpx.Response(502)])

    response = await request_with_retries(
        request_fn, max_attempts=3, base_delay=0, retry_status=lambda code: code != 502
    )

    assert response.status_code == 502
    assert len(calls) == 1


def test_backoff_doubles_per_attempt():
    delays = [backoff_delay(n, base_delay=0.5, max_delay=10, jitter=False) for n in range(4)]
    assert delays == [0.5, 1.0, 2.0, 4.0]
    assert backoff_delay(10, base_delay=0.5, max_delay=4.0, jitter=False) == 4.0
