import asyncio

import anyio
import pytest

from askiep.core.async_utils import run_async


async def _sample() -> str:
    await anyio.sleep(0)
    return "ok"


async def _slow() -> str:
    await anyio.sleep(5)
    return "late"


@pytest.mark.asyncio
async def test_run_async_from_worker_thread_uses_main_loop(monkeypatch: pytest.MonkeyPatch) -> None:
    def _fail_run(*_args: object, **_kwargs: object) -> None:
        pytest.fail("asyncio.run should not be used in request threads")

    monkeypatch.setattr(asyncio, "run", _fail_run)

    result = await anyio.to_thread.run_sync(lambda: run_async(_sample()))
    assert result == "ok"


def test_run_async_without_loop_falls_back_to_anyio_run() -> None:
    assert run_async(_sample()) == "ok"


def test_run_async_timeout() -> None:
    with pytest.raises(TimeoutError):
        run_async(_slow(), timeout=0.01)


@pytest.mark.asyncio
async def test_run_async_on_loop_thread_is_rejected() -> None:
    with pytest.raises(RuntimeError, match="use await instead"):
        run_async(_sample())
