from __future__ import annotations

import asyncio
from typing import Coroutine, TypeVar

import anyio

T = TypeVar("T")


def run_async(coro: Coroutine[object, object, T], *, timeout: float | None = None) -> T:
    """
    Run an AI gateway coroutine from a sync endpoint or service.

    - Inside FastAPI sync endpoints (AnyIO worker threads) the coroutine runs
      on the main loop via anyio.from_thread.run.
    - From the CLI or plain scripts it falls back to anyio.run.
    - Calling it from a coroutine on the loop thread is a bug; await instead.
    """

    async def _runner() -> T:
        if timeout is not None:
            with anyio.fail_after(timeout):
                return await coro
        return await coro

    try:
        return anyio.from_thread.run(_runner)
    except RuntimeError:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return anyio.run(_runner)
        coro.close()
        raise RuntimeError("run_async called from async context; use await instead")
