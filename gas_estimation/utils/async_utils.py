import asyncio
from typing import Any, Awaitable, List


async def gather_or_cancel(*aws: Awaitable) -> List[Any]:
    """
    Run awaitables concurrently and wait for all of them.
    The first failure is raised and the tasks still running are cancelled.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return await asyncio.gather(*tasks)
    except Exception:
        for task in tasks:
            task.cancel()
        raise
