import asyncio

# Strong references so pending sends are not garbage collected mid-flight.
_pending = set()


def fire_and_forget(coro, label="send"):
    """Schedule an outbound call without awaiting it; failures are printed."""
    task = asyncio.get_running_loop().create_task(coro)
    _pending.add(task)

    def _done(t):
        _pending.discard(t)
        if t.cancelled():
            return
        exc = t.exception()
        if exc is not None:
            print(f"  [{label}] failed: {type(exc).__name__}: {exc}")

    task.add_done_callback(_done)
    return task


async def drain():
    """Wait for every pending outbound call to finish."""
    loop = asyncio.get_running_loop()
    while True:
        batch = [t for t in _pending if not t.done() and t.get_loop() is loop]
        if not batch:
            return
        await asyncio.gather(*batch, return_exceptions=True)
