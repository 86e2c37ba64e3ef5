import asyncio


class DebounceTimer:
    """Single-shot, restartable delay on the running event loop.

    Fires run as plain loop callbacks, so they are serialized with update
    handling: a fire never interleaves with a half-finished transition.
    """

    def __init__(self):
        self._handle = None

    @property
    def armed(self):
        return self._handle is not None

    def arm(self, delay, on_fire):
        """Cancel any pending fire and schedule `on_fire()` after `delay` seconds."""
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(delay, self._fire, on_fire)

    def cancel(self):
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, on_fire):
        self._handle = None
        on_fire()
