import threading

from ansible_arm_provider.errors import OperationCancelledError


class StopContext:
    """
    Cancellation token threaded through every remote call of one module run.

    The dispatcher and the resource clients never inspect it beyond
    `raise_if_stopped()`; stopping is decided by whoever owns the token.
    """

    def __init__(self):
        self._stopped = threading.Event()

    def stop(self):
        self._stopped.set()

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()

    def raise_if_stopped(self):
        if self._stopped.is_set():
            raise OperationCancelledError("Operation was cancelled before completion.")

    def wait(self, seconds: float) -> bool:
        """Sleeps for up to `seconds`; returns True early if stopped."""
        return self._stopped.wait(seconds)
