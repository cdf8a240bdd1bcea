# driver_publisher/utils/async_utils.py
"""Asynchronous operation utilities"""

import asyncio
import concurrent.futures
import threading
from typing import Any, Callable, Coroutine, Optional, TypeVar

T = TypeVar('T')


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """
    Run async coroutine in sync context

    Args:
        coro: Coroutine to run

    Returns:
        Coroutine result
    """
    loop = None
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        # No running loop
        pass

    if loop and loop.is_running():
        # Already in async context, run on a separate thread
        return BackgroundTask(lambda: coro).start().result()

    return asyncio.run(coro)


class BackgroundTask:
    """Run a coroutine on a worker thread with its own event loop

    The caller's thread is never blocked unless it asks for the result.
    ``cancel()`` may be called from any thread; the coroutine sees
    ``asyncio.CancelledError`` at its current suspension point.
    """

    def __init__(self,
                 coro_factory: Callable[[], Coroutine[Any, Any, T]],
                 name: Optional[str] = None):
        self._coro_factory = coro_factory
        self._future: concurrent.futures.Future = concurrent.futures.Future()
        self._lock = threading.Lock()
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._task: Optional[asyncio.Task] = None
        self._cancel_requested = False
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    def start(self) -> 'BackgroundTask':
        """Start the worker thread"""
        self._thread.start()
        return self

    def _run(self) -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)

        try:
            with self._lock:
                self._loop = loop
                self._task = loop.create_task(self._coro_factory())
                if self._cancel_requested:
                    self._task.cancel()

            result = loop.run_until_complete(self._task)
            self._future.set_result(result)

        except asyncio.CancelledError:
            self._future.cancel()

        except Exception as e:
            self._future.set_exception(e)

        finally:
            with self._lock:
                self._loop = None
            loop.close()
            asyncio.set_event_loop(None)

    def cancel(self) -> None:
        """Request cancellation of the running coroutine"""
        with self._lock:
            self._cancel_requested = True
            if self._loop is not None and self._task is not None and not self._task.done():
                self._loop.call_soon_threadsafe(self._task.cancel)

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: Optional[float] = None) -> T:
        """
        Wait for the coroutine result

        Raises:
            concurrent.futures.CancelledError: If the coroutine was cancelled
                without handling it
            concurrent.futures.TimeoutError: If timeout expires first
        """
        return self._future.result(timeout)

    def add_done_callback(self, callback: Callable[[concurrent.futures.Future], None]) -> None:
        """Invoke callback on the worker thread once finished"""
        self._future.add_done_callback(callback)
