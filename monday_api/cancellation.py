"""
Cooperative request cancellation.

An :class:`AbortController` owns an :class:`AbortSignal`; the transport races
the HTTP call against the signal and raises :class:`AbortError` when the
signal fires first.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Optional, Tuple, TypeVar

from .exceptions import AbortError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AbortSignal:
    """Signal observed by the transport; fired by its controller."""

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self.reason: Optional[BaseException] = None

    @property
    def aborted(self) -> bool:
        return self._event.is_set()

    async def wait(self) -> None:
        await self._event.wait()

    def _abort(self, reason: BaseException) -> None:
        if self._event.is_set():
            return
        self.reason = reason
        self._event.set()

    async def run(self, awaitable: Awaitable[T]) -> T:
        """
        Await ``awaitable`` unless the signal fires first.

        Raises:
            AbortError: If the signal was or becomes aborted; the pending
                operation is cancelled before raising.
        """
        if self.aborted:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise self._error()

        task = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self.wait())
        try:
            await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            waiter.cancel()

        if task.done():
            return task.result()

        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        raise self._error()

    def _error(self) -> AbortError:
        if isinstance(self.reason, AbortError):
            return self.reason
        return AbortError()


class AbortController:
    """Owner of an abort signal."""

    def __init__(self) -> None:
        self.signal = AbortSignal()

    def abort(self, reason: Optional[BaseException] = None) -> None:
        self.signal._abort(reason or AbortError())


def create_abort_controller(
    timeout: Optional[float],
) -> Tuple[Optional[AbortController], Optional[asyncio.TimerHandle]]:
    """
    Create a controller that aborts after ``timeout`` milliseconds.

    Returns ``(None, None)`` when no timeout is given. The caller must cancel
    the returned timer handle once the request settles.
    """
    if not timeout:
        return None, None

    controller = AbortController()
    loop = asyncio.get_running_loop()

    def fire() -> None:
        logger.debug("Request timeout of %sms elapsed, aborting", timeout)
        controller.abort(AbortError(timeout_value=timeout))

    handle = loop.call_later(timeout / 1000, fire)
    return controller, handle


def clear_abort_timer(handle: Optional[Any]) -> None:
    if handle is not None:
        handle.cancel()
