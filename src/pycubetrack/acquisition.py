"""Single-shot location acquisition.

The location provider is an external collaborator.  It is modelled as a
subscription: callbacks registered with ``request_updates`` receive fixes
(possibly on the provider's own thread) until ``remove_updates`` is
called.  :func:`acquire_single_fix` turns that into one awaited value with
an explicit timeout, and always unsubscribes.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from collections.abc import Callable
from typing import Protocol

from pycubetrack.exceptions import MissingFixError
from pycubetrack.models.fix import GeographicFix

_logger = logging.getLogger(__name__)

FixCallback = Callable[[GeographicFix | None], None]


class FixSource(Protocol):
    def request_updates(self, callback: FixCallback) -> None: ...

    def remove_updates(self, callback: FixCallback) -> None: ...


class CallbackFixSource:
    """Thread-safe fan-out source fed by :meth:`publish`.

    Adapter for providers that push fixes from their own thread or event
    loop.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._callbacks: list[FixCallback] = []

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._callbacks)

    def request_updates(self, callback: FixCallback) -> None:
        with self._lock:
            self._callbacks.append(callback)

    def remove_updates(self, callback: FixCallback) -> None:
        with self._lock:
            with contextlib.suppress(ValueError):
                self._callbacks.remove(callback)

    def publish(self, fix: GeographicFix | None) -> None:
        with self._lock:
            callbacks = list(self._callbacks)
        for callback in callbacks:
            callback(fix)


async def acquire_single_fix(source: FixSource, *, timeout: float) -> GeographicFix:
    """Wait for the first non-``None`` fix from *source*.

    The callback is removed from *source* on success, timeout and
    cancellation alike.

    Raises
    ------
    MissingFixError
        No fix arrived within *timeout* seconds.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[GeographicFix] = loop.create_future()

    def _resolve(fix: GeographicFix | None) -> None:
        if fix is not None and not future.done():
            future.set_result(fix)

    def _on_fix(fix: GeographicFix | None) -> None:
        # A provider may publish from a stale callback snapshot after the loop closed.
        if loop.is_closed():
            return
        with contextlib.suppress(RuntimeError):
            loop.call_soon_threadsafe(_resolve, fix)

    source.request_updates(_on_fix)
    try:
        fix = await asyncio.wait_for(future, timeout)
    except TimeoutError as exc:
        _logger.debug("No location fix within %.1fs", timeout)
        raise MissingFixError(f"no location fix within {timeout}s") from exc
    finally:
        source.remove_updates(_on_fix)
    _logger.debug("Location fix received: %s, %s", fix.latitude, fix.longitude)
    return fix
