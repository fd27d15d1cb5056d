# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Bounded gate limiting the number of simultaneous in-flight HTTP requests."""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from ._error_codes import TRANSPORT_PERMIT_TIMEOUT
from .errors import TransportError

logger = logging.getLogger(__name__)


class _Permit:
    """Token handed out by :meth:`_ConcurrencyGate.acquire`. Released at most once."""

    __slots__ = ("_released",)

    def __init__(self) -> None:
        self._released = False

    @property
    def released(self) -> bool:
        return self._released


class _ConcurrencyGate:
    """
    Counting gate sized by ``max_concurrent_requests``.

    Backed by :class:`threading.BoundedSemaphore`. Waiters are woken in no
    particular order, but every release wakes one of them, so no waiter is
    starved while capacity keeps being returned.

    :param limit: Maximum number of permits outstanding at once.
    :type limit: :class:`int`
    """

    def __init__(self, limit: int) -> None:
        if limit < 1:
            raise ValueError("limit must be a positive integer")
        self._limit = limit
        self._semaphore = threading.BoundedSemaphore(limit)
        self._lock = threading.Lock()
        self._in_use = 0

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def in_use(self) -> int:
        with self._lock:
            return self._in_use

    def acquire(self, timeout: Optional[float] = None) -> _Permit:
        """
        Block until a slot is free and return a permit for it.

        :param timeout: Maximum seconds to wait. ``None`` waits indefinitely.
        :type timeout: :class:`float` | None
        :return: Permit that must be passed to :meth:`release`.
        :rtype: _Permit
        :raises TransportError: If no slot frees up within ``timeout``.
        """
        if timeout is not None and timeout <= 0:
            acquired = self._semaphore.acquire(blocking=False)
        else:
            acquired = self._semaphore.acquire(timeout=timeout)
        if not acquired:
            raise TransportError(
                f"Timed out after {timeout}s waiting for one of {self._limit} request slots",
                subcode=TRANSPORT_PERMIT_TIMEOUT,
                is_transient=True,
                details={"limit": self._limit},
            )
        with self._lock:
            self._in_use += 1
            in_use = self._in_use
        logger.debug("Acquired request slot (%d/%d in use)", in_use, self._limit)
        return _Permit()

    def release(self, permit: _Permit) -> None:
        """Return ``permit``'s slot to the pool. Releasing the same permit twice is a no-op."""
        with self._lock:
            if permit._released:
                return
            permit._released = True
            self._in_use -= 1
            in_use = self._in_use
        self._semaphore.release()
        logger.debug("Released request slot (%d/%d in use)", in_use, self._limit)

    @contextmanager
    def slot(self, timeout: Optional[float] = None) -> Iterator[_Permit]:
        """Hold a permit for the duration of the ``with`` block, releasing it on every exit path."""
        permit = self.acquire(timeout)
        try:
            yield permit
        finally:
            self.release(permit)
