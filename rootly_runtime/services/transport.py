"""Non-blocking delivery of error reports to the collector.

Each delivery runs as an ``asyncio.Task`` tracked in an in-flight set so that
``flush()`` can wait for outstanding reports before the host exits.
"""

import asyncio
from typing import Any, Awaitable, Callable, Optional, Set
from urllib.parse import urlsplit

import aiohttp
from loguru import logger

from rootly_runtime.constants import TransportConfig
from rootly_runtime.core.exceptions import InvalidCollectorUrlError
from rootly_runtime.models.payload import ErrorPayload


class SettledDelivery:
    """Awaitable for a report that never reached the network."""

    __slots__ = ()

    def __await__(self):
        return iter(())

    def __repr__(self) -> str:
        return "SettledDelivery()"


SETTLED = SettledDelivery()


def build_ingest_url(collector_url: str) -> str:
    """
    Build the ingest endpoint for a collector base URL.

    Raises:
        InvalidCollectorUrlError: If the URL is empty or not http(s)
    """
    if not isinstance(collector_url, str) or not collector_url.strip():
        raise InvalidCollectorUrlError(str(collector_url), "empty URL")

    base = collector_url.strip().rstrip("/")
    parts = urlsplit(base)
    if parts.scheme not in TransportConfig.ALLOWED_SCHEMES or not parts.netloc:
        raise InvalidCollectorUrlError(collector_url)

    return f"{base}{TransportConfig.INGEST_PATH}"


class Transport:
    """Best-effort HTTP transport with an in-flight registry."""

    def __init__(
        self,
        timeout_seconds: float = TransportConfig.REQUEST_TIMEOUT_SECONDS,
        session_factory: Optional[Callable[..., Any]] = None,
    ):
        """
        Initialize transport.

        Args:
            timeout_seconds: Total timeout of a single delivery
            session_factory: Callable returning an aiohttp.ClientSession-like
                async context manager (default: aiohttp.ClientSession)
        """
        self.timeout_seconds = timeout_seconds
        self._session_factory = session_factory or aiohttp.ClientSession
        self._in_flight: Set["asyncio.Task[None]"] = set()

    @property
    def pending_count(self) -> int:
        """Number of deliveries started but not yet settled."""
        return len(self._in_flight)

    def send(self, payload: ErrorPayload, api_key: str, collector_url: str) -> Awaitable[None]:
        """
        Start delivering a payload without blocking the caller.

        The payload is serialized before this returns. The returned awaitable
        never raises. Callers may await it or drop it.

        Args:
            payload: Error payload
            api_key: Collector API key
            collector_url: Collector base URL

        Returns:
            The delivery task, or a settled awaitable if no loop is running
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, report dropped")
            return SETTLED

        # Serialize now so later changes to host objects in the context are not sent
        try:
            data = payload.to_json().encode("utf-8")
        except Exception as e:
            logger.debug(f"Failed to serialize report: {e}")
            return SETTLED

        task = loop.create_task(self._deliver(data, api_key, collector_url))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        return task

    async def _deliver(self, data: bytes, api_key: str, collector_url: str) -> None:
        try:
            url = build_ingest_url(collector_url)
            headers = {
                "Content-Type": "application/json",
                "Authorization": f"Bearer {api_key}",
            }
            timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)

            async with self._session_factory(timeout=timeout) as session:
                async with session.post(url, data=data, headers=headers) as response:
                    # Drain the body so the connection is released; content is ignored
                    await response.read()
                    logger.debug(f"Report delivered (HTTP {response.status})")

        except InvalidCollectorUrlError as e:
            logger.debug(e.message)
        except asyncio.TimeoutError:
            logger.debug(f"Delivery timed out after {self.timeout_seconds}s")
        except aiohttp.ClientError as e:
            logger.debug(f"HTTP client error delivering report: {e}")
        except Exception as e:
            logger.debug(f"Failed to deliver report: {e}")

    async def flush(self, timeout_ms: float = TransportConfig.FLUSH_TIMEOUT_MS) -> None:
        """
        Wait for in-flight deliveries, at most ``timeout_ms``.

        Only deliveries in flight when flush is called are awaited. Deliveries
        still pending at the deadline are left running. Never raises.

        Args:
            timeout_ms: Maximum time to wait in milliseconds
        """
        if not self._in_flight:
            return

        try:
            loop = asyncio.get_running_loop()
            pending = {task for task in self._in_flight if task.get_loop() is loop}
            if not pending:
                return

            _, still_pending = await asyncio.wait(pending, timeout=max(timeout_ms, 0) / 1000)
            if still_pending:
                logger.debug(
                    f"Flush timed out after {timeout_ms}ms, "
                    f"{len(still_pending)} deliveries still pending"
                )
        except Exception as e:
            logger.debug(f"Flush failed: {e}")
