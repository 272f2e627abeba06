"""Paginated order history retrieval from Zomato's web routes."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, TypeVar

import httpx

from .models import Order
from .normalize import orders_from_response, total_pages, validate_orders_payload

logger = logging.getLogger(__name__)

T = TypeVar("T")

ProgressCallback = Callable[[int, int, int], None]

DEFAULT_BASE_URL = "https://www.zomato.com"
ORDERS_PATH = "/webroutes/user/orders"
AUTH_PATH = "/webroutes/user/address"

_USER_AGENT = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7)"


class ZomatoError(RuntimeError):
    """Base class for order retrieval failures."""


class ZomatoAPIError(ZomatoError):
    """Unexpected HTTP status or malformed payload."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class FetchCancelledError(ZomatoError):
    """The caller's cancellation signal fired during a fetch."""


class ZomatoClient:
    """Fetches the order history of the account behind a session cookie.

    All work happens on the calling task: one page request at a time,
    followed by a fixed pause before the next one.
    """

    MAX_PAGES = 50
    PAGE_DELAY = 0.5

    def __init__(
        self,
        cookie: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        page_delay: float = PAGE_DELAY,
        max_pages: int = MAX_PAGES,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._cookie = cookie
        self._base_url = base_url.rstrip("/")
        self._page_delay = page_delay
        self._max_pages = max_pages
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> ZomatoClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    def _headers(self) -> dict[str, str]:
        return {
            "Cookie": self._cookie,
            "Accept": "application/json, text/plain, */*",
            "X-Requested-With": "XMLHttpRequest",
            "User-Agent": _USER_AGENT,
        }

    async def fetch_all_orders(
        self,
        progress: ProgressCallback | None = None,
        cancel: asyncio.Event | None = None,
    ) -> list[Order]:
        """Fetch every page of order history, deduplicated by order id.

        Stops when a page adds no new orders, when the reported page count
        is unknown or reached, or at the page ceiling. Any failure aborts
        the whole fetch; partial results are never returned.

        Args:
            progress: Called after each page with
                ``(page, total_pages, distinct_orders_so_far)``.
                ``total_pages`` is 0 when upstream does not report it.
            cancel: Setting this event aborts the fetch with
                FetchCancelledError.

        Raises:
            ZomatoError: On transport failure, bad status or bad payload.
        """
        if cancel is None:
            cancel = asyncio.Event()

        orders: list[Order] = []
        seen: set[str] = set()
        page = 1

        while True:
            if cancel.is_set():
                raise FetchCancelledError("order fetch cancelled")

            payload = await self._until_cancelled(self._fetch_orders_page(page), cancel)

            new_count = 0
            for order in orders_from_response(payload):
                if not order.id or order.id in seen:
                    continue
                seen.add(order.id)
                orders.append(order)
                new_count += 1

            pages = total_pages(payload)
            logger.debug(
                "page %d/%s: %d new orders (%d total)",
                page, pages or "?", new_count, len(orders),
            )
            if progress is not None:
                progress(page, pages, len(orders))

            if new_count == 0:
                logger.info("page %d added no new orders, stopping", page)
                break
            if pages == 0 or page >= pages:
                break
            if page >= self._max_pages:
                logger.warning("stopped at page ceiling (%d pages)", self._max_pages)
                break

            await self._pause(cancel)
            page += 1

        logger.info("fetched %d orders across %d pages", len(orders), page)
        return orders

    async def check_auth(self) -> bool:
        """Return whether the session cookie is still accepted.

        Raises:
            ZomatoAPIError: If the status is neither 200 nor 401/403.
            ZomatoError: On transport failure.
        """
        try:
            resp = await self._http.get(
                self._base_url + AUTH_PATH, headers=self._headers()
            )
        except httpx.HTTPError as e:
            raise ZomatoError(f"auth status request failed: {e}") from e

        if resp.status_code == 200:
            return True
        if resp.status_code in (401, 403):
            return False
        raise ZomatoAPIError(
            f"auth status request failed: {resp.status_code} {resp.reason_phrase}",
            status_code=resp.status_code,
        )

    async def _fetch_orders_page(self, page: int) -> dict[str, Any]:
        params = {"page": str(page)} if page > 1 else None
        try:
            resp = await self._http.get(
                self._base_url + ORDERS_PATH,
                params=params,
                headers=self._headers(),
            )
        except httpx.HTTPError as e:
            raise ZomatoError(f"orders request failed on page {page}: {e}") from e

        if resp.status_code != 200:
            raise ZomatoAPIError(
                f"orders request failed: {resp.status_code} {resp.reason_phrase}",
                status_code=resp.status_code,
            )

        try:
            payload = resp.json()
        except ValueError as e:
            raise ZomatoAPIError(f"malformed orders payload on page {page}: {e}") from e
        if not isinstance(payload, dict):
            raise ZomatoAPIError(f"malformed orders payload on page {page}")
        try:
            validate_orders_payload(payload)
        except ValueError as e:
            raise ZomatoAPIError(f"malformed orders payload on page {page}: {e}") from e
        return payload

    async def _until_cancelled(self, coro: Awaitable[T], cancel: asyncio.Event) -> T:
        """Await ``coro``, abandoning it if ``cancel`` fires first."""
        task = asyncio.ensure_future(coro)
        waiter = asyncio.ensure_future(cancel.wait())
        try:
            done, _ = await asyncio.wait(
                {task, waiter}, return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            waiter.cancel()
        if task not in done:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
            raise FetchCancelledError("order fetch cancelled")
        return task.result()

    async def _pause(self, cancel: asyncio.Event) -> None:
        """Wait out the inter-page delay unless cancelled first."""
        try:
            await asyncio.wait_for(cancel.wait(), timeout=self._page_delay)
        except asyncio.TimeoutError:
            return
        raise FetchCancelledError("order fetch cancelled")
