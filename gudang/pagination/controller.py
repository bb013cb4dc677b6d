"""Paginated list controller.

Owns the list state of one view: the current items, the loading flag, the
page metadata and the query params. Every change of page, filters or an
explicit refresh issues one fetch; only the most recently issued request may
commit its result, so a slow earlier response never overwrites a newer one.

Example:
    controller = PaginatedDataController(fetch_products, {"sort": "brand"})
    await controller.start()
    await controller.update_params({"search": "kabel"})
    await controller.go_to_page(2)
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Callable, List, Optional, Union

from gudang.config import settings
from gudang.core.codes import ErrorCode
from gudang.core.debounce import Debouncer
from gudang.core.exceptions import BusinessError
from gudang.pagination.models import ControllerState, PageInfo, PageParams
from gudang.pagination.normalizer import normalize_response

logger = logging.getLogger(__name__)

FetchFunction = Callable[[PageParams], Union[Awaitable[Any], Any]]
StateListener = Callable[[ControllerState], None]


class PaginatedDataController:
    def __init__(
        self,
        fetch: FetchFunction,
        initial_params: Optional[PageParams] = None,
        *,
        default_limit: Optional[int] = None,
    ) -> None:
        if default_limit is None:
            default_limit = settings.DEFAULT_PAGE_LIMIT
        self._fetch = fetch
        self._params: PageParams = {"page": 1, "limit": default_limit, **(initial_params or {})}
        self._items: List[Any] = []
        self._page_info = PageInfo.empty()
        self._loading = False
        self._sequence = 0
        self._started = False
        self._closed = False
        self._listeners: List[StateListener] = []

    # ------------- state -------------
    @property
    def items(self) -> List[Any]:
        return self._items

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def page_info(self) -> PageInfo:
        return self._page_info

    @property
    def params(self) -> PageParams:
        return dict(self._params)

    @property
    def state(self) -> ControllerState:
        return ControllerState(
            items=self._items,
            loading=self._loading,
            page_info=self._page_info,
            params=dict(self._params),
        )

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------- operations -------------
    async def start(self) -> ControllerState:
        """Issue the initial fetch; later calls are no-ops."""
        if self._started:
            return self.state
        self._started = True
        return await self._load(self._params)

    async def go_to_page(self, page: int) -> ControllerState:
        if isinstance(page, bool) or not isinstance(page, int) or page < 1:
            raise BusinessError(ErrorCode.INVALID_PARAMETER, detail="page")
        self._params = {**self._params, "page": page}
        return await self._load(self._params)

    async def update_params(self, params: PageParams) -> ControllerState:
        # changing a filter always restarts pagination
        self._params = {**self._params, **params, "page": 1}
        return await self._load(self._params)

    async def refresh(self) -> ControllerState:
        return await self._load(self._params)

    def debounced_update(self, delay: Optional[float] = None) -> Debouncer:
        return Debouncer(self.update_params, delay)

    def close(self) -> None:
        """Detach the controller; results still in flight are dropped."""
        self._closed = True
        self._sequence += 1
        self._loading = False
        self._listeners.clear()

    # ------------- internals -------------
    async def _load(self, params: PageParams) -> ControllerState:
        if self._closed:
            return self.state

        self._sequence += 1
        sequence = self._sequence
        self._loading = True
        self._publish()

        try:
            response = self._fetch(dict(params))
            if inspect.isawaitable(response):
                response = await response
            page = normalize_response(response)
            if self._is_latest(sequence, params):
                self._items = page.items if page.items is not None else []
                self._page_info = page.page_info
        except Exception:
            if self._is_latest(sequence, params):
                logger.exception("Error fetching data with params %s", params)
                self._items = []
                self._page_info = PageInfo.empty()
        finally:
            if sequence == self._sequence:
                self._loading = False
                self._publish()

        return self.state

    def _is_latest(self, sequence: int, params: PageParams) -> bool:
        if sequence != self._sequence:
            logger.debug("Discarding stale response for params %s", params)
            return False
        return True

    def _publish(self) -> None:
        if not self._listeners:
            return
        snapshot = self.state
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as exc:
                logger.error("State listener failed: %s", exc)
