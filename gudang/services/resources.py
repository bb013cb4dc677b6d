from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from gudang.core.exceptions import BusinessError
from gudang.pagination.controller import FetchFunction, PaginatedDataController
from gudang.pagination.models import PageParams, Primitive
from gudang.services.api_client import ApiResponse, InventoryApiClient

logger = logging.getLogger(__name__)

COMPARISON_PATH = "/api/incoming-goods/for-comparison"


class Resource(str, Enum):
    """Paginated list endpoints of the inventory API."""

    PRODUCTS = "/api/products"
    ORDERS = "/api/orders"
    ORDER_SUMMARY = "/api/orders/summary"
    INCOMING_GOODS = "/api/incoming-goods"
    OUTGOING_GOODS = "/api/outgoing-goods"
    DAMAGED_GOODS = "/api/damaged-goods"
    PEMBUKUAN = "/api/pembukuan"
    ACTIVITY_LOGS = "/api/activity-logs"


def make_fetcher(
    client: InventoryApiClient, resource: Resource, **fixed_params: Primitive
) -> FetchFunction:
    """Build a fetch function for ``resource``; ``fixed_params`` win over page params."""

    async def fetch(params: PageParams) -> ApiResponse:
        return await client.get(resource.value, {**params, **fixed_params})

    return fetch


def create_controller(
    client: InventoryApiClient,
    resource: Resource,
    initial_params: Optional[PageParams] = None,
    **fixed_params: Primitive,
) -> PaginatedDataController:
    return PaginatedDataController(
        make_fetcher(client, resource, **fixed_params), initial_params
    )


async def fetch_incoming_for_comparison(
    client: InventoryApiClient,
    product_codes: Iterable[str] = (),
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Fetch every incoming-goods record matching the codes and date range, unpaginated."""
    params: Dict[str, str] = {}
    codes = list(dict.fromkeys(code for code in product_codes if code))
    if codes:
        params["productCodes"] = ",".join(codes)
    if start_date:
        params["startDate"] = start_date
    if end_date:
        params["endDate"] = end_date

    try:
        response = await client.get(COMPARISON_PATH, params)
    except BusinessError as exc:
        logger.error("Error fetching incoming goods for comparison: %s", exc)
        return []

    body = response.get("data")
    records = body.get("data") if isinstance(body, dict) else None
    if not isinstance(records, list):
        return []
    return records
