"""Response-shape normalization.

The inventory API is not consistent across endpoints: most list endpoints
return ``{"data": [...], "pagination": {...}}``, some return ``items``
instead of ``data``, lookup endpoints return flat arrays, and a few return
objects. Whatever the shape, ``normalize_response`` yields a renderable
``(items, page_info)`` pair.

Shapes are matched in priority order:

- ``ENVELOPED_DATA``: ``{"data": {"data": [...], "pagination": {...}}}``
- ``ENVELOPED_ITEMS``: ``{"data": {"items": [...], "pagination": {...}}}``
- ``FLAT``: ``{"data": [...]}``, a single unpaginated page
- ``UNKNOWN``: ``{"data": <anything else>}``, passed through best-effort
- ``BARE``: no ``data`` wrapper at all
"""

from __future__ import annotations

from collections.abc import Mapping, Sized
from dataclasses import dataclass
from enum import Enum
from typing import Any

from gudang.pagination.models import DEFAULT_LIMIT, DEFAULT_PAGE, PageInfo


class ResponseShape(str, Enum):
    ENVELOPED_DATA = "enveloped_data"
    ENVELOPED_ITEMS = "enveloped_items"
    FLAT = "flat"
    UNKNOWN = "unknown"
    BARE = "bare"


@dataclass(frozen=True)
class NormalizedPage:
    items: Any
    page_info: PageInfo
    shape: ResponseShape


def _present(container: Any, key: str) -> bool:
    if not isinstance(container, Mapping):
        return False
    value = container.get(key)
    if value is None:
        return False
    # empty containers count as present, falsy scalars do not
    return bool(value) or isinstance(value, (Mapping, list, tuple))


def _length(value: Any) -> int:
    if isinstance(value, Sized) and not isinstance(value, Mapping):
        return len(value)
    return 0


def classify_response(response: Any) -> ResponseShape:
    if not _present(response, "data"):
        return ResponseShape.BARE
    payload = response["data"]
    if _present(payload, "data") and _present(payload, "pagination"):
        return ResponseShape.ENVELOPED_DATA
    if _present(payload, "items") and _present(payload, "pagination"):
        return ResponseShape.ENVELOPED_ITEMS
    if isinstance(payload, list):
        return ResponseShape.FLAT
    return ResponseShape.UNKNOWN


def normalize_response(response: Any) -> NormalizedPage:
    """Extract items and pagination from any supported response shape.

    Raises:
        pydantic.ValidationError: the envelope carries a pagination object
            that is not valid page metadata.
    """
    shape = classify_response(response)

    if shape is ResponseShape.ENVELOPED_DATA:
        payload = response["data"]
        return NormalizedPage(
            items=payload["data"],
            page_info=PageInfo.model_validate(payload["pagination"]),
            shape=shape,
        )

    if shape is ResponseShape.ENVELOPED_ITEMS:
        payload = response["data"]
        return NormalizedPage(
            items=payload["items"],
            page_info=PageInfo.model_validate(payload["pagination"]),
            shape=shape,
        )

    if shape is ResponseShape.FLAT:
        items = response["data"]
        count = len(items)
        return NormalizedPage(
            items=items,
            page_info=PageInfo(page=DEFAULT_PAGE, limit=count, total=count, total_pages=1),
            shape=shape,
        )

    if shape is ResponseShape.UNKNOWN:
        items = response["data"]
    else:
        items = response if response is not None else []
    return NormalizedPage(
        items=items,
        page_info=PageInfo(
            page=DEFAULT_PAGE, limit=DEFAULT_LIMIT, total=_length(items), total_pages=1
        ),
        shape=shape,
    )
